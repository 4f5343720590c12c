"""
Outbound email through the Resend API.
"""

from dataclasses import dataclass
from typing import List, Mapping, Any, Optional

import resend


@dataclass
class EmailMessage:
    sender: str
    to: List[str]
    reply_to: str
    subject: str
    html: str
    text: str

    def to_params(self) -> dict:
        return {
            "from": self.sender,
            "to": list(self.to),
            "reply_to": self.reply_to,
            "subject": self.subject,
            "html": self.html,
            "text": self.text,
        }


class ResendMailer:
    """Sends EmailMessages with the resend SDK. Errors propagate to the caller."""

    def __init__(self, api_key: str):
        if not api_key:
            raise ValueError("ResendMailer needs an API key")
        self.api_key = api_key

    def send(self, message: EmailMessage) -> Any:
        # The SDK reads its key from module state
        resend.api_key = self.api_key
        return resend.Emails.send(message.to_params())


def build_mailer(config: Mapping[str, Any]) -> Optional[ResendMailer]:
    api_key = config.get("RESEND_API_KEY")
    if not api_key:
        return None
    return ResendMailer(api_key)
