"""
Site configuration, read from the environment.
"""

import os
from typing import Dict, Any, Mapping, Optional

DEFAULT_FROM_EMAIL = "Francisco Portfolio <hello@mail.contrerasfrancisco.com>"
DEFAULT_TO_EMAIL = "contrerasfrancisco@icloud.com"

CAL_EMBED_URL = "https://app.cal.com/embed/embed.js"
CAL_ORIGIN = "https://app.cal.com"


def load_config(environ: Optional[Mapping[str, str]] = None) -> Dict[str, Any]:
    """Build the Flask config dict for the contact endpoint.

    ``CONTACT_TO_EMAIL`` may hold several comma-separated recipients. The
    first recipient doubles as the fallback address shown to visitors when
    delivery fails.
    """
    if environ is None:
        environ = os.environ

    recipients = [
        addr.strip()
        for addr in environ.get("CONTACT_TO_EMAIL", DEFAULT_TO_EMAIL).split(",")
        if addr.strip()
    ] or [DEFAULT_TO_EMAIL]

    return {
        "RESEND_API_KEY": environ.get("RESEND_API_KEY") or None,
        "CONTACT_FROM_EMAIL": environ.get("CONTACT_FROM_EMAIL") or DEFAULT_FROM_EMAIL,
        "CONTACT_TO_EMAILS": recipients,
        "CONTACT_FALLBACK_EMAIL": recipients[0],
    }
