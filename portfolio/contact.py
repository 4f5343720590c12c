"""
Contact form endpoint.

POST /api/contact accepts JSON or a browser form submission, validates
the required fields and forwards a formatted notification through the
configured mailer.
"""

import re
from dataclasses import dataclass
from typing import Optional, Mapping, Any

from flask import Blueprint, current_app, jsonify, request

from .emails import format_html, format_text
from .mailer import EmailMessage

EMAIL_RE = re.compile(r"^(?:[\w!#$%&'*+/=?`{|}~^.-]+)@(?:[\w.-]+\.)+[A-Za-z]{2,}$", re.ASCII)

FORM_MIMETYPES = ("application/x-www-form-urlencoded", "multipart/form-data")

SUCCESS_MESSAGE = "Thanks for reaching out. Expect a reply within one business day."


class ContactError(Exception):
    status = 500
    message = "Something went wrong."

    def __init__(self, message: Optional[str] = None):
        super().__init__(message or self.message)
        if message:
            self.message = message


class UnsupportedPayload(ContactError):
    status = 415
    message = "Unsupported or invalid payload."


class InvalidSubmission(ContactError):
    status = 422
    message = "Please provide your name, email, and a short message."


class MailerNotConfigured(ContactError):
    status = 500
    message = ("Email service is not configured yet. "
               "Ask the site owner to add a RESEND_API_KEY environment variable.")


class DeliveryFailed(ContactError):
    status = 500

    def __init__(self, fallback_email: str):
        super().__init__(
            "We could not send your message right now. "
            f"Please try again or email {fallback_email} directly."
        )


@dataclass
class ContactSubmission:
    name: str
    email: str
    message: str
    company: Optional[str] = None
    budget: Optional[str] = None
    timeline: Optional[str] = None
    project_type: Optional[str] = None

    @property
    def subject(self) -> str:
        return f"New contact from {self.name}"


def _clean(value: Any) -> Optional[str]:
    if not isinstance(value, str):
        return None
    value = value.strip()
    return value or None


def parse_submission(payload: Mapping[str, Any]) -> ContactSubmission:
    """Trim and validate raw fields; raises InvalidSubmission"""
    name = _clean(payload.get("name"))
    email = _clean(payload.get("email"))
    message = _clean(payload.get("message"))

    if not name or not email or not message:
        raise InvalidSubmission()

    if not EMAIL_RE.match(email):
        raise InvalidSubmission("Please share a valid email address.")

    project_type = _clean(payload.get("projectType")) or _clean(payload.get("project-type"))

    return ContactSubmission(
        name=name,
        email=email,
        message=message,
        company=_clean(payload.get("company")),
        budget=_clean(payload.get("budget")),
        timeline=_clean(payload.get("timeline")),
        project_type=project_type,
    )


def read_payload(req) -> Mapping[str, Any]:
    """Decode the request body according to its declared content type"""
    if req.is_json:
        data = req.get_json(silent=True)
        if data is None:
            raise UnsupportedPayload("Invalid JSON payload.")
        if not isinstance(data, dict):
            raise UnsupportedPayload()
        return data

    if req.mimetype in FORM_MIMETYPES:
        return req.form.to_dict()

    raise UnsupportedPayload()


contact_bp = Blueprint("contact", __name__)


@contact_bp.errorhandler(ContactError)
def handle_contact_error(error: ContactError):
    return jsonify({"error": error.message}), error.status


@contact_bp.route("/api/contact", methods=["POST"])
def submit_contact():
    submission = parse_submission(read_payload(request))

    mailer = current_app.extensions.get("contact_mailer")
    if mailer is None:
        raise MailerNotConfigured()

    config = current_app.config
    email = EmailMessage(
        sender=config["CONTACT_FROM_EMAIL"],
        to=list(config["CONTACT_TO_EMAILS"]),
        reply_to=submission.email,
        subject=submission.subject,
        html=format_html(submission),
        text=format_text(submission),
    )

    try:
        mailer.send(email)
    except Exception as e:
        current_app.logger.exception("Contact form send failed")
        raise DeliveryFailed(config["CONTACT_FALLBACK_EMAIL"]) from e

    current_app.logger.info("Contact request from %s forwarded", submission.email)
    return jsonify({"success": True, "message": SUCCESS_MESSAGE}), 200
