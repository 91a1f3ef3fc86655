"""Transactional email delivered through SendGrid.

Email is the alternate channel for users who are not connected when
something happens that they should hear about.
"""

from __future__ import annotations

import json
import logging
from html import escape
from typing import Any

from sendgrid import SendGridAPIClient
from sendgrid.helpers.mail import Mail

from socialwire.config import get_settings

logger = logging.getLogger(__name__)


def _extract_sendgrid_error_details(body: Any) -> str | None:
    """Return a human readable description for a SendGrid error payload."""

    if body in (None, "", b""):
        return None

    if isinstance(body, bytes):
        try:
            body = body.decode("utf-8")
        except UnicodeDecodeError:
            return None

    if isinstance(body, str):
        body = body.strip()
        try:
            parsed = json.loads(body)
        except json.JSONDecodeError:
            return body or None
    else:
        parsed = body

    if isinstance(parsed, dict):
        errors = parsed.get("errors")
        if isinstance(errors, list):
            messages = [
                str(item["message"])
                for item in errors
                if isinstance(item, dict) and item.get("message")
            ]
            if messages:
                return "; ".join(messages)
        return json.dumps(parsed, default=str)

    if isinstance(parsed, list):
        return "; ".join(str(item) for item in parsed)

    return None


def _log_unsuccessful_response(status_code: Any, body: Any) -> None:
    details = _extract_sendgrid_error_details(body)
    if details:
        logger.error("SendGrid API responded with status %s: %s", status_code, details)
    else:
        logger.error("SendGrid API responded with status %s", status_code)


def send_email(subject: str, html_content: str, recipient: str) -> bool:
    """Send an email using the configured SendGrid credentials."""

    settings = get_settings()
    if not (settings.sendgrid_api_key and settings.sendgrid_sender):
        logger.info("SendGrid configuration incomplete; skipping email delivery")
        return False

    message = Mail(
        from_email=settings.sendgrid_sender,
        to_emails=recipient,
        subject=subject,
        html_content=html_content,
    )

    try:
        client = SendGridAPIClient(settings.sendgrid_api_key)
        response = client.send(message)
    except Exception as exc:  # pragma: no cover - network failures depend on environment
        _log_unsuccessful_response(getattr(exc, "status_code", None), getattr(exc, "body", None))
        return False

    status_code = getattr(response, "status_code", None)
    if not isinstance(status_code, int) or not 200 <= status_code < 300:
        _log_unsuccessful_response(status_code, getattr(response, "body", None))
        return False

    return True


def send_friend_request_email(email: str, sender_name: str) -> bool:
    """Tell an offline user that someone wants to be their friend."""

    subject = f"{sender_name} sent you a friend request"
    html_content = "".join(
        (
            "<p>Hi,</p>",
            f"<p><strong>{escape(sender_name)}</strong> wants to connect with you.</p>",
            "<p>Sign in to accept or reject the request.</p>",
        )
    )
    return send_email(subject, html_content, email)


__all__ = ["send_email", "send_friend_request_email"]
