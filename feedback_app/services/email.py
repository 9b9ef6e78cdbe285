import logging
import time
from typing import Any, Dict, Optional

from flask import current_app, render_template
from flask_mail import Message

from feedback_app.extensions import mail
from feedback_app.observability import log_event

logger = logging.getLogger(__name__)

FEEDBACK_TEMPLATE = "feedback_notification"


def feedback_subject(form_url: str) -> str:
    return f"New feedback received for {form_url}"


def send_email(to_email: str, subject: str, template: str, context: Optional[Dict[str, Any]] = None,
               sender: Optional[str] = None) -> None:
    """
    template: basename under templates/email/ without extension.
    Renders both HTML and plaintext and hands one message to the provider.
    Raises whatever the provider raises; callers decide what a failure means.
    """
    context = context or {}
    msg = Message(
        recipients=[to_email],
        subject=subject,
        sender=sender or current_app.config.get("NOTIFICATION_SENDER"),
    )
    msg.body = render_template(f"email/{template}.txt", **context)
    msg.html = render_template(f"email/{template}.html", **context)

    start = time.perf_counter()
    try:
        mail.send(msg)
    except Exception as ex:
        log_event(
            logger, "notification_send", logging.WARNING,
            template=template, to=to_email.lower(), outcome="smtp_error",
            latency_ms=int((time.perf_counter() - start) * 1000), smtp_error=str(ex),
        )
        raise
    log_event(
        logger, "notification_send",
        template=template, to=to_email.lower(), outcome="sent",
        latency_ms=int((time.perf_counter() - start) * 1000),
    )


def send_feedback_notification(to_email: str, form_url: str, parameters: Dict[str, Any]) -> None:
    send_email(
        to_email=to_email,
        subject=feedback_subject(form_url),
        template=FEEDBACK_TEMPLATE,
        context=parameters,
        sender=current_app.config.get("NOTIFICATION_SENDER"),
    )
