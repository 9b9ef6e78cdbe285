"""
Notification fan-out for stored feedback.

Notification is advisory: the feedback row is already committed by the time
anything here runs, so every path optimizes for reaching as many enabled
recipients as possible and reports problems through logs only.
"""
import logging
from concurrent.futures import ThreadPoolExecutor, wait
from dataclasses import dataclass, field
from typing import List

import requests
from flask import current_app

from feedback_app.errors import DispatchError, NotFoundError
from feedback_app.extensions import background
from feedback_app.observability import log_event
from feedback_app.services import email as email_service
from feedback_app.services import store
from feedback_app.services.submissions import NotificationEvent

logger = logging.getLogger(__name__)

OUTCOME_SENT = "sent"
OUTCOME_NO_RECIPIENTS = "no_recipients"


@dataclass
class DispatchOutcome:
    status: str
    sent: List[str] = field(default_factory=list)
    failed: List[str] = field(default_factory=list)

    @property
    def all_failed(self) -> bool:
        return bool(self.failed) and not self.sent


def template_parameters(event: NotificationEvent, form_url: str) -> dict:
    return {
        "formUrl": form_url,
        "formId": event.form_id,
        "message": event.message,
        "userName": event.user_name,
        "userEmail": event.user_email,
        "hasUserInfo": event.has_user_info,
    }


def _send_all(recipients: List[str], form_url: str, parameters: dict) -> DispatchOutcome:
    """Send to every recipient concurrently and wait for all of them to settle."""
    app = current_app._get_current_object()

    def _send_one(to_email):
        with app.app_context():
            email_service.send_feedback_notification(to_email, form_url, parameters)

    outcome = DispatchOutcome(status=OUTCOME_SENT)
    with ThreadPoolExecutor(max_workers=len(recipients), thread_name_prefix="feedback-mail") as pool:
        futures = {pool.submit(_send_one, to_email): to_email for to_email in recipients}
        wait(futures)
    for future, to_email in futures.items():
        exc = future.exception()
        if exc is None:
            outcome.sent.append(to_email)
        else:
            outcome.failed.append(to_email)
            log_event(
                logger, "notification_send", logging.WARNING,
                form_id=parameters["formId"], to=to_email.lower(), outcome="failed",
                error=f"{type(exc).__name__}: {exc}",
            )
    return outcome


def deliver(event: NotificationEvent) -> DispatchOutcome:
    """
    Resolve recipients for the event's form and email each of them once.
    Raises NotFoundError for an unknown form and DispatchError when the store
    cannot be read; individual send failures are counted, never raised.
    """
    try:
        form = store.get_form_by_id(event.form_id)
    except Exception as exc:
        raise DispatchError(f"form lookup failed: {type(exc).__name__}") from exc
    if form is None:
        raise NotFoundError(event.form_id)

    try:
        recipients = store.get_enabled_recipients(event.form_id)
    except Exception as exc:
        raise DispatchError(f"recipient lookup failed: {type(exc).__name__}") from exc

    log_event(logger, "notification_dispatch", form_id=event.form_id, recipient_count=len(recipients))
    if not recipients:
        return DispatchOutcome(status=OUTCOME_NO_RECIPIENTS)

    outcome = _send_all(recipients, form.url, template_parameters(event, form.url))
    log_event(
        logger, "notification_dispatch",
        logging.WARNING if outcome.failed else logging.INFO,
        form_id=event.form_id, sent=len(outcome.sent), failed=len(outcome.failed),
    )
    return outcome


def dispatch(event: NotificationEvent) -> None:
    """Detached entry point: run deliver() and turn every failure into a log record."""
    try:
        deliver(event)
    except NotFoundError:
        log_event(logger, "notification_dispatch", logging.WARNING, form_id=event.form_id, outcome="form_not_found")
    except Exception:
        logger.exception("notification dispatch failed for form %s", event.form_id)


def relay(event: NotificationEvent) -> None:
    """
    Post the event to a separately deployed notification endpoint.
    One attempt; the response status or the failure is logged and nothing is raised.
    """
    cfg = current_app.config
    url = cfg["NOTIFICATION_URL"]
    headers = {"Content-Type": "application/json"}
    secret = cfg.get("NOTIFY_SECRET")
    if secret:
        headers["Authorization"] = f"Bearer {secret}"
    try:
        response = requests.post(
            url, json=event.to_payload(), headers=headers, timeout=cfg.get("NOTIFICATION_TIMEOUT", 10),
        )
    except requests.exceptions.RequestException as exc:
        log_event(
            logger, "notification_relay", logging.WARNING,
            form_id=event.form_id, url=url, outcome="request_failed", error=f"{type(exc).__name__}: {exc}",
        )
        return
    log_event(
        logger, "notification_relay",
        logging.INFO if response.ok else logging.WARNING,
        form_id=event.form_id, url=url, status=response.status_code, body=response.text[:200],
    )


def schedule(event: NotificationEvent):
    """Start notification for a stored feedback row without waiting on it."""
    target = relay if current_app.config.get("NOTIFICATION_URL") else dispatch
    return background.spawn(target, event)
