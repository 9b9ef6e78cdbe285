import hmac
import logging

from flask import current_app, jsonify, request

from feedback_app.errors import DispatchError, FeedbackServiceError, NotFoundError
from feedback_app.observability import log_event
from feedback_app.services import notifications
from feedback_app.services.notifications import OUTCOME_NO_RECIPIENTS
from feedback_app.services.submissions import NotificationEvent
from . import bp

logger = logging.getLogger(__name__)


def _valid_bearer(header: str) -> bool:
    secret = current_app.config.get("NOTIFY_SECRET")
    if not secret or not header.startswith("Bearer "):
        return False
    token = header.split(" ", 1)[1].strip()
    return hmac.compare_digest(token.encode("utf-8"), secret.encode("utf-8"))


@bp.errorhandler(FeedbackServiceError)
def _pipeline_error(e):
    return jsonify(e.to_dict()), e.status_code


@bp.route("/notify", methods=["GET", "PUT", "PATCH", "DELETE", "POST"])
def send_notification():
    """
    Server-to-server trigger for one feedback event. Unlike the detached path,
    the outcome is reported back to the caller.
    """
    if request.method != "POST":
        return jsonify({"error": "Method not allowed"}), 405
    if not _valid_bearer(request.headers.get("Authorization", "")):
        return jsonify({"error": "Unauthorized"}), 401

    event = NotificationEvent.from_payload(request.get_json(force=True, silent=True) or {})
    log_event(
        logger, "notification_request",
        form_id=event.form_id, has_message=bool(event.message), has_user_info=event.has_user_info,
    )

    try:
        outcome = notifications.deliver(event)
    except NotFoundError:
        log_event(logger, "notification_request", logging.WARNING, form_id=event.form_id, outcome="form_not_found")
        raise
    except DispatchError:
        logger.exception("notification failed for form %s", event.form_id)
        raise

    if outcome.status == OUTCOME_NO_RECIPIENTS:
        return jsonify({"message": "No notification settings found"}), 200
    if outcome.all_failed:
        raise DispatchError(f"all {len(outcome.failed)} sends failed")
    return jsonify({"success": True, "sent": len(outcome.sent), "failed": len(outcome.failed)}), 200
