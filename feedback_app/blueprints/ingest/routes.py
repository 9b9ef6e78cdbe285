import logging

from flask import current_app, jsonify, request, url_for

from feedback_app.errors import AuthorizationError, FeedbackServiceError, PersistenceError, ValidationError
from feedback_app.observability import log_event
from feedback_app.services import notifications, store
from feedback_app.services.origin import is_allowed
from feedback_app.services.submissions import NotificationEvent, parse_submission
from . import bp

logger = logging.getLogger(__name__)

CORS_ALLOW_HEADERS = "Content-Type, Accept, Origin"
CORS_ALLOW_METHODS = "POST, OPTIONS"
CORS_MAX_AGE = "86400"


@bp.after_app_request
def _cors_headers(response):
    """Every response on the ingestion path carries the widget's CORS headers, routing 405s included."""
    if request.script_root + request.path != url_for("ingest.submit_feedback"):
        return response
    response.headers["Access-Control-Allow-Origin"] = request.headers.get("Origin") or "*"
    response.headers["Access-Control-Allow-Headers"] = CORS_ALLOW_HEADERS
    response.headers["Access-Control-Allow-Methods"] = CORS_ALLOW_METHODS
    response.headers["Access-Control-Max-Age"] = CORS_MAX_AGE
    response.headers["Content-Type"] = "application/json"
    response.headers["Vary"] = "Origin"
    return response


@bp.errorhandler(FeedbackServiceError)
def _pipeline_error(e):
    return jsonify(e.to_dict()), e.status_code


def _authorize_origin(form_id: str, origin):
    """Fail closed: unknown form, unreadable store or mismatched origin all reject."""
    if not origin:
        if current_app.config.get("REQUIRE_ORIGIN"):
            raise AuthorizationError("origin header required")
        return
    try:
        form = store.get_form_by_id(form_id)
    except Exception as exc:
        logger.warning("form lookup failed during origin check: %s", type(exc).__name__)
        raise AuthorizationError("form lookup failed") from exc
    if form is None or not is_allowed(origin, form.url):
        raise AuthorizationError("origin does not match form")


@bp.route("/feedback", methods=["GET", "PUT", "PATCH", "DELETE", "POST", "OPTIONS"])
def submit_feedback():
    """Accept one widget submission, store it, and start notification in the background."""
    if request.method == "OPTIONS":
        return "", 204
    if request.method != "POST":
        return jsonify({"error": "Method not allowed"}), 405

    body = request.get_json(force=True, silent=True) or {}
    origin = request.headers.get("Origin")

    try:
        fields = parse_submission(body)
        _authorize_origin(fields["form_id"], origin)
    except (ValidationError, AuthorizationError) as e:
        log_event(
            logger, "feedback_rejected",
            reason=type(e).__name__, form_id=body.get("formId") if isinstance(body, dict) else None, origin=origin,
        )
        raise

    try:
        record = store.insert_feedback(**fields)
    except PersistenceError:
        logger.exception("feedback insert failed for form %s", fields["form_id"])
        raise

    # The row is committed: nothing below may turn this into an error response.
    try:
        log_event(
            logger, "feedback_submitted",
            feedback_id=record.id, form_id=fields["form_id"], origin=origin,
            has_image=bool(fields["image_url"]), has_user=bool(fields["user_email"] or fields["user_name"]),
        )
        notifications.schedule(NotificationEvent.from_record(record, body))
    except Exception:
        logger.exception("could not start notification for form %s", fields["form_id"])

    return jsonify({"success": True}), 200
