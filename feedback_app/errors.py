"""Error taxonomy for the ingestion and notification pipeline.

Each error carries the HTTP status and the public message the blueprints
return; internal detail stays in the exception args and the logs.
"""


class FeedbackServiceError(Exception):
    status_code = 500
    message = "Internal server error"

    def to_dict(self):
        return {"error": self.message}


class ValidationError(FeedbackServiceError):
    status_code = 400
    message = "Invalid request data"


class AuthorizationError(FeedbackServiceError):
    status_code = 403
    message = "Origin not allowed"


class NotFoundError(FeedbackServiceError):
    status_code = 404
    message = "Form not found"


class PersistenceError(FeedbackServiceError):
    status_code = 500
    message = "Internal server error"


class DispatchError(FeedbackServiceError):
    status_code = 500
    message = "Failed to send notification"
