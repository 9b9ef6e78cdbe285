import os
import json
import logging
from logging.config import dictConfig

from pythonjsonlogger import jsonlogger


def init_logging(app):
    """Structured logs (JSON) in staging/prod; keep default console in dev/tests."""
    app_env = (os.getenv("APP_ENV", "development") or "development").lower()
    level = (app.config.get("LOG_LEVEL") or "INFO").upper()
    if app_env in ("staging", "production"):
        fmt = "%(asctime)s %(levelname)s %(name)s %(message)s"
        dictConfig({
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {"json": {"()": jsonlogger.JsonFormatter, "fmt": fmt}},
            "handlers": {"wsgi": {"class": "logging.StreamHandler", "formatter": "json"}},
            "root": {"level": level, "handlers": ["wsgi"]},
        })
    else:
        if app_env == "development":
            logging.basicConfig(level=level, format="%(asctime)s %(levelname)s %(name)s %(message)s")
        logging.getLogger("feedback_app").setLevel(level)
        app.logger.setLevel(level)


def log_event(logger, event: str, level: int = logging.INFO, **fields):
    """
    Minimal structured log: one JSON object per line.
    Never pass message bodies; recipients and ids only.
    """
    payload = {"event": event, **fields}
    logger.log(level, json.dumps(payload, default=str))


def init_sentry(app):
    """Wire Sentry if DSN present; safe no-op otherwise."""
    dsn = os.getenv("SENTRY_DSN")
    if not dsn:
        return
    try:
        import sentry_sdk
        from sentry_sdk.integrations.flask import FlaskIntegration
        sentry_sdk.init(
            dsn=dsn,
            integrations=[FlaskIntegration()],
            traces_sample_rate=float(os.getenv("SENTRY_TRACES", "0.0")),
            environment=os.getenv("APP_ENV", "development"),
        )
    except Exception as exc:
        app.logger.warning("Sentry init skipped: %s", exc)
