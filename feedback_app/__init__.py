import os
from flask import Flask, jsonify

# Load .env only for local/dev. In prod, env vars come from the platform.
if os.getenv("APP_ENV", "development") != "production":
    from dotenv import load_dotenv
    load_dotenv(".env", override=False)


from .config import get_config
from .extensions import db, migrate, mail, background
from .observability import init_logging, init_sentry


def create_app(config_object=None):
    app = Flask(__name__, template_folder="templates")

    # Config: clean, explicit, class-based
    app.config.from_object(config_object or get_config())

    # --- Required env validation for prod-like envs (staging/production) ---
    def _require(name: str):
        val = app.config.get(name) or os.getenv(name)
        if not val:
            raise RuntimeError(f"Missing required environment variable: {name}")
        return val

    env_key = (os.getenv("APP_ENV", "development") or "development").lower()
    if env_key in ("staging", "production"):
        _require("SECRET_KEY")
        _require("DATABASE_URL")
        _require("NOTIFY_SECRET")

    init_logging(app)
    init_sentry(app)

    # Init extensions
    db.init_app(app)
    migrate.init_app(app, db, directory=os.path.join(os.path.dirname(app.root_path), "migrations"))
    mail.init_app(app)
    background.init_app(app)

    from . import models  # noqa: F401  (register tables on db.metadata)

    from .blueprints.ingest import bp as ingest_bp
    from .blueprints.notify import bp as notify_bp

    app.register_blueprint(ingest_bp, url_prefix="/api")
    app.register_blueprint(notify_bp, url_prefix="/api")

    @app.get("/healthz")
    def healthz():
        return {"status": "ok"}, 200

    @app.errorhandler(404)
    def not_found(e):
        return jsonify({"error": "Not found"}), 404

    @app.errorhandler(405)
    def method_not_allowed(e):
        return jsonify({"error": "Method not allowed"}), 405

    @app.errorhandler(500)
    def server_error(e):
        return jsonify({"error": "Internal server error"}), 500

    if not app.config.get("NOTIFY_SECRET"):
        app.logger.warning("NOTIFY_SECRET/STORE_SERVICE_KEY missing; /api/notify will reject every call")
    if app.config.get("NOTIFICATION_URL"):
        app.logger.info("Notifications relayed to %s", app.config["NOTIFICATION_URL"])

    return app
