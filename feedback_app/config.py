import os

from dotenv import dotenv_values


def _flag(name: str, default: str = "false") -> bool:
    return (os.getenv(name, default) or default).lower() == "true"


class BaseConfig:
    # Secrets (env in prod; dev/test may use defaults)
    SECRET_KEY = os.environ.get("SECRET_KEY", "dev-not-secure")

    # Store (env in prod; dev/test may use default)
    _ENV_FALLBACK = dotenv_values(".env")
    SQLALCHEMY_DATABASE_URI = os.environ.get("DATABASE_URL") or _ENV_FALLBACK.get("DATABASE_URL") or "sqlite:///:memory:"
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # Store credentials. The service key doubles as the bearer shared between
    # the ingestion endpoint and the notification endpoint.
    STORE_SERVICE_KEY = os.getenv("STORE_SERVICE_KEY")
    STORE_ANON_KEY = os.getenv("STORE_ANON_KEY")
    NOTIFY_SECRET = os.getenv("NOTIFY_SECRET") or STORE_SERVICE_KEY

    # Logging / misc
    LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")

    # --- Ingestion ---
    # Browsers always send Origin on cross-site POSTs; callers without one are
    # treated as trusted server-to-server clients unless this is on.
    REQUIRE_ORIGIN = _flag("REQUIRE_ORIGIN")

    # --- Notifications ---
    # When set, ingestion relays events to this URL instead of dispatching in-process.
    NOTIFICATION_URL = os.getenv("NOTIFICATION_URL")
    NOTIFICATION_TIMEOUT = float(os.getenv("NOTIFICATION_TIMEOUT", "10"))
    NOTIFICATION_SENDER = os.getenv("NOTIFICATION_SENDER", "notifications@userbird.co")

    # --- Background tasks ---
    BACKGROUND_MAX_WORKERS = int(os.getenv("BACKGROUND_MAX_WORKERS", "4"))
    BACKGROUND_TASKS_EAGER = _flag("BACKGROUND_TASKS_EAGER")

    # --- Mail ---
    MAIL_SERVER = os.getenv("MAIL_SERVER", "localhost")
    MAIL_PORT = int(os.getenv("MAIL_PORT", "587"))
    MAIL_USE_TLS = _flag("MAIL_USE_TLS", "true")
    MAIL_USE_SSL = _flag("MAIL_USE_SSL")
    MAIL_USERNAME = os.getenv("MAIL_USERNAME")
    MAIL_PASSWORD = os.getenv("MAIL_PASSWORD")
    MAIL_DEFAULT_SENDER = NOTIFICATION_SENDER
    MAIL_SUPPRESS_SEND = _flag("MAIL_SUPPRESS_SEND")


class DevelopmentConfig(BaseConfig):
    DEBUG = True
    LOG_LEVEL = os.environ.get("LOG_LEVEL", "DEBUG")
    MAIL_SUPPRESS_SEND = True


class ProductionConfig(BaseConfig):
    DEBUG = False
    LOG_LEVEL = os.environ.get("LOG_LEVEL", "WARNING")
    MAIL_SUPPRESS_SEND = False


class TestingConfig(BaseConfig):
    TESTING = True
    DEBUG = True
    SQLALCHEMY_DATABASE_URI = os.environ.get("TEST_DATABASE_URL", "sqlite:///:memory:")
    NOTIFY_SECRET = "test-notify-secret"
    NOTIFICATION_URL = None
    BACKGROUND_TASKS_EAGER = True
    MAIL_SUPPRESS_SEND = True


_ENV_MAP = {
    "development": DevelopmentConfig,
    "production": ProductionConfig,
    "testing": TestingConfig,
}


def get_config():
    env = os.environ.get("APP_ENV", "development").lower()
    return _ENV_MAP.get(env, DevelopmentConfig)
