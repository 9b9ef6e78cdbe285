from flask import Blueprint

bp = Blueprint("ingest", __name__)

from . import routes  # noqa: E402,F401
