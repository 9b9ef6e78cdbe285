from flask_sqlalchemy import SQLAlchemy
from flask_migrate import Migrate
from flask_mail import Mail

from .services.background import BackgroundRunner

db = SQLAlchemy()
migrate = Migrate()
mail = Mail()

# Thread pool for work that must not hold up the response (notification dispatch).
background = BackgroundRunner()
