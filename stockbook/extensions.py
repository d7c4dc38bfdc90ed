from flask_sqlalchemy import SQLAlchemy
from flask_login import LoginManager

db = SQLAlchemy()
login_manager = LoginManager()

# API clients get a 401 instead of a redirect (see create_app)
login_manager.login_message_category = "warning"
