"""
Flask Extensions

Admin identity comes from the signed `admin_session` cookie, not from a
server-side user table; see `rampur_news.admin.decorators`.
"""

from flask_sqlalchemy import SQLAlchemy
from flask_login import LoginManager

# Database instance (local provider storage)
db = SQLAlchemy()

# Login manager, fed by a request loader rather than the Flask session
login_manager = LoginManager()
