from flask import Blueprint

site_bp = Blueprint('site', __name__)

from rampur_news.site import routes  # noqa: E402, F401
