from flask import Blueprint

proxy_bp = Blueprint('proxy', __name__)

from rampur_news.proxy import routes  # noqa: E402, F401
