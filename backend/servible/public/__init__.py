from flask import Blueprint
from servible.middleware.site_middleware import site_middleware

public_bp = Blueprint("public", __name__)
site_middleware(public_bp)

# Import views so they register with public_bp
from . import views
