from flask import Flask, send_file, send_from_directory, current_app
from .config import config_by_name
from .extensions import db, migrate, jwt
from .api.v1 import v1_bp
from .public import public_bp
from .public.cache import init_render_cache
from .errors import register_error_handlers
from flask_swagger_ui import get_swaggerui_blueprint
import logging
import os


def create_app(config_name: str = "development") -> Flask:
    app = Flask(__name__)
    app.config.from_object(config_by_name[config_name])

    # Module loggers (servible.*) propagate to the app logger
    app.logger.setLevel(getattr(logging, str(app.config["LOG_LEVEL"]).upper(), logging.INFO))

    # -------------------------------------------------
    # Extensions
    # -------------------------------------------------
    db.init_app(app)
    migrate.init_app(app, db)
    jwt.init_app(app)
    init_render_cache(app)

    # -------------------------------------------------
    # API Blueprints
    # -------------------------------------------------
    app.register_blueprint(v1_bp, url_prefix="/api/v1")
    register_error_handlers(app)

    # -------------------------------------------------
    # Serve OpenAPI YAML (PUBLIC, NO TENANT)
    # -------------------------------------------------
    @app.route("/openapi/servible.yaml", methods=["GET"], endpoint="openapi_servible")
    def serve_openapi():
        openapi_path = os.path.join(
            current_app.root_path,
            "api",
            "v1",
            "servible_openapi.yaml",
        )

        if not os.path.exists(openapi_path):
            raise FileNotFoundError("servible_openapi.yaml not found")

        return send_file(
            openapi_path,
            mimetype="application/yaml",
            as_attachment=False,
        )

    # -------------------------------------------------
    # Local media store
    # -------------------------------------------------
    media_url = app.config["MEDIA_BASE_URL"].rstrip("/")
    if media_url.startswith("/"):
        @app.route(f"{media_url}/<path:filename>", methods=["GET"], endpoint="media_file")
        def serve_media(filename):
            folder = app.config["UPLOAD_FOLDER"]
            if not os.path.isabs(folder):
                folder = os.path.join(app.instance_path, folder)
            return send_from_directory(folder, filename)

    # -------------------------------------------------
    # Swagger UI
    # -------------------------------------------------
    SWAGGER_URL = "/swagger"
    API_URL = "/openapi/servible.yaml"

    swaggerui_blueprint = get_swaggerui_blueprint(
        SWAGGER_URL,
        API_URL,
        config={
            "app_name": "Servible Sites API",
            "deepLinking": True,
            "persistAuthorization": True,
        },
    )

    app.register_blueprint(swaggerui_blueprint, url_prefix=SWAGGER_URL)

    # -------------------------------------------------
    # Public tenant sites (host-resolved, registered last)
    # -------------------------------------------------
    app.register_blueprint(public_bp)

    return app
