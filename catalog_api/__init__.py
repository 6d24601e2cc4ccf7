import logging
import os

from flask import Flask, jsonify
from dotenv import load_dotenv
from werkzeug.exceptions import HTTPException

load_dotenv()

__version__ = "1.0.0"

logger = logging.getLogger(__name__)


def create_app(config_name=None):
    flask_app = Flask(__name__)

    if config_name is None:
        config_name = os.environ.get("FLASK_ENV")
        if not config_name:
            # Default to production on managed platforms to avoid accidental
            # debug mode/weak defaults when env selection is omitted.
            if os.environ.get("RAILWAY_ENVIRONMENT") or os.environ.get("PORT"):
                config_name = "production"
            else:
                config_name = "development"

    from catalog_api.config import config_map

    config_cls = config_map.get(config_name, config_map["development"])
    flask_app.config.from_object(config_cls)
    flask_app.json.sort_keys = flask_app.config["JSON_SORT_KEYS"]

    if hasattr(config_cls, "init_app"):
        config_cls.init_app(flask_app)

    # Initialize extensions
    from catalog_api.extensions import db, migrate

    db.init_app(flask_app)
    migrate.init_app(flask_app, db)

    # Import models so Alembic sees them
    from catalog_api.models import Product, Variant, Student, Account  # noqa: F401

    # Register blueprints
    from catalog_api.blueprints.api import api_bp

    flask_app.register_blueprint(api_bp, url_prefix="/api")

    # Register CLI commands
    from catalog_api.cli import register_cli

    register_cli(flask_app)

    register_error_handlers(flask_app)

    @flask_app.route("/")
    def index():
        return {
            "message": "Catalog API",
            "version": __version__,
            "endpoints": sorted(
                f"{','.join(sorted(r.methods - {'HEAD', 'OPTIONS'}))} {r.rule}"
                for r in flask_app.url_map.iter_rules()
                if r.rule.startswith("/api/")
            ),
        }

    # Health check
    @flask_app.route("/health")
    def health():
        checks = {"status": "ok"}
        try:
            db.session.execute(db.text("SELECT 1"))
            checks["db"] = "ok"
        except Exception:
            flask_app.logger.exception("Health check DB probe failed")
            checks["db"] = "error"
            checks["status"] = "degraded"
        status_code = 200 if checks["status"] == "ok" else 503
        return checks, status_code

    return flask_app


def register_error_handlers(flask_app):
    from catalog_api.errors import ServiceError

    @flask_app.errorhandler(ServiceError)
    def handle_service_error(error):
        return jsonify(error.to_dict()), error.status_code

    @flask_app.errorhandler(HTTPException)
    def handle_http_error(error):
        message = "Route not found" if error.code == 404 else error.description
        body = {"success": False, "message": message, "error": error.name}
        return jsonify(body), error.code

    @flask_app.errorhandler(Exception)
    def handle_unexpected(error):
        logger.exception("Unhandled error")
        body = {"success": False, "message": "Something went wrong!"}
        if flask_app.debug:
            body["error"] = str(error)
        return jsonify(body), 500
