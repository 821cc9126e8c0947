import logging

from flask import Flask, jsonify, request
from werkzeug.exceptions import HTTPException

from linksaver.api import api_bp
from linksaver.auth import auth_bp
from linksaver.config import Config
from linksaver.errors import LinkSaverError
from linksaver.extensions import db, login_manager, migrate


DEV_JWT_SECRET = "linksaver-dev-secret"
DEV_ENVIRONMENTS = {"development", "testing"}


def _configure_jwt_secret(app: Flask) -> None:
    if app.config.get("JWT_SECRET"):
        return
    if app.config.get("ENV_NAME") not in DEV_ENVIRONMENTS:
        raise RuntimeError(
            "JWT_SECRET must be set outside development "
            f"(LINKSAVER_ENV={app.config.get('ENV_NAME')!r})"
        )
    app.logger.warning("JWT_SECRET is not set; using the development secret")
    app.config["JWT_SECRET"] = DEV_JWT_SECRET


def _register_error_handlers(app: Flask) -> None:
    @app.errorhandler(LinkSaverError)
    def handle_linksaver_error(exc: LinkSaverError):
        return jsonify({"error": exc.message}), exc.status_code

    @app.errorhandler(HTTPException)
    def handle_http_error(exc: HTTPException):
        if not request.path.startswith("/api"):
            return exc
        return jsonify({"error": exc.description}), exc.code


def create_app(config_object=Config):
    app = Flask(__name__)
    app.config.from_object(config_object)
    app.logger.setLevel(app.config.get("LOG_LEVEL", logging.INFO))

    _configure_jwt_secret(app)

    db.init_app(app)
    migrate.init_app(app, db)
    login_manager.init_app(app)

    app.register_blueprint(auth_bp)
    app.register_blueprint(api_bp)
    _register_error_handlers(app)

    @app.cli.command("init-db")
    def init_db_command():
        db.create_all()
        print("Initialized LinkSaver database.")

    with app.app_context():
        db.create_all()

    return app
