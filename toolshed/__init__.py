import click
from flask import Flask, jsonify
from sqlalchemy.exc import SQLAlchemyError

from toolshed.config import Config
from toolshed.extensions import db, migrate, jwt, mail
from toolshed.utils.responses import json_error


def _register_jwt_handlers():
    # keep the {"success", "message"} shape for token failures too
    @jwt.unauthorized_loader
    def _missing_token(reason):
        return jsonify({"success": False, "message": "Unauthorized"}), 401

    @jwt.invalid_token_loader
    def _invalid_token(reason):
        return jsonify({"success": False, "message": "Unauthorized"}), 401

    @jwt.expired_token_loader
    def _expired_token(jwt_header, jwt_payload):
        return jsonify({"success": False, "message": "Session expired"}), 401


def _register_error_handlers(app):
    # reads run outside run_in_transaction; keep their failures in the JSON shape too
    @app.errorhandler(SQLAlchemyError)
    def _database_error(e):
        db.session.rollback()
        app.logger.exception(f"[db] request failed: {e}")
        return json_error("Database operation failed", 500)


def create_app(config_object=Config):
    app = Flask(__name__)
    app.config.from_object(config_object)

    # models must be imported before migrate/create_all see the metadata
    from toolshed import models  # noqa: F401

    db.init_app(app)
    migrate.init_app(app, db)
    jwt.init_app(app)
    mail.init_app(app)
    _register_jwt_handlers()
    _register_error_handlers(app)

    from toolshed.controllers.inventory_controller import inventory_bp
    from toolshed.controllers.borrow_controller import borrow_bp
    from toolshed.controllers.return_controller import return_bp
    from toolshed.controllers.notification_controller import notif_bp
    app.register_blueprint(inventory_bp, url_prefix="/inventory")
    app.register_blueprint(borrow_bp, url_prefix="/borrow")
    app.register_blueprint(return_bp, url_prefix="/return")
    app.register_blueprint(notif_bp, url_prefix="/notifications")

    @app.get("/health")
    def health():
        return jsonify({"ok": True})

    @app.cli.command("init-db")
    def init_db():
        """Create all tables without running migrations."""
        db.create_all()
        click.echo("Database tables created.")

    from toolshed.tasks.scheduler import start_scheduler
    start_scheduler(app)

    return app
