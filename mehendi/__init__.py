import logging
import os

from flask import Flask, current_app, jsonify
from flask_login import LoginManager
from flask_sqlalchemy import SQLAlchemy

db = SQLAlchemy()
login_manager = LoginManager()


def create_app(test_config=None):
    from config import Config

    app = Flask(__name__)

    # CONFIGURATION
    app.config.from_object(Config)
    if test_config:
        app.config.update(test_config)

    logging.basicConfig(
        level=app.config.get("LOG_LEVEL", "INFO"),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    for folder in (app.config["UPLOAD_FOLDER"], app.config["SNAPSHOT_FOLDER"]):
        os.makedirs(folder, exist_ok=True)
    if app.config["SQLALCHEMY_DATABASE_URI"].startswith("sqlite:///"):
        os.makedirs(os.path.dirname(app.config["SQLALCHEMY_DATABASE_URI"][len("sqlite:///"):]) or ".", exist_ok=True)

    # Extensions
    db.init_app(app)
    login_manager.init_app(app)

    from mehendi.backend.factory import create_backend
    from mehendi.errors import MehendiError, create_error_response
    from mehendi.models.user import AdminUser
    from mehendi.services.catalog import CatalogManager
    from mehendi.state.mirror import AdminState
    from mehendi.state.snapshot import SnapshotStore

    admin_user = AdminUser.from_config(app.config)

    @login_manager.user_loader
    def load_user(user_id):
        if user_id == admin_user.id:
            return admin_user
        return None

    @login_manager.unauthorized_handler
    def unauthorized():
        return jsonify({"success": False, "data": None, "error": "Authentication required"}), 401

    @app.errorhandler(MehendiError)
    def handle_mehendi_error(error):
        return jsonify(create_error_response(error)), error.status_code

    backend = create_backend(app.config)
    catalog = CatalogManager(
        backend,
        assume_in_use_on_failure=app.config["USAGE_SCAN_ASSUME_IN_USE"],
        max_image_size=app.config["MAX_IMAGE_SIZE"],
    )
    state = AdminState(catalog, SnapshotStore(app.config["SNAPSHOT_FOLDER"]), admin_user)
    app.extensions["mehendi"] = state

    # Blueprints
    from mehendi.routes.auth import auth_bp
    from mehendi.routes.dashboard import dashboard_bp
    from mehendi.routes.public import public_bp
    from mehendi.routes.storage import storage_bp

    app.register_blueprint(public_bp)
    app.register_blueprint(auth_bp)
    app.register_blueprint(dashboard_bp)
    app.register_blueprint(storage_bp)

    with app.app_context():
        if backend.configured and app.config["MEHENDI_BACKEND"].lower() == "local":
            db.create_all()
        state.refresh()

    return app


def get_state():
    return current_app.extensions["mehendi"]
