import os
import re

from flask import Flask, jsonify
from flask_sqlalchemy import SQLAlchemy
from flask_marshmallow import Marshmallow
from flask_bcrypt import Bcrypt
from flask_jwt_extended import JWTManager
from flask_cors import CORS
from sqlalchemy.exc import IntegrityError
from werkzeug.exceptions import HTTPException, RequestEntityTooLarge

from .config import FORM_OVERHEAD, default_config
from .errors import ApiError
from .storage import too_large_message


db = SQLAlchemy()
ma = Marshmallow()
bcrypt = Bcrypt()
jwt = JWTManager()


def create_app(test_config=None):
    app = Flask(__name__)
    app.config.update(default_config())
    if test_config:
        app.config.update(test_config)
    if not app.config.get('MAX_CONTENT_LENGTH'):
        app.config['MAX_CONTENT_LENGTH'] = app.config['MAX_UPLOAD_SIZE'] + FORM_OVERHEAD

    app.logger.setLevel(app.config['LOG_LEVEL'])
    os.makedirs(app.config['UPLOAD_FOLDER'], exist_ok=True)

    bcrypt.init_app(app)
    db.init_app(app)
    ma.init_app(app)
    jwt.init_app(app)
    CORS(app)

    register_session_callbacks()
    register_error_handlers(app)

    with app.app_context():
        from .controllers.auth_controller import auth_blueprint
        from .controllers.group_controller import group_blueprint
        from .controllers.project_controller import project_blueprint
        from .controllers.milestone_controller import milestone_blueprint
        from .controllers.submission_controller import submission_blueprint
        app.register_blueprint(auth_blueprint, url_prefix="/auth")
        app.register_blueprint(group_blueprint, url_prefix="/groups")
        app.register_blueprint(project_blueprint, url_prefix="/projects")
        app.register_blueprint(milestone_blueprint, url_prefix="/milestones")
        app.register_blueprint(submission_blueprint, url_prefix="/submissions")

        db.create_all()

    @app.route('/', methods=['GET'])
    def index():
        return jsonify({"message": "ProjecTrack backend is running."}), 200

    return app


def register_session_callbacks():
    from .services.auth_service import resolve_session_user

    @jwt.user_lookup_loader
    def load_session_user(_jwt_header, jwt_data):
        return resolve_session_user(jwt_data)

    @jwt.user_lookup_error_loader
    def session_user_missing(_jwt_header, _jwt_data):
        return jsonify({"message": "Not authorized, user not found."}), 401

    @jwt.unauthorized_loader
    def missing_token(_reason):
        return jsonify({"message": "Not authorized, no token provided."}), 401

    @jwt.expired_token_loader
    def expired_token(_jwt_header, _jwt_data):
        return jsonify({"message": "Not authorized, token expired."}), 401

    @jwt.invalid_token_loader
    def invalid_token(_reason):
        return jsonify({"message": "Not authorized, token failed."}), 401


def unique_violation_fields(error):
    """Column names named by a unique-constraint violation (PostgreSQL or SQLite wording)."""
    text = str(error.orig)
    match = re.search(r'Key \((.+?)\)=', text)
    if match:
        return [name.strip() for name in match.group(1).split(',')]
    match = re.search(r'UNIQUE constraint failed: (.+)', text)
    if match:
        return [column.strip().split('.')[-1] for column in match.group(1).split(',')]
    return []


def register_error_handlers(app):

    @app.errorhandler(ApiError)
    def handle_api_error(error):
        if error.status_code >= 500:
            app.logger.error("Server error: %s", error.message)
        return jsonify(error.to_dict()), error.status_code

    @app.errorhandler(IntegrityError)
    def handle_integrity_error(error):
        db.session.rollback()
        fields = unique_violation_fields(error)
        app.logger.warning("Integrity error: %s", error.orig)
        if fields:
            return jsonify({"message": f"The {', '.join(fields)} is already in use."}), 409
        return jsonify({"message": "This record conflicts with an existing one."}), 409

    @app.errorhandler(RequestEntityTooLarge)
    def handle_too_large(_error):
        return jsonify({"message": too_large_message(app.config['MAX_UPLOAD_SIZE'])}), 400

    @app.errorhandler(HTTPException)
    def handle_http_error(error):
        return jsonify({"message": error.description}), error.code

    @app.errorhandler(Exception)
    def handle_unexpected_error(error):
        db.session.rollback()
        app.logger.exception("Unhandled error")
        return jsonify({"message": "Internal server error.", "error": str(error)}), 500
