from flask import Blueprint, request, jsonify
from flask_jwt_extended import jwt_required, get_current_user

from ..schemas.user_schema import user_schema
from ..services.inputs import as_mapping
from ..services.auth_service import register, login, update_profile

auth_blueprint = Blueprint('auth_blueprint', __name__)


@auth_blueprint.route('/signup', methods=['POST'])
def signup_user():
    data = as_mapping(request.get_json(silent=True))
    user = register(data)
    return jsonify({"message": "User created successfully", "user": user_schema.dump(user)}), 201


@auth_blueprint.route('/login', methods=['POST'])
def login_user():
    data = as_mapping(request.get_json(silent=True))
    token, user = login(data.get('email'), data.get('password'))
    return jsonify({
        "message": "Login successful",
        "token": token,
        "user": user_schema.dump(user),
    }), 200


@auth_blueprint.route('/profile', methods=['GET'])
@jwt_required()
def get_profile():
    return user_schema.jsonify(get_current_user()), 200


@auth_blueprint.route('/profile', methods=['PUT'])
@jwt_required()
def update_profile_route():
    data = as_mapping(request.get_json(silent=True))
    user = update_profile(get_current_user(), data)
    return jsonify({"message": "Profile updated successfully", "user": user_schema.dump(user)}), 200
