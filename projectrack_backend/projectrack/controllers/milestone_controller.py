from flask import Blueprint, request, jsonify
from flask_jwt_extended import jwt_required, get_current_user

from ..schemas.milestone_schema import milestone_schema
from ..services.inputs import as_mapping
from ..services.milestone_service import update_milestone

milestone_blueprint = Blueprint('milestone_blueprint', __name__)


@milestone_blueprint.route('/<int:milestone_id>', methods=['PATCH'])
@jwt_required()
def update_milestone_route(milestone_id):
    data = as_mapping(request.get_json(silent=True))
    milestone = update_milestone(get_current_user(), milestone_id, data)
    return jsonify({"message": "Milestone updated successfully.", "milestone": milestone_schema.dump(milestone)}), 200
