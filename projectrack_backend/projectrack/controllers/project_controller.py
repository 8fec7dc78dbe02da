from flask import Blueprint, request, jsonify
from flask_jwt_extended import jwt_required, get_current_user

from ..schemas.project_schema import project_schema, projects_schema
from ..schemas.milestone_schema import milestone_schema, milestones_schema
from ..services.inputs import as_mapping
from ..services.project_service import propose_project, list_proposals_for_supervisor, decide_project, get_project_detail
from ..services.milestone_service import add_milestone, list_milestones


project_blueprint = Blueprint('project_blueprint', __name__)


@project_blueprint.route('', methods=['POST'])
@jwt_required()
def propose_project_route():
    data = as_mapping(request.get_json(silent=True))
    project = propose_project(get_current_user(), data)
    return jsonify({"message": "Project proposed successfully.", "project": project_schema.dump(project)}), 201


@project_blueprint.route('/proposals/my', methods=['GET'])
@jwt_required()
def my_proposals():
    projects = list_proposals_for_supervisor(get_current_user())
    return projects_schema.jsonify(projects), 200


@project_blueprint.route('/<int:project_id>/status', methods=['PATCH'])
@jwt_required()
def decide_project_route(project_id):
    data = as_mapping(request.get_json(silent=True))
    status = data.get('status')
    project = decide_project(get_current_user(), project_id, status, data.get('rejection_reason'))
    return jsonify({
        "message": f"Project {status.lower()} successfully.",
        "project": project_schema.dump(project),
    }), 200


@project_blueprint.route('/<int:project_id>', methods=['GET'])
@jwt_required()
def get_project(project_id):
    project, progress = get_project_detail(get_current_user(), project_id)

    # progress is derived on every read and never stored
    project_data = project_schema.dump(project)
    project_data['milestones'] = milestones_schema.dump(project.milestones)
    project_data['progress'] = progress
    return jsonify(project_data), 200


@project_blueprint.route('/<int:project_id>/milestones', methods=['POST'])
@jwt_required()
def add_milestone_route(project_id):
    data = as_mapping(request.get_json(silent=True))
    milestone = add_milestone(get_current_user(), project_id, data)
    return jsonify({"message": "Milestone added successfully.", "milestone": milestone_schema.dump(milestone)}), 201


@project_blueprint.route('/<int:project_id>/milestones', methods=['GET'])
@jwt_required()
def list_milestones_route(project_id):
    milestones = list_milestones(get_current_user(), project_id)
    return milestones_schema.jsonify(milestones), 200
