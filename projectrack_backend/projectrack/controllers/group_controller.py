from flask import Blueprint, request, jsonify
from flask_jwt_extended import jwt_required, get_current_user

from ..schemas.group_schema import group_schema, groups_schema, invitation_schema, invitations_schema
from ..services.inputs import as_mapping
from ..services.group_service import create_group, list_my_groups, invite_member, list_pending_invitations, respond_invitation

group_blueprint = Blueprint('group_blueprint', __name__)


@group_blueprint.route('', methods=['POST'])
@jwt_required()
def create_group_route():
    data = as_mapping(request.get_json(silent=True))
    group = create_group(get_current_user(), data.get('name'))
    return jsonify({"message": "Group created successfully", "group": group_schema.dump(group)}), 201


@group_blueprint.route('', methods=['GET'])
@jwt_required()
def list_groups():
    groups = list_my_groups(get_current_user())
    return groups_schema.jsonify(groups), 200


@group_blueprint.route('/<int:group_id>/invitations', methods=['POST'])
@jwt_required()
def invite_member_route(group_id):
    data = as_mapping(request.get_json(silent=True))
    invitation = invite_member(get_current_user(), group_id, data.get('invited_user_email'))
    return jsonify({
        "message": "Invitation sent successfully.",
        "invitation": invitation_schema.dump(invitation),
    }), 201


@group_blueprint.route('/invitations/pending', methods=['GET'])
@jwt_required()
def pending_invitations():
    invitations = list_pending_invitations(get_current_user())
    return invitations_schema.jsonify(invitations), 200


@group_blueprint.route('/invitations/<int:invitation_id>/respond', methods=['PATCH'])
@jwt_required()
def respond_invitation_route(invitation_id):
    data = as_mapping(request.get_json(silent=True))
    action = data.get('action')
    invitation = respond_invitation(get_current_user(), invitation_id, action)

    if action == 'ACCEPT':
        message = "Invitation accepted successfully. You have joined the group."
    else:
        message = "Invitation rejected successfully."
    return jsonify({"message": message, "invitation": invitation_schema.dump(invitation)}), 200
