import logging

from ..errors import AuthorizationError, ConflictError, NotFoundError, ValidationError
from ..models.invitation_model import InvitationStatus
from ..repositories import group_repository, invitation_repository, user_repository
from ..repositories.transaction import atomic
from . import permissions
from .inputs import text


logger = logging.getLogger(__name__)

ACTIONS = {
    'ACCEPT': InvitationStatus.ACCEPTED,
    'REJECT': InvitationStatus.REJECTED,
}


def create_group(user, name):
    if not permissions.is_student(user):
        raise AuthorizationError("Only students can create groups.")

    if not isinstance(name, str) or not name.strip():
        raise ValidationError("Group name is required.")
    name = name.strip()

    if group_repository.find_by_name(name):
        raise ConflictError(f"A group with the name '{name}' already exists.")

    with atomic():
        group = group_repository.create(name, user)

    logger.info("Group %s '%s' created by user %s", group.id, name, user.id)
    return group


def list_my_groups(user):
    return group_repository.find_for_user(user.id)


def invite_member(user, group_id, invitee_email):
    invitee_email = text(invitee_email, "Email of the user to invite")
    if not invitee_email:
        raise ValidationError("Email of the user to invite is required.")

    group = group_repository.find_by_id(group_id)
    if not group:
        raise NotFoundError("Group not found.")

    if not permissions.is_group_leader(user, group):
        raise AuthorizationError("Only the group leader can send invitations.")

    invitee = user_repository.find_by_email(invitee_email)
    if not invitee:
        raise NotFoundError(f"User with email '{invitee_email}' not found.")

    if not permissions.is_student(invitee):
        raise ValidationError("Only students can be invited to groups.")

    if invitee.id == user.id:
        raise ValidationError("You cannot invite yourself to the group.")

    if permissions.is_group_member(invitee, group):
        raise ConflictError(f"User '{invitee_email}' is already a member of this group.")

    # One invitation per (group, invitee) ever; a rejected one still blocks.
    existing = invitation_repository.find_for_pair(group.id, invitee.id)
    if existing:
        if existing.status == InvitationStatus.PENDING:
            raise ConflictError(f"An invitation is already pending for '{invitee_email}' to this group.")
        raise ConflictError(
            f"An invitation for '{invitee_email}' to this group already exists with status: {existing.status}."
        )

    with atomic():
        invitation = invitation_repository.create(group.id, invitee.id, user.id)

    logger.info("User %s invited user %s to group %s", user.id, invitee.id, group.id)
    # Notification delivery is not implemented; the invitee sees it in their pending list.
    return invitation


def list_pending_invitations(user):
    return invitation_repository.find_pending_for_user(user.id)


def respond_invitation(user, invitation_id, action):
    if not isinstance(action, str) or action not in ACTIONS:
        raise ValidationError("Action must be 'ACCEPT' or 'REJECT'.")

    invitation = invitation_repository.find_by_id(invitation_id)
    if not invitation:
        raise NotFoundError("Invitation not found.")

    if invitation.invited_user_id != user.id:
        raise AuthorizationError("You are not authorized to respond to this invitation.")

    if invitation.status != InvitationStatus.PENDING:
        raise ConflictError(f"This invitation is no longer pending (current status: {invitation.status}).")

    new_status = ACTIONS[action]
    with atomic():
        if not invitation_repository.resolve_pending(invitation.id, new_status):
            raise ConflictError("This invitation is no longer pending.")
        if new_status == InvitationStatus.ACCEPTED:
            group = group_repository.find_by_id(invitation.group_id)
            if not group:
                raise NotFoundError("Failed to accept invitation. The group may no longer exist.")
            group_repository.add_member(group, user)

    logger.info("User %s %s invitation %s to group %s",
                user.id, new_status.lower(), invitation.id, invitation.group_id)
    return invitation_repository.find_by_id(invitation.id)
