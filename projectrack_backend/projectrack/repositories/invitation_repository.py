from .. import db
from ..models.invitation_model import GroupInvitation, InvitationStatus


def find_by_id(invitation_id):
    return db.session.get(GroupInvitation, invitation_id)


def find_for_pair(group_id, invited_user_id):
    return GroupInvitation.query.filter_by(group_id=group_id, invited_user_id=invited_user_id).first()


def find_pending_for_user(user_id):
    return GroupInvitation.query.filter_by(
        invited_user_id=user_id, status=InvitationStatus.PENDING
    ).order_by(GroupInvitation.created_at.desc(), GroupInvitation.id.desc()).all()


def create(group_id, invited_user_id, inviter_id):
    invitation = GroupInvitation(
        group_id=group_id,
        invited_user_id=invited_user_id,
        inviter_id=inviter_id,
        status=InvitationStatus.PENDING,
    )
    db.session.add(invitation)
    db.session.flush()
    return invitation


def resolve_pending(invitation_id, new_status):
    """
    Moves a PENDING invitation to new_status with a single guarded UPDATE.

    Returns False when no PENDING row matched, i.e. the invitation was
    answered in the meantime.
    """
    updated = GroupInvitation.query.filter_by(
        id=invitation_id, status=InvitationStatus.PENDING
    ).update({'status': new_status}, synchronize_session=False)
    return updated == 1
