from datetime import datetime

from .. import db


class InvitationStatus:
    PENDING = 'PENDING'
    ACCEPTED = 'ACCEPTED'
    REJECTED = 'REJECTED'


class GroupInvitation(db.Model):
    __tablename__ = 'group_invitations'

    id = db.Column(db.Integer, primary_key=True)
    group_id = db.Column(db.Integer, db.ForeignKey('groups.id'), nullable=False)
    invited_user_id = db.Column(db.Integer, db.ForeignKey('users.id'), nullable=False)
    inviter_id = db.Column(db.Integer, db.ForeignKey('users.id'), nullable=False)
    status = db.Column(db.String(20), nullable=False, default=InvitationStatus.PENDING)
    created_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow)

    group = db.relationship('Group', backref='invitations')
    invited_user = db.relationship('User', foreign_keys=[invited_user_id])
    inviter = db.relationship('User', foreign_keys=[inviter_id])

    __table_args__ = (db.UniqueConstraint('group_id', 'invited_user_id', name='unique_invitation_per_group_user'),)
