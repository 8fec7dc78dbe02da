from datetime import datetime
from .. import db


class ProjectStatus:
    PROPOSED = 'PROPOSED'
    APPROVED = 'APPROVED'
    # Valid stored value; no workflow sets it.
    ACTIVE = 'ACTIVE'
    REJECTED = 'REJECTED'
    COMPLETED = 'COMPLETED'

    WORKABLE = (APPROVED, ACTIVE)
    DECISIONS = (APPROVED, REJECTED)


class Project(db.Model):
    __tablename__ = 'projects'

    id = db.Column(db.Integer, primary_key=True)
    title = db.Column(db.String(200), nullable=False)
    description = db.Column(db.Text, nullable=False)
    group_id = db.Column(db.Integer, db.ForeignKey('groups.id'), unique=True, nullable=False)
    proposed_by_id = db.Column(db.Integer, db.ForeignKey('users.id'), nullable=False)
    supervisor_id = db.Column(db.Integer, db.ForeignKey('users.id'), nullable=False)
    status = db.Column(db.String(20), nullable=False, default=ProjectStatus.PROPOSED)
    rejection_reason = db.Column(db.Text, nullable=True)
    approved_at = db.Column(db.DateTime, nullable=True)
    created_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow)

    group = db.relationship('Group', back_populates='project')
    proposed_by = db.relationship('User', foreign_keys=[proposed_by_id])
    supervisor = db.relationship('User', foreign_keys=[supervisor_id])
    milestones = db.relationship('Milestone', backref='project', lazy=True, order_by='Milestone.id')
    submissions = db.relationship('Submission', backref='project', lazy=True)
