from sqlalchemy import or_

from .. import db
from ..models.group_model import Group
from ..models.user_model import User


def find_by_id(group_id):
    return db.session.get(Group, group_id)


def find_by_name(name):
    return Group.query.filter_by(name=name).first()


def find_for_user(user_id):
    """Groups the user leads or belongs to, newest first. Each group appears once."""
    return Group.query.filter(
        or_(Group.leader_id == user_id, Group.members.any(User.id == user_id))
    ).order_by(Group.created_at.desc(), Group.id.desc()).all()


def create(name, leader):
    group = Group(name=name, leader_id=leader.id)
    group.members.append(leader)
    db.session.add(group)
    db.session.flush()
    return group


def add_member(group, user):
    if user not in group.members:
        group.members.append(user)
    db.session.flush()
    return group
