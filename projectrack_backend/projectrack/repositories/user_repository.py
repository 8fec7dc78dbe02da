from .. import db
from ..models.user_model import User


def find_by_id(user_id):
    return db.session.get(User, user_id)


def find_by_email(email):
    return User.query.filter_by(email=email).first()


def find_by_roll_number(roll_number, exclude_user_id=None):
    query = User.query.filter_by(roll_number=roll_number)
    if exclude_user_id is not None:
        query = query.filter(User.id != exclude_user_id)
    return query.first()


def create(**fields):
    user = User(**fields)
    db.session.add(user)
    db.session.flush()
    return user


def update(user, changes):
    for field, value in changes.items():
        setattr(user, field, value)
    db.session.flush()
    return user
