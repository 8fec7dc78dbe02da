from .. import db
from ..models.milestone_model import Milestone


def find_by_id(milestone_id):
    return db.session.get(Milestone, milestone_id)


def find_by_project(project_id):
    return Milestone.query.filter_by(project_id=project_id).order_by(
        Milestone.created_at.asc(), Milestone.id.asc()
    ).all()


def create(**fields):
    milestone = Milestone(**fields)
    db.session.add(milestone)
    db.session.flush()
    return milestone


def update(milestone, changes):
    for field, value in changes.items():
        setattr(milestone, field, value)
    db.session.flush()
    return milestone
