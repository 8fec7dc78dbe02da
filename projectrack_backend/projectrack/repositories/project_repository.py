from .. import db
from ..models.project_model import Project


def find_by_id(project_id):
    return db.session.get(Project, project_id)


def find_by_group(group_id):
    return Project.query.filter_by(group_id=group_id).first()


def find_by_supervisor(supervisor_id):
    return Project.query.filter_by(supervisor_id=supervisor_id).order_by(
        Project.created_at.desc(), Project.id.desc()
    ).all()


def create(**fields):
    project = Project(**fields)
    db.session.add(project)
    db.session.flush()
    return project


def update(project, changes):
    for field, value in changes.items():
        setattr(project, field, value)
    db.session.flush()
    return project
