from .. import db
from ..models.submission_model import Submission


def find_by_project(project_id):
    return Submission.query.filter_by(project_id=project_id).order_by(
        Submission.created_at.desc(), Submission.id.desc()
    ).all()


def create(**fields):
    submission = Submission(**fields)
    db.session.add(submission)
    db.session.flush()
    return submission
