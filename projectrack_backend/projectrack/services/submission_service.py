import logging
import os

from flask import current_app

from ..errors import AuthorizationError, ConflictError, NotFoundError, ValidationError
from ..repositories import project_repository, submission_repository
from ..repositories.transaction import atomic
from ..storage import stored_upload, too_large_message
from . import permissions


logger = logging.getLogger(__name__)

ALLOWED_MIME_TYPE = 'application/pdf'


def submit_document(user, project_id, file, description=None):
    """
    Stores an uploaded PDF and records it against the project.

    The file hits the disk before the project is checked, so every failure
    after that point removes it again (see storage.stored_upload).
    """
    if file is None or not file.filename:
        raise ValidationError("No file uploaded or file type not allowed.")

    if file.mimetype != ALLOWED_MIME_TYPE:
        raise ValidationError("Only PDF files are allowed!")

    limit = current_app.config['MAX_UPLOAD_SIZE']

    with stored_upload(file, current_app.config['UPLOAD_FOLDER']) as path:
        if os.path.getsize(path) > limit:
            raise ValidationError(too_large_message(limit))

        project = project_repository.find_by_id(project_id)
        if not project:
            raise NotFoundError("Project not found.")

        if not permissions.is_project_member(user, project):
            raise AuthorizationError("You are not a member of the group that owns this project.")

        if not permissions.is_project_workable(project):
            raise ConflictError(
                f"Documents can only be submitted to approved/active projects. Current status: {project.status}"
            )

        with atomic():
            submission = submission_repository.create(
                project_id=project.id,
                uploader_id=user.id,
                file_name=file.filename,
                file_path=path,
                file_type=file.mimetype,
                description=description or None,
            )

    logger.info("Submission %s stored for project %s by user %s", submission.id, project.id, user.id)
    return submission


def list_submissions(user, project_id):
    project = project_repository.find_by_id(project_id)
    if not project:
        raise NotFoundError("Project not found.")

    if not permissions.is_project_participant(user, project):
        raise AuthorizationError("You are not authorized to view submissions for this project.")

    return submission_repository.find_by_project(project.id)
