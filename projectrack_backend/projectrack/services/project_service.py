import datetime
import logging

from ..errors import AuthorizationError, ConflictError, NotFoundError, ValidationError
from ..models.project_model import ProjectStatus
from ..repositories import group_repository, project_repository, user_repository
from ..repositories.transaction import atomic
from . import permissions
from .inputs import text


logger = logging.getLogger(__name__)


def as_id(value, label):
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{label} must be a numeric id.")


def compute_progress(milestones):
    """Percentage of completed milestones, rounded half up; 0 for a project without milestones."""
    total = len(milestones)
    if total == 0:
        return 0
    completed = sum(1 for milestone in milestones if milestone.is_completed)
    return (200 * completed + total) // (2 * total)


def propose_project(user, data):
    group_id = data.get('group_id')
    title = text(data.get('title'), "Title")
    description = text(data.get('description'), "Description")
    supervisor_id = data.get('supervisor_id')

    if not group_id or not title or not description or not supervisor_id:
        raise ValidationError("Group ID, title, description, and supervisor ID are required.")

    group = group_repository.find_by_id(as_id(group_id, "Group ID"))
    if not group:
        raise NotFoundError("Group not found.")

    if not permissions.is_group_leader(user, group):
        raise AuthorizationError("Only the group leader can propose a project.")

    if not permissions.is_student(user):
        raise AuthorizationError("Only students (group leaders) can propose projects.")

    # One project per group for the lifetime of the record, whatever its status.
    existing = project_repository.find_by_group(group.id)
    if existing:
        raise ConflictError(
            f"A project already exists for this group (Status: {existing.status}). Cannot create a new one."
        )

    supervisor = user_repository.find_by_id(as_id(supervisor_id, "Supervisor ID"))
    if not supervisor:
        raise NotFoundError("Selected supervisor not found.")
    if not permissions.is_teacher(supervisor):
        raise ValidationError("Selected supervisor must be a teacher.")

    with atomic():
        project = project_repository.create(
            title=title,
            description=description,
            group_id=group.id,
            proposed_by_id=user.id,
            supervisor_id=supervisor.id,
            status=ProjectStatus.PROPOSED,
        )

    logger.info("Project %s proposed by user %s for group %s, supervisor %s",
                project.id, user.id, group.id, supervisor.id)
    return project


def list_proposals_for_supervisor(user):
    if not permissions.is_teacher(user):
        raise AuthorizationError("Only teachers can view project proposals.")
    return project_repository.find_by_supervisor(user.id)


def decide_project(user, project_id, status, rejection_reason=None):
    if not isinstance(status, str) or status not in ProjectStatus.DECISIONS:
        raise ValidationError("Status must be 'APPROVED' or 'REJECTED'.")

    if not permissions.is_teacher(user):
        raise AuthorizationError("Only teachers can approve or reject projects.")

    project = project_repository.find_by_id(project_id)
    if not project:
        raise NotFoundError("Project not found.")

    if not permissions.is_project_supervisor(user, project):
        raise AuthorizationError("You are not assigned to supervise this project.")

    if project.status != ProjectStatus.PROPOSED:
        raise ConflictError(
            f"Project is not in 'PROPOSED' state (current status: {project.status}). Cannot change status."
        )

    changes = {'status': status, 'rejection_reason': None}
    if status == ProjectStatus.REJECTED:
        if isinstance(rejection_reason, str) and rejection_reason.strip():
            changes['rejection_reason'] = rejection_reason.strip()
    else:
        # APPROVED is workable straight away; nothing moves it to ACTIVE.
        changes['approved_at'] = datetime.datetime.utcnow()

    with atomic():
        project_repository.update(project, changes)

    logger.info("Project %s %s by supervisor %s", project.id, status.lower(), user.id)
    return project


def get_project_detail(user, project_id):
    project = project_repository.find_by_id(project_id)
    if not project:
        raise NotFoundError("Project not found.")

    if not permissions.is_project_participant(user, project):
        raise AuthorizationError("You are not authorized to view this project.")

    return project, compute_progress(project.milestones)
