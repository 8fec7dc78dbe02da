import datetime
import logging

from ..errors import AuthorizationError, ConflictError, NotFoundError, ValidationError
from ..repositories import milestone_repository, project_repository
from ..repositories.transaction import atomic
from . import permissions
from .inputs import text


logger = logging.getLogger(__name__)


def parse_due_date(value):
    """None or "" clears the due date; anything else must be an ISO-8601 date or datetime."""
    if value is None or value == '':
        return None
    try:
        parsed = datetime.datetime.fromisoformat(value)
    except (TypeError, ValueError):
        raise ValidationError("Invalid due date format. Please use a valid date string or null.")
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(datetime.timezone.utc).replace(tzinfo=None)
    return parsed


def ensure_workable(project, action):
    if not permissions.is_project_workable(project):
        raise ConflictError(
            f"Milestones can only be {action} for approved/active projects. Current project status: {project.status}"
        )


def add_milestone(user, project_id, data):
    title = data.get('title')
    if not isinstance(title, str) or not title.strip():
        raise ValidationError("Milestone title is required.")

    project = project_repository.find_by_id(project_id)
    if not project:
        raise NotFoundError("Project not found.")

    # Supervisors follow progress but do not edit the plan.
    if not permissions.is_project_member(user, project):
        raise AuthorizationError("You are not authorized to add milestones to this project.")

    ensure_workable(project, "added")

    due_date = parse_due_date(data.get('due_date'))

    with atomic():
        milestone = milestone_repository.create(
            project_id=project.id,
            title=title.strip(),
            description=text(data.get('description'), "Description"),
            due_date=due_date,
            is_completed=False,
            last_updated_by_user_id=user.id,
        )

    logger.info("Milestone %s added to project %s by user %s", milestone.id, project.id, user.id)
    return milestone


def update_milestone(user, milestone_id, data):
    milestone = milestone_repository.find_by_id(milestone_id)
    if not milestone:
        raise NotFoundError("Milestone not found.")

    project = milestone.project
    if not permissions.is_project_member(user, project):
        raise AuthorizationError("You are not authorized to update this milestone.")

    ensure_workable(project, "updated")

    changes = {}
    if 'title' in data:
        title = text(data['title'], "Title")
        # A blank title keeps the current one.
        changes['title'] = title if isinstance(title, str) and title.strip() else milestone.title
    if 'description' in data:
        changes['description'] = text(data['description'], "Description")
    if 'due_date' in data:
        changes['due_date'] = parse_due_date(data['due_date'])
    if isinstance(data.get('is_completed'), bool):
        changes['is_completed'] = data['is_completed']

    if not changes:
        raise ValidationError("No valid fields provided for update.")

    changes['last_updated_by_user_id'] = user.id

    with atomic():
        milestone_repository.update(milestone, changes)

    logger.info("Milestone %s updated by user %s", milestone.id, user.id)
    return milestone


def list_milestones(user, project_id):
    project = project_repository.find_by_id(project_id)
    if not project:
        raise NotFoundError("Project not found.")

    if not permissions.is_project_member(user, project):
        raise AuthorizationError("You are not authorized to view milestones for this project.")

    return milestone_repository.find_by_project(project.id)
