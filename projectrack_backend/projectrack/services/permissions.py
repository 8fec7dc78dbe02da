"""
Authorization predicates.

Pure checks over entities that are already loaded; none of them touch the
session. Workflows call them before mutating anything and raise an
AuthorizationError when they fail.
"""
from ..models.project_model import ProjectStatus
from ..models.user_model import Role


def is_student(user):
    return user is not None and user.role == Role.STUDENT


def is_teacher(user):
    return user is not None and user.role == Role.TEACHER


def is_group_leader(user, group):
    return user is not None and group is not None and group.leader_id == user.id


def is_group_member(user, group):
    # The leader is always a member, but leadership alone is enough.
    if user is None or group is None:
        return False
    return is_group_leader(user, group) or any(member.id == user.id for member in group.members)


def is_project_member(user, project):
    """Member or leader of the group that owns the project."""
    return project is not None and is_group_member(user, project.group)


def is_project_supervisor(user, project):
    return user is not None and project is not None and project.supervisor_id == user.id


def is_project_participant(user, project):
    return is_project_member(user, project) or is_project_supervisor(user, project)


def is_project_workable(project):
    return project is not None and project.status in ProjectStatus.WORKABLE
