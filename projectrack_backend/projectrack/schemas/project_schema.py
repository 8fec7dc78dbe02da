from marshmallow import fields

from .. import ma
from .group_schema import GroupSchema
from .user_schema import UserSummarySchema


class ProjectSchema(ma.Schema):
    id = fields.Integer()
    title = fields.String()
    description = fields.String()
    group_id = fields.Integer()
    proposed_by_id = fields.Integer()
    supervisor_id = fields.Integer()
    status = fields.String()
    rejection_reason = fields.String(allow_none=True)
    approved_at = fields.DateTime(allow_none=True)
    created_at = fields.DateTime()
    updated_at = fields.DateTime()
    group = fields.Nested(GroupSchema, only=('id', 'name', 'leader', 'members'))
    proposed_by = fields.Nested(UserSummarySchema)
    supervisor = fields.Nested(UserSummarySchema)


project_schema = ProjectSchema()
projects_schema = ProjectSchema(many=True)
