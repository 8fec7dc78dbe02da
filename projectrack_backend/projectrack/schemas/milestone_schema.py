from marshmallow import fields

from .. import ma


class MilestoneSchema(ma.Schema):
    id = fields.Integer()
    project_id = fields.Integer()
    title = fields.String()
    description = fields.String(allow_none=True)
    due_date = fields.DateTime(allow_none=True)
    is_completed = fields.Boolean()
    last_updated_by_user_id = fields.Integer(allow_none=True)
    created_at = fields.DateTime()
    updated_at = fields.DateTime()


milestone_schema = MilestoneSchema()
milestones_schema = MilestoneSchema(many=True)
