from marshmallow import fields

from .. import ma
from .user_schema import UserSummarySchema


class SubmissionSchema(ma.Schema):
    id = fields.Integer()
    project_id = fields.Integer()
    uploader_id = fields.Integer()
    file_name = fields.String()
    file_path = fields.String()
    file_type = fields.String()
    description = fields.String(allow_none=True)
    created_at = fields.DateTime()
    uploader = fields.Nested(UserSummarySchema)


submission_schema = SubmissionSchema()
submissions_schema = SubmissionSchema(many=True)
