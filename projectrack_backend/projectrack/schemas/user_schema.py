from marshmallow import fields

from .. import ma


class UserSchema(ma.Schema):
    """Public profile. The password hash is never declared, so it is never dumped."""
    id = fields.Integer()
    email = fields.String()
    name = fields.String(allow_none=True)
    role = fields.String()
    roll_number = fields.String(allow_none=True)
    program = fields.String(allow_none=True)
    year = fields.Integer(allow_none=True)
    department = fields.String(allow_none=True)
    areas_of_expertise = fields.List(fields.String(), allow_none=True)
    created_at = fields.DateTime()
    updated_at = fields.DateTime()


class UserSummarySchema(ma.Schema):
    id = fields.Integer()
    name = fields.String(allow_none=True)
    email = fields.String()


class MemberSchema(UserSummarySchema):
    roll_number = fields.String(allow_none=True)


user_schema = UserSchema()
user_summary_schema = UserSummarySchema()
