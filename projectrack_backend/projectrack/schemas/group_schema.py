from marshmallow import fields

from .. import ma
from .user_schema import MemberSchema, UserSummarySchema


class GroupSchema(ma.Schema):
    id = fields.Integer()
    name = fields.String()
    leader_id = fields.Integer()
    leader = fields.Nested(UserSummarySchema)
    members = fields.List(fields.Nested(MemberSchema))
    member_count = fields.Method('count_members')
    created_at = fields.DateTime()
    updated_at = fields.DateTime()

    def count_members(self, group):
        return len(group.members)


class GroupSummarySchema(ma.Schema):
    id = fields.Integer()
    name = fields.String()
    leader = fields.Nested(UserSummarySchema)


class InvitationSchema(ma.Schema):
    id = fields.Integer()
    group_id = fields.Integer()
    invited_user_id = fields.Integer()
    inviter_id = fields.Integer()
    status = fields.String()
    group = fields.Nested(GroupSummarySchema)
    invited_user = fields.Nested(UserSummarySchema)
    inviter = fields.Nested(UserSummarySchema)
    created_at = fields.DateTime()
    updated_at = fields.DateTime()


group_schema = GroupSchema()
groups_schema = GroupSchema(many=True)
invitation_schema = InvitationSchema()
invitations_schema = InvitationSchema(many=True)
