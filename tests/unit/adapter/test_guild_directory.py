"""Unit tests for the guild directory adapter."""

import pytest

from guildfeed.adapter.guild.client import MockGuildDirectoryClient, parse_membership
from guildfeed.domain.service import MembershipService
from guildfeed.domain.value import ExpertRole, GuildId, Membership, UserId, UserType
from tests.conftest import GUILD


class TestParseMembership:
    """Tests for parse_membership."""

    def test_full_payload(self):
        membership = parse_membership(
            {
                "isMember": True,
                "userType": "expert",
                "role": "officer",
                "displayName": "Ada",
                "reputation": 42,
            }
        )

        assert membership.is_member is True
        assert membership.user_type == UserType.EXPERT
        assert membership.expert_role == ExpertRole.OFFICER
        assert membership.display_name == "Ada"
        assert membership.reputation == 42

    def test_unknown_values_are_dropped(self):
        membership = parse_membership({"isMember": True, "userType": "alien", "role": "king"})

        assert membership.user_type is None
        assert membership.expert_role is None
        assert membership.reputation == 0

    def test_empty_payload_is_outsider(self):
        assert parse_membership({}).is_member is False


class TestMembershipService:
    """Tests for resolving caller contexts from the directory."""

    @pytest.mark.asyncio
    async def test_member_context(self):
        directory = MockGuildDirectoryClient()
        directory.set_membership(
            GUILD,
            UserId("u1"),
            Membership(
                is_member=True,
                user_type=UserType.EXPERT,
                expert_role=ExpertRole.CRAFTSMAN,
                display_name="Ada",
            ),
        )
        service = MembershipService(directory)

        context = await service.resolve_context(GUILD, UserId("u1"))

        assert context.is_member is True
        assert context.privileges.can_mark_duplicate is True
        assert context.privileges.can_pin_unpin is False
        assert context.author.display_name.root == "Ada"

    @pytest.mark.asyncio
    async def test_unknown_user_is_outsider(self):
        service = MembershipService(MockGuildDirectoryClient())

        context = await service.resolve_context(GuildId("guild-9"), UserId("u1"))

        assert context.is_member is False
        assert context.privileges.can_reply is False
        assert context.author.display_name.root == "u1"

    @pytest.mark.asyncio
    async def test_blank_display_name_falls_back_to_user_id(self):
        directory = MockGuildDirectoryClient()
        directory.set_membership(
            GUILD,
            UserId("u1"),
            Membership(is_member=True, user_type=UserType.CANDIDATE, display_name="   "),
        )
        service = MembershipService(directory)

        context = await service.resolve_context(GUILD, UserId("u1"))

        assert context.author.display_name.root == "u1"

    @pytest.mark.asyncio
    async def test_anonymous_context(self):
        service = MembershipService(MockGuildDirectoryClient())

        context = await service.resolve_context(GUILD, None)

        assert context.user_id is None
        assert context.author is None
