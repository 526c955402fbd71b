"""Unit tests for capability resolution."""

import pytest

from guildfeed.domain.service import resolve_privileges
from guildfeed.domain.value import ExpertRole, FeedPrivileges, UserType


class TestResolvePrivileges:
    """Tests for the guild role ladder."""

    def test_non_member_gets_nothing(self):
        """Outsiders get an empty capability set whatever their rank."""
        privileges = resolve_privileges(UserType.EXPERT, ExpertRole.MASTER, is_member=False)

        assert privileges == FeedPrivileges()

    def test_anonymous_gets_nothing(self):
        """A caller without a user type has no capabilities."""
        assert resolve_privileges(None, None, is_member=True) == FeedPrivileges()

    def test_candidate_may_only_reply(self):
        """Candidates can join discussions but not start them."""
        privileges = resolve_privileges(UserType.CANDIDATE, None, is_member=True)

        assert privileges.can_reply is True
        assert privileges.can_post is False
        assert privileges.is_moderator is False

    def test_company_gets_nothing(self):
        """Company accounts are read-only in guild feeds."""
        privileges = resolve_privileges(UserType.COMPANY, None, is_member=True)

        assert privileges == FeedPrivileges()

    def test_recruit_replies_but_cannot_post(self):
        privileges = resolve_privileges(UserType.EXPERT, ExpertRole.RECRUIT, is_member=True)

        assert privileges.can_reply is True
        assert privileges.can_post is False

    def test_craftsman_marks_duplicates_but_does_not_moderate(self):
        """Craftsmen may mark duplicates and edit others, but not pin or close."""
        privileges = resolve_privileges(UserType.EXPERT, ExpertRole.CRAFTSMAN, is_member=True)

        assert privileges.can_post is True
        assert privileges.can_mark_duplicate is True
        assert privileges.can_edit_others is True
        assert privileges.can_pin_unpin is False
        assert privileges.is_moderator is False

    def test_officer_moderates_but_cannot_delete(self):
        privileges = resolve_privileges(UserType.EXPERT, ExpertRole.OFFICER, is_member=True)

        assert privileges.can_pin_unpin is True
        assert privileges.can_close_reopen is True
        assert privileges.can_accept_on_behalf is True
        assert privileges.can_delete is False
        assert privileges.is_moderator is True

    def test_master_holds_every_capability(self):
        privileges = resolve_privileges(UserType.EXPERT, ExpertRole.MASTER, is_member=True)

        assert all(privileges.model_dump().values())

    @pytest.mark.parametrize(
        "lower,higher",
        [
            (ExpertRole.RECRUIT, ExpertRole.APPRENTICE),
            (ExpertRole.APPRENTICE, ExpertRole.CRAFTSMAN),
            (ExpertRole.CRAFTSMAN, ExpertRole.OFFICER),
            (ExpertRole.OFFICER, ExpertRole.MASTER),
        ],
    )
    def test_higher_rank_includes_lower_rank(self, lower, higher):
        """Every capability of a rank is held by the ranks above it."""
        low = resolve_privileges(UserType.EXPERT, lower, is_member=True).model_dump()
        high = resolve_privileges(UserType.EXPERT, higher, is_member=True).model_dump()

        assert all(high[name] for name, granted in low.items() if granted)
