"""Capability resolution for the guild feed.

This is the only place where user type, expert role and membership are
turned into a ``FeedPrivileges`` set. Everything downstream checks the
capability flags and never branches on roles.
"""

from guildfeed.domain.value import ExpertRole, FeedPrivileges, UserType

NO_PRIVILEGES = FeedPrivileges()


def resolve_privileges(
    user_type: UserType | None,
    expert_role: ExpertRole | None,
    is_member: bool,
) -> FeedPrivileges:
    """Compute the caller's capability set within one guild.

    Ladder for experts (each rank includes everything below it):
    recruit may reply, apprentice may post, craftsman may edit others and
    mark duplicates, officer may pin, close and accept on behalf of the
    author, master may delete. Candidates may only reply; companies and
    non-members get nothing.

    Args:
        user_type: Kind of account (None for anonymous callers)
        expert_role: Expert rank in the guild (ignored for non-experts)
        is_member: Whether the user belongs to the guild

    Returns:
        The resolved capability set
    """
    if not is_member or user_type is None:
        return NO_PRIVILEGES

    if user_type == UserType.CANDIDATE:
        return FeedPrivileges(can_reply=True)

    if user_type != UserType.EXPERT or expert_role is None:
        return NO_PRIVILEGES

    rank = expert_role.rank
    return FeedPrivileges(
        can_reply=True,
        can_post=rank >= ExpertRole.APPRENTICE.rank,
        can_edit_others=rank >= ExpertRole.CRAFTSMAN.rank,
        can_mark_duplicate=rank >= ExpertRole.CRAFTSMAN.rank,
        can_pin_unpin=rank >= ExpertRole.OFFICER.rank,
        can_close_reopen=rank >= ExpertRole.OFFICER.rank,
        can_accept_on_behalf=rank >= ExpertRole.OFFICER.rank,
        can_delete=rank >= ExpertRole.MASTER.rank,
    )
