"""Per-request caller context for the guild feed."""

from typing import Optional

from guildfeed.domain.model.author import Author
from guildfeed.domain.model.common import DomainModel
from guildfeed.domain.value import FeedPrivileges, GuildId, UserId


class FeedContext(DomainModel):
    """Who is calling, in which guild, and what they may do there.

    Resolved once at the request boundary and passed into every use case;
    nothing downstream re-derives membership or roles.
    """

    guild_id: GuildId
    user_id: Optional[UserId] = None
    is_member: bool = False
    privileges: FeedPrivileges = FeedPrivileges()
    author: Optional[Author] = None

    @property
    def is_authenticated(self) -> bool:
        return self.user_id is not None
