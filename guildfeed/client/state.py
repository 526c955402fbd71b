"""Client-side state helpers for optimistic votes and out-of-order responses."""

import itertools
from dataclasses import dataclass
from typing import Hashable, Optional


@dataclass(frozen=True)
class VoteToken:
    """One optimistic toggle that has not been settled yet."""

    sequence: int


class OptimisticVote:
    """Vote state of one post or reply as shown in the UI.

    The displayed state is the last server-confirmed state with every
    pending toggle replayed on top of it, in the order they were issued.
    ``apply`` adds a toggle and returns its token. The token is settled with
    ``confirm`` when the server answers, or ``rollback`` when the request
    fails. Rolling back drops only that toggle, so a failure does not undo a
    later toggle that is still in flight.
    """

    def __init__(self, voted: bool, count: Optional[int]) -> None:
        self._confirmed_voted = voted
        self._confirmed_count = count
        self._sequence = itertools.count(1)
        self._pending: list[VoteToken] = []
        self._render()

    def _render(self) -> None:
        voted, count = self._confirmed_voted, self._confirmed_count
        for _ in self._pending:
            delta = -1 if voted else 1
            voted = not voted
            if count is not None:
                count = max(count + delta, 0)
        self.voted = voted
        self.count = count

    def apply(self) -> VoteToken:
        """Toggle the vote locally.

        Returns:
            Token identifying this toggle
        """
        token = VoteToken(sequence=next(self._sequence))
        self._pending.append(token)
        self._render()
        return token

    def confirm(self, token: VoteToken, voted: bool, new_count: Optional[int]) -> None:
        """Settle a toggle with the server's answer.

        The answer already reflects toggles issued before ``token``, so those
        are dropped. Toggles issued after it are replayed on top of the
        server state.
        """
        if token not in self._pending:
            return
        self._confirmed_voted = voted
        self._confirmed_count = new_count
        self._pending = [t for t in self._pending if t.sequence > token.sequence]
        self._render()

    def rollback(self, token: VoteToken) -> None:
        """Drop ``token``'s toggle and replay the ones still pending."""
        if token not in self._pending:
            return
        self._pending.remove(token)
        self._render()

    @property
    def in_flight(self) -> int:
        """Number of toggles awaiting a server answer."""
        return len(self._pending)


@dataclass(frozen=True)
class RequestTicket:
    """Issued when a request starts; checked when its response arrives."""

    key: Hashable
    sequence: int


class LatestRequestGuard:
    """Drops responses that were overtaken by a newer request for the same key.

    A feed view that refetches on every sort or filter change applies only
    the response of the last request it started.
    """

    def __init__(self) -> None:
        self._sequence = itertools.count(1)
        self._latest: dict[Hashable, int] = {}

    def begin(self, key: Hashable) -> RequestTicket:
        """Start a request for ``key``, superseding earlier ones."""
        ticket = RequestTicket(key=key, sequence=next(self._sequence))
        self._latest[key] = ticket.sequence
        return ticket

    def is_current(self, ticket: RequestTicket) -> bool:
        """Whether the ticket's response may still be applied."""
        return self._latest.get(ticket.key) == ticket.sequence
