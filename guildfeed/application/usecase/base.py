"""Base use case."""

from abc import ABC, abstractmethod
from typing import Any

from guildfeed.domain.error import ForbiddenError, UnauthorizedError
from guildfeed.domain.model import FeedContext
from guildfeed.domain.value import UserId


class BaseUseCase(ABC):
    """Base use case for orchestrating domain services."""

    @abstractmethod
    async def execute(self, request: Any) -> Any:
        pass

    @staticmethod
    def require_user(context: FeedContext, action: str) -> UserId:
        """Return the caller's user ID, rejecting anonymous callers.

        Raises:
            UnauthorizedError: If the caller is not authenticated
        """
        if not context.is_authenticated:
            raise UnauthorizedError(action)
        return context.user_id

    @staticmethod
    def require_capability(context: FeedContext, allowed: bool, action: str) -> None:
        """Reject callers whose capability set does not allow the action.

        Raises:
            ForbiddenError: If ``allowed`` is False
        """
        if not allowed:
            raise ForbiddenError(action, context.user_id)
