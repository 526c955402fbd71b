"""Domain layer errors."""


class DomainError(Exception):
    """Base domain error."""

    pass


class ValidationError(DomainError):
    """Field length or shape violation."""

    pass


class UnauthorizedError(DomainError):
    """Raised when a mutation is attempted without an authenticated principal."""

    def __init__(self, action: str):
        self.action = action
        super().__init__(f"Authentication required to {action}")


class ForbiddenError(DomainError):
    """Raised when the caller lacks the capability an action requires."""

    def __init__(self, action: str, user_id: str | None = None):
        self.action = action
        self.user_id = user_id
        super().__init__(f"User {user_id} is not allowed to {action}")


class NotFoundError(DomainError):
    """Raised when a requested resource is not found."""

    def __init__(self, resource: str, identifier: str):
        self.resource = resource
        self.identifier = identifier
        super().__init__(f"{resource} not found: {identifier}")


class PostClosedError(DomainError):
    """Raised when replying to a closed post."""

    def __init__(self, post_id: str):
        self.post_id = post_id
        super().__init__(f"Post {post_id} is closed to new replies")


class DepthExceededError(DomainError):
    """Raised when a reply would nest deeper than the configured maximum."""

    def __init__(self, parent_reply_id: str, max_depth: int):
        self.parent_reply_id = parent_reply_id
        self.max_depth = max_depth
        super().__init__(
            f"Cannot reply to {parent_reply_id}: maximum nesting depth is {max_depth}"
        )


class AlreadyVotedError(DomainError):
    """Raised when a user votes twice on the same poll."""

    def __init__(self, poll_id: str, user_id: str):
        self.poll_id = poll_id
        self.user_id = user_id
        super().__init__(f"User {user_id} already voted on poll {poll_id}")


class PollClosedError(DomainError):
    """Raised when voting on an expired poll."""

    def __init__(self, poll_id: str):
        self.poll_id = poll_id
        super().__init__(f"Poll {poll_id} has expired")


class ConflictError(DomainError):
    """Raised when a concurrent modification won the race; the caller may retry."""

    def __init__(self, resource: str, identifier: str):
        self.resource = resource
        self.identifier = identifier
        super().__init__(f"{resource} {identifier} was modified concurrently")
