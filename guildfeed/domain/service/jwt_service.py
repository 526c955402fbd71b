"""JWT token domain service."""

import logfire

from guildfeed.config import AuthSettings
from guildfeed.util.jwt import JWTError, TokenPayload, create_token, verify_token

from .base import Service


class JWTService(Service):
    """Domain service for JWT token operations."""

    def __init__(self, auth_settings: AuthSettings) -> None:
        """Initialize JWT service.

        Args:
            auth_settings: Authentication settings
        """
        self.auth_settings = auth_settings

    def create_token(self, user_id: str) -> str:
        """Create JWT token for user.

        Args:
            user_id: User ID

        Returns:
            JWT token string
        """
        return create_token(user_id, self.auth_settings)

    def verify_token(self, token: str) -> TokenPayload:
        """Verify JWT token and extract payload.

        Raises:
            JWTError: If token is invalid or expired
        """
        with logfire.span("jwt_service.verify_token"):
            return verify_token(token, self.auth_settings)

    def get_user_id_from_token(self, token: str | None) -> str | None:
        """Extract user ID from JWT token without raising exceptions.

        Args:
            token: JWT token string (optional)

        Returns:
            User ID if token is valid, None if token is missing or invalid
        """
        if not token:
            return None

        try:
            return self.verify_token(token).user_id
        except JWTError as e:
            # Invalid or expired token, treat as unauthenticated
            logfire.debug("JWT verification failed, treating as unauthenticated", error=str(e))
            return None
