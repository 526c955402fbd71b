"""Test harness for unit, integration and E2E tests.

Settings are loaded from environment variables (configure via .env or export).
"""

from dataclasses import dataclass

import pytest_asyncio
from fastapi.testclient import TestClient

from guildfeed.adapter.guild import GuildDirectoryClient
from guildfeed.config import Settings
from guildfeed.domain.value import ExpertRole, GuildId, Membership, UserId, UserType
from guildfeed.util.di import Component
from guildfeed.util.jwt import create_token
from tests.di import build_test_container


def create_env_fixture(unmock: set[Component] | None = None):
    """Factory for creating test environment fixtures.

    Creates a pytest fixture that builds a fresh test container with the
    specified unmocking and yields a request-scoped container for service
    access.

    Args:
        unmock: Components to use real implementations for

    Returns:
        Pytest fixture function that yields AsyncContainer

    Usage:
        # Unit tests - everything mocked
        unit_env = create_env_fixture()

        # Integration tests - real persistence, assumes postgres running
        integration_env = create_env_fixture(unmock={"persistence"})

        @pytest.mark.asyncio
        async def test_create_post(unit_env):
            post_service = await unit_env.get(PostService)
            ...
    """

    @pytest_asyncio.fixture
    async def _test_environment():
        container = build_test_container(unmock=unmock or set())

        async with container() as request_container:
            yield request_container

        await container.close()

    return _test_environment


@dataclass
class FeedHarness:
    """API test client plus the in-memory guild directory behind it."""

    client: TestClient
    directory: GuildDirectoryClient
    guild_id: GuildId = GuildId("guild-1")

    def login(
        self,
        user_id: str,
        role: ExpertRole | None = ExpertRole.APPRENTICE,
        user_type: UserType = UserType.EXPERT,
        is_member: bool = True,
    ) -> dict[str, str]:
        """Register a user's guild standing and return their auth headers."""
        self.directory.set_membership(
            self.guild_id,
            UserId(user_id),
            Membership(
                is_member=is_member,
                user_type=user_type,
                expert_role=role,
                display_name=user_id.title(),
            ),
        )
        token = create_token(user_id, Settings().auth)
        return {"Authorization": f"Bearer {token}"}
