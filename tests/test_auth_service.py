from datetime import timedelta
from uuid import UUID

import pydantic
import pytest

from storefront.core.session_store import SessionStore
from storefront.core.unit_of_work import UnitOfWork
from storefront.modules.auth.schemas import LoginRequest, RegisterRequest
from storefront.modules.auth.service import AuthService
from storefront.modules.user.models import User

from .conftest import FakeClock, PlainTextHasher

pytestmark = pytest.mark.usefixtures("db")

ALICE = RegisterRequest(username="alice", email="alice@example.com", password="secret1")


def make_service(
    uow: UnitOfWork, store: SessionStore, hasher: PlainTextHasher, clock: FakeClock
) -> AuthService:
    return AuthService(uow, store, hasher, clock=clock)


async def register_alice(store, hasher, clock) -> None:
    async with UnitOfWork() as uow:
        assert await make_service(uow, store, hasher, clock).register(ALICE)


@pytest.mark.asyncio
async def test_register_stores_hashed_password(session_store, hasher, clock):
    await register_alice(session_store, hasher, clock)

    async with UnitOfWork() as uow:
        user = await uow.users.first_or_default(User.username == "alice")
        assert user is not None
        assert user.password_hash != "secret1"
        assert hasher.verify("secret1", user.password_hash)
        assert user.is_active is True


@pytest.mark.asyncio
async def test_register_duplicate_returns_false(session_store, hasher, clock):
    await register_alice(session_store, hasher, clock)

    async with UnitOfWork() as uow:
        service = make_service(uow, session_store, hasher, clock)
        duplicate = RegisterRequest(username="alice", email="new@example.com", password="secret1")
        assert await service.register(duplicate) is False


@pytest.mark.asyncio
async def test_login_success_creates_session(session_store, hasher, clock):
    await register_alice(session_store, hasher, clock)

    async with UnitOfWork() as uow:
        service = make_service(uow, session_store, hasher, clock)
        result = await service.login(LoginRequest(username="alice", password="secret1"))

    assert result is not None
    assert str(UUID(result.session_token)) == result.session_token
    assert result.expires_at == clock.now + timedelta(minutes=30)
    assert result.user.username == "alice"
    assert result.user.email == "alice@example.com"
    assert session_store.get(f"Session_{result.session_token}") == result.user


@pytest.mark.asyncio
async def test_tokens_are_unique_per_login(session_store, hasher, clock):
    await register_alice(session_store, hasher, clock)

    async with UnitOfWork() as uow:
        service = make_service(uow, session_store, hasher, clock)
        request = LoginRequest(username="alice", password="secret1")
        first = await service.login(request)
        second = await service.login(request)

    assert first.session_token != second.session_token
    assert len(session_store) == 2


@pytest.mark.asyncio
@pytest.mark.parametrize(
    ("username", "password"),
    [("alice", "wrong"), ("nobody", "secret1")],
)
async def test_login_failure_returns_none(session_store, hasher, clock, username, password):
    await register_alice(session_store, hasher, clock)

    async with UnitOfWork() as uow:
        service = make_service(uow, session_store, hasher, clock)
        assert await service.login(LoginRequest(username=username, password=password)) is None

    assert len(session_store) == 0


@pytest.mark.asyncio
async def test_login_rejects_inactive_user(session_store, hasher, clock):
    await register_alice(session_store, hasher, clock)

    async with UnitOfWork() as uow:
        user = await uow.users.first_or_default(User.username == "alice")
        user.is_active = False
        uow.users.update(user)
        await uow.save_changes()

    async with UnitOfWork() as uow:
        service = make_service(uow, session_store, hasher, clock)
        assert await service.login(LoginRequest(username="alice", password="secret1")) is None


@pytest.mark.asyncio
async def test_session_expires_after_thirty_minutes(session_store, hasher, clock):
    await register_alice(session_store, hasher, clock)

    async with UnitOfWork() as uow:
        service = make_service(uow, session_store, hasher, clock)
        result = await service.login(LoginRequest(username="alice", password="secret1"))

        clock.advance(minutes=29, seconds=59)
        assert await service.validate_session(result.session_token) == result.user

        clock.advance(seconds=1)
        assert await service.validate_session(result.session_token) is None


@pytest.mark.asyncio
async def test_logout_is_idempotent(session_store, hasher, clock):
    await register_alice(session_store, hasher, clock)

    async with UnitOfWork() as uow:
        service = make_service(uow, session_store, hasher, clock)
        result = await service.login(LoginRequest(username="alice", password="secret1"))

        assert await service.logout(result.session_token) is True
        assert await service.logout(result.session_token) is True
        assert await service.validate_session(result.session_token) is None
        assert await service.logout("unknown-token") is True


@pytest.mark.asyncio
async def test_session_snapshot_is_not_affected_by_later_changes(session_store, hasher, clock):
    await register_alice(session_store, hasher, clock)

    async with UnitOfWork() as uow:
        service = make_service(uow, session_store, hasher, clock)
        result = await service.login(LoginRequest(username="alice", password="secret1"))

    async with UnitOfWork() as uow:
        user = await uow.users.first_or_default(User.username == "alice")
        user.email = "changed@example.com"
        uow.users.update(user)
        await uow.save_changes()

        service = make_service(uow, session_store, hasher, clock)
        snapshot = await service.validate_session(result.session_token)

    assert snapshot.email == "alice@example.com"
    with pytest.raises(pydantic.ValidationError):
        snapshot.email = "mutated@example.com"
