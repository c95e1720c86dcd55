"""
Tests for the local identity provider.
"""

import pytest

from weekplanner.infra.auth import LocalIdentityProvider
from weekplanner.infra.repository import AccountRepository


@pytest.fixture
def identity(db_session):
    # Few iterations keep hashing fast in tests
    return LocalIdentityProvider(AccountRepository(session=db_session), iterations=1000)


@pytest.mark.asyncio
async def test_sign_up_signs_in(identity):
    result = await identity.sign_up("Ana@Example.com ", "secret1")

    assert result.ok
    assert identity.get_current_user_email() == "ana@example.com"
    assert identity.get_current_user_id()


@pytest.mark.asyncio
async def test_duplicate_sign_up(identity):
    await identity.sign_up("ana@example.com", "secret1")
    result = await identity.sign_up("ANA@example.com", "secret2")

    assert not result.ok
    assert result.error == "Account already exists"


@pytest.mark.asyncio
@pytest.mark.parametrize("email,password", [("not-an-email", "secret1"), ("ana@example.com", "123")])
async def test_sign_up_validation(identity, email, password):
    result = await identity.sign_up(email, password)
    assert not result.ok
    assert identity.get_current_user_id() is None


@pytest.mark.asyncio
async def test_sign_in_and_out(identity):
    await identity.sign_up("ana@example.com", "secret1")
    user_id = identity.get_current_user_id()
    await identity.sign_out()
    assert identity.get_current_user_email() is None

    assert not (await identity.sign_in("ana@example.com", "wrong!")).ok
    assert not (await identity.sign_in("bob@example.com", "secret1")).ok
    assert (await identity.sign_in("ana@example.com", "secret1")).ok
    assert identity.get_current_user_id() == user_id


@pytest.mark.asyncio
async def test_subscribers_hear_session_changes(identity):
    seen = []
    unsubscribe = identity.subscribe(seen.append)

    await identity.sign_up("ana@example.com", "secret1")
    await identity.sign_out()
    unsubscribe()
    await identity.sign_in("ana@example.com", "secret1")

    assert seen == ["ana@example.com", None]
