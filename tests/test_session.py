import json

import pytest

from app.auth.passwords import hash_password, verify_password
from app.auth.session import LEGACY_USER_KEY, SESSION_KEY, AuthSessionManager, AuthState
from app.auth.storage import FileStorage, MemoryStorage
from app.errors import AuthError, Conflict, InvalidCredentials, ValidationError


@pytest.fixture
def sessions(services):
    return services.sessions


def test_password_hashes_are_salted_and_verifiable():
    first, second = hash_password("user123"), hash_password("user123")

    assert first != second
    assert verify_password("user123", first)
    assert not verify_password("user124", first)
    assert not verify_password("user123", None)


def test_password_hashes_are_bcrypt():
    stored = hash_password("user123")

    assert stored.startswith("$2b$")
    assert "user123" not in stored
    assert not verify_password("user123", "not-a-bcrypt-hash")
    # Only the first 72 bytes count, and longer input is accepted.
    assert verify_password("x" * 72 + "tail", hash_password("x" * 80))


async def test_sign_up_then_sign_in_round_trip(sessions, storage, clock):
    session, error = await sessions.sign_up("alice@example.com", "pw", "Alice")

    assert error is None
    assert session.user.email == "alice@example.com"
    assert session.user.role == "user"
    assert session.user.avatar_url.endswith("seed=alice@example.com")
    assert session.expires_at == clock.now + sessions.ttl

    await sessions.sign_out()
    assert sessions.get_session() is None

    session, error = await sessions.sign_in("alice@example.com", "pw")
    assert error is None
    assert sessions.current_user().email == "alice@example.com"

    stored = json.loads(storage.get(SESSION_KEY))
    assert "expiresAt" in stored
    assert "password_hash" not in stored["user"]


async def test_sign_up_rejects_existing_email_and_bad_input(sessions):
    _, error = await sessions.sign_up("john@example.com", "pw")
    assert isinstance(error, Conflict)
    assert error.message == "Email already registered"

    _, error = await sessions.sign_up("not-an-email", "pw")
    assert isinstance(error, ValidationError)
    _, error = await sessions.sign_up("new@example.com", "")
    assert isinstance(error, ValidationError)


async def test_wrong_email_and_wrong_password_look_the_same(sessions):
    _, unknown = await sessions.sign_in("nobody@example.com", "user123")
    _, wrong = await sessions.sign_in("john@example.com", "nope")

    assert isinstance(unknown, InvalidCredentials)
    assert isinstance(wrong, InvalidCredentials)
    assert unknown.message == wrong.message == "Invalid email or password"
    assert sessions.state is AuthState.ANONYMOUS


async def test_failed_sign_in_keeps_existing_session(sessions):
    await sessions.sign_in("john@example.com", "user123")

    _, error = await sessions.sign_in("jane@example.com", "wrong")

    assert isinstance(error, InvalidCredentials)
    assert sessions.current_user().id == "user-2"
    assert sessions.state is AuthState.AUTHENTICATED


async def test_expired_session_is_purged_on_read(sessions, storage, clock):
    await sessions.sign_in("john@example.com", "user123")

    clock.advance(hours=23, minutes=59)
    assert sessions.get_session() is not None

    clock.advance(minutes=1)
    assert sessions.get_session() is None
    assert storage.get(SESSION_KEY) is None
    # Purging twice is harmless.
    assert sessions.get_session() is None
    assert sessions.state is AuthState.ANONYMOUS


async def test_corrupt_session_record_is_discarded(sessions, storage):
    storage.set(SESSION_KEY, "{not json")

    assert sessions.get_session() is None
    assert storage.get(SESSION_KEY) is None


async def test_legacy_user_key_without_session_is_cleared(sessions, storage):
    storage.set(LEGACY_USER_KEY, json.dumps({"id": "user-2"}))

    assert sessions.get_session() is None
    assert storage.get(LEGACY_USER_KEY) is None


async def test_sign_in_never_writes_legacy_key(sessions, storage):
    await sessions.sign_in("john@example.com", "user123")

    assert storage.keys() == [SESSION_KEY]


async def test_sign_out_clears_everything(sessions, storage):
    await sessions.sign_in("john@example.com", "user123")
    storage.set(LEGACY_USER_KEY, "{}")

    await sessions.sign_out()

    assert storage.keys() == []
    assert sessions.current_user() is None


async def test_oauth_is_not_available(sessions):
    data, error = await sessions.sign_in_with_oauth("github")

    assert data is None
    assert isinstance(error, AuthError)
    assert "github" in error.message


async def test_roles(sessions):
    await sessions.sign_in("admin@example.com", "admin123")
    assert sessions.is_admin()
    assert sessions.has_role("admin")

    await sessions.sign_in("jane@example.com", "user123")
    assert not sessions.is_admin()
    assert sessions.has_role("user")


async def test_refresh_signs_out_deleted_user(services, sessions):
    await sessions.sign_in("jane@example.com", "user123")
    await services.stores.users.remove("user-3")

    assert await sessions.refresh() is None
    assert sessions.get_session() is None


async def test_session_survives_a_new_manager_over_file_storage(services, tmp_path, clock):
    path = str(tmp_path / "session.json")
    first = AuthSessionManager(services.stores.users, FileStorage(path), clock=clock)
    await first.sign_in("john@example.com", "user123")

    second = AuthSessionManager(services.stores.users, FileStorage(path), clock=clock)

    assert second.current_user().id == "user-2"


def test_file_storage_treats_corrupt_file_as_empty(tmp_path):
    path = tmp_path / "session.json"
    path.write_text("garbage", encoding="utf-8")
    store = FileStorage(str(path))

    assert store.get(SESSION_KEY) is None
    store.set("k", "v")
    assert FileStorage(str(path)).get("k") == "v"


def test_memory_storage_remove_missing_key_is_noop():
    store = MemoryStorage({"a": "1"})
    store.remove("b")
    assert store.keys() == ["a"]
