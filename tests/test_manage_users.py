import manage_users
from app.auth.passwords import verify_password
from app.stores.factory import build_stores

from conftest import FakeClock, mock_settings


async def test_create_promote_and_list(capsys):
    stores = build_stores(mock_settings(DATABASE_URL="sqlite://"), clock=FakeClock())

    user = await manage_users.create_user(stores, "ops@example.com", "s3cret", full_name="Ops")
    assert user.role == "user"
    assert verify_password("s3cret", (await stores.users.get_by_id(user.id)).password_hash)

    assert await manage_users.create_user(stores, "ops@example.com", "again") is None
    assert await manage_users.create_user(stores, "not-an-email", "pw") is None

    promoted = await manage_users.set_role(stores, "ops@example.com", "admin")
    assert promoted.role == "admin"
    assert await manage_users.set_role(stores, "ghost@example.com", "admin") is None

    listed = await manage_users.list_users(stores)
    assert [u.email for u in listed] == ["ops@example.com"]
    assert "ops@example.com" in capsys.readouterr().out


async def test_run_refuses_mock_mode(monkeypatch, capsys):
    monkeypatch.setattr(manage_users, "get_settings", lambda: mock_settings())

    assert await manage_users.run(["--list"]) == 1
    assert "No persistent backend" in capsys.readouterr().out


async def test_run_seeds_sql_backend(monkeypatch, capsys):
    monkeypatch.setattr(manage_users, "get_settings", lambda: mock_settings(DATABASE_URL="sqlite://"))

    assert await manage_users.run(["--seed"]) == 0
    assert await manage_users.run(["--bogus"]) == 1
