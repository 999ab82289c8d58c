from datetime import timedelta

import pytest

from app.errors import Conflict, NotFound, ValidationError
from app.schemas import Comment, Like, Project, UserRecord
from app.stores.feed import ChangeFeed
from app.stores.memory import MemoryRepository

from conftest import FakeClock


def project_repo(clock=None, feed=None):
    return MemoryRepository(
        "projects", Project, "project", "Project", unique=[("slug",)], feed=feed, clock=clock or FakeClock()
    )


async def test_insert_assigns_id_and_equal_timestamps():
    clock = FakeClock()
    repo = project_repo(clock)

    saved = await repo.insert(Project(slug="demo", title="Demo"))

    assert saved.id == "project-1"
    assert saved.created_at == clock.now
    assert saved.updated_at == saved.created_at


async def test_insert_rejects_duplicate_slug():
    repo = project_repo()
    await repo.insert(Project(slug="demo", title="Demo"))

    with pytest.raises(Conflict):
        await repo.insert(Project(slug="demo", title="Another"))

    assert await repo.count() == 1


async def test_reads_return_copies():
    repo = project_repo()
    saved = await repo.insert(Project(slug="demo", title="Demo", technologies=["Python"]))

    fetched = await repo.get_by_id(saved.id)
    fetched.technologies.append("Rust")
    fetched.title = "Changed"

    again = await repo.get_by_id(saved.id)
    assert again.title == "Demo"
    assert again.technologies == ["Python"]


async def test_update_refreshes_updated_at_and_keeps_created_at():
    clock = FakeClock()
    repo = project_repo(clock)
    saved = await repo.insert(Project(slug="demo", title="Demo"))

    clock.advance(minutes=5)
    updated = await repo.update(saved.id, {"title": "Renamed", "created_at": clock.now, "id": "other"})

    assert updated.id == saved.id
    assert updated.title == "Renamed"
    assert updated.created_at == saved.created_at
    assert updated.updated_at == saved.created_at + timedelta(minutes=5)


async def test_update_is_strictly_later_even_when_clock_stands_still():
    repo = project_repo()
    saved = await repo.insert(Project(slug="demo", title="Demo"))

    first = await repo.update(saved.id, {"title": "One"})
    second = await repo.update(saved.id, {"title": "Two"})

    assert first.updated_at > saved.updated_at
    assert second.updated_at > first.updated_at


async def test_update_to_taken_slug_conflicts():
    repo = project_repo()
    await repo.insert(Project(slug="taken", title="A"))
    other = await repo.insert(Project(slug="free", title="B"))

    with pytest.raises(Conflict):
        await repo.update(other.id, {"slug": "taken"})

    # Re-saving a record's own slug is fine.
    assert (await repo.update(other.id, {"slug": "free"})).slug == "free"


async def test_update_with_bad_type_is_validation_error():
    repo = project_repo()
    saved = await repo.insert(Project(slug="demo", title="Demo"))

    with pytest.raises(ValidationError):
        await repo.update(saved.id, {"technologies": "not-a-list"})


async def test_update_and_remove_missing_record():
    repo = project_repo()

    with pytest.raises(NotFound):
        await repo.update("project-404", {"title": "x"})
    with pytest.raises(NotFound):
        await repo.remove("project-404")


async def test_remove_is_a_hard_delete():
    repo = project_repo()
    saved = await repo.insert(Project(slug="demo", title="Demo"))

    await repo.remove(saved.id)

    assert await repo.get_by_id(saved.id) is None
    assert await repo.get_by_slug("demo") is None


async def test_unique_username_ignores_missing_values():
    users = MemoryRepository(
        "profiles", UserRecord, "user", "User", unique=[("email",), ("username",)], clock=FakeClock()
    )
    await users.insert(UserRecord(email="a@example.com"))
    await users.insert(UserRecord(email="b@example.com"))
    await users.insert(UserRecord(email="c@example.com", username="carol"))

    with pytest.raises(Conflict):
        await users.insert(UserRecord(email="d@example.com", username="carol"))
    with pytest.raises(Conflict):
        await users.insert(UserRecord(email="a@example.com"))


async def test_like_triple_is_unique():
    likes = MemoryRepository(
        "likes", Like, "like", "Like", unique=[("entity_type", "entity_id", "user_id")], clock=FakeClock()
    )
    await likes.insert(Like(entity_type="project", entity_id="project-1", user_id="user-2"))
    await likes.insert(Like(entity_type="blog", entity_id="project-1", user_id="user-2"))

    with pytest.raises(Conflict):
        await likes.insert(Like(entity_type="project", entity_id="project-1", user_id="user-2"))


async def test_load_keeps_seed_ids_and_new_ids_skip_them():
    clock = FakeClock()
    repo = project_repo(clock)
    await repo.load([Project(id="project-1", slug="seeded", title="Seeded", created_at=clock.now, updated_at=clock.now)])

    created = await repo.insert(Project(slug="fresh", title="Fresh"))

    assert created.id == "project-2"
    assert (await repo.get_by_id("project-1")).slug == "seeded"


async def test_feed_notifies_matching_subscribers_only():
    feed = ChangeFeed()
    comments = MemoryRepository("comments", Comment, "comment", "Comment", feed=feed, clock=FakeClock())
    seen, others = [], []
    feed.subscribe("comments", {"entity_id": "project-1"}, seen.append)
    feed.subscribe("comments", {"entity_id": "project-2"}, others.append)

    saved = await comments.insert(Comment(entity_type="project", entity_id="project-1", user_id="user-2", content="Hi"))
    await comments.update(saved.id, {"content": "Hello"})
    await comments.remove(saved.id)

    assert [change.event for change in seen] == ["insert", "update", "delete"]
    assert seen[1].record.content == "Hello"
    assert others == []


async def test_unsubscribe_stops_delivery_and_broken_subscriber_is_contained():
    feed = ChangeFeed()
    repo = project_repo(feed=feed)
    seen = []

    def broken(change):
        raise RuntimeError("boom")

    feed.subscribe("projects", None, broken)
    subscription = feed.subscribe("projects", None, seen.append)
    await repo.insert(Project(slug="one", title="One"))

    feed.unsubscribe(subscription)
    await repo.insert(Project(slug="two", title="Two"))

    assert len(seen) == 1
    assert feed.subscriber_count("projects") == 1
