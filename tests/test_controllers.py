import asyncio

import pytest

from app.controllers.comments import CommentThread, display_label
from app.controllers.likes import LikeSnapshot, LikeToggle
from app.controllers.state import Phase


class Toasts:
    def __init__(self):
        self.messages = []

    def __call__(self, level, message):
        self.messages.append((level, message))

    @property
    def errors(self):
        return [m for level, m in self.messages if level == "error"]


class HeldLikes:
    """LikeService stand-in whose toggles wait until released."""

    def __init__(self, inner):
        self.inner = inner
        self.release = asyncio.Event()
        self.calls = 0

    async def get_like_data(self, *args):
        return await self.inner.get_like_data(*args)

    async def toggle_like(self, *args):
        self.calls += 1
        await self.release.wait()
        return await self.inner.toggle_like(*args)


class HeldComments:
    """CommentService stand-in whose edits and deletes wait until released."""

    def __init__(self, inner):
        self.inner = inner
        self.release = asyncio.Event()

    async def list_comments(self, *args):
        return await self.inner.list_comments(*args)

    async def add_comment(self, *args):
        return await self.inner.add_comment(*args)

    async def update_comment(self, *args):
        await self.release.wait()
        return await self.inner.update_comment(*args)

    async def delete_comment(self, *args):
        await self.release.wait()
        return await self.inner.delete_comment(*args)


@pytest.fixture
def toasts():
    return Toasts()


# -- likes -------------------------------------------------------------------

async def test_like_toggle_commits_authoritative_result(services, jane, toasts):
    widget = LikeToggle(services.likes, "project", "project-4", jane, notify=toasts)
    assert await widget.load() == LikeSnapshot(liked=False, count=1)

    assert await widget.toggle() == LikeSnapshot(liked=True, count=2)
    assert widget.phase is Phase.COMMITTED
    assert toasts.messages == []


async def test_like_toggle_rolls_back_to_exact_snapshot(services, john, toasts):
    widget = LikeToggle(services.likes, "project", "project-404", john, notify=toasts)
    before = await widget.load()

    after = await widget.toggle()

    assert after == before
    assert widget.phase is Phase.ROLLED_BACK
    assert toasts.errors == ["Project not found"]


async def test_anonymous_like_is_refused_without_a_call(services, toasts):
    held = HeldLikes(services.likes)
    widget = LikeToggle(held, "project", "project-1", None, notify=toasts)
    await widget.load()

    await widget.toggle()

    assert held.calls == 0
    assert toasts.errors == ["Please log in to like"]
    assert widget.snapshot == LikeSnapshot(liked=False, count=2)


async def test_toggle_while_pending_is_ignored(services, jane):
    held = HeldLikes(services.likes)
    widget = LikeToggle(held, "project", "project-1", jane)
    await widget.load()

    task = asyncio.create_task(widget.toggle())
    await asyncio.sleep(0)
    assert widget.phase is Phase.PENDING
    assert widget.snapshot == LikeSnapshot(liked=False, count=1)

    await widget.toggle()
    assert held.calls == 1

    held.release.set()
    assert await task == LikeSnapshot(liked=False, count=1)
    assert widget.phase is Phase.COMMITTED


async def test_results_after_close_are_dropped(services, jane, toasts):
    held = HeldLikes(services.likes)
    widget = LikeToggle(held, "project", "project-3", jane, notify=toasts)
    await widget.load()

    task = asyncio.create_task(widget.toggle())
    await asyncio.sleep(0)
    widget.close()
    held.release.set()
    await task

    assert widget.phase is Phase.PENDING
    assert toasts.messages == []
    # The write itself still happened.
    assert (await services.likes.get_like_data("project", "project-3", jane.id)).data.has_liked


# -- comments ----------------------------------------------------------------

async def test_post_prepends_new_comment(services, jane, toasts):
    thread = CommentThread(services.comments, "project", "project-1", jane, notify=toasts)
    await thread.load()

    created = await thread.post("  Looks great  ")

    assert thread.comments[0].id == created.id
    assert thread.comments[0].content == "Looks great"
    assert len(thread.comments) == 3
    assert ("success", "Comment posted successfully") in toasts.messages


async def test_post_requires_user_and_content(services, jane, toasts):
    anonymous = CommentThread(services.comments, "project", "project-1", None, notify=toasts)
    assert await anonymous.post("hi") is None

    thread = CommentThread(services.comments, "project", "project-1", jane, notify=toasts)
    assert await thread.post("   ") is None

    assert toasts.errors == ["Please log in to comment", "Comment content cannot be empty"]
    assert await services.stores.comments.count({"entity_id": "project-1"}) == 2


async def test_delete_needs_confirmation(services, john, toasts):
    thread = CommentThread(services.comments, "project", "project-1", john, notify=toasts)
    await thread.load()

    assert await thread.delete("comment-1", confirm=lambda: False) is False
    assert len(thread.comments) == 2

    assert await thread.delete("comment-1", confirm=lambda: True) is True
    assert [c.id for c in thread.comments] == ["comment-2"]


async def test_failed_delete_restores_the_list(services, jane, toasts):
    thread = CommentThread(services.comments, "project", "project-1", jane, notify=toasts)
    before = await thread.load()

    assert await thread.delete("comment-1", confirm=lambda: True) is False

    assert thread.comments == before
    assert thread.phase is Phase.ROLLED_BACK
    assert toasts.errors == ["Access denied"]


async def test_post_during_failing_edit_survives_the_rollback(services, jane, toasts):
    held = HeldComments(services.comments)
    thread = CommentThread(held, "project", "project-1", jane, notify=toasts)
    before = await thread.load()

    # comment-1 belongs to John, so this edit will be refused.
    edit = asyncio.create_task(thread.edit("comment-1", "Not mine"))
    await asyncio.sleep(0)
    assert thread.phase is Phase.PENDING

    created = await thread.post("Posted meanwhile")
    assert thread.phase is Phase.PENDING

    held.release.set()
    assert await edit is None

    assert thread.phase is Phase.ROLLED_BACK
    assert thread.comments == [created] + before
    assert toasts.errors == ["Access denied"]


async def test_post_during_successful_delete_is_kept(services, john):
    held = HeldComments(services.comments)
    thread = CommentThread(held, "project", "project-1", john)
    await thread.load()

    delete = asyncio.create_task(thread.delete("comment-1", confirm=lambda: True))
    await asyncio.sleep(0)
    created = await thread.post("Posted meanwhile")

    held.release.set()
    assert await delete is True

    assert thread.phase is Phase.COMMITTED
    assert [c.id for c in thread.comments] == [created.id, "comment-2"]


async def test_edit_marks_comment_edited(services, john, clock, toasts):
    thread = CommentThread(services.comments, "project", "project-1", john, notify=toasts)
    await thread.load()
    clock.advance(seconds=5)

    updated = await thread.edit("comment-1", "Edited text")

    assert updated.is_edited
    shown = next(c for c in thread.comments if c.id == "comment-1")
    assert shown.content == "Edited text"
    assert display_label(shown) == "John Doe (edited)"


async def test_failed_edit_rolls_back(services, jane, toasts):
    thread = CommentThread(services.comments, "project", "project-1", jane, notify=toasts)
    before = await thread.load()

    assert await thread.edit("comment-1", "Not mine") is None

    assert thread.comments == before
    assert toasts.errors == ["Access denied"]


async def test_attached_thread_follows_other_writers(services, john, jane):
    thread = CommentThread(services.comments, "project", "project-1", john)
    await thread.load()
    thread.attach(services.stores.feed)

    added = (await services.comments.add_comment(jane, "project", "project-1", "From elsewhere")).data
    await services.comments.add_comment(jane, "project", "project-2", "Other project")

    assert thread.comments[0].id == added.id
    assert thread.comments[0].author.id == jane.id
    assert len(thread.comments) == 3

    await services.comments.delete_comment(jane, added.id)
    assert len(thread.comments) == 2

    thread.detach()
    await services.comments.add_comment(jane, "project", "project-1", "Unseen")
    assert len(thread.comments) == 2
    assert services.stores.feed.subscriber_count("comments") == 0


async def test_own_post_is_not_duplicated_by_the_feed(services, john):
    thread = CommentThread(services.comments, "project", "project-1", john)
    await thread.load()
    thread.attach(services.stores.feed)

    created = await thread.post("Only once")

    assert [c.id for c in thread.comments].count(created.id) == 1
    thread.close()
    assert services.stores.feed.subscriber_count("comments") == 0
