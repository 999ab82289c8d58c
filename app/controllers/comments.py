import logging
from typing import Callable, Dict, List, Optional, Tuple

from app.controllers.state import Notifier, Phase, WidgetState, log_notifier
from app.schemas import CommentWithAuthor, Profile
from app.services.comments import CommentService
from app.stores.feed import Change, ChangeFeed, Subscription

logger = logging.getLogger(__name__)

Thread = Tuple[CommentWithAuthor, ...]


def display_label(comment: CommentWithAuthor) -> str:
    """Author line as the thread shows it, with the "(edited)" marker."""
    author = comment.author
    name = (author.display_name or author.full_name or author.username or "Anonymous") if author else "Anonymous"
    return f"{name} (edited)" if comment.is_edited else name


def _prepend(comment: CommentWithAuthor, thread: Thread) -> Thread:
    # The change feed may already have delivered it.
    return (comment,) + tuple(c for c in thread if c.id != comment.id)


class CommentThread:
    """
    Comments under one project or blog post.

    Edits and deletes are optimistic: the thread captures its current list,
    applies the change, and restores the captured list verbatim if the service
    reports an error.
    """

    def __init__(
        self,
        comments: CommentService,
        entity_type: str,
        entity_id: str,
        user: Optional[Profile] = None,
        notify: Notifier = log_notifier,
    ):
        self.service = comments
        self.entity_type = entity_type
        self.entity_id = entity_id
        self.user = user
        self.notify = notify
        self.state: WidgetState[Thread] = WidgetState.idle(())
        self.closed = False
        self._authors: Dict[str, Optional[Profile]] = {}
        self._feed: Optional[ChangeFeed] = None
        self._subscription: Optional[Subscription] = None

    @property
    def comments(self) -> List[CommentWithAuthor]:
        return list(self.state.shown)

    @property
    def phase(self) -> Phase:
        return self.state.phase

    def _remember_authors(self, comments) -> None:
        for comment in comments:
            if comment.author is not None:
                self._authors[comment.user_id] = comment.author

    async def load(self) -> List[CommentWithAuthor]:
        result = await self.service.list_comments(self.entity_type, self.entity_id)
        if self.closed:
            return self.comments
        if result.error:
            self.notify("error", "Failed to load comments")
        else:
            self._remember_authors(result.data)
            self.state = WidgetState.idle(tuple(result.data))
        return self.comments

    async def post(self, content: str) -> Optional[CommentWithAuthor]:
        if self.user is None:
            self.notify("error", "Please log in to comment")
            return None
        if not (content or "").strip():
            self.notify("error", "Comment content cannot be empty")
            return None

        result = await self.service.add_comment(self.user, self.entity_type, self.entity_id, content)
        if self.closed:
            return None
        if result.error:
            self.notify("error", result.error.message or "Failed to post comment")
            return None

        created = result.data
        self._remember_authors([created])
        if self.state.pending:
            # An edit or delete is still in flight; its rollback target gains the new comment too.
            self.state = WidgetState(
                Phase.PENDING,
                _prepend(created, self.state.shown),
                previous=_prepend(created, self.state.previous),
            )
        else:
            self.state = self.state.commit(_prepend(created, self.state.shown))
        self.notify("success", "Comment posted successfully")
        return created

    async def edit(self, comment_id: str, content: str) -> Optional[CommentWithAuthor]:
        if self.user is None:
            self.notify("error", "Please log in to edit comments")
            return None
        if not (content or "").strip():
            self.notify("error", "Comment content cannot be empty")
            return None
        if self.state.pending:
            self.notify("error", "Please wait for the previous change to finish")
            return None

        predicted = tuple(
            c.model_copy(update={"content": content.strip()}) if c.id == comment_id else c for c in self.state.shown
        )
        self.state = self.state.begin(predicted)
        result = await self.service.update_comment(self.user, comment_id, content)
        if self.closed:
            return None
        if result.error:
            self.state = self.state.rollback()
            self.notify("error", result.error.message or "Failed to update comment")
            return None

        updated = result.data
        self.state = self.state.commit(tuple(updated if c.id == comment_id else c for c in self.state.shown))
        self.notify("success", "Comment updated successfully")
        return updated

    async def delete(self, comment_id: str, confirm: Callable[[], bool]) -> bool:
        """Irreversible, so nothing happens unless ``confirm()`` returns true."""
        if self.user is None:
            self.notify("error", "Please log in to delete comments")
            return False
        if not confirm():
            return False
        if self.state.pending:
            self.notify("error", "Please wait for the previous change to finish")
            return False

        self.state = self.state.begin(tuple(c for c in self.state.shown if c.id != comment_id))
        result = await self.service.delete_comment(self.user, comment_id)
        if self.closed:
            return False
        if result.error:
            self.state = self.state.rollback()
            self.notify("error", result.error.message or "Failed to delete comment")
            return False

        self.state = self.state.commit(self.state.shown)
        self.notify("success", "Comment deleted successfully")
        return True

    # -- live updates ----------------------------------------------------------

    def attach(self, feed: ChangeFeed) -> Subscription:
        self.detach()
        self._feed = feed
        self._subscription = feed.subscribe(
            "comments", {"entity_type": self.entity_type, "entity_id": self.entity_id}, self._on_change
        )
        return self._subscription

    def detach(self) -> None:
        if self._feed is not None and self._subscription is not None:
            self._feed.unsubscribe(self._subscription)
        self._feed = None
        self._subscription = None

    def close(self) -> None:
        self.detach()
        self.closed = True

    def _on_change(self, change: Change) -> None:
        if self.closed:
            return
        record = change.record
        shown = self.state.shown
        if change.event == "insert":
            if any(c.id == record.id for c in shown):
                return
            comment = CommentWithAuthor(**record.model_dump(), author=self._authors.get(record.user_id))
            shown = (comment,) + shown
        elif change.event == "update":
            shown = tuple(
                CommentWithAuthor(**record.model_dump(), author=c.author) if c.id == record.id else c for c in shown
            )
        elif change.event == "delete":
            shown = tuple(c for c in shown if c.id != record.id)

        if self.state.pending:
            # Keep the rollback target in step with what others did meanwhile.
            self.state = WidgetState(Phase.PENDING, shown, previous=self._apply(change, self.state.previous))
        else:
            self.state = WidgetState(self.state.phase, shown)

    def _apply(self, change: Change, thread: Thread) -> Thread:
        record = change.record
        if change.event == "insert" and not any(c.id == record.id for c in thread):
            return (CommentWithAuthor(**record.model_dump(), author=self._authors.get(record.user_id)),) + thread
        if change.event == "update":
            return tuple(
                CommentWithAuthor(**record.model_dump(), author=c.author) if c.id == record.id else c for c in thread
            )
        if change.event == "delete":
            return tuple(c for c in thread if c.id != record.id)
        return thread
