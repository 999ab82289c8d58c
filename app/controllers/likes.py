import logging
from dataclasses import dataclass
from typing import Optional

from app.controllers.state import Notifier, Phase, WidgetState, log_notifier
from app.schemas import Profile
from app.services.likes import LikeService

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LikeSnapshot:
    liked: bool
    count: int

    def toggled(self) -> "LikeSnapshot":
        return LikeSnapshot(liked=not self.liked, count=self.count - 1 if self.liked else self.count + 1)


class LikeToggle:
    """
    Like button for one entity, as seen by one (possibly anonymous) user.

    The predicted state is shown before the service call resolves, replaced by
    the authoritative ``{liked, count}`` on success, and restored to the exact
    pre-toggle snapshot on failure. A toggle issued while one is pending is
    ignored.
    """

    def __init__(
        self,
        likes: LikeService,
        entity_type: str,
        entity_id: str,
        user: Optional[Profile] = None,
        notify: Notifier = log_notifier,
    ):
        self.likes = likes
        self.entity_type = entity_type
        self.entity_id = entity_id
        self.user = user
        self.notify = notify
        self.state: WidgetState[LikeSnapshot] = WidgetState.idle(LikeSnapshot(liked=False, count=0))
        self.loaded = False
        self.closed = False

    @property
    def snapshot(self) -> LikeSnapshot:
        return self.state.shown

    @property
    def phase(self) -> Phase:
        return self.state.phase

    async def load(self) -> LikeSnapshot:
        result = await self.likes.get_like_data(self.entity_type, self.entity_id, self.user.id if self.user else None)
        if self.closed:
            return self.snapshot
        if result.error:
            self.notify("error", "Failed to load likes")
        else:
            self.state = WidgetState.idle(LikeSnapshot(liked=result.data.has_liked, count=result.data.count))
            self.loaded = True
        return self.snapshot

    async def toggle(self) -> LikeSnapshot:
        if self.user is None:
            self.notify("error", "Please log in to like")
            return self.snapshot
        if self.state.pending:
            logger.debug("Toggle ignored, one is already pending for %s/%s", self.entity_type, self.entity_id)
            return self.snapshot

        self.state = self.state.begin(self.snapshot.toggled())
        result = await self.likes.toggle_like(self.user, self.entity_type, self.entity_id)
        if self.closed:
            return self.snapshot

        if result.error:
            self.state = self.state.rollback()
            self.notify("error", result.error.message or "Failed to update like")
        else:
            self.state = self.state.commit(LikeSnapshot(liked=result.data.liked, count=result.data.count))
        return self.snapshot

    def close(self) -> None:
        """The widget is gone. Results still in flight are dropped."""
        self.closed = True
