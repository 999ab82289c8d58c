"""
Record schemas for the portfolio stores.

Each model is one row shape. The store name a model lives in is declared by
the repository that holds it (see ``app.stores``), not by the model.
"""

from datetime import datetime, timezone
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

Role = Literal["admin", "user"]
EntityType = Literal["project", "blog"]

ENTITY_TYPES = ("project", "blog")


def _as_utc(value):
    # SQLite hands back naive datetimes.
    if isinstance(value, datetime) and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


class Record(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str = Field("", description="Opaque stable identifier, assigned on insert")
    created_at: Optional[datetime] = None

    @field_validator("created_at")
    @classmethod
    def created_at_utc(cls, value):
        return _as_utc(value)


class TimestampedRecord(Record):
    updated_at: Optional[datetime] = None

    @field_validator("updated_at")
    @classmethod
    def updated_at_utc(cls, value):
        return _as_utc(value)


class Profile(TimestampedRecord):
    email: str = Field(..., description="Unique, case-sensitive as stored")
    role: Role = Field("user", description="Role for permissions")
    full_name: Optional[str] = None
    username: Optional[str] = Field(None, description="Unique when present")
    display_name: Optional[str] = None
    bio: Optional[str] = Field(None, description="At most 500 characters")
    avatar_url: Optional[str] = None


class UserRecord(Profile):
    password_hash: Optional[str] = Field(None, description="bcrypt hash")

    def to_profile(self) -> Profile:
        return Profile.model_validate(self.model_dump(exclude={"password_hash"}))


class Project(TimestampedRecord):
    slug: str
    title: str
    description: str = ""
    long_description: str = ""
    image: Optional[str] = None
    technologies: List[str] = Field(default_factory=list, description="Ordered as authored")
    category: Optional[str] = None
    github_url: Optional[str] = None
    live_url: Optional[str] = None
    featured: bool = False


class BlogPost(TimestampedRecord):
    slug: str
    title: str
    excerpt: str = ""
    content: str = ""
    cover_image: Optional[str] = None
    author_id: Optional[str] = None
    tags: List[str] = Field(default_factory=list, description="Ordered as authored")
    published: bool = False
    read_time: int = Field(5, description="Minutes")


class Comment(TimestampedRecord):
    entity_type: EntityType
    entity_id: str
    user_id: str
    content: str

    @property
    def is_edited(self) -> bool:
        return self.updated_at != self.created_at


class CommentWithAuthor(Comment):
    author: Optional[Profile] = None


class Like(Record):
    entity_type: EntityType
    entity_id: str
    user_id: str


class ViewCount(TimestampedRecord):
    entity_type: EntityType
    entity_id: str
    count: int = 0


class Session(BaseModel):
    """The client-held proof of authentication."""

    model_config = ConfigDict(populate_by_name=True)

    user: Profile
    token: str
    expires_at: datetime = Field(..., alias="expiresAt")


class LikeData(BaseModel):
    count: int
    has_liked: bool


class ToggleResult(BaseModel):
    liked: bool
    count: int
