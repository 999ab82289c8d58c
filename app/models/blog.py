from sqlalchemy import Column, Integer, String, Text, DateTime, Boolean, JSON
from app.database import Base

class BlogPost(Base):
    __tablename__ = "blog_posts"

    id = Column(String(64), primary_key=True, index=True)
    title = Column(String(255), nullable=False, index=True)
    slug = Column(String(255), nullable=False, unique=True, index=True)
    content = Column(Text, nullable=False, default="")
    excerpt = Column(Text, default="")
    cover_image = Column(String(500))
    author_id = Column(String(64), index=True)
    tags = Column(JSON, default=list)
    published = Column(Boolean, default=False, index=True)
    read_time = Column(Integer, default=5)
    created_at = Column(DateTime(timezone=True))
    updated_at = Column(DateTime(timezone=True))
