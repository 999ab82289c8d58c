from sqlalchemy import Column, String, Text, DateTime, Boolean, JSON
from app.database import Base

class Project(Base):
    __tablename__ = "projects"

    id = Column(String(64), primary_key=True, index=True)
    slug = Column(String(255), nullable=False, unique=True, index=True)
    title = Column(String(255), nullable=False)
    description = Column(Text, default="")
    long_description = Column(Text, default="")
    image = Column(String(500))
    technologies = Column(JSON, default=list)
    category = Column(String(50), index=True)
    github_url = Column(String(500))
    live_url = Column(String(500))
    featured = Column(Boolean, default=False, index=True)
    created_at = Column(DateTime(timezone=True))
    updated_at = Column(DateTime(timezone=True))
