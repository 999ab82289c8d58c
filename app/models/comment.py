from sqlalchemy import Column, String, Text, DateTime
from app.database import Base

class Comment(Base):
    __tablename__ = "comments"

    id = Column(String(64), primary_key=True, index=True)
    entity_type = Column(String(16), nullable=False, index=True)
    entity_id = Column(String(64), nullable=False, index=True)
    user_id = Column(String(64), nullable=False, index=True)
    content = Column(Text, nullable=False)
    created_at = Column(DateTime(timezone=True))
    updated_at = Column(DateTime(timezone=True))
