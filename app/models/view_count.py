from sqlalchemy import Column, Integer, String, DateTime, UniqueConstraint
from app.database import Base

class ViewCount(Base):
    __tablename__ = "view_counts"

    id = Column(String(64), primary_key=True, index=True)
    entity_type = Column(String(16), nullable=False)
    entity_id = Column(String(64), nullable=False)
    count = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime(timezone=True))
    updated_at = Column(DateTime(timezone=True))

    __table_args__ = (UniqueConstraint('entity_type', 'entity_id', name='uq_entity_views'),)
