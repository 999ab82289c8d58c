from sqlalchemy import Column, String, DateTime, UniqueConstraint
from app.database import Base

class Like(Base):
    __tablename__ = "likes"
    
    id = Column(String(64), primary_key=True, index=True)
    entity_type = Column(String(16), nullable=False)
    entity_id = Column(String(64), nullable=False)
    user_id = Column(String(64), nullable=False)
    created_at = Column(DateTime(timezone=True))
    
    # Ensure each user can only like an entity once
    __table_args__ = (UniqueConstraint('entity_type', 'entity_id', 'user_id', name='uq_entity_user_like'),)
