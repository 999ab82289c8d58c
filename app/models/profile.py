from sqlalchemy import Column, String, DateTime
from app.database import Base

class Profile(Base):
    __tablename__ = "profiles"

    id = Column(String(64), primary_key=True, index=True)
    email = Column(String(255), unique=True, index=True, nullable=False)
    password_hash = Column(String(255))
    role = Column(String(16), nullable=False, default="user")

    full_name = Column(String(255))
    username = Column(String(64), unique=True, index=True)
    display_name = Column(String(255))
    bio = Column(String(500))
    avatar_url = Column(String(500))
    created_at = Column(DateTime(timezone=True))
    updated_at = Column(DateTime(timezone=True))
