from sqlalchemy import Column, Integer, String, DateTime, Enum
from sqlalchemy.sql import func
from pawwalk.models.base import Base
import enum


class UserRole(str, enum.Enum):
    OWNER = "owner"
    WALKER = "walker"
    ADMIN = "admin"


class User(Base):
    __tablename__ = "users"

    user_id = Column(Integer, primary_key=True, autoincrement=True)
    firebase_uid = Column(String(128), unique=True, nullable=False)

    name = Column(String(100), nullable=False)
    email = Column(String(255))
    phone = Column(String(30))
    image_url = Column(String(255))
    role = Column(Enum(UserRole), nullable=False, default=UserRole.OWNER)

    created_at = Column(DateTime, default=func.now())
    updated_at = Column(DateTime, default=func.now(), onupdate=func.now())
