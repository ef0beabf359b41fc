from sqlalchemy import Column, Integer, String, DateTime, ForeignKey
from sqlalchemy.sql import func
from pawwalk.models.base import Base


class Pet(Base):
    __tablename__ = "pets"

    pet_id = Column(Integer, primary_key=True, autoincrement=True)
    owner_id = Column(Integer, ForeignKey("users.user_id"), nullable=False)

    name = Column(String(50), nullable=False)
    breed = Column(String(50))
    image_url = Column(String(255))

    created_at = Column(DateTime, default=func.now())
