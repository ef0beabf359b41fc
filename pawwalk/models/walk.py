from sqlalchemy import (
    Column,
    Integer,
    DECIMAL,
    Float,
    DateTime,
    String,
    Text,
    Enum,
    ForeignKey,
    Table,
)
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from pawwalk.models.base import Base
import enum


class WalkStatus(str, enum.Enum):
    REQUESTED = "requested"
    AWAITING_PAYMENT = "awaiting_payment"
    SCHEDULED = "scheduled"
    ACTIVE = "active"
    FINISHED = "finished"
    REJECTED = "rejected"
    CANCELLED = "cancelled"


# 산책 ↔ 반려동물 (생성 시 고정, 이후 변경 없음)
walk_pets = Table(
    "walk_pets",
    Base.metadata,
    Column("walk_id", Integer, ForeignKey("walks.walk_id", ondelete="CASCADE"), primary_key=True),
    Column("pet_id", Integer, ForeignKey("pets.pet_id"), primary_key=True),
)


class Walk(Base):
    __tablename__ = "walks"

    walk_id = Column(Integer, primary_key=True, autoincrement=True)
    walker_id = Column(Integer, ForeignKey("users.user_id"), nullable=False, index=True)
    owner_id = Column(Integer, ForeignKey("users.user_id"), nullable=False, index=True)

    scheduled_start_time = Column(DateTime, nullable=False)
    scheduled_end_time = Column(DateTime, nullable=False)
    actual_start_time = Column(DateTime)
    actual_end_time = Column(DateTime)

    start_address = Column(String(255), nullable=False)
    total_price = Column(DECIMAL(10, 2), nullable=False)
    status = Column(
        Enum(WalkStatus, values_callable=lambda e: [s.value for s in e]),
        nullable=False,
        default=WalkStatus.REQUESTED,
        index=True,
    )

    duration_min = Column(Integer)
    distance_km = Column(Float)
    walker_notes = Column(Text)
    admin_notes = Column(Text)

    # 상태 변경 시마다 +1 (compare-and-swap 용)
    version = Column(Integer, nullable=False, default=1)

    created_at = Column(DateTime, default=func.now())
    updated_at = Column(DateTime, default=func.now(), onupdate=func.now())

    walker = relationship("User", foreign_keys=[walker_id])
    owner = relationship("User", foreign_keys=[owner_id])
    pets = relationship("Pet", secondary=walk_pets, order_by="Pet.pet_id")
    walk_map = relationship(
        "WalkMap",
        back_populates="walk",
        uselist=False,
        cascade="all, delete-orphan",
    )
