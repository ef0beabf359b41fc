from sqlalchemy import Column, Integer, Float, DECIMAL, DateTime, String, ForeignKey
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from pawwalk.models.base import Base


class WalkMap(Base):
    __tablename__ = "walk_maps"

    map_id = Column(Integer, primary_key=True, autoincrement=True)
    # 산책당 최대 1개 (첫 위치 저장 시 생성)
    walk_id = Column(
        Integer,
        ForeignKey("walks.walk_id", ondelete="CASCADE"),
        unique=True,
        nullable=False,
    )

    created_at = Column(DateTime, default=func.now())

    walk = relationship("Walk", back_populates="walk_map")
    locations = relationship(
        "WalkLocation",
        order_by="WalkLocation.location_id",
        cascade="all, delete-orphan",
    )


class WalkLocation(Base):
    __tablename__ = "walk_locations"

    location_id = Column(Integer, primary_key=True, autoincrement=True)
    map_id = Column(
        Integer,
        ForeignKey("walk_maps.map_id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    latitude = Column(DECIMAL(10, 7), nullable=False)
    longitude = Column(DECIMAL(10, 7), nullable=False)
    elevation = Column(Float, nullable=False, default=0)
    address = Column(String(255))          # 비어 있으면 조회 시점에 좌표로 계산

    recorded_at = Column(DateTime, nullable=False)
