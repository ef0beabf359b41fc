from sqlalchemy import Column, Integer, Boolean, DateTime, DECIMAL, ForeignKey
from sqlalchemy.sql import func
from pawwalk.models.base import Base


class WalkerSetting(Base):
    __tablename__ = "walker_settings"

    setting_id = Column(Integer, primary_key=True, autoincrement=True)
    walker_id = Column(Integer, ForeignKey("users.user_id", ondelete="CASCADE"), unique=True, nullable=False)

    has_gps_tracker = Column(Boolean, nullable=False, default=False)       # 요금제 제공 여부
    gps_tracking_enabled = Column(Boolean, nullable=False, default=False)  # 산책자 on/off
    gps_tracking_interval = Column(Integer, nullable=False, default=30)    # 초

    has_discount = Column(Boolean, nullable=False, default=False)
    discount_percentage = Column(DECIMAL(5, 2), default=0)

    updated_at = Column(DateTime, default=func.now(), onupdate=func.now())
