from sqlalchemy import Column, Integer, DECIMAL, DateTime, String, ForeignKey
from sqlalchemy.sql import func
from pawwalk.models.base import Base


class Payment(Base):
    __tablename__ = "payments"

    payment_id = Column(Integer, primary_key=True, autoincrement=True)
    walk_id = Column(Integer, ForeignKey("walks.walk_id", ondelete="CASCADE"), nullable=False, index=True)

    amount = Column(DECIMAL(10, 2), nullable=False)
    payment_method = Column(String(50))
    transaction_id = Column(String(100))
    status = Column(String(30), nullable=False, default="pending")
    notes = Column(String(255))

    payment_date = Column(DateTime)
    created_at = Column(DateTime, default=func.now())
