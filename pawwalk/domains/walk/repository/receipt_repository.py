# pawwalk/domains/walk/repository/receipt_repository.py

from typing import List, Optional, Tuple

from sqlalchemy.orm import Session, joinedload, selectinload

from pawwalk.models.payment import Payment
from pawwalk.models.walk import Walk
from pawwalk.models.walker_setting import WalkerSetting


class ReceiptRepository:
    """영수증용 조인 조회 (산책 + 결제 + 참여자 + 반려동물)"""

    def __init__(self, db: Session):
        self.db = db

    def _query(self):
        return (
            self.db.query(Walk, Payment)
            .join(Payment, Payment.walk_id == Walk.walk_id)
            .options(
                joinedload(Walk.walker),
                joinedload(Walk.owner),
                selectinload(Walk.pets),
            )
        )

    def get_receipt_row(self, walk_id: int) -> Optional[Tuple[Walk, Payment]]:
        # 결제가 여러 건이면 가장 최근 결제 기준
        return (
            self._query()
            .filter(Walk.walk_id == walk_id)
            .order_by(Payment.created_at.desc(), Payment.payment_id.desc())
            .first()
        )

    def list_receipt_rows(self, user_id: int, user_type: str) -> List[Tuple[Walk, Payment]]:
        query = self._query()
        if user_type == "walker":
            query = query.filter(Walk.walker_id == user_id)
        else:
            query = query.filter(Walk.owner_id == user_id)

        return (
            query
            .order_by(Payment.payment_date.desc(), Payment.payment_id.desc())
            .all()
        )

    def get_walker_setting(self, walker_id: int) -> Optional[WalkerSetting]:
        return (
            self.db.query(WalkerSetting)
            .filter(WalkerSetting.walker_id == walker_id)
            .first()
        )
