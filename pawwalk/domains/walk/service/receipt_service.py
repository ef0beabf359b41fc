# pawwalk/domains/walk/service/receipt_service.py

import logging
from typing import List, Optional

from sqlalchemy.orm import Session

from pawwalk.domains.walk.exception import WalkException
from pawwalk.domains.walk.formatter import assemble_receipt, assemble_receipt_summary
from pawwalk.domains.walk.repository.receipt_repository import ReceiptRepository
from pawwalk.domains.walk.service.base_service import BaseWalkService, check_id

logger = logging.getLogger(__name__)

USER_TYPES = ("owner", "walker")


class ReceiptService(BaseWalkService):
    def __init__(self, db: Session, receipt_repo: Optional[ReceiptRepository] = None):
        super().__init__(db)
        self.receipt_repo = receipt_repo or ReceiptRepository(db)

    def get_receipt(self, walk_id: int) -> dict:
        check_id(walk_id, "WALK_400_1")

        with self.reading("RECEIPT_500_1"):
            row = self.receipt_repo.get_receipt_row(walk_id)
            if row is None:
                raise WalkException("RECEIPT_404_1")
            walk, payment = row
            walker_setting = self.receipt_repo.get_walker_setting(walk.walker_id)

            return assemble_receipt(
                walk=walk,
                payment=payment,
                walker=walk.walker,
                owner=walk.owner,
                pets=walk.pets,
                walker_setting=walker_setting,
            )

    def list_receipts(self, user_id: int, user_type: str) -> List[dict]:
        check_id(user_id, "RECEIPT_400_1")
        if user_type not in USER_TYPES:
            raise WalkException("RECEIPT_400_2")

        with self.reading("RECEIPT_500_1"):
            rows = self.receipt_repo.list_receipt_rows(user_id, user_type)
            return [
                assemble_receipt_summary(
                    walk=walk,
                    payment=payment,
                    walker=walk.walker,
                    owner=walk.owner,
                    pets=walk.pets,
                )
                for walk, payment in rows
            ]
