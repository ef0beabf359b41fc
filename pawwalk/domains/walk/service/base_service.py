# pawwalk/domains/walk/service/base_service.py

import logging
from contextlib import contextmanager

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from pawwalk.domains.walk.exception import WalkException

logger = logging.getLogger(__name__)


class BaseWalkService:
    """
    산책 도메인 서비스 공통 부분.
    저장소 오류(SQLAlchemyError)는 재시도 없이 500 계열 WalkException 으로 바꿉니다.
    """

    def __init__(self, db: Session):
        self.db = db

    @contextmanager
    def transaction(self, error_code: str):
        """
        with self.transaction("WALK_500_1"):
            ...  # 정상 종료 시 commit, 예외 시 rollback
        """
        try:
            yield self.db
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error("Transaction failed (%s): %s", error_code, e, exc_info=True)
            raise WalkException(error_code) from e
        except Exception:
            self.db.rollback()
            raise

    @contextmanager
    def reading(self, error_code: str):
        try:
            yield self.db
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error("Query failed (%s): %s", error_code, e, exc_info=True)
            raise WalkException(error_code) from e


def check_id(value, code: str) -> int:
    """양의 정수 ID만 허용"""
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        raise WalkException(code)
    return value
