# pawwalk/domains/walk/repository/walk_repository.py

from datetime import datetime
from decimal import Decimal
from typing import Iterable, List, Optional

from sqlalchemy.orm import Session, joinedload, selectinload

from pawwalk.core.time_utils import utc_now
from pawwalk.models.pet import Pet
from pawwalk.models.walk import Walk, WalkStatus


class WalkRepository:
    """
    walks 테이블 접근.
    상태 전이가 합법인지는 판단하지 않습니다 (서비스 책임). 저장/조회만 합니다.
    """

    def __init__(self, db: Session):
        self.db = db

    def _query(self):
        # 산책자/보호자/반려동물 이름까지 한 번에 로딩
        return (
            self.db.query(Walk)
            .options(
                joinedload(Walk.walker),
                joinedload(Walk.owner),
                selectinload(Walk.pets),
            )
        )

    # -------------------------------------------------
    # 조회
    # -------------------------------------------------
    def get_walk_by_id(self, walk_id: int) -> Optional[Walk]:
        return (
            self._query()
            .filter(Walk.walk_id == walk_id)
            .first()
        )

    def exists(self, walk_id: int) -> bool:
        return (
            self.db.query(Walk.walk_id)
            .filter(Walk.walk_id == walk_id)
            .first()
        ) is not None

    def list_walks(self) -> List[Walk]:
        return (
            self._query()
            .order_by(Walk.scheduled_start_time.desc(), Walk.walk_id.desc())
            .all()
        )

    def list_by_status(self, status: WalkStatus) -> List[Walk]:
        return (
            self._query()
            .filter(Walk.status == status)
            .order_by(Walk.scheduled_start_time.asc(), Walk.walk_id.asc())
            .all()
        )

    def list_by_walker(self, walker_id: int) -> List[Walk]:
        return (
            self._query()
            .filter(Walk.walker_id == walker_id)
            .order_by(Walk.scheduled_start_time.desc(), Walk.walk_id.desc())
            .all()
        )

    def list_by_owner(self, owner_id: int) -> List[Walk]:
        return (
            self._query()
            .filter(Walk.owner_id == owner_id)
            .order_by(Walk.scheduled_start_time.desc(), Walk.walk_id.desc())
            .all()
        )

    def list_walk_ids_by_walker_and_status(self, walker_id: int, status: WalkStatus) -> List[int]:
        rows = (
            self.db.query(Walk.walk_id)
            .filter(Walk.walker_id == walker_id)
            .filter(Walk.status == status)
            .order_by(Walk.walk_id.asc())
            .all()
        )
        return [row.walk_id for row in rows]

    def get_pets(self, pet_ids: Iterable[int]) -> List[Pet]:
        return (
            self.db.query(Pet)
            .filter(Pet.pet_id.in_(list(pet_ids)))
            .all()
        )

    # -------------------------------------------------
    # 저장
    # -------------------------------------------------
    def create_walk(
        self,
        walker_id: int,
        owner_id: int,
        pets: List[Pet],
        scheduled_start_time: datetime,
        scheduled_end_time: datetime,
        start_address: str,
        total_price: Decimal,
    ) -> Walk:
        walk = Walk(
            walker_id=walker_id,
            owner_id=owner_id,
            scheduled_start_time=scheduled_start_time,
            scheduled_end_time=scheduled_end_time,
            start_address=start_address,
            total_price=total_price,
            status=WalkStatus.REQUESTED,
            version=1,
        )
        walk.pets = list(pets)
        self.db.add(walk)
        self.db.flush()  # walk_id 확보
        return walk

    def update_status(
        self,
        walk_id: int,
        expected_version: int,
        status: WalkStatus,
        **fields,
    ) -> bool:
        """
        version이 그대로일 때만 상태를 바꿉니다 (compare-and-swap).
        다른 요청이 먼저 바꿨다면 False.
        """
        values = {
            Walk.status: status,
            Walk.version: Walk.version + 1,
            Walk.updated_at: utc_now(),
        }
        for name, value in fields.items():
            values[getattr(Walk, name)] = value

        updated = (
            self.db.query(Walk)
            .filter(Walk.walk_id == walk_id)
            .filter(Walk.version == expected_version)
            .update(values, synchronize_session=False)
        )
        return updated == 1

    def update_fields(self, walk: Walk, **fields) -> Walk:
        # 상태 외 필드(시간/거리/메모)만 변경
        for name, value in fields.items():
            setattr(walk, name, value)
        self.db.flush()
        return walk

    def delete_walk(self, walk: Walk) -> None:
        self.db.delete(walk)
        self.db.flush()
