# pawwalk/domains/walk/service/lifecycle_service.py
"""
산책 생명주기 (요청 → 결제 대기 → 예약 → 진행 중 → 종료).

상태 전이 합법성 / 시작 가능 시간(±20분) 판단은 여기서만 합니다.
알림 발송은 하지 않습니다. 성공 후 호출한 쪽에서 처리합니다.
"""

import logging
from datetime import datetime
from decimal import Decimal, InvalidOperation
from typing import Callable, Iterable, List, Optional, Union

from sqlalchemy.orm import Session

from pawwalk.core.time_utils import to_utc_naive, utc_now
from pawwalk.domains.users.repository.user_repository import UserRepository
from pawwalk.domains.walk.exception import WalkException
from pawwalk.domains.walk.formatter import format_walk
from pawwalk.domains.walk.repository.walk_repository import WalkRepository
from pawwalk.domains.walk.service.base_service import BaseWalkService, check_id
from pawwalk.domains.walk.status import (
    START_WINDOW,
    STATUS_LABELS,
    WALK_DURATION,
    can_transition,
    parse_status,
    status_label,
)
from pawwalk.models.user import UserRole
from pawwalk.models.walk import Walk, WalkStatus

logger = logging.getLogger(__name__)

# 예약 시간 검증 시 허용하는 과거 오차 (요청 지연/시계 오차)
REQUEST_PAST_GRACE_MINUTES = 5

# 시간/거리 기록이 가능한 상태
MEASURABLE_STATUSES = frozenset({WalkStatus.ACTIVE, WalkStatus.FINISHED})


class WalkLifecycleService(BaseWalkService):
    def __init__(
        self,
        db: Session,
        walk_repo: Optional[WalkRepository] = None,
        user_repo: Optional[UserRepository] = None,
        clock: Callable[[], datetime] = utc_now,
    ):
        super().__init__(db)
        self.walk_repo = walk_repo or WalkRepository(db)
        self.user_repo = user_repo or UserRepository(db)
        self.clock = clock

    # ============================================
    # 내부 helper
    # ============================================
    def _get_walk_or_404(self, walk_id: int) -> Walk:
        check_id(walk_id, "WALK_400_1")
        with self.reading("WALK_500_2"):
            walk = self.walk_repo.get_walk_by_id(walk_id)
        if walk is None:
            raise WalkException("WALK_404_1")
        return walk

    @staticmethod
    def _parse_status(value: Union[str, WalkStatus, None]) -> WalkStatus:
        try:
            return parse_status(value)
        except ValueError:
            valid = ", ".join(STATUS_LABELS.values())
            raise WalkException(
                "WALK_STATUS_400_1",
                reason=f"유효하지 않은 산책 상태입니다: {value!r}. 가능한 상태: {valid}",
            )

    @staticmethod
    def _parse_scheduled_start(value: Union[str, datetime, None]) -> datetime:
        if value is None or (isinstance(value, str) and not value.strip()):
            raise WalkException("WALK_400_4")

        if isinstance(value, str):
            try:
                # ISO 8601 형식 파싱 (YYYY-MM-DDTHH:mm:ss, Z 허용)
                value = datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
            except ValueError:
                raise WalkException(
                    "WALK_400_4",
                    reason="날짜/시간 형식이 올바르지 않습니다. ISO 8601 형식(YYYY-MM-DDTHH:mm:ss)을 사용해주세요.",
                )

        if not isinstance(value, datetime):
            raise WalkException("WALK_400_4")
        return to_utc_naive(value)

    @staticmethod
    def _parse_price(value) -> Decimal:
        if value is None or isinstance(value, bool):
            raise WalkException("WALK_400_5")
        try:
            price = Decimal(str(value))
        except (InvalidOperation, ValueError):
            raise WalkException("WALK_400_5")
        if not price.is_finite() or price <= 0:
            raise WalkException("WALK_400_5")
        return price

    @staticmethod
    def _unique_pet_ids(pet_ids: Optional[Iterable[int]]) -> List[int]:
        if not pet_ids:
            raise WalkException("WALK_400_6")

        unique: List[int] = []
        for pet_id in pet_ids:
            check_id(pet_id, "WALK_400_6")
            if pet_id not in unique:
                unique.append(pet_id)
        return unique

    def _check_start_window(self, walk: Walk, now: datetime) -> None:
        scheduled = walk.scheduled_start_time
        if abs(now - scheduled) > START_WINDOW:
            minutes = int(START_WINDOW.total_seconds() // 60)
            logger.warning(
                "Walk %s start rejected: now=%s scheduled=%s",
                walk.walk_id, now.isoformat(), scheduled.isoformat(),
            )
            raise WalkException(
                "WALK_STATUS_400_3",
                reason=(
                    f"허용된 시간 밖에서는 산책을 시작할 수 없습니다. "
                    f"산책 예정 시간은 {scheduled.isoformat()} (UTC) 이며, "
                    f"예정 시간 ±{minutes}분 이내에만 시작할 수 있습니다."
                ),
            )

    # ============================================
    # 조회
    # ============================================
    def get_walk(self, walk_id: int) -> dict:
        return format_walk(self._get_walk_or_404(walk_id))

    def validate_walk(self, walk_id: int) -> dict:
        check_id(walk_id, "WALK_400_1")
        with self.reading("WALK_500_2"):
            is_valid = self.walk_repo.exists(walk_id)
        return {"is_valid": is_valid, "walk_id": walk_id}

    def list_walks(self) -> List[dict]:
        with self.reading("WALK_500_2"):
            walks = self.walk_repo.list_walks()
        return [format_walk(w) for w in walks]

    def list_walks_by_status(self, status: Union[str, WalkStatus]) -> List[dict]:
        target = self._parse_status(status)
        with self.reading("WALK_500_2"):
            walks = self.walk_repo.list_by_status(target)
        return [format_walk(w) for w in walks]

    def list_walks_by_walker(self, walker_id: int) -> List[dict]:
        check_id(walker_id, "WALK_400_2")
        with self.reading("WALK_500_2"):
            walks = self.walk_repo.list_by_walker(walker_id)
        return [format_walk(w) for w in walks]

    def list_walks_by_owner(self, owner_id: int) -> List[dict]:
        check_id(owner_id, "WALK_400_3")
        with self.reading("WALK_500_2"):
            walks = self.walk_repo.list_by_owner(owner_id)
        return [format_walk(w) for w in walks]

    # ============================================
    # 생성
    # ============================================
    def request_walk(
        self,
        walker_id: int,
        owner_id: int,
        pet_ids: Optional[Iterable[int]],
        scheduled_start: Union[str, datetime, None],
        start_address: Optional[str],
        total_price,
    ) -> dict:
        # 1) 입력값 검증
        check_id(walker_id, "WALK_400_2")
        check_id(owner_id, "WALK_400_3")
        scheduled_start_time = self._parse_scheduled_start(scheduled_start)
        price = self._parse_price(total_price)
        unique_pet_ids = self._unique_pet_ids(pet_ids)

        if not isinstance(start_address, str) or not start_address.strip():
            raise WalkException("WALK_400_7")

        now = self.clock()
        if (now - scheduled_start_time).total_seconds() > REQUEST_PAST_GRACE_MINUTES * 60:
            raise WalkException("WALK_400_8")

        # 2) 참여자 확인 (존재 + 역할)
        with self.reading("WALK_500_2"):
            walker = self.user_repo.get_user_by_id(walker_id)
            owner = self.user_repo.get_user_by_id(owner_id)

        if walker is None or walker.role != UserRole.WALKER:
            raise WalkException("WALK_400_13", reason=f"존재하지 않거나 산책자 계정이 아닌 사용자입니다: {walker_id}")
        if owner is None or owner.role != UserRole.OWNER:
            raise WalkException("WALK_400_14", reason=f"존재하지 않거나 보호자 계정이 아닌 사용자입니다: {owner_id}")

        # 3) 반려동물 확인 (존재 + 보호자 소유)
        with self.reading("WALK_500_2"):
            pets = self.walk_repo.get_pets(unique_pet_ids)

        found = {p.pet_id: p for p in pets}
        missing = [pid for pid in unique_pet_ids if pid not in found]
        if missing:
            raise WalkException("WALK_400_6", reason=f"존재하지 않는 반려동물입니다: {missing}")

        not_owned = [pid for pid in unique_pet_ids if found[pid].owner_id != owner_id]
        if not_owned:
            raise WalkException("WALK_400_6", reason=f"보호자의 반려동물이 아닙니다: {not_owned}")

        # 4) 저장 (예정 종료 = 시작 + 1시간 고정)
        with self.transaction("WALK_500_1"):
            walk = self.walk_repo.create_walk(
                walker_id=walker_id,
                owner_id=owner_id,
                pets=[found[pid] for pid in unique_pet_ids],
                scheduled_start_time=scheduled_start_time,
                scheduled_end_time=scheduled_start_time + WALK_DURATION,
                start_address=start_address.strip(),
                total_price=price,
            )
            walk_id = walk.walk_id

        logger.info("Walk %s requested: walker=%s owner=%s pets=%s", walk_id, walker_id, owner_id, unique_pet_ids)
        return self.get_walk(walk_id)

    # ============================================
    # 상태 전이
    # ============================================
    def transition(self, walk_id: int, target_status: Union[str, WalkStatus]) -> dict:
        target = self._parse_status(target_status)
        walk = self._get_walk_or_404(walk_id)
        current = walk.status

        if not can_transition(current, target):
            logger.warning("Walk %s illegal transition: %s -> %s", walk_id, current.value, target.value)
            raise WalkException(
                "WALK_STATUS_400_2",
                reason=(
                    f"산책 상태를 '{status_label(current)}'에서 "
                    f"'{status_label(target)}'(으)로 변경할 수 없습니다."
                ),
            )

        now = self.clock()
        fields = {}
        if target == WalkStatus.ACTIVE:
            self._check_start_window(walk, now)
            fields["actual_start_time"] = now
        elif target == WalkStatus.FINISHED:
            fields["actual_end_time"] = now
            if walk.duration_min is None and walk.actual_start_time is not None:
                fields["duration_min"] = max(0, int((now - walk.actual_start_time).total_seconds() // 60))

        with self.transaction("WALK_STATUS_500_1"):
            # 읽은 시점의 version 그대로일 때만 반영
            updated = self.walk_repo.update_status(walk.walk_id, walk.version, target, **fields)
            if not updated:
                logger.warning("Walk %s concurrent status change detected (version=%s)", walk_id, walk.version)
                raise WalkException("WALK_STATUS_409_1")

        logger.info("Walk %s status changed: %s -> %s", walk_id, current.value, target.value)
        # commit 후 만료된 객체를 다시 읽어 최신 상태로 응답
        self.db.expire_all()
        return self.get_walk(walk_id)

    def accept_request(self, walk_id: int) -> dict:
        return self.transition(walk_id, WalkStatus.AWAITING_PAYMENT)

    def reject_request(self, walk_id: int) -> dict:
        return self.transition(walk_id, WalkStatus.REJECTED)

    def confirm_payment(self, walk_id: int) -> dict:
        return self.transition(walk_id, WalkStatus.SCHEDULED)

    def start_walk(self, walk_id: int) -> dict:
        return self.transition(walk_id, WalkStatus.ACTIVE)

    def finish_walk(self, walk_id: int) -> dict:
        return self.transition(walk_id, WalkStatus.FINISHED)

    def cancel_walk(self, walk_id: int) -> dict:
        return self.transition(walk_id, WalkStatus.CANCELLED)

    # ============================================
    # 상태 외 정보 수정 / 삭제
    # ============================================
    def update_walk(
        self,
        walk_id: int,
        duration_min: Optional[int] = None,
        distance_km: Optional[float] = None,
        walker_notes: Optional[str] = None,
        admin_notes: Optional[str] = None,
    ) -> dict:
        fields = {
            name: value
            for name, value in (
                ("duration_min", duration_min),
                ("distance_km", distance_km),
                ("walker_notes", walker_notes),
                ("admin_notes", admin_notes),
            )
            if value is not None
        }
        if not fields:
            raise WalkException("WALK_400_9")
        if "duration_min" in fields and fields["duration_min"] < 0:
            raise WalkException("WALK_400_10")
        if "distance_km" in fields and fields["distance_km"] < 0:
            raise WalkException("WALK_400_11")

        walk = self._get_walk_or_404(walk_id)
        if ("duration_min" in fields or "distance_km" in fields) and walk.status not in MEASURABLE_STATUSES:
            raise WalkException(
                "WALK_400_12",
                reason=f"'{status_label(walk.status)}' 상태의 산책에는 시간/거리를 기록할 수 없습니다.",
            )

        with self.transaction("WALK_500_1"):
            self.walk_repo.update_fields(walk, **fields)

        return self.get_walk(walk_id)

    def delete_walk(self, walk_id: int) -> dict:
        walk = self._get_walk_or_404(walk_id)
        with self.transaction("WALK_500_1"):
            self.walk_repo.delete_walk(walk)

        logger.info("Walk %s deleted", walk_id)
        return {"message": "산책이 삭제되었습니다.", "walk_id": walk_id}
