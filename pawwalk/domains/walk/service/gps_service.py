# pawwalk/domains/walk/service/gps_service.py
"""
산책자 GPS 위치 분배.

위치 1건을 그 산책자의 진행 중(Active) + GPS 사용 중인 산책 전부에 저장합니다.
산책마다 별도 트랜잭션으로 저장하고, 한 곳이 실패해도 나머지는 계속 진행합니다.
"""

import logging
import math
from dataclasses import dataclass, field
from datetime import datetime
from typing import Callable, List, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from pawwalk.core.time_utils import utc_now
from pawwalk.domains.walk.exception import WalkException
from pawwalk.domains.walk.formatter import format_location
from pawwalk.domains.walk.repository.walk_map_repository import WalkMapRepository
from pawwalk.domains.walk.repository.walk_repository import WalkRepository
from pawwalk.domains.walk.repository.walker_setting_repository import WalkerSettingRepository
from pawwalk.domains.walk.service.base_service import BaseWalkService, check_id
from pawwalk.domains.walk.service.geocoding_service import GeocodingService
from pawwalk.models.walk import WalkStatus

logger = logging.getLogger(__name__)


@dataclass
class FanoutOutcome:
    """산책 1건에 대한 저장 결과"""
    walk_id: int
    location: Optional[dict] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass
class FanoutResult:
    walker_id: int
    outcomes: List[FanoutOutcome] = field(default_factory=list)

    @property
    def saved(self) -> List[FanoutOutcome]:
        return [o for o in self.outcomes if o.ok]

    @property
    def failed(self) -> List[FanoutOutcome]:
        return [o for o in self.outcomes if not o.ok]

    @property
    def saved_count(self) -> int:
        return len(self.saved)

    @property
    def eligible_count(self) -> int:
        return len(self.outcomes)

    def to_dict(self) -> dict:
        return {
            "saved_count": self.saved_count,
            "eligible_count": self.eligible_count,
            "failed_walk_ids": [o.walk_id for o in self.failed],
            "locations": [
                {"walk_id": o.walk_id, "location": o.location}
                for o in self.saved
            ],
        }


def _coordinate(value) -> Optional[float]:
    if value is None or isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    if math.isnan(number) or math.isinf(number):
        return None
    return number


class GpsFanoutService(BaseWalkService):
    def __init__(
        self,
        db: Session,
        geocoder: GeocodingService,
        walk_repo: Optional[WalkRepository] = None,
        map_repo: Optional[WalkMapRepository] = None,
        settings_repo: Optional[WalkerSettingRepository] = None,
        clock: Callable[[], datetime] = utc_now,
    ):
        super().__init__(db)
        self.geocoder = geocoder
        self.walk_repo = walk_repo or WalkRepository(db)
        self.map_repo = map_repo or WalkMapRepository(db)
        self.settings_repo = settings_repo or WalkerSettingRepository(db)
        self.clock = clock

    # ============================================
    # 위치 보고 (fan-out)
    # ============================================
    @staticmethod
    def validate_coordinates(latitude, longitude):
        lat = _coordinate(latitude)
        lng = _coordinate(longitude)
        if lat is None or lng is None:
            raise WalkException("WALK_MAP_400_1")
        if not -90 <= lat <= 90:
            raise WalkException("WALK_MAP_400_2")
        if not -180 <= lng <= 180:
            raise WalkException("WALK_MAP_400_3")
        return lat, lng

    def find_eligible_walk_ids(self, walker_id: int) -> List[int]:
        """진행 중이면서 산책자 GPS 설정이 켜져 있는 산책 (지도 존재 여부는 무관)"""
        with self.reading("WALK_MAP_500_1"):
            if not self.settings_repo.is_gps_tracking_enabled(walker_id):
                return []
            return self.walk_repo.list_walk_ids_by_walker_and_status(walker_id, WalkStatus.ACTIVE)

    def _append_one(
        self,
        walk_id: int,
        latitude: float,
        longitude: float,
        elevation: float,
        recorded_at: datetime,
    ) -> FanoutOutcome:
        try:
            location = self.map_repo.append_location(
                walk_id=walk_id,
                latitude=latitude,
                longitude=longitude,
                elevation=elevation,
                recorded_at=recorded_at,
            )
            # 주소는 저장하지 않음 (조회 시점에 계산)
            formatted = format_location(location, address=location.address)
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.warning("GPS location save failed: walk=%s error=%s", walk_id, e)
            return FanoutOutcome(walk_id=walk_id, error=str(e))

        return FanoutOutcome(walk_id=walk_id, location=formatted)

    def report_position(
        self,
        walker_id: int,
        latitude,
        longitude,
        altitude=None,
    ) -> FanoutResult:
        # 1) 좌표 검증 (조회 전에)
        lat, lng = self.validate_coordinates(latitude, longitude)
        elevation = _coordinate(altitude) or 0.0
        check_id(walker_id, "WALK_400_2")

        # 2) 대상 산책 조회
        walk_ids = self.find_eligible_walk_ids(walker_id)
        result = FanoutResult(walker_id=walker_id)
        if not walk_ids:
            logger.info("No active GPS-enabled walks for walker %s", walker_id)
            return result

        # 3) 산책별로 독립 저장
        recorded_at = self.clock()
        for walk_id in walk_ids:
            result.outcomes.append(
                self._append_one(walk_id, lat, lng, elevation, recorded_at)
            )

        logger.info(
            "GPS fan-out for walker %s: eligible=%s saved=%s failed=%s",
            walker_id, result.eligible_count, result.saved_count, len(result.failed),
        )
        return result

    # ============================================
    # 경로 조회
    # ============================================
    def _ensure_walk(self, walk_id: int) -> None:
        check_id(walk_id, "WALK_400_1")
        with self.reading("WALK_MAP_500_1"):
            exists = self.walk_repo.exists(walk_id)
        if not exists:
            raise WalkException("WALK_MAP_404_1")

    def get_route(self, walk_id: int) -> dict:
        self._ensure_walk(walk_id)

        with self.reading("WALK_MAP_500_1"):
            walk_map = self.map_repo.get_map_by_walk_id(walk_id)
            if walk_map is None:
                return {"has_map": False, "map_id": None, "walk_id": walk_id, "locations": []}
            locations = self.map_repo.get_locations(walk_map.map_id)

        return {
            "has_map": True,
            "map_id": walk_map.map_id,
            "walk_id": walk_id,
            "locations": [
                format_location(
                    loc,
                    address=loc.address or self.geocoder.resolve(loc.latitude, loc.longitude),
                )
                for loc in locations
            ],
        }

    def check_map_availability(self, walk_id: int) -> dict:
        self._ensure_walk(walk_id)

        with self.reading("WALK_MAP_500_1"):
            walk_map = self.map_repo.get_map_by_walk_id(walk_id)
            if walk_map is None:
                return {"has_map": False, "map_id": None, "location_count": 0}
            count = self.map_repo.count_locations(walk_map.map_id)

        return {"has_map": True, "map_id": walk_map.map_id, "location_count": count}
