# pawwalk/domains/walk/repository/walk_map_repository.py

from datetime import datetime
from typing import List, Optional

from sqlalchemy import func
from sqlalchemy.orm import Session

from pawwalk.models.walk_map import WalkMap, WalkLocation


class WalkMapRepository:
    def __init__(self, db: Session):
        self.db = db

    def get_map_by_walk_id(self, walk_id: int) -> Optional[WalkMap]:
        return (
            self.db.query(WalkMap)
            .filter(WalkMap.walk_id == walk_id)
            .first()
        )

    def get_or_create_map(self, walk_id: int) -> WalkMap:
        # 첫 위치 저장 시점에 지도 생성
        walk_map = self.get_map_by_walk_id(walk_id)
        if walk_map is None:
            walk_map = WalkMap(walk_id=walk_id)
            self.db.add(walk_map)
            self.db.flush()
        return walk_map

    def append_location(
        self,
        walk_id: int,
        latitude: float,
        longitude: float,
        elevation: float,
        recorded_at: datetime,
        address: Optional[str] = None,
    ) -> WalkLocation:
        """위치 1건 추가 (지도가 없으면 생성). 기존 위치는 건드리지 않습니다."""
        walk_map = self.get_or_create_map(walk_id)

        location = WalkLocation(
            map_id=walk_map.map_id,
            latitude=latitude,
            longitude=longitude,
            elevation=elevation,
            address=address,
            recorded_at=recorded_at,
        )
        self.db.add(location)
        self.db.flush()
        return location

    def get_locations(self, map_id: int) -> List[WalkLocation]:
        return (
            self.db.query(WalkLocation)
            .filter(WalkLocation.map_id == map_id)
            .order_by(WalkLocation.recorded_at.asc(), WalkLocation.location_id.asc())
            .all()
        )

    def count_locations(self, map_id: int) -> int:
        return (
            self.db.query(func.count(WalkLocation.location_id))
            .filter(WalkLocation.map_id == map_id)
            .scalar()
        ) or 0
