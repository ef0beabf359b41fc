# pawwalk/domains/walk/service/walker_setting_service.py

import logging
from typing import Optional

from sqlalchemy.orm import Session

from pawwalk.domains.walk.exception import WalkException
from pawwalk.domains.walk.repository.walker_setting_repository import WalkerSettingRepository
from pawwalk.domains.walk.service.base_service import BaseWalkService, check_id

logger = logging.getLogger(__name__)

GPS_INTERVAL_MIN = 10
GPS_INTERVAL_MAX = 300


def _format_settings(walker_id: int, setting) -> dict:
    if setting is None:
        return {
            "walker_id": walker_id,
            "has_gps_tracker": False,
            "gps_tracking_enabled": False,
            "gps_tracking_interval": 30,
            "tracking_active": False,
        }
    return {
        "walker_id": walker_id,
        "has_gps_tracker": bool(setting.has_gps_tracker),
        "gps_tracking_enabled": bool(setting.gps_tracking_enabled),
        "gps_tracking_interval": setting.gps_tracking_interval,
        "tracking_active": bool(setting.has_gps_tracker and setting.gps_tracking_enabled),
    }


class WalkerSettingService(BaseWalkService):
    def __init__(self, db: Session, settings_repo: Optional[WalkerSettingRepository] = None):
        super().__init__(db)
        self.settings_repo = settings_repo or WalkerSettingRepository(db)

    def get_gps_settings(self, walker_id: int) -> dict:
        check_id(walker_id, "WALK_400_2")
        with self.reading("WALK_MAP_500_2"):
            setting = self.settings_repo.get_by_walker_id(walker_id)
            return _format_settings(walker_id, setting)

    def update_gps_settings(
        self,
        walker_id: int,
        enabled: Optional[bool] = None,
        interval: Optional[int] = None,
    ) -> dict:
        check_id(walker_id, "WALK_400_2")
        if interval is not None and not GPS_INTERVAL_MIN <= interval <= GPS_INTERVAL_MAX:
            raise WalkException("WALK_MAP_400_4")

        with self.transaction("WALK_MAP_500_2"):
            self.settings_repo.update_gps_settings(walker_id, enabled=enabled, interval=interval)

        logger.info("GPS settings updated for walker %s: enabled=%s interval=%s", walker_id, enabled, interval)
        return self.get_gps_settings(walker_id)
