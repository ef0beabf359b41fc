# pawwalk/domains/walk/repository/walker_setting_repository.py

from typing import Optional

from sqlalchemy.orm import Session

from pawwalk.models.walker_setting import WalkerSetting


class WalkerSettingRepository:
    """
    산책자 GPS 설정 조회/수정.
    GpsFanoutService 에는 is_gps_tracking_enabled 만 노출됩니다.
    """

    def __init__(self, db: Session):
        self.db = db

    def get_by_walker_id(self, walker_id: int) -> Optional[WalkerSetting]:
        return (
            self.db.query(WalkerSetting)
            .filter(WalkerSetting.walker_id == walker_id)
            .first()
        )

    def is_gps_tracking_enabled(self, walker_id: int) -> bool:
        setting = self.get_by_walker_id(walker_id)
        if setting is None:
            return False
        # 요금제에 트래커가 있고, 산책자가 켜 둔 경우만
        return bool(setting.has_gps_tracker and setting.gps_tracking_enabled)

    def get_or_create(self, walker_id: int) -> WalkerSetting:
        setting = self.get_by_walker_id(walker_id)
        if setting is None:
            setting = WalkerSetting(
                walker_id=walker_id,
                has_gps_tracker=False,
                gps_tracking_enabled=False,
                gps_tracking_interval=30,
                has_discount=False,
            )
            self.db.add(setting)
            self.db.flush()
        return setting

    def update_gps_settings(
        self,
        walker_id: int,
        enabled: Optional[bool] = None,
        interval: Optional[int] = None,
    ) -> WalkerSetting:
        setting = self.get_or_create(walker_id)
        if enabled is not None:
            setting.gps_tracking_enabled = enabled
        if interval is not None:
            setting.gps_tracking_interval = interval
        self.db.flush()
        return setting
