import pytest

from pawwalk.domains.walk.exception import WalkException
from pawwalk.domains.walk.service.walker_setting_service import WalkerSettingService


@pytest.fixture
def service(db):
    return WalkerSettingService(db)


class TestGpsSettings:
    def test_defaults_when_missing(self, service, walker):
        settings = service.get_gps_settings(walker.user_id)

        assert settings["gps_tracking_enabled"] is False
        assert settings["gps_tracking_interval"] == 30
        assert settings["tracking_active"] is False

    def test_tracking_active_needs_both_flags(self, service, walker, make_setting):
        make_setting(walker, has_gps_tracker=False, gps_tracking_enabled=True)

        settings = service.get_gps_settings(walker.user_id)

        assert settings["gps_tracking_enabled"] is True
        assert settings["tracking_active"] is False

    def test_update_creates_row(self, service, walker):
        settings = service.update_gps_settings(walker.user_id, enabled=True, interval=60)

        assert settings["gps_tracking_enabled"] is True
        assert settings["gps_tracking_interval"] == 60
        # 요금제 트래커는 여기서 켤 수 없음
        assert settings["has_gps_tracker"] is False

    def test_partial_update_keeps_other_field(self, service, walker, make_setting):
        make_setting(walker, gps_tracking_interval=45)

        settings = service.update_gps_settings(walker.user_id, enabled=False)

        assert settings["gps_tracking_interval"] == 45
        assert settings["gps_tracking_enabled"] is False

    @pytest.mark.parametrize("interval", [9, 301, 0])
    def test_interval_bounds(self, service, walker, interval):
        with pytest.raises(WalkException) as exc:
            service.update_gps_settings(walker.user_id, interval=interval)
        assert exc.value.code == "WALK_MAP_400_4"

    @pytest.mark.parametrize("interval", [10, 300])
    def test_interval_bounds_inclusive(self, service, walker, interval):
        assert service.update_gps_settings(walker.user_id, interval=interval)["gps_tracking_interval"] == interval
