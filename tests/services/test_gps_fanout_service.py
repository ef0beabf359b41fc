from unittest.mock import Mock

import pytest
from sqlalchemy.exc import OperationalError

from pawwalk.domains.walk.exception import WalkException
from pawwalk.domains.walk.repository.walk_map_repository import WalkMapRepository
from pawwalk.domains.walk.service.gps_service import FanoutOutcome, FanoutResult, GpsFanoutService
from pawwalk.models import WalkLocation, WalkMap, WalkStatus

from conftest import NOW


@pytest.fixture
def service(db, geocoder, clock):
    return GpsFanoutService(db, geocoder, clock=clock)


@pytest.fixture
def tracking_walker(walker, make_setting):
    make_setting(walker, has_gps_tracker=True, gps_tracking_enabled=True)
    return walker


class TestFanoutResult:
    def test_counts(self):
        result = FanoutResult(
            walker_id=1,
            outcomes=[
                FanoutOutcome(walk_id=10, location={"location_id": 1}),
                FanoutOutcome(walk_id=11, error="boom"),
                FanoutOutcome(walk_id=12, location={"location_id": 2}),
            ],
        )

        assert result.eligible_count == 3
        assert result.saved_count == 2
        assert [o.walk_id for o in result.failed] == [11]
        assert result.to_dict()["failed_walk_ids"] == [11]
        assert [item["walk_id"] for item in result.to_dict()["locations"]] == [10, 12]


class TestCoordinateValidation:
    @pytest.mark.parametrize(
        "lat, lng, code",
        [
            (None, 10.0, "WALK_MAP_400_1"),
            (10.0, None, "WALK_MAP_400_1"),
            ("abc", 10.0, "WALK_MAP_400_1"),
            (float("nan"), 10.0, "WALK_MAP_400_1"),
            (90.0001, 10.0, "WALK_MAP_400_2"),
            (-91, 10.0, "WALK_MAP_400_2"),
            (10.0, 180.5, "WALK_MAP_400_3"),
            (10.0, -181, "WALK_MAP_400_3"),
        ],
    )
    def test_invalid(self, lat, lng, code):
        with pytest.raises(WalkException) as exc:
            GpsFanoutService.validate_coordinates(lat, lng)
        assert exc.value.code == code

    def test_bounds_inclusive(self):
        assert GpsFanoutService.validate_coordinates(-90, 180) == (-90.0, 180.0)
        assert GpsFanoutService.validate_coordinates("45.5", "-73.6") == (45.5, -73.6)

    def test_invalid_coordinates_checked_before_lookup(self, db, geocoder):
        walk_repo = Mock()
        service = GpsFanoutService(db, geocoder, walk_repo=walk_repo)

        with pytest.raises(WalkException):
            service.report_position(1, 200, 0)
        walk_repo.list_walk_ids_by_walker_and_status.assert_not_called()


class TestReportPosition:
    def test_no_eligible_walks(self, db, service, tracking_walker, owner, make_walk):
        make_walk(tracking_walker, owner, status=WalkStatus.SCHEDULED)

        result = service.report_position(tracking_walker.user_id, 40.0, -3.7)

        assert result.eligible_count == 0
        assert result.saved_count == 0
        assert db.query(WalkLocation).count() == 0

    def test_tracking_disabled_saves_nothing(self, db, service, walker, owner, make_walk, make_setting):
        make_setting(walker, has_gps_tracker=True, gps_tracking_enabled=False)
        make_walk(walker, owner, status=WalkStatus.ACTIVE)

        result = service.report_position(walker.user_id, 40.0, -3.7)

        assert result.eligible_count == 0
        assert db.query(WalkLocation).count() == 0

    def test_plan_without_tracker_saves_nothing(self, db, service, walker, owner, make_walk, make_setting):
        make_setting(walker, has_gps_tracker=False, gps_tracking_enabled=True)
        make_walk(walker, owner, status=WalkStatus.ACTIVE)

        assert service.report_position(walker.user_id, 40.0, -3.7).eligible_count == 0

    def test_walker_without_settings(self, service, walker, owner, make_walk):
        make_walk(walker, owner, status=WalkStatus.ACTIVE)
        assert service.report_position(walker.user_id, 40.0, -3.7).eligible_count == 0

    def test_fans_out_to_every_active_walk(self, db, service, tracking_walker, owner, make_user, make_walk):
        second_owner = make_user(name="Sam")
        first = make_walk(tracking_walker, owner, status=WalkStatus.ACTIVE)
        second = make_walk(tracking_walker, second_owner, status=WalkStatus.ACTIVE)
        make_walk(tracking_walker, owner, status=WalkStatus.SCHEDULED)
        make_walk(tracking_walker, owner, status=WalkStatus.FINISHED)

        result = service.report_position(tracking_walker.user_id, 40.4168, -3.7038, altitude=650)

        assert result.eligible_count == 2
        assert result.saved_count == 2
        assert sorted(o.walk_id for o in result.saved) == sorted([first.walk_id, second.walk_id])

        maps = db.query(WalkMap).all()
        assert len(maps) == 2
        locations = db.query(WalkLocation).all()
        assert len(locations) == 2
        assert all(loc.recorded_at == NOW for loc in locations)
        assert all(float(loc.elevation) == 650.0 for loc in locations)

    def test_does_not_touch_other_walkers(self, db, service, tracking_walker, owner, make_user, make_walk, make_setting):
        other = make_user(name="Other walker", role=tracking_walker.role)
        make_setting(other)
        make_walk(other, owner, status=WalkStatus.ACTIVE)

        result = service.report_position(tracking_walker.user_id, 1.0, 1.0)

        assert result.eligible_count == 0
        assert db.query(WalkLocation).count() == 0

    def test_partial_failure_keeps_other_saves(self, db, geocoder, clock, tracking_walker, owner, make_walk):
        first = make_walk(tracking_walker, owner, status=WalkStatus.ACTIVE)
        broken = make_walk(tracking_walker, owner, status=WalkStatus.ACTIVE)
        third = make_walk(tracking_walker, owner, status=WalkStatus.ACTIVE)
        broken_id = broken.walk_id

        real_repo = WalkMapRepository(db)

        def append_location(walk_id, **kwargs):
            if walk_id == broken_id:
                raise OperationalError("INSERT INTO walk_locations", {}, Exception("disk I/O error"))
            return real_repo.append_location(walk_id=walk_id, **kwargs)

        map_repo = Mock(wraps=real_repo)
        map_repo.append_location.side_effect = append_location
        service = GpsFanoutService(db, geocoder, map_repo=map_repo, clock=clock)

        result = service.report_position(tracking_walker.user_id, 10.0, 20.0)

        assert result.eligible_count == 3
        assert result.saved_count == 2
        assert [o.walk_id for o in result.failed] == [broken_id]
        assert "disk I/O error" in result.failed[0].error

        saved_walk_ids = {m.walk_id for m in db.query(WalkMap).all()}
        assert saved_walk_ids == {first.walk_id, third.walk_id}

    def test_existing_points_are_kept(self, db, service, tracking_walker, owner, make_walk):
        walk = make_walk(tracking_walker, owner, status=WalkStatus.ACTIVE)

        service.report_position(tracking_walker.user_id, 10.0, 20.0)
        service.report_position(tracking_walker.user_id, 10.5, 20.5)

        route = service.get_route(walk.walk_id)
        assert [loc["latitude"] for loc in route["locations"]] == [10.0, 10.5]


class TestRoute:
    def test_route_before_any_report(self, service, walker, owner, make_walk):
        walk = make_walk(walker, owner, status=WalkStatus.ACTIVE)

        route = service.get_route(walk.walk_id)

        assert route == {"has_map": False, "map_id": None, "walk_id": walk.walk_id, "locations": []}

    def test_route_after_report_resolves_address(self, service, tracking_walker, owner, make_walk):
        walk = make_walk(tracking_walker, owner, status=WalkStatus.ACTIVE)
        service.report_position(tracking_walker.user_id, 40.4168, -3.7038)

        route = service.get_route(walk.walk_id)

        assert route["has_map"] is True
        assert len(route["locations"]) == 1
        location = route["locations"][0]
        assert location["address"] == "Lat: 40.416800, Lng: -3.703800"
        assert location["recorded_at"] == NOW.isoformat()

    def test_route_uses_injected_geocoder(self, db, clock, tracking_walker, owner, make_walk):
        geocoder = Mock()
        geocoder.resolve.return_value = "Puerta del Sol, Madrid"
        service = GpsFanoutService(db, geocoder, clock=clock)
        walk = make_walk(tracking_walker, owner, status=WalkStatus.ACTIVE)
        service.report_position(tracking_walker.user_id, 40.4168, -3.7038)

        route = service.get_route(walk.walk_id)

        assert route["locations"][0]["address"] == "Puerta del Sol, Madrid"
        geocoder.resolve.assert_called_once()

    def test_route_for_missing_walk(self, service):
        with pytest.raises(WalkException) as exc:
            service.get_route(9999)
        assert exc.value.code == "WALK_MAP_404_1"

    def test_availability(self, service, tracking_walker, owner, make_walk):
        walk = make_walk(tracking_walker, owner, status=WalkStatus.ACTIVE)
        assert service.check_map_availability(walk.walk_id)["has_map"] is False

        service.report_position(tracking_walker.user_id, 1.0, 2.0)
        service.report_position(tracking_walker.user_id, 1.1, 2.1)

        availability = service.check_map_availability(walk.walk_id)
        assert availability["has_map"] is True
        assert availability["location_count"] == 2
