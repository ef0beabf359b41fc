from fastapi import APIRouter, Request, Depends, Path
from sqlalchemy.orm import Session

from pawwalk.core.auth import AuthContext, get_auth_context, require_walker
from pawwalk.core.response import success_response
from pawwalk.db import get_db
from pawwalk.domains.walk.exception import LOCATION_RESPONSES, ROUTE_RESPONSES
from pawwalk.domains.walk.service.geocoding_service import GeocodingService, get_geocoder
from pawwalk.domains.walk.service.gps_service import GpsFanoutService
from pawwalk.schemas.walk.walk_map_schema import (
    LocationReportRequest,
    LocationReportResponse,
    RouteResponse,
    MapAvailabilityResponse,
)


router = APIRouter(
    prefix="/api/v1/walk-maps",
    tags=["WalkMap"]
)


@router.post(
    "/location",
    summary="산책자 현재 위치 저장",
    description="""
    산책자의 현재 위치 1건을 진행 중(Active)인 모든 산책 경로에 저장합니다.

    - 산책자 GPS 설정(요금제 + 사용 여부)이 꺼져 있으면 아무것도 저장하지 않습니다.
    - 일부 산책 저장이 실패해도 나머지는 저장되며, 실패한 산책 ID를 함께 돌려줍니다.
    """,
    response_model=LocationReportResponse,
    responses=LOCATION_RESPONSES,
)
def report_location(
    request: Request,
    body: LocationReportRequest,
    auth: AuthContext = Depends(require_walker),
    geocoder: GeocodingService = Depends(get_geocoder),
    db: Session = Depends(get_db),
):
    service = GpsFanoutService(db, geocoder)
    result = service.report_position(
        walker_id=auth.user_id,
        latitude=body.latitude,
        longitude=body.longitude,
        altitude=body.altitude,
    )

    if result.eligible_count == 0:
        message = "GPS 추적 중인 진행 산책이 없습니다."
    elif result.failed:
        message = f"{result.eligible_count}건 중 {result.saved_count}건의 산책에 위치가 저장되었습니다."
    else:
        message = f"{result.saved_count}건의 산책에 위치가 저장되었습니다."

    return success_response(request, message=message, **result.to_dict())


@router.get(
    "/walks/{walk_id}/route",
    summary="산책 경로 조회",
    description="기록 순서대로 위치 목록을 돌려줍니다. 주소는 조회 시점에 좌표로부터 계산합니다.",
    response_model=RouteResponse,
    responses=ROUTE_RESPONSES,
)
def get_route(
    request: Request,
    walk_id: int = Path(..., description="산책 ID"),
    auth: AuthContext = Depends(get_auth_context),
    geocoder: GeocodingService = Depends(get_geocoder),
    db: Session = Depends(get_db),
):
    service = GpsFanoutService(db, geocoder)
    return success_response(request, **service.get_route(walk_id))


@router.get(
    "/walks/{walk_id}/availability",
    summary="산책 지도 존재 여부",
    response_model=MapAvailabilityResponse,
    responses=ROUTE_RESPONSES,
)
def check_availability(
    request: Request,
    walk_id: int = Path(..., description="산책 ID"),
    auth: AuthContext = Depends(get_auth_context),
    geocoder: GeocodingService = Depends(get_geocoder),
    db: Session = Depends(get_db),
):
    service = GpsFanoutService(db, geocoder)
    return success_response(request, **service.check_map_availability(walk_id))
