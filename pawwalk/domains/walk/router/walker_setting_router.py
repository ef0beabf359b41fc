from fastapi import APIRouter, Request, Depends
from sqlalchemy.orm import Session

from pawwalk.core.auth import AuthContext, require_walker
from pawwalk.core.response import success_response
from pawwalk.db import get_db
from pawwalk.domains.walk.exception import GPS_SETTINGS_RESPONSES
from pawwalk.domains.walk.service.walker_setting_service import WalkerSettingService
from pawwalk.schemas.walk.walk_map_schema import GpsSettingsRequest, GpsSettingsResponse


router = APIRouter(
    prefix="/api/v1/walkers/me",
    tags=["WalkerSettings"]
)


@router.get(
    "/gps-settings",
    summary="내 GPS 설정 조회",
    response_model=GpsSettingsResponse,
    responses=GPS_SETTINGS_RESPONSES,
)
def get_gps_settings(
    request: Request,
    auth: AuthContext = Depends(require_walker),
    db: Session = Depends(get_db),
):
    service = WalkerSettingService(db)
    return success_response(request, **service.get_gps_settings(auth.user_id))


@router.patch(
    "/gps-settings",
    summary="내 GPS 설정 변경",
    description="요금제 GPS 제공 여부(has_gps_tracker)는 여기서 바꿀 수 없습니다.",
    response_model=GpsSettingsResponse,
    responses=GPS_SETTINGS_RESPONSES,
)
def update_gps_settings(
    request: Request,
    body: GpsSettingsRequest,
    auth: AuthContext = Depends(require_walker),
    db: Session = Depends(get_db),
):
    service = WalkerSettingService(db)
    settings = service.update_gps_settings(
        auth.user_id,
        enabled=body.gps_tracking_enabled,
        interval=body.gps_tracking_interval,
    )
    return success_response(request, **settings)
