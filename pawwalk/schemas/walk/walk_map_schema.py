from pydantic import BaseModel, Field
from typing import Optional, List

from pawwalk.schemas.error_schema import BaseResponse


class LocationReportRequest(BaseModel):
    """산책자 현재 위치 보고"""
    latitude: Optional[float] = Field(None, description="위도 (-90 ~ 90)")
    longitude: Optional[float] = Field(None, description="경도 (-180 ~ 180)")
    altitude: Optional[float] = Field(None, description="고도 (기본 0)")


class LocationItem(BaseModel):
    """산책 위치 포인트"""
    location_id: int = Field(..., description="위치 ID")
    latitude: float = Field(..., description="위도")
    longitude: float = Field(..., description="경도")
    elevation: float = Field(0.0, description="고도")
    address: Optional[str] = Field(None, description="주소 (없으면 좌표 문자열)")
    recorded_at: str = Field(..., description="기록 시간 (ISO 형식, UTC)")


class SavedLocation(BaseModel):
    walk_id: int = Field(..., description="산책 ID")
    location: LocationItem = Field(..., description="저장된 위치")


class LocationReportResponse(BaseResponse):
    """위치 저장 결과"""
    message: str = Field(..., description="처리 결과 메시지")
    saved_count: int = Field(..., description="저장에 성공한 산책 수")
    eligible_count: int = Field(..., description="대상 산책 수")
    failed_walk_ids: List[int] = Field(default_factory=list, description="저장에 실패한 산책 ID")
    locations: List[SavedLocation] = Field(default_factory=list, description="저장된 위치 목록")


class RouteResponse(BaseResponse):
    """산책 경로"""
    has_map: bool = Field(..., description="지도 존재 여부")
    map_id: Optional[int] = Field(None, description="지도 ID")
    walk_id: int = Field(..., description="산책 ID")
    locations: List[LocationItem] = Field(default_factory=list, description="기록 순 위치 목록")


class MapAvailabilityResponse(BaseResponse):
    """지도 존재 여부 / 위치 개수"""
    has_map: bool = Field(..., description="지도 존재 여부")
    map_id: Optional[int] = Field(None, description="지도 ID")
    location_count: int = Field(0, description="위치 개수")


class GpsSettingsRequest(BaseModel):
    """산책자 GPS 설정 변경"""
    gps_tracking_enabled: Optional[bool] = Field(None, description="GPS 추적 사용 여부")
    gps_tracking_interval: Optional[int] = Field(None, description="전송 주기 (초, 10 ~ 300)")


class GpsSettingsResponse(BaseResponse):
    walker_id: int = Field(..., description="산책자 ID")
    has_gps_tracker: bool = Field(..., description="요금제 GPS 제공 여부")
    gps_tracking_enabled: bool = Field(..., description="GPS 추적 사용 여부")
    gps_tracking_interval: int = Field(..., description="전송 주기 (초)")
    tracking_active: bool = Field(..., description="실제로 위치가 저장되는지 여부")
