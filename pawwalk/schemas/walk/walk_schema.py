from pydantic import BaseModel, Field
from typing import Optional, List

from pawwalk.schemas.error_schema import BaseResponse


class WalkCreateRequest(BaseModel):
    """산책 요청 생성"""
    walker_id: Optional[int] = Field(None, description="산책자 ID")
    owner_id: Optional[int] = Field(None, description="보호자 ID")
    pet_ids: Optional[List[int]] = Field(None, description="반려동물 ID 목록 (1개 이상)")
    scheduled_date_time: Optional[str] = Field(
        None, description="산책 예정 시간 (ISO 8601 형식: YYYY-MM-DDTHH:mm:ssZ)"
    )
    start_address: Optional[str] = Field(None, description="출발 주소")
    total_price: Optional[float] = Field(None, description="총 금액 (0보다 커야 함)")


class WalkUpdateRequest(BaseModel):
    """산책 정보 수정 (상태 제외)"""
    duration_min: Optional[int] = Field(None, description="산책 시간 (분)")
    distance_km: Optional[float] = Field(None, description="산책 거리 (km)")
    walker_notes: Optional[str] = Field(None, description="산책자 메모")
    admin_notes: Optional[str] = Field(None, description="관리자 메모")


class WalkStatusUpdateRequest(BaseModel):
    """산책 상태 변경"""
    status: Optional[str] = Field(
        None, description="변경할 상태 (예: 'awaiting_payment' 또는 'Awaiting payment')"
    )


class WalkDetail(BaseModel):
    """산책 정보"""
    walk_id: int = Field(..., description="산책 ID")
    walker_id: int = Field(..., description="산책자 ID")
    owner_id: int = Field(..., description="보호자 ID")
    walker_name: Optional[str] = Field(None, description="산책자 이름")
    owner_name: Optional[str] = Field(None, description="보호자 이름")
    pet_ids: List[int] = Field(default_factory=list, description="반려동물 ID 목록")
    pet_names: List[str] = Field(default_factory=list, description="반려동물 이름 목록")
    dog_name: str = Field("", description="반려동물 이름 (쉼표 구분)")
    status: str = Field(..., description="상태 값 (requested, awaiting_payment, ...)")
    status_label: str = Field(..., description="상태 표시 문자열")
    scheduled_start_time: str = Field(..., description="예정 시작 시간 (ISO 형식, UTC)")
    scheduled_end_time: str = Field(..., description="예정 종료 시간 (시작 + 1시간)")
    actual_start_time: Optional[str] = Field(None, description="실제 시작 시간")
    actual_end_time: Optional[str] = Field(None, description="실제 종료 시간")
    start_address: str = Field(..., description="출발 주소")
    total_price: float = Field(..., description="총 금액")
    duration_min: Optional[int] = Field(None, description="산책 시간 (분)")
    distance_km: Optional[float] = Field(None, description="산책 거리 (km)")
    walker_notes: Optional[str] = Field(None, description="산책자 메모")
    admin_notes: Optional[str] = Field(None, description="관리자 메모")
    version: int = Field(..., description="상태 변경 버전")
    created_at: Optional[str] = Field(None, description="생성 시간")
    updated_at: Optional[str] = Field(None, description="수정 시간")


class WalkResponse(BaseResponse):
    """산책 단건 응답"""
    message: Optional[str] = Field(None, description="처리 결과 메시지")
    walk: WalkDetail = Field(..., description="산책 정보")


class WalkListResponse(BaseResponse):
    """산책 목록 응답"""
    walks: List[WalkDetail] = Field(default_factory=list, description="산책 목록")
    total: int = Field(..., description="전체 개수")


class WalkValidateResponse(BaseResponse):
    """산책 존재 여부"""
    is_valid: bool = Field(..., description="존재 여부")
    walk_id: int = Field(..., description="산책 ID")


class WalkDeleteResponse(BaseResponse):
    """산책 삭제 응답"""
    message: str = Field(..., description="처리 결과 메시지")
    walk_id: int = Field(..., description="삭제된 산책 ID")
