from pydantic import BaseModel, Field
from typing import Optional, List

from pawwalk.schemas.error_schema import BaseResponse


class ReceiptWalk(BaseModel):
    scheduled_start_time: Optional[str] = Field(None, description="예정 시작 시간")
    actual_start_time: Optional[str] = Field(None, description="실제 시작 시간")
    scheduled_end_time: Optional[str] = Field(None, description="예정 종료 시간")
    actual_end_time: Optional[str] = Field(None, description="실제 종료 시간")
    start_address: Optional[str] = Field(None, description="출발 주소")
    duration_min: Optional[int] = Field(None, description="산책 시간 (분)")
    distance_km: Optional[float] = Field(None, description="산책 거리 (km)")
    total_price: Optional[float] = Field(None, description="총 금액")
    status: Optional[str] = Field(None, description="산책 상태")


class ReceiptPerson(BaseModel):
    id: Optional[int] = Field(None, description="사용자 ID")
    name: Optional[str] = Field(None, description="이름")
    email: Optional[str] = Field(None, description="이메일")
    phone: Optional[str] = Field(None, description="전화번호")
    image: Optional[str] = Field(None, description="프로필 이미지 URL")


class ReceiptPets(BaseModel):
    names: List[str] = Field(default_factory=list, description="반려동물 이름")
    ids: List[int] = Field(default_factory=list, description="반려동물 ID")


class ReceiptWalkerSettings(BaseModel):
    had_discount: bool = Field(False, description="할인 적용 여부")
    discount_percentage: Optional[float] = Field(None, description="할인율 (%)")


class ReceiptCreatedAt(BaseModel):
    walk: Optional[str] = Field(None, description="산책 생성 시간")
    payment: Optional[str] = Field(None, description="결제 생성 시간")


class ReceiptDetail(BaseModel):
    """영수증 상세"""
    payment_id: Optional[int] = Field(None, description="결제 ID")
    walk_id: Optional[int] = Field(None, description="산책 ID")
    amount_paid: Optional[float] = Field(None, description="결제 금액")
    payment_date: Optional[str] = Field(None, description="결제 일시")
    payment_method: Optional[str] = Field(None, description="결제 수단")
    transaction_id: Optional[str] = Field(None, description="거래 ID")
    payment_status: Optional[str] = Field(None, description="결제 상태")
    payment_notes: Optional[str] = Field(None, description="결제 메모")
    walk: ReceiptWalk
    walker: ReceiptPerson
    owner: ReceiptPerson
    pets: ReceiptPets
    walker_settings: ReceiptWalkerSettings
    created_at: ReceiptCreatedAt


class ReceiptSummary(BaseModel):
    """영수증 목록 항목"""
    payment_id: Optional[int] = Field(None, description="결제 ID")
    walk_id: Optional[int] = Field(None, description="산책 ID")
    amount_paid: Optional[float] = Field(None, description="결제 금액")
    payment_date: Optional[str] = Field(None, description="결제 일시")
    payment_method: Optional[str] = Field(None, description="결제 수단")
    payment_status: Optional[str] = Field(None, description="결제 상태")
    scheduled_start_time: Optional[str] = Field(None, description="예정 시작 시간")
    start_address: Optional[str] = Field(None, description="출발 주소")
    walk_status: Optional[str] = Field(None, description="산책 상태")
    walker_name: Optional[str] = Field(None, description="산책자 이름")
    owner_name: Optional[str] = Field(None, description="보호자 이름")
    pet_names: List[str] = Field(default_factory=list, description="반려동물 이름")


class ReceiptResponse(BaseResponse):
    receipt: ReceiptDetail = Field(..., description="영수증")


class ReceiptListResponse(BaseResponse):
    receipts: List[ReceiptSummary] = Field(default_factory=list, description="영수증 목록")
    total: int = Field(..., description="전체 개수")
    user_id: int = Field(..., description="사용자 ID")
    user_type: str = Field(..., description="owner 또는 walker")
