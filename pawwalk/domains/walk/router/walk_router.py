from fastapi import APIRouter, Request, Depends, Path
from sqlalchemy.orm import Session

from pawwalk.core.auth import AuthContext, get_auth_context, require_admin
from pawwalk.core.response import success_response
from pawwalk.db import get_db
from pawwalk.domains.walk.exception import (
    WALK_LIST_RESPONSES,
    WALK_DETAIL_RESPONSES,
    WALK_CREATE_RESPONSES,
    WALK_UPDATE_RESPONSES,
    WALK_DELETE_RESPONSES,
    WALK_STATUS_RESPONSES,
    RECEIPT_RESPONSES,
)
from pawwalk.domains.walk.service.lifecycle_service import WalkLifecycleService
from pawwalk.domains.walk.service.receipt_service import ReceiptService
from pawwalk.models.walk import WalkStatus
from pawwalk.schemas.walk.walk_schema import (
    WalkCreateRequest,
    WalkUpdateRequest,
    WalkStatusUpdateRequest,
    WalkResponse,
    WalkListResponse,
    WalkValidateResponse,
    WalkDeleteResponse,
)
from pawwalk.schemas.walk.receipt_schema import ReceiptResponse, ReceiptListResponse


router = APIRouter(
    prefix="/api/v1/walks",
    tags=["Walk"]
)


def _list_response(request: Request, walks, **extra):
    return success_response(request, walks=walks, total=len(walks), **extra)


# ============================================
# 목록 조회 (고정 경로를 {walk_id} 보다 먼저 등록)
# ============================================
@router.get(
    "",
    summary="산책 전체 조회",
    response_model=WalkListResponse,
    responses=WALK_LIST_RESPONSES,
)
def list_walks(
    request: Request,
    auth: AuthContext = Depends(get_auth_context),
    db: Session = Depends(get_db),
):
    service = WalkLifecycleService(db)
    return _list_response(request, service.list_walks())


def _status_list_route(path: str, status: WalkStatus, summary: str):
    @router.get(path, summary=summary, response_model=WalkListResponse, responses=WALK_LIST_RESPONSES)
    def _list(
        request: Request,
        auth: AuthContext = Depends(get_auth_context),
        db: Session = Depends(get_db),
    ):
        service = WalkLifecycleService(db)
        return _list_response(request, service.list_walks_by_status(status))

    _list.__name__ = f"list_{status.value}_walks"
    return _list


_status_list_route("/active", WalkStatus.ACTIVE, "진행 중인 산책 조회")
_status_list_route("/scheduled", WalkStatus.SCHEDULED, "예약된 산책 조회")
_status_list_route("/awaiting-payment", WalkStatus.AWAITING_PAYMENT, "결제 대기 산책 조회")
_status_list_route("/requested", WalkStatus.REQUESTED, "요청된 산책 조회")


@router.get(
    "/status/{status}",
    summary="상태별 산책 조회",
    description="상태 값(awaiting_payment) 또는 표시 문자열(Awaiting payment) 모두 허용합니다.",
    response_model=WalkListResponse,
    responses=WALK_LIST_RESPONSES,
)
def list_walks_by_status(
    request: Request,
    status: str = Path(..., description="산책 상태"),
    auth: AuthContext = Depends(get_auth_context),
    db: Session = Depends(get_db),
):
    service = WalkLifecycleService(db)
    return _list_response(request, service.list_walks_by_status(status), filter_status=status)


@router.get(
    "/walker/{walker_id}",
    summary="산책자별 산책 조회",
    response_model=WalkListResponse,
    responses=WALK_LIST_RESPONSES,
)
def list_walks_by_walker(
    request: Request,
    walker_id: int = Path(..., description="산책자 ID"),
    auth: AuthContext = Depends(get_auth_context),
    db: Session = Depends(get_db),
):
    service = WalkLifecycleService(db)
    return _list_response(request, service.list_walks_by_walker(walker_id), walker_id=walker_id)


@router.get(
    "/owner/{owner_id}",
    summary="보호자별 산책 조회",
    response_model=WalkListResponse,
    responses=WALK_LIST_RESPONSES,
)
def list_walks_by_owner(
    request: Request,
    owner_id: int = Path(..., description="보호자 ID"),
    auth: AuthContext = Depends(get_auth_context),
    db: Session = Depends(get_db),
):
    service = WalkLifecycleService(db)
    return _list_response(request, service.list_walks_by_owner(owner_id), owner_id=owner_id)


# ============================================
# 영수증
# ============================================
@router.get(
    "/receipts/{user_type}/{user_id}",
    summary="사용자 영수증 목록",
    description="user_type 은 owner 또는 walker 입니다.",
    response_model=ReceiptListResponse,
    responses=RECEIPT_RESPONSES,
)
def list_receipts(
    request: Request,
    user_type: str = Path(..., description="owner 또는 walker"),
    user_id: int = Path(..., description="사용자 ID"),
    auth: AuthContext = Depends(get_auth_context),
    db: Session = Depends(get_db),
):
    service = ReceiptService(db)
    receipts = service.list_receipts(user_id, user_type)
    return success_response(
        request,
        receipts=receipts,
        total=len(receipts),
        user_id=user_id,
        user_type=user_type,
    )


@router.get(
    "/{walk_id}/receipt",
    summary="산책 영수증 조회",
    response_model=ReceiptResponse,
    responses=RECEIPT_RESPONSES,
)
def get_receipt(
    request: Request,
    walk_id: int = Path(..., description="산책 ID"),
    auth: AuthContext = Depends(get_auth_context),
    db: Session = Depends(get_db),
):
    service = ReceiptService(db)
    return success_response(request, receipt=service.get_receipt(walk_id))


# ============================================
# 단건 조회 / 생성 / 수정 / 삭제
# ============================================
@router.get(
    "/{walk_id}",
    summary="산책 상세 조회",
    response_model=WalkResponse,
    responses=WALK_DETAIL_RESPONSES,
)
def get_walk(
    request: Request,
    walk_id: int = Path(..., description="산책 ID"),
    auth: AuthContext = Depends(get_auth_context),
    db: Session = Depends(get_db),
):
    service = WalkLifecycleService(db)
    return success_response(request, walk=service.get_walk(walk_id))


@router.get(
    "/{walk_id}/validate",
    summary="산책 존재 여부 확인",
    response_model=WalkValidateResponse,
    responses=WALK_DETAIL_RESPONSES,
)
def validate_walk(
    request: Request,
    walk_id: int = Path(..., description="산책 ID"),
    auth: AuthContext = Depends(get_auth_context),
    db: Session = Depends(get_db),
):
    service = WalkLifecycleService(db)
    return success_response(request, **service.validate_walk(walk_id))


@router.post(
    "",
    summary="산책 요청 생성",
    description="보호자가 산책자에게 산책을 요청합니다. 예정 종료 시간은 시작 + 1시간으로 고정됩니다.",
    status_code=201,
    response_model=WalkResponse,
    responses=WALK_CREATE_RESPONSES,
)
def create_walk(
    request: Request,
    body: WalkCreateRequest,
    auth: AuthContext = Depends(get_auth_context),
    db: Session = Depends(get_db),
):
    service = WalkLifecycleService(db)
    walk = service.request_walk(
        walker_id=body.walker_id,
        owner_id=body.owner_id,
        pet_ids=body.pet_ids,
        scheduled_start=body.scheduled_date_time,
        start_address=body.start_address,
        total_price=body.total_price,
    )
    return success_response(request, status=201, message="산책 요청이 생성되었습니다.", walk=walk)


@router.put(
    "/{walk_id}",
    summary="산책 정보 수정",
    description="산책 시간/거리/메모만 수정합니다. 상태는 변경되지 않습니다.",
    response_model=WalkResponse,
    responses=WALK_UPDATE_RESPONSES,
)
def update_walk(
    request: Request,
    body: WalkUpdateRequest,
    walk_id: int = Path(..., description="산책 ID"),
    auth: AuthContext = Depends(get_auth_context),
    db: Session = Depends(get_db),
):
    service = WalkLifecycleService(db)
    walk = service.update_walk(
        walk_id,
        duration_min=body.duration_min,
        distance_km=body.distance_km,
        walker_notes=body.walker_notes,
        admin_notes=body.admin_notes,
    )
    return success_response(request, message="산책 정보가 수정되었습니다.", walk=walk)


@router.delete(
    "/{walk_id}",
    summary="산책 삭제 (관리자)",
    response_model=WalkDeleteResponse,
    responses=WALK_DELETE_RESPONSES,
)
def delete_walk(
    request: Request,
    walk_id: int = Path(..., description="산책 ID"),
    auth: AuthContext = Depends(require_admin),
    db: Session = Depends(get_db),
):
    service = WalkLifecycleService(db)
    return success_response(request, **service.delete_walk(walk_id))


# ============================================
# 상태 변경
# ============================================
@router.patch(
    "/{walk_id}/status",
    summary="산책 상태 변경",
    response_model=WalkResponse,
    responses=WALK_STATUS_RESPONSES,
)
def update_walk_status(
    request: Request,
    body: WalkStatusUpdateRequest,
    walk_id: int = Path(..., description="산책 ID"),
    auth: AuthContext = Depends(get_auth_context),
    db: Session = Depends(get_db),
):
    service = WalkLifecycleService(db)
    walk = service.transition(walk_id, body.status)
    return success_response(
        request,
        message=f"산책 상태가 '{walk['status_label']}'(으)로 변경되었습니다.",
        walk=walk,
    )


def _transition_route(path: str, action: str, message: str, summary: str):
    @router.patch(path, summary=summary, response_model=WalkResponse, responses=WALK_STATUS_RESPONSES)
    def _transition(
        request: Request,
        walk_id: int = Path(..., description="산책 ID"),
        auth: AuthContext = Depends(get_auth_context),
        db: Session = Depends(get_db),
    ):
        service = WalkLifecycleService(db)
        walk = getattr(service, action)(walk_id)
        return success_response(request, message=message, walk=walk)

    _transition.__name__ = action
    return _transition


_transition_route("/{walk_id}/accept", "accept_request", "산책 요청이 수락되었습니다.", "산책 요청 수락 (산책자)")
_transition_route("/{walk_id}/reject", "reject_request", "산책 요청이 거절되었습니다.", "산책 요청 거절 (산책자)")
_transition_route("/{walk_id}/confirm-payment", "confirm_payment", "결제가 확인되어 산책이 예약되었습니다.", "결제 확인")
_transition_route("/{walk_id}/start", "start_walk", "산책이 시작되었습니다.", "산책 시작 (예정 시간 ±20분)")
_transition_route("/{walk_id}/finish", "finish_walk", "산책이 종료되었습니다.", "산책 종료")
_transition_route("/{walk_id}/cancel", "cancel_walk", "산책이 취소되었습니다.", "산책 취소")
