from datetime import timedelta
from typing import Dict, FrozenSet, Union

from pawwalk.models.walk import WalkStatus


# 상태 전이표 (현재 상태 → 이동 가능한 상태)
ALLOWED_TRANSITIONS: Dict[WalkStatus, FrozenSet[WalkStatus]] = {
    WalkStatus.REQUESTED: frozenset({
        WalkStatus.AWAITING_PAYMENT,
        WalkStatus.REJECTED,
        WalkStatus.CANCELLED,
    }),
    WalkStatus.AWAITING_PAYMENT: frozenset({WalkStatus.SCHEDULED, WalkStatus.CANCELLED}),
    WalkStatus.SCHEDULED: frozenset({WalkStatus.ACTIVE, WalkStatus.CANCELLED}),
    WalkStatus.ACTIVE: frozenset({WalkStatus.FINISHED}),
    WalkStatus.FINISHED: frozenset(),
    WalkStatus.REJECTED: frozenset(),
    WalkStatus.CANCELLED: frozenset(),
}

TERMINAL_STATUSES: FrozenSet[WalkStatus] = frozenset(
    status for status, targets in ALLOWED_TRANSITIONS.items() if not targets
)

# 산책 시작 가능 구간 (예정 시간 기준 ±)
START_WINDOW = timedelta(minutes=20)

# 산책 길이 (생성 시 예정 종료 시간 계산용)
WALK_DURATION = timedelta(hours=1)


# 화면 표시용 문자열 ↔ 내부 enum (경계에서만 사용)
STATUS_LABELS: Dict[WalkStatus, str] = {
    WalkStatus.REQUESTED: "Requested",
    WalkStatus.AWAITING_PAYMENT: "Awaiting payment",
    WalkStatus.SCHEDULED: "Scheduled",
    WalkStatus.ACTIVE: "Active",
    WalkStatus.FINISHED: "Finished",
    WalkStatus.REJECTED: "Rejected",
    WalkStatus.CANCELLED: "Cancelled",
}

_LABEL_TO_STATUS: Dict[str, WalkStatus] = {
    label.lower(): status for status, label in STATUS_LABELS.items()
}


def can_transition(current: WalkStatus, target: WalkStatus) -> bool:
    return target in ALLOWED_TRANSITIONS[current]


def status_label(status: WalkStatus) -> str:
    return STATUS_LABELS[status]


def parse_status(value: Union[str, WalkStatus, None]) -> WalkStatus:
    """
    enum 값('awaiting_payment') 또는 표시 문자열('Awaiting payment')을 WalkStatus로 변환.
    알 수 없는 값이면 ValueError.
    """
    if isinstance(value, WalkStatus):
        return value
    if not isinstance(value, str) or not value.strip():
        raise ValueError(f"invalid walk status: {value!r}")

    normalized = value.strip().lower()
    try:
        return WalkStatus(normalized)
    except ValueError:
        pass

    status = _LABEL_TO_STATUS.get(normalized)
    if status is None:
        raise ValueError(f"invalid walk status: {value!r}")
    return status
