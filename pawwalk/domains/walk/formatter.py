# pawwalk/domains/walk/formatter.py
"""
산책 / 위치 / 영수증 응답 형태 변환.

DB에서 읽어 온 row(ORM 객체 또는 조인 결과)를 API 응답용 dict로 바꿉니다.
부수 효과 없음 (조회/저장 X). 값이 비어 있어도 예외 없이 None으로 채웁니다.
"""

from datetime import datetime
from typing import Any, Iterable, List, Optional

from pawwalk.domains.walk.status import status_label


def _iso(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value else None


def _float(value: Any) -> Optional[float]:
    if value is None:
        return None
    return float(value)


def _attr(row: Any, name: str, default: Any = None) -> Any:
    if row is None:
        return default
    return getattr(row, name, default)


def _pet_names(pets: Iterable[Any]) -> List[str]:
    return [p.name for p in pets if p is not None and p.name]


# ============================================
# 산책
# ============================================
def format_walk(walk) -> dict:
    """Walk ORM 객체 → 산책 응답 (참여자 이름, 반려동물 이름 포함)"""
    pets = list(walk.pets or [])
    names = _pet_names(pets)

    return {
        "walk_id": walk.walk_id,
        "walker_id": walk.walker_id,
        "owner_id": walk.owner_id,
        "walker_name": _attr(walk.walker, "name"),
        "owner_name": _attr(walk.owner, "name"),
        "pet_ids": [p.pet_id for p in pets],
        "pet_names": names,
        "dog_name": ", ".join(names),
        "status": walk.status.value,
        "status_label": status_label(walk.status),
        "scheduled_start_time": _iso(walk.scheduled_start_time),
        "scheduled_end_time": _iso(walk.scheduled_end_time),
        "actual_start_time": _iso(walk.actual_start_time),
        "actual_end_time": _iso(walk.actual_end_time),
        "start_address": walk.start_address,
        "total_price": _float(walk.total_price),
        "duration_min": walk.duration_min,
        "distance_km": _float(walk.distance_km),
        "walker_notes": walk.walker_notes,
        "admin_notes": walk.admin_notes,
        "version": walk.version,
        "created_at": _iso(walk.created_at),
        "updated_at": _iso(walk.updated_at),
    }


# ============================================
# 위치
# ============================================
def format_location(location, address: Optional[str]) -> dict:
    return {
        "location_id": location.location_id,
        "latitude": _float(location.latitude),
        "longitude": _float(location.longitude),
        "elevation": _float(location.elevation) or 0.0,
        "address": address,
        "recorded_at": _iso(location.recorded_at),
    }


# ============================================
# 영수증
# ============================================
def _person(user) -> dict:
    return {
        "id": _attr(user, "user_id"),
        "name": _attr(user, "name"),
        "email": _attr(user, "email"),
        "phone": _attr(user, "phone"),
        "image": _attr(user, "image_url"),
    }


def assemble_receipt(walk, payment, walker, owner, pets, walker_setting=None) -> dict:
    """
    산책 + 결제 + 참여자 + 반려동물 row → 영수증 상세.
    payment/walker/owner/walker_setting 은 None 이어도 됩니다.
    """
    pets = [p for p in (pets or []) if p is not None]
    walk_status = _attr(walk, "status")

    return {
        "payment_id": _attr(payment, "payment_id"),
        "walk_id": _attr(walk, "walk_id"),
        "amount_paid": _float(_attr(payment, "amount")),
        "payment_date": _iso(_attr(payment, "payment_date")),
        "payment_method": _attr(payment, "payment_method"),
        "transaction_id": _attr(payment, "transaction_id"),
        "payment_status": _attr(payment, "status"),
        "payment_notes": _attr(payment, "notes"),
        "walk": {
            "scheduled_start_time": _iso(_attr(walk, "scheduled_start_time")),
            "actual_start_time": _iso(_attr(walk, "actual_start_time")),
            "scheduled_end_time": _iso(_attr(walk, "scheduled_end_time")),
            "actual_end_time": _iso(_attr(walk, "actual_end_time")),
            "start_address": _attr(walk, "start_address"),
            "duration_min": _attr(walk, "duration_min"),
            "distance_km": _float(_attr(walk, "distance_km")),
            "total_price": _float(_attr(walk, "total_price")),
            "status": walk_status.value if walk_status is not None else None,
        },
        "walker": _person(walker),
        "owner": _person(owner),
        "pets": {
            "names": _pet_names(pets),
            "ids": [p.pet_id for p in pets],
        },
        "walker_settings": {
            "had_discount": bool(_attr(walker_setting, "has_discount", False)),
            "discount_percentage": _float(_attr(walker_setting, "discount_percentage")),
        },
        "created_at": {
            "walk": _iso(_attr(walk, "created_at")),
            "payment": _iso(_attr(payment, "created_at")),
        },
    }


def assemble_receipt_summary(walk, payment, walker, owner, pets) -> dict:
    """목록용 간략 영수증"""
    walk_status = _attr(walk, "status")

    return {
        "payment_id": _attr(payment, "payment_id"),
        "walk_id": _attr(walk, "walk_id"),
        "amount_paid": _float(_attr(payment, "amount")),
        "payment_date": _iso(_attr(payment, "payment_date")),
        "payment_method": _attr(payment, "payment_method"),
        "payment_status": _attr(payment, "status"),
        "scheduled_start_time": _iso(_attr(walk, "scheduled_start_time")),
        "start_address": _attr(walk, "start_address"),
        "walk_status": walk_status.value if walk_status is not None else None,
        "walker_name": _attr(walker, "name"),
        "owner_name": _attr(owner, "name"),
        "pet_names": _pet_names(pets or []),
    }
