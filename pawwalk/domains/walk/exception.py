from dataclasses import dataclass
from typing import Any, Dict, Optional

from pawwalk.schemas.error_schema import ErrorResponse


@dataclass(frozen=True)
class WalkError:
    status: int
    code: str
    reason: str

    def to_dict(self, path: str) -> Dict:
        return {
            "success": False,
            "status": self.status,
            "code": self.code,
            "reason": self.reason,
            "timeStamp": "...",
            "path": path,
        }


# 인증 관련 에러 정의
AUTH_ERRORS: Dict[str, WalkError] = {
    "AUTH_401_1": WalkError(401, "AUTH_401_1", "Authorization 헤더가 필요합니다."),
    "AUTH_401_2": WalkError(401, "AUTH_401_2", "유효하지 않거나 만료된 토큰입니다. 다시 로그인해주세요."),
    "AUTH_403_1": WalkError(403, "AUTH_403_1", "산책자 계정만 사용할 수 있는 기능입니다."),
    "AUTH_403_2": WalkError(403, "AUTH_403_2", "관리자만 사용할 수 있는 기능입니다."),
    "AUTH_404_1": WalkError(404, "AUTH_404_1", "해당 사용자를 찾을 수 없습니다."),
}

# 산책 생성/조회/수정/상태 변경 관련 에러 정의
WALK_ERRORS: Dict[str, WalkError] = {
    "WALK_400_1": WalkError(400, "WALK_400_1", "유효하지 않은 산책 ID입니다."),
    "WALK_400_2": WalkError(400, "WALK_400_2", "유효하지 않은 산책자 ID입니다."),
    "WALK_400_3": WalkError(400, "WALK_400_3", "유효하지 않은 보호자 ID입니다."),
    "WALK_400_4": WalkError(400, "WALK_400_4", "산책 예정 시간이 필요합니다."),
    "WALK_400_5": WalkError(400, "WALK_400_5", "총 금액은 0보다 커야 합니다."),
    "WALK_400_6": WalkError(400, "WALK_400_6", "반려동물을 한 마리 이상 선택해야 합니다."),
    "WALK_400_7": WalkError(400, "WALK_400_7", "출발 주소가 필요합니다."),
    "WALK_400_8": WalkError(400, "WALK_400_8", "산책 예정 시간은 현재 이후여야 합니다."),
    "WALK_400_9": WalkError(400, "WALK_400_9", "수정할 항목이 없습니다."),
    "WALK_400_10": WalkError(400, "WALK_400_10", "산책 시간은 0 이상이어야 합니다."),
    "WALK_400_11": WalkError(400, "WALK_400_11", "산책 거리는 0 이상이어야 합니다."),
    "WALK_400_12": WalkError(400, "WALK_400_12", "산책 시간/거리는 진행 중이거나 종료된 산책에만 기록할 수 있습니다."),
    "WALK_400_13": WalkError(400, "WALK_400_13", "존재하지 않거나 산책자 계정이 아닌 사용자입니다."),
    "WALK_400_14": WalkError(400, "WALK_400_14", "존재하지 않거나 보호자 계정이 아닌 사용자입니다."),
    "WALK_404_1": WalkError(404, "WALK_404_1", "요청하신 산책을 찾을 수 없습니다."),
    "WALK_500_1": WalkError(500, "WALK_500_1", "산책 정보를 저장하는 중 오류가 발생했습니다. 잠시 후 다시 시도해주세요."),
    "WALK_500_2": WalkError(500, "WALK_500_2", "산책 정보를 조회하는 중 오류가 발생했습니다."),
}

STATUS_ERRORS: Dict[str, WalkError] = {
    "WALK_STATUS_400_1": WalkError(400, "WALK_STATUS_400_1", "유효하지 않은 산책 상태입니다."),
    "WALK_STATUS_400_2": WalkError(400, "WALK_STATUS_400_2", "현재 상태에서 요청한 상태로 변경할 수 없습니다."),
    "WALK_STATUS_400_3": WalkError(400, "WALK_STATUS_400_3", "허용된 시간(예정 시간 ±20분) 밖에서는 산책을 시작할 수 없습니다."),
    "WALK_STATUS_409_1": WalkError(409, "WALK_STATUS_409_1", "다른 요청이 먼저 산책 상태를 변경했습니다. 다시 조회 후 시도해주세요."),
    "WALK_STATUS_500_1": WalkError(500, "WALK_STATUS_500_1", "산책 상태를 변경하는 중 오류가 발생했습니다."),
}

WALK_MAP_ERRORS: Dict[str, WalkError] = {
    "WALK_MAP_400_1": WalkError(400, "WALK_MAP_400_1", "위도와 경도가 필요합니다."),
    "WALK_MAP_400_2": WalkError(400, "WALK_MAP_400_2", "유효하지 않은 위도입니다. (-90 ~ 90)"),
    "WALK_MAP_400_3": WalkError(400, "WALK_MAP_400_3", "유효하지 않은 경도입니다. (-180 ~ 180)"),
    "WALK_MAP_400_4": WalkError(400, "WALK_MAP_400_4", "GPS 전송 주기는 10초 이상 300초 이하여야 합니다."),
    "WALK_MAP_404_1": WalkError(404, "WALK_MAP_404_1", "요청하신 산책을 찾을 수 없습니다."),
    "WALK_MAP_500_1": WalkError(500, "WALK_MAP_500_1", "산책 경로를 조회하는 중 오류가 발생했습니다."),
    "WALK_MAP_500_2": WalkError(500, "WALK_MAP_500_2", "GPS 설정을 저장하는 중 오류가 발생했습니다."),
}

RECEIPT_ERRORS: Dict[str, WalkError] = {
    "RECEIPT_400_1": WalkError(400, "RECEIPT_400_1", "유효하지 않은 사용자 ID입니다."),
    "RECEIPT_400_2": WalkError(400, "RECEIPT_400_2", "사용자 유형은 'owner' 또는 'walker'여야 합니다."),
    "RECEIPT_404_1": WalkError(404, "RECEIPT_404_1", "영수증을 찾을 수 없습니다."),
    "RECEIPT_500_1": WalkError(500, "RECEIPT_500_1", "영수증을 조회하는 중 오류가 발생했습니다."),
}

ALL_ERRORS: Dict[str, WalkError] = {
    **AUTH_ERRORS,
    **WALK_ERRORS,
    **STATUS_ERRORS,
    **WALK_MAP_ERRORS,
    **RECEIPT_ERRORS,
}


class WalkException(Exception):
    """
    산책 도메인 오류.
    reason을 넘기면 카탈로그 문구 대신 사용합니다 (상태명/예정 시간 등 런타임 값 포함 시).
    """

    def __init__(
        self,
        code: str,
        reason: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        err = ALL_ERRORS[code]
        self.status = err.status
        self.code = err.code
        self.reason = reason or err.reason
        self.details = details or {}
        super().__init__(self.reason)


def _examples(path: str, mapping: Dict[str, WalkError]) -> Dict:
    return {
        code: {"value": err.to_dict(path)}
        for code, err in mapping.items()
    }


def _responses(path: str, codes) -> Dict:
    """상태 코드별로 묶어 Swagger responses 형태로 변환"""
    descriptions = {
        400: "잘못된 요청",
        401: "인증 실패",
        403: "권한 없음",
        404: "리소스 없음",
        409: "동시 수정 충돌",
        500: "서버 내부 오류",
    }
    grouped: Dict[int, Dict[str, WalkError]] = {}
    for code in codes:
        err = ALL_ERRORS[code]
        grouped.setdefault(err.status, {})[code] = err

    return {
        status: {
            "model": ErrorResponse,
            "description": descriptions.get(status, "오류"),
            "content": {
                "application/json": {
                    "examples": _examples(path, mapping)
                }
            },
        }
        for status, mapping in sorted(grouped.items())
    }


_AUTH = ["AUTH_401_1", "AUTH_401_2", "AUTH_404_1"]

WALK_LIST_RESPONSES = _responses("/api/v1/walks", _AUTH + ["WALK_STATUS_400_1", "WALK_500_2"])

WALK_DETAIL_RESPONSES = _responses(
    "/api/v1/walks/{walk_id}", _AUTH + ["WALK_400_1", "WALK_404_1", "WALK_500_2"]
)

WALK_CREATE_RESPONSES = _responses(
    "/api/v1/walks",
    _AUTH + [
        "WALK_400_2", "WALK_400_3", "WALK_400_4", "WALK_400_5",
        "WALK_400_6", "WALK_400_7", "WALK_400_8", "WALK_400_13",
        "WALK_400_14", "WALK_500_1",
    ],
)

WALK_UPDATE_RESPONSES = _responses(
    "/api/v1/walks/{walk_id}",
    _AUTH + [
        "WALK_400_9", "WALK_400_10", "WALK_400_11", "WALK_400_12",
        "WALK_404_1", "WALK_500_1",
    ],
)

WALK_DELETE_RESPONSES = _responses(
    "/api/v1/walks/{walk_id}", _AUTH + ["AUTH_403_2", "WALK_400_1", "WALK_404_1", "WALK_500_1"]
)

WALK_STATUS_RESPONSES = _responses(
    "/api/v1/walks/{walk_id}/status",
    _AUTH + [
        "WALK_STATUS_400_1", "WALK_STATUS_400_2", "WALK_STATUS_400_3",
        "WALK_404_1", "WALK_STATUS_409_1", "WALK_STATUS_500_1",
    ],
)

RECEIPT_RESPONSES = _responses(
    "/api/v1/walks/{walk_id}/receipt",
    _AUTH + ["RECEIPT_400_1", "RECEIPT_400_2", "RECEIPT_404_1", "RECEIPT_500_1"],
)

LOCATION_RESPONSES = _responses(
    "/api/v1/walk-maps/location",
    _AUTH + ["AUTH_403_1", "WALK_MAP_400_1", "WALK_MAP_400_2", "WALK_MAP_400_3", "WALK_MAP_500_1"],
)

ROUTE_RESPONSES = _responses(
    "/api/v1/walk-maps/walks/{walk_id}/route",
    _AUTH + ["WALK_400_1", "WALK_MAP_404_1", "WALK_MAP_500_1"],
)

GPS_SETTINGS_RESPONSES = _responses(
    "/api/v1/walkers/me/gps-settings",
    _AUTH + ["AUTH_403_1", "WALK_MAP_400_4", "WALK_MAP_500_2"],
)
