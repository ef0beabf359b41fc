from dataclasses import dataclass
from typing import Optional

from fastapi import Depends, Header
from sqlalchemy.orm import Session

from pawwalk.core.firebase import verify_firebase_token
from pawwalk.db import get_db
from pawwalk.domains.users.repository.user_repository import UserRepository
from pawwalk.domains.walk.exception import WalkException
from pawwalk.models.user import UserRole


@dataclass(frozen=True)
class AuthContext:
    """요청한 사용자 (인증은 Firebase가 담당, 여기선 식별만)"""
    user_id: int
    role: UserRole
    firebase_uid: str

    @property
    def is_walker(self) -> bool:
        return self.role == UserRole.WALKER

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN


def get_auth_context(
    authorization: Optional[str] = Header(None, description="Firebase ID 토큰 (Bearer)"),
    db: Session = Depends(get_db),
) -> AuthContext:
    # ============================================
    # 1) Authorization 검증
    # ============================================
    if authorization is None:
        raise WalkException("AUTH_401_1")

    parts = authorization.split(" ")
    if len(parts) != 2 or parts[0] != "Bearer" or not parts[1]:
        raise WalkException(
            "AUTH_401_2",
            reason="Authorization 헤더는 'Bearer <token>' 형식이어야 합니다.",
        )

    decoded = verify_firebase_token(parts[1])
    if decoded is None:
        raise WalkException("AUTH_401_2")

    firebase_uid = decoded.get("uid")

    # ============================================
    # 2) 사용자 조회
    # ============================================
    user = UserRepository(db).get_user_by_firebase_uid(firebase_uid)
    if not user:
        raise WalkException("AUTH_404_1")

    return AuthContext(user_id=user.user_id, role=user.role, firebase_uid=firebase_uid)


def require_walker(auth: AuthContext = Depends(get_auth_context)) -> AuthContext:
    if not auth.is_walker:
        raise WalkException("AUTH_403_1")
    return auth


def require_admin(auth: AuthContext = Depends(get_auth_context)) -> AuthContext:
    if not auth.is_admin:
        raise WalkException("AUTH_403_2")
    return auth
