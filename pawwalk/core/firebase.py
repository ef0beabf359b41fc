import logging
from typing import Optional

import firebase_admin
from firebase_admin import credentials, auth

from pawwalk.core.config import settings

logger = logging.getLogger(__name__)


def _get_firebase_app():
    """
    Firebase Admin 앱을 최초 호출 시 초기화합니다.
    import 시점에는 자격 증명 파일을 읽지 않습니다.
    """
    # 앱 초기화 (중복 초기화 방지)
    if firebase_admin._apps:
        return firebase_admin.get_app()

    logger.info("Loading Firebase credentials from: %s", settings.FIREBASE_CREDENTIALS)
    cred = credentials.Certificate(settings.FIREBASE_CREDENTIALS)
    app = firebase_admin.initialize_app(cred)
    logger.info("Firebase Admin SDK initialized")
    return app


def verify_firebase_token(id_token: str) -> Optional[dict]:
    try:
        firebase_app = _get_firebase_app()
        # check_revoked=False로 설정하여 성능 향상
        # clock_skew_seconds=60으로 시계 오차 60초까지 허용
        decoded = auth.verify_id_token(
            id_token,
            app=firebase_app,
            check_revoked=False,
            clock_skew_seconds=60
        )
        return decoded
    except Exception as e:
        logger.warning("Firebase token verification failed: %s: %s", type(e).__name__, e)
        # 시계 동기화 문제인 경우 추가 안내
        if "used too early" in str(e) or "clock" in str(e).lower():
            logger.warning("This is a clock synchronization issue. Please sync your system time.")
        return None
