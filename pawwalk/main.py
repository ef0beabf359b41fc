import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.openapi.utils import get_openapi

from pawwalk.core.config import settings
from pawwalk.core.error_handler import register_exception_handlers
from pawwalk.domains.walk.router.walk_router import router as walk_router
from pawwalk.domains.walk.router.walk_map_router import router as walk_map_router
from pawwalk.domains.walk.router.walker_setting_router import router as walker_setting_router
from pawwalk.domains.walk.service.geocoding_service import build_geocoder


logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    yield
    # 공유 HTTP client 정리
    app.state.geocoder.close()


def create_app() -> FastAPI:
    app = FastAPI(
        title="PawWalk API 🐾",
        version="1.0.0",
        description="Backend API for PawWalk dog-walking marketplace",
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
        openapi_tags=[
            {"name": "Walk", "description": "산책 요청/상태 변경/영수증 API"},
            {"name": "WalkMap", "description": "산책자 위치 저장 및 경로 조회 API"},
            {"name": "WalkerSettings", "description": "산책자 GPS 설정 API"},
        ]
    )

    # 🟢 에러 응답 형식 통일
    register_exception_handlers(app)

    # 좌표 → 주소 변환기 (캐시 공유를 위해 앱당 1개)
    app.state.geocoder = build_geocoder(settings)

    # 🟢 라우터 등록
    app.include_router(walk_router)
    app.include_router(walk_map_router)
    app.include_router(walker_setting_router)

    @app.get("/")
    def root():
        return {"message": "🐾 PawWalk API is running successfully"}

    def custom_openapi():
        if app.openapi_schema:
            return app.openapi_schema

        openapi_schema = get_openapi(
            title="PawWalk API 🐾",
            version="1.0.0",
            description="""
            ## PawWalk API

            보호자와 산책자를 연결하는 반려견 산책 서비스의 백엔드 API입니다.

            ### 주요 기능
            - 🚶 산책 요청 / 수락 / 결제 확인 / 시작 / 종료
            - 📍 산책자 위치를 진행 중인 모든 산책에 저장
            - 🧾 산책 영수증 조회

            ### 인증
            모든 API는 Firebase ID 토큰을 Authorization 헤더에 포함하여 요청해야 합니다.
            """,
            routes=app.routes,
        )

        # 🔥 Swagger에 BearerAuth 추가
        openapi_schema.setdefault("components", {})["securitySchemes"] = {
            "BearerAuth": {
                "type": "http",
                "scheme": "bearer",
                "bearerFormat": "JWT",
                "description": "Firebase ID 토큰을 Bearer 형식으로 전달하세요. 예: Bearer <token>"
            }
        }

        app.openapi_schema = openapi_schema
        return app.openapi_schema

    app.openapi = custom_openapi

    logger.info("PawWalk API initialized")
    return app


app = create_app()

# 🟢 로컬 실행용 entry point
if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "pawwalk.main:app",
        host="0.0.0.0",
        port=8000,
        reload=True
    )
