import os

# 앱 import 전에 sqlite로 고정 (MySQL 접속 방지)
os.environ.setdefault("DB_URL", "sqlite://")
os.environ.setdefault("GOOGLE_MAPS_API_KEY", "")

from datetime import datetime, timedelta
from decimal import Decimal

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from pawwalk.core.auth import AuthContext, get_auth_context
from pawwalk.db import get_db
from pawwalk.domains.walk.service.geocoding_service import GeocodingService
from pawwalk.models import (
    Base,
    Payment,
    Pet,
    User,
    UserRole,
    Walk,
    WalkerSetting,
    WalkStatus,
)


# 모든 테스트의 기준 시각 (UTC, naive)
NOW = datetime(2025, 5, 1, 10, 0, 0)


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def db(engine):
    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def clock():
    return lambda: NOW


# ============================================
# 데이터 생성 helper
# ============================================
@pytest.fixture
def make_user(db):
    counter = {"n": 0}

    def _make_user(name: str = "User", role: UserRole = UserRole.OWNER, **kwargs) -> User:
        counter["n"] += 1
        user = User(
            firebase_uid=kwargs.pop("firebase_uid", f"uid-{counter['n']}"),
            name=name,
            email=kwargs.pop("email", f"user{counter['n']}@example.com"),
            role=role,
            **kwargs,
        )
        db.add(user)
        db.commit()
        return user

    return _make_user


@pytest.fixture
def walker(make_user):
    return make_user(name="Wally", role=UserRole.WALKER)


@pytest.fixture
def owner(make_user):
    return make_user(name="Olivia", role=UserRole.OWNER)


@pytest.fixture
def make_pet(db):
    def _make_pet(owner: User, name: str = "Rex", breed: str = "Beagle") -> Pet:
        pet = Pet(owner_id=owner.user_id, name=name, breed=breed)
        db.add(pet)
        db.commit()
        return pet

    return _make_pet


@pytest.fixture
def pet(make_pet, owner):
    return make_pet(owner, name="Rex")


@pytest.fixture
def make_walk(db):
    def _make_walk(
        walker: User,
        owner: User,
        pets=(),
        status: WalkStatus = WalkStatus.REQUESTED,
        scheduled_start_time: datetime = NOW,
        **kwargs,
    ) -> Walk:
        walk = Walk(
            walker_id=walker.user_id,
            owner_id=owner.user_id,
            scheduled_start_time=scheduled_start_time,
            scheduled_end_time=scheduled_start_time + timedelta(hours=1),
            start_address=kwargs.pop("start_address", "1 Park Ave"),
            total_price=kwargs.pop("total_price", Decimal("25.00")),
            status=status,
            version=1,
            **kwargs,
        )
        walk.pets = list(pets)
        db.add(walk)
        db.commit()
        return walk

    return _make_walk


@pytest.fixture
def make_setting(db):
    def _make_setting(walker: User, has_gps_tracker=True, gps_tracking_enabled=True, **kwargs) -> WalkerSetting:
        setting = WalkerSetting(
            walker_id=walker.user_id,
            has_gps_tracker=has_gps_tracker,
            gps_tracking_enabled=gps_tracking_enabled,
            gps_tracking_interval=kwargs.pop("gps_tracking_interval", 30),
            has_discount=kwargs.pop("has_discount", False),
            discount_percentage=kwargs.pop("discount_percentage", Decimal("0")),
        )
        db.add(setting)
        db.commit()
        return setting

    return _make_setting


@pytest.fixture
def make_payment(db):
    def _make_payment(walk: Walk, amount=Decimal("25.00"), **kwargs) -> Payment:
        payment = Payment(
            walk_id=walk.walk_id,
            amount=amount,
            payment_method=kwargs.pop("payment_method", "card"),
            transaction_id=kwargs.pop("transaction_id", "tx-001"),
            status=kwargs.pop("status", "completed"),
            payment_date=kwargs.pop("payment_date", NOW),
            **kwargs,
        )
        db.add(payment)
        db.commit()
        return payment

    return _make_payment


@pytest.fixture
def geocoder():
    # API 키 없음 → 항상 좌표 문자열
    return GeocodingService(api_key=None)


# ============================================
# API 클라이언트
# ============================================
@pytest.fixture
def app(db, geocoder):
    from pawwalk.main import create_app

    app = create_app()
    app.state.geocoder = geocoder

    def _override_get_db():
        yield db

    app.dependency_overrides[get_db] = _override_get_db
    yield app
    app.dependency_overrides.clear()


@pytest.fixture
def login_as(app):
    """get_auth_context 를 지정한 사용자로 대체"""

    def _login_as(user: User):
        context = AuthContext(user_id=user.user_id, role=user.role, firebase_uid=user.firebase_uid)
        app.dependency_overrides[get_auth_context] = lambda: context
        return context

    return _login_as


@pytest.fixture
def client(app):
    return TestClient(app)
