import os
import sys
from logging.config import fileConfig

from sqlalchemy import engine_from_config, pool
from alembic import context

# 프로젝트 루트를 import 경로에 추가 (alembic 명령은 루트에서 실행)
sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from pawwalk.core.config import get_settings
from pawwalk.models import Base

config = context.config

if config.config_file_name is not None:
    fileConfig(config.config_file_name)

# walks / walk_maps / walker_settings / payments ... 전부 포함
target_metadata = Base.metadata


def get_url() -> str:
    # alembic.ini 의 sqlalchemy.url 대신 .env 기준 URL 사용
    return get_settings().DATABASE_URL


def _configure_options(url: str) -> dict:
    return {
        "target_metadata": target_metadata,
        "compare_type": True,
        # sqlite 는 ALTER 제약이 있어 batch 모드
        "render_as_batch": url.startswith("sqlite"),
    }


# ---------------------------------------------------------
# offline 모드 (SQL 출력만)
# ---------------------------------------------------------
def run_migrations_offline():
    url = get_url()
    context.configure(
        url=url,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
        **_configure_options(url),
    )

    with context.begin_transaction():
        context.run_migrations()


# ---------------------------------------------------------
# online 모드 (DB 연결 후 migration 실행)
# ---------------------------------------------------------
def run_migrations_online():
    url = get_url()
    config.set_main_option("sqlalchemy.url", url)

    connectable = engine_from_config(
        config.get_section(config.config_ini_section),
        prefix="sqlalchemy.",
        poolclass=pool.NullPool,
    )

    with connectable.connect() as connection:
        context.configure(connection=connection, **_configure_options(url))

        with context.begin_transaction():
            context.run_migrations()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
