"""테스트 설정"""

import os
from typing import Generator
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
import pytest_asyncio
from docker import from_env
from docker.errors import DockerException
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import (
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from testcontainers.minio import MinioContainer
from testcontainers.postgres import PostgresContainer

from app.core.config import Settings, settings
from app.core.database import Base, get_db
from app.core.llm.types import ImageResult, LLMResult
from app.main import app

TEST_BUCKET = "test-media"


def normalize_endpoint(endpoint: str) -> str:
    """endpoint URL에 프로토콜이 없으면 http:// 추가"""
    if not endpoint.startswith(("http://", "https://")):
        return f"http://{endpoint}"
    return endpoint


def _is_docker_available() -> bool:
    """로컬 환경에서 Docker 접근 가능 여부 확인"""
    if os.getenv("FORCE_DOCKER_TESTS", "").lower() in {"1", "true"}:
        return True
    if os.getenv("SKIP_DOCKER_TESTS", "").lower() in {"1", "true"}:
        return False

    try:
        client = from_env()
        client.ping()
        return True
    except DockerException:
        return False
    except Exception:
        return False


DOCKER_AVAILABLE = _is_docker_available()


@pytest.fixture(scope="session")
def postgres_container() -> Generator[PostgresContainer, None, None]:
    """PostgreSQL 테스트 컨테이너"""
    if not DOCKER_AVAILABLE:
        pytest.skip("Docker is not available; skipping container-based tests.")

    with PostgresContainer("postgres:16") as postgres:
        yield postgres


@pytest.fixture(scope="session")
def test_database_url(postgres_container: PostgresContainer) -> str:
    """테스트 데이터베이스 URL"""
    # asyncpg를 위한 URL 생성
    return str(
        postgres_container.get_connection_url().replace(
            "postgresql+psycopg2://", "postgresql+asyncpg://"
        )
    )


@pytest_asyncio.fixture
async def db_session(test_database_url: str):
    """테스트 데이터베이스 세션"""
    engine = create_async_engine(test_database_url, echo=False)

    # 각 테스트마다 깨끗한 스키마 유지
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)

    async_session: async_sessionmaker[AsyncSession] = async_sessionmaker(
        bind=engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )

    async with async_session() as session:
        yield session
        await session.rollback()

    await engine.dispose()


@pytest.fixture(scope="session")
def minio_container() -> Generator[MinioContainer, None, None]:
    """MinIO 테스트 컨테이너"""
    if not DOCKER_AVAILABLE:
        pytest.skip("Docker is not available; skipping container-based tests.")

    with MinioContainer() as minio:
        yield minio


@pytest.fixture
def test_s3_client(minio_container: MinioContainer):
    """테스트용 S3 클라이언트 (MinIO 사용)"""
    from app.core.storage import S3Client, _create_s3_client

    # lru_cache 초기화
    _create_s3_client.cache_clear()

    # MinIO 설정으로 테스트 클라이언트 생성
    config = minio_container.get_config()
    endpoint = normalize_endpoint(config["endpoint"])

    test_settings = Settings(
        s3_endpoint=endpoint,
        s3_access_key=config["access_key"],
        s3_secret_key=config["secret_key"],
        s3_bucket_media=TEST_BUCKET,
        s3_region="us-east-1",
        s3_use_ssl=False,
    )

    client = S3Client(test_settings)

    # 테스트 버킷 생성 (이미 존재하면 무시)
    try:
        client.client.create_bucket(Bucket=test_settings.s3_bucket_media)
    except (
        client.client.exceptions.BucketAlreadyOwnedByYou,
        client.client.exceptions.BucketAlreadyExists,
    ):
        pass

    yield client

    # cleanup: lru_cache 초기화
    _create_s3_client.cache_clear()


@pytest.fixture
def object_exists(test_s3_client):
    """테스트 버킷에 객체가 있는지 확인하는 함수"""
    from botocore.exceptions import ClientError

    def check(object_key: str) -> bool:
        try:
            test_s3_client.client.head_object(
                Bucket=test_s3_client.bucket, Key=object_key
            )
            return True
        except ClientError:
            return False

    return check


# NOTE:
# pytest-asyncio(0.21+)는 기본적으로 테스트마다 독립적인 event loop를 생성
# session 스코프 async fixture는 이 구조와 충돌하여 ScopeMismatch 에러를 유발할 수 있음
# 이를 방지하기 위해 async fixture는 모두 function 스코프로 유지
@pytest_asyncio.fixture
async def client(db_session, test_s3_client):
    """비동기 테스트 클라이언트 (테스트 DB 및 MinIO 사용)"""
    from app.core.storage import S3Client, get_s3_client

    # 테스트용 데이터베이스로 의존성 오버라이드
    async def override_get_db():
        yield db_session

    def override_get_s3_client() -> S3Client:
        return test_s3_client

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_s3_client] = override_get_s3_client

    transport = ASGITransport(app=app)
    async with AsyncClient(
        transport=transport, base_url="http://test"
    ) as client:
        yield client

    # 정리
    app.dependency_overrides.clear()


@pytest.fixture
def anyio_backend():
    """anyio 백엔드 설정"""
    return "asyncio"


@pytest.fixture
def admin_headers():
    """관리자 API Key 헤더"""
    return {"X-Admin-Api-Key": settings.admin_api_key}


@pytest.fixture(autouse=True)
def reset_singletons():
    """lru_cache 싱글톤 초기화 (rate limiter 상태가 테스트 간에 남지 않도록)"""
    from app.domains.contact.service import get_contact_rate_limiter
    from app.domains.email.service import _create_email_service
    from app.domains.indexing.client import _create_indexing_client

    caches = [get_contact_rate_limiter, _create_email_service, _create_indexing_client]
    for cached in caches:
        cached.cache_clear()
    yield
    for cached in caches:
        cached.cache_clear()


# AI 도메인 테스트 설정


def pytest_configure(config):
    """pytest marker 등록"""
    config.addinivalue_line("markers", "real_ai: 실제 AI API를 사용하는 테스트 (유료)")
    config.addinivalue_line("markers", "mock_ai: Mock AI를 사용하는 테스트 (무료)")


def is_real_ai_enabled() -> bool:
    """실제 AI 테스트 활성화 여부"""
    return os.getenv("ENABLE_REAL_AI_TESTS", "false").lower() == "true"


@pytest.fixture
def skip_if_no_real_ai():
    """실제 AI 테스트가 비활성화된 경우 스킵"""
    if not is_real_ai_enabled():
        pytest.skip("ENABLE_REAL_AI_TESTS=true 설정 필요")


@pytest.fixture(autouse=True)
def mock_llm_completion():
    """LLM completion Mock - 자동 적용"""
    mock = AsyncMock()

    async def default_side_effect(*args, **kwargs):
        return LLMResult(
            content="Mock generated content about the requested topic",
            model="mock-model",
            input_tokens=100,
            output_tokens=50,
            finish_reason="stop",
        )

    mock.side_effect = default_side_effect

    # call_with_fallback이 노출되는 모든 경로를 Mock
    with patch("app.core.llm.fallback.call_with_fallback", mock), patch(
        "app.core.llm.call_with_fallback", mock
    ), patch("app.domains.ai.generation.service.call_with_fallback", mock):
        yield mock


STREAM_CHUNKS = ["Mock ", "streamed ", "content"]


@pytest.fixture(autouse=True)
def mock_llm_stream():
    """LLM 스트리밍 Mock - 자동 적용

    호출마다 새 async generator를 반환합니다.
    """

    async def default_stream(*args, **kwargs):
        for chunk in STREAM_CHUNKS:
            yield chunk

    mock = MagicMock(side_effect=default_stream)
    with patch("app.domains.ai.generation.service.stream_with_fallback", mock):
        yield mock


@pytest.fixture(autouse=True)
def mock_image_generation():
    """이미지 생성 Mock - 자동 적용"""
    mock = AsyncMock(
        return_value=ImageResult(
            model="dall-e-3",
            url="https://images.example.com/generated.png",
            revised_prompt="A revised mock prompt",
        )
    )
    with patch("app.domains.ai.images.service.aimage_generation_raw", mock):
        yield mock


@pytest.fixture(autouse=True)
def mock_email_delivery():
    """메일 발송 API Mock - 자동 적용"""
    with patch(
        "app.domains.email.client.ResendClient.send",
        new_callable=AsyncMock,
        return_value="mock-message-id",
    ) as mock:
        yield mock


@pytest.fixture(autouse=True)
def mock_indexing_publish():
    """Google Indexing 알림 Mock - 자동 적용"""
    from app.domains.indexing.types import UrlNotificationResult

    async def publish(urls, notification_type=None, **kwargs):
        return [
            UrlNotificationResult(
                url=url, success=True, notification_type=notification_type
            )
            for url in urls
        ]

    with patch(
        "app.domains.indexing.client.GoogleIndexingClient.publish",
        side_effect=publish,
        autospec=False,
    ) as mock:
        yield mock


@pytest.fixture
def png_bytes() -> bytes:
    """1x1 PNG 이미지"""
    return bytes.fromhex(
        "89504e470d0a1a0a0000000d4948445200000001000000010806000000"
        "1f15c4890000000d49444154789c63000100000500010d0a2db40000000049454e44ae426082"
    )
