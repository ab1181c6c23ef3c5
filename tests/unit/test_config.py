"""Config 설정 검증 테스트"""

import pytest
from pydantic import ValidationError

from app.core.config import Settings

VALID_ADMIN_KEY = "valid-admin-api-key-with-32-characters-minimum"


class TestDevelopmentConfig:
    """개발 환경 설정 테스트"""

    def test_development_allows_default_keys(self):
        """개발 환경에서는 기본 키 허용"""
        config = Settings(
            app_env="development",
            admin_api_key="your-admin-api-key-here",
        )
        assert config.is_development
        assert config.admin_api_key == "your-admin-api-key-here"

    def test_list_fields_accept_comma_separated(self):
        """쉼표 구분 문자열을 리스트로 변환"""
        config = Settings(
            email_admin_recipients="a@example.com, b@example.com",
            email_blocked_domains='["spam.example"]',
        )
        assert config.email_admin_recipients == ["a@example.com", "b@example.com"]
        assert config.email_blocked_domains == ["spam.example"]

    def test_google_private_key_newlines_unescaped(self):
        """환경 변수의 \\n 문자열을 줄바꿈으로 변환"""
        config = Settings(
            google_client_email="svc@project.iam.gserviceaccount.com",
            google_private_key="-----BEGIN-----\\nabc\\n-----END-----",
        )
        assert config.google_private_key == "-----BEGIN-----\nabc\n-----END-----"
        assert config.google_indexing_configured is True

    def test_sync_database_url(self):
        """Alembic용 동기 드라이버 URL"""
        config = Settings(database_url="postgresql+asyncpg://u:p@db:5432/cms")
        assert config.sync_database_url == "postgresql+psycopg2://u:p@db:5432/cms"


class TestProductionConfig:
    """프로덕션 환경 설정 검증 테스트"""

    def test_production_rejects_default_admin_api_key(self):
        """프로덕션에서 기본 Admin API Key 거부"""
        with pytest.raises(ValidationError) as exc_info:
            Settings(
                app_env="production",
                admin_api_key="your-admin-api-key-here",
                openai_api_key="sk-real-key",
            )

        assert "ADMIN_API_KEY" in str(exc_info.value)

    def test_production_rejects_short_admin_api_key(self):
        """프로덕션에서 짧은 Admin API Key 거부"""
        with pytest.raises(ValidationError) as exc_info:
            Settings(
                app_env="production",
                admin_api_key="short-key",
                openai_api_key="sk-real-key",
            )

        assert "32 characters" in str(exc_info.value)

    def test_production_requires_llm_provider(self):
        """프로덕션에서 LLM 키가 하나도 없으면 거부"""
        with pytest.raises(ValidationError) as exc_info:
            Settings(app_env="production", admin_api_key=VALID_ADMIN_KEY)

        assert "LLM provider" in str(exc_info.value)

    def test_production_accepts_valid_keys(self):
        """프로덕션에서 유효한 키 허용"""
        config = Settings(
            app_env="production",
            admin_api_key=VALID_ADMIN_KEY,
            anthropic_api_key="sk-ant-real-key",
        )
        assert config.is_production
        assert len(config.admin_api_key) >= 32
