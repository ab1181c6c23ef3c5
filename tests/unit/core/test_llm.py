"""Core LLM 모듈 단위 테스트"""

from unittest.mock import MagicMock, patch

import pytest

from app.core.llm.fallback import (
    call_with_fallback,
    get_models_for_tier,
    stream_with_fallback,
)
from app.core.llm.provider import (
    acompletion_raw,
    aimage_generation_raw,
    astream_completion_raw,
)
from app.core.llm.types import (
    AllProvidersFailedError,
    LLMMessage,
    LLMProviderError,
    LLMResult,
    LLMTier,
)


@pytest.mark.asyncio
async def test_acompletion_raw_success():
    """LiteLLM completion 성공 시나리오"""
    with patch("app.core.llm.provider.acompletion") as mock_completion:
        # Mock 응답 구성
        mock_response = MagicMock()
        mock_response.choices = [MagicMock()]
        mock_response.choices[0].message.content = "Test response"
        mock_response.choices[0].finish_reason = "stop"
        mock_response.model = "gpt-4o-mini"
        mock_response.usage.prompt_tokens = 10
        mock_response.usage.completion_tokens = 20
        mock_completion.return_value = mock_response

        # 실행
        result = await acompletion_raw(
            model="gpt-4o-mini",
            messages=[LLMMessage(role="user", content="Hello")],
        )

        # 검증
        assert result.content == "Test response"
        assert result.model == "gpt-4o-mini"
        assert result.input_tokens == 10
        assert result.output_tokens == 20


@pytest.mark.asyncio
async def test_acompletion_raw_failure():
    """LiteLLM completion 실패 시나리오"""
    with patch("app.core.llm.provider.acompletion") as mock_completion:
        mock_completion.side_effect = Exception("API error")

        with pytest.raises(LLMProviderError) as exc_info:
            await acompletion_raw(
                model="gpt-4o-mini",
                messages=[LLMMessage(role="user", content="Hello")],
            )

        assert "API error" in str(exc_info.value.detail_info["error"])


@pytest.mark.asyncio
async def test_call_with_fallback_first_success():
    """Fallback: 첫 번째 모델 성공"""
    with patch("app.core.llm.fallback.acompletion_raw") as mock_completion:
        mock_completion.return_value = LLMResult(
            content="Success",
            model="gpt-4o-mini",
            input_tokens=10,
            output_tokens=20,
        )

        result = await call_with_fallback(
            tier=LLMTier.LIGHT,
            messages=[LLMMessage(role="user", content="Test")],
        )

        assert result.content == "Success"
        assert result.model == "gpt-4o-mini"
        # 첫 번째 모델만 호출되었는지 확인
        assert mock_completion.call_count == 1


@pytest.mark.asyncio
async def test_call_with_fallback_second_success():
    """Fallback: 첫 번째 실패, 두 번째 성공"""
    with patch("app.core.llm.fallback.acompletion_raw") as mock_completion:
        # 첫 번째 호출 실패, 두 번째 호출 성공
        mock_completion.side_effect = [
            LLMProviderError(
                provider="gpt-4o-mini", original_error="Rate limit"
            ),
            LLMResult(
                content="Success from fallback",
                model="claude-3-5-haiku-latest",
                input_tokens=10,
                output_tokens=20,
            ),
        ]

        result = await call_with_fallback(
            tier=LLMTier.LIGHT,
            messages=[LLMMessage(role="user", content="Test")],
        )

        assert result.content == "Success from fallback"
        assert result.model == "claude-3-5-haiku-latest"
        assert mock_completion.call_count == 2


@pytest.mark.asyncio
async def test_call_with_fallback_all_fail():
    """Fallback: 모든 모델 실패"""
    with patch("app.core.llm.fallback.acompletion_raw") as mock_completion:
        mock_completion.side_effect = LLMProviderError(
            provider="test", original_error="error"
        )

        with pytest.raises(AllProvidersFailedError) as exc_info:
            await call_with_fallback(
                tier=LLMTier.LIGHT,
                messages=[LLMMessage(role="user", content="Test")],
            )

        assert "light" in str(exc_info.value.detail_info["tier"])



def test_get_models_for_tier_uses_settings():
    """티어별 모델 목록은 설정 순서를 따름"""
    with patch("app.core.llm.fallback.settings") as mock_settings:
        mock_settings.llm_content_models = ["gpt-4o", "claude-3-5-sonnet-latest"]
        mock_settings.llm_light_models = ["gpt-4o-mini"]

        assert get_models_for_tier(LLMTier.CONTENT) == [
            "gpt-4o",
            "claude-3-5-sonnet-latest",
        ]
        assert get_models_for_tier(LLMTier.LIGHT) == ["gpt-4o-mini"]


@pytest.mark.asyncio
async def test_call_with_fallback_no_models_configured():
    """티어에 모델이 없으면 즉시 실패"""
    with patch(
        "app.core.llm.fallback.get_models_for_tier", return_value=[]
    ), patch("app.core.llm.fallback.acompletion_raw") as mock_completion:
        with pytest.raises(AllProvidersFailedError) as exc_info:
            await call_with_fallback(
                tier=LLMTier.CONTENT,
                messages=[LLMMessage(role="user", content="Test")],
            )

        assert exc_info.value.detail_info["attempted_models"] == []
        mock_completion.assert_not_called()


@pytest.mark.asyncio
async def test_aimage_generation_raw_success():
    """LiteLLM 이미지 생성 성공"""
    with patch("app.core.llm.provider.aimage_generation") as mock_generation:
        image = MagicMock()
        image.url = "https://images.example.com/a.png"
        image.b64_json = None
        image.revised_prompt = "revised"
        mock_generation.return_value = MagicMock(data=[image])

        result = await aimage_generation_raw(
            model="dall-e-3", prompt="A cat", size="1024x1024", quality="hd"
        )

        assert result.url == "https://images.example.com/a.png"
        assert result.revised_prompt == "revised"
        mock_generation.assert_called_once_with(
            model="dall-e-3", prompt="A cat", size="1024x1024", n=1, quality="hd"
        )


@pytest.mark.asyncio
async def test_aimage_generation_raw_failure():
    """LiteLLM 이미지 생성 실패 시 LLMProviderError"""
    with patch("app.core.llm.provider.aimage_generation") as mock_generation:
        mock_generation.side_effect = Exception("content policy")

        with pytest.raises(LLMProviderError) as exc_info:
            await aimage_generation_raw(
                model="dall-e-3", prompt="A cat", size="1024x1024"
            )

        assert "content policy" in exc_info.value.detail_info["error"]


async def _collect(stream) -> list[str]:
    return [chunk async for chunk in stream]


@pytest.mark.asyncio
async def test_stream_with_fallback_before_first_chunk():
    """스트리밍 시작 전 실패는 다음 모델로 fallback"""
    calls = []

    async def fake_stream(model, **kwargs):
        calls.append(model)
        if model == "gpt-4o":
            raise LLMProviderError(provider=model, original_error="down")
        for chunk in ["Hello", " world"]:
            yield chunk

    with patch(
        "app.core.llm.fallback.get_models_for_tier",
        return_value=["gpt-4o", "claude-3-5-sonnet-latest"],
    ), patch("app.core.llm.fallback.astream_completion_raw", side_effect=fake_stream):
        chunks = await _collect(
            stream_with_fallback(
                tier=LLMTier.CONTENT,
                messages=[LLMMessage(role="user", content="Test")],
            )
        )

    assert chunks == ["Hello", " world"]
    assert calls == ["gpt-4o", "claude-3-5-sonnet-latest"]


@pytest.mark.asyncio
async def test_stream_with_fallback_mid_stream_error():
    """스트리밍 시작 후 실패는 fallback 없이 그대로 전파"""
    calls = []

    async def fake_stream(model, **kwargs):
        calls.append(model)
        yield "partial"
        raise LLMProviderError(provider=model, original_error="connection reset")

    received = []
    with patch(
        "app.core.llm.fallback.get_models_for_tier",
        return_value=["gpt-4o", "claude-3-5-sonnet-latest"],
    ), patch("app.core.llm.fallback.astream_completion_raw", side_effect=fake_stream):
        with pytest.raises(LLMProviderError):
            async for chunk in stream_with_fallback(
                tier=LLMTier.CONTENT,
                messages=[LLMMessage(role="user", content="Test")],
            ):
                received.append(chunk)

    assert received == ["partial"]
    assert calls == ["gpt-4o"]


@pytest.mark.asyncio
async def test_stream_with_fallback_all_fail():
    """모든 모델이 시작 전에 실패하면 AllProvidersFailedError"""

    async def fake_stream(model, **kwargs):
        raise LLMProviderError(provider=model, original_error="down")
        yield  # pragma: no cover

    with patch(
        "app.core.llm.fallback.get_models_for_tier", return_value=["gpt-4o-mini"]
    ), patch("app.core.llm.fallback.astream_completion_raw", side_effect=fake_stream):
        with pytest.raises(AllProvidersFailedError) as exc_info:
            await _collect(
                stream_with_fallback(
                    tier=LLMTier.LIGHT,
                    messages=[LLMMessage(role="user", content="Test")],
                )
            )

    assert exc_info.value.detail_info["attempted_models"] == ["gpt-4o-mini"]


@pytest.mark.asyncio
async def test_astream_completion_raw_yields_content_chunks():
    """빈 delta는 건너뛰고 텍스트 청크만 반환"""

    def chunk(text):
        item = MagicMock()
        item.choices[0].delta.content = text
        return item

    async def fake_response():
        for text in ["Hi", None, " there"]:
            yield chunk(text)

    async def fake_acompletion(**kwargs):
        assert kwargs["stream"] is True
        return fake_response()

    with patch("app.core.llm.provider.acompletion", side_effect=fake_acompletion):
        chunks = await _collect(
            astream_completion_raw(
                model="gpt-4o", messages=[LLMMessage(role="user", content="Hi")]
            )
        )

    assert chunks == ["Hi", " there"]
