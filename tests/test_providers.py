"""Tests for the provider clients against stubbed HTTP endpoints."""

import base64
import json

import pytest
from pytest_httpx import HTTPXMock

from merch_design_enhancer.core.prompt_builder import PromptBuilder
from merch_design_enhancer.models.enums import ProductType
from merch_design_enhancer.providers import (
    NanoBananaProvider,
    OpenAIProvider,
    ReplicateProvider,
    StabilityAIProvider,
)
from merch_design_enhancer.utils.errors import (
    GenerationError,
    GenerationTimeoutError,
    MissingCredentialError,
    NoImageReturnedError,
)

GEMINI_URL = (
    "https://generativelanguage.googleapis.com/v1beta/models/"
    "gemini-2.5-flash-image:generateContent"
)
OPENAI_CHAT_URL = "https://api.openai.com/v1/chat/completions"
OPENAI_IMAGES_URL = "https://api.openai.com/v1/images/generations"
STABILITY_URL = "https://api.stability.ai/v2beta/stable-image/edit/creative"
REPLICATE_URL = "https://api.replicate.com/v1/predictions"
REPLICATE_POLL_URL = "https://api.replicate.com/v1/predictions/pred-123"
OUTPUT_URL = "https://replicate.delivery/pbxt/output.png"

PROMPT = PromptBuilder.build_prompt(ProductType.SHIRT, "red", True)


class TestMissingCredential:
    """Every provider fails fast without touching the network."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize("provider_class,env_var", [
        (NanoBananaProvider, "GOOGLE_AI_API_KEY"),
        (OpenAIProvider, "OPENAI_API_KEY"),
        (StabilityAIProvider, "STABILITY_API_KEY"),
        (ReplicateProvider, "REPLICATE_API_TOKEN"),
    ])
    async def test_empty_key(self, httpx_mock: HTTPXMock, png_bytes, provider_class, env_var):
        provider = provider_class()

        with pytest.raises(MissingCredentialError) as exc_info:
            await provider.generate_image(PROMPT, png_bytes, "")

        assert env_var in str(exc_info.value)
        assert env_var in exc_info.value.env_vars
        assert httpx_mock.get_requests() == []


class TestNanoBananaProvider:
    """Test cases for the default Gemini provider."""

    @pytest.mark.asyncio
    async def test_generate_image(self, httpx_mock: HTTPXMock, png_bytes, generated_png, generated_png_b64, api_key):
        httpx_mock.add_response(
            url=GEMINI_URL,
            method="POST",
            json={
                "candidates": [
                    {
                        "content": {
                            "parts": [
                                {"text": "Here is your mockup"},
                                {"inlineData": {"mimeType": "image/png", "data": generated_png_b64}},
                            ]
                        }
                    }
                ]
            },
        )

        result = await NanoBananaProvider().generate_image(PROMPT, png_bytes, api_key)

        assert result == generated_png

        request = httpx_mock.get_request()
        assert request.headers["x-goog-api-key"] == api_key
        assert api_key not in str(request.url)

        body = json.loads(request.read())
        parts = body["contents"][0]["parts"]
        assert parts[0] == {"text": PROMPT}
        assert parts[1]["inlineData"]["mimeType"] == "image/png"
        assert base64.b64decode(parts[1]["inlineData"]["data"]) == png_bytes
        assert body["generationConfig"]["temperature"] == 0.7

    @pytest.mark.asyncio
    async def test_no_image_part(self, httpx_mock: HTTPXMock, png_bytes, api_key):
        httpx_mock.add_response(
            url=GEMINI_URL,
            method="POST",
            json={"candidates": [{"content": {"parts": [{"text": "I cannot do that"}]}}]},
        )

        with pytest.raises(NoImageReturnedError):
            await NanoBananaProvider().generate_image(PROMPT, png_bytes, api_key)

    @pytest.mark.asyncio
    async def test_no_candidates(self, httpx_mock: HTTPXMock, png_bytes, api_key):
        httpx_mock.add_response(url=GEMINI_URL, method="POST", json={"candidates": []})

        with pytest.raises(NoImageReturnedError):
            await NanoBananaProvider().generate_image(PROMPT, png_bytes, api_key)

    @pytest.mark.asyncio
    async def test_non_json_body(self, httpx_mock: HTTPXMock, png_bytes, api_key):
        httpx_mock.add_response(url=GEMINI_URL, method="POST", text="<html>Bad gateway</html>")

        with pytest.raises(GenerationError) as exc_info:
            await NanoBananaProvider().generate_image(PROMPT, png_bytes, api_key)

        assert "Bad gateway" in str(exc_info.value)

    @pytest.mark.asyncio
    async def test_api_error_embeds_body(self, httpx_mock: HTTPXMock, png_bytes, api_key):
        httpx_mock.add_response(
            url=GEMINI_URL,
            method="POST",
            status_code=400,
            json={"error": {"code": 400, "message": "API key not valid"}},
        )

        with pytest.raises(GenerationError) as exc_info:
            await NanoBananaProvider().generate_image(PROMPT, png_bytes, api_key)

        assert exc_info.value.status_code == 400
        assert "API key not valid" in str(exc_info.value)
        assert api_key not in str(exc_info.value)

    @pytest.mark.asyncio
    async def test_shared_client_reused(self, httpx_mock: HTTPXMock, png_bytes, generated_png_b64, api_key):
        response = {
            "candidates": [
                {"content": {"parts": [{"inlineData": {"mimeType": "image/png", "data": generated_png_b64}}]}}
            ]
        }
        httpx_mock.add_response(url=GEMINI_URL, method="POST", json=response)
        httpx_mock.add_response(url=GEMINI_URL, method="POST", json=response)

        async with NanoBananaProvider() as provider:
            client = provider.client
            await provider.generate_image(PROMPT, png_bytes, api_key)
            await provider.generate_image(PROMPT, png_bytes, api_key)
            assert provider.client is client

        assert provider.client is None
        assert len(httpx_mock.get_requests()) == 2


class TestOpenAIProvider:
    """Test cases for the vision plus DALL-E provider."""

    @pytest.mark.asyncio
    async def test_generate_image(self, httpx_mock: HTTPXMock, png_bytes, generated_png, generated_png_b64, api_key):
        httpx_mock.add_response(
            url=OPENAI_CHAT_URL,
            method="POST",
            json={"choices": [{"message": {"content": "A yellow lightning bolt with the word FLASH"}}]},
        )
        httpx_mock.add_response(
            url=OPENAI_IMAGES_URL,
            method="POST",
            json={"data": [{"b64_json": generated_png_b64}]},
        )

        result = await OpenAIProvider().generate_image(PROMPT, png_bytes, api_key)

        assert result == generated_png

        vision_request, image_request = httpx_mock.get_requests()
        assert vision_request.headers["Authorization"] == f"Bearer {api_key}"

        vision_body = json.loads(vision_request.read())
        content = vision_body["messages"][0]["content"]
        assert content[0]["type"] == "text"
        assert content[1]["type"] == "image_url"
        assert content[1]["image_url"]["url"].startswith("data:image/png;base64,")

        image_body = json.loads(image_request.read())
        assert image_body["response_format"] == "b64_json"
        assert image_body["prompt"].startswith(PROMPT)
        assert "A yellow lightning bolt with the word FLASH" in image_body["prompt"]
        assert "must be preserved exactly" in image_body["prompt"]

    @pytest.mark.asyncio
    async def test_vision_failure_aborts(self, httpx_mock: HTTPXMock, png_bytes, api_key):
        httpx_mock.add_response(
            url=OPENAI_CHAT_URL,
            method="POST",
            status_code=401,
            json={"error": {"message": "Incorrect API key provided"}},
        )

        with pytest.raises(GenerationError) as exc_info:
            await OpenAIProvider().generate_image(PROMPT, png_bytes, api_key)

        assert "Incorrect API key provided" in str(exc_info.value)
        assert len(httpx_mock.get_requests()) == 1

    @pytest.mark.asyncio
    async def test_generation_failure(self, httpx_mock: HTTPXMock, png_bytes, api_key):
        httpx_mock.add_response(
            url=OPENAI_CHAT_URL,
            method="POST",
            json={"choices": [{"message": {"content": "Blue logo"}}]},
        )
        httpx_mock.add_response(
            url=OPENAI_IMAGES_URL,
            method="POST",
            status_code=400,
            json={"error": {"message": "content_policy_violation"}},
        )

        with pytest.raises(GenerationError) as exc_info:
            await OpenAIProvider().generate_image(PROMPT, png_bytes, api_key)

        assert exc_info.value.status_code == 400
        assert "content_policy_violation" in exc_info.value.body

    @pytest.mark.asyncio
    async def test_missing_b64_json(self, httpx_mock: HTTPXMock, png_bytes, api_key):
        httpx_mock.add_response(
            url=OPENAI_CHAT_URL,
            method="POST",
            json={"choices": [{"message": {"content": "Blue logo"}}]},
        )
        httpx_mock.add_response(url=OPENAI_IMAGES_URL, method="POST", json={"data": []})

        with pytest.raises(NoImageReturnedError):
            await OpenAIProvider().generate_image(PROMPT, png_bytes, api_key)

    def test_build_enhanced_prompt(self):
        prompt = OpenAIProvider.build_enhanced_prompt("Base prompt", "red star")

        assert prompt.startswith("Base prompt\n\nIMPORTANT:")
        assert "exactly as described: red star." in prompt


class TestStabilityAIProvider:
    """Test cases for the image-to-image provider."""

    @pytest.mark.asyncio
    async def test_generate_image(self, httpx_mock: HTTPXMock, png_bytes, generated_png, api_key):
        httpx_mock.add_response(
            url=STABILITY_URL,
            method="POST",
            content=generated_png,
            headers={"Content-Type": "image/png"},
        )

        result = await StabilityAIProvider().generate_image(PROMPT, png_bytes, api_key)

        assert result == generated_png

        request = httpx_mock.get_request()
        assert request.headers["Authorization"] == f"Bearer {api_key}"
        assert request.headers["Content-Type"].startswith("multipart/form-data")

        body = request.read()
        assert b'name="image"; filename="product.png"' in body
        assert png_bytes in body
        assert b'name="mode"\r\n\r\nimage-to-image' in body
        assert b'name="strength"\r\n\r\n0.7' in body
        assert b'name="prompt"' in body

    @pytest.mark.asyncio
    async def test_api_error(self, httpx_mock: HTTPXMock, png_bytes, api_key):
        httpx_mock.add_response(
            url=STABILITY_URL,
            method="POST",
            status_code=402,
            text="insufficient credits",
        )

        with pytest.raises(GenerationError) as exc_info:
            await StabilityAIProvider().generate_image(PROMPT, png_bytes, api_key)

        assert "insufficient credits" in str(exc_info.value)

    @pytest.mark.asyncio
    async def test_empty_body(self, httpx_mock: HTTPXMock, png_bytes, api_key):
        httpx_mock.add_response(url=STABILITY_URL, method="POST", content=b"")

        with pytest.raises(NoImageReturnedError):
            await StabilityAIProvider().generate_image(PROMPT, png_bytes, api_key)


class TestReplicateProvider:
    """Test cases for the polling provider."""

    @pytest.mark.asyncio
    async def test_generate_image(self, httpx_mock: HTTPXMock, png_bytes, generated_png, api_key):
        httpx_mock.add_response(
            url=REPLICATE_URL,
            method="POST",
            status_code=201,
            json={"id": "pred-123", "status": "starting"},
        )
        httpx_mock.add_response(
            url=REPLICATE_POLL_URL,
            method="GET",
            json={"id": "pred-123", "status": "processing"},
        )
        httpx_mock.add_response(
            url=REPLICATE_POLL_URL,
            method="GET",
            json={"id": "pred-123", "status": "succeeded", "output": [OUTPUT_URL]},
        )
        httpx_mock.add_response(url=OUTPUT_URL, method="GET", content=generated_png)

        result = await ReplicateProvider(poll_interval=0).generate_image(PROMPT, png_bytes, api_key)

        assert result == generated_png

        requests = httpx_mock.get_requests()
        assert len(requests) == 4
        assert requests[0].headers["Authorization"] == f"Token {api_key}"

        create_body = json.loads(requests[0].read())
        assert create_body["input"]["strength"] == 0.7
        assert create_body["input"]["prompt"] == PROMPT
        assert create_body["input"]["image"].startswith("data:image/png;base64,")

    @pytest.mark.asyncio
    async def test_already_succeeded_skips_polling(self, httpx_mock: HTTPXMock, png_bytes, generated_png, api_key):
        httpx_mock.add_response(
            url=REPLICATE_URL,
            method="POST",
            json={"id": "pred-123", "status": "succeeded", "output": OUTPUT_URL},
        )
        httpx_mock.add_response(url=OUTPUT_URL, method="GET", content=generated_png)

        result = await ReplicateProvider(poll_interval=0).generate_image(PROMPT, png_bytes, api_key)

        assert result == generated_png
        assert len(httpx_mock.get_requests()) == 2

    @pytest.mark.asyncio
    @pytest.mark.parametrize("status", ["failed", "canceled"])
    async def test_terminal_failure(self, httpx_mock: HTTPXMock, png_bytes, api_key, status):
        httpx_mock.add_response(
            url=REPLICATE_URL,
            method="POST",
            json={"id": "pred-123", "status": "starting"},
        )
        httpx_mock.add_response(
            url=REPLICATE_POLL_URL,
            method="GET",
            json={"id": "pred-123", "status": status, "error": "CUDA out of memory"},
        )

        with pytest.raises(GenerationError) as exc_info:
            await ReplicateProvider(poll_interval=0).generate_image(PROMPT, png_bytes, api_key)

        assert not isinstance(exc_info.value, GenerationTimeoutError)
        assert "CUDA out of memory" in str(exc_info.value)
        assert status in str(exc_info.value)

    @pytest.mark.asyncio
    async def test_poll_limit(self, httpx_mock: HTTPXMock, png_bytes, api_key):
        httpx_mock.add_response(
            url=REPLICATE_URL,
            method="POST",
            json={"id": "pred-123", "status": "starting"},
        )
        for _ in range(2):
            httpx_mock.add_response(
                url=REPLICATE_POLL_URL,
                method="GET",
                json={"id": "pred-123", "status": "processing"},
            )

        provider = ReplicateProvider(poll_interval=0, max_polls=2)

        with pytest.raises(GenerationTimeoutError):
            await provider.generate_image(PROMPT, png_bytes, api_key)

        assert len(httpx_mock.get_requests()) == 3

    @pytest.mark.asyncio
    async def test_max_wait_limit(self, httpx_mock: HTTPXMock, png_bytes, api_key):
        httpx_mock.add_response(
            url=REPLICATE_URL,
            method="POST",
            json={"id": "pred-123", "status": "starting"},
        )
        httpx_mock.add_response(
            url=REPLICATE_POLL_URL,
            method="GET",
            json={"id": "pred-123", "status": "processing"},
        )

        # One sleep outlasts the deadline, well before max_polls
        provider = ReplicateProvider(poll_interval=0.05, max_wait=0.01, max_polls=100)

        with pytest.raises(GenerationTimeoutError):
            await provider.generate_image(PROMPT, png_bytes, api_key)

        assert len(httpx_mock.get_requests()) == 2

    @pytest.mark.asyncio
    async def test_download_error(self, httpx_mock: HTTPXMock, png_bytes, api_key):
        httpx_mock.add_response(
            url=REPLICATE_URL,
            method="POST",
            json={"id": "pred-123", "status": "succeeded", "output": [OUTPUT_URL]},
        )
        httpx_mock.add_response(url=OUTPUT_URL, method="GET", status_code=404, text="Not found")

        with pytest.raises(GenerationError) as exc_info:
            await ReplicateProvider(poll_interval=0).generate_image(PROMPT, png_bytes, api_key)

        assert exc_info.value.status_code == 404

    @pytest.mark.asyncio
    async def test_non_json_create_response(self, httpx_mock: HTTPXMock, png_bytes, api_key):
        httpx_mock.add_response(url=REPLICATE_URL, method="POST", text="upstream timeout")

        with pytest.raises(GenerationError) as exc_info:
            await ReplicateProvider(poll_interval=0).generate_image(PROMPT, png_bytes, api_key)

        assert "upstream timeout" in str(exc_info.value)

    @pytest.mark.asyncio
    async def test_poll_http_error(self, httpx_mock: HTTPXMock, png_bytes, api_key):
        httpx_mock.add_response(
            url=REPLICATE_URL,
            method="POST",
            json={"id": "pred-123", "status": "starting"},
        )
        httpx_mock.add_response(
            url=REPLICATE_POLL_URL,
            method="GET",
            status_code=500,
            text="internal error",
        )

        with pytest.raises(GenerationError) as exc_info:
            await ReplicateProvider(poll_interval=0).generate_image(PROMPT, png_bytes, api_key)

        assert exc_info.value.status_code == 500

    @pytest.mark.asyncio
    async def test_empty_output(self, httpx_mock: HTTPXMock, png_bytes, api_key):
        httpx_mock.add_response(
            url=REPLICATE_URL,
            method="POST",
            json={"id": "pred-123", "status": "succeeded", "output": []},
        )

        with pytest.raises(NoImageReturnedError):
            await ReplicateProvider(poll_interval=0).generate_image(PROMPT, png_bytes, api_key)

    @pytest.mark.asyncio
    async def test_create_error(self, httpx_mock: HTTPXMock, png_bytes, api_key):
        httpx_mock.add_response(
            url=REPLICATE_URL,
            method="POST",
            status_code=422,
            json={"detail": "Invalid version or not permitted"},
        )

        with pytest.raises(GenerationError) as exc_info:
            await ReplicateProvider(poll_interval=0).generate_image(PROMPT, png_bytes, api_key)

        assert "Invalid version or not permitted" in str(exc_info.value)

    def test_polling_limits_from_config(self, default_config):
        provider = ReplicateProvider()

        assert provider.poll_interval == default_config.replicate_poll_interval_seconds
        assert provider.max_polls == default_config.replicate_max_polls
        assert provider.max_wait == default_config.replicate_max_wait_seconds
