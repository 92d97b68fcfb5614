"""Google Gemini image model client (Nano Banana)."""

import base64
import binascii
from typing import Optional

import httpx

from .base import BaseProvider
from ..models.enums import ProviderName
from ..utils.errors import NoImageReturnedError
from ..utils.images import bytes_to_base64, detect_mime_type
from ..utils.logger import get_logger

logger = get_logger(__name__)


class NanoBananaProvider(BaseProvider):
    """Client for Gemini 2.5 Flash Image, the default provider.

    A single ``generateContent`` call carries the prompt and the reference
    image inline; the generated image comes back as an inline data part.
    """

    name = ProviderName.NANOBANANA.value
    credential_env_vars = ("GOOGLE_AI_API_KEY", "GEMINI_API_KEY")

    MODEL = "gemini-2.5-flash-image"

    GENERATION_CONFIG = {
        "temperature": 0.7,
        "topK": 40,
        "topP": 0.95,
        "maxOutputTokens": 1024,
    }

    def __init__(self, timeout: Optional[float] = None):
        super().__init__(
            base_url="https://generativelanguage.googleapis.com/v1beta",
            timeout=timeout,
        )

    @property
    def endpoint(self) -> str:
        return f"{self.base_url}/models/{self.MODEL}:generateContent"

    def _get_headers(self, api_key: str) -> dict:
        return {
            "x-goog-api-key": api_key,
            "Content-Type": "application/json",
        }

    async def _generate(
        self,
        client: httpx.AsyncClient,
        prompt: str,
        reference_image: bytes,
        api_key: str,
    ) -> bytes:
        payload = {
            "contents": [
                {
                    "parts": [
                        {"text": prompt},
                        {
                            "inlineData": {
                                "mimeType": detect_mime_type(reference_image),
                                "data": bytes_to_base64(reference_image),
                            }
                        },
                    ]
                }
            ],
            "generationConfig": self.GENERATION_CONFIG,
        }

        logger.info(
            f"Submitting to Gemini: {self.MODEL}",
            extra={
                "provider": self.name,
                "model": self.MODEL,
                "prompt": prompt[:100],
                "reference_size_kb": len(reference_image) / 1024,
            }
        )

        response = await client.post(
            self.endpoint,
            json=payload,
            headers=self._get_headers(api_key),
        )
        self._raise_for_status(response, "generateContent")

        image_bytes = self._extract_image(self._parse_json(response, "generateContent"))

        logger.info(
            "Image generated successfully",
            extra={
                "provider": self.name,
                "model": self.MODEL,
                "size_kb": len(image_bytes) / 1024,
            }
        )
        return image_bytes

    def _extract_image(self, data: dict) -> bytes:
        """Decode the first inline image part of the first candidate."""
        candidates = data.get("candidates") or []
        parts = []
        if candidates:
            parts = (candidates[0].get("content") or {}).get("parts") or []

        for part in parts:
            inline_data = part.get("inlineData") or {}
            if inline_data.get("data"):
                try:
                    return base64.b64decode(inline_data["data"])
                except binascii.Error as e:
                    raise NoImageReturnedError(
                        self.name, f"Image part is not valid base64: {e}"
                    ) from e

        finish_reason = candidates[0].get("finishReason") if candidates else None
        logger.error(
            "Gemini response contained no image",
            extra={"provider": self.name, "finish_reason": finish_reason}
        )
        raise NoImageReturnedError(self.name, "Nano Banana API did not return an image")
