"""OpenAI client: GPT vision description followed by DALL-E generation."""

import base64
import binascii
from typing import Optional

import httpx

from .base import BaseProvider
from ..models.enums import ProviderName
from ..utils.errors import NoImageReturnedError
from ..utils.images import to_data_uri
from ..utils.logger import get_logger

logger = get_logger(__name__)

DESCRIBE_DESIGN_INSTRUCTION = (
    "Describe in detail the design, graphics, text, colors, and any visual elements "
    "visible on this product. Be very specific about what is printed or displayed on "
    "the product itself. Focus only on the design elements, not the product type or "
    "background."
)


class OpenAIProvider(BaseProvider):
    """Client for OpenAI image generation.

    DALL-E 3 cannot condition on pixels, so the reference image is first
    described by a vision model and that description is spliced into the
    prompt before the text-to-image call. Both calls must succeed.
    """

    name = ProviderName.OPENAI.value
    credential_env_vars = ("OPENAI_API_KEY",)

    VISION_MODEL = "gpt-4o"
    IMAGE_MODEL = "dall-e-3"

    def __init__(self, timeout: Optional[float] = None):
        super().__init__(
            base_url="https://api.openai.com/v1",
            timeout=timeout,
        )

    def _get_headers(self, api_key: str) -> dict:
        return {
            "Authorization": f"Bearer {api_key}",
            "Content-Type": "application/json",
        }

    async def _generate(
        self,
        client: httpx.AsyncClient,
        prompt: str,
        reference_image: bytes,
        api_key: str,
    ) -> bytes:
        description = await self.describe_design(client, reference_image, api_key)
        return await self._generate_from_text(
            client, self.build_enhanced_prompt(prompt, description), api_key
        )

    @staticmethod
    def build_enhanced_prompt(prompt: str, description: str) -> str:
        """Splice the design description into the prompt as a must-preserve clause."""
        return (
            f"{prompt}\n\nIMPORTANT: The product must have the following design elements "
            f"exactly as described: {description}. These design elements must be preserved "
            "exactly - do not alter, modify, or change them in any way."
        )

    async def describe_design(
        self,
        client: httpx.AsyncClient,
        reference_image: bytes,
        api_key: str,
    ) -> str:
        """
        Ask the vision model for a description of the product's design.

        Args:
            client: HTTP client to use
            reference_image: Raw bytes of the product photo
            api_key: OpenAI API key

        Returns:
            Textual description of the printed design
        """
        payload = {
            "model": self.VISION_MODEL,
            "messages": [
                {
                    "role": "user",
                    "content": [
                        {"type": "text", "text": DESCRIBE_DESIGN_INSTRUCTION},
                        {
                            "type": "image_url",
                            "image_url": {"url": to_data_uri(reference_image)},
                        },
                    ],
                }
            ],
            "max_tokens": 300,
        }

        logger.info(
            "Describing design with vision model",
            extra={"provider": self.name, "model": self.VISION_MODEL}
        )

        response = await client.post(
            f"{self.base_url}/chat/completions",
            json=payload,
            headers=self._get_headers(api_key),
        )
        self._raise_for_status(response, "Vision request")

        data = self._parse_json(response, "Vision request")
        try:
            description = data["choices"][0]["message"]["content"] or ""
        except (KeyError, IndexError, TypeError):
            description = ""

        if not description.strip():
            raise NoImageReturnedError(self.name, "Vision API returned no design description")

        logger.info(
            "Design description received",
            extra={"provider": self.name, "description_length": len(description)}
        )
        return description.strip()

    async def _generate_from_text(
        self,
        client: httpx.AsyncClient,
        prompt: str,
        api_key: str,
    ) -> bytes:
        payload = {
            "model": self.IMAGE_MODEL,
            "prompt": prompt,
            "n": 1,
            "size": "1024x1024",
            "response_format": "b64_json",
            "quality": "hd",
        }

        logger.info(
            f"Submitting to OpenAI: {self.IMAGE_MODEL}",
            extra={"provider": self.name, "model": self.IMAGE_MODEL, "prompt": prompt[:100]}
        )

        response = await client.post(
            f"{self.base_url}/images/generations",
            json=payload,
            headers=self._get_headers(api_key),
        )
        self._raise_for_status(response, "Image generation")

        data = self._parse_json(response, "Image generation")
        try:
            image_b64 = data["data"][0]["b64_json"]
        except (KeyError, IndexError, TypeError):
            image_b64 = None

        if not image_b64:
            raise NoImageReturnedError(self.name, "DALL-E API did not return an image")

        try:
            image_bytes = base64.b64decode(image_b64)
        except binascii.Error as e:
            raise NoImageReturnedError(self.name, f"Image payload is not valid base64: {e}") from e

        logger.info(
            "Image generated successfully",
            extra={"provider": self.name, "model": self.IMAGE_MODEL, "size_kb": len(image_bytes) / 1024}
        )
        return image_bytes
