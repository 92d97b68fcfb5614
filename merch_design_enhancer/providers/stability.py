"""Stability AI image-to-image client."""

from typing import Optional

import httpx

from .base import BaseProvider
from ..models.enums import ProviderName
from ..utils.errors import NoImageReturnedError
from ..utils.images import detect_mime_type
from ..utils.logger import get_logger

logger = get_logger(__name__)

# Lower values stay closer to the reference image
IMAGE_STRENGTH = 0.7


class StabilityAIProvider(BaseProvider):
    """Client for the Stability AI stable-image edit endpoint.

    The reference image is sent as multipart form data and the endpoint
    answers with raw image bytes.
    """

    name = ProviderName.STABILITY.value
    credential_env_vars = ("STABILITY_API_KEY",)

    def __init__(self, timeout: Optional[float] = None):
        super().__init__(
            base_url="https://api.stability.ai/v2beta",
            timeout=timeout,
        )

    @property
    def endpoint(self) -> str:
        return f"{self.base_url}/stable-image/edit/creative"

    def _get_headers(self, api_key: str) -> dict:
        # Content-Type is set by httpx with the multipart boundary
        return {
            "Authorization": f"Bearer {api_key}",
            "Accept": "image/*",
        }

    async def _generate(
        self,
        client: httpx.AsyncClient,
        prompt: str,
        reference_image: bytes,
        api_key: str,
    ) -> bytes:
        files = {
            "image": ("product.png", reference_image, detect_mime_type(reference_image)),
        }
        data = {
            "prompt": prompt,
            "mode": "image-to-image",
            "strength": str(IMAGE_STRENGTH),
        }

        logger.info(
            "Submitting to Stability AI",
            extra={
                "provider": self.name,
                "strength": IMAGE_STRENGTH,
                "prompt": prompt[:100],
                "reference_size_kb": len(reference_image) / 1024,
            }
        )

        response = await client.post(
            self.endpoint,
            headers=self._get_headers(api_key),
            files=files,
            data=data,
        )
        self._raise_for_status(response, "Image-to-image request")

        image_bytes = response.content
        if not image_bytes:
            raise NoImageReturnedError(self.name, "Stability AI returned an empty body")

        logger.info(
            "Image generated successfully",
            extra={"provider": self.name, "size_kb": len(image_bytes) / 1024}
        )
        return image_bytes
