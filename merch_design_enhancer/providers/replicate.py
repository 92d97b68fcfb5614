"""Replicate hosted diffusion client with status polling."""

import asyncio
import time
from typing import Any, Dict, Optional

import httpx

from .base import BaseProvider
from .stability import IMAGE_STRENGTH
from ..models.enums import PredictionStatus, ProviderName
from ..utils.config import get_config
from ..utils.errors import GenerationError, GenerationTimeoutError, NoImageReturnedError
from ..utils.images import to_data_uri
from ..utils.logger import get_logger

logger = get_logger(__name__)

IN_PROGRESS_STATUSES = frozenset({
    PredictionStatus.STARTING.value,
    PredictionStatus.PROCESSING.value,
})


class ReplicateProvider(BaseProvider):
    """Client for Replicate predictions.

    Creating a prediction returns a job id; the job is polled until it leaves
    the starting/processing states, then the output image is downloaded.
    Polling is bounded by both a wall-clock limit and a request count.
    """

    name = ProviderName.REPLICATE.value
    credential_env_vars = ("REPLICATE_API_TOKEN",)

    MODEL_VERSION = "stability-ai/stable-diffusion:db21e45d3f7023abc2e46d38e3e839806992f2a2"

    def __init__(
        self,
        timeout: Optional[float] = None,
        poll_interval: Optional[float] = None,
        max_wait: Optional[float] = None,
        max_polls: Optional[int] = None,
    ):
        """
        Initialize Replicate client.

        Args:
            timeout: Request timeout in seconds
            poll_interval: Delay between status checks in seconds
            max_wait: Give up polling after this many seconds
            max_polls: Give up polling after this many status requests
        """
        super().__init__(
            base_url="https://api.replicate.com/v1",
            timeout=timeout,
        )

        if poll_interval is None or max_wait is None or max_polls is None:
            config = get_config()
            if poll_interval is None:
                poll_interval = config.replicate_poll_interval_seconds
            if max_wait is None:
                max_wait = config.replicate_max_wait_seconds
            if max_polls is None:
                max_polls = config.replicate_max_polls

        self.poll_interval = poll_interval
        self.max_wait = max_wait
        self.max_polls = max_polls

    def _get_headers(self, api_key: str) -> dict:
        return {
            "Authorization": f"Token {api_key}",
            "Content-Type": "application/json",
        }

    async def _generate(
        self,
        client: httpx.AsyncClient,
        prompt: str,
        reference_image: bytes,
        api_key: str,
    ) -> bytes:
        # STEP 1: Create prediction
        prediction = await self._create_prediction(client, prompt, reference_image, api_key)

        # STEP 2: Poll for completion
        prediction = await self._poll_for_result(client, prediction, api_key)

        # STEP 3: Download image
        image_url = self._output_url(prediction)
        image_bytes = await self._download_image(client, image_url)

        logger.info(
            "Image generated successfully",
            extra={
                "provider": self.name,
                "prediction_id": prediction.get("id"),
                "size_kb": len(image_bytes) / 1024,
            }
        )
        return image_bytes

    async def _create_prediction(
        self,
        client: httpx.AsyncClient,
        prompt: str,
        reference_image: bytes,
        api_key: str,
    ) -> Dict[str, Any]:
        payload = {
            "version": self.MODEL_VERSION,
            "input": {
                "image": to_data_uri(reference_image),
                "prompt": prompt,
                "strength": IMAGE_STRENGTH,
            },
        }

        logger.info(
            "Submitting to Replicate",
            extra={"provider": self.name, "version": self.MODEL_VERSION, "prompt": prompt[:100]}
        )

        response = await client.post(
            f"{self.base_url}/predictions",
            json=payload,
            headers=self._get_headers(api_key),
        )
        self._raise_for_status(response, "Prediction create")

        prediction = self._parse_json(response, "Prediction create")
        if not prediction.get("id"):
            raise GenerationError(self.name, f"No prediction id in response: {response.text}")

        logger.info(
            f"Prediction submitted: {prediction['id']}",
            extra={
                "provider": self.name,
                "prediction_id": prediction["id"],
                "status": prediction.get("status"),
            }
        )
        return prediction

    async def _poll_for_result(
        self,
        client: httpx.AsyncClient,
        prediction: Dict[str, Any],
        api_key: str,
    ) -> Dict[str, Any]:
        """Poll until the prediction reaches a terminal status."""
        prediction_id = prediction["id"]
        deadline = time.monotonic() + self.max_wait
        polls = 0

        while prediction.get("status") in IN_PROGRESS_STATUSES:
            if polls >= self.max_polls or time.monotonic() >= deadline:
                logger.error(
                    "Prediction polling limit reached",
                    extra={
                        "provider": self.name,
                        "prediction_id": prediction_id,
                        "polls": polls,
                        "max_wait": self.max_wait,
                    }
                )
                raise GenerationTimeoutError(
                    self.name,
                    f"Prediction {prediction_id} still {prediction.get('status')} "
                    f"after {polls} polls (limits: {self.max_polls} polls, {self.max_wait}s)",
                )

            await asyncio.sleep(self.poll_interval)

            response = await client.get(
                f"{self.base_url}/predictions/{prediction_id}",
                headers=self._get_headers(api_key),
            )
            polls += 1
            self._raise_for_status(response, "Prediction status")
            prediction = self._parse_json(response, "Prediction status")

            logger.debug(
                f"Prediction status: {prediction.get('status')}",
                extra={
                    "provider": self.name,
                    "prediction_id": prediction_id,
                    "status": prediction.get("status"),
                    "poll": polls,
                }
            )

        status = prediction.get("status")
        if status != PredictionStatus.SUCCEEDED.value:
            error = prediction.get("error") or "Unknown error"
            logger.error(
                f"Prediction {status}",
                extra={"provider": self.name, "prediction_id": prediction_id, "error": error}
            )
            raise GenerationError(self.name, f"Prediction {status}: {error}")

        return prediction

    def _output_url(self, prediction: Dict[str, Any]) -> str:
        output = prediction.get("output")
        if isinstance(output, list):
            output = output[0] if output else None
        if not output:
            raise NoImageReturnedError(self.name, "Replicate prediction did not return an image")
        return output

    async def _download_image(self, client: httpx.AsyncClient, url: str) -> bytes:
        """Download image from URL."""
        logger.info(
            "Downloading prediction output",
            extra={"provider": self.name, "url": url[:100]}
        )
        response = await client.get(url)
        self._raise_for_status(response, "Image download")

        if not response.content:
            raise NoImageReturnedError(self.name, "Downloaded image is empty")
        return response.content
