"""Abstract base class for image generation providers."""

from abc import ABC, abstractmethod
from typing import Optional, Tuple

import httpx

from ..utils.config import get_config
from ..utils.errors import GenerationError, MissingCredentialError
from ..utils.logger import get_logger

logger = get_logger(__name__)


class BaseProvider(ABC):
    """
    Abstract base class for all image generation providers.

    Providers are stateless with respect to credentials: the API key is
    passed on every call. Entering the provider as an async context manager
    keeps one HTTP client open for connection reuse; otherwise each call
    opens and closes its own client.
    """

    name: str = ""
    credential_env_vars: Tuple[str, ...] = ()

    def __init__(
        self,
        base_url: str,
        timeout: Optional[float] = None,
    ):
        """
        Initialize provider.

        Args:
            base_url: Base URL for API endpoints
            timeout: Request timeout in seconds (defaults to config value)
        """
        if timeout is None:
            timeout = get_config().timeout_seconds

        self.base_url = base_url
        self.timeout = timeout
        self.client: Optional[httpx.AsyncClient] = None

    async def __aenter__(self):
        """Async context manager entry."""
        await self.initialize()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit."""
        await self.close()

    async def initialize(self):
        """Initialize the shared HTTP client."""
        if self.client is None:
            self.client = httpx.AsyncClient(timeout=self.timeout)
            logger.info(
                f"{self.__class__.__name__} initialized",
                extra={"provider": self.name}
            )

    async def close(self):
        """Close the shared HTTP client."""
        if self.client:
            await self.client.aclose()
            self.client = None
            logger.info(
                f"{self.__class__.__name__} closed",
                extra={"provider": self.name}
            )

    async def generate_image(
        self,
        prompt: str,
        reference_image: bytes,
        api_key: str,
    ) -> bytes:
        """
        Generate a mockup image from a prompt and a reference image.

        Args:
            prompt: Generation prompt
            reference_image: Raw bytes of the product photo
            api_key: Credential for this provider

        Returns:
            Generated image bytes

        Raises:
            MissingCredentialError: If api_key is empty (no request is made)
            GenerationError: If the remote API returns a non-success status
            NoImageReturnedError: If a successful response carries no image
        """
        if not api_key:
            raise MissingCredentialError(self.name, self.credential_env_vars)

        if self.client is not None:
            return await self._generate(self.client, prompt, reference_image, api_key)

        async with httpx.AsyncClient(timeout=self.timeout) as client:
            return await self._generate(client, prompt, reference_image, api_key)

    @abstractmethod
    async def _generate(
        self,
        client: httpx.AsyncClient,
        prompt: str,
        reference_image: bytes,
        api_key: str,
    ) -> bytes:
        """Run the provider-specific request choreography."""
        pass

    @abstractmethod
    def _get_headers(self, api_key: str) -> dict:
        """Get headers for authenticated requests."""
        pass

    def _raise_for_status(self, response: httpx.Response, action: str):
        """Raise GenerationError carrying the remote body on non-success."""
        if response.is_success:
            return

        logger.error(
            f"{self.name} {action} failed: {response.status_code}",
            extra={
                "provider": self.name,
                "status": response.status_code,
                "response": response.text[:500],
            }
        )
        raise GenerationError(
            self.name,
            f"{action} failed with HTTP {response.status_code}: {response.text}",
            response.status_code,
            response.text,
        )

    def _parse_json(self, response: httpx.Response, action: str) -> dict:
        """Decode a successful JSON response, raising GenerationError on a malformed body."""
        try:
            return response.json()
        except ValueError as e:
            logger.error(
                f"{self.name} {action} returned invalid JSON",
                extra={"provider": self.name, "response": response.text[:500]}
            )
            raise GenerationError(
                self.name,
                f"{action} returned a non-JSON body: {response.text[:500]}",
                response.status_code,
                response.text,
            ) from e
