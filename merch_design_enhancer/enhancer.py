"""Public entry point: turn a product photo into a boutique mockup."""

from typing import Optional, Union

from pydantic import ValidationError

from .core.prompt_builder import PromptBuilder
from .models.enums import ProductType, ProviderName
from .models.schemas import EnhanceImageOptions, EnhanceImageResult
from .providers.base import BaseProvider
from .providers.factory import create_provider, resolve_provider_name
from .utils.config import Config, get_config
from .utils.errors import InvalidInputError
from .utils.images import ImageInput, detect_mime_type, normalize_image_input
from .utils.logger import get_logger

logger = get_logger(__name__)


class MerchDesignEnhancer:
    """
    Enhances product photos into boutique-style mockups while keeping the design.

    Example:
        enhancer = MerchDesignEnhancer(api_key="...", provider="nanobanana")
        result = await enhancer.enhance_image(
            image=Path("my-shirt.png").read_bytes(),
            product_type=ProductType.SHIRT,
            color="navy blue",
        )
        Path("enhanced.png").write_bytes(result.image)
    """

    def __init__(
        self,
        api_key: str,
        provider: Union[ProviderName, str] = ProviderName.NANOBANANA,
        **provider_kwargs,
    ):
        """
        Initialize the enhancer.

        Args:
            api_key: API key for the selected provider
            provider: Provider name (defaults to ``nanobanana``)
            **provider_kwargs: Passed to the provider constructor (e.g. ``timeout``)

        Raises:
            UnsupportedProviderError: If the provider is unknown
        """
        self._api_key = api_key
        self._provider_name = resolve_provider_name(provider)
        self._provider = create_provider(self._provider_name, **provider_kwargs)

    @classmethod
    def from_env(
        cls,
        provider: Optional[Union[ProviderName, str]] = None,
        config: Optional[Config] = None,
        **provider_kwargs,
    ) -> "MerchDesignEnhancer":
        """
        Build an enhancer with the credential taken from configuration.

        Args:
            provider: Provider name (defaults to the configured default provider)
            config: Configuration to use (defaults to the loaded configuration)
        """
        config = config or get_config()
        provider = provider or config.default_provider
        return cls(config.api_key_for(provider), provider, **provider_kwargs)

    @property
    def provider_name(self) -> ProviderName:
        return self._provider_name

    @property
    def provider(self) -> BaseProvider:
        return self._provider

    async def __aenter__(self):
        await self._provider.initialize()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self._provider.close()

    async def enhance_image(
        self,
        image: Union[ImageInput, EnhanceImageOptions],
        product_type: Optional[Union[ProductType, str]] = None,
        color: Optional[str] = None,
    ) -> EnhanceImageResult:
        """
        Create a boutique mockup of a product while preserving its design.

        Args:
            image: Image bytes, base64 string, data URI or file path,
                or a prepared EnhanceImageOptions
            product_type: Product category
            color: Optional colour to render the product in

        Returns:
            EnhanceImageResult with the generated image and its MIME type

        Raises:
            InvalidInputError: If the image or product type is invalid
            MissingCredentialError: If no API key was given
            GenerationError: If the provider request fails
            NoImageReturnedError: If the provider returns no image
        """
        options = self._build_options(image, product_type, color)

        image_bytes = normalize_image_input(options.image)
        prompt = PromptBuilder.build_prompt(options.product_type, options.color, True)

        logger.info(
            "Enhancing product image",
            extra={
                "provider": self._provider_name.value,
                "product_type": options.product_type.value,
                "color": options.color,
                "input_size_kb": len(image_bytes) / 1024,
            }
        )

        generated = await self._provider.generate_image(prompt, image_bytes, self._api_key)
        mime_type = detect_mime_type(generated)

        logger.info(
            "Enhancement complete",
            extra={
                "provider": self._provider_name.value,
                "mime_type": mime_type,
                "output_size_kb": len(generated) / 1024,
            }
        )

        return EnhanceImageResult(image=generated, mime_type=mime_type)

    @staticmethod
    def _build_options(image, product_type, color) -> EnhanceImageOptions:
        if isinstance(image, EnhanceImageOptions):
            return image

        if product_type is None:
            raise InvalidInputError("product_type is required")

        if isinstance(image, (bytearray, memoryview)):
            image = bytes(image)

        try:
            return EnhanceImageOptions(image=image, product_type=product_type, color=color)
        except ValidationError as e:
            raise InvalidInputError(f"Invalid enhancement options: {e}") from e
