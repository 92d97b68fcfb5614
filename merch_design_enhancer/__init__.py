"""Turn product photos into boutique-style mockups with AI image providers."""

from .enhancer import MerchDesignEnhancer
from .core import PromptBuilder
from .models import (
    EnhanceImageOptions,
    EnhanceImageResult,
    ProductType,
    ProviderName,
)
from .providers import (
    BaseProvider,
    NanoBananaProvider,
    OpenAIProvider,
    StabilityAIProvider,
    ReplicateProvider,
    create_provider,
)
from .utils.images import normalize_image_input, detect_mime_type
from .utils.errors import (
    MerchDesignEnhancerError,
    ConfigurationError,
    MissingCredentialError,
    InvalidInputError,
    UnsupportedProviderError,
    ProviderError,
    GenerationError,
    GenerationTimeoutError,
    NoImageReturnedError,
)

__version__ = "1.0.0"

__all__ = [
    "MerchDesignEnhancer",
    "PromptBuilder",
    "EnhanceImageOptions",
    "EnhanceImageResult",
    "ProductType",
    "ProviderName",
    "BaseProvider",
    "NanoBananaProvider",
    "OpenAIProvider",
    "StabilityAIProvider",
    "ReplicateProvider",
    "create_provider",
    "normalize_image_input",
    "detect_mime_type",
    "MerchDesignEnhancerError",
    "ConfigurationError",
    "MissingCredentialError",
    "InvalidInputError",
    "UnsupportedProviderError",
    "ProviderError",
    "GenerationError",
    "GenerationTimeoutError",
    "NoImageReturnedError",
]
