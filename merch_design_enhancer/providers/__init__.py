"""Image generation provider clients."""

from .base import BaseProvider
from .nanobanana import NanoBananaProvider
from .openai import OpenAIProvider
from .stability import StabilityAIProvider
from .replicate import ReplicateProvider
from .factory import create_provider, CREDENTIAL_ENV_VARS

__all__ = [
    "BaseProvider",
    "NanoBananaProvider",
    "OpenAIProvider",
    "StabilityAIProvider",
    "ReplicateProvider",
    "create_provider",
    "CREDENTIAL_ENV_VARS",
]
