"""Provider lookup by name."""

from typing import Dict, Tuple, Type, Union

from .base import BaseProvider
from .nanobanana import NanoBananaProvider
from .openai import OpenAIProvider
from .replicate import ReplicateProvider
from .stability import StabilityAIProvider
from ..models.enums import ProviderName
from ..utils.errors import UnsupportedProviderError

PROVIDERS: Dict[ProviderName, Type[BaseProvider]] = {
    ProviderName.NANOBANANA: NanoBananaProvider,
    ProviderName.OPENAI: OpenAIProvider,
    ProviderName.STABILITY: StabilityAIProvider,
    ProviderName.REPLICATE: ReplicateProvider,
}

CREDENTIAL_ENV_VARS: Dict[ProviderName, Tuple[str, ...]] = {
    name: provider_class.credential_env_vars
    for name, provider_class in PROVIDERS.items()
}


def resolve_provider_name(provider: Union[ProviderName, str]) -> ProviderName:
    """
    Validate a provider identifier.

    Raises:
        UnsupportedProviderError: If the identifier is not a known provider
    """
    try:
        return ProviderName(provider)
    except ValueError:
        raise UnsupportedProviderError(provider, [name.value for name in ProviderName]) from None


def create_provider(provider: Union[ProviderName, str], **kwargs) -> BaseProvider:
    """
    Create a fresh provider instance.

    Args:
        provider: Provider name, e.g. ``"nanobanana"``
        **kwargs: Passed to the provider constructor (e.g. ``timeout``)

    Returns:
        Provider instance

    Raises:
        UnsupportedProviderError: If the provider is unknown
    """
    return PROVIDERS[resolve_provider_name(provider)](**kwargs)
