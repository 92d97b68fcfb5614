"""Custom exception classes for the merch design enhancer."""

from typing import Optional, Sequence


class MerchDesignEnhancerError(Exception):
    """Base exception for all library errors."""
    pass


class ConfigurationError(MerchDesignEnhancerError):
    """Configuration or initialization errors."""
    pass


class MissingCredentialError(ConfigurationError):
    """Provider called without an API key."""

    def __init__(self, provider: str, env_vars: Sequence[str]):
        self.provider = provider
        self.env_vars = tuple(env_vars)
        names = " or ".join(self.env_vars)
        super().__init__(
            f"{provider} API key is required. "
            f"Set {names} environment variable or pass api_key explicitly."
        )


class InvalidInputError(MerchDesignEnhancerError):
    """Image input could not be resolved to image bytes."""
    pass


class UnsupportedProviderError(MerchDesignEnhancerError):
    """Provider identifier outside the supported set."""

    def __init__(self, provider: object, supported: Sequence[str] = ()):
        self.provider = provider
        message = f"Unsupported provider: {provider!r}"
        if supported:
            message += f". Supported providers: {', '.join(supported)}"
        super().__init__(message)


class APIError(MerchDesignEnhancerError):
    """Base class for API-related errors."""
    pass


class ProviderError(APIError):
    """Generic provider API error with status code."""

    def __init__(
        self,
        provider: str,
        message: str,
        status_code: Optional[int] = None,
        body: Optional[str] = None,
    ):
        self.provider = provider
        self.status_code = status_code
        self.body = body
        super().__init__(f"{provider} error: {message}")


class GenerationError(ProviderError):
    """Remote API rejected a request or a job ended unsuccessfully."""
    pass


class GenerationTimeoutError(GenerationError):
    """Asynchronous job did not finish within the polling limits."""
    pass


class NoImageReturnedError(ProviderError):
    """Successful response without the expected image payload."""
    pass
