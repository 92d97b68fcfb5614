"""Data models and schemas for the merch design enhancer."""

from .schemas import (
    EnhanceImageOptions,
    EnhanceImageResult,
)
from .enums import (
    ProductType,
    ProviderName,
    PredictionStatus,
)

__all__ = [
    "EnhanceImageOptions",
    "EnhanceImageResult",
    "ProductType",
    "ProviderName",
    "PredictionStatus",
]
