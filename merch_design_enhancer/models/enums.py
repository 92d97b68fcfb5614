"""Enumerations for the merch design enhancer."""

from enum import Enum


class ProductType(str, Enum):
    """Product categories a mockup can be staged for."""
    HOODIE = "hoodie"
    FACECAP = "facecap"
    SHIRT = "shirt"
    MUG = "mug"
    STICKER_PAD = "sticker_pad"
    TANK_TOP = "tank_top"
    LONG_SLEEVE = "long_sleeve"
    SWEATSHIRT = "sweatshirt"
    JACKET = "jacket"
    TOTE_BAG = "tote_bag"


class ProviderName(str, Enum):
    """Remote image generation backends."""
    NANOBANANA = "nanobanana"
    OPENAI = "openai"
    STABILITY = "stability"
    REPLICATE = "replicate"


class PredictionStatus(str, Enum):
    """Status of a hosted diffusion job."""
    STARTING = "starting"
    PROCESSING = "processing"
    SUCCEEDED = "succeeded"
    FAILED = "failed"
    CANCELED = "canceled"
