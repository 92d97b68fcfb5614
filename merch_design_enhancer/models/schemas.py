"""Pydantic schemas for requests and results."""

from pathlib import Path
from typing import Optional, Union

from pydantic import BaseModel, ConfigDict

from .enums import ProductType


class EnhanceImageOptions(BaseModel):
    """Input for a single enhancement call."""

    model_config = ConfigDict(frozen=True)

    image: Union[bytes, str, Path]
    product_type: ProductType
    color: Optional[str] = None


class EnhanceImageResult(BaseModel):
    """Generated mockup and its sniffed MIME type."""

    image: bytes
    mime_type: str
