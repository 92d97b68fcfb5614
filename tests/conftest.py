"""Pytest configuration and shared fixtures."""

import base64
from io import BytesIO

import pytest
from PIL import Image

from merch_design_enhancer.utils import config as config_module
from merch_design_enhancer.utils.config import Config


def _image_bytes(color: str, fmt: str, size=(10, 10)) -> bytes:
    buffer = BytesIO()
    Image.new("RGB", size, color).save(buffer, format=fmt)
    return buffer.getvalue()


@pytest.fixture(autouse=True)
def default_config():
    """Pin configuration to defaults so tests ignore the caller's environment."""
    previous = config_module._config
    config_module._config = Config(
        replicate_poll_interval_seconds=0,
        replicate_max_wait_seconds=30,
        replicate_max_polls=5,
    )
    yield config_module._config
    config_module._config = previous


@pytest.fixture
def png_bytes() -> bytes:
    """10x10 solid colour PNG used as the product photo."""
    return _image_bytes("white", "PNG")


@pytest.fixture
def jpeg_bytes() -> bytes:
    return _image_bytes("black", "JPEG")


@pytest.fixture
def generated_png() -> bytes:
    """Fixed PNG the stubbed providers answer with."""
    return _image_bytes("red", "PNG", size=(16, 16))


@pytest.fixture
def generated_png_b64(generated_png) -> str:
    return base64.b64encode(generated_png).decode("ascii")


@pytest.fixture
def api_key() -> str:
    return "test-api-key"
