"""Image input normalization and format sniffing."""

import base64
import binascii
from pathlib import Path
from typing import Union

from .logger import get_logger
from .errors import InvalidInputError

logger = get_logger(__name__)

ImageInput = Union[bytes, bytearray, memoryview, str, Path]

DEFAULT_MIME_TYPE = "image/png"

# Checked in order, first match wins
MAGIC_SIGNATURES = (
    (b"\xff\xd8", "image/jpeg"),
    (b"\x89PNG", "image/png"),
    (b"GIF", "image/gif"),
    (b"RIFF", "image/webp"),
)


def normalize_image_input(image: ImageInput) -> bytes:
    """
    Resolve an image given as bytes, base64 text, data URI or file path.

    Args:
        image: Raw bytes, a ``data:`` URI, a bare base64 string,
            or a path to an image file

    Returns:
        Image bytes

    Raises:
        InvalidInputError: If the input does not resolve to a non-empty payload
    """
    if isinstance(image, bytes):
        data = image
    elif isinstance(image, (bytearray, memoryview)):
        data = bytes(image)
    elif isinstance(image, Path):
        data = _read_file(image)
    elif isinstance(image, str):
        data = _normalize_text(image)
    else:
        raise InvalidInputError(
            f"Invalid image input type: {type(image).__name__}. "
            "Expected bytes, base64 string, or file path."
        )

    if not data:
        raise InvalidInputError("Image input is empty")

    return data


def _normalize_text(image: str) -> bytes:
    if image.startswith("data:"):
        _, sep, payload = image.partition(",")
        if not sep:
            raise InvalidInputError("Malformed data URI: missing ',' separator")
        try:
            return base64.b64decode(_strip_whitespace(payload), validate=True)
        except binascii.Error as e:
            raise InvalidInputError(f"Malformed data URI payload: {e}") from e

    if "/" not in image and "\\" not in image:
        decoded = _try_base64(image)
        if decoded:
            return decoded
        # Not base64, most likely a relative filename

    path = Path(image)
    try:
        is_file = path.is_file()
    except (OSError, ValueError):
        # Long base64 payloads can exceed the OS path length limit
        is_file = False
    if is_file:
        return _read_file(path)

    # Standard base64 may contain "/"
    decoded = _try_base64(image)
    if decoded:
        return decoded

    raise InvalidInputError(
        "Invalid image input format. Expected bytes, base64 string, or file path "
        f"(no readable file at {image[:100]!r})."
    )


def _try_base64(text: str) -> bytes:
    try:
        return base64.b64decode(_strip_whitespace(text), validate=True)
    except (binascii.Error, ValueError):
        return b""


def _strip_whitespace(text: str) -> str:
    # Wrapped base64 (encodebytes, the base64 CLI) carries newlines
    return "".join(text.split())


def _read_file(path: Path) -> bytes:
    try:
        data = path.read_bytes()
    except OSError as e:
        raise InvalidInputError(f"Failed to read image file {path}: {e}") from e

    logger.debug(
        "Read image from file",
        extra={"path": str(path), "size_kb": len(data) / 1024}
    )
    return data


def detect_mime_type(image_bytes: Union[bytes, bytearray, memoryview]) -> str:
    """
    Detect the MIME type of image bytes from their magic number.

    Args:
        image_bytes: Raw image bytes

    Returns:
        MIME type, ``image/png`` when no signature matches
    """
    prefix = bytes(image_bytes[:4])
    for signature, mime_type in MAGIC_SIGNATURES:
        if prefix.startswith(signature):
            return mime_type
    return DEFAULT_MIME_TYPE


def bytes_to_base64(image_bytes: bytes) -> str:
    """
    Convert image bytes to base64 string.

    Args:
        image_bytes: Raw image bytes

    Returns:
        Base64 encoded string
    """
    return base64.b64encode(image_bytes).decode('utf-8')


def to_data_uri(image_bytes: bytes) -> str:
    """Encode image bytes as a ``data:`` URI with the sniffed MIME type."""
    return f"data:{detect_mime_type(image_bytes)};base64,{bytes_to_base64(image_bytes)}"
