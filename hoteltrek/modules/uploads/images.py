"""Image validation and normalisation for uploaded pictures."""
import io
import logging
import warnings
from dataclasses import dataclass
from typing import Sequence

from PIL import Image, UnidentifiedImageError

logger = logging.getLogger(__name__)

CONTENT_TYPES = {
    "png": "image/png",
    "jpeg": "image/jpeg",
    "gif": "image/gif",
    "webp": "image/webp",
}

EXTENSIONS = {
    "png": "png",
    "jpeg": "jpg",
    "gif": "gif",
    "webp": "webp",
}


# Decoded canvas cap, well below Pillow's own bomb threshold
MAX_PIXELS = 40_000_000


class ImageValidationError(ValueError):
    pass


@dataclass(frozen=True)
class ImageRules:
    max_bytes: int
    allowed_formats: Sequence[str]
    max_size: int
    min_size: int = 1
    square: bool = False
    max_pixels: int = MAX_PIXELS


@dataclass
class ProcessedImage:
    content: bytes
    format: str
    width: int
    height: int

    @property
    def content_type(self) -> str:
        return CONTENT_TYPES.get(self.format, "application/octet-stream")

    @property
    def extension(self) -> str:
        return EXTENSIONS.get(self.format, self.format)


def _normalise_format(name: str) -> str:
    name = name.lower()
    return "jpeg" if name in ("jpg", "jpeg") else name


def _center_square(image: Image.Image) -> Image.Image:
    width, height = image.size
    side = min(width, height)
    left = (width - side) // 2
    top = (height - side) // 2
    return image.crop((left, top, left + side, top + side))


def process_image(content: bytes, rules: ImageRules) -> ProcessedImage:
    """
    Validate an uploaded image and return it ready for storage.

    Checks byte size, decoded format and minimum dimensions, then optionally
    crops to a centered 1:1 square and downscales so neither side exceeds
    rules.max_size. Images that need no change are returned byte for byte.
    Animated GIFs keep only their first frame when they have to be re-encoded.
    """
    if not content:
        raise ImageValidationError("Uploaded file is empty")
    if len(content) > rules.max_bytes:
        raise ImageValidationError(f"Image is larger than {rules.max_bytes} bytes")

    try:
        with warnings.catch_warnings():
            warnings.simplefilter("error", Image.DecompressionBombWarning)
            image = Image.open(io.BytesIO(content))
    except (Image.DecompressionBombError, Image.DecompressionBombWarning) as e:
        raise ImageValidationError("Image dimensions are too large") from e
    except (UnidentifiedImageError, OSError) as e:
        raise ImageValidationError("File is not a valid image") from e

    # header only so far; refuse huge canvases before decoding pixels
    if image.size[0] * image.size[1] > rules.max_pixels:
        raise ImageValidationError(
            f"Image dimensions are too large ({image.size[0]}x{image.size[1]}), "
            f"at most {rules.max_pixels} pixels"
        )
    try:
        image.load()
    except OSError as e:
        raise ImageValidationError("File is not a valid image") from e

    fmt = _normalise_format(image.format or "")
    allowed = {_normalise_format(f) for f in rules.allowed_formats}
    if fmt not in allowed:
        raise ImageValidationError(
            f"Unsupported image format '{fmt or 'unknown'}'. Allowed: {', '.join(sorted(allowed))}"
        )

    width, height = image.size
    if width < rules.min_size or height < rules.min_size:
        raise ImageValidationError(
            f"Image must be at least {rules.min_size}x{rules.min_size} pixels, got {width}x{height}"
        )

    changed = False
    if rules.square and width != height:
        image = _center_square(image)
        changed = True
    if max(image.size) > rules.max_size:
        image.thumbnail((rules.max_size, rules.max_size), Image.Resampling.LANCZOS)
        changed = True

    if not changed:
        return ProcessedImage(content=content, format=fmt, width=width, height=height)

    if fmt == "jpeg" and image.mode not in ("RGB", "L"):
        image = image.convert("RGB")
    buffer = io.BytesIO()
    image.save(buffer, format=fmt.upper())
    logger.debug("Re-encoded %s image %sx%s -> %sx%s", fmt, width, height, *image.size)
    return ProcessedImage(
        content=buffer.getvalue(),
        format=fmt,
        width=image.size[0],
        height=image.size[1],
    )
