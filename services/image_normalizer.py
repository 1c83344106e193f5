# services/image_normalizer.py
"""
Image normalization for uploads.

Files at or under the size limit are stored as uploaded (after checking they decode).
Bigger files are resized to at most `max_width_px` wide, flattened to RGB and
re-encoded as JPEG. If that still does not fit the limit the upload is refused with
ImageTooLargeError rather than storing an oversized file.
"""
import io
import logging
from dataclasses import dataclass
from typing import Tuple

from PIL import Image, ImageOps, UnidentifiedImageError

import config
from utils.errors import DecodeError, ImageTooLargeError, UnsupportedMediaTypeError

logger = logging.getLogger(__name__)

FORMAT_CONTENT_TYPES = {
    "JPEG": "image/jpeg",
    # multi-picture JPEG (most phone cameras); still a plain JPEG stream
    "MPO": "image/jpeg",
    "PNG": "image/png",
    "WEBP": "image/webp",
}


@dataclass(frozen=True)
class NormalizedImage:
    data: bytes
    content_type: str
    width: int
    height: int
    resized: bool = False


def probe(data: bytes, name: str = "image") -> Tuple[str, int, int]:
    """
    Decode `data` and return (format, width, height).
    The declared MIME type is not trusted; the decoded format must be an allowed one.
    """
    try:
        with Image.open(io.BytesIO(data)) as im:
            fmt, (width, height) = im.format, im.size
            im.verify()
        # verify() does not read JPEG scan data; a full load catches truncation
        with Image.open(io.BytesIO(data)) as im:
            im.load()
    except (UnidentifiedImageError, Image.DecompressionBombError, OSError, SyntaxError, ValueError) as e:
        logger.info("could not decode %s: %s", name, e)
        raise DecodeError(name=name) from e
    if fmt not in FORMAT_CONTENT_TYPES:
        raise UnsupportedMediaTypeError()
    return fmt, width, height


def _flatten(im: Image.Image) -> Image.Image:
    if im.mode in ("RGBA", "LA") or (im.mode == "P" and "transparency" in im.info):
        rgba = im.convert("RGBA")
        background = Image.new("RGB", rgba.size, (255, 255, 255))
        background.paste(rgba, mask=rgba.split()[-1])
        return background
    if im.mode != "RGB":
        return im.convert("RGB")
    return im


def normalize(
    data: bytes,
    size_limit_bytes: int = None,
    max_width_px: int = None,
    quality: int = None,
    name: str = "image",
) -> NormalizedImage:
    size_limit_bytes = size_limit_bytes if size_limit_bytes is not None else config.MAX_FILE_SIZE
    max_width_px = max_width_px or config.IMAGE_MAX_WIDTH
    quality = quality or config.IMAGE_JPEG_QUALITY

    original = bytes(data)   # never work on the caller's buffer
    fmt, width, height = probe(original, name)

    if len(original) <= size_limit_bytes:
        return NormalizedImage(original, FORMAT_CONTENT_TYPES[fmt], width, height)

    try:
        with Image.open(io.BytesIO(original)) as src:
            im = ImageOps.exif_transpose(src)
            if im.width > max_width_px:
                new_height = max(1, round(im.height * max_width_px / im.width))
                im = im.resize((max_width_px, new_height), Image.Resampling.LANCZOS)
            im = _flatten(im)
            out = io.BytesIO()
            im.save(out, format="JPEG", quality=quality, optimize=True)
            new_width, new_height = im.size
    except (Image.DecompressionBombError, OSError, SyntaxError, ValueError) as e:
        logger.info("could not re-encode %s: %s", name, e)
        raise DecodeError(name=name) from e

    encoded = out.getvalue()
    logger.info(
        "normalized %s: %dx%d %d bytes -> %dx%d %d bytes",
        name, width, height, len(original), new_width, new_height, len(encoded),
    )
    if len(encoded) > size_limit_bytes:
        raise ImageTooLargeError(name=name, limit=size_limit_bytes)
    return NormalizedImage(encoded, "image/jpeg", new_width, new_height, resized=True)
