from __future__ import annotations

import io
import struct
import zlib
from datetime import date, timedelta

from PIL import Image


def future(days: int) -> str:
    return (date.today() + timedelta(days=days)).isoformat()


def make_image(width: int, height: int, fmt: str = "PNG", color=(200, 30, 30)) -> bytes:
    buffer = io.BytesIO()
    Image.new("RGB", (width, height), color).save(buffer, format=fmt)
    return buffer.getvalue()


def oversized_png(width: int, height: int) -> bytes:
    """A tiny PNG whose header claims width x height; only the header is ever read."""
    content = bytearray(make_image(8, 8))
    # IHDR data starts after the signature, chunk length and chunk type
    content[16:24] = struct.pack(">II", width, height)
    content[29:33] = struct.pack(">I", zlib.crc32(bytes(content[12:29])) & 0xFFFFFFFF)
    return bytes(content)
