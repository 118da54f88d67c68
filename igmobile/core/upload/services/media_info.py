"""
Media metadata: image dimensions and MP4 duration.
"""
import io
import struct
from typing import Optional, Tuple

from PIL import Image

from ...exceptions import InvalidArgumentError

MVHD = b'mvhd'


def image_dimensions(data: bytes) -> Tuple[int, int]:
    """
    Read (width, height) of an encoded image.

    Raises:
        InvalidArgumentError: If Pillow cannot identify the image
    """
    try:
        with Image.open(io.BytesIO(data)) as img:
            return img.size
    except OSError as e:
        raise InvalidArgumentError(f"Cannot read image dimensions: {e}") from e


def read_mp4_duration_ms(data: bytes) -> Optional[int]:
    """
    Read the movie duration from the 'mvhd' atom of an MP4.

    Layout after the atom type:
        version (1) + flags (3)
        v0: creation (4), modification (4), timescale (4), duration (4)
        v1: creation (8), modification (8), timescale (4), duration (8)

    Args:
        data: MP4 bytes

    Returns:
        Duration in milliseconds, or None if no usable header is found
    """
    index = data.find(MVHD)
    if index < 0:
        return None

    pos = index + len(MVHD)
    if len(data) <= pos:
        return None
    version = data[pos]

    if version == 1:
        offset = pos + 4 + 16
        fmt = '>IQ'
    else:
        offset = pos + 4 + 8
        fmt = '>II'

    size = struct.calcsize(fmt)
    if len(data) < offset + size:
        return None

    timescale, duration = struct.unpack(fmt, data[offset:offset + size])
    if timescale == 0:
        return None
    return duration * 1000 // timescale
