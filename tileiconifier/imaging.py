#===============================================================================
#  TileIconifier | imaging.py
#===============================================================================
#  Author      : Edwin A. Rodriguez
#  Role/Team   : SAP COE / SAP SRE (GRM-Testing-Automation & Governance)
#  Created     : 2026-02-10
#  Last Update : 2026-02-11
#
#  Summary
#  -------
#  Tile image I/O: raw PNG bytes from disk, QImage decoding, and a one-slot
#  decoded-image cache keyed by blob content.
#
#  Copyright (c) 2026 Edwin A. Rodriguez. All rights reserved.
#  Provided "AS IS", without warranty of any kind.
#===============================================================================

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Callable, Optional

from PySide6.QtCore import QBuffer, QIODevice
from PySide6.QtGui import QImage

from .models import FailureKind, Result

logger = logging.getLogger(__name__)

ImageDecoder = Callable[[bytes], Any]


def load_image_file_as_bytes(path: str | Path) -> Optional[bytes]:
    """Read an image file's encoded bytes, or None if it cannot be read."""
    try:
        return Path(path).read_bytes()
    except OSError as e:
        logger.debug("Could not read image %s: %s", path, e)
        return None


def decode_image(data: bytes) -> QImage:
    """Decode PNG (or any Qt-supported format) bytes into a QImage.

    Raises ValueError when Qt cannot decode the data.
    """
    image = QImage()
    if not image.loadFromData(bytes(data)):
        raise ValueError("Unsupported or corrupt image data")
    return image


def encode_png(image: QImage) -> bytes:
    """Encode a QImage to PNG bytes."""
    buf = QBuffer()
    buf.open(QIODevice.OpenModeFlag.WriteOnly)
    try:
        if not image.save(buf, "PNG"):
            raise ValueError("Could not encode image as PNG")
    finally:
        buf.close()
    return bytes(buf.data().data())


class ImageCache:
    """Remembers the decoded image for the last blob it was asked about.

    A lookup with content-equal bytes (same object, or a different object
    with the same content) returns the cached image without decoding again.
    ``None`` bytes map to ``None`` without calling the decoder, and
    None-after-None is a hit.

    Not synchronized: an instance belongs to a single thread at a time.
    """

    def __init__(self, decoder: ImageDecoder = decode_image):
        self._decoder = decoder
        self._blob: Optional[bytes] = None
        self._result = Result.success(None)

    def _is_hit(self, data: Optional[bytes]) -> bool:
        if data is self._blob:
            return True
        if data is None or self._blob is None:
            return False
        return bytes(data) == self._blob

    def lookup(self, data: Optional[bytes]) -> Result:
        """Return the decoded image for *data* as a Result."""
        if self._is_hit(data):
            return self._result

        if data is None:
            self._blob = None
            self._result = Result.success(None)
            return self._result

        blob = bytes(data)
        try:
            image = self._decoder(blob)
        except Exception as e:  # any decoder error
            logger.debug("Image decode failed (%d bytes): %s", len(blob), e)
            self._result = Result.fail(FailureKind.IMAGE_DECODE_FAILURE, str(e))
        else:
            self._result = Result.success(image)
        self._blob = blob
        return self._result

    def get(self, data: Optional[bytes]) -> Any:
        """Decoded image for *data*, or None if absent or undecodable."""
        return self.lookup(data).value

    def clear(self) -> None:
        self._blob = None
        self._result = Result.success(None)
