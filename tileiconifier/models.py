#===============================================================================
#  TileIconifier | models.py
#===============================================================================
#  Author      : Edwin A. Rodriguez
#  Role/Team   : SAP COE / SAP SRE (GRM-Testing-Automation & Governance)
#  Created     : 2026-02-10
#  Last Update : 2026-02-11
#
#  Summary
#  -------
#  Shared data models: tile icon parameters, shortcut ownership, and the
#  explicit result values returned by the I/O-facing modules.
#
#  Copyright (c) 2026 Edwin A. Rodriguez. All rights reserved.
#  Provided "AS IS", without warranty of any kind.
#===============================================================================

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import Any, Optional

from .constants import (
    DEFAULT_BACKGROUND_COLOR,
    DEFAULT_FOREGROUND_TEXT,
    DEFAULT_SHOW_NAME,
    SHOW_NAME_OFF,
    SHOW_NAME_ON,
)


class ShortcutUser(Enum):
    ALL_USERS = "all_users"
    CURRENT_USER = "current_user"
    UNKNOWN = "unknown"


class FailureKind(Enum):
    RESOLUTION_FAILURE = "resolution_failure"
    MANIFEST_PARSE_FAILURE = "manifest_parse_failure"
    IMAGE_DECODE_FAILURE = "image_decode_failure"
    ICON_EXTRACTION_FAILURE = "icon_extraction_failure"


@dataclass(frozen=True)
class Result:
    """Outcome of a recoverable operation.

    Either ``ok`` with a ``value`` or a failure carrying its ``FailureKind``
    and a human readable ``detail``.
    """
    value: Any = None
    failure: Optional[FailureKind] = None
    detail: str = ""

    @property
    def ok(self) -> bool:
        return self.failure is None

    @classmethod
    def success(cls, value: Any) -> "Result":
        return cls(value=value)

    @classmethod
    def fail(cls, kind: FailureKind, detail: str = "") -> "Result":
        return cls(failure=kind, detail=detail)


def show_name_to_token(show: bool) -> str:
    return SHOW_NAME_ON if show else SHOW_NAME_OFF


def token_to_show_name(token: str) -> bool:
    """Map the manifest's "on"/"off" token to a bool (anything else is an error)."""
    if token == SHOW_NAME_ON:
        return True
    if token == SHOW_NAME_OFF:
        return False
    raise ValueError(f"Expected '{SHOW_NAME_ON}' or '{SHOW_NAME_OFF}', got {token!r}")


@dataclass
class IconParameters:
    """Customizable attributes of one Start-Menu tile.

    Equality is structural over all five fields; image blobs compare by
    content. Instances are mutable (the pending copy is edited in place), so
    always ``clone()`` before sharing.
    """
    background_color: str = DEFAULT_BACKGROUND_COLOR
    foreground_text: str = DEFAULT_FOREGROUND_TEXT
    show_name_on_large_tile: bool = DEFAULT_SHOW_NAME
    medium_image_bytes: Optional[bytes] = None
    small_image_bytes: Optional[bytes] = None

    @classmethod
    def defaults(cls) -> "IconParameters":
        return cls()

    @property
    def show_name_token(self) -> str:
        return show_name_to_token(self.show_name_on_large_tile)

    def clone(self) -> "IconParameters":
        return replace(
            self,
            medium_image_bytes=_copy_blob(self.medium_image_bytes),
            small_image_bytes=_copy_blob(self.small_image_bytes),
        )

    def medium_image_bytes_equal(self, other: Optional["IconParameters"]) -> bool:
        return _blob_equal(self.medium_image_bytes, other.medium_image_bytes if other else None)

    def small_image_bytes_equal(self, other: Optional["IconParameters"]) -> bool:
        return _blob_equal(self.small_image_bytes, other.small_image_bytes if other else None)


def _copy_blob(data: Optional[bytes]) -> Optional[bytes]:
    # bytearray/memoryview callers get an immutable snapshot
    return None if data is None else bytes(data)


def _blob_equal(a: Optional[bytes], b: Optional[bytes]) -> bool:
    if a is b:
        return True
    if a is None or b is None:
        return False
    return bytes(a) == bytes(b)
