#===============================================================================
#  TileIconifier | shortcut_item.py
#===============================================================================
#  Author      : Edwin A. Rodriguez
#  Role/Team   : SAP COE / SAP SRE (GRM-Testing-Automation & Governance)
#  Created     : 2026-02-10
#  Last Update : 2026-02-11
#
#  Summary
#  -------
#  One Start-Menu shortcut and its tile customization:
#    - resolves the shortcut to an executable target
#    - detects an existing VisualElements customization and loads it
#    - keeps committed (on disk) and pending (edited) IconParameters apart
#    - commit / undo / reset of pending edits, with change flags for the editor
#    - cached decoding of the two tile images for display
#
#  Threading: an item is not synchronized; use it from one thread at a time.
#
#  Copyright (c) 2026 Edwin A. Rodriguez. All rights reserved.
#  Provided "AS IS", without warranty of any kind.
#===============================================================================

from __future__ import annotations

import logging
import os
from typing import Any, Callable, Dict, Iterable, Mapping, Optional

from . import paths
from .imaging import ImageCache, ImageDecoder, decode_image, load_image_file_as_bytes
from .manifest import ImageLoader, parse_manifest
from .models import FailureKind, IconParameters, Result, ShortcutUser
from .settings import executable_extensions as default_executable_extensions, shortcut_locations
from .shell import extract_standard_icon, resolve_shortcut_target

logger = logging.getLogger(__name__)

ShortcutResolver = Callable[[str], Optional[str]]
IconExtractor = Callable[[str], Result]


class ShortcutItem:
    """Tile customization state for a single shortcut file.

    Parameters are loaded from disk when the item is created. Collaborators
    (shortcut resolution, image loading/decoding, shell icon extraction) and
    the executable extensions can be injected; the defaults talk to Windows
    and Qt. Start-Menu roots and the custom shortcut folder come from
    *settings*, falling back to %PROGRAMDATA% / %APPDATA% in *environ*.

    The default icon extractor needs a running QApplication: in a headless
    process ``standard_icon`` is always None.
    """

    def __init__(
        self,
        shortcut_path: str | os.PathLike,
        *,
        executable_extensions: Optional[Iterable[str]] = None,
        settings: Optional[Dict[str, Any]] = None,
        environ: Optional[Mapping[str, str]] = None,
        resolver: ShortcutResolver = resolve_shortcut_target,
        image_loader: ImageLoader = load_image_file_as_bytes,
        image_decoder: ImageDecoder = decode_image,
        icon_extractor: IconExtractor = extract_standard_icon,
    ):
        self._shortcut_path = os.fspath(shortcut_path)
        self._settings = settings or {}
        if executable_extensions is None:
            executable_extensions = default_executable_extensions(environ, self._settings)
        self._executable_extensions = tuple(e.lower() for e in executable_extensions)
        self._locations = shortcut_locations(environ, self._settings)

        self._resolver = resolver
        self._image_loader = image_loader
        self._icon_extractor = icon_extractor

        self._target_result: Optional[Result] = None
        self._standard_icon_result: Optional[Result] = None
        self._medium_cache = ImageCache(image_decoder)
        self._small_cache = ImageCache(image_decoder)

        self.app_id: Optional[str] = None
        self.is_pinned: Optional[bool] = None

        self.committed_parameters = IconParameters.defaults()
        self.pending_parameters = self.committed_parameters.clone()
        self.load_result = Result.success(None)
        self.load_parameters()

    def __repr__(self) -> str:
        return f"ShortcutItem({self._shortcut_path!r})"

    @property
    def shortcut_path(self) -> str:
        return self._shortcut_path

    # ----------------------------
    # Target + derived paths
    # ----------------------------
    @property
    def target_result(self) -> Result:
        """Memoized outcome of resolving the shortcut to an executable."""
        if self._target_result is None:
            self._target_result = self._resolve_target()
        return self._target_result

    def _resolve_target(self) -> Result:
        candidate = self._resolver(self._shortcut_path)
        if not candidate:
            return Result.fail(FailureKind.RESOLUTION_FAILURE, f"Unresolvable shortcut {self._shortcut_path}")
        if not paths.is_executable_target(candidate, self._executable_extensions):
            return Result.fail(FailureKind.RESOLUTION_FAILURE, f"Not an executable target: {candidate}")
        return Result.success(candidate)

    @property
    def target_path(self) -> Optional[str]:
        return self.target_result.value

    @property
    def tile_paths(self) -> Optional[paths.TilePaths]:
        return paths.tile_paths(self.target_path)

    @property
    def target_folder_path(self) -> Optional[str]:
        return paths.target_folder_path(self.target_path)

    @property
    def manifest_path(self) -> Optional[str]:
        return paths.manifest_path(self.target_path)

    @property
    def visual_elements_path(self) -> Optional[str]:
        return paths.visual_elements_path(self.target_path)

    @property
    def medium_icon_path(self) -> Optional[str]:
        return paths.medium_icon_path(self.target_path)

    @property
    def small_icon_path(self) -> Optional[str]:
        return paths.small_icon_path(self.target_path)

    @property
    def relative_medium_icon_path(self) -> Optional[str]:
        return paths.relative_medium_icon_path(self.target_path)

    @property
    def relative_small_icon_path(self) -> Optional[str]:
        return paths.relative_small_icon_path(self.target_path)

    # ----------------------------
    # Status
    # ----------------------------
    @property
    def is_valid_for_iconification(self) -> bool:
        target = self.target_path
        return bool(target) and os.path.isfile(target)

    @property
    def is_iconified(self) -> bool:
        p = self.tile_paths
        if p is None:
            return False
        return (
            os.path.isfile(p.manifest)
            and os.path.isdir(p.visual_elements)
            and os.path.isfile(p.medium_icon)
            and os.path.isfile(p.small_icon)
        )

    @property
    def shortcut_user(self) -> ShortcutUser:
        path = self._shortcut_path.lower()
        all_users = self._locations["all_users_start_menu"].lower()
        current_user = self._locations["current_user_start_menu"].lower()
        if all_users and path.startswith(all_users):
            return ShortcutUser.ALL_USERS
        if current_user and path.startswith(current_user):
            return ShortcutUser.CURRENT_USER
        return ShortcutUser.UNKNOWN

    @property
    def is_custom_shortcut(self) -> bool:
        """True when the target lives in a folder under the custom shortcut folder."""
        custom = self._locations["custom_shortcut_folder"]
        parent = paths.parent_folder_path(self.target_folder_path)
        return paths.same_folder(parent, custom)

    @property
    def standard_icon(self) -> Any:
        """The shell's own icon for the shortcut, or None if it cannot be extracted."""
        if self._standard_icon_result is None or not self._standard_icon_result.ok:
            self._standard_icon_result = self._icon_extractor(self._shortcut_path)
            if not self._standard_icon_result.ok:
                logger.debug("No standard icon for %s: %s", self._shortcut_path,
                             self._standard_icon_result.detail)
        return self._standard_icon_result.value

    # ----------------------------
    # Pending edits
    # ----------------------------
    @property
    def background_color(self) -> str:
        return self.pending_parameters.background_color

    @background_color.setter
    def background_color(self, value: str) -> None:
        self.pending_parameters.background_color = value

    @property
    def foreground_text(self) -> str:
        return self.pending_parameters.foreground_text

    @foreground_text.setter
    def foreground_text(self, value: str) -> None:
        self.pending_parameters.foreground_text = value

    @property
    def show_name_on_large_tile(self) -> bool:
        return self.pending_parameters.show_name_on_large_tile

    @show_name_on_large_tile.setter
    def show_name_on_large_tile(self, value: bool) -> None:
        self.pending_parameters.show_name_on_large_tile = bool(value)

    @property
    def medium_image_bytes(self) -> Optional[bytes]:
        pending = self.pending_parameters.medium_image_bytes
        return pending if pending is not None else self.committed_parameters.medium_image_bytes

    @medium_image_bytes.setter
    def medium_image_bytes(self, value: Optional[bytes]) -> None:
        self.pending_parameters.medium_image_bytes = None if value is None else bytes(value)

    @property
    def small_image_bytes(self) -> Optional[bytes]:
        pending = self.pending_parameters.small_image_bytes
        return pending if pending is not None else self.committed_parameters.small_image_bytes

    @small_image_bytes.setter
    def small_image_bytes(self, value: Optional[bytes]) -> None:
        self.pending_parameters.small_image_bytes = None if value is None else bytes(value)

    def medium_image(self) -> Any:
        """Decoded medium tile image (cached), or None."""
        return self._medium_cache.get(self.medium_image_bytes)

    def small_image(self) -> Any:
        """Decoded small tile image (cached), or None."""
        return self._small_cache.get(self.small_image_bytes)

    # ----------------------------
    # Change tracking
    # ----------------------------
    @property
    def has_unsaved_changes(self) -> bool:
        return self.pending_parameters != self.committed_parameters

    @property
    def medium_image_changed(self) -> bool:
        return not self.pending_parameters.medium_image_bytes_equal(self.committed_parameters)

    @property
    def small_image_changed(self) -> bool:
        return not self.pending_parameters.small_image_bytes_equal(self.committed_parameters)

    @property
    def foreground_text_color_changed(self) -> bool:
        return self.pending_parameters.foreground_text != self.committed_parameters.foreground_text

    # ----------------------------
    # Load / commit / undo / reset
    # ----------------------------
    def load_parameters(self) -> Result:
        """(Re)load committed parameters from disk, discarding pending edits.

        Falls back to the defaults when the shortcut is not iconified or its
        manifest cannot be read; the outcome is kept in ``load_result``.
        """
        self.is_pinned = None
        if not self.is_iconified:
            self.reset_parameters()
            self.load_result = Result.success(self.committed_parameters)
            return self.load_result

        result = parse_manifest(self.manifest_path, self.target_folder_path, self._image_loader)
        if result.ok:
            self.committed_parameters = result.value
            self.pending_parameters = self.committed_parameters.clone()
        else:
            logger.info("Falling back to default tile for %s: %s", self._shortcut_path, result.detail)
            self.reset_parameters()
        self.load_result = result
        return result

    def undo_changes(self) -> None:
        self.pending_parameters = self.committed_parameters.clone()

    def commit_changes(self) -> None:
        self.committed_parameters = self.pending_parameters.clone()

    def reset_parameters(self) -> None:
        self.committed_parameters = IconParameters.defaults()
        self.pending_parameters = self.committed_parameters.clone()
