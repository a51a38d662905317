#===============================================================================
#  TileIconifier | paths.py
#===============================================================================
#  Author      : Edwin A. Rodriguez
#  Role/Team   : SAP COE / SAP SRE (GRM-Testing-Automation & Governance)
#  Created     : 2026-02-10
#  Last Update : 2026-02-11
#
#  Summary
#  -------
#  Pure path derivation for a shortcut target: target folder, visual elements
#  manifest, VisualElements folder and the two tile icons. No I/O here.
#
#  Copyright (c) 2026 Edwin A. Rodriguez. All rights reserved.
#  Provided "AS IS", without warranty of any kind.
#===============================================================================

from __future__ import annotations

import ntpath
import posixpath
from dataclasses import dataclass
from typing import Iterable, Optional

from .constants import (
    ICON_EXTENSION,
    MANIFEST_PATH_SEPARATOR,
    MANIFEST_SUFFIX,
    MEDIUM_ICON_PREFIX,
    SMALL_ICON_PREFIX,
    VISUAL_ELEMENTS_FOLDER_NAME,
)


def _flavour(target_path: str):
    """Windows paths (drive letter or backslash) use ntpath, anything else posixpath."""
    if "\\" in target_path or ntpath.splitdrive(target_path)[0]:
        return ntpath
    return posixpath


def _base_name(target_path: str) -> str:
    mod = _flavour(target_path)
    return mod.splitext(mod.basename(target_path))[0]


def is_executable_target(target_path: Optional[str], extensions: Iterable[str]) -> bool:
    """True if *target_path* ends in one of *extensions* (case-insensitive)."""
    if not target_path:
        return False
    ext = _flavour(target_path).splitext(target_path)[1].lower()
    return bool(ext) and ext in {e.lower() for e in extensions}


def target_folder_path(target_path: Optional[str]) -> Optional[str]:
    """Parent directory of the target, with a trailing separator."""
    if not target_path:
        return None
    mod = _flavour(target_path)
    folder = mod.dirname(target_path)
    if folder.endswith(mod.sep):
        return folder
    return folder + mod.sep


def parent_folder_path(folder_path: Optional[str]) -> Optional[str]:
    """Parent of a folder path (with or without trailing separator), with a trailing separator."""
    if not folder_path:
        return None
    mod = _flavour(folder_path)
    stripped = folder_path.rstrip("\\/") if mod is ntpath else folder_path.rstrip("/")
    parent = mod.dirname(stripped)
    if parent.endswith(mod.sep):
        return parent
    return parent + mod.sep


def same_folder(a: Optional[str], b: Optional[str]) -> bool:
    """Compare two folder paths ignoring case and a trailing separator."""
    if not a or not b:
        return False
    return a.rstrip("\\/").lower() == b.rstrip("\\/").lower()


def manifest_path(target_path: Optional[str]) -> Optional[str]:
    folder = target_folder_path(target_path)
    if folder is None:
        return None
    return f"{folder}{_base_name(target_path)}{MANIFEST_SUFFIX}"


def visual_elements_path(target_path: Optional[str]) -> Optional[str]:
    folder = target_folder_path(target_path)
    if folder is None:
        return None
    return folder + VISUAL_ELEMENTS_FOLDER_NAME + _flavour(target_path).sep


def medium_icon_name(target_path: Optional[str]) -> Optional[str]:
    if not target_path:
        return None
    return f"{MEDIUM_ICON_PREFIX}{_base_name(target_path)}{ICON_EXTENSION}"


def small_icon_name(target_path: Optional[str]) -> Optional[str]:
    if not target_path:
        return None
    return f"{SMALL_ICON_PREFIX}{_base_name(target_path)}{ICON_EXTENSION}"


def medium_icon_path(target_path: Optional[str]) -> Optional[str]:
    ve = visual_elements_path(target_path)
    return None if ve is None else ve + medium_icon_name(target_path)


def small_icon_path(target_path: Optional[str]) -> Optional[str]:
    ve = visual_elements_path(target_path)
    return None if ve is None else ve + small_icon_name(target_path)


def relative_medium_icon_path(target_path: Optional[str]) -> Optional[str]:
    """Manifest reference to the medium icon, relative to the target folder."""
    name = medium_icon_name(target_path)
    return None if name is None else VISUAL_ELEMENTS_FOLDER_NAME + MANIFEST_PATH_SEPARATOR + name


def relative_small_icon_path(target_path: Optional[str]) -> Optional[str]:
    name = small_icon_name(target_path)
    return None if name is None else VISUAL_ELEMENTS_FOLDER_NAME + MANIFEST_PATH_SEPARATOR + name


def resolve_relative(target_folder: str, reference: str) -> str:
    """Join a manifest image reference onto *target_folder*.

    Manifest references use backslashes; they are rewritten to the folder's
    own separator so the same manifest resolves on any host.
    """
    sep = "\\" if _flavour(target_folder) is ntpath else "/"
    rel = reference.replace("\\", sep).replace("/", sep).lstrip(sep)
    if not target_folder.endswith(sep):
        target_folder += sep
    return target_folder + rel


@dataclass(frozen=True)
class TilePaths:
    """Every path derived from one target, computed in a single pass."""
    target_folder: str
    manifest: str
    visual_elements: str
    medium_icon: str
    small_icon: str
    relative_medium_icon: str
    relative_small_icon: str


def tile_paths(target_path: Optional[str]) -> Optional[TilePaths]:
    if not target_path:
        return None
    return TilePaths(
        target_folder=target_folder_path(target_path),
        manifest=manifest_path(target_path),
        visual_elements=visual_elements_path(target_path),
        medium_icon=medium_icon_path(target_path),
        small_icon=small_icon_path(target_path),
        relative_medium_icon=relative_medium_icon_path(target_path),
        relative_small_icon=relative_small_icon_path(target_path),
    )
