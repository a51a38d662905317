#===============================================================================
#  TileIconifier | settings.py
#===============================================================================
#  Author      : Edwin A. Rodriguez
#  Role/Team   : SAP COE / SAP SRE (GRM-Testing-Automation & Governance)
#  Created     : 2026-02-10
#  Last Update : 2026-02-11
#
#  Summary
#  -------
#  Load/save of persistent settings (executable extensions, Start-Menu roots,
#  custom shortcut folder) and the executable-extension lookup that feeds
#  shortcut target validation.
#
#  Copyright (c) 2026 Edwin A. Rodriguez. All rights reserved.
#  Provided "AS IS", without warranty of any kind.
#===============================================================================

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Tuple

from .constants import (
    CUSTOM_SHORTCUT_FOLDER,
    FALLBACK_PATHEXT,
    SETTINGS_FILE_NAME,
    START_MENU_PROGRAMS,
)

logger = logging.getLogger(__name__)


def default_settings() -> Dict[str, Any]:
    return {
        "executable_extensions": [],        # overrides PATHEXT when non-empty
        "all_users_start_menu": "",         # defaults to %PROGRAMDATA%\Microsoft\Windows\Start Menu\Programs\
        "current_user_start_menu": "",      # defaults to %APPDATA%\Microsoft\Windows\Start Menu\Programs\
        "custom_shortcut_folder": "",       # defaults to %PROGRAMDATA%\TileIconifier\CustomShortcuts\
    }


def settings_file(base_dir: Path) -> Path:
    return base_dir / SETTINGS_FILE_NAME


def load_settings(settings_path: Path) -> Dict[str, Any]:
    """Load settings from disk (or create defaults)."""
    d = default_settings()
    if not settings_path.exists():
        return d
    try:
        data = json.loads(settings_path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as e:
        logger.info("Ignoring unreadable settings file %s: %s", settings_path, e)
        return d
    if not isinstance(data, dict):
        logger.info("Ignoring settings file %s: expected a JSON object", settings_path)
        return d
    for k in d:
        if k not in data:
            data[k] = d[k]
    return data


def save_settings(settings_path: Path, settings: Dict[str, Any]) -> None:
    """Persist settings to disk."""
    settings_path.write_text(json.dumps(settings, indent=2), encoding="utf-8")


def parse_pathext(value: str) -> Tuple[str, ...]:
    """Split a PATHEXT-style string into lower-cased, dot-prefixed extensions."""
    exts = []
    for raw in (value or "").split(";"):
        ext = raw.strip().lower()
        if not ext:
            continue
        if not ext.startswith("."):
            ext = "." + ext
        if ext not in exts:
            exts.append(ext)
    return tuple(exts)


def executable_extensions(
    environ: Optional[Mapping[str, str]] = None,
    settings: Optional[Dict[str, Any]] = None,
) -> Tuple[str, ...]:
    """Return the recognized executable extensions.

    Resolution order:
      1) settings['executable_extensions'] if non-empty
      2) PATHEXT from *environ* (defaults to os.environ)
      3) FALLBACK_PATHEXT
    """
    configured = (settings or {}).get("executable_extensions") or []
    if configured:
        return parse_pathext(";".join(configured))

    env = os.environ if environ is None else environ
    from_env = parse_pathext(env.get("PATHEXT", ""))
    if from_env:
        return from_env

    return parse_pathext(FALLBACK_PATHEXT)


def _under(env: Mapping[str, str], var: str, relative: str) -> str:
    base = (env.get(var) or "").rstrip("\\/")
    return f"{base}\\{relative}" if base else ""


def shortcut_locations(
    environ: Optional[Mapping[str, str]] = None,
    settings: Optional[Dict[str, Any]] = None,
) -> Dict[str, str]:
    """Return the Start-Menu roots and the custom shortcut folder.

    Each entry comes from *settings* when set there, otherwise it is built
    from the environment:
      - all_users_start_menu    : %PROGRAMDATA%\\Microsoft\\Windows\\Start Menu\\Programs\\
      - current_user_start_menu : %APPDATA%\\Microsoft\\Windows\\Start Menu\\Programs\\
      - custom_shortcut_folder  : %PROGRAMDATA%\\TileIconifier\\CustomShortcuts\\
    Unknown variables leave the entry empty.
    """
    settings = settings or {}
    env = os.environ if environ is None else environ
    derived = {
        "all_users_start_menu": _under(env, "PROGRAMDATA", START_MENU_PROGRAMS),
        "current_user_start_menu": _under(env, "APPDATA", START_MENU_PROGRAMS),
        "custom_shortcut_folder": _under(env, "PROGRAMDATA", CUSTOM_SHORTCUT_FOLDER),
    }
    return {k: settings.get(k) or v for k, v in derived.items()}
