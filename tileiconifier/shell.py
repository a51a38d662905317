#===============================================================================
#  TileIconifier | shell.py
#===============================================================================
#  Author      : Edwin A. Rodriguez
#  Role/Team   : SAP COE / SAP SRE (GRM-Testing-Automation & Governance)
#  Created     : 2026-02-10
#  Last Update : 2026-02-11
#
#  Summary
#  -------
#  Windows shell collaborators: .lnk target resolution through the
#  WScript.Shell COM object (via PowerShell) and the shell's own icon for a
#  shortcut file.
#
#  Copyright (c) 2026 Edwin A. Rodriguez. All rights reserved.
#  Provided "AS IS", without warranty of any kind.
#===============================================================================

from __future__ import annotations

import logging
import subprocess
import sys
from typing import Optional

from PySide6.QtCore import QFileInfo
from PySide6.QtWidgets import QApplication, QFileIconProvider

from .constants import POWERSHELL_TIMEOUT_SECONDS, STANDARD_ICON_SIZE
from .models import FailureKind, Result

logger = logging.getLogger(__name__)


def _ps_quote(value: str) -> str:
    return "'" + value.replace("'", "''") + "'"


def resolve_shortcut_target(shortcut_path: str) -> Optional[str]:
    """Return the TargetPath stored in a .lnk file, or None.

    Only available on Windows; elsewhere every shortcut is unresolvable.
    """
    if not sys.platform.startswith("win"):
        return None

    ps = (
        "[Console]::OutputEncoding = [Text.Encoding]::UTF8; "
        "$WshShell = New-Object -ComObject WScript.Shell; "
        f"$Shortcut = $WshShell.CreateShortcut({_ps_quote(str(shortcut_path))}); "
        "Write-Output $Shortcut.TargetPath"
    )
    try:
        out = subprocess.check_output(
            ["powershell", "-NoProfile", "-ExecutionPolicy", "Bypass", "-Command", ps],
            encoding="utf-8",
            errors="replace",
            stderr=subprocess.DEVNULL,
            timeout=POWERSHELL_TIMEOUT_SECONDS,
        )
    except (OSError, ValueError, subprocess.SubprocessError) as e:
        logger.debug("Could not resolve shortcut %s: %s", shortcut_path, e)
        return None

    target = out.strip()
    return target or None


def extract_standard_icon(shortcut_path: str) -> Result:
    """The shell's icon for *shortcut_path* as a QImage.

    Needs a running QApplication; without one (or when the shell has no icon)
    an ICON_EXTRACTION_FAILURE result is returned.
    """
    if QApplication.instance() is None:
        return Result.fail(FailureKind.ICON_EXTRACTION_FAILURE, "No QApplication instance")

    icon = QFileIconProvider().icon(QFileInfo(str(shortcut_path)))
    if icon.isNull():
        return Result.fail(FailureKind.ICON_EXTRACTION_FAILURE, f"No shell icon for {shortcut_path}")

    image = icon.pixmap(STANDARD_ICON_SIZE).toImage()
    if image.isNull():
        return Result.fail(FailureKind.ICON_EXTRACTION_FAILURE, f"Empty shell icon for {shortcut_path}")
    return Result.success(image)
