#===============================================================================
#  TileIconifier | constants.py
#===============================================================================
#  Author      : Edwin A. Rodriguez
#  Role/Team   : SAP COE / SAP SRE (GRM-Testing-Automation & Governance)
#  Created     : 2026-02-10
#  Last Update : 2026-02-11
#
#  Summary
#  -------
#  Central place for the default tile theme and the file/folder naming
#  conventions of the Start-Menu visual elements manifest.
#
#  Copyright (c) 2026 Edwin A. Rodriguez. All rights reserved.
#  Provided "AS IS", without warranty of any kind.
#===============================================================================

from __future__ import annotations

from PySide6.QtCore import QSize

SETTINGS_FILE_NAME = "tileiconifier_settings.json"

# --- Visual elements layout beside the target executable ---
MANIFEST_SUFFIX = ".VisualElementsManifest.xml"
VISUAL_ELEMENTS_FOLDER_NAME = "VisualElements"
MEDIUM_ICON_PREFIX = "MediumIcon"
SMALL_ICON_PREFIX = "SmallIcon"
ICON_EXTENSION = ".png"

# Manifest references are always written Windows-style
MANIFEST_PATH_SEPARATOR = "\\"

# --- Manifest XML dialect ---
MANIFEST_ROOT_ELEMENT = "Application"
MANIFEST_ELEMENT = "VisualElements"
ATTR_BACKGROUND_COLOR = "BackgroundColor"
ATTR_FOREGROUND_TEXT = "ForegroundText"
ATTR_SHOW_NAME = "ShowNameOnSquare150x150Logo"
ATTR_MEDIUM_LOGO = "Square150x150Logo"
ATTR_SMALL_LOGO = "Square70x70Logo"

SHOW_NAME_ON = "on"
SHOW_NAME_OFF = "off"

# --- Default tile theme ---
DEFAULT_BACKGROUND_COLOR = "black"
DEFAULT_FOREGROUND_TEXT = "light"
DEFAULT_SHOW_NAME = True

# Used when PATHEXT is missing from the environment
FALLBACK_PATHEXT = ".COM;.EXE;.BAT;.CMD;.VBS;.VBE;.JS;.JSE;.WSF;.WSH;.MSC"

# Shell icon size used for the shortcut's own icon
STANDARD_ICON_SIZE = QSize(32, 32)

# PowerShell shortcut resolution
POWERSHELL_TIMEOUT_SECONDS = 20

# Start-Menu roots, relative to %PROGRAMDATA% (all users) and %APPDATA% (current user)
START_MENU_PROGRAMS = "Microsoft\\Windows\\Start Menu\\Programs\\"

# Custom shortcut launcher folders, relative to %PROGRAMDATA%
CUSTOM_SHORTCUT_FOLDER = "TileIconifier\\CustomShortcuts\\"
