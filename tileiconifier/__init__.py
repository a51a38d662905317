#===============================================================================
#  TileIconifier | __init__.py
#===============================================================================
#  Author      : Edwin A. Rodriguez
#  Role/Team   : SAP COE / SAP SRE (GRM-Testing-Automation & Governance)
#  Created     : 2026-02-10
#  Last Update : 2026-02-11
#
#  Summary
#  -------
#  Start-Menu tile customization for Windows shortcuts.
#
#  Copyright (c) 2026 Edwin A. Rodriguez. All rights reserved.
#  Provided "AS IS", without warranty of any kind.
#===============================================================================

from .models import FailureKind, IconParameters, Result, ShortcutUser
from .shortcut_item import ShortcutItem

__all__ = ["FailureKind", "IconParameters", "Result", "ShortcutItem", "ShortcutUser"]
