#===============================================================================
#  TileIconifier | manifest.py
#===============================================================================
#  Author      : Edwin A. Rodriguez
#  Role/Team   : SAP COE / SAP SRE (GRM-Testing-Automation & Governance)
#  Created     : 2026-02-10
#  Last Update : 2026-02-11
#
#  Summary
#  -------
#  Read/write of <Target>.VisualElementsManifest.xml and its two tile images.
#
#  Example manifest:
#
#    <Application xmlns:xsi="http://www.w3.org/2001/XMLSchema-instance">
#      <VisualElements BackgroundColor="black" ForegroundText="light"
#                      ShowNameOnSquare150x150Logo="on"
#                      Square150x150Logo="VisualElements\MediumIconfoo.png"
#                      Square70x70Logo="VisualElements\SmallIconfoo.png" />
#    </Application>
#
#  Copyright (c) 2026 Edwin A. Rodriguez. All rights reserved.
#  Provided "AS IS", without warranty of any kind.
#===============================================================================

from __future__ import annotations

import logging
import xml.etree.ElementTree as ET
from pathlib import Path
from typing import Callable, Optional

from .constants import (
    ATTR_BACKGROUND_COLOR,
    ATTR_FOREGROUND_TEXT,
    ATTR_MEDIUM_LOGO,
    ATTR_SHOW_NAME,
    ATTR_SMALL_LOGO,
    MANIFEST_ELEMENT,
    MANIFEST_ROOT_ELEMENT,
)
from .imaging import load_image_file_as_bytes
from .models import FailureKind, IconParameters, Result, token_to_show_name
from .paths import TilePaths, resolve_relative

logger = logging.getLogger(__name__)

XSI_NAMESPACE = "http://www.w3.org/2001/XMLSchema-instance"

ImageLoader = Callable[[str], Optional[bytes]]


class ManifestError(ValueError):
    """The manifest exists but cannot be turned into IconParameters."""


def _required(element: ET.Element, name: str) -> str:
    value = element.get(name)
    if value is None:
        raise ManifestError(f"Missing attribute {name}")
    return value


def _load_reference(target_folder: str, reference: str, image_loader: ImageLoader) -> bytes:
    path = resolve_relative(target_folder, reference)
    data = image_loader(path)
    if data is None:
        raise ManifestError(f"Unreadable image {path}")
    return data


def read_parameters(root: ET.Element, target_folder: str,
                    image_loader: ImageLoader = load_image_file_as_bytes) -> IconParameters:
    """Build IconParameters from a parsed manifest tree.

    Exactly one VisualElements element must sit below *root*.
    """
    elements = [el for el in root.iter(MANIFEST_ELEMENT) if el is not root]
    if len(elements) != 1:
        raise ManifestError(f"Expected exactly one {MANIFEST_ELEMENT} element, found {len(elements)}")
    el = elements[0]

    try:
        show_name = token_to_show_name(_required(el, ATTR_SHOW_NAME))
    except ValueError as e:
        raise ManifestError(f"Bad {ATTR_SHOW_NAME}: {e}") from e

    return IconParameters(
        background_color=_required(el, ATTR_BACKGROUND_COLOR),
        foreground_text=_required(el, ATTR_FOREGROUND_TEXT),
        show_name_on_large_tile=show_name,
        medium_image_bytes=_load_reference(target_folder, _required(el, ATTR_MEDIUM_LOGO), image_loader),
        small_image_bytes=_load_reference(target_folder, _required(el, ATTR_SMALL_LOGO), image_loader),
    )


def parse_manifest(manifest_path: str, target_folder: str,
                   image_loader: ImageLoader = load_image_file_as_bytes) -> Result:
    """Load IconParameters from a manifest file.

    Never raises for bad input: a missing file, malformed XML, a missing or
    malformed attribute, a wrong element count or an unreadable image all
    come back as a MANIFEST_PARSE_FAILURE result.
    """
    try:
        root = ET.parse(manifest_path).getroot()
        params = read_parameters(root, target_folder, image_loader)
    except (OSError, ET.ParseError, ManifestError) as e:
        logger.info("Manifest %s not loaded: %s", manifest_path, e)
        return Result.fail(FailureKind.MANIFEST_PARSE_FAILURE, str(e))
    return Result.success(params)


def build_manifest(params: IconParameters, relative_medium_icon: str, relative_small_icon: str) -> ET.Element:
    root = ET.Element(MANIFEST_ROOT_ELEMENT, {"xmlns:xsi": XSI_NAMESPACE})
    ET.SubElement(root, MANIFEST_ELEMENT, {
        ATTR_BACKGROUND_COLOR: params.background_color,
        ATTR_SHOW_NAME: params.show_name_token,
        ATTR_FOREGROUND_TEXT: params.foreground_text,
        ATTR_MEDIUM_LOGO: relative_medium_icon,
        ATTR_SMALL_LOGO: relative_small_icon,
    })
    return root


def serialize_manifest(params: IconParameters, relative_medium_icon: str, relative_small_icon: str) -> str:
    """Render the manifest XML text for *params*."""
    root = build_manifest(params, relative_medium_icon, relative_small_icon)
    ET.indent(root, space="  ")
    return ET.tostring(root, encoding="unicode") + "\n"


def write_manifest(params: IconParameters, paths: TilePaths) -> None:
    """Write the manifest and both tile images to their derived locations.

    Both image blobs must be present; OSError from the filesystem propagates.
    """
    if params.medium_image_bytes is None or params.small_image_bytes is None:
        raise ValueError("Both medium and small tile images are required")

    Path(paths.visual_elements).mkdir(parents=True, exist_ok=True)
    Path(paths.medium_icon).write_bytes(params.medium_image_bytes)
    Path(paths.small_icon).write_bytes(params.small_image_bytes)
    Path(paths.manifest).write_text(
        serialize_manifest(params, paths.relative_medium_icon, paths.relative_small_icon),
        encoding="utf-8",
    )
    logger.info("Wrote tile manifest %s", paths.manifest)
