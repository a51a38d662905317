"""Shared fixtures for tileiconifier tests."""

import pytest
from PySide6.QtGui import QColor, QImage

from tileiconifier.imaging import encode_png
from tileiconifier.models import IconParameters
from tileiconifier.paths import tile_paths
from tileiconifier.shortcut_item import ShortcutItem

EXTENSIONS = (".exe", ".bat", ".cmd")


@pytest.fixture
def make_png():
    """Factory returning PNG bytes of a solid square."""

    def _make(size=8, color="red"):
        image = QImage(size, size, QImage.Format.Format_ARGB32)
        image.fill(QColor(color))
        return encode_png(image)

    return _make


@pytest.fixture
def target_exe(tmp_path):
    """An (empty) executable inside <tmp>/Apps/Foo/."""
    folder = tmp_path / "Apps" / "Foo"
    folder.mkdir(parents=True)
    exe = folder / "foo.exe"
    exe.write_bytes(b"MZ")
    return str(exe)


@pytest.fixture
def shortcut_path(tmp_path):
    lnk = tmp_path / "Start Menu" / "Foo.lnk"
    lnk.parent.mkdir(parents=True)
    lnk.write_bytes(b"L\x00\x00\x00")
    return str(lnk)


@pytest.fixture
def custom_params():
    return IconParameters(
        background_color="#0078D7",
        foreground_text="dark",
        show_name_on_large_tile=False,
        medium_image_bytes=b"medium-png",
        small_image_bytes=b"small-png",
    )


@pytest.fixture
def make_item(shortcut_path):
    """Factory building a ShortcutItem whose shortcut resolves to *target*."""

    def _make(target, **kwargs):
        kwargs.setdefault("executable_extensions", EXTENSIONS)
        kwargs.setdefault("environ", {})
        kwargs.setdefault("resolver", lambda _path: target)
        kwargs.setdefault("image_decoder", lambda data: ("decoded", data))
        return ShortcutItem(kwargs.pop("shortcut", shortcut_path), **kwargs)

    return _make


@pytest.fixture
def target_paths(target_exe):
    return tile_paths(target_exe)

