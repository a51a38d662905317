"""Tests for tileiconifier.shortcut_item."""

from pathlib import Path

import pytest

from tileiconifier.manifest import write_manifest
from tileiconifier.models import FailureKind, IconParameters, Result, ShortcutUser


def _iconify(target_paths, params):
    write_manifest(params, target_paths)


class TestTargetResolution:
    def test_executable_target_accepted(self, make_item, target_exe):
        item = make_item(target_exe)
        assert item.target_path == target_exe
        assert item.target_result.ok
        assert item.is_valid_for_iconification

    def test_extension_match_is_case_insensitive(self, make_item):
        item = make_item(r"C:\Apps\Foo\FOO.EXE")
        assert item.target_path == r"C:\Apps\Foo\FOO.EXE"

    @pytest.mark.parametrize("target", [r"C:\Docs\notes.txt", r"C:\Apps", None, ""])
    def test_rejected_targets(self, make_item, target):
        item = make_item(target)
        assert item.target_path is None
        assert item.target_result.failure is FailureKind.RESOLUTION_FAILURE
        assert item.manifest_path is None
        assert item.tile_paths is None
        assert not item.is_valid_for_iconification
        assert not item.is_iconified

    def test_resolver_called_once(self, make_item, target_exe):
        calls = []

        def resolver(path):
            calls.append(path)
            return target_exe

        item = make_item(target_exe, resolver=resolver)
        item.target_path
        item.manifest_path
        item.load_parameters()
        assert calls == [item.shortcut_path]

    def test_missing_target_file_not_valid(self, make_item, tmp_path):
        item = make_item(str(tmp_path / "gone.exe"))
        assert item.target_path is not None
        assert not item.is_valid_for_iconification

    def test_derived_paths(self, make_item):
        item = make_item(r"C:\Apps\Foo\foo.exe")
        assert item.target_folder_path == "C:\\Apps\\Foo\\"
        assert item.manifest_path == r"C:\Apps\Foo\foo.VisualElementsManifest.xml"
        assert item.visual_elements_path == "C:\\Apps\\Foo\\VisualElements\\"
        assert item.medium_icon_path == r"C:\Apps\Foo\VisualElements\MediumIconfoo.png"
        assert item.small_icon_path == r"C:\Apps\Foo\VisualElements\SmallIconfoo.png"
        assert item.relative_medium_icon_path == r"VisualElements\MediumIconfoo.png"
        assert item.relative_small_icon_path == r"VisualElements\SmallIconfoo.png"


class TestIconifiedDetection:
    def test_complete_layout(self, make_item, target_exe, target_paths, custom_params):
        _iconify(target_paths, custom_params)
        assert make_item(target_exe).is_iconified

    def test_plain_target(self, make_item, target_exe):
        assert not make_item(target_exe).is_iconified

    @pytest.mark.parametrize("missing", ["medium_icon", "small_icon", "manifest"])
    def test_partial_layout_is_not_iconified(self, make_item, target_exe, target_paths, custom_params, missing):
        _iconify(target_paths, custom_params)
        Path(getattr(target_paths, missing)).unlink()
        item = make_item(target_exe)
        assert not item.is_iconified
        assert item.committed_parameters == IconParameters.defaults()


class TestLoad:
    def test_loads_existing_customization(self, make_item, target_exe, target_paths, custom_params):
        _iconify(target_paths, custom_params)
        item = make_item(target_exe)
        assert item.load_result.ok
        assert item.committed_parameters == custom_params
        assert item.pending_parameters == custom_params
        assert item.pending_parameters is not item.committed_parameters
        assert not item.has_unsaved_changes

    def test_defaults_when_not_iconified(self, make_item, target_exe):
        item = make_item(target_exe)
        assert item.load_result.ok
        assert item.committed_parameters == IconParameters.defaults()
        assert item.background_color == "black"
        assert item.foreground_text == "light"
        assert item.show_name_on_large_tile is True
        assert item.medium_image_bytes is None
        assert item.small_image_bytes is None

    def test_malformed_manifest_falls_back_to_defaults(self, make_item, target_exe, target_paths, custom_params):
        _iconify(target_paths, custom_params)
        text = Path(target_paths.manifest).read_text(encoding="utf-8")
        Path(target_paths.manifest).write_text(
            text.replace('ShowNameOnSquare150x150Logo="off"', 'ShowNameOnSquare150x150Logo="sometimes"'),
            encoding="utf-8",
        )
        item = make_item(target_exe)
        assert item.is_iconified
        assert item.load_result.failure is FailureKind.MANIFEST_PARSE_FAILURE
        assert item.committed_parameters == IconParameters.defaults()
        assert item.pending_parameters == IconParameters.defaults()

    def test_unreadable_image_falls_back(self, make_item, target_exe, target_paths, custom_params):
        _iconify(target_paths, custom_params)
        item = make_item(target_exe, image_loader=lambda path: None)
        assert not item.load_result.ok
        assert item.committed_parameters == IconParameters.defaults()

    def test_reload_discards_edits(self, make_item, target_exe, target_paths, custom_params):
        _iconify(target_paths, custom_params)
        item = make_item(target_exe)
        item.background_color = "red"
        item.is_pinned = True
        item.load_parameters()
        assert item.pending_parameters == custom_params
        assert item.is_pinned is None

    def test_unresolvable_shortcut_gets_defaults(self, make_item):
        item = make_item(None)
        assert item.pending_parameters == IconParameters.defaults()
        assert item.app_id is None
        assert item.is_pinned is None


class TestEditing:
    def test_setters_write_pending_only(self, make_item, target_exe):
        item = make_item(target_exe)
        item.background_color = "#FFB900"
        item.foreground_text = "dark"
        item.show_name_on_large_tile = False
        item.medium_image_bytes = b"m"
        item.small_image_bytes = bytearray(b"s")
        assert item.pending_parameters == IconParameters("#FFB900", "dark", False, b"m", b"s")
        assert item.committed_parameters == IconParameters.defaults()
        assert item.has_unsaved_changes

    def test_image_getters_fall_back_to_committed(self, make_item, target_exe, target_paths, custom_params):
        _iconify(target_paths, custom_params)
        item = make_item(target_exe)
        item.medium_image_bytes = None
        assert item.medium_image_bytes == b"medium-png"
        assert item.medium_image_changed

    def test_fine_grained_flags(self, make_item, target_exe):
        item = make_item(target_exe)
        assert not item.medium_image_changed
        assert not item.small_image_changed
        assert not item.foreground_text_color_changed

        item.foreground_text = "dark"
        assert item.foreground_text_color_changed
        assert not item.medium_image_changed

        item.small_image_bytes = b"s"
        assert item.small_image_changed
        assert not item.medium_image_changed

    def test_equal_content_is_not_a_change(self, make_item, target_exe, target_paths, custom_params):
        _iconify(target_paths, custom_params)
        item = make_item(target_exe)
        item.medium_image_bytes = bytes(bytearray(b"medium-png"))
        assert not item.medium_image_changed
        assert not item.has_unsaved_changes


class TestCommitUndoReset:
    def test_commit_clears_dirty_state(self, make_item, target_exe):
        item = make_item(target_exe)
        item.background_color = "red"
        item.commit_changes()
        assert not item.has_unsaved_changes
        assert item.committed_parameters.background_color == "red"

    def test_commit_breaks_aliasing(self, make_item, target_exe):
        item = make_item(target_exe)
        item.background_color = "red"
        item.commit_changes()
        item.background_color = "blue"
        assert item.committed_parameters.background_color == "red"
        assert item.has_unsaved_changes

    def test_undo_restores_committed(self, make_item, target_exe, target_paths, custom_params):
        _iconify(target_paths, custom_params)
        item = make_item(target_exe)
        item.background_color = "red"
        item.show_name_on_large_tile = True
        item.small_image_bytes = b"other"
        item.undo_changes()
        assert item.pending_parameters == custom_params
        assert not item.has_unsaved_changes

    def test_second_undo_is_noop(self, make_item, target_exe):
        item = make_item(target_exe)
        item.foreground_text = "dark"
        item.undo_changes()
        snapshot = item.pending_parameters.clone()
        item.undo_changes()
        assert item.pending_parameters == snapshot

    def test_undo_breaks_aliasing(self, make_item, target_exe):
        item = make_item(target_exe)
        item.undo_changes()
        item.background_color = "red"
        assert item.committed_parameters.background_color == "black"

    def test_reset_restores_defaults(self, make_item, target_exe, target_paths, custom_params):
        _iconify(target_paths, custom_params)
        item = make_item(target_exe)
        item.reset_parameters()
        assert item.committed_parameters == IconParameters.defaults()
        assert item.pending_parameters == IconParameters.defaults()
        assert item.pending_parameters is not item.committed_parameters

    def test_commit_then_write_then_reload(self, make_item, target_exe, target_paths):
        item = make_item(target_exe)
        item.background_color = "#107C10"
        item.medium_image_bytes = b"m"
        item.small_image_bytes = b"s"
        item.commit_changes()
        write_manifest(item.committed_parameters, item.tile_paths)

        reloaded = make_item(target_exe)
        assert reloaded.is_iconified
        assert reloaded.committed_parameters == item.committed_parameters


class TestImages:
    def test_medium_image_cached(self, make_item, target_exe):
        decoded = []

        def decoder(data):
            decoded.append(data)
            return object()

        item = make_item(target_exe, image_decoder=decoder)
        assert item.medium_image() is None
        item.medium_image_bytes = b"m"
        first = item.medium_image()
        assert item.medium_image() is first
        item.medium_image_bytes = b"m2"
        assert item.medium_image() is not first
        assert decoded == [b"m", b"m2"]

    def test_small_image_independent_of_medium(self, make_item, target_exe):
        item = make_item(target_exe)
        item.medium_image_bytes = b"m"
        item.small_image_bytes = b"s"
        assert item.medium_image() == ("decoded", b"m")
        assert item.small_image() == ("decoded", b"s")

    def test_decode_failure_gives_none(self, make_item, target_exe):
        def decoder(data):
            raise ValueError("corrupt")

        item = make_item(target_exe, image_decoder=decoder)
        item.small_image_bytes = b"junk"
        assert item.small_image() is None


class TestShellMetadata:
    SETTINGS = {
        "all_users_start_menu": "C:\\ProgramData\\Microsoft\\Windows\\Start Menu\\Programs\\",
        "current_user_start_menu": "C:\\Users\\me\\AppData\\Roaming\\Microsoft\\Windows\\Start Menu\\Programs\\",
        "custom_shortcut_folder": "C:\\TileIconifier\\CustomShortcuts\\",
    }

    ENVIRON = {
        "PROGRAMDATA": "C:\\ProgramData",
        "APPDATA": "C:\\Users\\me\\AppData\\Roaming\\",
    }

    @pytest.mark.parametrize("shortcut,expected", [
        (r"C:\ProgramData\Microsoft\Windows\Start Menu\Programs\Foo.lnk", ShortcutUser.ALL_USERS),
        (r"c:\users\me\appdata\roaming\microsoft\windows\start menu\programs\Foo.lnk", ShortcutUser.CURRENT_USER),
        (r"D:\Desktop\Foo.lnk", ShortcutUser.UNKNOWN),
    ])
    def test_shortcut_user(self, make_item, shortcut, expected):
        item = make_item(r"C:\Apps\Foo\foo.exe", shortcut=shortcut, settings=self.SETTINGS)
        assert item.shortcut_user is expected

    def test_unknown_without_settings_or_environment(self, make_item):
        item = make_item(r"C:\Apps\Foo\foo.exe", shortcut=r"C:\ProgramData\x.lnk")
        assert item.shortcut_user is ShortcutUser.UNKNOWN
        assert not item.is_custom_shortcut

    @pytest.mark.parametrize("shortcut,expected", [
        (r"C:\ProgramData\Microsoft\Windows\Start Menu\Programs\Foo.lnk", ShortcutUser.ALL_USERS),
        (r"C:\Users\me\AppData\Roaming\Microsoft\Windows\Start Menu\Programs\Tools\Foo.lnk",
         ShortcutUser.CURRENT_USER),
        (r"C:\ProgramData\Foo.lnk", ShortcutUser.UNKNOWN),
    ])
    def test_shortcut_user_from_environment(self, make_item, shortcut, expected):
        item = make_item(r"C:\Apps\Foo\foo.exe", shortcut=shortcut, environ=self.ENVIRON)
        assert item.shortcut_user is expected

    def test_settings_override_environment(self, make_item):
        item = make_item(r"C:\Apps\Foo\foo.exe",
                         shortcut=r"C:\ProgramData\Microsoft\Windows\Start Menu\Programs\Foo.lnk",
                         environ=self.ENVIRON,
                         settings={"all_users_start_menu": "D:\\Menu\\"})
        assert item.shortcut_user is ShortcutUser.UNKNOWN

    def test_custom_shortcut_from_environment(self, make_item):
        item = make_item(r"C:\ProgramData\TileIconifier\CustomShortcuts\Foo\Foo.vbs",
                         executable_extensions=(".vbs",), environ=self.ENVIRON)
        assert item.is_custom_shortcut

    def test_custom_shortcut(self, make_item):
        item = make_item(r"C:\TileIconifier\CustomShortcuts\Foo\Foo.vbs",
                         executable_extensions=(".vbs",), settings=self.SETTINGS)
        assert item.is_custom_shortcut

    def test_regular_shortcut_not_custom(self, make_item):
        item = make_item(r"C:\Apps\Foo\foo.exe", settings=self.SETTINGS)
        assert not item.is_custom_shortcut
        assert not make_item(None, settings=self.SETTINGS).is_custom_shortcut

    def test_standard_icon_memoized(self, make_item, target_exe):
        calls = []

        def extractor(path):
            calls.append(path)
            return Result.success("icon")

        item = make_item(target_exe, icon_extractor=extractor)
        assert item.standard_icon == "icon"
        assert item.standard_icon == "icon"
        assert len(calls) == 1

    def test_standard_icon_failure_is_none(self, make_item, target_exe):
        item = make_item(target_exe, icon_extractor=lambda p: Result.fail(FailureKind.ICON_EXTRACTION_FAILURE))
        assert item.standard_icon is None

    def test_executable_extensions_from_settings(self, make_item):
        item = make_item(r"C:\Apps\Foo\foo.exe", executable_extensions=None,
                         environ={"PATHEXT": ".COM"},
                         settings={"executable_extensions": [".EXE"]})
        assert item.target_path == r"C:\Apps\Foo\foo.exe"

    def test_executable_extensions_from_environment(self, make_item):
        item = make_item(r"C:\Apps\Foo\foo.exe", executable_extensions=None, environ={"PATHEXT": ".COM"})
        assert item.target_path is None
