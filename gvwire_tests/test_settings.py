from pathlib import Path

import pytest
from pydantic import ValidationError

from gvwire.conf import DEFAULT_SETTINGS_FILEPATH, UNITTESTS_SETTINGS_FILEPATH
from gvwire.conf.get_settings import get_global_settings, get_settings_source, reset_settings
from gvwire.conf.settings import GVWireSettings
from gvwire.context import ByteOrder


def test_unittests_settings_are_loaded() -> None:
    settings = get_global_settings()
    assert get_settings_source() == UNITTESTS_SETTINGS_FILEPATH
    assert settings.DEFAULT_BYTE_ORDER is ByteOrder.LITTLE
    # everything else comes from the extended default settings
    assert settings.MAX_DEPTH == 64
    assert settings.ALLOW_EMPTY_ARRAYS is False


def test_default_settings_file() -> None:
    settings = GVWireSettings.from_yaml(filepath=DEFAULT_SETTINGS_FILEPATH)
    assert settings == GVWireSettings()


def test_extends(tmp_path: Path) -> None:
    base = tmp_path / 'base.yml'
    base.write_text('MAX_DEPTH: 10\nALLOW_EMPTY_ARRAYS: true\n')
    extension = tmp_path / 'extension.yml'
    extension.write_text('extends: base.yml\nMAX_DEPTH: 20\nDEFAULT_BYTE_ORDER: big\n')

    settings = GVWireSettings.from_yaml(filepath=str(extension))
    assert settings.MAX_DEPTH == 20
    assert settings.ALLOW_EMPTY_ARRAYS is True
    assert settings.DEFAULT_BYTE_ORDER is ByteOrder.BIG


def test_extends_packaged_file(tmp_path: Path) -> None:
    extension = tmp_path / 'custom.yml'
    extension.write_text('extends: default.yml\nMAX_ARRAY_LENGTH: 1024\n')
    settings = GVWireSettings.from_yaml(filepath=str(extension))
    assert settings.MAX_ARRAY_LENGTH == 1024
    assert settings.MAX_DEPTH == 64


def test_unknown_key_is_rejected(tmp_path: Path) -> None:
    path = tmp_path / 'typo.yml'
    path.write_text('MAX_DEPHT: 3\n')
    with pytest.raises(ValidationError):
        GVWireSettings.from_yaml(filepath=str(path))


def test_invalid_values_are_rejected(tmp_path: Path) -> None:
    path = tmp_path / 'invalid.yml'
    path.write_text('MAX_DEPTH: 0\n')
    with pytest.raises(ValidationError):
        GVWireSettings.from_yaml(filepath=str(path))

    path.write_text('DEFAULT_BYTE_ORDER: middle\n')
    with pytest.raises(ValidationError):
        GVWireSettings.from_yaml(filepath=str(path))


def test_missing_file() -> None:
    with pytest.raises(ValueError):
        GVWireSettings.from_yaml(filepath='/nonexistent/settings.yml')


def test_settings_are_frozen() -> None:
    settings = GVWireSettings()
    with pytest.raises(ValidationError):
        settings.MAX_DEPTH = 3  # type: ignore[misc]


def test_reset_settings() -> None:
    settings = get_global_settings()
    reset_settings()
    reloaded = get_global_settings()
    assert reloaded is not settings
    assert reloaded == settings
    assert get_settings_source() == UNITTESTS_SETTINGS_FILEPATH
