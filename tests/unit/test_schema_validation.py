"""Tests for settings validation."""

from pathlib import Path

import yaml

from translit.utils.schema import validate_settings


SETTINGS_PATH = Path(__file__).parent.parent.parent / "translit" / "etc" / "settings.yaml"


def load_bundled_settings():
    with SETTINGS_PATH.open(encoding="utf-8") as f:
        return yaml.safe_load(f)


def test_bundled_settings_valid(schema_dir):
    """Test validation of the shipped settings."""
    errors = validate_settings(load_bundled_settings(), schema_dir)

    assert len(errors) == 0, f"Unexpected errors: {errors}"


def test_settings_bad_gender(schema_dir):
    settings = load_bundled_settings()
    settings["defaults"]["gender"] = "x"

    errors = validate_settings(settings, schema_dir)
    assert len(errors) == 1
    assert errors[0].startswith("defaults.gender")


def test_settings_bad_workers(schema_dir):
    settings = load_bundled_settings()
    settings["parallel"]["workers"] = 0

    errors = validate_settings(settings, schema_dir)
    assert len(errors) > 0


def test_settings_missing_section(schema_dir):
    settings = load_bundled_settings()
    del settings["logging"]

    errors = validate_settings(settings, schema_dir)
    assert any("logging" in e for e in errors)
