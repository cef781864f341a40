"""
Unit tests for glazing_layout.project_config module.

Tests:
- Spec overrides from dictionaries
- JSON serialization/deserialization
- Config file search and loading
- Sample config creation
"""

import json
from pathlib import Path

import pytest

from glazing_layout.calculations.panels import auto_generate_panels_for_edge
from glazing_layout.config import DEFAULT_SPEC, LOCK_WIDTHS, ManufacturingSpec
from glazing_layout.project_config import (
    CONFIG_FILENAME,
    create_sample_config,
    find_config_file,
    load_config,
    load_spec,
    save_spec,
    spec_from_dict,
    spec_from_json,
    spec_to_dict,
    spec_to_json,
)


@pytest.fixture
def isolated_dirs(tmp_path, monkeypatch):
    """Run with cwd and home pointing to empty temporary directories."""
    cwd = tmp_path / "cwd"
    home = tmp_path / "home"
    cwd.mkdir()
    home.mkdir()
    monkeypatch.chdir(cwd)
    monkeypatch.setenv("HOME", str(home))
    return cwd, home


class TestSpecFromDict:
    """Tests for spec_from_dict function."""

    def test_empty_overrides(self):
        """Test no overrides returns the base spec."""
        assert spec_from_dict({}) is DEFAULT_SPEC

    def test_scalar_override(self):
        """Test a single value is replaced and coerced to float."""
        spec = spec_from_dict({"offsets": {"zero_angle_offset": 50}})

        assert spec.offsets.zero_angle_offset == 50.0
        assert isinstance(spec.offsets.zero_angle_offset, float)
        assert spec.panels == DEFAULT_SPEC.panels
        assert DEFAULT_SPEC.offsets.zero_angle_offset == 46.5

    def test_table_override(self):
        """Test lists become tuples."""
        spec = spec_from_dict({"guide": {"snap_angles": [0, 90, 180, 270]}})
        assert spec.guide.snap_angles == (0.0, 90.0, 180.0, 270.0)

    def test_lock_widths_merged(self):
        """Test lock width overrides keep the other catalogue entries."""
        spec = spec_from_dict({"fittings": {"lock_widths": {"Slutlock hona": 20}}})

        assert spec.fittings.lock_widths["Slutlock hona"] == 20.0
        assert spec.fittings.lock_widths["Overlas"] == 30.0
        assert LOCK_WIDTHS["Slutlock hona"] == 25.0

    def test_unknown_keys_ignored(self, caplog):
        """Test unknown keys are skipped with a warning."""
        with caplog.at_level("WARNING", logger="glazing_layout.project_config"):
            spec = spec_from_dict({"panels": {"no_such_field": 1, "_note": "x"}})

        assert spec.panels == DEFAULT_SPEC.panels

    def test_non_mapping_section_ignored(self):
        """Test a section that is not an object is skipped."""
        spec = spec_from_dict({"panels": [1], "offsets": {"zero_angle_offset": 50}})

        assert spec.panels == DEFAULT_SPEC.panels
        assert spec.offsets.zero_angle_offset == 50.0

    def test_override_changes_engine_result(self):
        """Test an overridden spec flows into panel generation."""
        spec = spec_from_dict({"panels": {"max_panel_width": 1000}})
        panels = auto_generate_panels_for_edge(3000, 0, 0, False, False, spec)
        assert len(panels) == 3


class TestJsonSerialization:
    """Tests for JSON round-trips."""

    def test_to_dict_sections(self):
        """Test every section is serialized."""
        data = spec_to_dict(DEFAULT_SPEC)
        assert set(data) == {"offsets", "panels", "cut_lengths", "fittings", "guide"}
        assert data["offsets"]["interpolation_angles"][0] == 145.0
        assert data["fittings"]["lock_widths"]["Variabelt andlock"] == 7.9

    def test_round_trip(self):
        """Test spec survives JSON serialization."""
        restored = spec_from_json(spec_to_json(DEFAULT_SPEC))
        assert isinstance(restored, ManufacturingSpec)
        assert spec_to_dict(restored) == spec_to_dict(DEFAULT_SPEC)

    def test_non_ascii_preserved(self):
        """Test output is valid JSON."""
        json.loads(spec_to_json(DEFAULT_SPEC))


class TestSaveLoad:
    """Tests for save_spec / load_spec."""

    def test_save_and_load(self, tmp_path):
        """Test a saved spec loads back."""
        path = tmp_path / "spec.json"
        spec = spec_from_dict({"cut_lengths": {"cover_wall_bonus": 60}})

        save_spec(spec, path)
        loaded = load_spec(path)

        assert loaded.cut_lengths.cover_wall_bonus == 60.0

    def test_load_missing_file(self, tmp_path):
        """Test missing files raise."""
        with pytest.raises(FileNotFoundError):
            load_spec(tmp_path / "missing.json")


class TestFindConfigFile:
    """Tests for find_config_file function."""

    def test_explicit_path(self, tmp_path, isolated_dirs):
        """Test an explicit config path wins."""
        path = tmp_path / "custom.json"
        path.write_text("{}", encoding="utf-8")
        assert find_config_file(explicit_config=path) == path

    def test_project_dir(self, tmp_path, isolated_dirs):
        """Test the project directory is searched."""
        project = tmp_path / "project"
        project.mkdir()
        (project / CONFIG_FILENAME).write_text("{}", encoding="utf-8")
        assert find_config_file(project_dir=project) == project / CONFIG_FILENAME

    def test_cwd(self, isolated_dirs):
        """Test the working directory is searched."""
        cwd, _ = isolated_dirs
        (cwd / CONFIG_FILENAME).write_text("{}", encoding="utf-8")
        assert find_config_file() == Path.cwd() / CONFIG_FILENAME

    def test_not_found(self, isolated_dirs):
        """Test None when nothing exists."""
        assert find_config_file() is None


class TestLoadConfig:
    """Tests for load_config function."""

    def test_defaults_without_file(self, isolated_dirs):
        """Test built-in defaults when no file exists."""
        assert load_config() is DEFAULT_SPEC

    def test_loads_project_file(self, tmp_path, isolated_dirs):
        """Test overrides are read from the project file."""
        (tmp_path / CONFIG_FILENAME).write_text(
            json.dumps({"panels": {"middle_offset": 3}}), encoding="utf-8",
        )
        spec = load_config(project_dir=tmp_path)
        assert spec.panels.middle_offset == 3.0

    def test_invalid_json_falls_back(self, tmp_path, isolated_dirs):
        """Test broken files fall back to defaults."""
        (tmp_path / CONFIG_FILENAME).write_text("{not json", encoding="utf-8")
        assert load_config(project_dir=tmp_path) is DEFAULT_SPEC

    def test_malformed_section_uses_defaults(self, tmp_path, isolated_dirs):
        """Test a file with a non-object section still loads."""
        (tmp_path / CONFIG_FILENAME).write_text(json.dumps({"panels": [1]}), encoding="utf-8")
        spec = load_config(project_dir=tmp_path)
        assert spec_to_dict(spec) == spec_to_dict(DEFAULT_SPEC)


class TestCreateSampleConfig:
    """Tests for create_sample_config function."""

    def test_sample_is_loadable(self, tmp_path):
        """Test the sample file loads into the default spec."""
        path = tmp_path / CONFIG_FILENAME
        create_sample_config(path)

        data = json.loads(path.read_text(encoding="utf-8"))
        assert "_comment" in data
        assert spec_to_dict(load_spec(path)) == spec_to_dict(DEFAULT_SPEC)
