"""Tests for muxlog.config — three-layer config resolution."""

import json
from argparse import Namespace

import pytest

from muxlog.config import (
    find_project_config,
    load_json,
    load_project_config,
    resolve_config,
    save_global_config,
    save_project_config,
)
from muxlog.sinkspec import SinkConfig


class TestFindProjectConfig:
    """Test .muxlog.json discovery by walking up directories."""

    def test_finds_config_in_cwd(self, tmp_path):
        """Should find .muxlog.json in the given directory."""
        cfg_file = tmp_path / ".muxlog.json"
        cfg_file.write_text('{"levels": []}')
        assert find_project_config(str(tmp_path)) == cfg_file

    def test_finds_config_in_parent(self, tmp_path):
        """Should walk upward to find .muxlog.json."""
        cfg_file = tmp_path / ".muxlog.json"
        cfg_file.write_text('{"levels": []}')
        child = tmp_path / "subdir" / "deep"
        child.mkdir(parents=True)
        assert find_project_config(str(child)) == cfg_file

    def test_returns_none_when_missing(self, tmp_path):
        """Should return None when no .muxlog.json exists."""
        assert find_project_config(str(tmp_path)) is None


class TestLoadJson:
    """Test JSON file loading with error handling."""

    def test_load_valid_json(self, tmp_path):
        f = tmp_path / "test.json"
        f.write_text('{"key": "value"}')
        assert load_json(f) == {"key": "value"}

    def test_load_missing_file(self, tmp_path):
        """Should return {} for missing files."""
        assert load_json(tmp_path / "nope.json") == {}

    def test_load_malformed_json(self, tmp_path):
        """Should return {} for malformed JSON."""
        f = tmp_path / "bad.json"
        f.write_text("{not valid json")
        assert load_json(f) == {}

    def test_load_non_object(self, tmp_path):
        """A JSON list is not a config."""
        f = tmp_path / "list.json"
        f.write_text("[1, 2]")
        assert load_json(f) == {}

    def test_load_project_config_missing(self, tmp_path):
        assert load_project_config(str(tmp_path)) == ({}, None)


class TestSaveConfig:
    """Test config file writing."""

    def test_save_project_config(self, tmp_path):
        path = save_project_config({"levels": ["audit"]}, str(tmp_path))
        assert path.name == ".muxlog.json"
        assert json.loads(path.read_text())["levels"] == ["audit"]
        assert path.read_text().endswith("\n")

    def test_save_global_config(self, tmp_config_home):
        path = save_global_config({"sinks": []})
        assert path == tmp_config_home / ".muxlog" / "config.json"
        assert json.loads(path.read_text()) == {"sinks": []}


class TestResolveConfig:
    """Test layer precedence for levels and sinks."""

    def test_defaults(self, tmp_project):
        resolved = resolve_config(Namespace(), str(tmp_project))
        assert resolved == {"levels": ["error", "info"], "sinks": []}

    def test_global_layer(self, tmp_project):
        save_global_config({
            "levels": ["info", "audit"],
            "sinks": [{"id": "g", "levels": ["audit"]}],
        })
        resolved = resolve_config(Namespace(), str(tmp_project))
        assert resolved["levels"] == ["info", "audit"]
        assert resolved["sinks"] == [SinkConfig("g", ["audit"])]

    def test_project_beats_global(self, tmp_project):
        save_global_config({"levels": ["global"], "sinks": [{"id": "g"}]})
        save_project_config({"levels": ["project"]}, str(tmp_project))
        resolved = resolve_config(Namespace(), str(tmp_project))
        assert resolved["levels"] == ["project"]
        # Project sets no sinks, so the global ones apply
        assert [s.id for s in resolved["sinks"]] == ["g"]

    def test_cli_flags_appended(self, tmp_project):
        save_project_config({"levels": ["info"], "sinks": [{"id": "p"}]},
                            str(tmp_project))
        args = Namespace(level=["audit", "info"], sink=["c:audit"])
        resolved = resolve_config(args, str(tmp_project))
        assert resolved["levels"] == ["info", "audit"]
        assert [s.id for s in resolved["sinks"]] == ["p", "c"]
        assert resolved["sinks"][1].levels == ["audit"]

    def test_explicit_config_path(self, tmp_project, tmp_path):
        other = tmp_path / "other.json"
        other.write_text(json.dumps({"levels": ["from-flag"]}))
        save_global_config({"levels": ["from-home"]})
        resolved = resolve_config(Namespace(config=str(other)), str(tmp_project))
        assert resolved["levels"] == ["from-flag"]

    def test_bad_sink_entry(self, tmp_project):
        save_project_config({"sinks": [{"levels": ["info"]}]}, str(tmp_project))
        with pytest.raises(ValueError):
            resolve_config(Namespace(), str(tmp_project))

    def test_sink_spec_string_entries(self, tmp_project):
        save_project_config({"sinks": ["console:info", {"id": "m"}]},
                            str(tmp_project))
        resolved = resolve_config(Namespace(), str(tmp_project))
        assert resolved["sinks"] == [SinkConfig("console", ["info"]), SinkConfig("m")]

    def test_non_mapping_sink_entry(self, tmp_project):
        save_project_config({"sinks": [42]}, str(tmp_project))
        with pytest.raises(ValueError, match="mapping"):
            resolve_config(Namespace(), str(tmp_project))

    def test_sinks_not_a_list(self, tmp_project):
        save_project_config({"sinks": "console"}, str(tmp_project))
        with pytest.raises(ValueError, match="must be a list"):
            resolve_config(Namespace(), str(tmp_project))

    def test_levels_string_is_one_name(self, tmp_project):
        """A bare string names one level; it is not split into characters."""
        save_project_config({"levels": "audit"}, str(tmp_project))
        assert resolve_config(Namespace(), str(tmp_project))["levels"] == ["audit"]

    def test_levels_comma_separated(self, tmp_project):
        save_global_config({"levels": "info, audit"})
        assert resolve_config(Namespace(), str(tmp_project))["levels"] == ["info", "audit"]

    def test_levels_bad_type(self, tmp_project):
        save_project_config({"levels": 3}, str(tmp_project))
        with pytest.raises(ValueError):
            resolve_config(Namespace(), str(tmp_project))
