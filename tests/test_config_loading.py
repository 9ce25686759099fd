"""
Tests for loading the decoration config from YAML, environment and CLI.
"""

import pytest

from deckart.utils.config import deep_merge, load_decor_config, read_or_die


def _write(tmp_path, text, name="seeded.yaml"):
    path = tmp_path / name
    path.write_text(text, encoding="utf-8")
    return str(path)


class TestLoadDecorConfig:
    def test_yaml_values_applied(self, tmp_path):
        path = _write(tmp_path, "density: 50\nshapes:\n  lines: false\n")
        cfg = load_decor_config(path, use_env=False)
        assert cfg.density == 50
        assert cfg.shapes.lines is False
        assert cfg.shapes.circles is True

    def test_camel_case_yaml(self, tmp_path):
        path = _write(tmp_path, "seedMode: path\nthemeByHash:\n  '#a':\n    density: 3\n")
        cfg = load_decor_config(path, use_env=False)
        assert cfg.seed_mode == "path"
        assert cfg.theme_by_hash == {"#a": {"density": 3}}

    def test_precedence_env_over_yaml(self, tmp_path, monkeypatch):
        path = _write(tmp_path, "density: 50\nlayers: 2\n")
        monkeypatch.setenv("DECKART_DENSITY", "7")
        monkeypatch.setenv("DECKART_SEED_MODE", "full")
        cfg = load_decor_config(path)
        assert cfg.density == 7
        assert cfg.layers == 2
        assert cfg.seed_mode == "full"

    def test_precedence_cli_over_env(self, tmp_path, monkeypatch):
        path = _write(tmp_path, "density: 50\n")
        monkeypatch.setenv("DECKART_DENSITY", "7")
        cfg = load_decor_config(path, cli_overrides={"density": 3})
        assert cfg.density == 3

    def test_env_ignored_when_disabled(self, tmp_path, monkeypatch):
        path = _write(tmp_path, "density: 50\n")
        monkeypatch.setenv("DECKART_DENSITY", "7")
        assert load_decor_config(path, use_env=False).density == 50

    def test_bad_env_integer_ignored(self, tmp_path, monkeypatch):
        path = _write(tmp_path, "layers: 4\n")
        monkeypatch.setenv("DECKART_LAYERS", "many")
        assert load_decor_config(path).layers == 4

    def test_cli_values_are_clamped(self, tmp_path):
        path = _write(tmp_path, "{}\n")
        cfg = load_decor_config(path, cli_overrides={"density": 1000, "layers": 0}, use_env=False)
        assert cfg.density == 400
        assert cfg.layers == 1

    def test_bundled_example_is_default(self):
        cfg = load_decor_config(None, use_env=False)
        assert cfg.density == 24
        assert cfg.target_selector == ".slide"
        assert "#title" in cfg.theme_by_hash

    def test_missing_explicit_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_decor_config(str(tmp_path / "nope.yaml"))

    def test_non_mapping_yaml(self, tmp_path):
        path = _write(tmp_path, "- 1\n- 2\n")
        with pytest.raises(ValueError):
            load_decor_config(path)

    def test_invalid_yaml(self, tmp_path):
        path = _write(tmp_path, "density: [1, 2\n")
        with pytest.raises(ValueError):
            read_or_die(path)


class TestDeepMerge:
    def test_nested_dicts_merge(self):
        a = {"shapes": {"circles": True, "lines": True}, "density": 1}
        b = {"shapes": {"lines": False}}
        assert deep_merge(a, b) == {"shapes": {"circles": True, "lines": False}, "density": 1}

    def test_lists_replace(self):
        assert deep_merge({"colors": ["#a", "#b"]}, {"colors": ["#c"]}) == {"colors": ["#c"]}

    def test_inputs_untouched(self):
        a = {"shapes": {"circles": True}}
        deep_merge(a, {"shapes": {"circles": False}})
        assert a == {"shapes": {"circles": True}}
