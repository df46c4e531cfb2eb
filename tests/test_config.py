import pytest
from pathlib import Path

from templink.config import EngineConfig, build_engine_config, load_and_merge_configs, normalize_base_dir
from templink.config import loader
from templink.exceptions import ConfigError

@pytest.fixture(autouse=True)
def no_user_config(tmp_path: Path, monkeypatch):
    monkeypatch.setattr(loader, "USER_CONFIG_FILE", tmp_path / "no_such_user_config.toml")

@pytest.mark.parametrize("given, expected", [
    ("", ""),
    (None, ""),
    ("templates", "templates/"),
    ("templates/", "templates/"),
    ("/srv/tpl", "/srv/tpl/"),
    (Path("rel/dir"), "rel/dir/"),
])
def test_normalize_base_dir(given, expected):
    assert normalize_base_dir(given) == expected

def test_engine_config_defaults_and_resolve():
    config = EngineConfig(base_dir="tpl")
    assert config.base_dir == "tpl/"
    assert config.cache_enabled is False
    assert config.encoding == "utf-8"
    assert config.resolve("a/b.html") == "tpl/a/b.html"

def test_snapshot_is_independent():
    config = EngineConfig(base_dir="one")
    snap = config.snapshot()
    config.base_dir = "two/"
    assert snap.base_dir == "one/"

def test_load_project_config_file(tmp_path: Path):
    (tmp_path / ".templink.toml").write_text(
        'base_dir = "templates"\ncache = true\n[vars]\ntitle = "Hello"\n', encoding="utf-8"
    )
    raw = load_and_merge_configs(tmp_path)
    assert raw == {"base_dir": "templates", "cache": True, "vars": {"title": "Hello"}}
    config = build_engine_config(raw)
    assert config.base_dir == "templates/"
    assert config.cache_enabled is True

def test_load_pyproject_tool_table(tmp_path: Path):
    (tmp_path / "pyproject.toml").write_text(
        '[project]\nname = "x"\n\n[tool.templink]\nbase_dir = "views"\nencoding = "latin-1"\n', encoding="utf-8"
    )
    config = build_engine_config(load_and_merge_configs(tmp_path))
    assert config.base_dir == "views/"
    assert config.encoding == "latin-1"

def test_first_project_file_wins(tmp_path: Path):
    (tmp_path / ".templink.toml").write_text('base_dir = "first"\n', encoding="utf-8")
    (tmp_path / "templink.toml").write_text('base_dir = "second"\n', encoding="utf-8")
    assert load_and_merge_configs(tmp_path)["base_dir"] == "first"

def test_user_config_merged_under_project(tmp_path: Path, monkeypatch):
    user_file = tmp_path / "user.toml"
    user_file.write_text('cache = true\nbase_dir = "user"\n[vars]\na = "1"\nb = "1"\n', encoding="utf-8")
    monkeypatch.setattr(loader, "USER_CONFIG_FILE", user_file)
    project = tmp_path / "proj"
    project.mkdir()
    (project / "templink.toml").write_text('base_dir = "proj"\n[vars]\nb = "2"\n', encoding="utf-8")
    raw = load_and_merge_configs(project)
    assert raw["base_dir"] == "proj"
    assert raw["cache"] is True
    assert raw["vars"] == {"a": "1", "b": "2"}

def test_no_config_files(tmp_path: Path):
    assert load_and_merge_configs(tmp_path) == {}
    assert build_engine_config({}) == EngineConfig()

def test_invalid_toml_raises_config_error(tmp_path: Path):
    (tmp_path / ".templink.toml").write_text("base_dir = [unclosed", encoding="utf-8")
    with pytest.raises(ConfigError):
        load_and_merge_configs(tmp_path)

def test_unknown_keys_are_ignored():
    config = build_engine_config({"base_dir": "x", "colour": "blue", "vars": {"a": 1}})
    assert config == EngineConfig(base_dir="x")

@pytest.mark.parametrize("raw", [
    {"cache": "yes"},
    {"base_dir": 3},
    {"encoding": False},
])
def test_wrong_value_types_raise_config_error(raw):
    with pytest.raises(ConfigError):
        build_engine_config(raw)
