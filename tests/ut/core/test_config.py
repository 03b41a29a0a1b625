"""配置加载单元测试"""

from __future__ import annotations

import json
from pathlib import Path

import pytest
import yaml

from hookpull.core import config as cfgmod
from hookpull.core.config import (
    Config,
    ProjectConfig,
    load_project_config,
    save_project_config,
)
from hookpull.core.exceptions import ConfigError


class TestToolConfig:
    def test_defaults_when_file_missing(self, tmp_path: Path) -> None:
        cfg = Config.from_file(tmp_path / "missing.yml")
        assert cfg.registry_url == cfgmod.DEFAULT_REGISTRY_URL
        assert set(cfg.repo_urls) == {"ts", "js"}

    def test_partial_override(self, tmp_path: Path) -> None:
        settings = tmp_path / "settings.yml"
        settings.write_text(yaml.dump({
            "registry_url": "https://mirror.example.com/registry.json",
            "repo_urls": {"ts": "https://mirror.example.com/ts/"},
            "team": "web",
        }))
        cfg = Config.from_file(settings)
        assert cfg.registry_url == "https://mirror.example.com/registry.json"
        assert cfg.repo_url_for("ts") == "https://mirror.example.com/ts"
        assert cfg.repo_url_for("js") == Config().repo_url_for("js")
        assert cfg.extra == {"team": "web"}

    def test_unknown_extension(self) -> None:
        with pytest.raises(ConfigError, match="mjs"):
            Config().repo_url_for("mjs")

    def test_init_config_replaces_global(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr(cfgmod, "_current", None)
        settings = tmp_path / "settings.yml"
        settings.write_text("fetch_timeout: 5\n")
        cfgmod.init_config(settings)
        assert cfgmod.get_config().fetch_timeout == 5


class TestProjectConfig:
    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigError, match="项目配置缺失"):
            load_project_config(tmp_path, Config())

    def test_json_camel_case(self, tmp_path: Path) -> None:
        (tmp_path / "hookpull.config.json").write_text(json.dumps({
            "typescript": False, "hookPath": "@/hooks", "utilsPath": "@/lib/utils",
        }))
        project = load_project_config(tmp_path, Config())
        assert project == ProjectConfig(typescript=False, hook_path="@/hooks", utils_path="@/lib/utils")
        assert project.extension == "js"

    def test_json_with_tab_indent(self, tmp_path: Path) -> None:
        (tmp_path / "hookpull.config.json").write_text(
            json.dumps({"hookPath": "@/hooks", "utilsPath": "@/utils"}, indent="\t")
        )
        assert load_project_config(tmp_path, Config()).utils_path == "@/utils"

    def test_malformed_yaml(self, tmp_path: Path) -> None:
        (tmp_path / "hookpull.config.yml").write_text("hookPath: [unclosed\n")
        with pytest.raises(ConfigError, match="解析失败"):
            load_project_config(tmp_path, Config())

    def test_malformed_json(self, tmp_path: Path) -> None:
        (tmp_path / "hookpull.config.json").write_text('{"hookPath": "a",')
        with pytest.raises(ConfigError, match="解析失败"):
            load_project_config(tmp_path, Config())

    def test_json_not_object(self, tmp_path: Path) -> None:
        (tmp_path / "hookpull.config.json").write_text('["@/hooks"]')
        with pytest.raises(ConfigError, match="不是对象"):
            load_project_config(tmp_path, Config())

    def test_yaml_snake_case(self, tmp_path: Path) -> None:
        (tmp_path / "hookpull.config.yml").write_text(
            "hook_path: src/hooks\nutils_path: src/utils\n"
        )
        project = load_project_config(tmp_path, Config())
        assert project.typescript is True
        assert project.extension == "ts"

    def test_yaml_preferred_over_json(self, tmp_path: Path) -> None:
        (tmp_path / "hookpull.config.json").write_text('{"hookPath": "a", "utilsPath": "b"}')
        (tmp_path / "hookpull.config.yml").write_text("hookPath: c\nutilsPath: d\n")
        assert load_project_config(tmp_path, Config()).hook_path == "c"

    def test_missing_fields(self, tmp_path: Path) -> None:
        (tmp_path / "hookpull.config.yml").write_text("typescript: true\nhookPath: x\n")
        with pytest.raises(ConfigError, match="utilsPath"):
            load_project_config(tmp_path, Config())

    def test_save_then_load(self, tmp_path: Path) -> None:
        original = ProjectConfig(typescript=False, hook_path="./hooks", utils_path="./utils")
        save_project_config(tmp_path / "hookpull.config.yml", original)
        assert load_project_config(tmp_path, Config()) == original
