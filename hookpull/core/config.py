"""集中配置管理

两层配置:
  - Config: 工具自身设置（注册表地址、源文件仓库地址），可选 YAML 文件覆盖
  - ProjectConfig: 目标项目的 hookpull.config 文件（语言、hook/utils 路径别名）
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from hookpull.core.exceptions import ConfigError
from hookpull.utils.yaml_io import load_yaml, save_yaml

logger = logging.getLogger(__name__)

DEFAULT_REGISTRY_URL = "https://siberiacancode.github.io/reactuse/registry.json"
DEFAULT_SETTINGS_FILE = ".hookpull/settings.yml"
PROJECT_CONFIG_FILE = "hookpull.config.yml"


def _default_repo_urls() -> dict[str, str]:
    return {
        "ts": "https://raw.githubusercontent.com/siberiacancode/reactuse/main/packages/core/src/bundle",
        "js": "https://raw.githubusercontent.com/siberiacancode/reactuse/main/packages/core/dist/esm/bundle",
    }


@dataclass
class Config:
    """工具全局配置"""

    registry_url: str = DEFAULT_REGISTRY_URL
    repo_urls: dict[str, str] = field(default_factory=_default_repo_urls)
    project_config_files: list[str] = field(
        default_factory=lambda: [PROJECT_CONFIG_FILE, "hookpull.config.json"],
    )
    fetch_timeout: float = 30.0

    # 自定义扩展 (放不到字段里的配置项)
    extra: dict = field(default_factory=dict)

    @classmethod
    def from_file(cls, path: str | Path = DEFAULT_SETTINGS_FILE) -> Config:
        """从 YAML 文件加载配置，不存在则返回默认"""
        data = load_yaml(path)
        if not data:
            return cls()
        known = {f.name for f in cls.__dataclass_fields__.values()}
        matched = {k: v for k, v in data.items() if k in known and k != "extra"}
        extra = {k: v for k, v in data.items() if k not in known}
        if "repo_urls" in matched:
            # 只覆盖给出的语言，其余保持默认
            matched["repo_urls"] = {**_default_repo_urls(), **matched["repo_urls"]}
        cfg = cls(**matched)
        cfg.extra = extra
        return cfg

    def repo_url_for(self, extension: str) -> str:
        """按目标扩展名获取源文件仓库地址"""
        url = self.repo_urls.get(extension)
        if not url:
            raise ConfigError(
                f"未配置扩展名 '{extension}' 对应的源文件仓库地址。"
                f"已配置: {sorted(self.repo_urls)}"
            )
        return url.rstrip("/")


# 全局单例，首次 import 时不加载文件；由 CLI 入口显式初始化
_current: Config | None = None


def get_config() -> Config:
    """获取当前配置（未初始化则返回默认值）"""
    global _current  # noqa: PLW0603
    if _current is None:
        _current = Config()
    return _current


def init_config(path: str | Path = DEFAULT_SETTINGS_FILE) -> Config:
    """从文件初始化全局配置"""
    global _current  # noqa: PLW0603
    _current = Config.from_file(path)
    logger.debug("工具配置已加载: %s", path)
    return _current


# =========================================================================
# 项目配置
# =========================================================================

@dataclass
class ProjectConfig:
    """目标项目配置"""

    typescript: bool = True
    hook_path: str = "@/hooks"
    utils_path: str = "@/utils"

    @property
    def extension(self) -> str:
        return "ts" if self.typescript else "js"

    def to_dict(self) -> dict[str, Any]:
        return {
            "typescript": self.typescript,
            "hookPath": self.hook_path,
            "utilsPath": self.utils_path,
        }


def _pick(data: dict[str, Any], *keys: str) -> Any:
    for key in keys:
        if key in data:
            return data[key]
    return None


def _read_project_file(path: Path) -> dict[str, Any]:
    """按扩展名读取项目配置，.json 用 json 解析，其余按 YAML"""
    try:
        if path.suffix == ".json":
            data = json.loads(path.read_text(encoding="utf-8"))
        else:
            data = load_yaml(path)
    except (OSError, ValueError, yaml.YAMLError) as e:
        raise ConfigError(f"项目配置 {path} 解析失败: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError(f"项目配置 {path} 内容不是对象")
    return data


def find_project_config(project_dir: str | Path, config: Config | None = None) -> Path | None:
    """按候选文件名顺序查找项目配置文件"""
    cfg = config or get_config()
    root = Path(project_dir)
    for name in cfg.project_config_files:
        candidate = root / name
        if candidate.is_file():
            return candidate
    return None


def load_project_config(project_dir: str | Path, config: Config | None = None) -> ProjectConfig:
    """加载项目配置

    Raises:
        ConfigError: 配置文件不存在、无法解析，或缺少 hookPath / utilsPath
    """
    path = find_project_config(project_dir, config)
    if path is None:
        raise ConfigError(f"项目配置缺失: {Path(project_dir).resolve()}")

    data = _read_project_file(path)
    hook_path = _pick(data, "hookPath", "hook_path")
    utils_path = _pick(data, "utilsPath", "utils_path")
    missing = [k for k, v in (("hookPath", hook_path), ("utilsPath", utils_path)) if not v]
    if missing:
        raise ConfigError(f"项目配置 {path} 缺少字段: {', '.join(missing)}")

    typescript = _pick(data, "typescript")
    project = ProjectConfig(
        typescript=True if typescript is None else bool(typescript),
        hook_path=str(hook_path),
        utils_path=str(utils_path),
    )
    logger.info("项目配置已加载: %s (%s)", path, project.extension)
    return project


def save_project_config(path: str | Path, project: ProjectConfig) -> None:
    """写入项目配置文件（init 命令使用）"""
    save_yaml(path, project.to_dict())
    logger.info("项目配置已写入: %s", path)
