from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

DEFAULT_ZABBIX_VERSION = "7.2"
DEFAULT_DEBIAN_RELEASE = "12"
DEFAULT_REPO_URL_TEMPLATE = (
    "https://repo.zabbix.com/zabbix/{version}/release/debian/pool/main/z/zabbix-release/{repo_deb}"
)
DEFAULT_GPU_CONF_URL = "https://raw.githubusercontent.com/CyganTech/configs/refs/heads/main/zabbix2_config_GPU.conf"
DEFAULT_NON_GPU_CONF_URL = "https://raw.githubusercontent.com/CyganTech/configs/refs/heads/main/zabbix2_config.conf"
DEFAULT_PLUGINS = [
    "zabbix-agent2-plugin-mongodb",
    "zabbix-agent2-plugin-mssql",
    "zabbix-agent2-plugin-postgresql",
]
DEFAULT_LEGACY_CONFIG_FILES = [
    "/etc/zabbix/zabbix_agentd.conf",
    "/etc/zabbix/zabbix_agentd.conf.dpkg-dist",
]


def _section(raw: Dict[str, Any], name: str) -> Dict[str, Any]:
    sec = raw.get(name) or {}
    if not isinstance(sec, dict):
        raise ValueError(f"config section '{name}' must be a mapping")
    return sec


def _str_list(value: Any, key: str) -> List[str]:
    if not isinstance(value, list):
        raise ValueError(f"config key '{key}' must be a list")
    return [str(v).strip() for v in value if str(v).strip()]


@dataclass(frozen=True)
class InstallerConfig:
    raw: Dict[str, Any] = field(default_factory=dict)

    @property
    def zabbix_version(self) -> str:
        return str(_section(self.raw, "zabbix").get("version") or DEFAULT_ZABBIX_VERSION)

    @property
    def debian_release(self) -> str:
        return str(_section(self.raw, "zabbix").get("debian_release") or DEFAULT_DEBIAN_RELEASE)

    @property
    def repo_package(self) -> str:
        return str(_section(self.raw, "zabbix").get("repo_package") or "zabbix-release")

    @property
    def repo_deb(self) -> str:
        return f"zabbix-release_latest_{self.zabbix_version}+debian{self.debian_release}_all.deb"

    @property
    def repo_url(self) -> str:
        template = str(_section(self.raw, "zabbix").get("repo_url_template") or DEFAULT_REPO_URL_TEMPLATE)
        return template.format(version=self.zabbix_version, repo_deb=self.repo_deb)

    @property
    def agent_package(self) -> str:
        return str(_section(self.raw, "agent").get("package") or "zabbix-agent2")

    @property
    def agent_service(self) -> str:
        return str(_section(self.raw, "agent").get("service") or self.agent_package)

    @property
    def agent_config_path(self) -> str:
        return str(_section(self.raw, "agent").get("config_path") or "/etc/zabbix/zabbix_agent2.conf")

    @property
    def plugins(self) -> List[str]:
        agent = _section(self.raw, "agent")
        if "plugins" not in agent:
            return list(DEFAULT_PLUGINS)
        return _str_list(agent.get("plugins") or [], "agent.plugins")

    @property
    def legacy_package(self) -> str:
        return str(_section(self.raw, "legacy").get("package") or "zabbix-agent")

    @property
    def legacy_service(self) -> str:
        return str(_section(self.raw, "legacy").get("service") or self.legacy_package)

    @property
    def legacy_config_files(self) -> List[str]:
        legacy = _section(self.raw, "legacy")
        if "config_files" not in legacy:
            return list(DEFAULT_LEGACY_CONFIG_FILES)
        return _str_list(legacy.get("config_files") or [], "legacy.config_files")

    @property
    def legacy_purge_dirs(self) -> List[str]:
        return _str_list(_section(self.raw, "legacy").get("purge_dirs") or [], "legacy.purge_dirs")

    @property
    def gpu_config_url(self) -> str:
        return str(_section(self.raw, "config_urls").get("gpu") or DEFAULT_GPU_CONF_URL)

    @property
    def non_gpu_config_url(self) -> str:
        return str(_section(self.raw, "config_urls").get("non_gpu") or DEFAULT_NON_GPU_CONF_URL)

    @property
    def gpu_probe(self) -> str:
        return str(self.raw.get("gpu_probe") or "nvidia-smi")

    @property
    def elevation_helper(self) -> str:
        return str(self.raw.get("elevation_helper") or "sudo")

    @property
    def tmp_dir(self) -> str:
        return str(self.raw.get("tmp_dir") or "/tmp")

    @property
    def download_timeout(self) -> Optional[int]:
        value = self.raw.get("download_timeout")
        return int(value) if value else None


def load_config(path: Optional[str]) -> InstallerConfig:
    """Load an optional YAML override file; None gives the built-in defaults."""

    if path is None:
        return InstallerConfig()

    p = Path(path)
    if not p.exists():
        raise FileNotFoundError(path)

    if p.suffix.lower() not in {".yaml", ".yml"}:
        raise ValueError("installer config must be YAML")

    raw = yaml.safe_load(p.read_text(encoding="utf-8")) or {}
    if not isinstance(raw, dict):
        raise ValueError(f"{path} must contain a mapping/object")

    return InstallerConfig(raw=raw)
