"""
Shared test fixtures: a fake Debian host that answers dpkg/apt/systemctl/wget.
"""

import logging
from pathlib import Path
from typing import Dict, List, Optional, Set

import pytest
import yaml

from zabbix_agent_installer.lib.command import CmdResult, CommandError

GPU_URL = "https://example.test/gpu.conf"
NON_GPU_URL = "https://example.test/non-gpu.conf"


class FakeHost:
    """Runner stand-in that keeps a tiny package database in memory."""

    def __init__(self, installed: Optional[Set[str]] = None, registered: Optional[Set[str]] = None):
        self.installed: Set[str] = set(installed or ())
        self.registered: Set[str] = set(registered or ())
        self.calls: List[List[str]] = []
        self.downloads: Dict[str, bytes] = {}
        self.fail: Set[str] = set()
        self.services: Dict[str, Set[str]] = {}

    # argv helpers

    @staticmethod
    def _strip_prefix(argv: List[str]) -> List[str]:
        return argv[1:] if argv and argv[0] == "sudo" else argv

    def commands(self, name: str) -> List[List[str]]:
        return [a for a in (self._strip_prefix(c) for c in self.calls) if a and a[0] == name]

    def mutating_calls(self) -> List[List[str]]:
        out = []
        for argv in (self._strip_prefix(c) for c in self.calls):
            if argv[:2] in (["dpkg", "-l"], ["dpkg", "-s"]):
                continue
            out.append(argv)
        return out

    def _result(self, argv: List[str], rc: int, stdout: str = "", check: bool = True) -> CmdResult:
        if check and rc != 0:
            raise CommandError(argv, rc, "fake failure")
        return CmdResult(argv=argv, returncode=rc, stdout=stdout, stderr="")

    def __call__(self, argv, *, check: bool = True, dry_run: bool = False, **_kw) -> CmdResult:
        argv = list(argv)
        self.calls.append(argv)
        if dry_run:
            return CmdResult(argv=argv, returncode=0, stdout="", stderr="")

        cmd = self._strip_prefix(argv)
        key = " ".join(cmd[:2])
        if key in self.fail:
            return self._result(argv, 1, check=check)

        if cmd[:2] == ["dpkg", "-l"]:
            lines = ["Desired=Unknown/Install/Remove/Purge/Hold", "||/ Name Version Architecture Description"]
            lines += [f"ii  {p}:amd64  1:7.2.0-1  amd64  fake" for p in sorted(self.installed)]
            return self._result(argv, 0, "\n".join(lines) + "\n", check)
        if cmd[:2] == ["dpkg", "-s"]:
            return self._result(argv, 0 if cmd[2] in self.registered else 1, check=check)
        if cmd[:2] == ["dpkg", "-i"]:
            self.registered.add("zabbix-release")
            return self._result(argv, 0, check=check)
        if cmd[:2] == ["apt-get", "install"]:
            self.installed.update(cmd[3:])
            return self._result(argv, 0, check=check)
        if cmd[:2] == ["apt-get", "purge"]:
            self.installed.difference_update(cmd[3:])
            return self._result(argv, 0, check=check)
        if cmd[0] == "wget":
            dest = cmd[cmd.index("-O") + 1]
            url = cmd[-1]
            Path(dest).write_bytes(self.downloads.get(url, b"Server=127.0.0.1\n"))
            return self._result(argv, 0, check=check)
        if cmd[0] == "systemctl":
            self.services.setdefault(cmd[2], set()).add(cmd[1])
            return self._result(argv, 0, check=check)
        return self._result(argv, 0, check=check)


def no_tools(_name):
    return None


def only(*names):
    def which(name):
        return f"/usr/bin/{name}" if name in names else None

    return which


@pytest.fixture
def project_root() -> Path:
    """Return the project root directory."""
    return Path(__file__).parent.parent


@pytest.fixture
def host() -> FakeHost:
    return FakeHost()


@pytest.fixture
def raw_config(tmp_path: Path) -> dict:
    (tmp_path / "etc").mkdir()
    return {
        "agent": {"config_path": str(tmp_path / "etc" / "zabbix_agent2.conf")},
        "config_urls": {"gpu": GPU_URL, "non_gpu": NON_GPU_URL},
        "tmp_dir": str(tmp_path),
    }


@pytest.fixture
def config_file(tmp_path: Path, raw_config: dict) -> Path:
    p = tmp_path / "installer.yaml"
    p.write_text(yaml.safe_dump(raw_config), encoding="utf-8")
    return p


@pytest.fixture
def fresh_logging():
    """Let configure_logging run from scratch, then put the root logger back."""
    root = logging.getLogger()
    saved_handlers = list(root.handlers)
    saved_level = root.level
    saved_attrs = {
        name: getattr(root, name)
        for name in ("_zbx_installer_configured", "_zbx_installer_log_path")
        if hasattr(root, name)
    }
    root._zbx_installer_configured = False
    yield root
    for h in list(root.handlers):
        if h not in saved_handlers:
            root.removeHandler(h)
            h.close()
    root.setLevel(saved_level)
    for name in ("_zbx_installer_configured", "_zbx_installer_log_path"):
        if name in saved_attrs:
            setattr(root, name, saved_attrs[name])
        elif hasattr(root, name):
            delattr(root, name)
