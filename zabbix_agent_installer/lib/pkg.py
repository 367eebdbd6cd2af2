from __future__ import annotations

import logging
from typing import Protocol, Sequence

from .command import Runner, run_cmd
from .privilege import Privilege

logger = logging.getLogger(__name__)


class PackageState(Protocol):
    """Live view of the host package database."""

    def is_installed(self, package: str) -> bool:
        ...

    def is_registered(self, package: str) -> bool:
        ...


def parse_dpkg_list(output: str) -> set[str]:
    """Return package names whose desired/status flags are 'ii' in `dpkg -l` output.

    Architecture qualifiers (zabbix-agent2:amd64) are stripped.
    """
    installed: set[str] = set()
    for line in output.splitlines():
        parts = line.split()
        if len(parts) < 2 or parts[0] != "ii":
            continue
        installed.add(parts[1].split(":", 1)[0])
    return installed


class DpkgPackageState:
    """PackageState backed by dpkg. Never cached: each call queries dpkg."""

    def __init__(self, runner: Runner = run_cmd):
        self._runner = runner

    def is_installed(self, package: str) -> bool:
        r = self._runner(["dpkg", "-l"], check=False)
        if r.returncode != 0:
            logger.debug("dpkg -l exited %s", r.returncode)
        return package in parse_dpkg_list(r.stdout)

    def is_registered(self, package: str) -> bool:
        r = self._runner(["dpkg", "-s", package], check=False)
        return r.returncode == 0


def apt_update(privilege: Privilege, *, runner: Runner = run_cmd, dry_run: bool = False) -> None:
    runner(privilege.wrap(["apt-get", "update"]), dry_run=dry_run)


def apt_install(
    privilege: Privilege,
    packages: Sequence[str],
    *,
    runner: Runner = run_cmd,
    dry_run: bool = False,
) -> None:
    if not packages:
        return
    runner(privilege.wrap(["apt-get", "install", "-y", *packages]), dry_run=dry_run)


def apt_purge(
    privilege: Privilege,
    packages: Sequence[str],
    *,
    runner: Runner = run_cmd,
    dry_run: bool = False,
) -> None:
    if not packages:
        return
    runner(privilege.wrap(["apt-get", "purge", "-y", *packages]), dry_run=dry_run)


def dpkg_install(privilege: Privilege, deb_path: str, *, runner: Runner = run_cmd, dry_run: bool = False) -> None:
    runner(privilege.wrap(["dpkg", "-i", deb_path]), dry_run=dry_run)
