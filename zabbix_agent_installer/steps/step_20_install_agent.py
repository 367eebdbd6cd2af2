from __future__ import annotations

import logging
from pathlib import PurePosixPath
from typing import Any, Dict

from ..lib.net import download
from ..lib.pkg import apt_install, apt_update, dpkg_install
from ..lib.privilege import Privilege, PrivilegeMode
from ..pipeline import StepContext, record_decision

logger = logging.getLogger(__name__)

# The repository package lands in a world-writable tmp dir.
_UNPRIVILEGED = Privilege(mode=PrivilegeMode.DIRECT)


class InstallAgentStep:
    step_id = "20_install_agent"

    def _ensure_repository(self, ctx: StepContext) -> bool:
        cfg = ctx.config
        if ctx.package_state.is_registered(cfg.repo_package):
            logger.info("Zabbix repository already installed. Skipping repository setup.")
            return False

        logger.info("Zabbix repository not found. Installing %s...", cfg.repo_deb)
        deb_path = str(PurePosixPath(cfg.tmp_dir) / cfg.repo_deb)
        download(
            cfg.repo_url,
            deb_path,
            privilege=_UNPRIVILEGED,
            runner=ctx.runner,
            timeout=cfg.download_timeout,
            dry_run=ctx.dry_run,
        )
        dpkg_install(ctx.privilege, deb_path, runner=ctx.runner, dry_run=ctx.dry_run)
        apt_update(ctx.privilege, runner=ctx.runner, dry_run=ctx.dry_run)
        return True

    def _ensure_agent(self, ctx: StepContext) -> bool:
        package = ctx.config.agent_package
        if ctx.package_state.is_installed(package):
            logger.info("%s already installed. Skipping.", package)
            return False

        logger.info("Installing %s...", package)
        apt_install(ctx.privilege, [package], runner=ctx.runner, dry_run=ctx.dry_run)
        return True

    def run(self, ctx: StepContext, state: Dict[str, Any]) -> Dict[str, Any]:
        repo_added = self._ensure_repository(ctx)
        agent_installed = self._ensure_agent(ctx)

        record_decision(state, "repository", "installed" if repo_added else "present")
        record_decision(state, "agent", "installed" if agent_installed else "present")
        return state
