from __future__ import annotations

import logging
from typing import Any, Dict

from ..lib.fs import remove_dirs, remove_files
from ..lib.pkg import apt_purge
from ..lib.systemd import systemctl
from ..pipeline import StepContext, record_decision

logger = logging.getLogger(__name__)


class RemoveLegacyAgentStep:
    step_id = "10_remove_legacy_agent"

    def run(self, ctx: StepContext, state: Dict[str, Any]) -> Dict[str, Any]:
        cfg = ctx.config
        package = cfg.legacy_package

        logger.info("Checking for legacy %s...", package)
        if not ctx.package_state.is_installed(package):
            logger.info("No legacy %s package found. Skipping removal.", package)
            record_decision(state, "legacy_agent", "absent")
            return state

        logger.info("Old %s found. Removing...", package)
        # The unit may be missing or already stopped.
        for action in ("stop", "disable"):
            systemctl(
                ctx.privilege,
                action,
                cfg.legacy_service,
                runner=ctx.runner,
                tolerate=True,
                dry_run=ctx.dry_run,
            )

        apt_purge(ctx.privilege, [package], runner=ctx.runner, dry_run=ctx.dry_run)

        logger.info("Removing leftover config files for old agent...")
        remove_files(cfg.legacy_config_files, privilege=ctx.privilege, runner=ctx.runner, dry_run=ctx.dry_run)

        purge_dirs = cfg.legacy_purge_dirs
        if purge_dirs:
            logger.info("Removing legacy directories: %s", ", ".join(purge_dirs))
            remove_dirs(purge_dirs, privilege=ctx.privilege, runner=ctx.runner, dry_run=ctx.dry_run)

        record_decision(state, "legacy_agent", "removed")
        return state
