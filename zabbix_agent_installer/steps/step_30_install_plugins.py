from __future__ import annotations

import logging
from typing import Any, Dict

from ..lib.pkg import apt_install
from ..pipeline import StepContext, record_decision

logger = logging.getLogger(__name__)


class InstallPluginsStep:
    step_id = "30_install_plugins"

    def run(self, ctx: StepContext, state: Dict[str, Any]) -> Dict[str, Any]:
        plugins = ctx.config.plugins
        if not plugins:
            logger.info("No plugins configured. Skipping.")
        else:
            logger.info("Installing plugins: %s", ", ".join(plugins))
            apt_install(ctx.privilege, plugins, runner=ctx.runner, dry_run=ctx.dry_run)

        record_decision(state, "plugins", plugins)
        return state
