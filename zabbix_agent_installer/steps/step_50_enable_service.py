from __future__ import annotations

import logging
from typing import Any, Dict

from ..lib.systemd import systemctl
from ..pipeline import StepContext, record_decision

logger = logging.getLogger(__name__)


class EnableServiceStep:
    step_id = "50_enable_service"

    def run(self, ctx: StepContext, state: Dict[str, Any]) -> Dict[str, Any]:
        service = ctx.config.agent_service
        logger.info("Enabling and starting %s service...", service)
        systemctl(ctx.privilege, "enable", service, runner=ctx.runner, dry_run=ctx.dry_run)
        systemctl(ctx.privilege, "restart", service, runner=ctx.runner, dry_run=ctx.dry_run)
        record_decision(state, "service", {"name": service, "enabled": True, "restarted": True})
        logger.info("%s is now running.", service)
        return state
