from __future__ import annotations

import logging
from typing import Any, Dict

from ..config import InstallerConfig
from ..errors import ConfigValidationError
from ..lib.fs import is_nonempty
from ..lib.hwdetect import ConfigVariant, probe_gpu, select_config_variant
from ..lib.net import download
from ..pipeline import StepContext, record_decision

logger = logging.getLogger(__name__)


def config_url_for(cfg: InstallerConfig, variant: ConfigVariant) -> str:
    if variant is ConfigVariant.GPU:
        return cfg.gpu_config_url
    return cfg.non_gpu_config_url


class ConfigureAgentStep:
    step_id = "40_configure_agent"

    def run(self, ctx: StepContext, state: Dict[str, Any]) -> Dict[str, Any]:
        cfg = ctx.config
        target = cfg.agent_config_path

        logger.info("Checking for %s to determine GPU presence...", cfg.gpu_probe)
        variant = select_config_variant(probe_gpu(cfg.gpu_probe, which=ctx.which))
        url = config_url_for(cfg, variant)
        logger.info("Using %s config: %s", variant.value, url)

        record_decision(state, "config_variant", variant.value)
        record_decision(state, "config_url", url)

        download(
            url,
            target,
            privilege=ctx.privilege,
            runner=ctx.runner,
            timeout=cfg.download_timeout,
            dry_run=ctx.dry_run,
        )

        if ctx.dry_run:
            logger.info("Dry run: not validating %s", target)
            return state

        if not is_nonempty(target):
            raise ConfigValidationError(f"Failed to download or write the new Zabbix Agent2 config ({target}).")

        logger.info("Successfully updated %s.", target)
        return state
