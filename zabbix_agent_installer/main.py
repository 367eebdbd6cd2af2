from __future__ import annotations

import argparse
import logging
import shutil
from typing import Any, Callable, Dict, Optional

from .config import load_config
from .errors import PrivilegeError, StepFailed
from .lib.command import Runner, run_cmd
from .lib.pkg import PackageState
from .lib.privilege import PrivilegeMode, resolve_privilege
from .logging_utils import DEFAULT_LOG_PATH, configure_logging
from .pipeline import StepContext, run_pipeline
from .report import DEFAULT_REPORT_PATH, new_report, record_error, save_report
from .steps import (
    ConfigureAgentStep,
    EnableServiceStep,
    InstallAgentStep,
    InstallPluginsStep,
    RemoveLegacyAgentStep,
)

logger = logging.getLogger(__name__)

BANNER = "=" * 70


def build_steps():
    return [
        RemoveLegacyAgentStep(),
        InstallAgentStep(),
        InstallPluginsStep(),
        ConfigureAgentStep(),
        EnableServiceStep(),
    ]


def run(
    *,
    config_path: Optional[str] = None,
    report_path: Optional[str] = DEFAULT_REPORT_PATH,
    dry_run: bool = False,
    runner: Runner = run_cmd,
    packages: Optional[PackageState] = None,
    which: Callable[[str], Optional[str]] = shutil.which,
    euid: Optional[int] = None,
) -> Dict[str, Any]:
    """Install and configure Zabbix Agent 2 on this host.

    Raises on the first failure; StepFailed carries the id of the failing step.
    """

    state = new_report()
    exe = state["execution"]
    exe["dry_run"] = dry_run

    try:
        cfg = load_config(config_path)
        privilege = resolve_privilege(euid=euid, which=which, helper=cfg.elevation_helper)
        exe["privilege"] = privilege.mode.value

        ctx = StepContext(
            config=cfg,
            privilege=privilege,
            runner=runner,
            packages=packages,
            which=which,
            dry_run=dry_run,
        )
        state = run_pipeline(ctx=ctx, state=state, steps=build_steps()).state
        return state
    except StepFailed as e:
        record_error(state, e.step_id, e.cause)
        raise
    except PrivilegeError as e:
        exe["privilege"] = PrivilegeMode.UNAVAILABLE.value
        record_error(state, None, e)
        raise
    except Exception as e:
        record_error(state, None, e)
        raise
    finally:
        if report_path:
            try:
                save_report(report_path, state)
            except OSError as e:
                logger.warning("Could not write run report %s: %s", report_path, e)


def main(argv: Optional[list[str]] = None) -> int:
    p = argparse.ArgumentParser(
        prog="zabbix-agent-installer",
        description="Replace zabbix-agent with Zabbix Agent 2 and apply the GPU or non-GPU config.",
    )
    p.add_argument("--config", default=None, help="YAML file overriding versions, packages and URLs")
    p.add_argument("--log", default=DEFAULT_LOG_PATH, help="Path to installer log")
    p.add_argument("--report", default=DEFAULT_REPORT_PATH, help="Path to run report (json|yaml)")
    p.add_argument("--dry-run", action="store_true", help="Log commands without running them")
    p.add_argument("--verbose", action="store_true", help="Log command output")

    args = p.parse_args(argv)

    configure_logging(log_path=args.log, level=logging.DEBUG if args.verbose else logging.INFO)

    try:
        run(config_path=args.config, report_path=args.report, dry_run=bool(args.dry_run))
    except StepFailed as e:
        logger.error("Step %s failed: %s", e.step_id, e.cause)
        return 1
    except Exception as e:
        logger.error("Installer failed: %s", e)
        logger.debug("Traceback", exc_info=True)
        return 1

    logger.info(BANNER)
    logger.info("All done! Zabbix Agent2 is installed, configured, and running.")
    logger.info(BANNER)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
