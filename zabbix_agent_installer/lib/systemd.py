from __future__ import annotations

import logging

from .command import CommandError, Runner, run_cmd
from .privilege import Privilege

logger = logging.getLogger(__name__)


def systemctl(
    privilege: Privilege,
    action: str,
    unit: str,
    *,
    runner: Runner = run_cmd,
    tolerate: bool = False,
    dry_run: bool = False,
) -> bool:
    """Run `systemctl <action> <unit>`.

    With tolerate=True a failure is logged and False returned instead of raising.
    """

    argv = privilege.wrap(["systemctl", action, unit])
    if not tolerate:
        runner(argv, dry_run=dry_run)
        return True

    try:
        r = runner(argv, check=False, dry_run=dry_run)
    except CommandError as e:
        logger.info("Ignoring failure: %s", e)
        return False
    if r.returncode != 0:
        logger.info("Ignoring failure: systemctl %s %s exited %s", action, unit, r.returncode)
        return False
    return True
