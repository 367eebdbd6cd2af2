from __future__ import annotations

import logging
from pathlib import Path
from typing import Sequence

from .command import CommandError, Runner, run_cmd
from .privilege import Privilege

logger = logging.getLogger(__name__)


def remove_files(
    paths: Sequence[str],
    *,
    privilege: Privilege,
    runner: Runner = run_cmd,
    dry_run: bool = False,
) -> bool:
    """Best-effort `rm -f`; failures are logged, never raised."""
    if not paths:
        return True
    try:
        r = runner(privilege.wrap(["rm", "-f", *paths]), check=False, dry_run=dry_run)
    except CommandError as e:
        logger.warning("Could not remove %s: %s", ", ".join(paths), e)
        return False
    if r.returncode != 0:
        logger.warning("Could not remove %s (rm exited %s)", ", ".join(paths), r.returncode)
        return False
    return True


def remove_dirs(
    paths: Sequence[str],
    *,
    privilege: Privilege,
    runner: Runner = run_cmd,
    dry_run: bool = False,
) -> bool:
    if not paths:
        return True
    try:
        r = runner(privilege.wrap(["rm", "-rf", *paths]), check=False, dry_run=dry_run)
    except CommandError as e:
        logger.warning("Could not remove %s: %s", ", ".join(paths), e)
        return False
    if r.returncode != 0:
        logger.warning("Could not remove %s (rm exited %s)", ", ".join(paths), r.returncode)
        return False
    return True


def is_nonempty(path: str) -> bool:
    p = Path(path)
    try:
        return p.is_file() and p.stat().st_size > 0
    except OSError:
        return False
