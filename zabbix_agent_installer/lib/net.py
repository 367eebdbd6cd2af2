from __future__ import annotations

import logging
from typing import Optional

from .command import Runner, run_cmd
from .privilege import Privilege

logger = logging.getLogger(__name__)


def download(
    url: str,
    dest: str,
    *,
    privilege: Privilege,
    runner: Runner = run_cmd,
    timeout: Optional[int] = None,
    dry_run: bool = False,
) -> None:
    """Fetch url into dest with wget, overwriting any previous content."""

    argv = ["wget", "-q"]
    if timeout:
        argv.append(f"--timeout={int(timeout)}")
    argv += ["-O", dest, url]
    logger.info("Fetching %s -> %s", url, dest)
    runner(privilege.wrap(argv), dry_run=dry_run)
