from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional, Tuple

DEFAULT_LOG_PATH = "/var/log/zabbix-agent-installer.log"


def _open_log_file(log_path: str) -> Tuple[Optional[logging.Handler], Optional[str]]:
    """Open log_path, else a file in the working directory, else nothing."""

    try:
        Path(log_path).parent.mkdir(parents=True, exist_ok=True)
        return logging.FileHandler(log_path), log_path
    except OSError:
        pass

    fallback = str(Path.cwd() / "zabbix-agent-installer.log")
    try:
        return logging.FileHandler(fallback), fallback
    except OSError:
        return None, None


def configure_logging(
    log_path: str = DEFAULT_LOG_PATH,
    level: int = logging.INFO,
    also_console: bool = True,
) -> Optional[str]:
    """Configure logging for a run.

    Every command and decision goes to log_path. When that location is not
    writable (non-root runs using sudo only for commands), fall back to a file
    in the working directory. If neither is writable, log to the console only.

    Returns the actual file path being used, or None.
    """

    root = logging.getLogger()
    root.setLevel(level)

    if getattr(root, "_zbx_installer_configured", False):
        return getattr(root, "_zbx_installer_log_path", log_path)

    fmt = logging.Formatter(
        fmt="%(asctime)s %(levelname)s %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S%z",
    )

    file_handler, chosen_path = _open_log_file(log_path)
    if file_handler is not None:
        file_handler.setFormatter(fmt)
        root.addHandler(file_handler)

    if also_console or file_handler is None:
        console = logging.StreamHandler()
        console.setFormatter(logging.Formatter("%(levelname)s: %(message)s"))
        root.addHandler(console)

    setattr(root, "_zbx_installer_configured", True)
    setattr(root, "_zbx_installer_log_path", chosen_path)

    log = logging.getLogger(__name__)
    if chosen_path is None:
        log.warning("No writable log file (tried %s and the working directory); logging to console only", log_path)
    else:
        log.debug("Logging initialized (requested=%s, actual=%s)", log_path, chosen_path)
    return chosen_path
