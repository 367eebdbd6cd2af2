from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict

import yaml

logger = logging.getLogger(__name__)

DEFAULT_REPORT_PATH = "/var/lib/zabbix-agent-installer/last_run.json"


def _detect_format(path: Path) -> str:
    ext = path.suffix.lower().lstrip(".")
    if ext in {"yaml", "yml"}:
        return "yaml"
    # Default to JSON for unknown extensions.
    return "json"


def new_report() -> Dict[str, Any]:
    return {
        "execution": {
            "privilege": None,
            "current_step": None,
            "decisions": {},
            "ran_steps": [],
            "errors": [],
        },
    }


def record_error(state: Dict[str, Any], step: Any, error: BaseException) -> None:
    state.setdefault("execution", {}).setdefault("errors", []).append({"step": step, "error": str(error)})


def save_report(path: str, state: Dict[str, Any]) -> str:
    """Write the run report. Only a record of the run; never read back to skip work."""

    p = Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)

    if _detect_format(p) == "yaml":
        p.write_text(yaml.safe_dump(state, sort_keys=False), encoding="utf-8")
    else:
        p.write_text(json.dumps(state, indent=2, sort_keys=True) + "\n", encoding="utf-8")
    return str(p)
