from __future__ import annotations

import logging
import shutil
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Protocol, Sequence

from .config import InstallerConfig
from .errors import StepFailed
from .lib.command import Runner, run_cmd
from .lib.pkg import DpkgPackageState, PackageState
from .lib.privilege import Privilege

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StepContext:
    """Everything a step needs; passed explicitly instead of globals."""

    config: InstallerConfig
    privilege: Privilege
    runner: Runner = run_cmd
    packages: Optional[PackageState] = None
    which: Callable[[str], Optional[str]] = shutil.which
    dry_run: bool = False

    @property
    def package_state(self) -> PackageState:
        if self.packages is not None:
            return self.packages
        return DpkgPackageState(self.runner)


class Step(Protocol):
    """A single idempotent step."""

    step_id: str

    def run(self, ctx: StepContext, state: Dict[str, Any]) -> Dict[str, Any]:
        ...


@dataclass(frozen=True)
class PipelineResult:
    state: Dict[str, Any]
    ran_steps: List[str] = field(default_factory=list)


def record_decision(state: Dict[str, Any], key: str, value: Any) -> None:
    state.setdefault("execution", {}).setdefault("decisions", {})[key] = value


def run_pipeline(
    *,
    ctx: StepContext,
    state: Dict[str, Any],
    steps: Sequence[Step],
) -> PipelineResult:
    """Run every step in order. Steps decide their own no-op conditions.

    The first failure stops the run and is re-raised as StepFailed.
    """

    ran: List[str] = []

    for step in steps:
        state.setdefault("execution", {})["current_step"] = step.step_id
        logger.info("Running step %s", step.step_id)
        try:
            state = step.run(ctx, state)
        except StepFailed:
            raise
        except Exception as e:
            raise StepFailed(step.step_id, e) from e
        ran.append(step.step_id)
        state.setdefault("execution", {}).setdefault("ran_steps", []).append(step.step_id)

    state.setdefault("execution", {})["current_step"] = None
    return PipelineResult(state=state, ran_steps=ran)
