from __future__ import annotations

import logging
import os
import shutil
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Optional, Sequence

from ..errors import PrivilegeError

logger = logging.getLogger(__name__)


class PrivilegeMode(str, Enum):
    DIRECT = "direct"
    ELEVATED = "elevated"
    # Never held by a Privilege: resolve_privilege raises PrivilegeError, and the
    # run report records this mode for that failure.
    UNAVAILABLE = "unavailable"


@dataclass(frozen=True)
class Privilege:
    mode: PrivilegeMode
    prefix: tuple[str, ...] = field(default_factory=tuple)

    def wrap(self, argv: Sequence[str]) -> list[str]:
        return [*self.prefix, *argv]


ROOT = Privilege(mode=PrivilegeMode.DIRECT)


def resolve_privilege(
    *,
    euid: Optional[int] = None,
    which: Callable[[str], Optional[str]] = shutil.which,
    helper: str = "sudo",
) -> Privilege:
    """Decide how privileged commands are run.

    Root runs commands as-is; anyone else needs the elevation helper on PATH.
    Raises PrivilegeError when neither is available.
    """

    if euid is None:
        euid = os.geteuid()

    if euid == 0:
        return ROOT

    if which(helper):
        logger.info("Not running as root. Attempting to use %s...", helper)
        return Privilege(mode=PrivilegeMode.ELEVATED, prefix=(helper,))

    raise PrivilegeError(f"You must run this installer as root or have {helper} installed.")
