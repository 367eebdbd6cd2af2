from __future__ import annotations

import logging
import shutil
from enum import Enum
from typing import Callable, Optional

logger = logging.getLogger(__name__)

DEFAULT_GPU_PROBE = "nvidia-smi"


class ConfigVariant(str, Enum):
    GPU = "gpu"
    NON_GPU = "non-gpu"


def probe_gpu(
    tool: str = DEFAULT_GPU_PROBE,
    *,
    which: Callable[[str], Optional[str]] = shutil.which,
) -> bool:
    """True if the GPU management tool is on PATH. The tool is never executed."""

    found = which(tool)
    if found:
        logger.info("%s detected at %s", tool, found)
        return True
    logger.info("No %s found", tool)
    return False


def select_config_variant(gpu_present: bool) -> ConfigVariant:
    return ConfigVariant.GPU if gpu_present else ConfigVariant.NON_GPU
