from .step_10_remove_legacy_agent import RemoveLegacyAgentStep
from .step_20_install_agent import InstallAgentStep
from .step_30_install_plugins import InstallPluginsStep
from .step_40_configure_agent import ConfigureAgentStep
from .step_50_enable_service import EnableServiceStep

__all__ = [
    "RemoveLegacyAgentStep",
    "InstallAgentStep",
    "InstallPluginsStep",
    "ConfigureAgentStep",
    "EnableServiceStep",
]
