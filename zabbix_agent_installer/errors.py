from __future__ import annotations


class InstallerError(RuntimeError):
    """Base class for failures that abort the installer."""


class PrivilegeError(InstallerError):
    pass


class ConfigValidationError(InstallerError):
    pass


class StepFailed(InstallerError):
    """A pipeline step raised; keeps the step id for diagnostics."""

    def __init__(self, step_id: str, cause: BaseException):
        super().__init__(f"{step_id}: {cause}")
        self.step_id = step_id
        self.cause = cause
