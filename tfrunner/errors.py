"""Exceptions raised when running Terraform commands."""

from __future__ import annotations

import json
import signal


class TerraformExecError(Exception):
    """Base class of every error raised by this package."""


class NoSuitableBinaryError(TerraformExecError):
    """No usable Terraform executable could be located."""

    def __init__(self, err: BaseException):
        super().__init__(f"no suitable terraform binary could be found: {err}")
        self.err = err
        self.__cause__ = err


class VersionMismatchError(TerraformExecError):
    """The detected Terraform version does not support the requested command or flag."""

    def __init__(self, min_inclusive: str, max_exclusive: str, actual: str):
        super().__init__(
            f"unexpected version {actual} (min: {min_inclusive}, max: {max_exclusive})"
        )
        self.min_inclusive = min_inclusive
        self.max_exclusive = max_exclusive
        self.actual = actual


class ManualEnvVarError(TerraformExecError):
    """An environment variable that must be set through an option was set by hand."""

    def __init__(self, name: str):
        super().__init__(f"manual setting of env var {json.dumps(name)} detected")
        self.name = name


def _exit_description(exit_code: int) -> str:
    if exit_code < 0:
        try:
            desc = signal.strsignal(-exit_code)
        except ValueError:
            desc = None
        return f"signal: {(desc or str(-exit_code)).lower()}"
    return f"exit status {exit_code}"


class CommandFailedError(TerraformExecError):
    """A Terraform command exited unsuccessfully."""

    def __init__(self, exit_code: int, stderr: str = ""):
        super().__init__(f"{_exit_description(exit_code)}\n{stderr}")
        self.exit_code = exit_code
        self.stderr = stderr


class CommandInterruptedError(TerraformExecError):
    """A Terraform command was stopped before it finished."""

    def __init__(self, message: str = "", cause: BaseException | None = None):
        if not message and cause is not None:
            message = str(cause)
        super().__init__(message)
        self.cause = cause
        if cause is not None:
            self.__cause__ = cause


class CommandCancelledError(CommandInterruptedError):
    """A Terraform command was cancelled."""


class CommandDeadlineError(CommandInterruptedError):
    """A Terraform command ran past its deadline."""