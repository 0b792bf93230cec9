"""The ``terraform force-unlock`` command."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from .errors import TerraformExecError
from .options import Dir
from .runner import Command, Runner
from .versions import TerraformVersion

_DIR_REMOVED_IN = TerraformVersion.parse("0.15.0")


@dataclass
class ForceUnlockConfig:
    """Settings of ``terraform force-unlock``."""

    dir: str = ""

    def configure(self, option: Any) -> None:
        if not isinstance(option, Dir):
            raise TypeError(f"force-unlock does not accept {type(option).__name__}")
        self.dir = option.path


def force_unlock(tf: Runner, lock_id: str, *args: Any) -> None:
    """Remove the state lock with ``lock_id``."""
    tf.run(force_unlock_command(tf, lock_id, *args))


def force_unlock_command(tf: Runner, lock_id: str, *args: Any) -> Command:
    """Build the ``force-unlock`` command from options."""
    settings = ForceUnlockConfig()
    for option in args:
        settings.configure(option)

    positional = [lock_id]
    if settings.dir:
        try:
            tf.compatible(None, _DIR_REMOVED_IN)
        except TerraformExecError as err:
            raise TerraformExecError("[DIR] option was removed in Terraform v0.15.0") from err
        positional.append(settings.dir)
    return tf.build_command(None, "force-unlock", "-no-color", "-force", *positional)