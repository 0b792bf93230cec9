"""The ``terraform get`` command."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from .options import Dir, Update
from .runner import Command, Runner


@dataclass
class GetConfig:
    """Settings of ``terraform get``."""

    dir: str = ""
    update: bool = False

    def configure(self, option: Any) -> None:
        if isinstance(option, Dir):
            self.dir = option.path
        elif isinstance(option, Update):
            self.update = option.update
        else:
            raise TypeError(f"get does not accept {type(option).__name__}")


def get(tf: Runner, *args: Any) -> None:
    """Download and update modules."""
    tf.run(get_command(tf, *args))


def get_command(tf: Runner, *args: Any) -> Command:
    """Build the ``get`` command from options."""
    settings = GetConfig()
    for option in args:
        settings.configure(option)

    positional = [settings.dir] if settings.dir else []
    update_flag = "-update=" + ("true" if settings.update else "false")
    return tf.build_command(None, "get", "-no-color", update_flag, *positional)