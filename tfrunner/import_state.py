"""The ``terraform import`` command."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping, Optional

from .environment import REATTACH_ENV_VAR
from .options import (
    AllowMissingConfig,
    Backup,
    Config,
    Lock,
    LockTimeout,
    Reattach,
    ReattachConfig,
    State,
    StateOut,
    Var,
    VarFile,
    reattach_json,
)
from .runner import Command, Runner


@dataclass
class ImportConfig:
    """Settings of ``terraform import``."""

    backup: str = ""
    config: str = ""
    allow_missing_config: bool = False
    lock: bool = True
    lock_timeout: str = "0s"
    reattach_info: Optional[Mapping[str, ReattachConfig]] = None
    state: str = ""
    state_out: str = ""
    vars: list[str] = field(default_factory=list)
    var_files: list[str] = field(default_factory=list)

    def configure(self, option: Any) -> None:
        match option:
            case Backup(path=path):
                self.backup = path
            case Config(path=path):
                self.config = path
            case AllowMissingConfig(allow_missing_config=allow):
                self.allow_missing_config = allow
            case Lock(lock=lock):
                self.lock = lock
            case LockTimeout(timeout=timeout):
                self.lock_timeout = timeout
            case Reattach(info=info):
                self.reattach_info = info
            case State(path=path):
                self.state = path
            case StateOut(path=path):
                self.state_out = path
            case Var(assignment=assignment):
                self.vars.append(assignment)
            case VarFile(path=path):
                self.var_files.append(path)
            case _:
                raise TypeError(f"{type(option).__name__} is not an option of import")


def import_resource(tf: Runner, address: str, resource_id: str, *args: Any) -> None:
    """Import the existing resource ``resource_id`` into ``address``."""
    tf.run(import_command(tf, address, resource_id, *args))


def import_command(tf: Runner, address: str, resource_id: str, *args: Any) -> Command:
    """Build the ``import`` command from options."""
    c = ImportConfig()
    for option in args:
        c.configure(option)

    argv = ["import", "-no-color", "-input=false"]

    if c.backup:
        argv.append(f"-backup={c.backup}")
    if c.config:
        argv.append(f"-config={c.config}")
    if c.lock_timeout:
        argv.append(f"-lock-timeout={c.lock_timeout}")
    if c.state:
        argv.append(f"-state={c.state}")
    if c.state_out:
        argv.append(f"-state-out={c.state_out}")
    argv.extend(f"-var-file={path}" for path in c.var_files)

    argv.append(f"-lock={str(c.lock).lower()}")

    if c.allow_missing_config:
        argv.append("-allow-missing-config")

    for assignment in c.vars:
        argv.extend(("-var", assignment))

    argv.extend((address, resource_id))

    merge_env = {}
    if c.reattach_info is not None:
        merge_env[REATTACH_ENV_VAR] = reattach_json(c.reattach_info)
    return tf.build_command(merge_env, *argv)