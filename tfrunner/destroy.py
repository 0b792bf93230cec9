"""The ``terraform destroy`` command."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping, Optional

from .environment import REATTACH_ENV_VAR
from .errors import TerraformExecError
from .options import (
    Backup,
    Dir,
    Lock,
    LockTimeout,
    Parallelism,
    Reattach,
    ReattachConfig,
    Refresh,
    State,
    StateOut,
    Target,
    Var,
    VarFile,
    reattach_json,
)
from .runner import Command, Runner
from .versions import TerraformVersion

_TF_0_15_3 = TerraformVersion.parse("0.15.3")


@dataclass
class DestroyConfig:
    """Settings of ``terraform destroy``."""

    backup: str = ""
    dir: str = ""
    lock: bool = True
    lock_timeout: str = "0s"
    parallelism: int = 10
    reattach_info: Optional[Mapping[str, ReattachConfig]] = None
    refresh: bool = True
    state: str = ""
    state_out: str = ""
    targets: list[str] = field(default_factory=list)
    vars: list[str] = field(default_factory=list)
    var_files: list[str] = field(default_factory=list)

    def configure(self, option: Any) -> None:
        match option:
            case Dir(path=path):
                self.dir = path
            case Parallelism(parallelism=parallelism):
                self.parallelism = parallelism
            case Backup(path=path):
                self.backup = path
            case Target(target=target):
                self.targets.append(target)
            case LockTimeout(timeout=timeout):
                self.lock_timeout = timeout
            case State(path=path):
                self.state = path
            case StateOut(path=path):
                self.state_out = path
            case VarFile(path=path):
                self.var_files.append(path)
            case Lock(lock=lock):
                self.lock = lock
            case Refresh(refresh=refresh):
                self.refresh = refresh
            case Var(assignment=assignment):
                self.vars.append(assignment)
            case Reattach(info=info):
                self.reattach_info = info
            case _:
                raise TypeError(f"{type(option).__name__} is not an option of destroy")


def destroy(tf: Runner, *args: Any) -> None:
    """Destroy all managed infrastructure without asking for approval."""
    tf.run(destroy_command(tf, *args))


def destroy_json(tf: Runner, writer: Any, *args: Any) -> None:
    """Destroy with ``-json``, writing machine-readable output to ``writer``."""
    try:
        tf.compatible(_TF_0_15_3, None)
    except TerraformExecError as err:
        raise TerraformExecError(f"terraform destroy -json was added in 0.15.3: {err}") from err

    tf.stdout = writer
    tf.run(destroy_json_command(tf, *args))


def destroy_command(tf: Runner, *args: Any) -> Command:
    """Build the ``destroy`` command from options."""
    config = _configure(args)
    return _build_command(tf, config, _build_args(config))


def destroy_json_command(tf: Runner, *args: Any) -> Command:
    """Build the ``destroy -json`` command from options."""
    config = _configure(args)
    argv = _build_args(config)
    argv.append("-json")
    return _build_command(tf, config, argv)


def _configure(options: tuple[Any, ...]) -> DestroyConfig:
    config = DestroyConfig()
    for option in options:
        config.configure(option)
    return config


def _build_args(c: DestroyConfig) -> list[str]:
    argv = ["destroy", "-no-color", "-auto-approve", "-input=false"]

    if c.backup:
        argv.append(f"-backup={c.backup}")
    if c.lock_timeout:
        argv.append(f"-lock-timeout={c.lock_timeout}")
    if c.state:
        argv.append(f"-state={c.state}")
    if c.state_out:
        argv.append(f"-state-out={c.state_out}")
    argv.extend(f"-var-file={path}" for path in c.var_files)

    argv.append(f"-lock={str(c.lock).lower()}")
    argv.append(f"-parallelism={c.parallelism}")
    argv.append(f"-refresh={str(c.refresh).lower()}")

    argv.extend(f"-target={target}" for target in c.targets)
    for assignment in c.vars:
        argv.extend(("-var", assignment))
    return argv


def _build_command(tf: Runner, c: DestroyConfig, argv: list[str]) -> Command:
    if c.dir:
        argv.append(c.dir)
    merge_env = {}
    if c.reattach_info is not None:
        merge_env[REATTACH_ENV_VAR] = reattach_json(c.reattach_info)
    return tf.build_command(merge_env, *argv)