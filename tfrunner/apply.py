"""The ``terraform apply`` command."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping, Optional

from .environment import REATTACH_ENV_VAR
from .errors import TerraformExecError
from .options import (
    Backup,
    Destroy,
    DirOrPlan,
    Lock,
    LockTimeout,
    Parallelism,
    Reattach,
    ReattachConfig,
    Refresh,
    RefreshOnly,
    Replace,
    State,
    StateOut,
    Target,
    Var,
    VarFile,
    reattach_json,
)
from .runner import Command, Runner
from .versions import TerraformVersion

_TF_0_15_2 = TerraformVersion.parse("0.15.2")
_TF_0_15_3 = TerraformVersion.parse("0.15.3")
_TF_0_15_4 = TerraformVersion.parse("0.15.4")

# option type -> (config attribute, option attribute)
_ASSIGNED = {
    Parallelism: ("parallelism", "parallelism"),
    Backup: ("backup", "path"),
    LockTimeout: ("lock_timeout", "timeout"),
    State: ("state", "path"),
    StateOut: ("state_out", "path"),
    Lock: ("lock", "lock"),
    Refresh: ("refresh", "refresh"),
    RefreshOnly: ("refresh_only", "refresh_only"),
    DirOrPlan: ("dir_or_plan", "path"),
    Reattach: ("reattach_info", "info"),
    Destroy: ("destroy", "destroy"),
}
_APPENDED = {
    Target: ("targets", "target"),
    VarFile: ("var_files", "path"),
    Replace: ("replace_addrs", "address"),
    Var: ("vars", "assignment"),
}


@dataclass
class ApplyConfig:
    """Settings of ``terraform apply``."""

    backup: str = ""
    destroy: bool = False
    dir_or_plan: str = ""
    lock: bool = True
    lock_timeout: str = ""
    parallelism: int = 10
    reattach_info: Optional[Mapping[str, ReattachConfig]] = None
    refresh: bool = True
    refresh_only: bool = False
    replace_addrs: list[str] = field(default_factory=list)
    state: str = ""
    state_out: str = ""
    targets: list[str] = field(default_factory=list)
    vars: list[str] = field(default_factory=list)
    var_files: list[str] = field(default_factory=list)

    def configure(self, option: Any) -> None:
        kind = type(option)
        if kind in _ASSIGNED:
            target, source = _ASSIGNED[kind]
            setattr(self, target, getattr(option, source))
        elif kind in _APPENDED:
            target, source = _APPENDED[kind]
            getattr(self, target).append(getattr(option, source))
        else:
            raise TypeError(f"apply does not accept {kind.__name__}")


def apply(tf: Runner, *args: Any) -> None:
    """Apply the configuration without asking for approval."""
    tf.run(apply_command(tf, *args))


def apply_json(tf: Runner, writer: Any, *args: Any) -> None:
    """Apply with ``-json``, writing machine-readable output to ``writer``."""
    _require(tf, _TF_0_15_3, "terraform apply -json was added in 0.15.3")
    tf.stdout = writer
    tf.run(apply_json_command(tf, *args))


def apply_command(tf: Runner, *args: Any) -> Command:
    """Build the ``apply`` command from options."""
    config = _configure(args)
    return _build_command(tf, config, _build_args(tf, config))


def apply_json_command(tf: Runner, *args: Any) -> Command:
    """Build the ``apply -json`` command from options."""
    config = _configure(args)
    return _build_command(tf, config, [*_build_args(tf, config), "-json"])


def _configure(options: tuple[Any, ...]) -> ApplyConfig:
    config = ApplyConfig()
    for option in options:
        config.configure(option)
    return config


def _require(tf: Runner, minimum: TerraformVersion, message: str) -> None:
    try:
        tf.compatible(minimum, None)
    except TerraformExecError as err:
        raise TerraformExecError(f"{message}: {err}") from err


def _build_args(tf: Runner, c: ApplyConfig) -> list[str]:
    argv = ["apply", "-no-color", "-auto-approve", "-input=false"]

    for flag, value in (
        ("backup", c.backup),
        ("lock-timeout", c.lock_timeout),
        ("state", c.state),
        ("state-out", c.state_out),
    ):
        if value:
            argv.append(f"-{flag}={value}")
    argv.extend(f"-var-file={path}" for path in c.var_files)

    argv.append(f"-lock={str(c.lock).lower()}")
    argv.append(f"-parallelism={c.parallelism}")
    argv.append(f"-refresh={str(c.refresh).lower()}")

    if c.refresh_only:
        _require(tf, _TF_0_15_4, "refresh-only option was introduced in Terraform 0.15.4")
        if not c.refresh:
            raise TerraformExecError("you cannot use refresh=false in refresh-only planning mode")
        argv.append("-refresh-only")

    if c.replace_addrs:
        _require(tf, _TF_0_15_2, "replace option was introduced in Terraform 0.15.2")
        argv.extend(f"-replace={addr}" for addr in c.replace_addrs)
    if c.destroy:
        _require(tf, _TF_0_15_2, "-destroy option was introduced in Terraform 0.15.2")
        argv.append("-destroy")

    argv.extend(f"-target={target}" for target in c.targets)
    for assignment in c.vars:
        argv.extend(("-var", assignment))
    return argv


def _build_command(tf: Runner, c: ApplyConfig, argv: list[str]) -> Command:
    if c.dir_or_plan:
        argv.append(c.dir_or_plan)
    merge_env = {}
    if c.reattach_info is not None:
        merge_env[REATTACH_ENV_VAR] = reattach_json(c.reattach_info)
    return tf.build_command(merge_env, *argv)