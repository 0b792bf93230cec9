"""The ``terraform init`` command."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping, Optional

from .environment import REATTACH_ENV_VAR
from .errors import TerraformExecError
from .options import (
    Backend,
    BackendConfig,
    Dir,
    ForceCopy,
    FromModule,
    Get,
    GetPlugins,
    Lock,
    LockTimeout,
    PluginDir,
    Reattach,
    ReattachConfig,
    Reconfigure,
    Upgrade,
    VerifyPlugins,
    reattach_json,
)
from .runner import Command, Runner
from .versions import TerraformVersion

_TF_0_15_0 = TerraformVersion.parse("0.15.0")

_REMOVED_IN_0_15 = (Lock, LockTimeout, VerifyPlugins, GetPlugins)


@dataclass
class InitConfig:
    """Settings of ``terraform init``."""

    backend: bool = True
    backend_config: list[str] = field(default_factory=list)
    dir: str = ""
    force_copy: bool = False
    from_module: str = ""
    get: bool = True
    get_plugins: bool = True
    lock: bool = True
    lock_timeout: str = "0s"
    plugin_dir: list[str] = field(default_factory=list)
    reattach_info: Optional[Mapping[str, ReattachConfig]] = None
    reconfigure: bool = False
    upgrade: bool = False
    verify_plugins: bool = True

    def configure(self, option: Any) -> None:
        match option:
            case Backend(backend=backend):
                self.backend = backend
            case BackendConfig(path=path):
                self.backend_config.append(path)
            case Dir(path=path):
                self.dir = path
            case ForceCopy(force_copy=force_copy):
                self.force_copy = force_copy
            case FromModule(source=source):
                self.from_module = source
            case Get(get=get):
                self.get = get
            case GetPlugins(get_plugins=get_plugins):
                self.get_plugins = get_plugins
            case Lock(lock=lock):
                self.lock = lock
            case LockTimeout(timeout=timeout):
                self.lock_timeout = timeout
            case PluginDir(plugin_dir=plugin_dir):
                self.plugin_dir.append(plugin_dir)
            case Reattach(info=info):
                self.reattach_info = info
            case Reconfigure(reconfigure=reconfigure):
                self.reconfigure = reconfigure
            case Upgrade(upgrade=upgrade):
                self.upgrade = upgrade
            case VerifyPlugins(verify_plugins=verify_plugins):
                self.verify_plugins = verify_plugins
            case _:
                raise TypeError(f"{type(option).__name__} is not an option of init")


def _before_0_15(tf: Runner) -> bool:
    try:
        tf.compatible(None, _TF_0_15_0)
    except TerraformExecError:
        return False
    return True


def _flag(value: bool) -> str:
    return str(value).lower()


def init(tf: Runner, *args: Any) -> None:
    """Prepare the working directory for use with Terraform."""
    tf.run(init_command(tf, *args))


def init_command(tf: Runner, *args: Any) -> Command:
    """Build the ``init`` command from options."""
    c = InitConfig()
    for option in args:
        if isinstance(option, _REMOVED_IN_0_15):
            try:
                tf.compatible(None, _TF_0_15_0)
            except TerraformExecError as err:
                raise TerraformExecError(
                    "-lock, -lock-timeout, -verify-plugins, and -get-plugins options "
                    f"are no longer available as of Terraform 0.15: {err}"
                ) from err
        c.configure(option)

    legacy = _before_0_15(tf)

    argv = ["init", "-no-color", "-input=false"]

    if c.from_module:
        argv.append(f"-from-module={c.from_module}")

    if legacy and c.lock_timeout:
        argv.append(f"-lock-timeout={c.lock_timeout}")

    argv.append(f"-backend={_flag(c.backend)}")
    argv.append(f"-get={_flag(c.get)}")
    argv.append(f"-upgrade={_flag(c.upgrade)}")

    if legacy:
        argv.append(f"-lock={_flag(c.lock)}")
        argv.append(f"-get-plugins={_flag(c.get_plugins)}")
        argv.append(f"-verify-plugins={_flag(c.verify_plugins)}")

    if c.force_copy:
        argv.append("-force-copy")
    if c.reconfigure:
        argv.append("-reconfigure")

    argv.extend(f"-backend-config={path}" for path in c.backend_config)
    argv.extend(f"-plugin-dir={path}" for path in c.plugin_dir)

    if c.dir:
        argv.append(c.dir)

    merge_env = {}
    if c.reattach_info is not None:
        merge_env[REATTACH_ENV_VAR] = reattach_json(c.reattach_info)
    return tf.build_command(merge_env, *argv)