"""The ``terraform fmt`` command."""

from __future__ import annotations

import io
from dataclasses import dataclass
from typing import Any, Iterable, Optional

from .errors import TerraformExecError
from .options import Dir, Recursive
from .runner import Command, Runner, merge_writers
from .versions import TerraformVersion

_TF_0_7_7 = TerraformVersion.parse("0.7.7")
_TF_0_12_0 = TerraformVersion.parse("0.12.0")

_STDIN_PATH_ERROR = 'a path of "-" is not supported for this method, please use FormatString'


@dataclass
class FormatConfig:
    """Settings of ``terraform fmt``."""

    recursive: bool = False
    dir: str = ""

    def configure(self, option: Any) -> None:
        match option:
            case Recursive(recursive=recursive):
                self.recursive = recursive
            case Dir(path=path):
                self.dir = path
            case _:
                raise TypeError(f"{type(option).__name__} is not an option of fmt")


def _reject_stdin_dir(options: Iterable[Any]) -> None:
    for option in options:
        if isinstance(option, Dir) and option.path == "-":
            raise TerraformExecError(_STDIN_PATH_ERROR)


def format_string(tf: Runner, content: str) -> str:
    """Return ``content`` formatted by Terraform."""
    out = io.StringIO()
    format_stream(tf, content, out)
    return out.getvalue()


def format_stream(tf: Runner, unformatted: Any, formatted: Any) -> None:
    """Format what ``unformatted`` holds and write the result to ``formatted``."""
    command = format_command(tf, None, Dir("-"))
    command.stdin = unformatted
    command.stdout = merge_writers(command.stdout, formatted)
    tf.run(command)


def format_write(tf: Runner, *args: Any) -> None:
    """Rewrite the configuration files of the working or given directory in place."""
    _reject_stdin_dir(args)
    command = format_command(tf, ["-write=true", "-list=false", "-diff=false"], *args)
    tf.run(command)


def format_check(tf: Runner, *args: Any) -> tuple[bool, list[str]]:
    """Return whether the files are formatted, and the list of those that are not."""
    _reject_stdin_dir(args)
    command = format_command(
        tf, ["-write=false", "-list=true", "-diff=false", "-check=true"], *args
    )
    out = io.StringIO()
    command.stdout = merge_writers(command.stdout, out)

    try:
        tf.run(command)
    except TerraformExecError:
        if command.exit_code != 3:
            raise
        text = out.getvalue().replace("\r\n", "\n")
        files = [line.strip() for line in text.split("\n") if line.strip()]
        return False, files
    return True, []


def format_command(tf: Runner, args: Optional[Iterable[str]], *options: Any) -> Command:
    """Build the ``fmt`` command from extra flags and options."""
    try:
        tf.compatible(_TF_0_7_7, None)
    except TerraformExecError as err:
        raise TerraformExecError(f"fmt was first introduced in Terraform 0.7.7: {err}") from err

    config = FormatConfig()
    for option in options:
        if isinstance(option, Recursive):
            try:
                tf.compatible(_TF_0_12_0, None)
            except TerraformExecError as err:
                raise TerraformExecError(
                    f"-recursive was added to fmt in Terraform 0.12: {err}"
                ) from err
        config.configure(option)

    argv = ["fmt", "-no-color", *(args or [])]
    if config.recursive:
        argv.append("-recursive")
    if config.dir:
        argv.append(config.dir)
    return tf.build_command(None, *argv)