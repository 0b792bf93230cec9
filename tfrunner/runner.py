"""Building and running Terraform CLI subprocesses."""

from __future__ import annotations

import io
import json
import logging
import os
import subprocess
import sys
import threading
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, Mapping, Optional, Union

from .environment import (
    APPEND_USER_AGENT_ENV_VAR,
    AUTOMATION_ENV_VAR,
    CHECKPOINT_DISABLE_ENV_VAR,
    DISABLE_PLUGIN_TLS_ENV_VAR,
    LOG_CORE_ENV_VAR,
    LOG_ENV_VAR,
    LOG_PATH_ENV_VAR,
    LOG_PROVIDER_ENV_VAR,
    SKIP_PROVIDER_VERIFY_ENV_VAR,
    WORKSPACE_ENV_VAR,
    merge_user_agent,
)
from .errors import (
    CommandDeadlineError,
    CommandFailedError,
    TerraformExecError,
    VersionMismatchError,
)
from .versions import TerraformVersion, module_version

VersionLike = Union[str, TerraformVersion, None]

# On Linux the child gets its own process group so signals aimed at ours
# do not reach it directly.
_NEW_SESSION = sys.platform.startswith("linux")

_DEADLINE_MESSAGE = "context deadline exceeded"


class _Discard:
    def write(self, data: Any) -> int:
        return len(data)


class _MultiWriter:
    def __init__(self, writers: list[Any]):
        self._writers = writers

    def write(self, data: Any) -> int:
        for writer in self._writers:
            writer.write(data)
        return len(data)


def merge_writers(*args: Any) -> Any:
    """Combine writers, skipping ``None``; with none left, writes are discarded."""
    writers = [w for w in args if w is not None]
    if not writers:
        return _Discard()
    if len(writers) == 1:
        return writers[0]
    return _MultiWriter(writers)


def write_output(reader: Any, writer: Any) -> None:
    """Copy ``reader`` to ``writer`` line by line until end of input."""
    while True:
        line = reader.readline()
        if not line:
            return
        if isinstance(line, bytes):
            line = line.decode("utf-8", errors="replace")
        writer.write(line)


def _pump(reader: Any, writer: Any) -> None:
    try:
        write_output(reader, writer)
    except (OSError, ValueError):
        # The pipe closes under us when the process is killed.
        pass


def _feed(pipe: Any, source: Any) -> None:
    try:
        if isinstance(source, str):
            pipe.write(source.encode("utf-8"))
        elif isinstance(source, (bytes, bytearray)):
            pipe.write(bytes(source))
        else:
            while True:
                chunk = source.read(65536)
                if not chunk:
                    break
                pipe.write(chunk.encode("utf-8") if isinstance(chunk, str) else chunk)
    except (BrokenPipeError, ValueError):
        pass
    finally:
        try:
            pipe.close()
        except OSError:
            pass


def _as_version(value: VersionLike) -> Optional[TerraformVersion]:
    if value is None or isinstance(value, TerraformVersion):
        return value
    return TerraformVersion.parse(value)


@dataclass
class Command:
    """A Terraform invocation ready to run."""

    exec_path: str
    args: list[str]
    env: Optional[dict[str, str]] = None
    working_dir: Optional[str] = None
    stdin: Any = None
    stdout: Any = None
    exit_code: Optional[int] = field(default=None, compare=False)

    @property
    def argv(self) -> list[str]:
        return [self.exec_path, *self.args]

    def __str__(self) -> str:
        return " ".join(self.argv)


class Runner:
    """Runs Terraform commands in a working directory."""

    def __init__(self, working_dir: Any, exec_path: str, version: VersionLike = None):
        self.working_dir = os.fspath(working_dir) if working_dir else None
        self.exec_path = exec_path
        self.version = _as_version(version)
        self.env: Optional[dict[str, str]] = None
        self.stdout: Any = None
        self.stderr: Any = None
        self.logger = logging.getLogger("tfrunner")
        self.log = ""
        self.log_core = ""
        self.log_path = ""
        self.log_provider = ""
        self.append_user_agent = ""
        self.disable_plugin_tls = False
        self.skip_provider_verify = False
        self.timeout: Optional[float] = None

    def compatible(self, min_inclusive: VersionLike, max_exclusive: VersionLike) -> None:
        """Raise unless the Terraform version lies in ``[min_inclusive, max_exclusive)``."""
        low = _as_version(min_inclusive)
        high = _as_version(max_exclusive)
        if self.version is None:
            raise TerraformExecError("unable to check compatibility: Terraform version unknown")
        core = self.version.core()
        if (low is not None and core < low) or (high is not None and core >= high):
            raise VersionMismatchError(
                str(low) if low is not None else "-",
                str(high) if high is not None else "-",
                str(self.version),
            )

    def build_env(self, merge_env: Optional[Mapping[str, str]]) -> dict[str, str]:
        """Return the environment for a Terraform subprocess."""
        env = dict(os.environ) if self.env is None else dict(self.env)
        env.update(merge_env or {})

        env.setdefault(CHECKPOINT_DISABLE_ENV_VAR, os.environ.get(CHECKPOINT_DISABLE_ENV_VAR, ""))

        env[APPEND_USER_AGENT_ENV_VAR] = merge_user_agent(
            os.environ.get(APPEND_USER_AGENT_ENV_VAR, ""),
            self.append_user_agent,
            f"tfrunner/{module_version()}",
        )

        if not self.log_path:
            # keep Terraform logging out of our stderr capture
            env[LOG_ENV_VAR] = ""
            env[LOG_CORE_ENV_VAR] = ""
            env[LOG_PATH_ENV_VAR] = ""
            env[LOG_PROVIDER_ENV_VAR] = ""
        else:
            env[LOG_ENV_VAR] = self.log
            env[LOG_CORE_ENV_VAR] = self.log_core
            env[LOG_PATH_ENV_VAR] = self.log_path
            env[LOG_PROVIDER_ENV_VAR] = self.log_provider

        env[AUTOMATION_ENV_VAR] = "1"
        # workspaces are switched through the workspace commands only
        env.pop(WORKSPACE_ENV_VAR, None)

        if self.disable_plugin_tls:
            env[DISABLE_PLUGIN_TLS_ENV_VAR] = "1"
        if self.skip_provider_verify:
            env[SKIP_PROVIDER_VERIFY_ENV_VAR] = "1"
        return env

    def build_command(self, merge_env: Optional[Mapping[str, str]], *args: str) -> Command:
        """Build a command running Terraform with ``args``."""
        command = Command(
            exec_path=self.exec_path,
            args=list(args),
            env=self.build_env(merge_env),
            working_dir=self.working_dir,
        )
        self.logger.info("[INFO] running Terraform command: %s", command)
        return command

    def run(self, command: Command, timeout: Optional[float] = None) -> None:
        """Run ``command``, streaming its output; raise if it fails or times out."""
        if timeout is None:
            timeout = self.timeout
        if timeout is not None and timeout <= 0:
            raise CommandDeadlineError(_DEADLINE_MESSAGE)

        stdout_writer = merge_writers(command.stdout, self.stdout)
        err_buf = io.StringIO()
        stderr_writer = merge_writers(self.stderr, err_buf)

        proc = subprocess.Popen(
            command.argv,
            cwd=command.working_dir,
            env=command.env,
            stdin=subprocess.PIPE if command.stdin is not None else subprocess.DEVNULL,
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
            start_new_session=_NEW_SESSION,
        )
        threads = [
            threading.Thread(target=_pump, args=(proc.stdout, stdout_writer), daemon=True),
            threading.Thread(target=_pump, args=(proc.stderr, stderr_writer), daemon=True),
        ]
        if command.stdin is not None:
            threads.append(
                threading.Thread(target=_feed, args=(proc.stdin, command.stdin), daemon=True)
            )
        for thread in threads:
            thread.start()

        try:
            try:
                proc.wait(timeout=timeout)
            except subprocess.TimeoutExpired as exc:
                proc.kill()
                proc.wait()
                for thread in threads:
                    thread.join()
                command.exit_code = proc.returncode
                raise CommandDeadlineError(_DEADLINE_MESSAGE, exc)
            for thread in threads:
                thread.join()
        finally:
            for pipe in (proc.stdout, proc.stderr):
                if pipe is not None:
                    pipe.close()

        command.exit_code = proc.returncode
        if proc.returncode != 0:
            raise CommandFailedError(proc.returncode, err_buf.getvalue())

    def run_json(self, command: Command, timeout: Optional[float] = None) -> Any:
        """Run ``command`` and decode the first JSON value it prints."""
        out_buf = io.StringIO()
        command.stdout = merge_writers(command.stdout, out_buf)
        self.run(command, timeout)
        text = out_buf.getvalue().lstrip()
        decoder = json.JSONDecoder(parse_float=Decimal)
        value, _ = decoder.raw_decode(text)
        return value