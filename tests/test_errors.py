import pytest

from tfrunner.errors import (
    CommandCancelledError,
    CommandDeadlineError,
    CommandFailedError,
    CommandInterruptedError,
    ManualEnvVarError,
    NoSuitableBinaryError,
    TerraformExecError,
    VersionMismatchError,
)


def test_version_mismatch_message_and_fields():
    err = VersionMismatchError("0.12.0", "-", "0.11.15")
    assert str(err) == "unexpected version 0.11.15 (min: 0.12.0, max: -)"
    assert (err.min_inclusive, err.max_exclusive, err.actual) == ("0.12.0", "-", "0.11.15")


def test_manual_env_var_message():
    err = ManualEnvVarError("TF_LOG")
    assert str(err) == 'manual setting of env var "TF_LOG" detected'
    assert err.name == "TF_LOG"


def test_no_suitable_binary_wraps_cause():
    cause = FileNotFoundError("terraform")
    err = NoSuitableBinaryError(cause)
    assert str(err) == "no suitable terraform binary could be found: terraform"
    assert err.err is cause
    assert err.__cause__ is cause


def test_command_failed_carries_exit_code_and_stderr():
    err = CommandFailedError(3, "boom")
    assert err.exit_code == 3
    assert err.stderr == "boom"
    assert str(err).startswith("exit status 3")
    assert str(err).endswith("\nboom")


def test_command_failed_is_a_terraform_exec_error():
    err = CommandFailedError(1, "failure")
    assert isinstance(err, TerraformExecError)
    assert err.exit_code == 1
    assert str(err).startswith("exit status 1")
    assert str(err).endswith("\nfailure")


def test_interrupted_uses_cause_message():
    cause = RuntimeError("killed")
    err = CommandInterruptedError(cause=cause)
    assert str(err) == "killed"
    assert err.cause is cause


@pytest.mark.parametrize("cls", [CommandCancelledError, CommandDeadlineError])
def test_cancel_and_deadline_are_interruptions(cls):
    err = cls("stopped")
    assert isinstance(err, CommandInterruptedError)
    assert isinstance(err, TerraformExecError)
    assert str(err) == "stopped"