import pytest

from tfrunner.import_state import ImportConfig, import_command
from tfrunner.options import (
    AllowMissingConfig,
    Backup,
    Config,
    Dir,
    Lock,
    LockTimeout,
    State,
    StateOut,
    Var,
    VarFile,
    disable_backup,
)
from tfrunner.runner import Runner

EMPTY_KEYS = ["CHECKPOINT_DISABLE", "TF_LOG", "TF_LOG_CORE", "TF_LOG_PATH", "TF_LOG_PROVIDER"]
DEFAULT_ENV = {
    **dict.fromkeys(EMPTY_KEYS, ""),
    "TF_APPEND_USER_AGENT": "tfrunner/0.19.0",
    "TF_IN_AUTOMATION": "1",
}

PREFIX = "import -no-color -input=false".split()


@pytest.fixture
def tf(monkeypatch, tmp_path):
    monkeypatch.delenv("CHECKPOINT_DISABLE", raising=False)
    monkeypatch.delenv("TF_APPEND_USER_AGENT", raising=False)
    runner = Runner(tmp_path, "terraform", "1.0.11")
    runner.env = {}
    return runner


def test_import_command_defaults(tf):
    command = import_command(tf, "my-addr", "my-id")
    assert command.args == PREFIX + "-lock-timeout=0s -lock=true my-addr my-id".split()
    assert command.env == DEFAULT_ENV


def test_import_command_override_all_defaults(tf):
    options = [
        Backup("testbackup"),
        LockTimeout("200s"),
        State("teststate"),
        StateOut("teststateout"),
        VarFile("testvarfile"),
        Lock(False),
        *map(Var, ["var1=foo", "var2=bar"]),
        AllowMissingConfig(True),
    ]
    command = import_command(tf, "my-addr2", "my-id2", *options)
    expected = PREFIX + (
        "-backup=testbackup -lock-timeout=200s -state=teststate -state-out=teststateout "
        "-var-file=testvarfile -lock=false -allow-missing-config "
        "-var var1=foo -var var2=bar my-addr2 my-id2"
    ).split()
    assert command.args == expected
    assert command.env == DEFAULT_ENV


def test_import_command_disable_backup_and_config(tf):
    command = import_command(tf, "random_string.random_string", "abc", disable_backup(), Config("cfgdir"))
    assert command.args[3:5] == ["-backup=-", "-config=cfgdir"]
    assert command.args[-2:] == ["random_string.random_string", "abc"]


def test_config_defaults():
    config = ImportConfig()
    assert (config.lock, config.lock_timeout, config.allow_missing_config) == (True, "0s", False)


def test_unsupported_option_raises(tf):
    with pytest.raises(TypeError):
        import_command(tf, "a", "b", Dir("x"))