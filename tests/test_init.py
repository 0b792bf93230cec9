import pytest

from tfrunner.errors import TerraformExecError
from tfrunner.init import InitConfig, init_command
from tfrunner.options import (
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
    ReattachConfigAddr,
    Reconfigure,
    Upgrade,
    VerifyPlugins,
)
from tfrunner.runner import Runner

PREFIX = "init -no-color -input=false".split()
TAIL_ARGS = (
    "-reconfigure -backend-config=confpath1 -backend-config=confpath2 "
    "-plugin-dir=testdir1 -plugin-dir=testdir2 initdir"
).split()


def _runner(tmp_path, version):
    tf = Runner(tmp_path, "terraform", version)
    tf.env = {}
    return tf


def _shared_options():
    return [
        Backend(False),
        *map(BackendConfig, ["confpath1", "confpath2"]),
        FromModule("testsource"),
        Get(False),
        *map(PluginDir, ["testdir1", "testdir2"]),
        Reconfigure(True),
        Upgrade(True),
        Dir("initdir"),
    ]


def test_init_v012_defaults(tmp_path):
    cmd = init_command(_runner(tmp_path, "0.12.31"))
    expected = PREFIX + (
        "-lock-timeout=0s -backend=true -get=true -upgrade=false "
        "-lock=true -get-plugins=true -verify-plugins=true"
    ).split()
    assert cmd.args == expected


def test_init_v012_override_all(tmp_path):
    legacy = [ForceCopy(True), GetPlugins(False), Lock(False), LockTimeout("999s"), VerifyPlugins(False)]
    cmd = init_command(_runner(tmp_path, "0.12.31"), *legacy, *_shared_options())
    expected = PREFIX + (
        "-from-module=testsource -lock-timeout=999s -backend=false -get=false -upgrade=true "
        "-lock=false -get-plugins=false -verify-plugins=false -force-copy"
    ).split() + TAIL_ARGS
    assert cmd.args == expected


def test_init_v1_defaults(tmp_path):
    cmd = init_command(_runner(tmp_path, "1.0.11"))
    assert cmd.args == PREFIX + "-backend=true -get=true -upgrade=false".split()


def test_init_v1_override_all(tmp_path):
    cmd = init_command(_runner(tmp_path, "1.0.11"), *_shared_options())
    expected = PREFIX + "-from-module=testsource -backend=false -get=false -upgrade=true".split() + TAIL_ARGS
    assert cmd.args == expected


@pytest.mark.parametrize(
    "option", [Lock(False), LockTimeout("5s"), VerifyPlugins(False), GetPlugins(False)]
)
def test_init_removed_options_rejected_on_v1(tmp_path, option):
    with pytest.raises(TerraformExecError, match="no longer available as of Terraform 0.15"):
        init_command(_runner(tmp_path, "1.0.11"), option)


def test_init_reattach_sets_env(tmp_path):
    info = {
        "registry": ReattachConfig(
            "grpc", 5, 1, True, ReattachConfigAddr("unix", "/tmp/plugin")
        )
    }
    cmd = init_command(_runner(tmp_path, "1.0.11"), Reattach(info))
    assert cmd.env["TF_REATTACH_PROVIDERS"] == (
        '{"registry":{"Protocol":"grpc","ProtocolVersion":5,"Pid":1,"Test":true,'
        '"Addr":{"Network":"unix","String":"/tmp/plugin"}}}'
    )


def test_init_default_env(tmp_path, monkeypatch):
    monkeypatch.delenv("CHECKPOINT_DISABLE", raising=False)
    monkeypatch.delenv("TF_APPEND_USER_AGENT", raising=False)
    cmd = init_command(_runner(tmp_path, "1.0.11"))
    empty_keys = ["CHECKPOINT_DISABLE", "TF_LOG", "TF_LOG_CORE", "TF_LOG_PATH", "TF_LOG_PROVIDER"]
    assert cmd.env == {
        **dict.fromkeys(empty_keys, ""),
        "TF_APPEND_USER_AGENT": "tfrunner/0.19.0",
        "TF_IN_AUTOMATION": "1",
    }


def test_init_config_rejects_unknown_option():
    with pytest.raises(TypeError):
        InitConfig().configure(object())


def test_init_config_accumulates_lists():
    config = InitConfig()
    config.configure(PluginDir("a"))
    config.configure(PluginDir("b"))
    config.configure(BackendConfig("c"))
    assert config.plugin_dir == ["a", "b"]
    assert config.backend_config == ["c"]