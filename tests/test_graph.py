import io

import pytest

from tfrunner.errors import TerraformExecError
from tfrunner.graph import GraphConfig, graph, graph_command
from tfrunner.options import DrawCycles, GraphPlan, GraphType, Lock
from tfrunner.runner import Runner

ALL_OPTIONS = (GraphPlan("teststate"), DrawCycles(True), GraphType("output"))


@pytest.fixture
def graph_runner(tmp_path, monkeypatch):
    for inherited in ("CHECKPOINT_DISABLE", "TF_APPEND_USER_AGENT"):
        monkeypatch.delenv(inherited, raising=False)

    def build(version):
        runner = Runner(tmp_path, "terraform", version)
        runner.env = {}
        return runner

    return build


@pytest.mark.parametrize(
    "version, options, expected",
    [
        ("0.13.7", (), ["graph"]),
        ("1.0.11", (), ["graph"]),
        ("0.13.7", ALL_OPTIONS, ["graph", "teststate", "-draw-cycles", "-type=output"]),
        ("1.0.11", ALL_OPTIONS, ["graph", "-plan=teststate", "-draw-cycles", "-type=output"]),
    ],
)
def test_graph_command(graph_runner, version, options, expected):
    cmd = graph_command(graph_runner(version), *options)
    assert cmd.args == expected
    assert cmd.env["TF_LOG"] == ""
    assert cmd.env["TF_APPEND_USER_AGENT"] == "tfrunner/0.19.0"


@pytest.mark.parametrize(
    "version, option, message",
    [
        ("0.7.0", GraphType("plan"), "-graph-type was first introduced in Terraform 0.8.0"),
        ("0.4.2", DrawCycles(True), "-draw-cycles was first introduced in Terraform 0.5.0"),
    ],
)
def test_graph_option_too_old(graph_runner, version, option, message):
    with pytest.raises(TerraformExecError, match=message):
        graph_command(graph_runner(version), option)


def test_graph_config_rejects_other_options():
    with pytest.raises(TypeError):
        GraphConfig().configure(Lock(True))


def test_graph_returns_output(tmp_path):
    runner = Runner(tmp_path, "echo", "1.0.11")
    runner.stdout = io.StringIO()
    output = graph(runner, *ALL_OPTIONS)
    assert output == "graph -plan=teststate -draw-cycles -type=output\n"
    assert runner.stdout.getvalue() == output