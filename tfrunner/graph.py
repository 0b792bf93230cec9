"""The ``terraform graph`` command."""

from __future__ import annotations

import io
from dataclasses import dataclass
from typing import Any

from .errors import TerraformExecError
from .options import DrawCycles, GraphPlan, GraphType
from .runner import Command, Runner
from .versions import TerraformVersion

_TF_0_5_0 = TerraformVersion.parse("0.5.0")
_TF_0_8_0 = TerraformVersion.parse("0.8.0")
_TF_0_15_0 = TerraformVersion.parse("0.15.0")


@dataclass
class GraphConfig:
    """Settings of ``terraform graph``."""

    plan: str = ""
    draw_cycles: bool = False
    graph_type: str = ""

    def configure(self, option: Any) -> None:
        match option:
            case GraphPlan(file=file):
                self.plan = file
            case DrawCycles(draw_cycles=draw_cycles):
                self.draw_cycles = draw_cycles
            case GraphType(graph_type=graph_type):
                self.graph_type = graph_type
            case _:
                raise TypeError(f"{type(option).__name__} is not an option of graph")


def graph(tf: Runner, *args: Any) -> str:
    """Return the dependency graph in DOT format."""
    command = graph_command(tf, *args)
    out = io.StringIO()
    command.stdout = out
    tf.run(command)
    return out.getvalue()


def graph_command(tf: Runner, *args: Any) -> Command:
    """Build the ``graph`` command from options."""
    config = GraphConfig()
    for option in args:
        config.configure(option)

    argv = ["graph"]

    if config.plan:
        # before 0.15.0 the plan file was a positional argument
        try:
            tf.compatible(_TF_0_15_0, None)
        except TerraformExecError:
            argv.append(config.plan)
        else:
            argv.append(f"-plan={config.plan}")

    if config.draw_cycles:
        try:
            tf.compatible(_TF_0_5_0, None)
        except TerraformExecError as err:
            raise TerraformExecError(
                f"-draw-cycles was first introduced in Terraform 0.5.0: {err}"
            ) from err
        argv.append("-draw-cycles")

    if config.graph_type:
        try:
            tf.compatible(_TF_0_8_0, None)
        except TerraformExecError as err:
            raise TerraformExecError(
                f"-graph-type was first introduced in Terraform 0.8.0: {err}"
            ) from err
        argv.append(f"-type={config.graph_type}")

    return tf.build_command(None, *argv)