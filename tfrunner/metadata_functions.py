"""The ``terraform metadata functions -json`` command."""

from __future__ import annotations

from typing import Any

from .errors import TerraformExecError
from .runner import Command, Runner
from .versions import TerraformVersion

_TF_1_4_0 = TerraformVersion.parse("1.4.0")


def metadata_functions(tf: Runner) -> Any:
    """Return the decoded JSON signatures of Terraform's built-in functions."""
    try:
        tf.compatible(_TF_1_4_0, None)
    except TerraformExecError as err:
        raise TerraformExecError(
            f"terraform metadata functions was added in 1.4.0: {err}"
        ) from err
    return tf.run_json(metadata_functions_command(tf))


def metadata_functions_command(tf: Runner, *args: str) -> Command:
    """Build the ``metadata functions -json`` command."""
    return tf.build_command(None, "metadata", "functions", "-json", *args)