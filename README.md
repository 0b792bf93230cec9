# tfrunner

`tfrunner` builds and runs Terraform CLI commands from Python. Each
supported subcommand is a function that takes a `Runner` and any number of
option objects, turns them into the argument list Terraform expects, and
runs the Terraform binary as a subprocess with a controlled environment.

It has no dependencies outside the standard library. Terraform itself is
not bundled: point the runner at a binary you already have.

## Installation

```
pip install tfrunner
```

## The runner

```python
from tfrunner.runner import Runner
from tfrunner.versions import TerraformVersion

tf = Runner("/path/to/config", "/usr/local/bin/terraform",
            TerraformVersion.parse("1.5.3"))
```

`Runner(working_dir, exec_path, version)` takes the directory Terraform
runs in, the path of the executable, and the Terraform version, either as a
`TerraformVersion` or as a string such as `"1.6.0-alpha20230719"`. The
runner does not ask Terraform for its version: it uses the one you give.
Version-dependent options are checked against it with
`Runner.compatible(min_inclusive, max_exclusive)`, which raises
`VersionMismatchError` when the version's core lies outside the range, and
`TerraformExecError` when no version was given.

Attributes you may set on a runner:

- `env` - the base environment for subprocesses; `None` (the default)
  means the current process environment.
- `stdout`, `stderr` - writers that also receive Terraform's output.
- `log`, `log_core`, `log_path`, `log_provider` - Terraform logging
  settings; they are passed on only when `log_path` is set, otherwise all
  four `TF_LOG*` variables are set empty so logging stays out of stderr.
- `append_user_agent` - text added to `TF_APPEND_USER_AGENT`.
- `disable_plugin_tls`, `skip_provider_verify` - set
  `TF_DISABLE_PLUGIN_TLS=1` and `TF_SKIP_PROVIDER_VERIFY=1`.
- `timeout` - default number of seconds a command may run.

Every command's environment also gets `TF_IN_AUTOMATION=1`, keeps or copies
`CHECKPOINT_DISABLE`, has `TF_WORKSPACE` removed, and has
`TF_APPEND_USER_AGENT` set to the deduplicated join of the inherited value,
`append_user_agent` and `tfrunner/0.19.0`. Each command is logged at INFO
level on the `tfrunner` logger.

`Runner.run(command, timeout)` streams stdout and stderr line by line to
the configured writers while the process runs. On Linux the child runs in
its own session. A non-zero exit raises `CommandFailedError`, carrying
`exit_code` and the captured `stderr`; running past the timeout (or a
timeout of zero or less) kills the process and raises
`CommandDeadlineError`. `Runner.run_json(command, timeout)` runs a command
and returns the first JSON value it printed, with numbers that have a
fraction or exponent decoded as `Decimal`.

## Subcommands

| Module                        | Functions                                                            |
|-------------------------------|----------------------------------------------------------------------|
| `tfrunner.init`               | `init`, `init_command`                                               |
| `tfrunner.apply`              | `apply`, `apply_json`, `apply_command`, `apply_json_command`         |
| `tfrunner.destroy`            | `destroy`, `destroy_json`, `destroy_command`, `destroy_json_command` |
| `tfrunner.import_state`       | `import_resource`, `import_command`                                  |
| `tfrunner.get`                | `get`, `get_command`                                                 |
| `tfrunner.graph`              | `graph`, `graph_command`                                             |
| `tfrunner.force_unlock`       | `force_unlock`, `force_unlock_command`                               |
| `tfrunner.fmt`                | `format_string`, `format_stream`, `format_write`, `format_check`, `format_command` |
| `tfrunner.metadata_functions` | `metadata_functions`, `metadata_functions_command`                   |

```python
from tfrunner.init import init
from tfrunner.apply import apply
from tfrunner.destroy import destroy
from tfrunner.options import Var, Target, Parallelism, Upgrade

init(tf, Upgrade(True))
apply(tf, Var("region=eu-west-1"), Target("aws_instance.web"), Parallelism(5))
destroy(tf)
```

Each subcommand module has a settings dataclass (`InitConfig`,
`ApplyConfig`, `DestroyConfig`, `ImportConfig`, `GetConfig`, `GraphConfig`,
`ForceUnlockConfig`, `FormatConfig`) holding its defaults; passing an option
the subcommand does not accept raises `TypeError`.

Notes on individual commands:

- `apply` and `destroy` always pass `-no-color -auto-approve -input=false`
  together with `-lock`, `-parallelism` (default 10) and `-refresh`.
  `apply_json` and `destroy_json` add `-json`, set the runner's `stdout`
  to the writer you give, and need Terraform 0.15.3 or later.
- `apply` checks versions for `RefreshOnly` (0.15.4), `Replace` and
  `Destroy` (0.15.2), and refuses `RefreshOnly(True)` with `Refresh(False)`.
- `init` drops `-lock`, `-lock-timeout`, `-get-plugins` and
  `-verify-plugins` on Terraform 0.15 and later, and raises if those
  options are given there.
- `graph` returns the DOT output as a string; `GraphPlan` becomes
  `-plan=` from 0.15.0 and a positional argument before.
- `force_unlock` accepts `Dir` only before 0.15.0.
- `metadata_functions` needs 1.4.0 and returns the decoded JSON.
- `format_string(tf, content)` returns the formatted text;
  `format_stream(tf, unformatted, formatted)` reads from a string, bytes or
  file object and writes to a writer; `format_check` returns
  `(is_formatted, unformatted_files)`; `format_write` rewrites files in
  place. `format_check` and `format_write` reject `Dir("-")`.

### Building commands without running them

The `*_command` functions return a `Command` (with `exec_path`, `args`,
`env`, `working_dir`, `stdin`, `stdout`, `exit_code` and an `argv`
property) without starting Terraform:

```python
from tfrunner.apply import apply_command
from tfrunner.options import Backup, Lock

command = apply_command(tf, Backup("state.backup"), Lock(False))
print(command.args)
```

## Options

`tfrunner.options` holds one small frozen dataclass per flag or argument:
`AllowMissingConfig`, `AllowMissing`, `Backend`, `BackendConfig`,
`BackupOut`, `Backup`, `Config`, `CopyState`, `Dir`, `DirOrPlan`,
`Destroy`, `DrawCycles`, `DryRun`, `FSMirror`, `Force`, `ForceCopy`,
`FromModule`, `Get`, `GetPlugins`, `Lock`, `LockTimeout`, `NetMirror`,
`Out`, `Parallelism`, `GraphPlan`, `Platform`, `PluginDir`, `Provider`,
`Reconfigure`, `Recursive`, `Refresh`, `RefreshOnly`, `Replace`, `State`,
`StateOut`, `Target`, `TestsDirectory`, `GraphType`, `Update`, `Upgrade`,
`Var`, `VarFile`, `VerifyPlugins`. `disable_backup()` returns `Backup("-")`.

`Reattach` takes a mapping of provider addresses to `ReattachConfig`
values (with a `ReattachConfigAddr`); `apply`, `destroy`, `init` and
`import_resource` put it into `TF_REATTACH_PROVIDERS` as the JSON that
`reattach_json(info)` returns.

## Environment helpers

`tfrunner.environment` provides `prohibited_env(env)`, which lists the keys
that must be set through options instead of by hand (the `TF_*` variables
the runner manages, plus anything starting with `TF_VAR_` or
`TF_CLI_ARGS_`), `clean_env(env)`, which removes them in place,
`env_map`/`env_slice` to convert between `KEY=value` strings and dicts, and
`merge_user_agent(*args)`.

## Versions

`tfrunner.versions.TerraformVersion.parse(text)` parses a version string;
versions compare and hash by their semantic-version order, and `core()`
drops the pre-release and metadata parts. `module_version()` returns this
package's version.

## Errors

All errors derive from `tfrunner.errors.TerraformExecError`:
`VersionMismatchError`, `CommandFailedError`, `CommandDeadlineError`
(a subclass of `CommandInterruptedError`), and the types
`ManualEnvVarError`, `NoSuitableBinaryError` and `CommandCancelledError`,
which the package defines for callers but does not raise itself.

## What it does not do

- It does not find, download or install Terraform, and it does not detect
  the version of the binary: you supply both.
- It covers only the subcommands listed above. There are no functions for
  `plan`, `show`, `validate`, `output`, `refresh`, `taint`, `untaint`,
  `state`, `workspace`, `providers`, `test` or `version`, even though some
  options (`Out`, `DryRun`, `Platform`, `CopyState`, ...) exist.
- It returns raw decoded JSON rather than typed plan, state or schema
  objects.
- It has no command-line interface of its own.