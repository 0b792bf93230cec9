"""Options that configure Terraform commands."""

from __future__ import annotations

import json
from dataclasses import dataclass, make_dataclass
from typing import Mapping, Optional


def _option(name: str, field_name: str, kind: type, doc: str) -> type:
    """Create a frozen single-value option class."""
    return make_dataclass(
        name,
        [(field_name, kind)],
        frozen=True,
        namespace={"__doc__": doc, "__module__": __name__},
    )


AllowMissingConfig = _option(
    "AllowMissingConfig", "allow_missing_config", bool, "The -allow-missing-config flag."
)
AllowMissing = _option("AllowMissing", "allow_missing", bool, "The -allow-missing flag.")
Backend = _option("Backend", "backend", bool, "The -backend flag.")
BackendConfig = _option("BackendConfig", "path", str, "The -backend-config flag.")
BackupOut = _option("BackupOut", "path", str, "The -backup-out flag.")
Backup = _option("Backup", "path", str, "The -backup flag.")
Config = _option("Config", "path", str, "The -config flag.")
CopyState = _option(
    "CopyState", "path", str, "The -state flag of ``workspace new``: copy an existing state into it."
)
Dir = _option("Dir", "path", str, "The optional directory positional argument.")
DirOrPlan = _option(
    "DirOrPlan", "path", str, "The optional directory or plan file positional argument."
)
Destroy = _option("Destroy", "destroy", bool, "The -destroy flag.")
DrawCycles = _option("DrawCycles", "draw_cycles", bool, "The -draw-cycles flag.")
DryRun = _option("DryRun", "dry_run", bool, "The -dry-run flag.")
FSMirror = _option(
    "FSMirror", "fs_mirror", str, "The -fs-mirror option: path to a filesystem mirror directory."
)
Force = _option("Force", "force", bool, "The -force flag.")
ForceCopy = _option("ForceCopy", "force_copy", bool, "The -force-copy flag.")
FromModule = _option("FromModule", "source", str, "The -from-module flag.")
Get = _option("Get", "get", bool, "The -get flag.")
GetPlugins = _option("GetPlugins", "get_plugins", bool, "The -get-plugins flag.")
Lock = _option("Lock", "lock", bool, "The -lock flag.")
LockTimeout = _option(
    "LockTimeout", "timeout", str, "The -lock-timeout flag, a duration with unit such as ``10s``."
)
NetMirror = _option(
    "NetMirror", "net_mirror", str, "The -net-mirror option: base URL of a network mirror."
)
Out = _option("Out", "path", str, "The -out flag.")
Parallelism = _option("Parallelism", "parallelism", int, "The -parallelism flag.")
GraphPlan = _option("GraphPlan", "file", str, "The -plan flag of ``graph``: a plan file.")
Platform = _option("Platform", "platform", str, "The -platform flag: an ``os_arch`` string.")
PluginDir = _option("PluginDir", "plugin_dir", str, "The -plugin-dir flag.")
Provider = _option("Provider", "provider", str, "A provider source address positional argument.")
Reconfigure = _option("Reconfigure", "reconfigure", bool, "The -reconfigure flag.")
Recursive = _option("Recursive", "recursive", bool, "The -recursive flag.")
Refresh = _option("Refresh", "refresh", bool, "The -refresh flag.")
RefreshOnly = _option("RefreshOnly", "refresh_only", bool, "The -refresh-only flag.")
Replace = _option("Replace", "address", str, "The -replace flag.")
State = _option(
    "State", "path", str, "The legacy -state flag; prefer the local backend for per-run state files."
)
StateOut = _option("StateOut", "path", str, "The -state-out flag.")
Target = _option("Target", "target", str, "The -target flag.")
TestsDirectory = _option(
    "TestsDirectory", "tests_directory", str, "The -tests-directory option: path to test files."
)
GraphType = _option("GraphType", "graph_type", str, "The -type flag of ``graph``.")
Update = _option("Update", "update", bool, "The -update flag.")
Upgrade = _option("Upgrade", "upgrade", bool, "The -upgrade flag.")
Var = _option("Var", "assignment", str, "The -var flag, as a single ``name=value`` assignment.")
VarFile = _option("VarFile", "path", str, "The -var-file flag.")
VerifyPlugins = _option("VerifyPlugins", "verify_plugins", bool, "The -verify-plugins flag.")


def disable_backup() -> Backup:
    """Return a backup option that disables the state backup."""
    return Backup("-")


@dataclass(frozen=True)
class ReattachConfigAddr:
    """A JSON-friendly network address."""

    network: str
    string: str


@dataclass(frozen=True)
class ReattachConfig:
    """What Terraform needs to attach itself to a running provider process."""

    protocol: str
    protocol_version: int
    pid: int
    test: bool
    addr: ReattachConfigAddr


@dataclass(frozen=True)
class Reattach:
    """Provider reattach information, keyed by provider address."""

    info: Optional[Mapping[str, ReattachConfig]]


_HTML_ESCAPES = {
    "<": "\\u003c",
    ">": "\\u003e",
    "&": "\\u0026",
    "\u2028": "\\u2028",
    "\u2029": "\\u2029",
}


def reattach_json(info: Optional[Mapping[str, ReattachConfig]]) -> str:
    """Encode reattach information as the JSON Terraform expects."""
    if info is None:
        return "null"
    payload = {
        name: {
            "Protocol": cfg.protocol,
            "ProtocolVersion": cfg.protocol_version,
            "Pid": cfg.pid,
            "Test": cfg.test,
            "Addr": {"Network": cfg.addr.network, "String": cfg.addr.string},
        }
        for name, cfg in sorted(info.items())
    }
    text = json.dumps(payload, separators=(",", ":"), ensure_ascii=False)
    for raw, escaped in _HTML_ESCAPES.items():
        text = text.replace(raw, escaped)
    return text