"""Build and run Terraform CLI commands (init, apply, destroy, import, get, graph, force-unlock, fmt, metadata functions) with typed options."""

__version__ = "0.19.0"