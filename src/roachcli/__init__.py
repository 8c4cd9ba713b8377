"""
roachcli - command-line front end for a Cockroach cluster node.

The package declares every tunable of a node or client process once, binds
those options onto the subcommands that need them, and writes parsed values
straight into a single shared runtime context.

Package Structure:
- core/: runtime context, option catalog, coercion and logging
- cli/: command groups, flag binding and the Typer/click command table
"""

__version__ = "0.1.0"
