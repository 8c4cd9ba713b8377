"""
Standardized exit codes for roachcli commands.
"""

from typing import Optional

import typer


EXIT_SUCCESS = 0
EXIT_ERROR = 1
EXIT_CONFIG_ERROR = 2
EXIT_USER_CANCEL = 130  # SIGINT


class CliExit(typer.Exit):
    """
    CLI exit exception with a consistent exit code and optional message.

    Usage:
        raise CliExit.error("Unknown command")
        raise CliExit.config_error("Invalid log level")
    """

    def __init__(self, code: int, message: Optional[str] = None):
        self.message = message
        super().__init__(code)
        if message:
            typer.echo(message, err=code != EXIT_SUCCESS)

    @classmethod
    def success(cls, message: Optional[str] = None) -> "CliExit":
        return cls(EXIT_SUCCESS, message)

    @classmethod
    def error(cls, message: Optional[str] = None) -> "CliExit":
        return cls(EXIT_ERROR, message)

    @classmethod
    def config_error(cls, message: Optional[str] = None) -> "CliExit":
        return cls(EXIT_CONFIG_ERROR, message)

    @classmethod
    def user_cancel(cls, message: Optional[str] = None) -> "CliExit":
        return cls(EXIT_USER_CANCEL, message or "Operation cancelled by user")
