"""Exception hierarchy and exit codes for claude-config.

Every error the installer can report derives from InstallerError and
carries the exit code the CLI terminates with.
"""

from enum import IntEnum
from typing import ClassVar, Optional


class ExitCode(IntEnum):
    """Process exit codes reported by the CLI."""

    SUCCESS = 0
    GENERAL_ERROR = 1
    MISSING_DEPENDENCY = 2
    TRANSFER_FAILED = 3
    CONFIG_ERROR = 4


class InstallerError(Exception):
    """Base exception for claude-config errors.

    Attributes:
        message: The error message
        exit_code: The exit code to use when this error ends the program
    """

    _default_exit_code: ClassVar[ExitCode] = ExitCode.GENERAL_ERROR

    def __init__(self, message: str, exit_code: Optional[ExitCode] = None) -> None:
        """Initialize the exception.

        Args:
            message: Error message describing what went wrong
            exit_code: Optional override for the default exit code
        """
        super().__init__(message)
        self.message = message
        self._exit_code = exit_code

    @property
    def exit_code(self) -> ExitCode:
        """Exit code for this error, falling back to the class default."""
        if self._exit_code is not None:
            return self._exit_code
        return self.__class__._default_exit_code


class MissingDependencyError(InstallerError):
    """None of the requested transport backends is available."""

    _default_exit_code = ExitCode.MISSING_DEPENDENCY

    def __init__(self, tried: list[str]) -> None:
        self.tried = list(tried)
        if len(self.tried) == 2:
            message = f"Neither {self.tried[0]} nor {self.tried[1]} found. Please install one."
        else:
            tried_names = ", ".join(self.tried) or "none"
            message = f"No usable transport found (tried: {tried_names})."
        super().__init__(message)


class FetchError(InstallerError):
    """A transport could not retrieve a URL."""

    _default_exit_code = ExitCode.TRANSFER_FAILED

    def __init__(self, url: str, reason: str) -> None:
        self.url = url
        self.reason = reason
        super().__init__(f"Failed to fetch {url}: {reason}")


class TransferError(InstallerError):
    """A manifest entry could not be fetched or written to disk."""

    _default_exit_code = ExitCode.TRANSFER_FAILED

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to install {path}: {reason}")


class ConfigError(InstallerError):
    """Configuration could not be loaded or validated."""

    _default_exit_code = ExitCode.CONFIG_ERROR
