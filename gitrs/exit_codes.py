"""
Standard exit codes and error types for gitrs.

Following Unix/POSIX conventions for command-line tools. Library code raises
the exceptions below; only the CLI layer turns them into process exit codes.
"""
from pathlib import Path
from typing import Optional, Union

# Standard POSIX exit codes
SUCCESS = 0              # Successful termination
GENERAL_ERROR = 1        # General errors
USAGE_ERROR = 2          # Misuse of shell command (wrong arguments, etc.)

# Application-specific exit codes (64-113 are typically available)
NOT_A_DIRECTORY = 64     # A path has the wrong kind (file vs directory)
REPOSITORY_EXISTS = 65   # Control directory already populated
INIT_FAILED = 66         # Skeleton creation failed after preconditions passed
PATH_RESOLUTION = 67     # Canonicalization or directory creation failed
WRITE_FAILED = 68        # Compressing or persisting content failed
READ_FAILED = 69         # Stored content missing or not decompressible
NO_REPOSITORY = 70       # No enclosing repository found
CONFIG_ERROR = 71        # Configuration file error
PERMISSION_ERROR = 77    # Insufficient permissions
INTERRUPTED = 130        # Terminated by Ctrl+C (SIGINT)

# Exit code mappings for exceptions raised outside our hierarchy
EXCEPTION_EXIT_CODES = {
    'FileNotFoundError': GENERAL_ERROR,
    'PermissionError': PERMISSION_ERROR,
    'NotADirectoryError': NOT_A_DIRECTORY,
    'IsADirectoryError': NOT_A_DIRECTORY,
    'ValueError': USAGE_ERROR,
    'KeyboardInterrupt': INTERRUPTED,
}

PathLike = Union[str, Path]


def get_exit_code_for_exception(exc: Exception) -> int:
    """
    Get the appropriate exit code for an exception.

    Args:
        exc: The exception that occurred

    Returns:
        Appropriate exit code
    """
    if isinstance(exc, CommandError):
        return exc.exit_code
    exc_name = exc.__class__.__name__
    return EXCEPTION_EXIT_CODES.get(exc_name, GENERAL_ERROR)


class CommandError(Exception):
    """
    Exception that commands can raise to indicate specific exit codes.
    """
    def __init__(self, message: str, exit_code: int = GENERAL_ERROR):
        super().__init__(message)
        self.exit_code = exit_code


class RepositoryError(CommandError):
    """Base class for failures touching a repository's control directory."""
    exit_code_default = GENERAL_ERROR

    def __init__(self, message: str, path: Optional[PathLike] = None):
        super().__init__(message, self.exit_code_default)
        self.path = Path(path) if path is not None else None


class NotADirError(RepositoryError):
    """A path expected to be a directory is a file, or the reverse."""
    exit_code_default = NOT_A_DIRECTORY


class RepositoryExistsError(RepositoryError):
    """The control directory is already present and non-empty."""
    exit_code_default = REPOSITORY_EXISTS


class InitializationError(RepositoryError):
    """Creating the repository skeleton failed."""
    exit_code_default = INIT_FAILED


class PathResolutionError(RepositoryError):
    """Canonicalizing a path or creating a directory chain failed."""
    exit_code_default = PATH_RESOLUTION


class WriteError(RepositoryError):
    """Compressing or persisting a payload failed."""
    exit_code_default = WRITE_FAILED


class ReadError(RepositoryError):
    """Reading or decompressing stored content failed."""
    exit_code_default = READ_FAILED


class NoRepositoryFoundError(CommandError):
    """Raised by the CLI when discovery finds no enclosing repository."""
    def __init__(self, message: str = "No repository found"):
        super().__init__(message, NO_REPOSITORY)


class ConfigError(CommandError):
    """Raised when there's a configuration error."""
    def __init__(self, message: str):
        super().__init__(message, CONFIG_ERROR)
