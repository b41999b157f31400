"""Decorators for command functions."""

import asyncio
import functools
import inspect
import time
import traceback
from collections.abc import Callable

import typer
from pydantic import ValidationError

from projexia.exceptions import (
    ConflictError,
    ImpactGenerationError,
    NotFoundError,
    NotSignedInError,
    PermissionDeniedError,
    StoreError,
)
from projexia.utils.exit_codes import (
    ERROR_CONFLICT,
    ERROR_GENERAL,
    ERROR_INVALID_ARGS,
    ERROR_NETWORK,
    ERROR_NOT_FOUND,
    ERROR_NOT_SIGNED_IN,
    ERROR_PERMISSION_DENIED,
    get_exit_code_name,
)
from projexia.utils.logger import get_logger
from projexia.utils.ui.formatters import format_error


class AppError(Exception):
    """Custom application error with exit code."""

    def __init__(self, message: str, exit_code: int = 1):
        super().__init__(message)
        self.exit_code = exit_code


# Order matters: subclasses before their bases
_EXIT_CODES: list[tuple[type[Exception], int]] = [
    (NotSignedInError, ERROR_NOT_SIGNED_IN),
    (NotFoundError, ERROR_NOT_FOUND),
    (PermissionDeniedError, ERROR_PERMISSION_DENIED),
    (ConflictError, ERROR_CONFLICT),
    (StoreError, ERROR_GENERAL),
    (ImpactGenerationError, ERROR_NETWORK),
    (ValidationError, ERROR_INVALID_ARGS),
    (ValueError, ERROR_INVALID_ARGS),
]


def validation_message(error: ValidationError) -> str:
    """Render a pydantic ValidationError as one short line per problem."""
    lines = []
    for err in error.errors():
        msg = err["msg"].removeprefix("Value error, ")
        loc = ".".join(str(part) for part in err.get("loc", ()))
        lines.append(f"{loc}: {msg}" if loc else msg)
    return "; ".join(lines)


def exit_code_for(error: Exception) -> int | None:
    """Map a domain exception onto its exit code (None if unexpected)."""
    for exc_type, code in _EXIT_CODES:
        if isinstance(error, exc_type):
            return code
    return None


def command_wrapper(func: Callable):
    """Wrap a command: run sync or async, log it, map errors to exit codes."""

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        logger = get_logger()
        cmd = func.__name__
        start = time.monotonic()
        logger.info("command started: %s", cmd)
        try:
            if inspect.iscoroutinefunction(func):
                result = asyncio.run(func(*args, **kwargs))
            else:
                result = func(*args, **kwargs)

            elapsed = time.monotonic() - start
            logger.info("command completed: %s (%.3fs)", cmd, elapsed)
            return result

        except AppError as e:
            elapsed = time.monotonic() - start
            logger.error("command failed: %s (%.3fs) - %s", cmd, elapsed, str(e))
            format_error(str(e))
            raise typer.Exit(code=e.exit_code) from e

        except typer.Exit:
            # Re-raise Typer's own exits (like --help or explicit Exit(0))
            raise

        except Exception as e:
            elapsed = time.monotonic() - start
            code = exit_code_for(e)
            if code is not None:
                message = validation_message(e) if isinstance(e, ValidationError) else str(e)
                logger.error(
                    "command failed: %s (%.3fs) [%s] - %s",
                    cmd,
                    elapsed,
                    get_exit_code_name(code),
                    message,
                )
                format_error(message)
                raise typer.Exit(code=code) from e

            logger.error(
                "command failed: %s (%.3fs) - %s\n%s",
                cmd,
                elapsed,
                str(e),
                traceback.format_exc(),
            )
            # Generic fallback for unexpected crashes
            format_error(f"An unexpected error occurred: {str(e)}")
            raise typer.Exit(code=ERROR_GENERAL) from e

    return wrapper
