"""Shared helpers for command modules."""

from __future__ import annotations

from datetime import date

from projexia.commands.decorators import AppError
from projexia.services.config_service import get_config_service
from projexia.utils.exit_codes import ERROR_INVALID_ARGS


def resolve_output_format(output: str | None) -> str:
    """Use the explicit ``--output`` or fall back to ``output.format`` from config."""
    if output:
        return output
    return get_config_service().config.output.format


def parse_date(value: str | None, option: str = "--date") -> date | None:
    """Parse a YYYY-MM-DD option value ("today" is accepted too)."""
    if value is None:
        return None
    if value.strip().lower() == "today":
        return date.today()
    try:
        return date.fromisoformat(value.strip())
    except ValueError as e:
        raise AppError(
            f"Invalid {option} '{value}': expected YYYY-MM-DD", ERROR_INVALID_ARGS
        ) from e
