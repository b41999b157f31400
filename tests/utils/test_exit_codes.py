"""Unit tests for projexia.utils.exit_codes."""

from __future__ import annotations

import pytest

from projexia.utils.exit_codes import (
    ERROR_CONFLICT,
    ERROR_GENERAL,
    ERROR_INVALID_ARGS,
    ERROR_NETWORK,
    ERROR_NOT_FOUND,
    ERROR_NOT_SIGNED_IN,
    ERROR_PERMISSION_DENIED,
    SUCCESS,
    get_exit_code_description,
    get_exit_code_name,
)

ALL_CODES = [
    SUCCESS,
    ERROR_GENERAL,
    ERROR_INVALID_ARGS,
    ERROR_NOT_SIGNED_IN,
    ERROR_NETWORK,
    ERROR_NOT_FOUND,
    ERROR_PERMISSION_DENIED,
    ERROR_CONFLICT,
]


def test_codes_are_distinct_and_sequential():
    assert ALL_CODES == list(range(8))


@pytest.mark.parametrize(
    "code,name",
    [
        (SUCCESS, "SUCCESS"),
        (ERROR_NOT_SIGNED_IN, "ERROR_NOT_SIGNED_IN"),
        (ERROR_PERMISSION_DENIED, "ERROR_PERMISSION_DENIED"),
        (ERROR_CONFLICT, "ERROR_CONFLICT"),
    ],
)
def test_get_exit_code_name(code, name):
    assert get_exit_code_name(code) == name


def test_unknown_code_name():
    assert get_exit_code_name(99) == "UNKNOWN(99)"


@pytest.mark.parametrize("code", ALL_CODES)
def test_every_code_has_description(code):
    assert get_exit_code_description(code) != "Unknown error"


def test_unknown_code_description():
    assert get_exit_code_description(-1) == "Unknown error"
