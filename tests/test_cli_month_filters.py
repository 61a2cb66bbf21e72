"""Tests for CLI month filter helper."""

from datetime import date

import click
import pytest

from studioledger.cli.month_filters import resolve_cli_month


def _ctx() -> click.Context:
    return click.Context(click.Command("test"))


def test_resolve_cli_month_defaults_to_current_month():
    today = date.today()
    assert resolve_cli_month(_ctx(), None) == (today.year, today.month)
    assert resolve_cli_month(_ctx(), "") == (today.year, today.month)


@pytest.mark.parametrize(
    "text,expected",
    [("2024-03", (2024, 3)), ("3/2024", (2024, 3)), ("2023-12-25", (2023, 12))],
)
def test_resolve_cli_month_parses(text, expected):
    assert resolve_cli_month(_ctx(), text) == expected


def test_resolve_cli_month_rejects_invalid(capsys):
    with pytest.raises(click.exceptions.Exit) as excinfo:
        resolve_cli_month(_ctx(), "2024-13")

    assert excinfo.value.exit_code == 1
    err = capsys.readouterr().err
    assert "Invalid month" in err
