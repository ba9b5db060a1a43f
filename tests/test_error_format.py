"""Tests for user-facing error formatting."""

from modpath.resolution.errors import FileNotFound
from modpath.resolution.errors import PackageEntryNotFound
from modpath.utils.error_format import escape_markup
from modpath.utils.error_format import format_error_message
from modpath.utils.error_format import format_resolution_error
from modpath.utils.error_format import resolution_error_fields


def _missing_file():
    return FileNotFound(
        "Could not find a file on disk for './a' (from '/p'): /p/a",
        specifier="./a",
        from_directory="/p",
    )


def test_includes_type_name():
    assert format_error_message(ValueError("bad")) == "ValueError: bad"


def test_without_type_name():
    assert format_error_message(ValueError("bad"), include_type=False) == "bad"


def test_type_already_in_message():
    assert format_error_message(ValueError("ValueError raised")) == "ValueError raised"


def test_empty_message():
    assert format_error_message(RuntimeError()) == "RuntimeError: (no additional details)"


def test_resolution_error_headline_names_request():
    lines = format_resolution_error(_missing_file()).splitlines()

    assert lines[0] == "FileNotFound: './a' from /p"
    assert lines[1] == "  Could not find a file on disk for './a' (from '/p'): /p/a"


def test_resolution_error_fields():
    error = PackageEntryNotFound("No file matches ./gone", specifier="lib", from_directory="/proj")

    assert resolution_error_fields(error) == {
        "error": "PackageEntryNotFound",
        "message": "No file matches ./gone",
        "from_directory": "/proj",
    }


def test_escape_markup():
    assert escape_markup("[red]x[/red]") == "\\[red]x\\[/red]"
