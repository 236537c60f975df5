import os
import sys

import pytest

sys.path.append(os.path.dirname(os.path.dirname(__file__)))

from confinement import InvalidName, SanitizedName, sanitize


@pytest.mark.parametrize(
    "raw",
    [
        "",
        "/etc/passwd",
        "..",
        "..hidden",
        "report..txt",
        "a/b",
        "sub/",
        "a\\b",
        "\\share",
        "nul\x00byte",
        "bad\udcffname",
    ],
)
def test_rejects_dangerous_names(raw):
    with pytest.raises(InvalidName):
        sanitize(raw)


def test_length_limit_is_exclusive():
    assert sanitize("a" * 255, 256) == "a" * 255
    with pytest.raises(InvalidName):
        sanitize("a" * 256, 256)
    with pytest.raises(InvalidName):
        sanitize("a" * 300, 256)


def test_length_counts_utf8_bytes():
    name = "é" * 128  # 256 bytes
    with pytest.raises(InvalidName):
        sanitize(name, 256)
    assert sanitize("é" * 127, 256) == "é" * 127


def test_returns_input_verbatim():
    for raw in ["manifest.txt", " spaced name ", ".profile", "., odd", "-rf"]:
        result = sanitize(raw)
        assert isinstance(result, SanitizedName)
        assert result == raw


def test_sanitized_name_construction_validates():
    with pytest.raises(InvalidName):
        SanitizedName("../x")
    assert SanitizedName("ok.txt") == "ok.txt"


def test_invalid_name_is_a_value_and_permission_error():
    with pytest.raises(ValueError):
        sanitize("")
    with pytest.raises(PermissionError):
        sanitize("a/b")
