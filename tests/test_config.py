"""Tests for conversion options and ignore-file loading."""

from __future__ import annotations

import textwrap
from pathlib import Path

import pytest

from intraconv.config import (
    ConversionOptions,
    IgnoreConfigError,
    InvalidCrateNameError,
    load_ignore_config,
    normalize_crate_name,
)


@pytest.mark.parametrize("name", ["1krate", "my-crate", "", "crate name"])
def test_invalid_crate_names_are_rejected(name: str) -> None:
    with pytest.raises(InvalidCrateNameError, match="is not valid"):
        ConversionOptions(krate=name)


def test_normalize_crate_name_replaces_dashes() -> None:
    assert normalize_crate_name("my-crate") == "my_crate"
    with pytest.raises(InvalidCrateNameError):
        normalize_crate_name("9lives")


def test_options_defaults_and_replacement() -> None:
    options = ConversionOptions()

    assert options.krate == "my_krate"
    assert not options.disambiguate
    assert options.favored_links
    assert options.with_krate("regex").krate == "regex"


def test_load_toml_ignore_file(tmp_path: Path) -> None:
    path = tmp_path / "intraconv.toml"
    path.write_text(
        textwrap.dedent(
            """
            [ignore]
            "`Regex`" = ["struct.Regex.html", "../regex/struct.Regex.html"]

            ["lib.rs"]
            "`escape`" = ["fn.escape.html"]

            ["src/bytes.rs"]
            "`Match`" = ["struct.Match.html"]
            """
        ),
        encoding="utf-8",
    )

    config = load_ignore_config(path)

    assert config.globals == {
        "`Regex`": frozenset({"struct.Regex.html", "../regex/struct.Regex.html"})
    }
    assert Path("lib.rs") in config.per_file
    assert (tmp_path / "src" / "bytes.rs").resolve() in config.per_file

    bytes_rs = (tmp_path / "src" / "bytes.rs").resolve()
    assert config.is_ignored(bytes_rs, "`Regex`", "struct.Regex.html")
    assert config.is_ignored(bytes_rs, "`Match`", "struct.Match.html")
    assert config.is_ignored(tmp_path / "lib.rs", "`escape`", "fn.escape.html")
    assert not config.is_ignored(tmp_path / "lib.rs", "`Match`", "struct.Match.html")
    assert not config.is_ignored(
        tmp_path / "other" / "src" / "bytes.rs", "`Match`", "struct.Match.html"
    ), "multi-component keys are anchored to the ignore file's directory"


def test_load_yaml_ignore_file(tmp_path: Path) -> None:
    path = tmp_path / "intraconv.yaml"
    path.write_text(
        textwrap.dedent(
            """
            ignore:
              "`Regex`":
                - struct.Regex.html
            main.rs:
              "`run`":
                - fn.run.html
            """
        ),
        encoding="utf-8",
    )

    config = load_ignore_config(path)

    assert config.is_ignored(tmp_path / "a.rs", "`Regex`", "struct.Regex.html")
    assert config.is_ignored(tmp_path / "main.rs", "`run`", "fn.run.html")
    assert not config.is_ignored(tmp_path / "lib.rs", "`run`", "fn.run.html")


def test_missing_ignore_file(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError, match="not found"):
        load_ignore_config(tmp_path / "missing.toml")


@pytest.mark.parametrize(
    ("file_name", "content", "message"),
    [
        ("bad.toml", "[ignore\n", "not valid TOML"),
        ("bad.yaml", "ignore: [unclosed\n", "not valid YAML"),
        ("list.yaml", "- a\n- b\n", "mapping at the top level"),
        ("scalar.toml", 'ignore = "nope"\n', "must map link names"),
        ("targets.toml", '[ignore]\n"`A`" = "struct.A.html"\n', "must be a list"),
    ],
)
def test_malformed_ignore_files(
    tmp_path: Path, file_name: str, content: str, message: str
) -> None:
    path = tmp_path / file_name
    path.write_text(content, encoding="utf-8")

    with pytest.raises(IgnoreConfigError, match=message):
        load_ignore_config(path)
