from __future__ import annotations

import textwrap
from pathlib import Path

from readme_rustdocify.cli import cli


def _write(tmp_path: Path, filename: str, content: str) -> Path:
    path = tmp_path / filename
    path.write_text(textwrap.dedent(content).lstrip(), encoding="utf-8")
    return path


README = """
    # foo

    ## Usage

    [Foo]: https://docs.rs/foo/0.1.0/foo/struct.Foo.html
    """


def test_cli_prints_converted_readme(cli_runner, tmp_path):
    target = _write(tmp_path, "README.md", README)

    result = cli_runner.invoke(cli, ["--package-name", "foo", str(target)])

    assert result.exit_code == 0
    assert result.output == "\n# Usage\n\n[Foo]: crate::Foo\n"
    assert target.read_text(encoding="utf-8").startswith("# foo")


def test_cli_writes_output_file(cli_runner, tmp_path):
    target = _write(tmp_path, "README.md", README)
    output = tmp_path / "README-rustdocified.md"

    result = cli_runner.invoke(
        cli,
        [
            "--package-name",
            "foo",
            "--package-version",
            "0.1.0",
            "--crate-name",
            "foo",
            "--output",
            str(output),
            str(target),
        ],
    )

    assert result.exit_code == 0
    assert result.output == ""
    assert output.read_text(encoding="utf-8") == "\n# Usage\n\n[Foo]: crate::Foo\n"


def test_cli_reads_package_from_cargo_manifest(cli_runner, tmp_path):
    _write(tmp_path, "Cargo.toml", '[package]\nname = "foo"\nversion = "0.1.0"\n')
    target = _write(tmp_path, "README.md", README)

    result = cli_runner.invoke(cli, [str(target)])

    assert result.exit_code == 0
    assert "[Foo]: crate::Foo" in result.output


def test_cli_reads_package_from_pyproject(cli_runner, tmp_path):
    _write(
        tmp_path,
        "pyproject.toml",
        """
        [tool.readme-rustdocify]
        package_name = "foo"
        version = "0.2.0"
        """,
    )
    target = _write(tmp_path, "README.md", README)

    result = cli_runner.invoke(cli, [str(target)])

    assert result.exit_code != 0
    assert "wrong version in url: https://docs.rs/foo/0.1.0/foo/struct.Foo.html" in result.output


def test_cli_reports_conversion_errors(cli_runner, tmp_path):
    target = _write(tmp_path, "README.md", "## Foo\n# Bar\n")

    result = cli_runner.invoke(cli, ["--package-name", "foo", str(target)])

    assert result.exit_code != 0
    assert "non-first top level header: # Bar" in result.output


def test_cli_requires_package_name(cli_runner, tmp_path):
    target = _write(tmp_path, "README.md", README)

    result = cli_runner.invoke(cli, [str(target)])

    assert result.exit_code != 0
    assert "package_name" in result.output


def test_cli_rejects_non_markdown_files(cli_runner, tmp_path):
    target = _write(tmp_path, "notes.txt", "## Heading\n")

    result = cli_runner.invoke(cli, ["--package-name", "foo", str(target)])

    assert result.exit_code != 0
    assert "not a Markdown file" in result.output


def test_cli_rejects_invalid_size_env(cli_runner, tmp_path, monkeypatch):
    monkeypatch.setenv("README_RUSTDOCIFY_MAX_FILE_SIZE", "nope")
    target = _write(tmp_path, "README.md", README)

    result = cli_runner.invoke(cli, ["--package-name", "foo", str(target)])

    assert result.exit_code != 0
    assert "README_RUSTDOCIFY_MAX_FILE_SIZE" in result.output


def test_cli_enforces_size_env(cli_runner, tmp_path, monkeypatch):
    monkeypatch.setenv("README_RUSTDOCIFY_MAX_FILE_SIZE", "4")
    target = _write(tmp_path, "README.md", README)

    result = cli_runner.invoke(cli, ["--package-name", "foo", str(target)])

    assert result.exit_code != 0
    assert "maximum allowed size" in result.output


def test_cli_warns_when_overwriting_input(cli_runner, tmp_path):
    target = _write(tmp_path, "README.md", README)

    result = cli_runner.invoke(
        cli, ["--package-name", "foo", "--output", str(target), str(target)]
    )

    assert result.exit_code == 0
    assert "Warning: overwriting README.md" in result.output
    assert target.read_text(encoding="utf-8") == "\n# Usage\n\n[Foo]: crate::Foo\n"
