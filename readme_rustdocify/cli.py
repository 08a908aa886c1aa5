"""
Converts a readme to markdown for a crate's top-level documentation.
Prints the result to stdout, or writes it to the file given with --output.
"""

from __future__ import annotations

from pathlib import Path

import click
from .config import ConfigError, apply_overrides, build_config
from .filesystem import (
    get_max_file_size,
    normalize_filepath,
    write_output,
)
from .parser import RustdocifyFileError, rustdocify_file

__all__ = ["cli"]


@click.command()
@click.version_option(package_name="readme-rustdocify")
@click.option("--package-name", help="Package whose docs.rs links are converted")
@click.option("--package-version", help="Version that docs.rs links must name")
@click.option("--crate-name", help="Crate name that docs.rs links must name")
@click.option(
    "-o",
    "--output",
    type=click.Path(dir_okay=False, writable=True),
    help="Write the result to this file instead of stdout",
)
@click.argument("filepath", type=click.Path(exists=True, dir_okay=False))
def cli(
    filepath: str,
    package_name: str | None = None,
    package_version: str | None = None,
    crate_name: str | None = None,
    output: str | None = None,
):
    """
    Entry point for rustdocifying a readme.

    Args:
        filepath: Path to the readme to convert.
        package_name: Override for the package whose links are converted.
        package_version: Version that converted links must name.
        crate_name: Crate name that converted links must name.
        output: Destination file; stdout when omitted.

    Returns:
        None.

    Raises:
        click.BadParameter: If the readme path or the configuration is invalid.
        click.ClickException: If the readme cannot be read or converted, or the
            output cannot be written.

    Examples:
        readme-rustdocify README.md --package-version 0.1.0 -o target/README.md
    """
    try:
        filepath = normalize_filepath(filepath)
    except ValueError as error:
        raise click.BadParameter(str(error)) from error

    try:
        config = build_config(
            filepath.parent,
            package_name=package_name,
            version=package_version,
            crate_name=crate_name,
        )
    except ConfigError as error:
        raise click.BadParameter(str(error)) from error

    try:
        max_file_size = get_max_file_size(default=config.max_file_size)
    except ValueError as error:
        raise click.ClickException(str(error)) from error
    config = apply_overrides(config, max_file_size=max_file_size)

    try:
        converted = rustdocify_file(filepath, config)
    except RustdocifyFileError as error:
        raise click.ClickException(str(error)) from error

    if output is None:
        click.echo(converted, nl=False)
        return

    output_path = Path(output)
    if output_path.resolve() == filepath:
        click.echo(f"Warning: overwriting {filepath.name} with converted content", err=True)

    try:
        write_output(output_path, converted)
    except IOError as error:
        raise click.ClickException(str(error)) from error


if __name__ == "__main__":
    cli()
