"""Readme to rustdoc conversion."""

from __future__ import annotations

from pathlib import Path

from .config import ConfigError, RustdocifyConfig, validate_config
from .constants import (
    FENCE_MARKER,
    HEADER_PATTERN,
    LINE_PATTERN,
    LINK_DEFINITION_PATTERN,
    MIN_FENCE_LENGTH,
)
from .exceptions import NonFirstTopLevelHeaderError, RustdocifyError
from .filesystem import collect_file_stat, enforce_file_size, safe_read
from .models import ScanState
from .urls import convert_url


def split_lines(text: str) -> list[str]:
    """Split text on ``\\n`` while keeping each line's terminator.

    Unlike `str.splitlines`, only ``\\n`` ends a line, so a ``\\r\\n`` pair
    stays attached to its line and lone ``\\r`` characters are content.

    Examples:
        split_lines("a\\r\\nb\\n")  # ["a\\r\\n", "b\\n"]
        split_lines("a\\nb")  # ["a\\n", "b"]
    """
    return LINE_PATTERN.findall(text)


def _try_open_fence(state: ScanState, line: str) -> bool:
    """Detect the start of a fenced code block.

    Args:
        state: Scan state to update when a fence opens.
        line: Current line being scanned.

    Returns:
        bool: True when the line opens a fence and the state is updated.

    Examples:
        _try_open_fence(ScanState(), "```rust\\n")  # True
        _try_open_fence(ScanState(), "``\\n")  # False
    """
    if state.in_code_block:
        return False

    fence_length = len(line) - len(line.lstrip(FENCE_MARKER))
    if fence_length < MIN_FENCE_LENGTH:
        return False

    state.fence_length = fence_length
    return True


def _try_close_fence(state: ScanState, line: str) -> bool:
    """Attempt to close the active fenced code block.

    The block closes on a line starting with at least as many backticks as
    opened it; anything after them is ignored.

    Args:
        state: Scan state describing the active fence.
        line: Current line being scanned.

    Returns:
        bool: True when the line closes the fence; otherwise False.

    Examples:
        state = ScanState(fence_length=3)
        _try_close_fence(state, "```\\n")  # True
    """
    if state.fence_length is None:
        return False

    if not line.startswith(FENCE_MARKER * state.fence_length):
        return False

    state.fence_length = None
    return True


def convert_header_line(line: str, state: ScanState) -> str | None:
    """Convert a header line to its rustdoc form.

    The first header of the document may be a top-level header, which is
    removed entirely. Other headers move one level up.

    Args:
        line: Line outside code blocks, including its terminator.
        state: Scan state tracking whether the first header was seen.

    Returns:
        str | None: Converted line (empty for the removed top-level header),
            or None when `line` is not a header.

    Raises:
        NonFirstTopLevelHeaderError: If `line` is a top-level header and
            another header came before it.

    Examples:
        convert_header_line("## Usage\\n", ScanState())  # "# Usage\\n"
        convert_header_line("#hashtag\\n", ScanState())  # None
    """
    header_match = HEADER_PATTERN.match(line)
    if not header_match:
        return None

    level = len(header_match.group(1))
    if level == 1:
        if not state.in_first_header:
            raise NonFirstTopLevelHeaderError(line)
        state.in_first_header = False
        return ""

    state.in_first_header = False
    return line[1:]


def convert_link_line(
    line: str,
    package_name: str,
    version: str | None = None,
    crate_name: str | None = None,
) -> str | None:
    """Convert the URL of a link definition line to an intra-doc link.

    Only lines shaped like ``[label]: URL rest`` are link lines: the label
    ends at the first ``]``, a colon must follow it, and at least one
    whitespace character must separate the colon from the URL. Everything
    around the URL is kept as-is.

    Args:
        line: Line outside code blocks, including its terminator.
        package_name: Package whose docs.rs links are converted.
        version: Version every converted link must name, if any.
        crate_name: Crate name every converted link must name, if any.

    Returns:
        str | None: Line with the URL converted (unchanged URLs of other
            sites included), or None when `line` is not a link line.

    Raises:
        RustdocifyError: If the URL is a docs.rs URL of `package_name` that
            cannot be converted; see `convert_url`.

    Examples:
        convert_link_line("[Foo]: https://docs.rs/foo/*/foo/struct.Foo.html\\n", "foo")
        # "[Foo]: crate::Foo\\n"
    """
    link_match = LINK_DEFINITION_PATTERN.match(line)
    if not link_match:
        return None

    link = convert_url(link_match.group(2), package_name, version, crate_name)
    return f"{link_match.group(1)}{link}{line[link_match.end():]}"


def rustdocify(
    readme: str,
    package_name: str,
    version: str | None = None,
    crate_name: str | None = None,
) -> str:
    """Convert a readme to markdown suitable for crate-level documentation.

    - Removes the top-level header, which must be the first header.
    - Moves all other headers one level up.
    - Converts docs.rs links of `package_name` to intra-doc links.
    - Leaves fenced code blocks untouched.

    Line terminators (``\\n``, ``\\r\\n`` or none on the last line) are kept.

    Args:
        readme: Markdown text of the readme.
        package_name: Package whose docs.rs links are converted.
        version: When given, every converted link must name this version.
        crate_name: When given, every converted link naming a crate must name
            this one.

    Returns:
        str: Converted markdown.

    Raises:
        ValueError: If `package_name` is empty.
        NonFirstTopLevelHeaderError: If a top-level header follows another header.
        MissingVersionInUrlError: If `version` is given and a link has no version.
        WrongVersionInUrlError: If a link names a version other than `version`.
        WrongCrateNameInUrlError: If a link names a crate other than `crate_name`.
        UnrecognizedUrlError: If a link names an unsupported docs.rs page.

    Examples:
        rustdocify("# foo\\n## Usage\\nSee [Foo].\\n", "foo")
        # "# Usage\\nSee [Foo].\\n"
    """
    if not package_name:
        raise ValueError("`package_name` must not be empty")

    state = ScanState()
    result: list[str] = []

    for line in split_lines(readme):
        if state.in_code_block:
            _try_close_fence(state, line)
            result.append(line)
            continue

        if _try_open_fence(state, line):
            result.append(line)
            continue

        converted = convert_header_line(line, state)
        if converted is None:
            converted = convert_link_line(line, package_name, version, crate_name)

        result.append(line if converted is None else converted)

    return "".join(result)


transform = rustdocify


class RustdocifyFileError(Exception):
    """Raised when rustdocifying a readme file fails."""


def rustdocify_file(filepath: Path, config: RustdocifyConfig) -> str:
    """Read and rustdocify a readme file.

    Args:
        filepath: Path to the readme.
        config: Configuration naming the package and the version and crate
            name constraints.

    Returns:
        str: Converted markdown.

    Raises:
        RustdocifyFileError: If the configuration is invalid, the file is too
            large, cannot be read or decoded, or its content cannot be
            converted.

    Examples:
        converted = rustdocify_file(Path("README.md"), RustdocifyConfig(package_name="foo"))
    """
    try:
        validate_config(config)
    except ConfigError as error:
        raise RustdocifyFileError(str(error)) from error

    try:
        enforce_file_size(collect_file_stat(filepath), config.max_file_size, filepath)
        with safe_read(filepath) as file:
            content = file.read()
    except UnicodeDecodeError as error:
        error_message = f"Invalid UTF-8 sequence in {filepath}: {error}"
        raise RustdocifyFileError(error_message) from error
    except IOError as error:
        raise RustdocifyFileError(str(error)) from error

    try:
        return rustdocify(content, config.package_name, config.version, config.crate_name)
    except RustdocifyError as error:
        raise RustdocifyFileError(f"{filepath}: {error}") from error
