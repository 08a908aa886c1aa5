"""Package-specific exception types."""

from __future__ import annotations


class RustdocifyError(ValueError):
    """Base class for conversion errors.

    Every error carries the offending original text (a header line or a URL)
    so callers can show it to the user as-is.

    Args:
        text: Original text that could not be converted.
    """

    message = "cannot rustdocify"

    def __init__(self, text: str):
        self.text = text
        super().__init__(f"{self.message}: {text}")

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self.text == other.text

    def __hash__(self) -> int:
        return hash((type(self), self.text))


class MissingVersionInUrlError(RustdocifyError):
    """Raised when a version is required but the URL has none.

    Example: ``[foo]: https://docs.rs/foo`` with version ``0.1.0``.
    """

    message = "missing version in url"


class NonFirstTopLevelHeaderError(RustdocifyError):
    """Raised when a top-level header appears after another header."""

    message = "non-first top level header"


class UnrecognizedUrlError(RustdocifyError):
    """Raised when a docs.rs URL has an unknown filename.

    Either the URL is invalid or it names an item kind that is not supported,
    e.g. ``https://docs.rs/foo/*/foo/hello_world.html``.
    """

    message = "unrecognized url"


class WrongCrateNameInUrlError(RustdocifyError):
    """Raised when a crate name is required and the URL names another crate."""

    message = "wrong crate name in url"


class WrongVersionInUrlError(RustdocifyError):
    """Raised when a version is required and the URL names another version."""

    message = "wrong version in url"
