"""
readme-rustdocify: convert a readme to crate-level rustdoc markdown.

This package can be used both as a CLI tool and as a library.

CLI Usage:
    readme-rustdocify README.md --package-name foo

Library Usage:
    from pathlib import Path
    from readme_rustdocify import rustdocify

    readme = Path("README.md").read_text()
    docs = rustdocify(readme, "foo", version="0.1.0", crate_name="foo")
"""

from .config import ConfigError, RustdocifyConfig
from .exceptions import (
    MissingVersionInUrlError,
    NonFirstTopLevelHeaderError,
    RustdocifyError,
    UnrecognizedUrlError,
    WrongCrateNameInUrlError,
    WrongVersionInUrlError,
)
from .parser import RustdocifyFileError, rustdocify, rustdocify_file, transform
from .urls import convert_url, parse_docs_url

__version__ = "0.1.0"

__all__ = [
    # Core functionality
    "rustdocify",
    "rustdocify_file",
    "transform",
    "convert_url",
    "parse_docs_url",
    # Configuration
    "RustdocifyConfig",
    # Exceptions
    "ConfigError",
    "MissingVersionInUrlError",
    "NonFirstTopLevelHeaderError",
    "RustdocifyError",
    "RustdocifyFileError",
    "UnrecognizedUrlError",
    "WrongCrateNameInUrlError",
    "WrongVersionInUrlError",
    # Version
    "__version__",
]
