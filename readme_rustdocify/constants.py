"""Constants used across the readme-rustdocify package."""

from __future__ import annotations

import re

# docs.rs links and their intra-doc form
DOCS_RS_URL = "https://docs.rs/"
ROOT_LINK = "crate"
PATH_SEPARATOR = "::"
INDEX_FILENAME = "index.html"
HTML_SUFFIX = ".html"

# Markdown patterns
LINE_PATTERN = re.compile(r"[^\n]*\n|[^\n]+\Z")
HEADER_PATTERN = re.compile(r"^(#+) ")
LINK_DEFINITION_PATTERN = re.compile(r"^(\[[^\]]*\]:\s+)(\S+)")
FENCE_MARKER = "`"
MIN_FENCE_LENGTH = 3

MARKDOWN_EXTENSIONS = (".md", ".markdown")

# Limits
DEFAULT_MAX_FILE_SIZE = 10 * 1024 * 1024
