"""Data models for readme-rustdocify."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class ScanState:
    """State carried from line to line while rustdocifying a readme.

    Attributes:
        in_first_header: True until the first header of any level is seen.
        fence_length: Number of backticks that opened the current code block,
            or None outside code blocks.
    """

    in_first_header: bool = True
    fence_length: int | None = None

    @property
    def in_code_block(self) -> bool:
        return self.fence_length is not None


@dataclass(frozen=True)
class ItemKind:
    """Item page kind recognized in docs.rs filenames.

    Attributes:
        prefix: Filename prefix, e.g. ``"struct."`` in ``struct.Foo.html``.
        member_prefixes: Fragment prefixes naming a member of the item; such
            fragments become part of the intra-doc path.
    """

    prefix: str
    member_prefixes: tuple[str, ...] = ()

    def matches(self, filename: str) -> bool:
        return filename.startswith(self.prefix)

    def item_name(self, filename: str, suffix: str) -> str:
        return filename[len(self.prefix) : len(filename) - len(suffix)]

    def member_name(self, fragment: str) -> str | None:
        """Return the member named by `fragment`, or None when it names none.

        Examples:
            ItemKind("struct.", ("method.",)).member_name("method.new")  # "new"
            ItemKind("fn.").member_name("examples")  # None
        """
        for member_prefix in self.member_prefixes:
            if fragment.startswith(member_prefix):
                return fragment[len(member_prefix) :]
        return None


@dataclass(frozen=True)
class DocsUrl:
    """Structured form of a docs.rs URL for the documented package.

    Attributes:
        url: Original URL text.
        version: Version segment, or None when the URL names only the package.
        crate_name: Crate segment, or None when absent.
        modules: Module path segments following the crate segment.
        filename: Page filename (``index.html`` when implicit), or None when
            the URL stops at the version or crate segment.
        fragment: Text after ``#``, or None when the URL has no fragment.
    """

    url: str
    version: str | None = None
    crate_name: str | None = None
    modules: tuple[str, ...] = ()
    filename: str | None = None
    fragment: str | None = None
