"""Conversion of docs.rs URLs to intra-doc link paths."""

from __future__ import annotations

from .constants import DOCS_RS_URL, HTML_SUFFIX, INDEX_FILENAME, PATH_SEPARATOR, ROOT_LINK
from .exceptions import (
    MissingVersionInUrlError,
    UnrecognizedUrlError,
    WrongCrateNameInUrlError,
    WrongVersionInUrlError,
)
from .models import DocsUrl, ItemKind

# Ordered; the first kind whose prefix matches the filename wins.
ITEM_KINDS = (
    ItemKind("enum.", ("method.", "variant.")),
    ItemKind("fn."),
    ItemKind("struct.", ("method.",)),
    ItemKind("trait.", ("tymethod.",)),
)


def root_link(fragment: str | None = None) -> str:
    """Return the intra-doc link to the crate root.

    Examples:
        root_link()  # "crate"
        root_link("usage")  # "crate#usage"
    """
    return _with_fragment(ROOT_LINK, fragment)


def _with_fragment(path: str, fragment: str | None) -> str:
    return path if fragment is None else f"{path}#{fragment}"


def parse_docs_url(url: str, package_name: str) -> DocsUrl | None:
    """Split a docs.rs URL of `package_name` into its components.

    The path after ``https://docs.rs/<package_name>`` is read as
    ``/<version>/<crate>/<module>.../<filename>#<fragment>``; every part is
    optional from the right. A last segment without ``.`` is a module and the
    filename is then implicitly ``index.html``.

    Args:
        url: URL text taken from a link definition.
        package_name: Package whose documentation links are converted.

    Returns:
        DocsUrl | None: Parsed URL, or None when the URL points at another
            site or another package (including packages whose name merely
            starts with `package_name`).

    Examples:
        parse_docs_url("https://docs.rs/foo/*/foo/a/fn.b.html", "foo")
        parse_docs_url("https://docs.rs/foobar", "foo")  # None
    """
    prefix = f"{DOCS_RS_URL}{package_name}"
    if not url.startswith(prefix):
        return None

    path_start = len(prefix)
    if path_start < len(url):
        next_char = url[path_start]
        if next_char == "/":
            path_start += 1
        elif next_char != "#":
            return None

    path, separator, fragment = url[path_start:].partition("#")
    fragment = fragment if separator else None

    segments = path.split("/")
    if segments[-1] == "":
        segments.pop()

    if not segments:
        return DocsUrl(url=url, fragment=fragment)

    version, *rest = segments
    if not rest:
        return DocsUrl(url=url, version=version, fragment=fragment)

    # The crate segment may be omitted in front of the root index page.
    if rest == [INDEX_FILENAME]:
        return DocsUrl(url=url, version=version, filename=INDEX_FILENAME, fragment=fragment)

    crate_name, *rest = rest
    if not rest:
        return DocsUrl(url=url, version=version, crate_name=crate_name, fragment=fragment)

    if "." in rest[-1]:
        modules, filename = rest[:-1], rest[-1]
    else:
        modules, filename = rest, INDEX_FILENAME

    return DocsUrl(
        url=url,
        version=version,
        crate_name=crate_name,
        modules=tuple(modules),
        filename=filename,
        fragment=fragment,
    )


def convert_url(
    url: str,
    package_name: str,
    version: str | None = None,
    crate_name: str | None = None,
) -> str:
    """Convert a docs.rs URL of `package_name` to an intra-doc link.

    URLs of other sites and other packages are returned unchanged.

    Args:
        url: URL text taken from a link definition.
        package_name: Package whose documentation links are converted.
        version: When given, matching URLs must name exactly this version.
        crate_name: When given, matching URLs that name a crate must name
            exactly this one.

    Returns:
        str: Intra-doc link such as ``crate::a::Foo::bar``, or `url` unchanged.

    Raises:
        MissingVersionInUrlError: If `version` is given and the URL has none.
        WrongVersionInUrlError: If the URL names a version other than `version`.
        WrongCrateNameInUrlError: If the URL names a crate other than `crate_name`.
        UnrecognizedUrlError: If the filename is not ``index.html`` or a
            recognized ``<kind>.<Name>.html`` page.

    Examples:
        convert_url("https://docs.rs/foo/*/foo/struct.Foo.html#method.new", "foo")
        # "crate::Foo::new"
        convert_url("https://example.com/foo", "foo")  # unchanged
    """
    docs_url = parse_docs_url(url, package_name)
    if docs_url is None:
        return url

    if docs_url.version is None:
        if version is not None:
            raise MissingVersionInUrlError(url)
        return root_link(docs_url.fragment)

    if version is not None and docs_url.version != version:
        raise WrongVersionInUrlError(url)

    if docs_url.crate_name is None:
        return root_link(docs_url.fragment)

    if crate_name is not None and docs_url.crate_name != crate_name:
        raise WrongCrateNameInUrlError(url)

    if docs_url.filename is None:
        return root_link(docs_url.fragment)

    return _item_link(docs_url)


def _item_link(docs_url: DocsUrl) -> str:
    module_path = ROOT_LINK + "".join(PATH_SEPARATOR + module for module in docs_url.modules)
    filename = docs_url.filename
    fragment = docs_url.fragment

    if filename == INDEX_FILENAME:
        return _with_fragment(module_path, fragment)

    if filename is None or not filename.endswith(HTML_SUFFIX):
        raise UnrecognizedUrlError(docs_url.url)

    for kind in ITEM_KINDS:
        if not kind.matches(filename):
            continue

        name = kind.item_name(filename, HTML_SUFFIX)
        if not name:
            raise UnrecognizedUrlError(docs_url.url)

        item_path = f"{module_path}{PATH_SEPARATOR}{name}"
        if fragment is None:
            return item_path

        member = kind.member_name(fragment)
        if member is not None:
            return f"{item_path}{PATH_SEPARATOR}{member}"
        return _with_fragment(item_path, fragment)

    raise UnrecognizedUrlError(docs_url.url)
