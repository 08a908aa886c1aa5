from __future__ import annotations

import textwrap

import pytest

from readme_rustdocify import (
    MissingVersionInUrlError,
    NonFirstTopLevelHeaderError,
    UnrecognizedUrlError,
    WrongCrateNameInUrlError,
    WrongVersionInUrlError,
    rustdocify,
    transform,
)


def _convert(readme: str) -> str:
    return rustdocify(readme, "foo", None, "foo")


def test_retains_exact_newlines():
    readme = "## A\n## B\r\na\nb\r\n[x]: https://docs.rs/foo\n[y]: https://docs.rs/foo\r\n"
    expected = "# A\n# B\r\na\nb\r\n[x]: crate\n[y]: crate\r\n"

    assert rustdocify(readme, "foo") == expected


def test_transform_is_rustdocify():
    assert transform("## A", "foo") == "# A"


def test_empty_readme():
    assert rustdocify("", "foo") == ""


def test_rejects_empty_package_name():
    with pytest.raises(ValueError):
        rustdocify("## A", "")


def test_converts_headers():
    assert _convert("# Foo\nfoo\n## Bar\nbar\n### Baz") == "foo\n# Bar\nbar\n## Baz"


def test_ignores_headers_without_space():
    assert _convert("#Foo\n##Bar") == "#Foo\n##Bar"


def test_non_first_top_level_header():
    with pytest.raises(NonFirstTopLevelHeaderError) as excinfo:
        rustdocify("## Foo\n# Bar", "foo")

    assert excinfo.value == NonFirstTopLevelHeaderError("# Bar")
    assert str(excinfo.value) == "non-first top level header: # Bar"


def test_second_top_level_header():
    with pytest.raises(NonFirstTopLevelHeaderError) as excinfo:
        rustdocify("# Foo\ntext\n# Bar\n", "foo")

    assert excinfo.value.text == "# Bar\n"


def test_top_level_header_inside_code_block_is_kept():
    readme = "# Foo\n```sh\n# comment\n```\n"

    assert rustdocify(readme, "foo") == "```sh\n# comment\n```\n"


def test_converts_full_readme():
    readme = textwrap.dedent(
        """\
        # foo

        A crate with a [`Foo`] and [`bar`].

        ## Usage

        ```rust
        # use foo::Foo;
        // [not]: https://docs.rs/foo/*/foo/fn.not.html
        ```

        ### Details

        [`Foo`]: https://docs.rs/foo/0.1.0/foo/struct.Foo.html
        [`bar`]: https://docs.rs/foo/0.1.0/foo/util/fn.bar.html#examples
        [serde]: https://docs.rs/serde
        """
    )
    expected = textwrap.dedent(
        """\

        A crate with a [`Foo`] and [`bar`].

        # Usage

        ```rust
        # use foo::Foo;
        // [not]: https://docs.rs/foo/*/foo/fn.not.html
        ```

        ## Details

        [`Foo`]: crate::Foo
        [`bar`]: crate::util::bar#examples
        [serde]: https://docs.rs/serde
        """
    )

    assert rustdocify(readme, "foo", "0.1.0", "foo") == expected


def test_enum_method_link_with_crate_name():
    assert (
        rustdocify("[x]: https://docs.rs/foo/*/foo/a/b/enum.Foo.html#method.bar", "foo", None, "foo")
        == "[x]: crate::a::b::Foo::bar"
    )


def test_missing_version_in_url():
    with pytest.raises(MissingVersionInUrlError) as excinfo:
        rustdocify("[x]: https://docs.rs/foo", "foo", "0.1.0", None)

    assert excinfo.value == MissingVersionInUrlError("https://docs.rs/foo")


def test_wrong_version_in_url():
    with pytest.raises(WrongVersionInUrlError) as excinfo:
        rustdocify("[x]: https://docs.rs/foo/0.2.0", "foo", "0.1.0", None)

    assert excinfo.value == WrongVersionInUrlError("https://docs.rs/foo/0.2.0")


def test_wrong_crate_name_in_url():
    with pytest.raises(WrongCrateNameInUrlError) as excinfo:
        rustdocify("[x]: https://docs.rs/foo/*/bar", "foo", None, "foo")

    assert excinfo.value == WrongCrateNameInUrlError("https://docs.rs/foo/*/bar")


@pytest.mark.parametrize(
    "url",
    ["https://docs.rs/foo/*/foo/hello_world.html", "https://docs.rs/foo/*/foo/hello_world.png"],
)
def test_unrecognized_url(url: str):
    with pytest.raises(UnrecognizedUrlError) as excinfo:
        rustdocify(f"[x]: {url}", "foo")

    assert excinfo.value == UnrecognizedUrlError(url)


def test_first_error_aborts():
    readme = "[a]: https://docs.rs/foo/*/foo/x.png\n# Late\n"

    with pytest.raises(UnrecognizedUrlError):
        rustdocify(readme, "foo")


@pytest.mark.parametrize(
    "readme",
    [
        "[x: https://docs.rs/foo",
        "[x] https://docs.rs/foo",
        "[x]:https://docs.rs/foo",
        "[x]:   ",
        "[x]: https://example.com/foo",
        "[x]: https://docs.rs/bar",
        "[x]: https://docs.rs/foobar",
    ],
)
def test_lines_left_unchanged(readme: str):
    assert _convert(readme) == readme


def test_retains_whitespace_before_url():
    assert _convert("[x]:   https://docs.rs/foo") == "[x]:   crate"


def test_retains_text_after_url():
    assert _convert("[x]: https://docs.rs/foo   hello") == "[x]: crate   hello"


def test_two_backticks_do_not_begin_code_block():
    assert _convert("``\n## a") == "``\n# a"


def test_three_backtick_code_block_with_header():
    assert _convert("```\n## a\n```\n## b") == "```\n## a\n```\n# b"


def test_four_backtick_code_block_with_header():
    assert _convert("````\n```\n## a\n````\n## b") == "````\n```\n## a\n````\n# b"


def test_code_block_with_link():
    readme = "```\n[a]: https://docs.rs/foo\n```\n[b]: https://docs.rs/foo"
    expected = "```\n[a]: https://docs.rs/foo\n```\n[b]: crate"

    assert _convert(readme) == expected


def test_code_block_with_short_line():
    assert _convert("```\n\n```") == "```\n\n```"


def test_code_block_with_type():
    assert _convert("```foo\n## a\n```\n## b") == "```foo\n## a\n```\n# b"


def test_unclosed_code_block_runs_to_end():
    readme = "```\n## a\n[x]: https://docs.rs/foo/*/foo/x.png\n"

    assert _convert(readme) == readme
