"""Tests for cursor key and accessor naming helpers."""

from cursorgen.core.ir import ImportSpec
from cursorgen.core.naming import (
    NameRegistry,
    accessor_name,
    compose_cursor_key,
    create_unused_alias,
)


class TestComposeCursorKey:
    def test_skips_missing_parts(self) -> None:
        assert compose_cursor_key(None, "todos") == "todos"
        assert compose_cursor_key(None, None, "todos") == "todos"

    def test_joins_with_dots(self) -> None:
        assert compose_cursor_key("app", "todos", "items") == "app.todos.items"

    def test_empty_prefix(self) -> None:
        assert compose_cursor_key("", "title") == "title"


class TestAccessorName:
    def test_camel_cases_key_segments(self) -> None:
        assert accessor_name("todos.detail", "title") == "todosDetailTitle"

    def test_single_segment(self) -> None:
        assert accessor_name("user", "name") == "userName"

    def test_root_field_is_bare_name(self) -> None:
        assert accessor_name(None, "title") == "title"

    def test_non_identifier_characters_split_words(self) -> None:
        assert accessor_name(None, "foo-bar") == "fooBar"
        assert accessor_name("user", "first name") == "userFirstName"

    def test_leading_digit_is_prefixed(self) -> None:
        assert accessor_name(None, "1st") == "_1st"


class TestCreateUnusedAlias:
    def test_free_alias_is_kept(self) -> None:
        imports = [ImportSpec(prefix="bf", relative_path="bobflux")]
        assert create_unused_alias("s", imports) == "s"

    def test_taken_alias_gets_counter(self) -> None:
        imports = [
            ImportSpec(prefix="s", relative_path="./shared"),
            ImportSpec(prefix="s1", relative_path="./other"),
        ]
        assert create_unused_alias("s", imports) == "s2"


class TestNameRegistry:
    def test_first_claim_keeps_name(self) -> None:
        names = NameRegistry()
        assert names.claim("userName") == "userName"
        assert names.claim("title") == "title"

    def test_repeated_claims_are_suffixed(self) -> None:
        names = NameRegistry()
        assert names.claim("userName") == "userName"
        assert names.claim("userName") == "userName2"
        assert names.claim("userName") == "userName3"

    def test_suffix_does_not_steal_a_natural_name(self) -> None:
        names = NameRegistry()
        names.claim("a")
        names.claim("a2")
        assert names.claim("a") == "a3"

    def test_reserved_name_is_suffixed(self) -> None:
        names = NameRegistry(reserved=["root"])
        assert names.claim("root") == "root2"
        assert names.claim("title") == "title"
