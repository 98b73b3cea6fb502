"""Unit tests for the completion module."""

import pytest

from markup_assist.completion import (
    Completion,
    CompletionContext,
    CompletionEngine,
    ContextKind,
    complete,
    find_context,
)
from markup_assist.grammar import parse_grammar
from markup_assist.schema import BASE_ATTRIBUTES


def _texts(completions: list[Completion]) -> list[str]:
    return [c.text for c in completions]


class TestFindContext:
    """Tests for caret context inference."""

    @pytest.mark.unit
    @pytest.mark.parametrize(
        "text,caret,expected",
        [
            ("<", 1, CompletionContext(ContextKind.TAG_NAME)),
            ("<bu", 3, CompletionContext(ContextKind.TAG_NAME, prefix="bu")),
            ("<button", 4, CompletionContext(ContextKind.TAG_NAME, prefix="but")),
            (
                "<button ",
                8,
                CompletionContext(ContextKind.ATTRIBUTE_NAME, tag="button"),
            ),
            (
                "<button n",
                9,
                CompletionContext(ContextKind.ATTRIBUTE_NAME, tag="button", prefix="n"),
            ),
            (
                '<label text="Hi"\n    ico',
                24,
                CompletionContext(ContextKind.ATTRIBUTE_NAME, tag="label", prefix="ico"),
            ),
            ("<row-panel>\n    <la", 19, CompletionContext(ContextKind.TAG_NAME, prefix="la")),
        ],
    )
    def test_contexts(self, text, caret, expected):
        assert find_context(text, caret) == expected

    @pytest.mark.unit
    @pytest.mark.parametrize(
        "text,caret",
        [
            ("", 0),
            ("button", 3),
            ("<button/>", 9),
            ("<button>text", 12),
            ('<button text="Sa', 16),
            ("<button text='a b", 17),
            ("<", 5),
            ("<", -1),
        ],
    )
    def test_no_context(self, text, caret):
        """Outside a tag, inside a quoted value, or out of range."""
        assert find_context(text, caret).kind == ContextKind.NONE

    @pytest.mark.unit
    def test_closed_quote_is_attribute_area(self):
        context = find_context('<button text="Save" ', 20)
        assert context == CompletionContext(ContextKind.ATTRIBUTE_NAME, tag="button")

    @pytest.mark.unit
    def test_caret_ignores_text_after(self):
        """Only text before the caret decides the context."""
        context = find_context("<bu>ignored", 3)
        assert context == CompletionContext(ContextKind.TAG_NAME, prefix="bu")

    @pytest.mark.unit
    def test_whitespace_after_open_bracket(self):
        """A tag token is only the run directly after the bracket."""
        context = find_context("< button ", 9)
        assert context == CompletionContext(ContextKind.ATTRIBUTE_NAME)


class TestScenarios:
    """End-to-end completion scenarios against the built-in grammar."""

    @pytest.mark.unit
    def test_open_bracket_lists_all_tags(self, engine, schema):
        result = _texts(engine.complete("<", 1))
        assert result == sorted(schema.tags)
        assert {"button", "label", "activity-indicator"} <= set(result)

    @pytest.mark.unit
    def test_button_attributes(self, engine):
        result = _texts(engine.complete("<button ", 8))
        assert {"name", "background", "text"} <= set(result)
        assert result == sorted(result)

    @pytest.mark.unit
    def test_text_area_attributes(self, engine):
        result = _texts(engine.complete("<text-area ", 11))
        assert {"name", "background", "lineWrap"} <= set(result)
        assert "tabLayoutPolicy" not in result

    @pytest.mark.unit
    def test_attribute_prefix(self, engine):
        result = _texts(engine.complete("<button n", 9))
        assert "name" in result
        assert all(text.lower().startswith("n") for text in result)

    @pytest.mark.unit
    def test_tag_prefix(self, engine):
        result = _texts(engine.complete("<bu", 3))
        assert "button" in result
        assert all(text.startswith("bu") for text in result)

    @pytest.mark.unit
    def test_empty_buffer(self, engine):
        assert engine.complete("", 0) == []


class TestCompletionEngine:
    """Tests for filtering, ordering and failure behavior."""

    @pytest.fixture
    def mixed_case(self):
        text = (
            '<!ENTITY % w "Zeta CDATA alpha CDATA Alpha CDATA beta CDATA">\n'
            "<!ELEMENT w EMPTY>\n"
            "<!ATTLIST w %w;>\n"
        )
        return CompletionEngine(parse_grammar(text))

    @pytest.mark.unit
    def test_case_insensitive_filter_keeps_casing(self, mixed_case):
        assert _texts(mixed_case.complete("<w a", 4)) == ["Alpha", "alpha"]
        assert _texts(mixed_case.complete("<w A", 4)) == ["Alpha", "alpha"]

    @pytest.mark.unit
    def test_ordinal_sort(self, mixed_case):
        """Upper-case names sort before lower-case ones."""
        assert _texts(mixed_case.complete("<w ", 3)) == ["Alpha", "Zeta", "alpha", "beta"]

    @pytest.mark.unit
    def test_unknown_tag(self, engine):
        assert engine.complete("<unknown ", 9) == []

    @pytest.mark.unit
    def test_present_attributes_still_offered(self, engine):
        """Attributes already written in the tag are not removed."""
        result = _texts(engine.complete('<button text="Save" ', 20))
        assert "text" in result

    @pytest.mark.unit
    def test_no_match(self, engine):
        assert engine.complete("<button zzz", 11) == []

    @pytest.mark.unit
    @pytest.mark.parametrize(
        "text,caret",
        [("<button", 100), ("<button", -3), ("<<<>>>", 3), ("<>", 1), ("\n\n<", 3)],
    )
    def test_never_raises(self, engine, text, caret):
        assert isinstance(engine.complete(text, caret), list)

    @pytest.mark.unit
    def test_module_level_complete(self, schema, engine):
        assert complete(schema, "<la", 3) == engine.complete("<la", 3)

    @pytest.mark.unit
    def test_from_grammar_file(self, tmp_path, grammar_text):
        path = tmp_path / "sierra.dtd"
        path.write_text(grammar_text, encoding="utf-8")
        engine = CompletionEngine.from_grammar_file(path)
        assert "label" in _texts(engine.complete("<la", 3))


class TestProperties:
    """Properties that hold for every request."""

    REQUESTS = [
        ("<", 1),
        ("<t", 2),
        ("<text-field ", 12),
        ("<text-field p", 13),
        ("<tabbed-pane TAB", 16),
        ("<row-panel ", 11),
    ]

    @pytest.mark.unit
    def test_base_attributes_on_every_tag(self, schema):
        for tag in schema.tags:
            assert set(BASE_ATTRIBUTES) <= schema.attributes_for(tag)

    @pytest.mark.unit
    @pytest.mark.parametrize("text,caret", REQUESTS)
    def test_sorted_and_prefixed(self, engine, text, caret):
        prefix = find_context(text, caret).prefix.lower()
        result = _texts(engine.complete(text, caret))
        assert result == sorted(result)
        assert all(t.lower().startswith(prefix) for t in result)

    @pytest.mark.unit
    @pytest.mark.parametrize("text,caret", REQUESTS)
    def test_idempotent(self, engine, text, caret):
        assert engine.complete(text, caret) == engine.complete(text, caret)

    @pytest.mark.unit
    @pytest.mark.parametrize("stem", ["<", "<button "])
    def test_monotonic_narrowing(self, engine, stem):
        """Longer prefixes never add candidates."""
        previous = set(_texts(engine.complete(stem, len(stem))))
        for typed in ("t", "te", "tex", "text"):
            text = stem + typed
            current = set(_texts(engine.complete(text, len(text))))
            assert current <= previous
            previous = current
