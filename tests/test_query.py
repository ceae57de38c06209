"""Tests for specls.query -- word lookup, offsets, hover and completion."""

from __future__ import annotations

import textwrap

import pytest

from specls.models import Component, Position
from specls.query import (
    QueryEngine,
    offset_at,
    position_at,
    render_component_doc,
    word_range_at,
)


def _position_of(text: str, line_text: str, needle: str) -> Position:
    """Position of the first character of *needle* on the first line equal to *line_text*."""
    row = text.splitlines().index(line_text)
    return Position(row, line_text.index(needle))


@pytest.fixture()
def engine() -> QueryEngine:
    return QueryEngine()


# ---------------------------------------------------------------------------
# Text helpers
# ---------------------------------------------------------------------------


class TestWordRangeAt:
    def test_word_in_the_middle(self) -> None:
        text = 'ref: "#/components/schemas/Pet-2"'
        start, end = word_range_at(text, text.index("Pet") + 1)
        assert text[start:end] == "Pet-2"

    def test_offset_right_after_word(self) -> None:
        assert word_range_at("abc def", 3) == (0, 3)

    def test_offset_on_separator_between_nothing(self) -> None:
        assert word_range_at("a :: b", 3) is None

    def test_underscore_and_digits(self) -> None:
        text = "x my_Type_2 y"
        start, end = word_range_at(text, 5)
        assert text[start:end] == "my_Type_2"

    def test_empty_text(self) -> None:
        assert word_range_at("", 0) is None


class TestOffsets:
    def test_offset_at(self) -> None:
        text = "ab\ncde\nf"
        assert offset_at(text, Position(0, 0)) == 0
        assert offset_at(text, Position(1, 2)) == 5
        assert offset_at(text, Position(2, 1)) == 8

    def test_offset_at_clamps(self) -> None:
        text = "ab\ncde"
        assert offset_at(text, Position(0, 99)) == 2
        assert offset_at(text, Position(10, 0)) == len(text)

    def test_position_at(self) -> None:
        text = "ab\ncde\nf"
        assert position_at(text, 0) == Position(0, 0)
        assert position_at(text, 5) == Position(1, 2)
        assert position_at(text, len(text)) == Position(2, 1)

    def test_round_trip(self) -> None:
        text = "line one\nline two\n\nlast"
        for offset in range(len(text) + 1):
            assert offset_at(text, position_at(text, offset)) == offset


# ---------------------------------------------------------------------------
# Documentation rendering
# ---------------------------------------------------------------------------


class TestRenderComponentDoc:
    def test_full_block(self) -> None:
        component = Component(
            name="Pet",
            type="schemas",
            properties={
                "id": {"type": "integer", "description": "Unique identifier"},
                "name": {"type": "string"},
                "owner": {"$ref": "#/components/schemas/Owner"},
                "extra": {},
            },
            required=["id", "name"],
        )
        assert render_component_doc(component) == (
            "### Pet\n\n**Type:** schemas\n\n"
            "\n**Properties:**\n\n"
            "- `id`: integer - Unique identifier\n"
            "- `name`: string\n"
            "- `owner`: #/components/schemas/Owner\n"
            "- `extra`: any\n"
            "\n**Required Properties:**\n\n"
            "- `id`\n"
            "- `name`\n"
        )

    def test_sections_omitted_when_absent(self) -> None:
        component = Component(name="Error", type="responses")
        assert render_component_doc(component) == "### Error\n\n**Type:** responses\n\n"

    def test_empty_required_is_omitted(self) -> None:
        component = Component(name="E", type="schemas", required=[])
        assert "Required" not in render_component_doc(component)


# ---------------------------------------------------------------------------
# Hover
# ---------------------------------------------------------------------------


class TestHover:
    def test_hover_on_component_key(self, engine: QueryEngine, petstore_yaml: str) -> None:
        position = _position_of(petstore_yaml, "    Pet:", "Pet")
        content = engine.hover(petstore_yaml, position)
        assert content is not None
        assert content.markdown.startswith("### Pet\n\n**Type:** schemas")
        assert "- `id`: integer - Unique identifier" in content.markdown

    def test_hover_on_reference_target(self, engine: QueryEngine, petstore_yaml: str) -> None:
        line = '              $ref: "#/components/schemas/NewPet"'
        position = _position_of(petstore_yaml, line, "NewPet")
        content = engine.hover(petstore_yaml, position)
        assert content is not None
        assert content.markdown.startswith("### NewPet")

    def test_hover_on_unknown_word(self, engine: QueryEngine, petstore_yaml: str) -> None:
        position = _position_of(petstore_yaml, "  - name: pets", "pets")
        assert engine.hover(petstore_yaml, position) is None

    def test_hover_on_whitespace(self, engine: QueryEngine, petstore_yaml: str) -> None:
        assert engine.hover(petstore_yaml, Position(2, 0)) is None

    def test_hover_on_undecodable_text(self, engine: QueryEngine) -> None:
        assert engine.hover('{"components": ', Position(0, 3)) is None

    def test_no_hover_on_invalid_document(self, engine: QueryEngine) -> None:
        text = textwrap.dedent("""\
            components:
              schemas:
                User:
                  type: object
        """)
        assert engine.hover(text, Position(2, 6)) is None

    def test_hover_once_document_is_valid(self, engine: QueryEngine) -> None:
        text = textwrap.dedent("""\
            openapi: 3.0.0
            info:
              title: T
              version: "1"
            components:
              schemas:
                User:
                  type: object
        """)
        content = engine.hover(text, Position(6, 6))
        assert content is not None
        assert content.markdown.startswith("### User")

    def test_first_match_wins_across_categories(self, engine: QueryEngine) -> None:
        text = textwrap.dedent("""\
            openapi: 3.0.0
            info:
              title: T
              version: "1"
            components:
              schemas:
                Error:
                  type: object
              responses:
                Error:
                  description: boom
        """)
        content = engine.hover(text, Position(6, 6))
        assert content is not None
        assert "**Type:** schemas" in content.markdown

    def test_hover_with_malformed_components(self, engine: QueryEngine) -> None:
        text = "components:\n  schemas: [Pet]\n"
        assert engine.hover(text, Position(1, 14)) is None


# ---------------------------------------------------------------------------
# Completion
# ---------------------------------------------------------------------------


class TestCompletion:
    def test_one_candidate_per_component(self, engine: QueryEngine, petstore_yaml: str) -> None:
        candidates = engine.completion(petstore_yaml, Position(0, 0))
        assert [c.label for c in candidates] == ["Pet", "NewPet", "Owner", "Error", "ApiKeyAuth"]
        assert all(c.kind == "component" for c in candidates)
        assert candidates[0].detail == "schemas component"
        assert candidates[3].detail == "responses component"

    def test_documentation_matches_hover(self, engine: QueryEngine, petstore_yaml: str) -> None:
        candidates = engine.completion(petstore_yaml, Position(0, 0))
        hover = engine.hover(petstore_yaml, _position_of(petstore_yaml, "    Owner:", "Owner"))
        assert hover is not None
        assert candidates[2].documentation == hover.markdown

    def test_invalid_document_has_no_candidates(self, engine: QueryEngine) -> None:
        text = "components:\n  schemas:\n    User: {}\n"
        assert engine.completion(text, Position(0, 0)) == []

    def test_undecodable_document_has_no_candidates(self, engine: QueryEngine) -> None:
        assert engine.completion("{", Position(0, 0)) == []

    def test_candidates_do_not_depend_on_position(
        self, engine: QueryEngine, petstore_yaml: str
    ) -> None:
        assert engine.completion(petstore_yaml, Position(0, 0)) == engine.completion(
            petstore_yaml, Position(40, 3)
        )
