"""Unit tests for schema binding and constraint enforcement."""

import json

import pytest

from chatbind.core.result_primitives import Failure, Success
from chatbind.core.schema import FieldSpec, SchemaDescription
from chatbind.errors import ObjectParseError
from chatbind.extraction.binding import (
    bind,
    bind_object,
    clip_text,
    enforce,
    parse_object,
)
from chatbind.extraction.results import ExtractionDiagnostics
from chatbind.schemas import MOVIE_DETAILS, RECIPE
from tests.helpers import MOVIE
from tests.helpers import RECIPE as RECIPE_DATA

pytestmark = pytest.mark.unit


class TestParseObject:
    def test_object(self):
        assert parse_object('{"a": 1}') == Success({"a": 1})

    @pytest.mark.parametrize("text", ['{"a": }', "{", "{'single': 'quotes'}"])
    def test_invalid_json(self, text):
        result = parse_object(text)
        assert isinstance(result, Failure)
        assert isinstance(result.error, ObjectParseError)
        assert "not valid JSON" in str(result.error)

    @pytest.mark.parametrize("text", ["[1, 2]", '"text"', "42", "null"])
    def test_non_object_root(self, text):
        result = parse_object(text)
        assert isinstance(result, Failure)
        assert "expected a JSON object" in str(result.error)


class TestTextFields:
    schema = SchemaDescription("t", (FieldSpec.text("name", 5),))

    def test_takes_string(self):
        assert bind_object({"name": "abc"}, self.schema) == {"name": "abc"}

    @pytest.mark.parametrize("value", [None, 3, ["abc"], {"x": "y"}, True])
    def test_wrong_type_defaults_to_empty(self, value):
        assert bind_object({"name": value}, self.schema) == {"name": ""}

    def test_missing_defaults_to_empty(self):
        assert bind_object({}, self.schema) == {"name": ""}

    def test_trims_then_clips(self):
        assert bind_object({"name": "   abcdefgh  "}, self.schema) == {"name": "abcde"}

    def test_unbounded_text(self):
        schema = SchemaDescription("t", (FieldSpec.text("name"),))
        long = "x" * 10_000
        assert bind_object({"name": long}, schema) == {"name": long}


class TestIntegerFields:
    schema = SchemaDescription("i", (FieldSpec.integer("year"),))

    @pytest.mark.parametrize(
        ("value", "expected"),
        [(1999, 1999), (-4, -4), (1999.0, 1999), (1999.9, 1999), (-2.5, -2)],
    )
    def test_numbers(self, value, expected):
        assert bind_object({"year": value}, self.schema) == {"year": expected}

    @pytest.mark.parametrize("value", ["1999", None, True, False, [1999], float("nan"), float("inf")])
    def test_non_numbers_default_to_zero(self, value):
        assert bind_object({"year": value}, self.schema) == {"year": 0}

    def test_missing_defaults_to_zero(self):
        assert bind_object({}, self.schema) == {"year": 0}

    def test_oversized_integer_only_defaults_its_field(self):
        schema = SchemaDescription(
            "i", (FieldSpec.integer("year"), FieldSpec.text("title"))
        )
        text = '{"year": ' + "9" * 5000 + ', "title": "Heat"}'
        assert bind(text, schema) == Success({"year": 0, "title": "Heat"})


class TestTextListFields:
    schema = SchemaDescription("l", (FieldSpec.text_list("tags", 3, 4),))

    def test_takes_text_items_in_order(self):
        assert bind_object({"tags": ["a", "b"]}, self.schema) == {"tags": ["a", "b"]}

    def test_stops_at_max_items(self):
        data = {"tags": ["1", "2", "3", "4", "5"]}
        assert bind_object(data, self.schema) == {"tags": ["1", "2", "3"]}

    def test_skips_non_text_items_before_counting(self):
        data = {"tags": [1, "a", None, "b", {"c": 1}, "c", "d"]}
        assert bind_object(data, self.schema) == {"tags": ["a", "b", "c"]}

    def test_trims_and_clips_each_item(self):
        data = {"tags": ["  alpha  ", "be", " gamma"]}
        assert bind_object(data, self.schema) == {"tags": ["alph", "be", "gamm"]}

    def test_whitespace_items_are_kept_as_empty(self):
        assert bind_object({"tags": ["  ", "a"]}, self.schema) == {"tags": ["", "a"]}

    @pytest.mark.parametrize("value", ["a,b", None, 3, {"0": "a"}])
    def test_non_array_defaults_to_empty(self, value):
        assert bind_object({"tags": value}, self.schema) == {"tags": []}


class TestClipText:
    def test_exact_prefix(self):
        assert clip_text("x" * 120, 100) == "x" * 100

    def test_whitespace_at_cut_is_trimmed(self):
        assert clip_text("abc def", 4) == "abc"

    def test_counts_code_points(self):
        assert clip_text("\U0001F3AC" * 3 + "abc", 4) == "\U0001F3AC" * 3 + "a"

    def test_clip_is_stable(self):
        once = clip_text("  hello   world  ", 8)
        assert clip_text(once, 8) == once

    def test_enforce_leaves_integers_alone(self):
        assert enforce(7, FieldSpec.integer("n")) == 7


class TestBindDeclaredSchemas:
    def test_movie_in_bounds_is_verbatim(self):
        result = bind(json.dumps(MOVIE), MOVIE_DETAILS)
        assert result == Success(MOVIE)

    def test_recipe_in_bounds_is_verbatim(self):
        result = bind(json.dumps(RECIPE_DATA), RECIPE)
        assert result == Success(RECIPE_DATA)

    def test_movie_limits(self):
        data = dict(
            MOVIE,
            title="T" * 120,
            genres=[f"g{i}" for i in range(7)],
            actors=["A" * 70] * 12,
        )
        result = bind(json.dumps(data), MOVIE_DETAILS)
        assert isinstance(result, Success)
        record = result.value
        assert record["title"] == "T" * 100
        assert record["genres"] == ["g0", "g1", "g2", "g3", "g4"]
        assert record["actors"] == ["A" * 60] * 10

    def test_recipe_step_limits(self):
        data = dict(RECIPE_DATA, steps=["s" * 400] * 11, totalTime="t" * 31)
        result = bind(json.dumps(data), RECIPE)
        assert isinstance(result, Success)
        assert result.value["steps"] == ["s" * 300] * 10
        assert result.value["totalTime"] == "t" * 30

    def test_missing_director(self):
        data = {k: v for k, v in MOVIE.items() if k != "director"}
        result = bind(json.dumps(data), MOVIE_DETAILS)
        assert isinstance(result, Success)
        assert result.value["director"] == ""
        assert result.value["title"] == MOVIE["title"]
        assert result.value["actors"] == MOVIE["actors"]

    def test_unknown_keys_are_ignored(self):
        result = bind(json.dumps(dict(MOVIE, rating="PG")), MOVIE_DETAILS)
        assert isinstance(result, Success)
        assert "rating" not in result.value
        assert list(result.value) == list(MOVIE_DETAILS.field_names)

    def test_empty_object_binds_to_defaults(self):
        assert bind("{}", MOVIE_DETAILS) == Success(
            {"title": "", "year": 0, "director": "", "genres": [], "actors": []}
        )


class TestBindingDiagnostics:
    def test_records_violations_without_changing_outcome(self):
        diag = ExtractionDiagnostics()
        data = {
            "title": "T" * 120,
            "year": "1949",
            "genres": ["a", 1, "b", "c", "d", "e", "f"],
        }
        record = bind_object(data, MOVIE_DETAILS, diag)
        assert record == bind_object(data, MOVIE_DETAILS)

        messages = [v.message for v in diag.violations]
        assert "Missing required field: director" in messages
        assert "Missing required field: actors" in messages
        assert any("year: expected integer, got str" in m for m in messages)
        assert any("skipped 1 non-text" in m for m in messages)
        assert any("dropped 1 item(s) over max_items=5" in m for m in messages)
        assert any("title: clipped to 100" in m for m in messages)

        missing = [v for v in diag.violations if v.message.startswith("Missing")]
        assert {v.severity for v in missing} == {"error"}

    def test_optional_missing_is_info(self):
        schema = SchemaDescription("o", (FieldSpec.text("note", required=False),))
        diag = ExtractionDiagnostics()
        bind_object({}, schema, diag)
        assert [(v.severity, v.field) for v in diag.violations] == [("info", "note")]
