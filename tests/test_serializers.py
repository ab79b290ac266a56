"""Tests for JSON and CSV output."""

import csv
import io
import json
from datetime import datetime, timezone

import pytest

from synthdata.engine.generation_engine import GenerationEngine
from synthdata.output.serializers import (
    CSV_MEDIA_TYPE,
    JSON_MEDIA_TYPE,
    iter_csv,
    iter_json,
    media_type_for,
    render,
    render_csv,
    render_json,
    should_stream,
)
from synthdata.params.base import OutputFormat
from synthdata.utils.helpers import flatten_dict, format_cell


NOW = datetime(2024, 6, 15, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def engine():
    return GenerationEngine()


def parse_csv(text):
    return list(csv.reader(io.StringIO(text)))


class TestJsonOutput:
    """Tests for JSON rendering."""

    def test_array_of_records(self, engine):
        dataset = engine.generate("users", {"count": "4", "seed": "1"}, now=NOW)
        payload = json.loads(render_json(dataset))

        assert isinstance(payload, list)
        assert len(payload) == 4

    def test_compact_encoding(self, engine):
        text = render(engine.generate("products", {"count": "2", "seed": "1"}, now=NOW))
        assert text.startswith('[{"id":"')
        assert "\n" not in text

    @pytest.mark.parametrize("kind", ["users", "products", "transactions", "dataset", "timeseries"])
    def test_streamed_matches_bulk(self, engine, kind):
        params = {"count": "30", "seed": "9"}
        bulk = render_json(engine.generate(kind, params, now=NOW))
        streamed = "".join(iter_json(engine.generate(kind, params, now=NOW)))

        assert streamed == bulk

    def test_dataset_bundle(self, engine):
        payload = json.loads(render_json(engine.generate("dataset", {"count": "6"}, now=NOW)))

        assert list(payload) == ["users", "products", "transactions"]
        assert len(payload["transactions"]) == 6

    def test_streamed_chunks_are_lazy(self, engine):
        chunks = iter_json(engine.generate("timeseries", {"count": "3"}, now=NOW))
        assert next(chunks) == "["
        assert next(chunks).startswith('{"timestamp"')


class TestCsvOutput:
    """Tests for CSV rendering."""

    def test_line_count_matches_records(self, engine):
        params = {"count": "7", "seed": "3", "format": "csv"}
        text = render_csv(engine.generate("users", params, now=NOW))
        records = json.loads(render_json(engine.generate("users", params, now=NOW)))

        assert len(parse_csv(text)) == len(records) + 1
        assert text.endswith("\n")

    def test_user_header_and_address_expansion(self, engine):
        dataset = engine.generate("users", {"count": "2", "fields": "name,address,age"}, now=NOW)
        rows = parse_csv(render_csv(dataset))

        assert rows[0] == ["name", "address", "age"]
        assert all(len(row) == 5 for row in rows[1:])

    def test_flattened_header(self, engine):
        rows = parse_csv(render_csv(engine.generate("transactions", {"count": "2"}, now=NOW)))

        assert rows[0] == [
            "id", "user.id", "user.name", "product.id", "product.name", "product.price",
            "amount", "currency", "date", "status",
        ]

    def test_cells_with_commas_are_quoted(self, engine):
        text = render_csv(engine.generate("companies", {"count": "5"}, now=NOW))
        rows = parse_csv(text)
        header = rows[0]

        assert "location" in header
        for row in rows[1:]:
            assert len(row) == len(header)
            assert ", " in row[header.index("location")]
            assert isinstance(json.loads(row[header.index("departments")]), list)

    def test_custom_columns_follow_schema(self, engine):
        dataset = engine.generate(
            "custom",
            {"count": "3", "format": "csv"},
            body={"schema": {"score": "number", "address": "address"}},
            now=NOW,
        )
        rows = parse_csv(render(dataset))

        assert rows[0] == ["score", "address"]
        assert all(len(row) == 2 for row in rows[1:])

    def test_iter_csv_yields_lines(self, engine):
        lines = list(iter_csv(engine.generate("timeseries", {"count": "3"}, now=NOW)))
        assert lines[0] == "timestamp,value\n"
        assert len(lines) == 4


class TestFormatSelection:
    """Tests for media types and streaming decisions."""

    def test_media_types(self):
        assert media_type_for(OutputFormat.JSON) == JSON_MEDIA_TYPE
        assert media_type_for(OutputFormat.CSV) == CSV_MEDIA_TYPE

    def test_should_stream(self, engine):
        assert should_stream(engine.generate("timeseries", {"count": "1001"}), threshold=1000)
        assert not should_stream(engine.generate("timeseries", {"count": "1000"}), threshold=1000)
        assert not should_stream(
            engine.generate("timeseries", {"count": "5000", "format": "csv"}),
            threshold=1000,
        )


class TestHelpers:
    """Tests for utility helpers."""

    def test_flatten_dict(self):
        assert flatten_dict({"a": 1, "b": {"c": 2, "d": {"e": 3}}}) == {
            "a": 1,
            "b.c": 2,
            "b.d.e": 3,
        }

    @pytest.mark.parametrize(
        "value, expected",
        [(None, ""), (True, "true"), (False, "false"), (1.5, "1.5"), (["a", "b"], '["a","b"]')],
    )
    def test_format_cell(self, value, expected):
        assert format_cell(value) == expected
