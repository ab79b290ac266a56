"""Output serializers for generated datasets.

Every serializer consumes the dataset's lazy record iterator. Bulk JSON
materializes it first; streamed JSON writes each record as it is pulled.
Both produce the same bytes for the same records.
"""

from itertools import chain
from typing import Any, Iterator
import csv
import io
import json

from synthdata.engine.generation_engine import GeneratedDataset
from synthdata.params.base import OutputFormat
from synthdata.utils.helpers import flatten_dict, format_cell


JSON_MEDIA_TYPE = "application/json"
CSV_MEDIA_TYPE = "text/csv"

DEFAULT_STREAMING_THRESHOLD = 1000

# Nested columns expanded in place for field-selected records
NESTED_COLUMNS = {
    "address": ("street", "city", "country"),
}


def dumps(value: Any) -> str:
    """Compact JSON encoding shared by every JSON writer."""
    return json.dumps(value, ensure_ascii=False, separators=(",", ":"))


def media_type_for(output_format: OutputFormat) -> str:
    if output_format == OutputFormat.CSV:
        return CSV_MEDIA_TYPE
    return JSON_MEDIA_TYPE


def should_stream(dataset: GeneratedDataset, threshold: int = DEFAULT_STREAMING_THRESHOLD) -> bool:
    """Large JSON responses are streamed rather than rendered in one piece."""
    return dataset.config.format == OutputFormat.JSON and dataset.count > threshold


def _json_prefix(dataset: GeneratedDataset) -> str:
    if dataset.envelope is None:
        return "["
    members = "".join(f"{dumps(key)}:{dumps(value)}," for key, value in dataset.envelope.items())
    return "{" + members + dumps(dataset.records_key) + ":["


def _json_suffix(dataset: GeneratedDataset) -> str:
    return "]" if dataset.envelope is None else "]}"


def iter_json(dataset: GeneratedDataset) -> Iterator[str]:
    """Yield the JSON body chunk by chunk, one record per chunk.

    Args:
        dataset: Dataset whose records have not been consumed yet

    Yields:
        Text chunks that concatenate to the full JSON document
    """
    yield _json_prefix(dataset)
    for i, record in enumerate(dataset.records):
        yield ("," if i else "") + dumps(record)
    yield _json_suffix(dataset)


def render_json(dataset: GeneratedDataset) -> str:
    """Render the whole JSON body at once."""
    records = dataset.materialize()
    return _json_prefix(dataset) + ",".join(dumps(r) for r in records) + _json_suffix(dataset)


def _selected_row(record: dict[str, Any], columns: list[str]) -> list[str]:
    row: list[str] = []
    for column in columns:
        value = record.get(column)
        sub_columns = NESTED_COLUMNS.get(column)
        if sub_columns is not None and isinstance(value, dict):
            row.extend(format_cell(value.get(sub)) for sub in sub_columns)
        else:
            row.append(format_cell(value))
    return row


def _flattened_row(record: dict[str, Any], columns: list[str]) -> list[str]:
    flat = flatten_dict(record)
    return [format_cell(flat.get(column)) for column in columns]


def iter_csv(dataset: GeneratedDataset) -> Iterator[str]:
    """Yield CSV text one line at a time, header first.

    Field-selected kinds (users, custom) use their requested columns as the
    header, and ``address`` expands into street, city and country values where
    it appears. Other kinds use the flattened keys of the first record.
    Cells are quoted by the csv module when they contain a delimiter.
    """
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")

    def flush() -> str:
        text = buffer.getvalue()
        buffer.seek(0)
        buffer.truncate(0)
        return text

    records = iter(dataset.records)
    if dataset.columns is not None:
        header = list(dataset.columns)
        rows = (_selected_row(record, header) for record in records)
    else:
        first = next(records, None)
        if first is None:
            return
        header = list(flatten_dict(first))
        rows = (_flattened_row(record, header) for record in chain([first], records))

    writer.writerow(header)
    yield flush()
    for row in rows:
        writer.writerow(row)
        yield flush()


def render_csv(dataset: GeneratedDataset) -> str:
    return "".join(iter_csv(dataset))


def render(dataset: GeneratedDataset) -> str:
    """Render a dataset in its configured format as a single string."""
    if dataset.config.format == OutputFormat.CSV:
        return render_csv(dataset)
    return render_json(dataset)
