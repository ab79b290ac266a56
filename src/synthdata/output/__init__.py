"""Output module - JSON and CSV rendering of generated datasets."""

from synthdata.output.serializers import (
    iter_csv,
    iter_json,
    media_type_for,
    render,
    render_csv,
    render_json,
    should_stream,
)

__all__ = [
    "iter_csv",
    "iter_json",
    "media_type_for",
    "render",
    "render_csv",
    "render_json",
    "should_stream",
]
