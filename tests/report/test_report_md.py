from __future__ import annotations

import pandas as pd
import pytest

from irisrap.analysis import clean, summarize
from irisrap.report import REQUIRED_SECTIONS, generate_report_md


def _summary(abc_table, abc_schema) -> pd.DataFrame:
    return summarize(clean(abc_table, schema=abc_schema), schema=abc_schema)


def test_report_contains_required_sections(abc_table, abc_schema):
    content = generate_report_md(
        _summary(abc_table, abc_schema),
        schema=abc_schema,
        figure_path="boxplots.png",
        run={"run_id": "r1"},
        inputs={"dataset_source": "inline", "config_hash": "abc123"},
    )

    for section in REQUIRED_SECTIONS:
        assert section in content
    assert "| category | x_mean | x_sd | n |" in content
    assert "![Boxplots of measurements by category](boxplots.png)" in content
    assert "`abc123`" in content
    assert '"run_id": "r1"' in content


def test_report_marks_undefined_statistics_as_na(abc_table, abc_schema):
    content = generate_report_md(_summary(abc_table, abc_schema), schema=abc_schema)

    # C has a single row: sd is undefined
    assert "| C | 10.000 | NA | 1 |" in content
    assert "No chart was produced" in content
    assert "all (no filtering)" in content


def test_report_is_deterministic(abc_table, abc_schema):
    summary = _summary(abc_table, abc_schema)
    kwargs = dict(schema=abc_schema, figure_path="f.png", run={"b": 2, "a": 1}, inputs={"categories": ["A"]})

    assert generate_report_md(summary, **kwargs) == generate_report_md(summary, **kwargs)


def test_report_lists_warnings(abc_table, abc_schema):
    content = generate_report_md(
        _summary(abc_table, abc_schema),
        schema=abc_schema,
        warnings={"analysis.clean": ["category 'Z' not present in the data"]},
    )
    assert "- `analysis.clean`: category 'Z' not present in the data" in content


def test_report_requires_summary_columns(abc_schema):
    with pytest.raises(ValueError, match="missing columns"):
        generate_report_md(pd.DataFrame({"category": ["A"]}), schema=abc_schema)
