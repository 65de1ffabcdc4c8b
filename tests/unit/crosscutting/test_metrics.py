"""
Name: Pipeline Metrics Unit Tests

Responsibilities:
  - Validate counters are registered on the private registry
  - Validate label values are recorded
"""

from unittest.mock import patch

import pytest

from fragment_extraction.crosscutting.metrics import (
    get_metrics_registry,
    observe_run_duration,
    record_chunk_outcome,
    record_run,
    record_worker_job,
    render_metrics,
    start_metrics_server,
)

pytestmark = pytest.mark.unit


def _value(name, labels=None):
    return get_metrics_registry().get_sample_value(name, labels or {}) or 0.0


def test_record_chunk_outcome_increments_label():
    before = _value("fragment_chunk_outcomes_total", {"outcome": "failure"})

    record_chunk_outcome("failure")

    assert _value("fragment_chunk_outcomes_total", {"outcome": "failure"}) == before + 1


def test_record_run_counts_fragments():
    before_runs = _value("fragment_runs_total", {"outcome": "extracted"})
    before_fragments = _value("fragment_fragments_extracted_total")

    record_run("extracted", fragments=4)

    assert _value("fragment_runs_total", {"outcome": "extracted"}) == before_runs + 1
    assert _value("fragment_fragments_extracted_total") == before_fragments + 4


def test_render_metrics_exposes_text_format():
    observe_run_duration(0.2)
    record_worker_job("SUCCEEDED")

    payload = render_metrics().decode("utf-8")

    assert "fragment_run_duration_seconds" in payload
    assert 'fragment_worker_jobs_total{status="SUCCEEDED"}' in payload


def test_start_metrics_server_serves_private_registry():
    with patch("fragment_extraction.crosscutting.metrics.start_http_server") as start:
        start_metrics_server(9300)

    start.assert_called_once_with(9300, addr="0.0.0.0", registry=get_metrics_registry())


def test_start_metrics_server_disabled_with_port_zero():
    with patch("fragment_extraction.crosscutting.metrics.start_http_server") as start:
        assert start_metrics_server(0) is None

    start.assert_not_called()
