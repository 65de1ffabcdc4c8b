"""
Name: Worker Process Tests

Responsibilities:
  - Validate main() pings Redis, exposes /metrics and starts the RQ worker
  - Validate fail-fast when REDIS_URL is missing
"""

from unittest.mock import MagicMock, patch

import pytest

from fragment_extraction.worker.worker import main

pytestmark = pytest.mark.unit


def test_main_starts_metrics_server_before_working(monkeypatch):
    monkeypatch.setenv("REDIS_URL", "redis://localhost:6379/0")
    monkeypatch.setenv("METRICS_PORT", "9200")
    redis_conn = MagicMock()
    calls = []

    with patch(
        "fragment_extraction.worker.worker._build_redis_connection", return_value=redis_conn
    ):
        with patch(
            "fragment_extraction.worker.worker.start_metrics_server",
            side_effect=lambda port: calls.append(("metrics", port)),
        ):
            with patch("fragment_extraction.worker.worker.Queue"):
                with patch("fragment_extraction.worker.worker.Worker") as worker_cls:
                    worker_cls.return_value.work.side_effect = lambda **kw: calls.append(
                        ("work", kw)
                    )
                    main()

    redis_conn.ping.assert_called_once()
    assert calls == [("metrics", 9200), ("work", {"with_scheduler": False})]


def test_main_requires_redis_url(monkeypatch):
    monkeypatch.delenv("REDIS_URL", raising=False)

    with patch("fragment_extraction.worker.worker.start_metrics_server") as start:
        with pytest.raises(SystemExit):
            main()

    start.assert_not_called()
