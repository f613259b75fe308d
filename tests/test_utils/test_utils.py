"""Tests for commerce_scoring/utils: random streams, time helpers, logging setup."""

from __future__ import annotations

import json
import logging
import zlib
from datetime import datetime, timedelta, timezone

import pytest

from commerce_scoring.config import LoggingConfig
from commerce_scoring.endpoints.analysis import SentimentEndpoint
from commerce_scoring.utils.logging import JsonFormatter, configure_logging
from commerce_scoring.utils.random_utils import (
    seed_entropy,
    seeded_generator,
    uniform_int,
    unit_float,
)
from commerce_scoring.utils.time_utils import days_from, utcnow


class TestRandomUtils:
    def test_seed_entropy_coercion(self):
        assert seed_entropy(7) == [7]
        assert seed_entropy(-1) == [2**32 - 1]
        assert seed_entropy("Books") == [zlib.crc32(b"Books")]
        assert seed_entropy(None) == [0]
        assert seed_entropy() == [0]

    def test_equal_keys_equal_streams(self):
        a = seeded_generator(42, "hybrid")
        b = seeded_generator(42, "hybrid")
        assert [uniform_int(a, 0, 1000) for _ in range(10)] == [
            uniform_int(b, 0, 1000) for _ in range(10)
        ]

    def test_different_keys_differ(self):
        a = seeded_generator(42, "hybrid")
        b = seeded_generator(42, "content")
        assert [unit_float(a) for _ in range(5)] != [unit_float(b) for _ in range(5)]

    def test_uniform_int_half_open(self):
        rng = seeded_generator(1)
        draws = {uniform_int(rng, -2, 2) for _ in range(500)}
        assert draws == {-2, -1, 0, 1}
        assert all(type(d) is int for d in draws)

    def test_unit_float_range(self):
        rng = seeded_generator(1)
        values = [unit_float(rng) for _ in range(500)]
        assert all(0.0 <= v < 1.0 for v in values)
        assert type(values[0]) is float


class TestTimeUtils:
    def test_utcnow_is_aware(self):
        assert utcnow().tzinfo is not None

    def test_days_from(self):
        base = datetime(2026, 1, 1, tzinfo=timezone.utc)
        assert days_from(base, 3) == base + timedelta(days=3)
        assert days_from(base, -1) == datetime(2025, 12, 31, tzinfo=timezone.utc)


class TestLogging:
    @pytest.fixture(autouse=True)
    def _restore_root_logger(self):
        root = logging.getLogger()
        handlers, level = root.handlers[:], root.level
        yield
        for handler in root.handlers:
            if handler not in handlers:
                handler.close()
        root.handlers[:] = handlers
        root.setLevel(level)

    def test_configure_level(self):
        configure_logging(LoggingConfig(level="WARNING"))
        assert logging.getLogger().level == logging.WARNING

    def test_file_handler(self, tmp_path):
        log_file = tmp_path / "logs" / "service.log"
        configure_logging(LoggingConfig(level="INFO", log_file=str(log_file)))
        logging.getLogger("commerce_scoring.test").info("hello file")
        for handler in logging.getLogger().handlers:
            handler.flush()
        assert "hello file" in log_file.read_text(encoding="utf-8")

    def test_json_formatter(self):
        record = logging.LogRecord(
            "commerce_scoring.x", logging.INFO, __file__, 1, "scored %d", (3,), None,
        )
        record.request_id = "abc"
        payload = json.loads(JsonFormatter().format(record))
        assert payload["level"] == "INFO"
        assert payload["logger"] == "commerce_scoring.x"
        assert payload["msg"] == "scored 3"
        assert payload["request_id"] == "abc"
        assert payload["ts"].endswith("Z")

    def test_json_endpoint_lines(self, tmp_path, context):
        log_file = tmp_path / "service.log"
        configure_logging(
            LoggingConfig(level="INFO", log_file=str(log_file), json_format=True),
        )
        SentimentEndpoint(context).run(text="Great product")
        for handler in logging.getLogger().handlers:
            handler.flush()
        lines = [json.loads(line) for line in log_file.read_text(encoding="utf-8").splitlines()]
        endpoint_lines = [p for p in lines if p["logger"] == "commerce_scoring.endpoints.base"]
        assert [p["endpoint"] for p in endpoint_lines] == ["sentiment", "sentiment"]
        assert "status_code" not in endpoint_lines[0]
        assert endpoint_lines[-1]["status_code"] == 200
        assert endpoint_lines[-1]["msg"] == "Endpoint [sentiment] completed | status=200"
