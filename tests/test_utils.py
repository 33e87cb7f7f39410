import asyncio
import json
import logging

import pytest

from lrcfinder.core.logging_util import setup_logging
from lrcfinder.core.ratelimit import AsyncRateLimiter


@pytest.mark.asyncio
async def test_rate_limiter_allows_burst_then_waits(monkeypatch):
    sleeps = []

    async def fake_sleep(delay):
        sleeps.append(delay)
        # pretend a full window has passed
        limiter._updated -= limiter.per

    limiter = AsyncRateLimiter(2, per=1.0)
    monkeypatch.setattr(asyncio, "sleep", fake_sleep)
    await limiter.acquire()
    await limiter.acquire()
    assert sleeps == []
    await limiter.acquire()
    assert sleeps == [0.5]


def test_setup_logging_levels():
    setup_logging(verbose=True)
    assert logging.getLogger().level == logging.DEBUG
    assert logging.getLogger("aiohttp").level == logging.NOTSET
    setup_logging(quiet=True)
    assert logging.getLogger().level == logging.WARNING
    setup_logging(verbose=True, quiet=True)
    assert logging.getLogger().level == logging.WARNING
    setup_logging()
    assert logging.getLogger().level == logging.INFO
    assert logging.getLogger("aiohttp").level == logging.WARNING


def test_json_log_lines(capsys):
    setup_logging(json_logs=True)
    logging.getLogger("lrcfinder.test").info("Artist name is required")
    line = capsys.readouterr().err.strip().splitlines()[-1]
    record = json.loads(line)
    assert record["level"] == "INFO"
    assert record["name"] == "lrcfinder.test"
    assert record["message"] == "Artist name is required"
    assert record["module"] == "test_utils"
    assert isinstance(record["line"], int)
    assert record["ts"].endswith("+00:00")
    assert "lyric_id" not in record


def test_json_log_lines_carry_lyric_context(capsys):
    setup_logging(json_logs=True)
    logging.getLogger("lrcfinder.test").warning(
        "lyrics unavailable", extra={"lyric_id": "481357_plain", "catalog_key": "481357"}
    )
    record = json.loads(capsys.readouterr().err.strip().splitlines()[-1])
    assert record["lyric_id"] == "481357_plain"
    assert record["catalog_key"] == "481357"
