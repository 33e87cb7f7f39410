import json

import pytest
from typer.testing import CliRunner

from conftest import FakeCatalog, lrc_lines
from lrcfinder.cli import app
from lrcfinder.core.models import CatalogCandidate, LyricPayload
from lrcfinder.plugins.netease import NeteasePlugin

runner = CliRunner()

HALO_ARGS = ["-t", "Halo", "-a", "Beyoncé", "-A", "I Am... Sasha Fierce", "-d", "215"]


@pytest.fixture
def catalog(monkeypatch):
    fake = FakeCatalog(
        songs=[
            CatalogCandidate(
                key="481357",
                title="Halo",
                album="I Am... Sasha Fierce",
                artists=("Beyoncé",),
                duration_ms=217_000,
            ),
            CatalogCandidate(key="99", title="Halo (Live)", duration_ms=300_000),
        ],
        lyrics={
            "481357": LyricPayload(lrc_lines(6), "[00:01.00]translated one\n"),
            "99": LyricPayload(lrc_lines(6)),
        },
    )

    async def fake_enter(self):
        self.api_client = fake
        return self

    async def fake_exit(self, exc_type, exc_val, exc_tb):
        self.api_client = None

    monkeypatch.setattr(NeteasePlugin, "__aenter__", fake_enter)
    monkeypatch.setattr(NeteasePlugin, "__aexit__", fake_exit)
    return fake


def test_search_json(catalog):
    res = runner.invoke(app, ["search", *HALO_ARGS, "--json"])
    assert res.exit_code == 0, res.output
    data = json.loads(res.output)
    assert data["mode"] == "strict"
    assert [r["id"] for r in data["results"]] == ["481357_synced"]
    assert data["results"][0]["format"] == "lrc"
    assert data["results"][0]["synced"] is True


def test_search_fuzzy_flag_overrides_settings(catalog):
    res = runner.invoke(app, ["search", *HALO_ARGS, "--fuzzy", "--exclude-album", "--json"])
    assert res.exit_code == 0, res.output
    ids = [r["id"] for r in json.loads(res.output)["results"]]
    assert ids == ["481357_synced", "99_synced"]
    assert catalog.search_calls[0]["album"] is None
    assert catalog.search_calls[0]["artist"] == "Beyoncé"


def test_search_show_prints_merged_lyrics(catalog):
    res = runner.invoke(app, ["search", *HALO_ARGS, "--show"])
    assert res.exit_code == 0, res.output
    assert "[00:01.000]line 1\n[00:01.000]translated one\n" in res.output


def test_search_missing_fields_exits_1(catalog):
    res = runner.invoke(app, ["search", "-t", "Halo"])
    assert res.exit_code == 1
    assert "No lyrics found" in res.output
    assert catalog.search_calls == []


@pytest.mark.parametrize("limit", ["0", "-7", "101"])
def test_search_rejects_out_of_range_limit(catalog, limit):
    res = runner.invoke(app, ["search", *HALO_ARGS, "--limit", limit, "--json"])
    assert res.exit_code == 1
    assert "Invalid value" in res.output
    assert catalog.search_calls == []


def test_search_limit_reaches_catalog(catalog):
    res = runner.invoke(app, ["search", *HALO_ARGS, "--limit", "10", "--json"])
    assert res.exit_code == 0, res.output
    assert catalog.search_calls[0]["limit"] == 10


def test_fetch_plain(catalog):
    res = runner.invoke(app, ["fetch", "481357_plain"])
    assert res.exit_code == 0, res.output
    assert res.output == "[00:01.00]translated one\n"


def test_fetch_json(catalog):
    res = runner.invoke(app, ["fetch", "481357_synced", "--json"])
    assert res.exit_code == 0, res.output
    data = json.loads(res.output)
    assert data["format"] == "lrc"
    assert data["lyrics"] == lrc_lines(6)


def test_fetch_not_found(catalog):
    res = runner.invoke(app, ["fetch", "99_plain"])
    assert res.exit_code == 2


def test_fetch_malformed_id(catalog):
    res = runner.invoke(app, ["fetch", "not-an-id"])
    assert res.exit_code == 2
    assert catalog.lyric_calls == []
