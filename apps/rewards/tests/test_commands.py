import io
import json

import httpx
import pytest
from django.core.management import call_command
from django.core.management.base import CommandError

ROWS = {
    "alice": [{"topic_id": "BILLIONS", "duration": "3M", "tier": "tier1", "mindshare": 100, "rank": 5}],
    "bob": [{"topic_id": "BILLIONS", "duration": "6M", "tier": "tier2", "mindshare": 10, "rank": 40}],
}


def run(*args, **options):
    out, err = io.StringIO(), io.StringIO()
    call_command("estimate_rewards", *args, stdout=out, stderr=err, **options)
    return out.getvalue(), err.getvalue()


def test_json_estimate(upstream):
    upstream.add_rows(ROWS)

    out, _ = run("billions", "@alice", "--json", "--fdv", "3e9")

    data = json.loads(out)
    assert data["handle"] == "alice"
    assert data["fdv"] == 3e9
    assert data["worth_usd"] == pytest.approx(3 * 1e7 * 100 / 450)


def test_pretty_estimate(upstream):
    upstream.add_rows(ROWS)

    out, _ = run("billions", "bob")

    assert "@bob on billions" in out
    assert "BLNS" in out


def test_compare(upstream):
    upstream.add_rows(ROWS)

    out, _ = run("billions", "bob", "--compare", "alice", "--json")

    assert json.loads(out)["leader"] == "alice"


def test_unknown_project():
    with pytest.raises(CommandError, match="Unknown project"):
        run("nope", "alice")


def test_handles_required():
    with pytest.raises(CommandError, match="At least one handle"):
        run("billions")


def test_failed_lookup_is_reported(upstream):
    upstream.add("/kaito/leaderboard-search", httpx.Response(502))

    with pytest.raises(CommandError, match="1 of 1 lookups failed"):
        run("billions", "alice")


def test_stdin_reports_latest_handle(upstream):
    upstream.add_rows(ROWS)

    out, _ = run("billions", "--stdin", "--json", stdin_stream=io.StringIO("\n@bob\n"))

    assert json.loads(out)["handle"] == "bob"
