"""Tests for the command-line interface."""

from click.testing import CliRunner

from osrm_client import cli as cli_module
from osrm_client.cli import cli
from osrm_client.data.responses import NearestResponse, TableResponse
from osrm_client.errors import NoRouteError

BASE = ["--base-url", "http://osrm.test"]
BERLIN = ["13.388860,52.517037", "13.397634,52.529407"]


def test_route_show_url():
    """Test that --show-url prints the request URL without sending it."""
    runner = CliRunner()
    result = runner.invoke(cli, BASE + ["route", *BERLIN, "--steps", "--show-url"])

    assert result.exit_code == 0
    assert result.output.strip() == (
        "http://osrm.test/route/v1/driving/13.388860,52.517037;13.397634,52.529407?steps=true"
    )


def test_route_rejects_bad_coordinate():
    runner = CliRunner()
    result = runner.invoke(cli, BASE + ["route", "13.38", "north"])

    assert result.exit_code == 2


def test_route_reports_engine_errors(monkeypatch):
    def fail(config, request):
        raise NoRouteError("NoRoute", "Impossible route between points")

    monkeypatch.setattr(cli_module, "send", fail)
    runner = CliRunner()
    result = runner.invoke(cli, BASE + ["route", *BERLIN])

    assert result.exit_code == 1
    assert "NoRoute: Impossible route between points" in result.output


def test_nearest(monkeypatch, waypoint):
    sent = []

    def fake_send(config, request):
        sent.append((config, request))
        return NearestResponse.model_validate({"waypoints": [waypoint]})

    monkeypatch.setattr(cli_module, "send", fake_send)
    runner = CliRunner()
    result = runner.invoke(cli, BASE + ["nearest", "4.516,50.859", "--number", "1"])

    assert result.exit_code == 0
    assert "Jagersstraat" in result.output
    config, request = sent[0]
    assert config.base_url == "http://osrm.test"
    assert request.number == 1


def test_table(monkeypatch):
    sent = []

    def fake_send(config, request):
        sent.append(request)
        return TableResponse.model_validate({"durations": [[0.0, 600.0], [None, 0.0]]})

    monkeypatch.setattr(cli_module, "send", fake_send)
    runner = CliRunner()
    result = runner.invoke(cli, BASE + ["table", *BERLIN, "--sources", "0;1"])

    assert result.exit_code == 0
    assert "Durations (min):" in result.output
    assert "10.000" in result.output
    assert sent[0].sources == (0, 1)
