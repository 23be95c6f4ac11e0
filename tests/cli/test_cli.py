import pytest
import yaml

from mutalyzer_ld import cli
from mutalyzer_ld.cli import main


@pytest.fixture
def patched_wrapper(monkeypatch, fake_wrapper):
    monkeypatch.setattr(cli, "wrapper_from_settings", lambda settings: fake_wrapper)
    return fake_wrapper


def test_operations(runner):
    result = runner.invoke(main, ["operations"])
    assert result.exit_code == 0
    summary = yaml.safe_load(result.output)
    assert summary["runMutalyzer"]["parameters"] == ["variant"]
    assert "text/turtle" in summary["info"]["produces"]


def test_call_json(runner, patched_wrapper):
    result = runner.invoke(main, ["call", "info"])
    assert result.exit_code == 0
    assert '"version": "2.0.35"' in result.output


def test_call_turtle(runner, patched_wrapper):
    result = runner.invoke(
        main, ["call", "getTranscriptsAndInfo", "-p", "genomicReference=NC_000011.9", "-f", "ttl"]
    )
    assert result.exit_code == 0
    assert "<http://www.ncbi.nlm.nih.gov/nuccore/NC_000011.9>" in result.output
    assert patched_wrapper.calls == [("getTranscriptsAndInfo", {"genomicReference": "NC_000011.9"})]


def test_call_missing_parameter(runner, patched_wrapper):
    result = runner.invoke(main, ["call", "runMutalyzer"])
    assert result.exit_code != 0
    assert "variant" in result.output
    assert patched_wrapper.calls == []


def test_call_unknown_operation(runner, patched_wrapper):
    result = runner.invoke(main, ["call", "checkSyntax"])
    assert result.exit_code != 0


def test_call_not_acceptable(runner, patched_wrapper):
    result = runner.invoke(main, ["call", "info", "-f", "application/xml"])
    assert result.exit_code == 1
