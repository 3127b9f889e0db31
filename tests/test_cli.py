# tests/test_cli.py
import json

import pytest

from pingprobe.config import Settings
from pingprobe.prober.fake import FakeProber
from pingprobe.schemas import ProbeResult
from tools.ping_check import EXIT_PROBE_ERROR, EXIT_REACHABLE, EXIT_UNREACHABLE, EXIT_USAGE, main


def test_reachable_exit_code(capsys):
    fake = FakeProber(script={"10.0.0.1": ["reachable"]})
    assert main(["10.0.0.1"], settings=Settings(), prober=fake) == EXIT_REACHABLE
    assert "successful for host '10.0.0.1'" in capsys.readouterr().out


def test_unreachable_exit_code(capsys):
    fake = FakeProber()
    assert main(["10.0.0.2"], settings=Settings(), prober=fake) == EXIT_UNREACHABLE
    assert "cannot be reached" in capsys.readouterr().err


def test_probe_error_exit_code_is_distinct(capsys):
    fake = FakeProber(script={"h": [ProbeResult.error_for("h", "Unable to launch 'ping'")]})
    code = main(["h"], settings=Settings(), prober=fake)
    assert code == EXIT_PROBE_ERROR
    assert code not in (EXIT_REACHABLE, EXIT_UNREACHABLE, EXIT_USAGE)
    assert "Unable to launch" in capsys.readouterr().err


def test_flags_forwarded_to_request():
    fake = FakeProber(script={"h": ["reachable"]})
    main(["h", "-c", "5", "-t", "2.5", "-i", "0.5"], settings=Settings(), prober=fake)
    req = fake.requests[0]
    assert (req.attempts, req.timeout, req.interval) == (5, 2.5, 0.5)


def test_defaults_come_from_settings():
    fake = FakeProber(script={"h": ["reachable"]})
    main(["h"], settings=Settings(attempts=7, timeout_s=3.0), prober=fake)
    assert fake.requests[0].attempts == 7
    assert fake.requests[0].timeout == 3.0


def test_zero_count_is_usage_error_without_probing():
    fake = FakeProber()
    with pytest.raises(SystemExit) as exc:
        main(["h", "-c", "0"], settings=Settings(), prober=fake)
    assert exc.value.code == EXIT_USAGE
    assert fake.requests == []


def test_json_output(capsys):
    fake = FakeProber(script={"h": ["unreachable"]})
    assert main(["h", "--json"], settings=Settings(), prober=fake) == EXIT_UNREACHABLE
    payload = json.loads(capsys.readouterr().out)
    assert payload["status"] == "unreachable"
    assert payload["target"] == "h"


def test_bad_environment_is_usage_error(monkeypatch, clean_env, capsys):
    monkeypatch.setenv("PINGPROBE_TIMEOUT", "soon")
    assert main(["h"]) == EXIT_USAGE
    assert "PINGPROBE_TIMEOUT" in capsys.readouterr().err


def test_missing_ping_binary_end_to_end(tmp_path, capsys):
    code = main(["127.0.0.1", "--ping-bin", str(tmp_path / "nope"), "--platform", "linux"],
                settings=Settings())
    assert code == EXIT_PROBE_ERROR
    assert "Unable to launch" in capsys.readouterr().err


def test_fake_prober_script_runs_dry():
    fake = FakeProber(script={"h": ["reachable"]})
    assert fake.probe_host("h").reachable
    assert fake.probe_host("h").unreachable
    assert len(fake.requests) == 2


@pytest.mark.parametrize("flags", [["-t", "inf"], ["-i", "inf"], ["--grace", "-1"], ["--grace", "inf"]])
def test_out_of_range_numbers_are_usage_errors(flags):
    with pytest.raises(SystemExit) as exc:
        main(["h", *flags], settings=Settings())
    assert exc.value.code == EXIT_USAGE


def test_bad_log_level_is_usage_error(monkeypatch, clean_env, capsys):
    monkeypatch.setenv("LOG_LEVEL", "chatty")
    assert main(["h"]) == EXIT_USAGE
    assert "LOG_LEVEL" in capsys.readouterr().err
