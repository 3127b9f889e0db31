# tests/test_live_ping.py
# Talks to the real network stack through the system ping.
import shutil
import time

import pytest

from pingprobe.prober.ping import PingProber
from pingprobe.schemas import ProbeRequest

pytestmark = [
    pytest.mark.network,
    pytest.mark.skipif(shutil.which("ping") is None, reason="no ping executable on PATH"),
]


def _usable(res):
    # containers often ship ping without the capability it needs
    if res.failed:
        pytest.skip(f"system ping unusable here: {res.diagnostic}")
    return res


def test_loopback_is_reachable():
    prober = PingProber()
    res = _usable(prober.probe(ProbeRequest("127.0.0.1", attempts=1, timeout=2)))
    assert res.reachable


def test_loopback_is_reachable_every_time():
    prober = PingProber()
    for _ in range(3):
        assert _usable(prober.probe(ProbeRequest("127.0.0.1", attempts=1, timeout=2))).reachable


def test_test_net_address_is_unreachable_within_budget():
    prober = PingProber(grace_s=2.0)
    req = ProbeRequest("192.0.2.1", attempts=2, timeout=1, interval=0.2)
    started = time.monotonic()
    res = _usable(prober.probe(req))
    assert res.unreachable
    assert time.monotonic() - started <= req.budget_s + 2.0 + 1.0
