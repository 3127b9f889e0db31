# pingprobe/prober/fake.py
from collections import deque

from pingprobe.prober.base import Prober
from pingprobe.schemas import ProbeRequest, ProbeResult


class FakeProber(Prober):
    """
    script: dict[target] -> list of ProbeResult (or status strings) to return per call.
    Once a target's script runs dry, returns an unreachable result.
    Every request seen is appended to .requests.
    """
    def __init__(self, script=None):
        self.script = {}
        self.requests = []
        if script:
            for k, v in script.items():
                self.script[k] = deque(v)

    def probe(self, request: ProbeRequest) -> ProbeResult:
        self.requests.append(request)
        dq = self.script.get(request.target)
        if dq:
            nxt = dq.popleft()
            if isinstance(nxt, ProbeResult):
                return nxt
            if nxt == "reachable":
                return ProbeResult.reachable_for(request.target, returncode=0)
            if nxt == "unreachable":
                return ProbeResult.unreachable_for(request.target, returncode=1)
            return ProbeResult.error_for(request.target, f"scripted failure: {nxt}")
        # default: no reply
        return ProbeResult.unreachable_for(request.target, returncode=1)
