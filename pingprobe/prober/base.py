# pingprobe/prober/base.py
from abc import ABC, abstractmethod

from pingprobe.schemas import ProbeRequest, ProbeResult


class Prober(ABC):
    @abstractmethod
    def probe(self, request: ProbeRequest) -> ProbeResult:
        """Run exactly one reachability check for request.target and return its verdict."""
        raise NotImplementedError

    def probe_host(self, target: str, **kw) -> ProbeResult:
        """Shorthand for probe(ProbeRequest(target, **kw))."""
        return self.probe(ProbeRequest(target, **kw))
