# pingprobe/schemas.py
import math
from dataclasses import asdict, dataclass, field
from typing import Literal, Optional

from pingprobe.errors import ConfigurationError, ExecutionError

ProbeStatus = Literal["reachable", "unreachable", "error"]

DEFAULT_ATTEMPTS = 3
DEFAULT_TIMEOUT_S = 1.0
DEFAULT_INTERVAL_S = 0.2


@dataclass(frozen=True)
class ProbeRequest:
    target: str
    attempts: int = DEFAULT_ATTEMPTS
    timeout: float = DEFAULT_TIMEOUT_S     # per-attempt wait, seconds
    interval: float = DEFAULT_INTERVAL_S   # gap between echo requests, seconds

    def __post_init__(self):
        if not isinstance(self.target, str) or not self.target.strip():
            raise ConfigurationError("target must be a non-empty host name or IP address")
        if self.target != self.target.strip():
            raise ConfigurationError(f"target {self.target!r} has surrounding whitespace")
        if self.target.startswith("-"):
            # ping would read it as an option
            raise ConfigurationError(f"target {self.target!r} must not start with '-'")
        if "\x00" in self.target:
            raise ConfigurationError(f"target {self.target!r} contains a NUL byte")
        if isinstance(self.attempts, bool) or not isinstance(self.attempts, int):
            raise ConfigurationError(f"attempts must be an integer, got {self.attempts!r}")
        if self.attempts < 1:
            raise ConfigurationError(f"attempts must be at least 1, got {self.attempts}")
        if isinstance(self.timeout, bool) or not isinstance(self.timeout, (int, float)):
            raise ConfigurationError(f"timeout must be a number of seconds, got {self.timeout!r}")
        if not math.isfinite(self.timeout) or self.timeout <= 0:
            raise ConfigurationError(f"timeout must be a positive finite number, got {self.timeout}")
        if isinstance(self.interval, bool) or not isinstance(self.interval, (int, float)):
            raise ConfigurationError(f"interval must be a number of seconds, got {self.interval!r}")
        if not math.isfinite(self.interval) or self.interval < 0:
            raise ConfigurationError(f"interval must be a non-negative finite number, got {self.interval}")

    @property
    def budget_s(self) -> float:
        """Longest a well-behaved ping should take to finish this request."""
        return self.attempts * (self.timeout + self.interval)


@dataclass(frozen=True)
class ProbeResult:
    status: ProbeStatus
    target: str
    diagnostic: Optional[str] = None
    returncode: Optional[int] = None
    command: tuple[str, ...] = field(default_factory=tuple)
    stdout: str = ""
    stderr: str = ""
    elapsed: float = 0.0

    @classmethod
    def reachable_for(cls, target: str, **kw) -> "ProbeResult":
        return cls(status="reachable", target=target, **kw)

    @classmethod
    def unreachable_for(cls, target: str, diagnostic: Optional[str] = None, **kw) -> "ProbeResult":
        if diagnostic is None:
            diagnostic = f"Host '{target}' cannot be reached over a network ICMP ping"
        return cls(status="unreachable", target=target, diagnostic=diagnostic, **kw)

    @classmethod
    def error_for(cls, target: str, diagnostic: str, **kw) -> "ProbeResult":
        return cls(status="error", target=target, diagnostic=diagnostic, **kw)

    @property
    def reachable(self) -> bool:
        return self.status == "reachable"

    @property
    def unreachable(self) -> bool:
        return self.status == "unreachable"

    @property
    def failed(self) -> bool:
        return self.status == "error"

    def raise_for_error(self) -> "ProbeResult":
        """Raise ExecutionError if the probe itself failed; otherwise return self."""
        if self.failed:
            raise ExecutionError(self.diagnostic or "ping failed", result=self)
        return self

    def as_dict(self) -> dict:
        d = asdict(self)
        d["command"] = list(self.command)
        return d
