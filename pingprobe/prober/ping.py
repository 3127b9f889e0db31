# pingprobe/prober/ping.py
import logging
import math
import shlex
import shutil
import subprocess
import time
from typing import Optional

from pingprobe.errors import ConfigurationError, ExecutionError
from pingprobe.prober.base import Prober
from pingprobe.prober.platforms import PingFlags, resolve_flags
from pingprobe.schemas import ProbeRequest, ProbeResult

logger = logging.getLogger(__name__)

PING_CMD = "ping"
DEFAULT_GRACE_S = 2.0

_UNKNOWN_HOST_MARKERS = ("not known", "cannot resolve", "unknown host", "could not find host")
_NO_ADDRESS_MARKERS = ("associated with hostname",)


def default_ping_bin() -> str:
    return shutil.which(PING_CMD) or PING_CMD


class PingProber(Prober):
    """
    Reachability checks through the OS 'ping' executable, so no raw socket (and no
    elevated privilege) is needed in this process. The verdict comes from the exit
    code alone; output is only kept for diagnostics.
    """

    def __init__(self,
                 ping_bin: Optional[str] = None,
                 platform: Optional[str] = None,
                 grace_s: float = DEFAULT_GRACE_S):
        self.ping_bin = ping_bin or default_ping_bin()
        self.flags: PingFlags = resolve_flags(platform)
        if isinstance(grace_s, bool) or not isinstance(grace_s, (int, float)) \
                or not math.isfinite(grace_s) or grace_s < 0:
            raise ConfigurationError(f"grace_s must be a non-negative finite number, got {grace_s!r}")
        self.grace_s = grace_s

    @classmethod
    def from_settings(cls, settings) -> "PingProber":
        return cls(ping_bin=settings.ping_bin, platform=settings.platform, grace_s=settings.grace_s)

    def _build_cmd(self, request: ProbeRequest) -> list[str]:
        args = self.flags.args_for(request.attempts, request.timeout, request.interval)
        # target last, after every option
        return [self.ping_bin, *args, request.target]

    def _ceiling(self, request: ProbeRequest) -> float:
        return request.budget_s + self.grace_s

    def _run_cmd(self, cmd: list[str], ceiling: float) -> subprocess.CompletedProcess:
        # subprocess.run kills and reaps the child on timeout and on any other
        # exception raised while waiting (KeyboardInterrupt included).
        try:
            return subprocess.run(cmd, check=False, stdin=subprocess.DEVNULL,
                                  stdout=subprocess.PIPE, stderr=subprocess.PIPE,
                                  text=True, errors="replace", timeout=ceiling)
        except FileNotFoundError:
            raise ExecutionError(
                f"Unable to launch '{self.ping_bin}': executable not found. Ensure a 'ping' "
                f"executable is on your PATH or configure its absolute path") from None
        except PermissionError:
            raise ExecutionError(
                f"Unable to launch '{self.ping_bin}': permission denied. Ensure the ping "
                f"executable is marked executable for the user running this tool") from None
        except subprocess.TimeoutExpired:
            raise ExecutionError(
                f"'{self.ping_bin}' did not finish within {ceiling:g}s and was killed") from None
        except OSError as e:
            raise ExecutionError(f"Unable to launch '{self.ping_bin}': {e}") from None
        except ValueError as e:
            # NUL bytes in the argv are refused before anything is spawned
            raise ExecutionError(f"Unable to launch '{self.ping_bin}': {e}") from None

    def _classify_failure(self, request: ProbeRequest, proc: subprocess.CompletedProcess) -> str:
        if proc.returncode < 0:
            return f"'{self.ping_bin}' was terminated by signal {-proc.returncode}"
        stderr = (proc.stderr or "").strip()
        lowered = stderr.lower()
        if any(m in lowered for m in _UNKNOWN_HOST_MARKERS):
            return (f"Ping returned error indicating no DNS entry for '{request.target}'. "
                    f"OS OUTPUT RECEIVED: '{stderr}'")
        if any(m in lowered for m in _NO_ADDRESS_MARKERS):
            return (f"Ping returned error indicating the DNS entry is not a hostname "
                    f"associated with an IP address. OS OUTPUT RECEIVED: '{stderr}'")
        # windows ping reports everything on stdout
        output = stderr or (proc.stdout or "").strip()
        return f"Ping exited with status {proc.returncode}. OS OUTPUT RECEIVED: '{output}'"

    def probe(self, request: ProbeRequest) -> ProbeResult:
        cmd = self._build_cmd(request)
        ceiling = self._ceiling(request)
        logger.debug("running %s (ceiling %.1fs)", shlex.join(cmd), ceiling)

        started = time.monotonic()
        try:
            proc = self._run_cmd(cmd, ceiling)
        except ExecutionError as e:
            elapsed = time.monotonic() - started
            logger.warning("probe of %s failed: %s", request.target, e.message)
            return ProbeResult.error_for(request.target, e.message,
                                         command=tuple(cmd), elapsed=elapsed)
        elapsed = time.monotonic() - started

        logger.debug("process result: status=%s\n stdout: %s\n stderr: %s",
                     proc.returncode, proc.stdout, proc.stderr)

        common = dict(returncode=proc.returncode, command=tuple(cmd),
                      stdout=proc.stdout or "", stderr=proc.stderr or "", elapsed=elapsed)

        if proc.returncode == 0:
            logger.info("%s is reachable (%.2fs)", request.target, elapsed)
            return ProbeResult.reachable_for(request.target, **common)

        if proc.returncode in self.flags.no_reply_codes:
            logger.info("%s did not answer %d echo request(s)", request.target, request.attempts)
            return ProbeResult.unreachable_for(request.target, **common)

        diagnostic = self._classify_failure(request, proc)
        logger.warning("probe of %s failed: %s", request.target, diagnostic)
        return ProbeResult.error_for(request.target, diagnostic, **common)
