# pingprobe/prober/platforms.py
"""
Flag table for the ping implementations we know how to drive.

Each family says how to ask for N echo requests, how long to wait for each
reply (and in what unit), how to space them out, and which exit codes mean
"sent fine, nobody answered". Any other non-zero code is treated as a usage or
resolution error.
"""
import logging
import math
import sys
from dataclasses import dataclass
from typing import Optional

from pingprobe.errors import ConfigurationError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PingFlags:
    family: str
    count_flag: str
    wait_flag: str
    wait_unit_ms: bool            # False -> whole seconds
    interval_flag: Optional[str]  # None -> the implementation has no interval option
    no_reply_codes: frozenset

    def wait_value(self, timeout_s: float) -> str:
        if self.wait_unit_ms:
            return str(max(1, math.ceil(timeout_s * 1000)))
        return str(max(1, math.ceil(timeout_s)))

    def args_for(self, attempts: int, timeout_s: float, interval_s: float) -> list[str]:
        args = [self.count_flag, str(attempts), self.wait_flag, self.wait_value(timeout_s)]
        if self.interval_flag and attempts > 1:
            args += [self.interval_flag, _fmt_seconds(interval_s)]
        return args


def _fmt_seconds(value: float) -> str:
    # "0.2" not "0.20000000000000001"; "1" not "1.0"
    return f"{value:g}"


PLATFORM_FLAGS = {
    # iputils / busybox: -W is seconds, exit 1 = no reply, 2 = anything else
    "linux": PingFlags("linux", "-c", "-W", False, "-i", frozenset({1})),
    # macOS and FreeBSD: -W is milliseconds, exit 2 = no reply, 64/68/... = errors
    "bsd": PingFlags("bsd", "-c", "-W", True, "-i", frozenset({2})),
    # ping.exe: -w is milliseconds, no interval option
    "windows": PingFlags("windows", "-n", "-w", True, None, frozenset({1})),
}

_SYS_PLATFORM_PREFIXES = (
    ("linux", "linux"),
    ("darwin", "bsd"),
    ("freebsd", "bsd"),
    ("win32", "windows"),
    ("cygwin", "windows"),
)


def family_for(sys_platform: str) -> str:
    for prefix, family in _SYS_PLATFORM_PREFIXES:
        if sys_platform.startswith(prefix):
            return family
    logger.warning("Unrecognised platform %r, assuming Linux-style ping flags", sys_platform)
    return "linux"


def resolve_flags(family: Optional[str] = None) -> PingFlags:
    """Pick the flag set for an explicit family name, or for the running host."""
    if family is None:
        family = family_for(sys.platform)
    try:
        return PLATFORM_FLAGS[family.lower()]
    except KeyError:
        known = ", ".join(sorted(PLATFORM_FLAGS))
        raise ConfigurationError(f"unknown ping platform {family!r} (expected one of: {known})") from None
