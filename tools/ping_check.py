# tools/ping_check.py
# Usage examples:
#   python3 -m tools.ping_check 127.0.0.1
#   python3 -m tools.ping_check example.com -c 5 -t 2 --json
#   python3 -m tools.ping_check 192.0.2.1 --ping-bin /bin/ping -v
#
# Exit codes: 0 reachable, 1 unreachable, 2 bad arguments, 3 ping itself failed.

import argparse
import json
import sys

from pingprobe.config import Settings
from pingprobe.errors import ConfigurationError
from pingprobe.logging_config import setup_logging
from pingprobe.prober.ping import PingProber
from pingprobe.prober.platforms import PLATFORM_FLAGS
from pingprobe.schemas import ProbeRequest

EXIT_REACHABLE = 0
EXIT_UNREACHABLE = 1
EXIT_USAGE = 2
EXIT_PROBE_ERROR = 3

_EXIT_CODES = {
    "reachable": EXIT_REACHABLE,
    "unreachable": EXIT_UNREACHABLE,
    "error": EXIT_PROBE_ERROR,
}


def build_argparser(settings: Settings):
    ap = argparse.ArgumentParser(description="Check host reachability with the OS ping executable")
    ap.add_argument("target", help="Destination host name or IP address")
    ap.add_argument("-c", "--count", type=int, default=settings.attempts,
                    help="Echo requests to send (default: %(default)s)")
    ap.add_argument("-t", "--timeout", type=float, default=settings.timeout_s,
                    help="Seconds to wait for each reply (default: %(default)s)")
    ap.add_argument("-i", "--interval", type=float, default=settings.interval_s,
                    help="Seconds between echo requests (default: %(default)s)")
    ap.add_argument("--grace", type=float, default=settings.grace_s,
                    help="Extra seconds before a hung ping is killed (default: %(default)s)")
    ap.add_argument("--ping-bin", default=settings.ping_bin,
                    help="Path to the ping executable (default: looked up on PATH)")
    ap.add_argument("--platform", default=settings.platform, choices=sorted(PLATFORM_FLAGS),
                    help="Ping flag dialect (default: detected from this host)")
    ap.add_argument("--json", action="store_true", help="Print the full result as JSON")
    ap.add_argument("-v", "--verbose", action="store_true", help="Debug logging to stderr")
    return ap


def report(result, as_json: bool, out=sys.stdout):
    if as_json:
        print(json.dumps(result.as_dict(), indent=2), file=out)
    elif result.reachable:
        print(f"Network ICMP Ping successful for host '{result.target}'", file=out)
    else:
        print(f"ERROR: {result.diagnostic}", file=out)


def main(argv=None, settings=None, prober=None) -> int:
    if settings is None:
        try:
            settings = Settings.from_env()
        except ConfigurationError as e:
            print(f"ERROR: {e}", file=sys.stderr)
            return EXIT_USAGE
    ap = build_argparser(settings)
    args = ap.parse_args(argv)
    setup_logging("DEBUG" if args.verbose else settings.log_level)

    try:
        request = ProbeRequest(args.target, attempts=args.count,
                               timeout=args.timeout, interval=args.interval)
        if prober is None:
            prober = PingProber(ping_bin=args.ping_bin, platform=args.platform, grace_s=args.grace)
    except ConfigurationError as e:
        ap.error(str(e))

    result = prober.probe(request)
    report(result, args.json, out=sys.stdout if result.reachable or args.json else sys.stderr)
    return _EXIT_CODES[result.status]


if __name__ == "__main__":
    sys.exit(main())
