# pingprobe/errors.py


class PingProbeError(Exception):
    """Base exception for pingprobe."""


class ConfigurationError(PingProbeError, ValueError):
    """Raised when a request or setting is invalid. Nothing has been spawned yet."""


class ExecutionError(PingProbeError):
    """
    Raised when the ping executable could not be run to completion: it failed to
    launch, blew through the wall-clock ceiling, or exited with a code that is not
    a "no reply" code.
    """

    def __init__(self, message: str, result=None):
        super().__init__(message)
        self.message = message
        self.result = result
