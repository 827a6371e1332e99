"""Exit codes for the releasekit command line.

Values are process exit codes and should remain stable:
- 0: Success
- 1: User error (bad arguments)
- 2: Configuration error (unreadable or invalid config file)
- 3: API error (the server answered with a non-success status)
- 4: Network error (no response was received)
- 5: Decode error (the response did not match the expected shape)
"""

from enum import IntEnum

__all__ = ["ErrorCode"]


class ErrorCode(IntEnum):
    """Exit codes for CLI commands."""

    OK = 0
    USER_ERROR = 1
    CONFIG_ERROR = 2
    API_ERROR = 3
    NETWORK_ERROR = 4
    DECODE_ERROR = 5

    def __str__(self) -> str:
        return self.name.lower().replace("_", " ")

    @property
    def is_success(self) -> bool:
        return self == ErrorCode.OK

    @property
    def is_error(self) -> bool:
        return self != ErrorCode.OK
