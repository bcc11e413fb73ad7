"""Broker exception hierarchy.

Every Broker-specific failure inherits from BrokerError and carries the exit
code the dispatcher terminates with, so the CLI can map errors to statuses in
one place.
"""

EXIT_USAGE = 1
EXIT_NO_ACCESS = 3
EXIT_PERMISSION_DENIED = 77
EXIT_CONFIG = 78
EXIT_SCRIPT_UNAVAILABLE = 126


class BrokerError(Exception):
    """Base exception for all Broker errors."""

    exit_code = 1

    def __init__(self, message: str = "", *, exit_code: int | None = None) -> None:
        super().__init__(message)
        if exit_code is not None:
            self.exit_code = exit_code


class UsageError(BrokerError):
    """Malformed invocation or a token outside the allowed character set."""

    exit_code = EXIT_USAGE


class ConfigError(BrokerError):
    """Invalid broker settings."""

    exit_code = EXIT_CONFIG


class PermissionDenied(BrokerError):
    """User holds no grant for the requested bundle/action."""

    exit_code = EXIT_PERMISSION_DENIED

    def __init__(self, user: str, bundle: str, action: str) -> None:
        super().__init__(f"User {user} is not allowed to perform {action} on {bundle}.")
        self.user = user
        self.bundle = bundle
        self.action = action


class ScriptUnavailable(BrokerError):
    """Resolved action script is missing or not executable."""

    exit_code = EXIT_SCRIPT_UNAVAILABLE

    def __init__(self, path: str, reason: str = "does not exist or is not executable") -> None:
        super().__init__(f"Script {path} {reason}.")
        self.path = path


class NoAccessError(BrokerError):
    """Listing requested for a user without any access entries."""

    exit_code = EXIT_NO_ACCESS
