"""
Application exception types.

Authentication failures are NOT exceptions: the credential gate returns a
``Deny`` decision and the middleware turns it into a 401. The types here
cover problems that stop the application from serving at all.

Usage:
    from admin_panel.core.exceptions import ConfigurationError

    raise ConfigurationError("ADMIN_PASSWORD", "must be set")
"""


class ConfigurationError(Exception):
    """Raised at startup when a required configuration value is missing or invalid.

    The admin page must never be served with an empty or unusable identity,
    so ``init_basic_auth`` raises this instead of logging and carrying on.

    Args:
        key: The config key that failed validation (e.g. "ADMIN_USERNAME").
        problem: Human-readable description of what is wrong with it.
    """

    def __init__(self, key: str, problem: str) -> None:
        self.key = key
        self.problem = problem
        super().__init__(f"{key} {problem}")
