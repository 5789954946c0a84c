"""Exception types raised by the on-call summary tool."""


class OnCallSummaryError(Exception):
    """Base class for all errors raised by this package."""


class TimeFormatError(OnCallSummaryError, ValueError):
    """A timestamp does not match the service format YYYY-MM-DDTHH:MM:SS+HH:MM."""

    def __init__(self, text: str):
        self.text = text
        super().__init__(f"Invalid service timestamp: {text!r}")


class RemoteLookupError(OnCallSummaryError):
    """A request to the scheduling service failed or returned an unusable body."""


class ConfigurationError(OnCallSummaryError):
    """Startup configuration is missing or invalid."""


class UnknownEngineerError(OnCallSummaryError):
    """A coverage record names an engineer the aggregation was not seeded with."""

    def __init__(self, engineer: str):
        self.engineer = engineer
        super().__init__(f"Coverage references unknown engineer: {engineer}")
