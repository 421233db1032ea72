"""Error types raised by the relay and converted to responses at the route."""


class RelayError(Exception):
    status_code = 500
    code = "relay_error"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvalidReportError(RelayError):
    status_code = 400
    code = "invalid_report"


class UnknownRaidError(RelayError):
    status_code = 400
    code = "unknown_raid"


class UnauthorizedReporterError(RelayError):
    status_code = 403
    code = "forbidden"


class CooldownActiveError(RelayError):
    status_code = 429
    code = "cooldown"


class DeliveryError(RelayError):
    status_code = 500
    code = "delivery_failed"


class DirectoryError(Exception):
    """The guild directory could not be fetched or parsed."""


class ConfigError(Exception):
    """Startup configuration is missing or malformed."""
