class CurrencyError(Exception):
    """Base class for currency conversion failures."""


class InvalidConversionInput(CurrencyError, ValueError):
    """Malformed amount or unsupported currency code."""


class RateServiceUnavailable(CurrencyError, RuntimeError):
    """The exchange-rate lookup failed or returned unusable data."""
