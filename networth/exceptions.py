"""
Custom exceptions for the net-worth projection toolkit.

Purpose
-------
Provides a unified exception hierarchy for the layers that surround the
projection engine (input validation, file handling, market data). The
engine itself never raises for numeric problems; it substitutes safe
defaults instead.

Exception Hierarchy
-------------------
NetWorthError (base)
├── ConfigurationError - Invalid settings or option combinations
├── ValidationError - Snapshot input failures
│   └── SchemaVersionError - Unsupported snapshot file version
└── MarketDataError - Price / exchange-rate collaborator failures
    └── PriceUnavailableError - A symbol could not be priced

Usage
-----
>>> from networth.exceptions import ValidationError
>>> raise ValidationError("Duplicate asset id 'a1'")
Traceback (most recent call last):
    ...
networth.exceptions.ValidationError: Duplicate asset id 'a1'

>>> try:  # doctest: +SKIP
...     snapshot = load_snapshot(path)
... except NetWorthError as e:
...     print(f"networth error: {e}")
"""


class NetWorthError(Exception):
    """
    Base exception for all networth errors.

    Examples
    --------
    >>> try:  # doctest: +SKIP
    ...     snapshot = load_snapshot("missing.json")
    ... except NetWorthError as e:
    ...     logger.error("Could not load snapshot: %s", e)
    """
    pass


class ConfigurationError(NetWorthError):
    """
    Invalid configuration or parameters.

    Raised for settings the package cannot honour, such as an unknown
    log level.

    Examples
    --------
    >>> raise ConfigurationError("Unknown log level 'VERBOSE'.")
    Traceback (most recent call last):
        ...
    networth.exceptions.ConfigurationError: Unknown log level 'VERBOSE'.
    """
    pass


class ValidationError(NetWorthError):
    """
    Snapshot input failures.

    Raised when input data cannot be turned into a snapshot:
    - Unknown asset type tag
    - Duplicate identities
    - More than one cash reservoir

    Examples
    --------
    >>> raise ValidationError(
    ...     "Unknown asset type 'crypto'. "
    ...     "Expected one of: cash, investment, stock, property, other."
    ... )
    Traceback (most recent call last):
        ...
    networth.exceptions.ValidationError: Unknown asset type 'crypto'. Expected one of: cash, investment, stock, property, other.
    """
    pass


class SchemaVersionError(ValidationError):
    """
    Snapshot file written with an incompatible schema version.

    Examples
    --------
    >>> raise SchemaVersionError(
    ...     "Snapshot schema 2.0.0 is not compatible with 0.1.0."
    ... )
    Traceback (most recent call last):
        ...
    networth.exceptions.SchemaVersionError: Snapshot schema 2.0.0 is not compatible with 0.1.0.
    """
    pass


class MarketDataError(NetWorthError):
    """
    Failures of the price or exchange-rate collaborators.

    Examples
    --------
    >>> raise MarketDataError("Exchange-rate source returned no rates")
    Traceback (most recent call last):
        ...
    networth.exceptions.MarketDataError: Exchange-rate source returned no rates
    """
    pass


class PriceUnavailableError(MarketDataError):
    """
    A price provider could not price a symbol.

    Raised by providers that prefer failing loudly over returning None;
    the seeding helpers treat it like an unavailable price.

    Examples
    --------
    >>> raise PriceUnavailableError("No quote for 'XYZ'")
    Traceback (most recent call last):
        ...
    networth.exceptions.PriceUnavailableError: No quote for 'XYZ'
    """
    pass
