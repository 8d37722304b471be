"""E-Printer quoting core: page ranges, print costs and job authorization."""

from eprinter.exceptions import (
    CopiesOutOfRangeError,
    DependencyError,
    DocumentRejectedError,
    EmptySelectionError,
    EstimateError,
    InvertedRangeError,
    MalformedTermError,
    OutOfBoundsError,
    PackageError,
    PricingUnavailableError,
    QuoteError,
    SelectionError,
    ServiceUnavailableError,
    SettingsError,
    UnknownModeError,
    UnsupportedOptionError,
)
from eprinter.logging import configure_logging, get_logger
from eprinter.settings import Settings, get_settings

__version__ = "0.1.0"

# Initialize package logger at import time via `get_logger`.
logger = get_logger("eprinter")

__all__ = [
    "CopiesOutOfRangeError",
    "DependencyError",
    "DocumentRejectedError",
    "EmptySelectionError",
    "EstimateError",
    "InvertedRangeError",
    "MalformedTermError",
    "OutOfBoundsError",
    "PackageError",
    "PricingUnavailableError",
    "QuoteError",
    "SelectionError",
    "ServiceUnavailableError",
    "Settings",
    "SettingsError",
    "UnknownModeError",
    "UnsupportedOptionError",
    "__version__",
    "configure_logging",
    "get_logger",
    "logger",
]
