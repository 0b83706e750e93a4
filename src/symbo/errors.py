"""Exception hierarchy for symbo."""

from __future__ import annotations


class SymboError(Exception):
    """Base class for all symbo errors."""


class ConfigError(SymboError):
    """The configuration file is unreadable or invalid."""


class InvalidUUIDError(SymboError, ValueError):
    """A string could not be parsed as a binary UUID."""


class ReportError(SymboError):
    """A crash report could not be constructed."""


class ReportReadError(ReportError):
    """The report file could not be read."""


class EmptyReportError(ReportError):
    """The report has no content."""


class TranslationError(ReportError):
    """A JSON (.ips) report could not be converted to the text format."""


class DSYMLoadError(SymboError):
    """A dSYM bundle could not be loaded."""


class SearchStrategyError(SymboError):
    """A dSYM search strategy could not complete."""
