from __future__ import annotations


class ConversionError(Exception):
    """Basis aller fatalen Fehler eines Konvertierungslaufs."""

    exit_code = 1


class InputNotFoundError(ConversionError):
    exit_code = 1


class MalformedMidiError(ConversionError):
    exit_code = 2


class OutputWriteError(ConversionError):
    exit_code = 3
