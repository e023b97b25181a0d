"""
Conversion pipeline: raw tokens to typed values.

A converter is any callable `(raw, argument) -> value`:
- raw: the token string for value-bearing declarations, or a bool for flag toggles.
- argument: the owning declaration, used only for message context.

A converter rejects input by raising ConversionError. The parser catches it and
turns it into a UsageError carrying the converter's message, so converters never
need to know about usage text.

Built-ins
- to_short / to_int / to_long: signed 16/32/64-bit integers.
- to_float / to_double: 32/64-bit floats.
- to_char: exactly one character.
- to_byte: integer in 0..255.
- to_str: identity.
- to_bool: flag pass-through.

Adapters
- converter(function): wrap a plain one-argument callable (int, pathlib.Path, ...)
  so its ValueError/TypeError become ConversionError.
"""
import builtins
import math
import re
import struct

from .faults import ConversionError
from .utils import rename


def _subject(argument):
    kind = "Option" if argument.kind.option else "Parameter"
    return '%s "%s"' % (kind, argument.name)


def _parse_integer(token, argument, bits):
    # python's int() also takes whitespace, underscores and non-ascii digits
    if not re.fullmatch(r"[+-]?[0-9]+", token):
        raise ConversionError('Cannot convert argument "%s" to a number.' % token)
    number = int(token)
    if not -(1 << (bits - 1)) <= number < (1 << (bits - 1)):
        raise ConversionError('%s: "%s" is out of range for a %d-bit integer.' % (_subject(argument), token, bits))
    return number


def _parse_real(token, argument, bits):
    try:
        if "_" in token:
            raise ValueError(token)
        number = float(token)
    except ValueError:
        raise ConversionError('Cannot convert argument "%s" to a number.' % token) from None
    if bits == 32:
        try:
            number, = struct.unpack("<f", struct.pack("<f", number))
        except OverflowError:
            raise ConversionError('%s: "%s" is out of range for a 32-bit float.' % (_subject(argument), token)) from None
    elif math.isinf(number) and not re.search(r"inf", token, re.IGNORECASE):
        raise ConversionError('%s: "%s" is out of range for a 64-bit float.' % (_subject(argument), token))
    return number


def to_short(token, argument, /):
    return _parse_integer(token, argument, 16)


def to_int(token, argument, /):
    return _parse_integer(token, argument, 32)


def to_long(token, argument, /):
    return _parse_integer(token, argument, 64)


def to_float(token, argument, /):
    return _parse_real(token, argument, 32)


def to_double(token, argument, /):
    return _parse_real(token, argument, 64)


def to_char(token, argument, /):
    if len(token) != 1:
        raise ConversionError('%s: Cannot parse "%s" to a character.' % (_subject(argument), token))
    return token


def to_byte(token, argument, /):
    if not re.fullmatch(r"[+-]?[0-9]+", token):
        raise ConversionError('Cannot convert argument "%s" to a number.' % token)
    if (number := int(token)) > 255:
        raise ConversionError('%s: "%s" results in a number that is too large for a byte.' % (_subject(argument), token))
    if number < 0:
        raise ConversionError('%s: "%s" results in a negative number, not a byte.' % (_subject(argument), token))
    return number


def to_str(token, argument, /):
    return token


def to_bool(state, argument, /):
    return state


def converter(function, /):
    """
    Adapt a plain one-argument callable into a converter.

    ValueError and TypeError raised by `function` become ConversionError messages
    naming the declaration and the offending token; anything else propagates.

    Example
        registry.option(["o", "output"], "PATH", "output file", converter(pathlib.Path))
    """
    if not builtins.callable(function):
        raise TypeError("converter() argument must be callable")

    @rename(getattr(function, "__name__", "converter"))
    def convert(token, argument, /):
        try:
            return function(token)
        except (TypeError, ValueError) as exception:
            raise ConversionError('%s: Cannot convert "%s": %s' % (_subject(argument), token, exception)) from exception

    return convert


__all__ = (
    "to_short",
    "to_int",
    "to_long",
    "to_float",
    "to_double",
    "to_char",
    "to_byte",
    "to_str",
    "to_bool",
    "converter",
)
