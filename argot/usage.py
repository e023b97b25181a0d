"""
Usage text rendering.

usage_string(registry, message="") renders, from the registry's current state:

    <message>                                  (only when a message is given)

    Usage: prog [OPTIONS] input [output] files ...

    OPTIONS

    -o PATH
    --output PATH   Where to write the result, wrapped with a hanging
                    indent aligned on the widest option column.

Options are listed in catalogue order: lexical by display name (Ordering.LEXICAL,
the default) or declaration order (Ordering.INSERTION). Within an option, aliases
are sorted; all but the last stand alone on their line and the last one carries the
description. Multi-value options add "(May be specified multiple times.)".

Rendering is a pure function of the registry: two calls without intervening
declarations return identical strings.
"""
import textwrap
from enum import Enum

from .arguments import ArgumentKind, hyphenate
from .faults import FaultCode, UsageError


class Ordering(Enum):
    """
    Order in which options are listed in usage text.
    """
    LEXICAL = "lexical"
    INSERTION = "insertion"


def _alias(name, option):
    """
    Render one alias of an option, with its value placeholder when it takes a value.
    """
    match option.kind:
        case ArgumentKind.SINGLE_VALUE_OPTION | ArgumentKind.MULTI_VALUE_OPTION:
            if option.value_name:
                return hyphenate(name) + " " + option.value_name
            return hyphenate(name)
        case ArgumentKind.FLAG_OPTION:
            return hyphenate(name)
        case _:
            raise RuntimeError("unreachable")


def _parameter(parameter):
    match parameter.kind:
        case ArgumentKind.SINGLE_VALUE_PARAMETER:
            suffix = ""
        case ArgumentKind.MULTI_VALUE_PARAMETER:
            suffix = " ..."
        case _:
            raise RuntimeError("unreachable")
    if parameter.optional:
        return "[" + parameter.name + "]" + suffix
    return parameter.name + suffix


def _description(option):
    match option.kind:
        case ArgumentKind.MULTI_VALUE_OPTION:
            return " ".join(filter(None, (option.description, "(May be specified multiple times.)")))
        case ArgumentKind.SINGLE_VALUE_OPTION | ArgumentKind.FLAG_OPTION:
            return option.description
        case _:
            raise RuntimeError("unreachable")


def _catalogue(registry):
    """
    Options in rendering order.
    """
    match registry.ordering:
        case Ordering.LEXICAL:
            return [registry.options[key] for key in sorted(registry.options)]
        case Ordering.INSERTION:
            return list(registry.options.values())
        case _:
            raise RuntimeError("unreachable")


def usage_string(registry, message="", /):
    """
    Render the usage text for `registry`, preceded by `message` when one is given.
    """
    options = _catalogue(registry)
    lines = []

    if message:
        lines.extend((message, ""))

    header = "Usage: " + registry.program
    if options:
        header += " [OPTIONS]"
    for parameter in registry.parameters:
        header += " " + _parameter(parameter)
    lines.append(header)

    if options:
        lines.extend(("", "OPTIONS", ""))

        # widest rendered alias across every option, stale catalogue entries included
        column = max(len(_alias(name, option)) for option in options for name in option.names)

        for option in options:
            *heads, last = sorted(option.names)
            lines.extend(_alias(name, option) for name in heads)

            prefix = _alias(last, option).ljust(column + 1)
            if description := _description(option):
                lines.append(textwrap.fill(
                    description,
                    width=registry.width,
                    initial_indent=prefix,
                    subsequent_indent=" " * len(prefix),
                    break_on_hyphens=False,
                    break_long_words=False,
                ))
            else:
                lines.append(prefix.rstrip())
            if not registry.compact:
                lines.append("")

    return "\n".join(lines) + "\n"


def failure(registry, diagnostic="", /, **options):
    """
    Build the UsageError reporting `diagnostic` against `registry`.

    options are forwarded to the error (code, title, hint, ...).
    """
    options.setdefault("code", FaultCode.USAGE_REQUESTED)
    return UsageError(
        usage_string(registry, diagnostic),
        diagnostic=diagnostic,
        usage=usage_string(registry),
        program=registry.program,
        **options
    )


__all__ = (
    "Ordering",
    "usage_string",
)
