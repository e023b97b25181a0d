"""
Argot parser: the option-scanning / parameter-consumption state machine.

States
- option scanning (initial): consume options from the front of the token stream.
- parameter consumption: hand every remaining token to the declared parameters.
- done.

Scanning stops on the literal "--" (consumed), on the first token that does not
start with "-", or when the tokens run out.

Option forms
- "--name"   long option; a valued option takes the next token as its value.
- "-x"       short option; a valued option takes the next token as its value.
- "-xREST"   compressed short option:
             • valued "x": REST is the value ("-ofile" == "-o file");
             • flag "x": x is toggled and "-REST" goes back on the front of the stream
               as a fresh token ("-cvf" == "-c -v -f", "-v-out" == "-v --out").
- "-"        rejected (no option name).

Failures
- Every structural problem raises UsageError (diagnostic + usage text).
- A ConversionError from any converter aborts the parse and is re-raised as a
  UsageError carrying the converter's own message.
"""
import difflib
from collections import deque

from .arguments import ArgumentKind, hyphenate
from .faults import ConversionError, FaultCode
from .usage import failure


def _unknown(registry, names, token):
    """
    UsageError for an option name missing from the lookup tables, with a near-match hint.
    """
    suggestions = difflib.get_close_matches(token, [hyphenate(name) for name in names], 5)
    try:
        hint = "did you mean %r? see the option list below" % suggestions[0]
    except IndexError:
        hint = "remove it or check the option list below"
    return failure(
        registry,
        "Unknown option: %s" % token,
        title="unknown option",
        code=FaultCode.UNKNOWN_OPTION,
        hint=hint,
        token=token,
        suggestions=suggestions,
    )


def _apply(registry, option, name, token, tokens):
    """
    Act on a spelled-out option (no inline value): valued options take the next token.
    """
    match option.kind:
        case ArgumentKind.SINGLE_VALUE_OPTION | ArgumentKind.MULTI_VALUE_OPTION:
            if not tokens:
                raise failure(
                    registry,
                    "Option %s requires a value." % token,
                    title="missing option value",
                    code=FaultCode.OPTION_VALUE_REQUIRED,
                    hint="provide a value (e.g., %s %s)" % (token, option.value_name or "VALUE"),
                    token=token,
                )
            option.set_from_string(tokens.popleft())
        case ArgumentKind.FLAG_OPTION:
            option.set_by_name(name)
        case _:
            raise RuntimeError("(bug) found %r in the option lookup tables" % option)


def _parse_long(registry, tables, tokens):
    token = tokens.popleft()
    name = token[2:]
    short_names, long_names = tables
    try:
        option = long_names[name]
    except KeyError:
        raise _unknown(registry, (*short_names, *long_names), token) from None
    _apply(registry, option, name, token, tokens)


def _parse_short(registry, tables, tokens):
    """
    Scan one short-option token.

    In a flag cluster only the first flag is handled here; the remainder goes back
    on the front of the stream as "-REST" and is classified again by parse(), so
    "-v-out" reads as "-v --out".
    """
    token = tokens.popleft()
    short_names, long_names = tables
    if not (name := token[1:]):
        raise failure(
            registry,
            "Missing option name in '%s'" % token,
            title="missing option name",
            code=FaultCode.MISSING_OPTION_NAME,
            hint="use '--' to end the option list, or give an option name after '-'",
            token=token,
        )
    try:
        option = short_names[name[0]]
    except KeyError:
        raise _unknown(registry, (*short_names, *long_names), token) from None

    if len(name) == 1:
        return _apply(registry, option, name, token, tokens)

    match option.kind:
        case ArgumentKind.SINGLE_VALUE_OPTION | ArgumentKind.MULTI_VALUE_OPTION:
            option.set_from_string(name[1:])
        case ArgumentKind.FLAG_OPTION:
            option.set_by_name(name[0])
            tokens.appendleft("-" + name[1:])
        case _:
            raise RuntimeError("(bug) found %r in the short option table" % option)


def _parse_parameters(registry, tokens):
    """
    Match the remaining tokens against the declared parameters, left to right.
    """
    missing = []

    for parameter in registry.parameters:
        match parameter.kind:
            case ArgumentKind.SINGLE_VALUE_PARAMETER:
                if tokens:
                    parameter.set_from_string(tokens.popleft())
                elif not parameter.optional:
                    missing.append(parameter.name)
            case ArgumentKind.MULTI_VALUE_PARAMETER:
                if not tokens and not parameter.optional:
                    missing.append(parameter.name)
                while tokens:
                    parameter.set_from_string(tokens.popleft())
            case _:
                raise RuntimeError("(bug) found %r in the parameter list" % parameter)

    if tokens:
        raise failure(
            registry,
            "Too many parameters.",
            title="too many parameters",
            code=FaultCode.TOO_MANY_PARAMETERS,
            hint="remove the extra inputs (%s); use '--' before values that look like options" % " ".join(tokens),
            leftover=list(tokens),
        )
    if missing:
        raise failure(
            registry,
            "Missing parameter(s): " + ", ".join(missing),
            title="missing parameters",
            code=FaultCode.MISSING_PARAMETERS,
            hint="add the missing values in the order shown in the usage line",
            missing=missing,
        )


def parse(registry, tokens, /):
    """
    Populate the declarations of `registry` from `tokens`.

    Parameters
    - registry: Registry
      The fully declared specification; its value containers are mutated in place.
    - tokens: Iterable[str]
      Raw argument vector, program name excluded.

    Raises
    - UsageError: on any structural failure or rejected conversion.
    """
    tokens = deque(tokens)
    tables = registry.short_names, registry.long_names

    try:
        while tokens:
            token = tokens[0]
            if token == "--":
                tokens.popleft()
                break
            elif token.startswith("--"):
                _parse_long(registry, tables, tokens)
            elif token.startswith("-"):
                _parse_short(registry, tables, tokens)
            else:
                break

        _parse_parameters(registry, tokens)
    except ConversionError as exception:
        raise failure(
            registry,
            exception.message,
            title="conversion error",
            code=FaultCode.CONVERSION_FAILED,
            hint="check the value format and try again",
        ) from exception


__all__ = (
    "parse",
)
