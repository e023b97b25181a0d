"""
Argot faults (errors) and rendering.

Scope
- FaultCode: canonical, stable numeric identifiers for every user-facing parse failure
  and every declaration-time defect. Codes are grouped by domain to keep copy
  consistent and make logs/searches predictable.
- ArgotException: base type that carries a message + read-only options.
- SpecificationError: a declaration broke a registry invariant (programmer error).
- ConversionError: a converter rejected a raw token (caught by the parser).
- UsageError: the single failure kind crossing the parse boundary; knows how to
  render itself with rich.
- trigger(): central entry point to surface a fault (raise, or print and exit in shell mode).

Propagation
- SpecificationError surfaces at the declaration call and is never triggered.
- ConversionError is always folded by the parser into a UsageError.
- UsageError is raised to the caller, or rendered to stderr followed by exit(1)
  when the registry runs in shell mode.
"""
import sys
from collections import defaultdict
from enum import IntEnum
from types import MappingProxyType

from rich.console import Console, Group
from rich.text import Text

from .utils import Unset, coalesce

console = Console(stderr=True)


class FaultCode(IntEnum):
    """
    canonical fault codes used across argot (stable identifiers).

    grouping (by high-level domain)
    - options (1111x)
      • MISSING_OPTION_NAME, UNKNOWN_OPTION, OPTION_VALUE_REQUIRED
    - parameters (1112x)
      • TOO_MANY_PARAMETERS, MISSING_PARAMETERS
    - conversions (1113x)
      • CONVERSION_FAILED
    - explicit usage requests (1114x)
      • USAGE_REQUESTED
    - specification defects (2110x)
      • EMPTY_NAME, OVERLAPPING_FLAG_NAMES, MULTI_PARAMETER_NOT_LAST,
        REQUIRED_AFTER_OPTIONAL, MALFORMED_DECLARATION, DUPLICATE_PARAMETER

    normalize() allows host remapping to custom labels while keeping code-stability.
    """
    # --- option errors (1111x) ---
    MISSING_OPTION_NAME         = 11111
    UNKNOWN_OPTION              = 11112
    OPTION_VALUE_REQUIRED       = 11117

    # --- parameter errors (1112x) ---
    TOO_MANY_PARAMETERS         = 11121
    MISSING_PARAMETERS          = 11125

    # --- conversion errors (1113x) ---
    CONVERSION_FAILED           = 11131

    # --- explicit usage (1114x) ---
    USAGE_REQUESTED             = 11141

    # --- specification defects (2110x) ---
    EMPTY_NAME                  = 21101
    OVERLAPPING_FLAG_NAMES      = 21102
    MULTI_PARAMETER_NOT_LAST    = 21103
    REQUIRED_AFTER_OPTIONAL     = 21104
    MALFORMED_DECLARATION       = 21105
    DUPLICATE_PARAMETER         = 21106

    def normalize(self):
        """
        return a host-normalized string for this code.

        the host application can provide a __codes__ mapping in __main__
        to override numeric ids with friendlier labels. when no mapping
        is present, the numeric value is returned as a string.
        """
        return str(getattr(__import__("__main__"), "__codes__", {}).get(self, self.value))


class ArgotException(Exception):
    """
    Base for every argot error: a message plus a read-only mapping of context options.
    """

    def __init__(self, message=Unset, /, **options):
        assert isinstance(message, str | Unset)
        self.message = coalesce(message, "")
        self.options = MappingProxyType(options)
        super().__init__(self.message)

    def __str__(self):
        return self.message

    def __replace__(self, *unused, **overrides):
        assert not unused, "positional arguments are not allowed"
        replaced = type(self)(self.message, **{**self.options, **overrides})
        replaced.__cause__ = self.__cause__
        return replaced


class SpecificationError(ArgotException): ...
class ConversionError(ArgotException): ...


class UsageError(ArgotException):
    """
    Parse failure: the specific diagnostic plus the complete usage text.

    The message (and str(error)) is exactly what the usage formatter produced for the
    diagnostic, so a plain `print(error, file=sys.stderr)` is a complete report. The
    pieces stay reachable through `diagnostic`, `usage` and `code`.
    """

    @property
    def diagnostic(self):
        return self.options.get("diagnostic", "")

    @property
    def usage(self):
        return self.options.get("usage", "")

    @property
    def code(self):
        return self.options.get("code", FaultCode.USAGE_REQUESTED)

    def __rich__(self):
        main = __import__("__main__")
        colorful = self.options.get("colorful", True)

        styles = defaultdict(str, {
            # header parts
            "prog-name": "bold #E6E6F0",  # near-white program name
            "code": "bold #00E5FF",  # neon cyan fault code
            "error-title": "bold #FF4DA6",  # friendly pinky title

            # body
            "error-message": "#C8C8D0",  # soft light gray message
            "hint-arrow": "#9CE19C dim",  # gentle green arrow
            "hint": "italic #9CE19C",  # gentle green hint text
            "usage": "#9CA3AF",  # muted usage body
        } | getattr(main, "__styles__", {}))

        def styler(style):
            return styles[style] if colorful else ""

        def text(fragment, style=""):
            if not fragment:
                return Text("")
            if not colorful:
                return Text(str(fragment))
            return Text(str(fragment), style)

        usage = text(self.usage.rstrip("\n"), styler("usage"))

        # usage() called without a message: the usage text is the whole report
        if not self.diagnostic:
            return usage

        prog = text(getattr(main, "__prog__", self.options.get("program", "")), styler("prog-name"))

        header = Text.assemble(
            "[ ",
            prog,
            " — ",
            text(self.code.normalize(), styler("code")),
            " | ",
            text(self.options.get("title", "usage error").title(), styler("error-title")),
            " ]"
        )
        message = text(self.diagnostic, styler("error-message"))
        renders = [header, message]
        if hint := self.options.get("hint"):
            renders.append(Text.assemble(text(" → ", styler("hint-arrow")), text(hint, styler("hint"))))
        renders.extend((Text(""), usage))
        return Group(*renders)

    def __trigger__(self) -> None:
        if not self.options.get("shell", False):
            raise self from self.__cause__
        console.print(self)
        sys.exit(1)


def trigger(fault, /, **options):
    """
    surface a fault with the given runtime options.

    contract
    - fault must provide __trigger__ and __replace__ methods (see UsageError).
    - options are merged into the fault via __replace__(**options) before triggering.
    - in shell mode, rendering happens via the rich stderr console followed by exit(1);
      otherwise the fault is raised.

    typical options
    - shell, colorful, program, title, code, hint.
    """
    if (
        not hasattr(fault, "__trigger__") or
        not callable(fault.__trigger__) or
        not hasattr(fault, "__replace__") or
        not callable(fault.__replace__)
    ):
        raise TypeError("trigger() argument must have a __trigger__ and __replace__ methods")
    fault.__replace__(**options).__trigger__()


__all__ = (
    "FaultCode",
    "ArgotException",
    "SpecificationError",
    "ConversionError",
    "UsageError",
    "trigger",
)
