"""
Argot specification registry: declare, then parse.

What this module provides
- Registry: owns every declaration of one program invocation:
  • short_names: 1-character name -> option
  • long_names:  longer name -> option
  • options:     catalogue keyed by display name, in declaration order (usage text)
  • parameters:  positional parameters, in declaration order

Declaring
- declare_option(kind, names, value_name, description, converter)
- declare_flag(names_on, names_off, default, description, converter)
- declare_parameter(placeholder, description, optional, converter)
- declare_multi_parameter(placeholder, description, optional, converter)
- option / multi_option / flag / parameter / multi_parameter: shorter spellings of the above.

Every declaration returns its handle; read the parsed value(s) through it afterwards.

Invariants (SpecificationError at the declaration call)
- option names are non-empty; a flag's "on" and "off" names are disjoint.
- at most one multi-value parameter, declared last.
- no required parameter after an optional one.
- a parameter placeholder is declared once.

Re-using an option name is not an error: the lookup tables point at the newest
declaration. The catalogue is keyed by display name, so an older option whose
display name differs still shows up in usage text.

Quick start
    from argot import Registry, to_int

    registry = Registry("fetch")
    retries = registry.option(["r", "retries"], "N", "how many times to retry", to_int)
    verbose = registry.flag(["v", "verbose"], False, "chatty output")
    urls = registry.multi_parameter("url", "what to fetch", False)

    registry.parse(["-vr", "3", "https://example.org"])
    retries.value, verbose.value, urls.value  # (3, True, ('https://example.org',))
"""
import shlex
import sys
from collections.abc import Iterable

from .arguments import *
from .converters import to_bool, to_str
from .faults import FaultCode, SpecificationError, UsageError, trigger
from .parser import parse
from .usage import Ordering, failure, usage_string as render_usage
from .utils import *


class Registry:
    """
    Specification of one program's options and parameters.

    Configuration (keyword-only)
    - ordering: Ordering
      Option order in usage text: Ordering.LEXICAL (default) or Ordering.INSERTION.
    - compact: bool
      Drop the blank line between options in usage text.
    - width: int
      Wrap column for option descriptions (default 79).
    - shell: bool
      When True, parse()/usage() print the failure to stderr with rich and exit(1)
      instead of raising UsageError.
    - colorful: bool
      Style the rich rendering of failures (shell mode).

    Notes
    - Declarations must all happen before the first parse(); values accumulate in the
      declarations' containers, and multi-value containers keep growing across parses.
    - Not thread-safe; callers serialize access.
    """

    program = mirror("program")
    ordering = mirror("ordering")
    compact = mirror("compact")
    width = mirror("width")
    shell = mirror("shell")
    colorful = mirror("colorful")
    short_names = mirror("short_names")
    long_names = mirror("long_names")
    options = mirror("options")
    parameters = mirror("parameters")

    def __init__(
            self,
            program,
            /,
            *,
            ordering=Ordering.LEXICAL,
            compact=False,
            width=79,
            shell=False,
            colorful=True
    ):
        if not isinstance(program, str):
            raise TypeError("registry 'program' must be a string")
        elif not (program := program.strip()):
            raise ValueError("registry 'program' cannot be empty")

        try:
            ordering = Ordering(ordering)
        except ValueError:
            raise ValueError("registry 'ordering' must be one of %s" % ", ".join(
                repr(member.value) for member in Ordering
            )) from None

        if not isinstance(width, int) or isinstance(width, bool):
            raise TypeError("registry 'width' must be an integer")
        elif width < 1:
            raise ValueError("registry 'width' must be a positive integer")

        self._program = program
        self._ordering = ordering
        self._compact = bool(compact)
        self._width = width
        self._shell = bool(shell)
        self._colorful = bool(colorful)

        self._short_names = {}
        self._long_names = {}
        self._options = {}
        self._parameters = []

    def _register_option(self, option):
        # last registration for a literal name wins
        for name in option.names:
            if len(name) == 1:
                self._short_names[name] = option
            else:
                self._long_names[name] = option
        self._options[option.name] = option
        return option

    def _register_parameter(self, parameter):
        if self._parameters:
            last = self._parameters[-1]
            if last.optional and not parameter.optional:
                raise SpecificationError(
                    'Optional parameter "%s" cannot be followed by required parameter "%s"' % (
                        last.name, parameter.name
                    ),
                    code=FaultCode.REQUIRED_AFTER_OPTIONAL
                )
            if last.kind is ArgumentKind.MULTI_VALUE_PARAMETER:
                raise SpecificationError(
                    'Multi-parameter "%s" must be the last parameter in the specification.' % last.name,
                    code=FaultCode.MULTI_PARAMETER_NOT_LAST
                )
        if any(declared.name == parameter.name for declared in self._parameters):
            raise SpecificationError(
                'Parameter "%s" is already declared' % parameter.name,
                code=FaultCode.DUPLICATE_PARAMETER
            )
        self._parameters.append(parameter)
        return parameter

    def declare_option(self, kind, names, value_name, description="", converter=to_str):
        """
        Declare a value-bearing option.

        Parameters
        - kind: ArgumentKind.SINGLE_VALUE_OPTION | ArgumentKind.MULTI_VALUE_OPTION
          (or their string values).
        - names: str | Iterable[str]
          Aliases without hyphens; one character is short ("o"), more is long ("output").
        - value_name: str
          Placeholder for the value in usage text.
        - description: str
        - converter: Callable[[str, option], T]

        Returns
        - SingleValueOption | MultiValueOption
        """
        try:
            kind = ArgumentKind(kind)
        except ValueError:
            raise SpecificationError(
                "declare_option() 'kind' must be an argument kind",
                code=FaultCode.MALFORMED_DECLARATION
            ) from None

        match kind:
            case ArgumentKind.SINGLE_VALUE_OPTION:
                option = SingleValueOption(names, value_name, description, converter)
            case ArgumentKind.MULTI_VALUE_OPTION:
                option = MultiValueOption(names, value_name, description, converter)
            case _:
                raise SpecificationError(
                    "declare_option() 'kind' must be a single- or multi-value option, not %r" % kind.value,
                    code=FaultCode.MALFORMED_DECLARATION
                )
        return self._register_option(option)

    def declare_flag(self, names_on, names_off=(), default=False, description="", converter=to_bool):
        """
        Declare a flag toggled on by `names_on` and off by `names_off`.

        The flag holds `default` until one of its names is seen; each toggle stores
        converter(True|False, flag).
        """
        return self._register_option(FlagOption(names_on, names_off, default, description, converter))

    def declare_parameter(self, placeholder, description="", optional=False, converter=to_str):
        """
        Declare a positional parameter consuming exactly one token.
        """
        return self._register_parameter(SingleValueParameter(placeholder, description, optional, converter))

    def declare_multi_parameter(self, placeholder, description="", optional=False, converter=to_str):
        """
        Declare a positional parameter consuming every remaining token (must come last).
        """
        return self._register_parameter(MultiValueParameter(placeholder, description, optional, converter))

    def option(self, names, value_name, description="", converter=to_str):
        return self.declare_option(ArgumentKind.SINGLE_VALUE_OPTION, names, value_name, description, converter)

    def multi_option(self, names, value_name, description="", converter=to_str):
        return self.declare_option(ArgumentKind.MULTI_VALUE_OPTION, names, value_name, description, converter)

    def flag(self, names, default=False, description="", converter=to_bool, *, names_off=()):
        return self.declare_flag(names, names_off, default, description, converter)

    def parameter(self, placeholder, description="", optional=False, converter=to_str):
        return self.declare_parameter(placeholder, description, optional, converter)

    def multi_parameter(self, placeholder, description="", optional=False, converter=to_str):
        return self.declare_multi_parameter(placeholder, description, optional, converter)

    def usage_string(self, message="", /):
        """
        Render the usage text, preceded by `message` when given.
        """
        return render_usage(self, message)

    def usage(self, message="", /):
        """
        Abort with a UsageError built from `message` (shell mode prints it and exits).

        Custom converters may call this to reject a value with their own wording.
        """
        trigger(
            failure(self, message, title="usage"),
            shell=self._shell,
            colorful=self._colorful
        )

    def parse(self, prompt=Unset, /):
        """
        Parse a token stream into the declared options and parameters.

        Parameters
        - prompt:
          • Unset: read tokens from sys.argv[1:].
          • str: shell-like string; split via shlex.split.
          • Iterable[str]: pre-tokenized sequence, used verbatim.

        Raises
        - UsageError: on any parse failure (unless shell mode prints it and exits).
        - TypeError: when prompt is not Unset/str/Iterable[str].
        """
        if prompt is Unset:
            tokens = sys.argv[1:]
        elif isinstance(prompt, str):
            tokens = shlex.split(prompt)
        elif isinstance(prompt, Iterable):
            tokens = list(prompt)
            if not all(isinstance(token, str) for token in tokens):
                raise TypeError("parse() argument must be a string or an iterable of strings")
        else:
            raise TypeError("parse() argument must be a string or an iterable of strings")

        try:
            parse(self, tokens)
        except UsageError as fault:
            trigger(fault, shell=self._shell, colorful=self._colorful)

    def __rich_repr__(self):
        yield "program", self._program
        yield "options", list(self._options.values())
        yield "parameters", list(self._parameters)

    def __repr__(self):
        return "registry(%s)" % ", ".join("%s=%r" % pair for pair in self.__rich_repr__())


__all__ = (
    "Registry",
)
