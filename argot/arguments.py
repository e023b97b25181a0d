r"""
Argot argument declarations.

Overview
- Options (named, introduced by "-x" or "--name")
  • SingleValueOption[_T]: one value; a later occurrence overwrites an earlier one.
  • MultiValueOption[_T]: every occurrence appends to an ordered sequence.
  • FlagOption[_T]: presence-only; "on" names store converter(True), "off" names
    store converter(False). Starts out holding its default.
- Parameters (positional)
  • SingleValueParameter[_T]: consumes one token; optional or required.
  • MultiValueParameter[_T]: consumes every remaining token; optional or required.

Kinds
- The set of declarations is closed. Every concrete class carries an ArgumentKind tag
  (`kind`) and is sealed against subclassing; the parser and the usage formatter
  dispatch with `match argument.kind` and treat anything else as an engine bug.

Shared capabilities
- key: identity. Two declarations of the same kind with equal keys are equal and
  hash alike.
- name: display name ("-v", "--verbose", or a parameter placeholder).
- description, has_value (consumes a value token), multiple (appends).
- value / get(default): read the accumulated value(s).

Metadata (sanitized on construction)
- names: str or iterable of str, non-empty, given without leading hyphens.
  One character means a short name ("v" -> "-v"), more means a long one
  ("verbose" -> "--verbose").
- description: str (defaults to "").
- converter: callable (raw, argument) -> value.

Validation failures raise SpecificationError: declarations are programmer-facing,
so a bad one should stop program startup.

Quick example:
    >>> verbose = FlagOption(["v", "verbose"], ["q", "quiet"], False, "be chatty")
    >>> verbose.set_by_name("v")
    >>> verbose.value
    True
"""
import functools
import operator
import re
from enum import Enum

from .converters import to_bool, to_str
from .faults import FaultCode, SpecificationError
from .utils import *
from .values import MultiValue, SingleValue


class ArgumentKind(Enum):
    """
    Closed set of declaration kinds.
    """
    SINGLE_VALUE_OPTION = "single-value-option"
    MULTI_VALUE_OPTION = "multi-value-option"
    FLAG_OPTION = "flag-option"
    SINGLE_VALUE_PARAMETER = "single-value-parameter"
    MULTI_VALUE_PARAMETER = "multi-value-parameter"

    @property
    def option(self):
        return self in (ArgumentKind.SINGLE_VALUE_OPTION, ArgumentKind.MULTI_VALUE_OPTION, ArgumentKind.FLAG_OPTION)

    @property
    def multiple(self):
        return self in (ArgumentKind.MULTI_VALUE_OPTION, ArgumentKind.MULTI_VALUE_PARAMETER)


def hyphenate(name, /):
    """
    Return the command-line spelling of a bare option name ("v" -> "-v", "out" -> "--out").
    """
    return ("-" if len(name) == 1 else "--") + name


class ArgumentType(type):
    """
    Metaclass giving declarations a uniform, introspectable shape.

    Responsibilities
    - Expose the names listed in __introspectable__ as read-only properties (mirror()).
    - Provide stable __repr__/__rich_repr__ implementations.
    - Seal every class that carries a concrete `__kind__`: the set of kinds is closed,
      so concrete declarations cannot be subclassed.

    Conventions
    - __typename__ is derived from the class name (camel-case split with hyphens).
    - __displayable__ (if set) narrows which properties are shown by __rich_repr__;
      otherwise __introspectable__ is used.
    """
    __introspectable__ = ()
    __displayable__ = Unset

    def __new__(cls, name, bases, namespace, **options):
        for base in bases:
            if isinstance(base, ArgumentType) and base.__dict__.get("__kind__", Unset) is not Unset:
                raise TypeError(f"type {base.__name__!r} is not an acceptable base type")

        self = super().__new__(
            cls,
            name,
            bases,
            namespace | {
                "__typename__": re.sub(r"(?<!^)(?=[A-Z])", r"-", name.lstrip("_")).lower(),
            } | {
                name: mirror(name) for name in namespace.get("__introspectable__", ())
            },
        )

        @rename("__repr__")
        def __repr__(self):
            """
            Return a concise, stable representation with key metadata.

            Example
            - single-value-option(names=('o', 'output'), value_name='PATH', ...)
            """
            fields = ", ".join(map(functools.partial(operator.mod, "%s=%r"), self.__rich_repr__()))
            return f"{type(self).__typename__}({fields})"
        self.__repr__ = __repr__

        @rename("__rich_repr__")
        def __rich_repr__(self):
            for name in coalesce(type(self).__displayable__, type(self).__introspectable__):
                yield name, getattr(self, name)
        self.__rich_repr__ = __rich_repr__

        return self


def _sanitize_metadata(cls, metadata, /):
    """
    Internal: normalize the fields every declaration shares ('description', 'converter').
    """
    if not isinstance(description := metadata["description"], str | Unset):
        raise SpecificationError(
            f"{cls.__typename__} 'description' must be a string",
            code=FaultCode.MALFORMED_DECLARATION
        )
    metadata["description"] = coalesce(description, "")

    if not callable(metadata["converter"]):
        raise SpecificationError(
            f"{cls.__typename__} 'converter' must be callable",
            code=FaultCode.MALFORMED_DECLARATION
        )


def _sanitize_names(cls, metadata, field, /, *, required=True):
    r"""
    Internal: validate an option name list in place.

    - A lone string is a single name.
    - Every name must be a non-empty string without leading hyphens.
    - The list keeps declaration order (the first name is the display name).
    """
    if isinstance(names := metadata[field], str):
        names = [names]
    try:
        names = list(names)
    except TypeError:
        raise SpecificationError(
            f"{cls.__typename__} {field!r} must be a string or an iterable of strings",
            code=FaultCode.MALFORMED_DECLARATION
        ) from None

    if required and not names:
        raise SpecificationError(
            f"{cls.__typename__} must specify at least one name",
            code=FaultCode.EMPTY_NAME
        )

    for name in names:
        if not isinstance(name, str):
            raise SpecificationError(
                f"{cls.__typename__} names must be strings",
                code=FaultCode.MALFORMED_DECLARATION
            )
        elif not name:
            raise SpecificationError(
                f"{cls.__typename__} names cannot be empty-strings",
                code=FaultCode.EMPTY_NAME
            )
        elif name.startswith("-"):
            raise SpecificationError(
                f"{cls.__typename__} name {name!r} must be given without leading hyphens",
                code=FaultCode.MALFORMED_DECLARATION
            )

    metadata[field] = names


class _Argument(metaclass=ArgumentType):
    """
    Capabilities shared by every declaration kind.

    Concrete kinds provide `_container`, `_converter`, `name` and `key`.
    """
    __kind__ = Unset

    @property
    def kind(self):
        return type(self).__kind__

    @property
    def has_value(self):
        return self.kind is not ArgumentKind.FLAG_OPTION

    @property
    def multiple(self):
        return self.kind.multiple

    @property
    def value(self):
        return self._container.value

    def get(self, default=None, /):
        return self._container.get(default)

    def store(self, value, /):
        self._container.store(value)

    def set_from_string(self, token, /):
        """
        Convert a raw token with this declaration's converter and store the result.

        ConversionError from the converter propagates to the caller (the parser).
        """
        if not self.has_value:
            raise RuntimeError(f"(bug) {self.name!r} does not take a value")
        self.store(self._converter(token, self))

    def __eq__(self, other):
        if not isinstance(other, _Argument):
            return NotImplemented
        return type(self) is type(other) and self.key == other.key

    def __hash__(self):
        return hash((type(self), self.key))

    def __str__(self):
        return "%s %s" % ("option" if self.kind.option else "parameter", self.name)


class SingleValueOption[_T](_Argument):
    """
    Named option holding one value; later occurrences overwrite earlier ones.
    """
    __kind__ = ArgumentKind.SINGLE_VALUE_OPTION

    __introspectable__ = (
        "names",
        "value_name",
        "description",
        "converter",
    )
    __displayable__ = (
        "names",
        "value_name",
        "description",
        "value",
    )

    def __init__(self, names, value_name, description=Unset, converter=to_str):
        """
        Parameters
        - names: str | Iterable[str]
          Aliases without hyphens ("o", "output").
        - value_name: str
          Placeholder shown after the alias in usage text (e.g. "PATH").
        - description: str
          Help text.
        - converter: Callable[[str, SingleValueOption], _T]
          Applied to every raw value.
        """
        metadata = {
            "names": names,
            "value_name": value_name,
            "description": description,
            "converter": converter,
        }
        _sanitize_metadata(type(self), metadata)
        _sanitize_names(type(self), metadata, "names")
        if not isinstance(metadata["value_name"], str):
            raise SpecificationError(
                f"{type(self).__typename__} 'value_name' must be a string",
                code=FaultCode.MALFORMED_DECLARATION
            )

        for name, object in metadata.items():
            setattr(self, "_" + name, object)
        self._container = self._allocate()

    def _allocate(self):
        return SingleValue()

    @property
    def name(self):
        return hyphenate(self._names[0])

    @property
    def key(self):
        return self.name


class MultiValueOption[_T](_Argument):
    """
    Named option collecting every occurrence, in order.
    """
    __kind__ = ArgumentKind.MULTI_VALUE_OPTION

    __introspectable__ = SingleValueOption.__introspectable__
    __displayable__ = SingleValueOption.__displayable__

    __init__ = SingleValueOption.__init__

    def _allocate(self):
        return MultiValue()

    name = SingleValueOption.name
    key = SingleValueOption.key


class FlagOption[_T](_Argument):
    """
    Presence-only option with separate "on" and "off" name sets.

    Seeing an "on" name stores converter(True, flag); an "off" name stores
    converter(False, flag). The container starts out holding `default`.
    """
    __kind__ = ArgumentKind.FLAG_OPTION

    __introspectable__ = (
        "names_on",
        "names_off",
        "default",
        "description",
        "converter",
    )
    __displayable__ = (
        "names_on",
        "names_off",
        "default",
        "description",
        "value",
    )

    def __init__(self, names_on, names_off=(), default=False, description=Unset, converter=to_bool):
        metadata = {
            "names_on": names_on,
            "names_off": names_off,
            "default": default,
            "description": description,
            "converter": converter,
        }
        _sanitize_metadata(type(self), metadata)
        _sanitize_names(type(self), metadata, "names_on", required=False)
        _sanitize_names(type(self), metadata, "names_off", required=False)

        if not metadata["names_on"] and not metadata["names_off"]:
            raise SpecificationError(
                f"{type(self).__typename__} must specify at least one name",
                code=FaultCode.EMPTY_NAME
            )
        if overlap := [name for name in metadata["names_on"] if name in metadata["names_off"]]:
            raise SpecificationError(
                f"{type(self).__typename__} name {overlap[0]!r} cannot be both an 'on' and an 'off' name",
                code=FaultCode.OVERLAPPING_FLAG_NAMES
            )

        for name, object in metadata.items():
            setattr(self, "_" + name, object)
        self._container = SingleValue(default)

    @property
    def names(self):
        return tuple(self._names_on) + tuple(self._names_off)

    @property
    def name(self):
        return hyphenate((self._names_on or self._names_off)[0])

    @property
    def key(self):
        return "|".join(self._names_on) + "!" + "|".join(self._names_off)

    def set(self):
        self.store(self._converter(True, self))

    def clear(self):
        self.store(self._converter(False, self))

    def set_by_name(self, name, /):
        """
        Toggle according to which set `name` (without hyphens) belongs to.

        A name outside both sets means a lookup table handed us the wrong flag.
        """
        if name in self._names_on:
            self.set()
        elif name in self._names_off:
            self.clear()
        else:
            raise RuntimeError(f"(bug) flag name {name!r} is neither an 'on' nor an 'off' name for {self.name!r}")


class SingleValueParameter[_T](_Argument):
    """
    Positional parameter consuming exactly one token.
    """
    __kind__ = ArgumentKind.SINGLE_VALUE_PARAMETER

    __introspectable__ = (
        "placeholder",
        "description",
        "optional",
        "converter",
    )
    __displayable__ = (
        "placeholder",
        "description",
        "optional",
        "value",
    )

    def __init__(self, placeholder, description=Unset, optional=False, converter=to_str):
        metadata = {
            "placeholder": placeholder,
            "description": description,
            "optional": bool(optional),
            "converter": converter,
        }
        _sanitize_metadata(type(self), metadata)
        if not isinstance(metadata["placeholder"], str):
            raise SpecificationError(
                f"{type(self).__typename__} 'placeholder' must be a string",
                code=FaultCode.MALFORMED_DECLARATION
            )
        if not metadata["placeholder"]:
            raise SpecificationError(
                f"{type(self).__typename__} 'placeholder' cannot be empty",
                code=FaultCode.EMPTY_NAME
            )

        for name, object in metadata.items():
            setattr(self, "_" + name, object)
        self._container = self._allocate()

    def _allocate(self):
        return SingleValue()

    @property
    def name(self):
        return self._placeholder

    @property
    def key(self):
        return self._placeholder


class MultiValueParameter[_T](_Argument):
    """
    Positional parameter consuming every remaining token; must be declared last.
    """
    __kind__ = ArgumentKind.MULTI_VALUE_PARAMETER

    __introspectable__ = SingleValueParameter.__introspectable__
    __displayable__ = SingleValueParameter.__displayable__

    __init__ = SingleValueParameter.__init__

    def _allocate(self):
        return MultiValue()

    name = SingleValueParameter.name
    key = SingleValueParameter.key


__all__ = (
    "ArgumentKind",
    "SingleValueOption",
    "MultiValueOption",
    "FlagOption",
    "SingleValueParameter",
    "MultiValueParameter",
)
