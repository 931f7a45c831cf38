"""
Value conversion for bound arguments.

A converter turns the text of one token into the caller's target type and
raises ConversionError when it cannot. The binder only ever calls convert().

Targets
- str, int, float, bool: built in.
- int8 ... int64, uint8 ... uint64: fixed-width integer tags. Decimal text only,
  and values outside the width's range are rejected (uint8 of "300" fails).
- float32 / float64: floating tags; float32 rejects finite values beyond its range.
- anything registered with register(type, func).
- any other callable: called with the text (single-argument constructor fallback).

Quick example:
    >>> convert(uint16, "8080")
    8080
    >>> convert(uint8, "300")
    Traceback (most recent call last):
    ...
    argot.faults.ConversionError: '300' is out of range for uint8 (0..255)
"""
import math
import re

from .faults import ConversionError

_DECIMAL = re.compile(r"[+-]?[0-9]+")

_TRUTHY = frozenset(("yes", "y", "true", "t", "on", "1"))
_FALSY = frozenset(("no", "n", "false", "f", "off", "0"))


def _integer(text):
    if not _DECIMAL.fullmatch(stripped := text.strip()):
        raise ConversionError(f"{text!r} is not a decimal integer", value=text)
    return int(stripped)


def _real(text):
    try:
        return float(text)
    except ValueError:
        raise ConversionError(f"{text!r} is not a number", value=text) from None


def _boolean(text):
    """
    text: str representing something boolean-like
    return: boolean representation of `text`
    """
    comp = text.strip().lower()
    if comp in _TRUTHY:
        return True
    if comp in _FALSY:
        return False
    raise ConversionError(f"could not convert {text!r} to boolean", value=text)


class Integral:
    """
    Fixed-width integer target (a type tag with its own range).
    """
    __slots__ = ("name", "bits", "signed", "minimum", "maximum")

    def __init__(self, name, bits, *, signed):
        self.name = name
        self.bits = bits
        self.signed = signed
        if signed:
            self.minimum, self.maximum = -(1 << (bits - 1)), (1 << (bits - 1)) - 1
        else:
            self.minimum, self.maximum = 0, (1 << bits) - 1

    def __call__(self, text):
        value = _integer(text)
        if not self.minimum <= value <= self.maximum:
            raise ConversionError(
                f"{text!r} is out of range for {self.name} ({self.minimum}..{self.maximum})",
                value=text,
            )
        return value

    def __repr__(self):
        return self.name


class Floating:
    """
    Floating-point target with an optional finite magnitude limit.
    """
    __slots__ = ("name", "limit")

    def __init__(self, name, limit=math.inf):
        self.name = name
        self.limit = limit

    def __call__(self, text):
        value = _real(text)
        if math.isfinite(value) and abs(value) > self.limit:
            raise ConversionError(f"{text!r} is out of range for {self.name}", value=text)
        return value

    def __repr__(self):
        return self.name


int8 = Integral("int8", 8, signed=True)
int16 = Integral("int16", 16, signed=True)
int32 = Integral("int32", 32, signed=True)
int64 = Integral("int64", 64, signed=True)

uint8 = Integral("uint8", 8, signed=False)
uint16 = Integral("uint16", 16, signed=False)
uint32 = Integral("uint32", 32, signed=False)
uint64 = Integral("uint64", 64, signed=False)

float32 = Floating("float32", 3.4028234663852886e38)
float64 = Floating("float64")


registry = {
    str: str,
    int: _integer,
    float: _real,
    bool: _boolean,
}


def register(type, func=None, /):
    """
    Register func as the converter for type; usable as a decorator.

        @register(Path)
        def to_path(text): ...
    """
    if func is None:
        def wrapper(func):
            register(type, func)
            return func
        return wrapper
    if not callable(func):
        raise TypeError("register() converter must be callable")
    registry[type] = func
    return func


def convert(type, text, /):
    """
    Convert text into type.

    Raises
    - ConversionError from built-in converters and tags.
    - whatever a registered converter or fallback constructor raises (the binder
      classifies ValueError/TypeError/ArithmeticError as conversion failures).
    """
    if not isinstance(text, str):
        raise TypeError("convert() text must be a string")
    try:
        func = registry[type]
    except (KeyError, TypeError):
        if not callable(type):
            raise TypeError(f"no converter for {type!r}") from None
        func = type
    return func(text)


__all__ = (
    "Integral",
    "Floating",
    "int8",
    "int16",
    "int32",
    "int64",
    "uint8",
    "uint16",
    "uint32",
    "uint64",
    "float32",
    "float64",
    "register",
    "convert",
)
