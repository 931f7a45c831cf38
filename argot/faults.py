"""
Argot faults (errors) and rendering.

Scope
- FaultCode: canonical, stable numeric identifiers for every user-facing issue.
  Codes are grouped by domain (declaration, input, state) to keep logs searchable.
- ArgotError: base type that carries a message plus options and knows how to
  render itself in a friendly, lowercased and actionable way with rich.
- Discipline: the failure-reporting mode chosen once per parser
  (fail fast, or accumulate and keep going).
- trigger(): central entry point to surface any fault according to the discipline.
- ParseExit: exception group wrapping the faults collected in accumulate mode.

Integration
- Declarations and bindings build faults and hand them to trigger().
- In fail-fast mode the fault is raised; in accumulate mode it is appended to the
  owning parser's list and the failing declaration leaves its target untouched.
- StateError is always raised: a parser used out of order fails closed.
"""
import logging
from collections import defaultdict
from enum import Enum, IntEnum
from types import MappingProxyType

from rich.console import Group
from rich.text import Text

logger = logging.getLogger(__name__)


class FaultCode(IntEnum):
    """
    canonical fault codes (stable identifiers).

    grouping
    - declarations (2110x): INVALID_DECLARATION, DUPLICATE_KEY
    - input (2111x/2112x): UNSET_ARGUMENT, MISSING_VALUE, MISSING_POSITIONAL, CONVERSION_FAILED
    - state (2113x): PARSER_STATE

    normalize() allows host remapping to custom labels while keeping code-stability.
    """
    # --- declaration errors ---
    INVALID_DECLARATION = 21101
    DUPLICATE_KEY       = 21102

    # --- input errors ---
    UNSET_ARGUMENT      = 21111
    MISSING_VALUE       = 21112
    MISSING_POSITIONAL  = 21113
    CONVERSION_FAILED   = 21121

    # --- state errors ---
    PARSER_STATE        = 21131

    def normalize(self):
        """
        return a host-normalized string for this code.

        the host application can provide a __codes__ mapping in __main__
        to override numeric ids with friendlier labels. when no mapping
        is present, the numeric value is returned as a string.
        """
        return str(getattr(__import__("__main__"), "__codes__", {}).get(self, self.value))


class Discipline(Enum):
    """
    how faults are surfaced, decided once when a parser is constructed.
    """
    FAIL_FAST = "fail-fast"
    ACCUMULATE = "accumulate"


_STYLES = {
    "prog-name": "bold #E6E6F0",
    "code": "bold #00E5FF",
    "error-title": "bold #FF4DA6",
    "error-message": "#C8C8D0",
    "hint-arrow": "#9CE19C dim",
    "hint": "italic #9CE19C",
    "title": "bold #FF4DA6",
}


def _styler(colorful):
    styles = defaultdict(str, _STYLES | getattr(__import__("__main__"), "__styles__", {}))

    def styler(style):
        return styles[style] if colorful else ""

    return styler


class ArgotError(Exception):
    """
    base class for every argot fault.

    class attributes
    - code: FaultCode identifying the fault family.
    - title: short headline used when rendering.
    - hint: single actionable sentence shown under the message.

    instance attributes
    - message: the full human-readable message (also str(fault)).
    - options: read-only mapping of context (prog, option, index, value, ...).
    """
    code = FaultCode.PARSER_STATE
    title = "error"
    hint = ""

    def __init__(self, message, /, **options):
        assert isinstance(message, str)
        super().__init__(message)
        self.message = message
        self.options = MappingProxyType(options)

    def __rich__(self):
        styler = _styler(self.options.get("colorful", True))

        header = Text("[ ")
        if prog := self.options.get("prog"):
            header.append(prog, styler("prog-name")).append(" — ")
        header.append(self.code.normalize(), styler("code"))
        header.append(" | ").append(self.title.title(), styler("error-title")).append(" ]")

        renders = [header, Text(self.message, styler("error-message"))]
        if hint := self.options.get("hint", self.hint):
            renders.append(Text.assemble((" → ", styler("hint-arrow")), (hint, styler("hint"))))
        return Group(*renders)


class InvalidDeclarationError(ArgotError):
    code = FaultCode.INVALID_DECLARATION
    title = "invalid declaration"
    hint = "short names are '-' plus one printable character, long names are '--' plus two or more"


class DuplicateKeyError(ArgotError):
    code = FaultCode.DUPLICATE_KEY
    title = "duplicate key"
    hint = "every short and long name may be declared only once per parser"


class UnsetArgumentError(ArgotError):
    code = FaultCode.UNSET_ARGUMENT
    title = "missing argument"
    hint = "pass the required option on the command line"


class MissingValueError(ArgotError):
    code = FaultCode.MISSING_VALUE
    title = "missing value"
    hint = "give the option its value right after it, e.g. '--output FILE'"


class MissingPositionalError(ArgotError):
    code = FaultCode.MISSING_POSITIONAL
    title = "missing positional"
    hint = "add the expected positional argument"


class ConversionError(ArgotError):
    code = FaultCode.CONVERSION_FAILED
    title = "invalid value"
    hint = "check the value's format and range"


class StateError(ArgotError):
    code = FaultCode.PARSER_STATE
    title = "parser misuse"
    hint = "call from_args() exactly once, before any binding"


class ParseExit(ExceptionGroup):
    """
    every fault collected by a parser in accumulate mode, raised by Parser.check().
    """

    def __new__(cls, exceptions, /, **options):
        return super().__new__(cls, "bad parse", tuple(exceptions))

    def __init__(self, exceptions, /, **options):
        super().__init__("bad parse", tuple(exceptions))
        self.options = MappingProxyType(options)

    def derive(self, exceptions):
        return ParseExit(exceptions, **self.options)

    def __rich__(self):
        styler = _styler(self.options.get("colorful", True))

        header = Text("[ ")
        if prog := self.options.get("prog"):
            header.append(prog, styler("prog-name")).append(" — ")
        header.append(self.message.title(), styler("title")).append(" ]")

        return Group(header, *self.exceptions)


def trigger(fault, /, *, discipline, faults):
    """
    surface a fault according to the discipline.

    contract
    - FAIL_FAST: the fault is raised.
    - ACCUMULATE: the fault is appended to faults and control returns to the caller.
    - StateError is raised under both disciplines.
    """
    if not isinstance(fault, ArgotError):
        raise TypeError("trigger() argument must be an argot fault")
    if discipline is Discipline.ACCUMULATE and not isinstance(fault, StateError):
        logger.debug("collected fault %s: %s", fault.code.name, fault.message)
        faults.append(fault)
        return
    raise fault


__all__ = (
    "ArgotError",
    "InvalidDeclarationError",
    "DuplicateKeyError",
    "UnsetArgumentError",
    "MissingValueError",
    "MissingPositionalError",
    "ConversionError",
    "StateError",
    "ParseExit",
    "FaultCode",
    "Discipline",
    "trigger",
)
