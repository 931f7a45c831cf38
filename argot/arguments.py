r"""
Argot argument descriptors and name validation.

Overview
- Kind: NORMAL, DEFAULTED (help shows the target's value as default) or POSITIONAL.
- Needs: REQUIRED or OPTIONAL.
- Descriptor: immutable record of one declared argument, kept for help rendering.
- parse_names(names): split "-x" / "--long" spellings into (short, long) keys.

Validation highlights
- A short name is "-" followed by one printable, non-extended ASCII character ('!'..'~').
- A long name is "--" followed by more than one character.
- At most one of each, and at least one of either.

Quick example:
    >>> parse_names(("-o", "--output"))
    ('o', 'output')
    >>> Descriptor("o", "output", "output path").label
    '-o/--output'
"""
from enum import Enum
from typing import NamedTuple

from .faults import InvalidDeclarationError


class Kind(Enum):
    NORMAL = "normal"
    DEFAULTED = "defaulted"
    POSITIONAL = "positional"


class Needs(Enum):
    REQUIRED = "required"
    OPTIONAL = "optional"


class Descriptor(NamedTuple):
    """
    Declared metadata of one argument.

    short: one-character key or None
    long: long key (or positional label) or None
    descr: human description
    default: default-value display string ("" when none)
    display: value placeholder display string ("" when none)
    """
    short: str | None
    long: str | None
    descr: str = ""
    kind: Kind = Kind.NORMAL
    needs: Needs = Needs.OPTIONAL
    default: str = ""
    display: str = ""

    @property
    def label(self):
        """
        "-x/--long", "-x" or "--long"; positionals use their bare label.
        """
        if self.kind is Kind.POSITIONAL:
            return self.long
        return "/".join(
            prefix + key for prefix, key in (("-", self.short), ("--", self.long)) if key
        )


def _is_short_key(key):
    return len(key) == 1 and "!" <= key <= "~"


def parse_names(names, /):
    """
    Split option spellings into (short, long) keys.

    Raises
    - InvalidDeclarationError for a malformed spelling, for repeated short/long
      forms, or when no name is given at all.
    """
    short = long = None
    for name in names:
        if not isinstance(name, str):
            raise TypeError(f"option names must be strings, not {type(name).__name__}")
        if name.startswith("--"):
            if len(key := name[2:]) <= 1:
                raise InvalidDeclarationError(
                    f"long names must be more than one character: {name!r}", name=name
                )
            if long is not None:
                raise InvalidDeclarationError(
                    f"only one long name may be given, got --{long} and {name}", name=name
                )
            long = key
        elif name.startswith("-"):
            if not _is_short_key(key := name[1:]):
                raise InvalidDeclarationError(
                    "short names must be a printable character within the non-extended "
                    f"ASCII set: {name!r}",
                    name=name,
                )
            if short is not None:
                raise InvalidDeclarationError(
                    f"only one short name may be given, got -{short} and {name}", name=name
                )
            short = key
        else:
            raise InvalidDeclarationError(
                f"option names must start with '-' or '--': {name!r}", name=name
            )

    if short is None and long is None:
        raise InvalidDeclarationError("an option needs a short or a long name")
    return short, long


__all__ = (
    "Kind",
    "Needs",
    "Descriptor",
    "parse_names",
)
