"""
Argot declaration registry and binder.

What this module provides
- Context: the state one parser shares with all of its groups: registered short
  and long keys (duplicate detection), the fault discipline and collected faults,
  and the partition built by Parser.from_args().
- Registry: the declaration surface shared by Parser and Group. Every declaration
  validates its names, registers its keys, records a Descriptor for help output,
  then binds against the partition:
  • flag: presence of the key, optionally inverted.
  • count: how many times the key was supplied ("-vvv" → 3).
  • arg: one value; when repeated, the last occurrence wins.
  • list: every occurrence's value, in input order.

Binding rules
- Lookup tries the short key, then the long key. A required key that was never
  supplied is an UnsetArgumentError; an optional one leaves the target alone.
- An option's value is the first unclaimed value token after it (see
  PartitionState.claim_after); when none is left, MissingValueError.
- Conversion failures are reported as ConversionError naming the option.

Declarations return the registry itself so calls chain:

    parser.flag("-h", "--help", descr="print this dialog") \\
          .count("-v", "--verbose", descr="increase verbosity") \\
          .arg("-o", "--output", descr="output path", display="FILE")
"""
import functools
import logging
from collections.abc import MutableSequence

from .arguments import Descriptor, Kind, Needs, parse_names
from .converters import convert, registry as converters
from .faults import (
    ArgotError,
    ConversionError,
    Discipline,
    DuplicateKeyError,
    InvalidDeclarationError,
    MissingValueError,
    StateError,
    UnsetArgumentError,
    trigger,
)
from .utils import Unset, coalesce, keyname, load, mirror, store

logger = logging.getLogger(__name__)


class Context:
    """
    Per-parser state shared (never copied) by the parser and its groups.
    """

    def __init__(self, discipline=Discipline.FAIL_FAST):
        if not isinstance(discipline, Discipline):
            raise TypeError("discipline must be a Discipline")
        self.discipline = discipline
        self.shorts = set()
        self.longs = set()
        self.faults = []
        self.partition = None

    def trigger(self, fault):
        trigger(fault, discipline=self.discipline, faults=self.faults)

    def require(self):
        """
        The partition, or StateError when from_args() was not called yet.
        """
        if self.partition is None:
            raise StateError("arguments must be partitioned with from_args() before binding")
        return self.partition


def chained(method):
    """
    Run a declaration and return the registry, routing faults through the context.
    """

    @functools.wraps(method)
    def wrapper(self, *args, **kwargs):
        try:
            method(self, *args, **kwargs)
        except ArgotError as fault:
            self._context.trigger(fault)
        return self

    return wrapper


def check_type(type):
    if type not in converters and not callable(type):
        raise TypeError(f"no converter for {type!r}")


class Registry:
    """
    Declared arguments of one scope (the parser itself, a group, or the positionals).
    """

    args = mirror("args")

    def __init__(self, context, namespace):
        self._context = context
        self._namespace = namespace
        self._args = []

    @property
    def namespace(self):
        return self._namespace

    # --- declaration plumbing ---

    def _register(self, short, long):
        if short is not None and short in self._context.shorts:
            raise DuplicateKeyError(f"duplicate short code detected: {short}", key=short)
        if long is not None and long in self._context.longs:
            raise DuplicateKeyError(f"duplicate long code detected: {long}", key=long)
        if short is not None:
            self._context.shorts.add(short)
        if long is not None:
            self._context.longs.add(long)

    def _declare(self, descriptor):
        self._args.append(descriptor)
        return descriptor

    def _lookup(self, descriptor):
        """
        Claim the supplied indices of the descriptor's key, short first.
        """
        found = self._context.require().claim_key(descriptor.short, descriptor.long)
        if found is None:
            if descriptor.needs is Needs.REQUIRED:
                raise UnsetArgumentError(
                    f"required argument not given: {descriptor.label}", option=descriptor.label
                )
            return None
        return found[1]

    def _value(self, descriptor, index):
        """
        Claim the value slot of the option token at index.
        """
        slot = self._context.require().claim_after(index)
        if slot is None:
            raise MissingValueError(
                f"no argument given to {descriptor.label}", option=descriptor.label, index=index
            )
        return slot

    def _convert(self, label, type, slot):
        text = self._context.require().tokens[slot]
        try:
            return convert(type, text)
        except ConversionError as error:
            raise ConversionError(
                f"error while parsing value of {label}: {error.message}", option=label, value=text, index=slot
            ) from error
        except (ValueError, TypeError, ArithmeticError) as error:
            raise ConversionError(
                f"error while parsing value of {label}: {error}", option=label, value=text, index=slot
            ) from error

    def _bind(self, dest, value, label):
        logger.debug("bound %s to %s = %r", label, dest, value)
        store(self._namespace, dest, value)

    # --- declarations ---

    @chained
    def flag(self, *names, descr="", dest=None, inverted=False, kind=Kind.NORMAL, needs=Needs.OPTIONAL):
        """
        Boolean switch: the target becomes `not inverted` when the key was supplied,
        `inverted` otherwise. Flags never take a value.
        """
        short, long = parse_names(names)
        self._register(short, long)
        descriptor = self._declare(Descriptor(short, long, descr, kind, needs, "true" if inverted else ""))

        found = self._lookup(descriptor)
        self._bind(dest or keyname(long or short), (not inverted) if found else inverted, descriptor.label)

    @chained
    def count(self, *names, descr="", dest=None, kind=Kind.NORMAL, needs=Needs.OPTIONAL):
        """
        Counter: the target becomes the number of times the key was supplied.
        """
        short, long = parse_names(names)
        self._register(short, long)
        descriptor = self._declare(Descriptor(short, long, descr, kind, needs))
        dest = dest or keyname(long or short)

        if (indices := self._lookup(descriptor)) is None:
            store(self._namespace, dest, coalesce(load(self._namespace, dest), 0))
            return
        self._bind(dest, len(indices), descriptor.label)

    @chained
    def arg(
            self,
            *names,
            descr="",
            dest=None,
            type=str,
            kind=Kind.NORMAL,
            needs=Needs.OPTIONAL,
            display="",
            default=Unset,
    ):
        """
        Single value. When the option is repeated the last occurrence wins; the
        values of earlier occurrences are claimed and dropped.

        default: written to the target at declaration and shown in help.
        """
        check_type(type)
        short, long = parse_names(names)
        if kind is Kind.POSITIONAL:
            raise InvalidDeclarationError("options cannot be declared with the positional kind")
        self._register(short, long)
        dest = dest or keyname(long or short)

        if default is not Unset:
            store(self._namespace, dest, default)
            if kind is Kind.NORMAL:
                kind = Kind.DEFAULTED
        shown = ""
        if kind is Kind.DEFAULTED and (current := load(self._namespace, dest)) is not Unset:
            shown = str(current)
        descriptor = self._declare(Descriptor(short, long, descr, kind, needs, shown, display))

        if (indices := self._lookup(descriptor)) is None:
            return
        *earlier, last = indices
        for index in earlier:
            self._value(descriptor, index)
        value = self._convert(descriptor.label, type, self._value(descriptor, last))
        self._bind(dest, value, descriptor.label)

    @chained
    def list(
            self,
            *names,
            descr="",
            dest=None,
            type=str,
            kind=Kind.NORMAL,
            needs=Needs.OPTIONAL,
            display="",
    ):
        """
        Repeated value: every occurrence's value is appended, in input order.
        """
        check_type(type)
        short, long = parse_names(names)
        if kind is Kind.POSITIONAL:
            raise InvalidDeclarationError("options cannot be declared with the positional kind")
        self._register(short, long)
        descriptor = self._declare(Descriptor(short, long, descr, kind, needs, "", display))
        dest = dest or keyname(long or short)

        if (indices := self._lookup(descriptor)) is None:
            if load(self._namespace, dest) in (Unset, None):
                store(self._namespace, dest, [])
            return
        values = [self._convert(descriptor.label, type, self._value(descriptor, index)) for index in indices]
        self._extend(dest, values, descriptor.label)

    def _extend(self, dest, values, label):
        current = load(self._namespace, dest)
        if isinstance(current, MutableSequence):
            current.extend(values)
            logger.debug("bound %s to %s += %r", label, dest, values)
        else:
            self._bind(dest, [*(current or ()), *values], label)

    # --- help layout ---

    @staticmethod
    def _rendered_width(descriptor, indent):
        width = indent
        positional = descriptor.kind is Kind.POSITIONAL
        if not positional:
            width += 4  # "-x, " or padding
        if descriptor.long:
            width += len(descriptor.long) + (0 if positional else 2)
        if descriptor.display:
            width += 1 + len(descriptor.display)
        return width

    def prefix_width(self, indent):
        """
        Widest rendered "names + placeholder" column of this registry at indent.
        """
        return max((self._rendered_width(descriptor, indent) for descriptor in self._args), default=0)

    def render(self, document, indent, options, styler):
        """
        Append one block per declared argument to document (a rich Text).
        """
        for descriptor in self._args:
            positional = descriptor.kind is Kind.POSITIONAL
            name_style = styler("positional-name" if positional else "option-name")

            document.append(" " * indent)
            if not positional:
                if descriptor.short:
                    document.append("-" + descriptor.short, name_style)
                    document.append(", " if descriptor.long else "  ")
                else:
                    document.append("    ")
            if descriptor.long:
                document.append(descriptor.long if positional else "--" + descriptor.long, name_style)
            if descriptor.display:
                document.append(" ").append(descriptor.display, styler("metavar"))

            width = self._rendered_width(descriptor, indent)
            column = options.longest_prefix + 5
            document.append(" " * (column - width))

            wrapped = options.wrap(column, descriptor.descr)
            document.append(wrapped, styler("argument-description"))

            if descriptor.default:
                document.append("\n" + " " * column)
                document.append("[default: ", styler("default"))
                document.append(options.wrap(column + len("[default: "), descriptor.default), styler("default"))
                document.append("]", styler("default"))

            if options.line_after_wrap and "\n" in wrapped:
                document.append("\n")
            document.append("\n")


__all__ = (
    "Context",
    "Registry",
    "chained",
    "check_type",
)
