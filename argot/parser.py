"""
Argot parser façade: partition the input once, bind declarations, render help.

What this module provides
- Parser: the root builder. from_args() classifies the raw arguments once; the
  declarations inherited from Registry (flag/count/arg/list) plus pos() and
  gather() then bind values into the parser's namespace.
- Group: a named set of declarations rendered under its own heading. It shares
  the parser's context (keys, partition, faults) and namespace; done() returns
  to the parser.
- Help rendering (rich-based, color-aware), also available as plain text.

Quick start
    from argot import Parser, uint8

    parser = Parser("testing", "just a simple testing app").from_args(["-vv", "-m", "100", "parse"])
    (parser
        .count("-v", "--verbose", descr="increase the verbosity of the program")
        .group("architecture")
            .arg("-m", "--max-phys", descr="max hardware memory address", type=uint8, display="MiB")
            .done()
        .pos("subcommand", "first positional is a subcommand"))

    parser.namespace.verbose     # 2
    parser.namespace.max_phys    # 100
    parser.namespace.subcommand  # 'parse'

Fault handling
- Discipline.FAIL_FAST (default) raises the first fault.
- Discipline.ACCUMULATE collects them; inspect parser.errors, call parser.report()
  to print them, or parser.check() to raise them as one ParseExit group.
"""
import itertools
import logging
import os.path
import shlex
import sys
from collections import defaultdict
from types import SimpleNamespace

from rich.console import Console
from rich.text import Text

from .arguments import Descriptor, Kind, Needs
from .faults import Discipline, InvalidDeclarationError, MissingPositionalError, ParseExit, StateError
from .partition import partition
from .registry import Context, Registry, chained, check_type
from .utils import keyname
from .wrapping import HelpOptions

logger = logging.getLogger(__name__)


_STYLES = {
    "program-name": "bold #FF4D94",
    "description-section": "italic #A3A3A3",
    "usage-section": "bold #36C5F0",
    "header-section": "#D1D5DB",
    "epilog-section": "#737373",
    "group-label": "bold #FFFFFF",
    "option-name": "bold #00E6FF",
    "positional-name": "bold #22C55E",
    "metavar": "bold #FFD600",
    "argument-description": "#9CA3AF",
    "default": "italic #737373",
}


class Group(Registry):
    """
    Named collection of declarations sharing its parser's context and namespace.
    """

    def __init__(self, name, parser):
        if not isinstance(name, str) or not name.strip():
            raise ValueError("group name must be a non-empty string")
        super().__init__(parser._context, parser.namespace)
        self.name = name
        self._parser = parser

    def done(self):
        return self._parser

    def render(self, document, indent, options, styler):
        document.append(" " * options.indent)
        document.append(self.name, styler("group-label")).append(":\n")
        document.append("\n" * options.lines_after_group)
        super().render(document, indent, options, styler)

    def __repr__(self):
        return f"Group({self.name!r}, args={len(self._args)})"


class Parser(Registry):
    """
    Root of a declaration chain.

    prog: program name (defaults to the basename of sys.argv[0])
    descr: one-line description shown next to the program name
    header: long description shown after the usage line
    footer: text shown after every argument block
    help: HelpOptions controlling the layout
    terminator: token after which everything is positional
    discipline: Discipline.FAIL_FAST or Discipline.ACCUMULATE
    namespace: object or mutable mapping receiving bound values
    """

    def __init__(
            self,
            prog="",
            descr="",
            /,
            *,
            header="",
            footer="",
            help=None,
            terminator="--",
            discipline=Discipline.FAIL_FAST,
            namespace=None,
    ):
        if not isinstance(terminator, str) or not terminator:
            raise ValueError("terminator must be a non-empty string")
        if help is not None and not isinstance(help, HelpOptions):
            raise TypeError("help must be a HelpOptions")

        super().__init__(Context(discipline), SimpleNamespace() if namespace is None else namespace)
        self.prog = prog or os.path.basename(sys.argv[0])
        self.descr = descr
        self.terminator = terminator
        self.help_options = help if help is not None else HelpOptions()
        self._header = header
        self._footer = footer
        self._groups = []
        self._positionals = Registry(self._context, self._namespace)

    # --- input ---

    def from_args(self, argv=None, /):
        """
        Partition the raw arguments (program name excluded); must be called exactly
        once and before any binding. A string is split like a shell would.
        """
        if self._context.partition is not None:
            raise StateError("from_args() may only be called once per parser")
        if argv is None:
            argv = sys.argv[1:]
        elif isinstance(argv, str):
            argv = shlex.split(argv)
        self._context.partition = partition(argv, self.terminator, trigger=self._context.trigger)
        return self

    @property
    def unclaimed(self):
        """
        Number of positional tokens no declaration has claimed yet.
        """
        return len(self._context.require().available)

    @property
    def unknown(self):
        """
        Keys that were supplied on the command line but never bound.
        """
        return sorted(self._context.require().supplied)

    # --- metadata ---

    def header(self, content):
        self._header = content
        return self

    def footer(self, content):
        self._footer = content
        return self

    def group(self, name):
        group = Group(name, self)
        self._groups.append(group)
        return group

    @property
    def groups(self):
        return tuple(self._groups)

    @property
    def positionals(self):
        return self._positionals.args

    # --- positionals ---

    @chained
    def pos(self, label, descr="", /, *, dest=None, type=str):
        """
        Bind the earliest unclaimed positional token.
        """
        check_type(type)
        if not isinstance(label, str) or not label.strip():
            raise InvalidDeclarationError("positional labels must be non-empty strings")
        descriptor = self._positionals._declare(Descriptor(None, label, descr, Kind.POSITIONAL, Needs.REQUIRED))

        slot = self._context.require().claim_first()
        if slot is None:
            raise MissingPositionalError(f"expected a positional argument for: {label}", label=label)
        self._bind(dest or keyname(label), self._convert(descriptor.label, type, slot), label)

    @chained
    def gather(self, dest, /, *, type=str):
        """
        Bind every remaining positional token, in input order, into a list.
        """
        check_type(type)
        if not isinstance(dest, str) or not dest:
            raise InvalidDeclarationError("gather() needs a destination name")
        slots = self._context.require().claim_rest()
        values = [self._convert("unnamed positional", type, slot) for slot in slots]
        self._extend(dest, values, "positionals")

    # --- faults ---

    @property
    def discipline(self):
        return self._context.discipline

    @property
    def faults(self):
        return tuple(self._context.faults)

    @property
    def errors(self):
        """
        Messages of the faults collected in accumulate mode, in order.
        """
        return [fault.message for fault in self._context.faults]

    def check(self):
        """
        Raise every collected fault as one ParseExit group (no-op when clean).
        """
        if self._context.faults:
            raise ParseExit(self._context.faults, prog=self.prog)
        return self

    def report(self, file=None):
        """
        Print the collected faults with rich (stderr by default). Returns how many there were.
        """
        if faults := self._context.faults:
            console = Console(file=file, stderr=file is None, highlight=False)
            console.print(ParseExit(faults, prog=self.prog, colorful=self.help_options.colorful))
        return len(faults)

    # --- help ---

    def _usage(self):
        shorts, longs, required = [], [], []
        for descriptor in itertools.chain(self._args, *(group._args for group in self._groups)):
            if descriptor.needs is Needs.OPTIONAL:
                if descriptor.short:
                    shorts.append(descriptor.short)
                elif descriptor.long:
                    longs.append(f"[--{descriptor.long}]")
            else:
                required.append(f"[-{descriptor.short}]" if descriptor.short else f"[--{descriptor.long}]")

        parts = []
        if shorts:
            parts.append("[-" + "".join(shorts) + "]")
        parts.extend(longs)
        parts.extend(required)
        parts.extend(descriptor.long for descriptor in self._positionals._args)
        return parts

    def _render(self):
        options = self.help_options
        styles = defaultdict(str, _STYLES | getattr(__import__("__main__"), "__styles__", {}))

        def styler(style):
            return styles[style] if options.colorful else ""

        depth = options.group_depth
        options.longest_prefix = max(
            self.prefix_width(options.indent),
            self._positionals.prefix_width(depth),
            *(group.prefix_width(depth) for group in self._groups),
        )
        spacing = options.spacing()

        document = Text()
        document.append(self.prog, styler("program-name")).append(" - ")
        document.append(self.descr, styler("description-section")).append("\n")
        document.append(spacing)

        usage = f"{options.use_prefix} {self.prog}"
        if clusters := self._usage():
            usage += " " + options.wrap(len(usage) + 1, " ".join(clusters))
        document.append(usage, styler("usage-section")).append("\n")
        document.append(spacing)

        if self._header:
            document.append(options.wrap(0, self._header), styler("header-section")).append("\n")
            document.append(spacing)

        self.render(document, options.indent, options, styler)
        for group in self._groups:
            document.append(spacing)
            group.render(document, depth, options, styler)

        if self._positionals._args:
            document.append(spacing)
            document.append(" " * options.indent)
            document.append("positionals", styler("group-label")).append(":\n")
            document.append("\n" * options.lines_after_group)
            self._positionals.render(document, depth, options, styler)

        if self._footer:
            document.append(spacing)
            document.append(options.wrap(0, self._footer), styler("epilog-section"))

        document.rstrip()
        return document

    def format_help(self):
        """
        The help document as plain text.
        """
        return self._render().plain + "\n"

    def print_help(self, file=None):
        """
        Write the help document to file (stdout by default) through a rich console.
        """
        console = Console(file=file, highlight=False, no_color=not self.help_options.colorful)
        console.print(self._render(), soft_wrap=True)

    def __rich__(self):
        return self._render()

    def __str__(self):
        return self.format_help()

    def __repr__(self):
        return f"Parser({self.prog!r}, discipline={self.discipline.value!r})"


__all__ = (
    "Parser",
    "Group",
)
