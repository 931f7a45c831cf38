"""
Help layout options and greedy word wrapping.
"""


class HelpOptions:
    """
    Layout of the help document.

    width: maximum line width
    indent: indentation of argument blocks
    group_indent: extra indentation of grouped (and positional) argument blocks
    lines_between: blank lines between the program line, usage, header, groups and footer
    lines_after_group: blank lines after a group heading
    line_after_wrap: blank line after a description that wrapped
    use_prefix: prefix of the usage line
    colorful: style the document when printed to a console
    """

    def __init__(
            self,
            *,
            width=80,
            indent=4,
            group_indent=4,
            lines_between=1,
            lines_after_group=0,
            line_after_wrap=True,
            use_prefix="usage:",
            colorful=True,
    ):
        for name, value in (
                ("width", width),
                ("indent", indent),
                ("group_indent", group_indent),
                ("lines_between", lines_between),
                ("lines_after_group", lines_after_group),
        ):
            if not isinstance(value, int) or isinstance(value, bool):
                raise TypeError(f"{name} must be an integer")
            if value < 0:
                raise ValueError(f"{name} must not be negative")
        if width < 1:
            raise ValueError("width must be positive")
        if not isinstance(use_prefix, str):
            raise TypeError("use_prefix must be a string")

        self.width = width
        self.indent = indent
        self.group_indent = group_indent
        self.lines_between = lines_between
        self.lines_after_group = lines_after_group
        self.line_after_wrap = bool(line_after_wrap)
        self.use_prefix = use_prefix
        self.colorful = bool(colorful)

        # recomputed on every render to align descriptions across groups
        self.longest_prefix = 0

    @property
    def group_depth(self):
        return self.indent + self.group_indent

    def spacing(self):
        return "\n" * self.lines_between

    def wrap(self, prefix, text):
        """
        Greedy word wrap of text whose first character sits at column prefix.

        At each space the next word is measured, up to the following space or
        the end of the text. If it would run past width the line breaks there,
        the space is dropped and the next line is indented to prefix. A line
        that reaches width without a wrap point is broken hard.
        """
        out = []
        column = prefix
        index = 0
        while index < len(text):
            preempt = False
            if text[index] == " ":
                if (offset := text.find(" ", index + 1)) == -1:
                    offset = len(text)
                if column + (offset - index) > self.width:
                    preempt = True
                    index += 1
                    if index == len(text):
                        break

            if preempt or column == self.width:
                out.append("\n" + " " * prefix)
                column = prefix

            out.append(text[index])
            column += 1
            index += 1
        return "".join(out)

    def __repr__(self):
        return (
            f"HelpOptions(width={self.width}, indent={self.indent}, group_indent={self.group_indent}, "
            f"lines_between={self.lines_between}, use_prefix={self.use_prefix!r})"
        )


__all__ = ("HelpOptions",)
