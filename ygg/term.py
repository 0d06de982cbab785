# Copyright Red Hat
#
# ygg/term.py - Yggdrasil terminal control
#
# This file is part of the ygg project.
#
# SPDX-License-Identifier: Apache-2.0
"""
Terminal control for colored report output.
"""
from typing import List, Optional, TextIO
import curses
import sys
import re

#: Accepted values for the ``color`` argument of ``TermControl``.
COLOR_MODES = ("auto", "always", "never")


class TermControl:
    """
    Portable terminal control sequences for colored output.

    Uses the curses package to look up the control sequences for the
    current terminal. Each attribute holds the sequence needed to switch
    to that mode or color, or the empty string if the terminal (or the
    ``color`` setting) does not allow it, so that code can include the
    attributes in output unconditionally:

        >>> term = TermControl()
        >>> print("This is " + term.GREEN + "green" + term.NORMAL)

    The ``render()`` method replaces ``${NAME}`` with the value of the
    ``NAME`` attribute:

        >>> print(term.render("This is ${GREEN}green${NORMAL}"))
    """

    # Output modes:
    BOLD: str = ""  #: Turn on bold mode
    DIM: str = ""  #: Turn on half-bright mode
    NORMAL: str = ""  #: Turn off all modes

    # Foreground colors:
    BLACK: str = ""  #: Black foreground color
    BLUE: str = ""  #: Blue foreground color
    GREEN: str = ""  #: Green foreground color
    CYAN: str = ""  #: Cyan foreground color
    RED: str = ""  #: Red foreground color
    MAGENTA: str = ""  #: Magenta foreground color
    YELLOW: str = ""  #: Yellow foreground color
    WHITE: str = ""  #: White foreground color

    # Terminal size:
    columns: Optional[int] = None  #: Terminal width

    _STRING_CAPABILITIES: List[str] = "BOLD:bold DIM:dim NORMAL:sgr0".split()
    _ANSI_COLORS: List[str] = "BLACK RED GREEN YELLOW BLUE MAGENTA CYAN WHITE".split()

    def __init__(self, term_stream: Optional[TextIO] = None, color: str = "auto"):
        """
        Initialize terminal capabilities.

        If ``color`` is "never", or it is "auto" and the output stream is
        not a tty, the instance has no capabilities and every attribute is
        the empty string. If ``color`` is "always" and terminal setup
        fails, plain ANSI sequences are used.

        :param term_stream: Output stream to probe for capabilities.
        :type term_stream: ``Optional[TextIO]``
        :param color: A string to control color rendering: "auto", "always", or
                      "never".
        :type color: ``str``
        """
        if color not in COLOR_MODES:
            raise ValueError(f"Invalid color mode: {color}")

        if term_stream is None:
            term_stream = sys.stdout

        self.term_stream = term_stream
        self.color = color

        if color == "never":
            return

        if color == "auto":
            if not hasattr(term_stream, "isatty") or not term_stream.isatty():
                return

        # curses.error is not reliably catchable by name before setupterm()
        # has succeeded once.
        try:
            curses.setupterm()
        except BaseException as err:  # pylint: disable=broad-exception-caught
            if isinstance(err, (KeyboardInterrupt, SystemExit)):  # pragma: no cover
                raise
            if color == "always":
                self._force_ansi()
            return

        self.columns = curses.tigetnum("cols")

        for capability in self._STRING_CAPABILITIES:
            (attr, cap_name) = capability.split(":")
            setattr(self, attr, self._tigetstr(cap_name) or "")

        self._init_colors()
        if color == "always" and not self.RED:
            self._force_ansi()

    def _force_ansi(self):
        for i, color in enumerate(self._ANSI_COLORS):
            setattr(self, color, f"\033[0;3{i}m")
        self.BOLD = "\033[1m"
        self.NORMAL = "\033[0m"

    def _init_colors(self):
        set_fg_ansi = self._tigetstr("setaf")
        if not set_fg_ansi:
            return
        set_fg_ansi = set_fg_ansi.encode("utf8")
        for i, color in enumerate(self._ANSI_COLORS):
            setattr(self, color, curses.tparm(set_fg_ansi, i).decode("utf8") or "")

    def _tigetstr(self, cap_name):
        # Strip "$<2>" style delays from string capabilities.
        cap = curses.tigetstr(cap_name)
        cap = cap.decode(encoding="utf8") if cap else ""
        return cap.split("$", maxsplit=1)[0]

    @property
    def has_color(self) -> bool:
        """``True`` if this instance emits color sequences."""
        return bool(self.RED)

    def colorize(self, text: str, color: str) -> str:
        """
        Wrap ``text`` in the sequence for ``color`` and a reset.

        :param text: The text to color.
        :type text: ``str``
        :param color: The name of a color attribute, e.g. "RED".
        :type color: ``str``
        :returns: The colored text, or ``text`` if color is disabled.
        :rtype: ``str``
        """
        start = getattr(self, color, "")
        if not start:
            return text
        return start + text + self.NORMAL

    def render(self, template):
        """
        Replace each $-substitution with the corresponding control.

        :param template: Template string containing ${NAME} patterns.
        :type template: ``str``
        :returns: Rendered string with substitutions applied.
        :rtype: ``str``
        """
        return re.sub(r"\$\$|\${\w+}", self._render_sub, template)

    def _render_sub(self, match):
        s = match.group()
        if s == "$$":
            return "$"
        return getattr(self, s[2:-1], "")


__all__ = ["COLOR_MODES", "TermControl"]
