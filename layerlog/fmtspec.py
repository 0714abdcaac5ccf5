"""Parsing of printf-style format strings into literal text and conversion specs.

The grammar is the classic one::

    %[flags][width][.precision][length]conversion

with flags ``-``, ``+``, space, ``0``, ``#`` and ``'`` (accepted and ignored),
``*`` allowed for width and precision, and length modifiers ``h``, ``l``
and ``ll`` (the latter treated as ``l``).  The non-standard synonyms
``i``, ``D``, ``U`` and ``O`` are normalised to ``d``, ``ld``, ``lu`` and
``lo``.  Parsing is purely syntactic: arguments are consumed and
values rendered by the formatter.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, Optional, Tuple, Union

__all__ = ["ConversionSpec", "Literal", "parse_spec", "tokenize"]

_FLAG_CHARS = "0-+ #'"
_UINT_MASK = 0xFFFFFFFF

#: Conversions the formatter knows how to render.
KNOWN_CONVERSIONS = frozenset("%csduoxXp")
NUMERIC_CONVERSIONS = frozenset("duoxXp")

_SYNONYMS = {
    "i": ("d", None),
    "D": ("d", "l"),
    "U": ("u", "l"),
    "O": ("o", "l"),
}


@dataclass(frozen=True)
class Literal:
    """A run of format text copied to the output unchanged."""

    text: str


@dataclass(frozen=True)
class ConversionSpec:
    """One parsed ``%`` conversion specification."""

    text: str
    conversion: str
    justify_left: bool = False
    zero_padding: bool = False
    force_sign: bool = False
    space_for_positive: bool = True
    alternate_form: bool = False
    width: int = 0
    width_from_arg: bool = False
    precision: Optional[int] = None
    precision_from_arg: bool = False
    length_modifier: str = ""

    @property
    def is_known(self) -> bool:
        """True when the conversion character is one the formatter supports."""
        return self.conversion in KNOWN_CONVERSIONS

    @property
    def is_numeric(self) -> bool:
        """True for d, u, o, x, X and p conversions."""
        return self.conversion in NUMERIC_CONVERSIONS

    @property
    def precision_specified(self) -> bool:
        """True when a precision appeared in the format text."""
        return self.precision is not None or self.precision_from_arg


def _read_number(fmt: str, pos: int) -> Tuple[int, int]:
    """Read decimal digits as an unsigned 32-bit value, wrapping on overflow."""
    value = 0
    while pos < len(fmt) and "0" <= fmt[pos] <= "9":
        value = (10 * value + (ord(fmt[pos]) - ord("0"))) & _UINT_MASK
        pos += 1
    return value, pos


def parse_spec(fmt: str, pos: int) -> Tuple[ConversionSpec, int]:
    """Parse the conversion starting at ``fmt[pos]`` (which must be ``%``).

    Returns the spec and the position just past it.  If the format ends
    before a conversion character, the spec's ``conversion`` is empty.
    """
    if pos < 0 or pos >= len(fmt) or fmt[pos] != "%":
        raise ValueError(f"no conversion specification at position {pos}")

    start = pos
    pos += 1
    end = len(fmt)

    def peek() -> str:
        return fmt[pos] if pos < end else ""

    justify_left = zero_padding = force_sign = alternate_form = False
    space_for_positive = True
    while peek() and peek() in _FLAG_CHARS:
        ch = fmt[pos]
        if ch == "0":
            zero_padding = True
        elif ch == "-":
            justify_left = True
        elif ch == "+":
            force_sign = True
            space_for_positive = False
        elif ch == " ":
            force_sign = True
        elif ch == "#":
            alternate_form = True
        pos += 1

    width = 0
    width_from_arg = False
    if peek() == "*":
        width_from_arg = True
        pos += 1
    elif peek().isdigit() and peek() in "0123456789":
        width, pos = _read_number(fmt, pos)

    precision: Optional[int] = None
    precision_from_arg = False
    if peek() == ".":
        pos += 1
        if peek() == "*":
            precision_from_arg = True
            pos += 1
        elif peek() and peek() in "0123456789":
            precision, pos = _read_number(fmt, pos)
        else:
            precision = 0

    length_modifier = ""
    if peek() in ("h", "l") and peek():
        length_modifier = fmt[pos]
        pos += 1
        if length_modifier == "l" and peek() == "l":
            pos += 1

    conversion = peek()
    synonym = _SYNONYMS.get(conversion)
    if synonym is not None:
        conversion, forced_length = synonym
        if forced_length is not None:
            length_modifier = forced_length
    if pos < end:
        pos += 1

    spec = ConversionSpec(
        text=fmt[start:pos],
        conversion=conversion,
        justify_left=justify_left,
        zero_padding=zero_padding,
        force_sign=force_sign,
        space_for_positive=space_for_positive,
        alternate_form=alternate_form,
        width=width,
        width_from_arg=width_from_arg,
        precision=precision,
        precision_from_arg=precision_from_arg,
        length_modifier=length_modifier,
    )
    return spec, pos


def tokenize(fmt: Optional[str]) -> Iterator[Union[Literal, ConversionSpec]]:
    """Split a format string into literals and conversion specs.

    ``None`` is treated as an empty format, and the format ends at the
    first NUL character, as a C string would.
    """
    if not fmt:
        return
    nul = fmt.find("\0")
    if nul >= 0:
        fmt = fmt[:nul]
    pos = 0
    end = len(fmt)
    while pos < end:
        if fmt[pos] != "%":
            nxt = fmt.find("%", pos + 1)
            if nxt < 0:
                nxt = end
            yield Literal(fmt[pos:nxt])
            pos = nxt
        else:
            spec, pos = parse_spec(fmt, pos)
            yield spec