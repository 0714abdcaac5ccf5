"""A printf-style formatter with C99 ``snprintf`` semantics.

Supported conversions are ``s``, ``c``, ``d``, ``u``, ``o``, ``x``, ``X``,
``p`` and ``%`` (plus the synonyms ``i``, ``D``, ``U`` and ``O``).  It
supports the flags ``-``, ``+``, space, ``0`` and ``#``, and ``*`` for
width and precision.  Integers wrap to the C type that the length modifier
selects (32-bit ``int``, 16-bit ``short`` for ``h`` and 64-bit ``long``
for ``l`` and ``ll``).  An unrecognised conversion keeps only its
conversion character.
"""

from __future__ import annotations

from typing import Any, Iterator, List, Optional, Tuple

from .fmtspec import ConversionSpec, Literal, tokenize

__all__ = ["sprintf", "snprintf"]


def _wrap_signed(value: int, bits: int) -> int:
    half = 1 << (bits - 1)
    return ((value + half) % (1 << bits)) - half


def _wrap_unsigned(value: int, bits: int) -> int:
    return value & ((1 << bits) - 1)


class _Args:
    """Sequential access to the variadic arguments."""

    def __init__(self, args: Tuple[Any, ...]) -> None:
        self._it: Iterator[Any] = iter(args)

    def next(self, spec: ConversionSpec) -> Any:
        try:
            return next(self._it)
        except StopIteration:
            raise TypeError(
                f"not enough arguments for conversion {spec.text!r}"
            ) from None

    def next_int(self, spec: ConversionSpec) -> int:
        value = self.next(spec)
        if not isinstance(value, int):
            raise TypeError(
                f"conversion {spec.text!r} needs an integer, "
                f"got {type(value).__name__}"
            )
        return value


def _char_value(arg: Any, spec: ConversionSpec) -> str:
    if isinstance(arg, str) and len(arg) == 1:
        return arg
    if isinstance(arg, int):
        return chr(arg & 0xFF)
    raise TypeError(f"conversion {spec.text!r} needs a character or an integer")


def _string_value(arg: Any, spec: ConversionSpec, precision: Optional[int]) -> str:
    if arg is None:
        return ""
    if not isinstance(arg, str):
        raise TypeError(f"conversion {spec.text!r} needs a string")
    nul = arg.find("\0")
    if nul >= 0:
        arg = arg[:nul]
    if precision is None:
        return arg
    return arg[:precision]


def _render_digits(conv: str, length: str, arg: Any, spec: ConversionSpec) -> Tuple[int, str]:
    """Return the argument's sign and its rendering by the plain conversion."""
    if conv == "p":
        if arg is None:
            value = 0
        elif isinstance(arg, int):
            value = _wrap_unsigned(arg, 64)
        else:
            raise TypeError(f"conversion {spec.text!r} needs an integer or None")
        return (1 if value else 0), (f"0x{value:x}" if value else "(nil)")

    if not isinstance(arg, int):
        raise TypeError(
            f"conversion {spec.text!r} needs an integer, got {type(arg).__name__}"
        )

    if conv == "d":
        value = _wrap_signed(arg, 64 if length == "l" else 32)
        sign = (value > 0) - (value < 0)
        shown = _wrap_signed(value, 16) if length == "h" else value
        return sign, str(shown)

    value = _wrap_unsigned(arg, 64 if length == "l" else 32)
    sign = 1 if value else 0
    shown = _wrap_unsigned(value, 16) if length == "h" else value
    if conv == "u":
        text = str(shown)
    elif conv == "o":
        text = format(shown, "o")
    elif conv == "x":
        text = format(shown, "x")
    else:
        text = format(shown, "X")
    return sign, text


def _format_spec(spec: ConversionSpec, args: _Args) -> str:
    justify_left = spec.justify_left
    zero_padding = spec.zero_padding
    width = spec.width
    precision = spec.precision
    precision_specified = spec.precision_specified

    if spec.width_from_arg:
        j = args.next_int(spec)
        if j >= 0:
            width = j
        else:
            width = -j
            justify_left = True

    if spec.precision_from_arg:
        j = args.next_int(spec)
        if j >= 0:
            precision = j
        else:
            precision = None
            precision_specified = False

    conv = spec.conversion
    zeros = 0
    insert_at = 0

    if conv in ("%", "c", "s"):
        zero_padding = False
        if conv == "%":
            body = "%"
        elif conv == "c":
            body = _char_value(args.next(spec), spec)
        else:
            body = _string_value(
                args.next(spec), spec, precision if precision_specified else None
            )
    elif spec.is_numeric:
        length = "" if conv == "p" else spec.length_modifier
        arg_sign, digits = _render_digits(conv, length, args.next(spec), spec)

        if precision_specified:
            zero_padding = False

        prefix = ""
        if conv == "d":
            if spec.force_sign and arg_sign >= 0:
                prefix = " " if spec.space_for_positive else "+"
        elif spec.alternate_form and arg_sign != 0 and conv in ("x", "X"):
            prefix = "0" + conv
        insert_at = len(prefix)

        if not precision_specified:
            precision = 1
        assert precision is not None

        body = prefix
        if not (precision == 0 and arg_sign == 0):
            body += digits
            if insert_at < len(body) and body[insert_at] == "-":
                insert_at += 1
            if body[insert_at:insert_at + 2] in ("0x", "0X"):
                insert_at += 2

        num_digits = len(body) - insert_at
        if (
            spec.alternate_form
            and conv == "o"
            and not (insert_at < len(body) and body[insert_at] == "0")
        ):
            if not precision_specified or precision < num_digits + 1:
                precision = num_digits + 1
                precision_specified = True
        if num_digits < precision:
            zeros = precision - num_digits

        if not justify_left and zero_padding:
            extra = width - (len(body) + zeros)
            if extra > 0:
                zeros += extra
    else:
        zero_padding = False
        justify_left = True
        width = 0
        body = conv

    out: List[str] = []
    fill = width - (len(body) + zeros)
    if not justify_left and fill > 0:
        out.append(("0" if zero_padding else " ") * fill)
    if zeros <= 0:
        insert_at = 0
    else:
        out.append(body[:insert_at])
        out.append("0" * zeros)
    out.append(body[insert_at:])
    if justify_left and fill > 0:
        out.append(" " * fill)
    return "".join(out)


def sprintf(fmt: Optional[str], *args: Any) -> str:
    """Format ``args`` according to the printf-style format ``fmt``.

    Raises ``TypeError`` when an argument is missing or of the wrong kind.
    Surplus arguments are ignored.
    """
    consumer = _Args(args)
    pieces: List[str] = []
    for token in tokenize(fmt):
        if isinstance(token, Literal):
            pieces.append(token.text)
        else:
            pieces.append(_format_spec(token, consumer))
    return "".join(pieces)


def snprintf(size: int, fmt: Optional[str], *args: Any) -> Tuple[str, int]:
    """Format into a buffer of ``size`` characters, terminator included.

    Returns the (possibly truncated) text, at most ``size - 1`` characters
    long, and the length the full result would have had.
    """
    if size < 0:
        raise ValueError("size must not be negative")
    full = sprintf(fmt, *args)
    return full[: max(size - 1, 0)], len(full)