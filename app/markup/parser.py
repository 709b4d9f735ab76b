from __future__ import annotations

import re
from collections.abc import Iterator, Mapping

from app.markup.colors import DEFAULT_PALETTE, Color
from app.markup.tokens import Escaped, HexColor, MarkupToken, Named, NewLine, Popped, Text

_HEX_DIRECTIVE_RE = re.compile(r"#([0-9a-fA-F]{2})([0-9a-fA-F]{2})([0-9a-fA-F]{2})([0-9a-fA-F]{2})?")


def _directive(body: str, palette: Mapping[str, Color]) -> MarkupToken | None:
    """Classify the text between `[` and `]`, or None if it is not a directive."""

    if body == "":
        return Popped()

    m = _HEX_DIRECTIVE_RE.fullmatch(body)
    if m is not None:
        r, g, b, a = m.groups()
        return HexColor(int(r, 16), int(g, 16), int(b, 16), int(a, 16) if a is not None else None)

    if body in palette:
        return Named(body)

    return None


def _text_end(source: str, pos: int) -> int:
    end = len(source)
    for stop in ("[", "\n"):
        idx = source.find(stop, pos)
        if idx != -1 and idx < end:
            end = idx
    return end


def tokenize(source: str, *, palette: Mapping[str, Color] = DEFAULT_PALETTE) -> Iterator[MarkupToken]:
    """Yield markup tokens in source order.

    Never raises on malformed input: a bracket group that is not a directive is
    yielded as literal text (`[...]` as a whole when it is closed on the same
    line, otherwise just the `[`). Every step consumes at least one character.
    """

    pos = 0
    n = len(source)
    while pos < n:
        ch = source[pos]

        if ch == "\n":
            yield NewLine()
            pos += 1
            continue

        if ch == "[":
            if source.startswith("[[", pos):
                yield Escaped()
                pos += 2
                continue

            close = source.find("]", pos + 1)
            body = source[pos + 1 : close] if close != -1 else None
            if body is None or "[" in body or "\n" in body:
                # Unterminated on this line; keep the bracket as text.
                yield Text("[")
                pos += 1
                continue

            token = _directive(body, palette)
            yield token if token is not None else Text(source[pos : close + 1])
            pos = close + 1
            continue

        end = _text_end(source, pos)
        yield Text(source[pos:end])
        pos = end


class Markup:
    """Re-iterable token sequence for one markup string.

    Each iteration tokenizes from scratch; nothing is cached between passes.
    """

    __slots__ = ("source", "palette")

    def __init__(self, source: str, *, palette: Mapping[str, Color] = DEFAULT_PALETTE) -> None:
        self.source = source
        self.palette = palette

    def __iter__(self) -> Iterator[MarkupToken]:
        return tokenize(self.source, palette=self.palette)

    def __repr__(self) -> str:
        return f"Markup({self.source!r})"


def parse_markup(source: str, *, palette: Mapping[str, Color] = DEFAULT_PALETTE) -> Markup:
    return Markup(source, palette=palette)
