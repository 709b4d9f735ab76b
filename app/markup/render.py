from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass

from app.markup.colors import DEFAULT_PALETTE, WHITE, Color
from app.markup.parser import parse_markup
from app.markup.tokens import Escaped, HexColor, MarkupToken, Named, NewLine, Popped, Text


@dataclass(frozen=True, slots=True)
class Segment:
    text: str
    color: Color


def render_tokens(
    tokens: Iterable[MarkupToken],
    *,
    palette: Mapping[str, Color] = DEFAULT_PALETTE,
    default: Color = WHITE,
) -> list[Segment]:
    """Apply a token stream to a color stack and return styled segments.

    The stack is local to the call. Pops on an empty stack are ignored, so
    text after excess `[]` falls back to `default`.
    """

    stack: list[Color] = []
    out: list[Segment] = []

    def top() -> Color:
        return stack[-1] if stack else default

    for token in tokens:
        if isinstance(token, HexColor):
            stack.append(Color(token.r, token.g, token.b, 255 if token.a is None else token.a))
        elif isinstance(token, Named):
            color = palette.get(token.name)
            # Named tokens come from the same palette, but a caller may
            # render tokens produced against a different one.
            stack.append(color if color is not None else default)
        elif isinstance(token, Popped):
            if stack:
                stack.pop()
        elif isinstance(token, Text):
            out.append(Segment(token.text, top()))
        elif isinstance(token, Escaped):
            out.append(Segment("[", top()))
        elif isinstance(token, NewLine):
            out.append(Segment("\n", top()))
        else:
            raise ValueError(f"Unknown markup token: {token!r}")

    return out


def render_markup(
    source: str,
    *,
    palette: Mapping[str, Color] = DEFAULT_PALETTE,
    default: Color = WHITE,
) -> list[Segment]:
    return render_tokens(parse_markup(source, palette=palette), palette=palette, default=default)


def strip_markup(source: str, *, palette: Mapping[str, Color] = DEFAULT_PALETTE) -> str:
    """Plain text of a markup string (color directives removed, `[[` -> `[`)."""

    return "".join(s.text for s in render_markup(source, palette=palette))
