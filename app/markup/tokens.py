from __future__ import annotations

from dataclasses import dataclass
from typing import Union


@dataclass(frozen=True, slots=True)
class HexColor:
    """`[#RRGGBB]` or `[#RRGGBBAA]`; `a` is None when the alpha pair is absent."""

    r: int
    g: int
    b: int
    a: int | None = None


@dataclass(frozen=True, slots=True)
class Named:
    name: str


@dataclass(frozen=True, slots=True)
class Popped:
    pass


@dataclass(frozen=True, slots=True)
class Text:
    text: str


@dataclass(frozen=True, slots=True)
class Escaped:
    """`[[`, a single literal `[`."""


@dataclass(frozen=True, slots=True)
class NewLine:
    pass


MarkupToken = Union[HexColor, Named, Popped, Text, Escaped, NewLine]


def literal_text(token: MarkupToken) -> str:
    """Text a token contributes once color directives are dropped."""

    if isinstance(token, Text):
        return token.text
    if isinstance(token, Escaped):
        return "["
    if isinstance(token, NewLine):
        return "\n"
    return ""
