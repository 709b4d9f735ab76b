from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Iterator, Mapping

_HEX_RE = re.compile(r"#?([0-9a-fA-F]{6}|[0-9a-fA-F]{8})")


@dataclass(frozen=True, slots=True)
class Color:
    r: int
    g: int
    b: int
    a: int = 255

    @staticmethod
    def from_hex(value: str) -> "Color":
        """Parse `RRGGBB` / `RRGGBBAA` with an optional leading `#`."""

        m = _HEX_RE.fullmatch(value.strip())
        if m is None:
            raise ValueError(f"Invalid hex color: {value!r}")
        digits = m.group(1)
        channels = [int(digits[i : i + 2], 16) for i in range(0, len(digits), 2)]
        return Color(*channels)

    @property
    def css(self) -> str:
        return f"#{self.r:02x}{self.g:02x}{self.b:02x}{self.a:02x}"

    def __str__(self) -> str:
        return self.css


WHITE = Color(255, 255, 255)


class ColorPalette(Mapping[str, Color]):
    """Named colors accepted by `[name]` directives.

    Lookups are case-insensitive; names are stored lowercase.
    """

    def __init__(self, colors: Mapping[str, Color]) -> None:
        self._colors = {k.casefold(): v for k, v in colors.items()}

    def __getitem__(self, name: str) -> Color:
        return self._colors[name.casefold()]

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and name.casefold() in self._colors

    def __iter__(self) -> Iterator[str]:
        return iter(self._colors)

    def __len__(self) -> int:
        return len(self._colors)


# Game palette: the engine's named colors plus the UI accents mods commonly use.
DEFAULT_PALETTE = ColorPalette(
    {
        "clear": Color.from_hex("00000000"),
        "black": Color.from_hex("000000"),
        "white": Color.from_hex("ffffff"),
        "lightgray": Color.from_hex("bfbfbf"),
        "lightgrey": Color.from_hex("bfbfbf"),
        "gray": Color.from_hex("7f7f7f"),
        "grey": Color.from_hex("7f7f7f"),
        "darkgray": Color.from_hex("3f3f3f"),
        "darkgrey": Color.from_hex("3f3f3f"),
        "blue": Color.from_hex("0000ff"),
        "navy": Color.from_hex("00007f"),
        "royal": Color.from_hex("4169e1"),
        "slate": Color.from_hex("708090"),
        "sky": Color.from_hex("87ceeb"),
        "cyan": Color.from_hex("00ffff"),
        "teal": Color.from_hex("007f7f"),
        "green": Color.from_hex("00ff00"),
        "acid": Color.from_hex("7fff00"),
        "lime": Color.from_hex("32cd32"),
        "forest": Color.from_hex("228b22"),
        "olive": Color.from_hex("6b8e23"),
        "yellow": Color.from_hex("ffff00"),
        "gold": Color.from_hex("ffd700"),
        "goldenrod": Color.from_hex("daa520"),
        "orange": Color.from_hex("ffa500"),
        "brown": Color.from_hex("8b4513"),
        "tan": Color.from_hex("d2b48c"),
        "brick": Color.from_hex("b22222"),
        "red": Color.from_hex("ff0000"),
        "scarlet": Color.from_hex("ff341c"),
        "crimson": Color.from_hex("dc143c"),
        "coral": Color.from_hex("ff7f50"),
        "salmon": Color.from_hex("fa8072"),
        "pink": Color.from_hex("ff69b4"),
        "magenta": Color.from_hex("ff00ff"),
        "purple": Color.from_hex("a020f0"),
        "violet": Color.from_hex("ee82ee"),
        "maroon": Color.from_hex("b03060"),
        "accent": Color.from_hex("ffd37f"),
        "unlaunched": Color.from_hex("8982ed"),
        "stat": Color.from_hex("ffd37f"),
        "highlight": Color.from_hex("fff7e5"),
    }
)
