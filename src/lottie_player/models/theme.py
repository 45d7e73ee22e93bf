"""
Theme - per-layer color swaps for a composition.

Maps layer names to a replacement RGBA color. The playback core only carries
the active theme; the renderer applies it to fills and strokes of the layer.
"""

from typing import Dict, Iterator, Optional, Tuple, Union

from lottie_player.models.errors import PlaybackConfigError

RGBA = Tuple[int, int, int, int]
ColorLike = Union[str, Tuple[int, int, int], Tuple[int, int, int, int]]


def parse_color(value: ColorLike) -> RGBA:
    """
    Normalize a color to an (r, g, b, a) tuple of 0-255 ints.

    Accepts "#RRGGBB", "#RRGGBBAA", (r, g, b) or (r, g, b, a).
    """
    if isinstance(value, str):
        hex_str = value.lstrip("#")
        if len(hex_str) not in (6, 8):
            raise PlaybackConfigError(f"Invalid hex color: {value!r}", details={"color": value})
        try:
            channels = [int(hex_str[i:i + 2], 16) for i in range(0, len(hex_str), 2)]
        except ValueError:
            raise PlaybackConfigError(f"Invalid hex color: {value!r}", details={"color": value})
    else:
        channels = [int(c) for c in value]

    if len(channels) == 3:
        channels.append(255)
    if len(channels) != 4 or any(c < 0 or c > 255 for c in channels):
        raise PlaybackConfigError(f"Invalid color: {value!r}", details={"color": value})
    return (channels[0], channels[1], channels[2], channels[3])


class Theme:
    """
    Color swap table keyed by layer name.

    Example:
        theme = Theme().add("background", "#1E90FF").add("icon", (255, 255, 255))
    """

    def __init__(self, colors: Optional[Dict[str, ColorLike]] = None):
        self._colors: Dict[str, RGBA] = {}
        for layer_name, color in (colors or {}).items():
            self._colors[layer_name] = parse_color(color)

    def add(self, layer_name: str, color: ColorLike) -> "Theme":
        """Return a new theme with the layer color swapped"""
        theme = Theme()
        theme._colors = dict(self._colors)
        theme._colors[layer_name] = parse_color(color)
        return theme

    def edit(self, layer_name: str, color: ColorLike) -> "Theme":
        """Swap a layer color in place, overwriting any previous value"""
        self._colors[layer_name] = parse_color(color)
        return self

    def get(self, layer_name: str) -> Optional[RGBA]:
        return self._colors.get(layer_name)

    def layers(self) -> Iterator[str]:
        return iter(self._colors)

    def to_dict(self) -> Dict[str, RGBA]:
        return dict(self._colors)

    def __contains__(self, layer_name: object) -> bool:
        return layer_name in self._colors

    def __len__(self) -> int:
        return len(self._colors)

    def __eq__(self, other: object) -> bool:
        return isinstance(other, Theme) and self._colors == other._colors

    def __hash__(self) -> int:
        return hash(frozenset(self._colors.items()))

    def __repr__(self) -> str:
        return f"Theme({self._colors})"
