"""Cell style settings given as JSON, and the style parts built from them."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, Callable, Mapping

from .colors import get_palette_color

__all__ = [
    "FontFormat",
    "FillFormat",
    "BorderFormat",
    "AlignmentFormat",
    "ProtectionFormat",
    "FormatStyle",
    "Font",
    "Fill",
    "Border",
    "Alignment",
    "Protection",
    "parse_format_style",
    "build_fill",
    "build_border",
    "build_alignment",
    "build_protection",
]

DEFAULT_DECIMAL_PLACES = 2

# Pattern fill names, indexed by the "pattern" setting.
PATTERNS = (
    "none",
    "solid",
    "mediumGray",
    "darkGray",
    "lightGray",
    "darkHorizontal",
    "darkVertical",
    "darkDown",
    "darkUp",
    "darkGrid",
    "darkTrellis",
    "lightHorizontal",
    "lightVertical",
    "lightDown",
    "lightUp",
    "lightGrid",
    "lightTrellis",
    "gray125",
    "gray0625",
)

# Gradient angles for the linear "shading" settings 0 to 3.
GRADIENT_DEGREES = (90.0, 0.0, 45.0, 135.0)

# Border line styles, indexed by the border "style" setting.
BORDER_STYLES = (
    "none",
    "thin",
    "medium",
    "dashed",
    "dotted",
    "thick",
    "double",
    "hair",
    "mediumDashed",
    "dashDot",
    "mediumDashDot",
    "dashDotDot",
    "mediumDashDotDot",
    "slantDashDot",
)

_BORDER_SIDES = {
    "left": "left",
    "right": "right",
    "top": "top",
    "bottom": "bottom",
    "diagonalUp": "diagonal",
    "diagonalDown": "diagonal",
}


# --- settings read from JSON -------------------------------------------------


@dataclass
class FontFormat:
    """Font settings of a style."""

    bold: bool = False
    italic: bool = False
    underline: str = ""
    family: str = ""
    size: float = 0.0
    color: str = ""


@dataclass
class FillFormat:
    """Fill settings of a style: a pattern or a two-colour gradient."""

    type: str = ""
    pattern: int = 0
    color: tuple[str, ...] = ()
    shading: int = 0


@dataclass
class BorderFormat:
    """One border line: which side, its colour and its style index."""

    type: str = ""
    color: str = ""
    style: int = 0


@dataclass
class AlignmentFormat:
    """Text alignment settings of a style."""

    horizontal: str = ""
    indent: int = 0
    justify_last_line: bool = False
    reading_order: int = 0
    relative_indent: int = 0
    shrink_to_fit: bool = False
    text_rotation: int = 0
    vertical: str = ""
    wrap_text: bool = False


@dataclass
class ProtectionFormat:
    """Cell protection settings of a style."""

    hidden: bool = False
    locked: bool = False


@dataclass
class FormatStyle:
    """All settings of a cell or conditional style."""

    font: FontFormat | None = None
    fill: FillFormat = field(default_factory=FillFormat)
    border: list[BorderFormat] = field(default_factory=list)
    alignment: AlignmentFormat | None = None
    protection: ProtectionFormat | None = None
    number_format: int = 0
    decimal_places: int = DEFAULT_DECIMAL_PLACES
    custom_number_format: str | None = None
    lang: str = ""
    negred: bool = False


# --- style parts -------------------------------------------------------------


@dataclass
class Font:
    """A font entry of the style sheet."""

    name: str = ""
    size: float = 11.0
    color: str | None = None
    family: int = 2
    bold: bool = False
    italic: bool = False
    underline: str | None = None


@dataclass
class Fill:
    """A fill entry: a pattern fill, a gradient fill, or neither."""

    pattern_type: str | None = None
    fg_color: str | None = None
    bg_color: str | None = None
    gradient_type: str = ""
    degree: float = 0.0
    left: float = 0.0
    right: float = 0.0
    top: float = 0.0
    bottom: float = 0.0
    stops: tuple[tuple[float, str], ...] = ()

    @property
    def is_pattern(self) -> bool:
        return self.pattern_type is not None

    @property
    def is_gradient(self) -> bool:
        return bool(self.stops)

    @property
    def is_empty(self) -> bool:
        return not (self.is_pattern or self.is_gradient)


@dataclass
class Border:
    """A border entry; edges maps a side to its (style, ARGB colour)."""

    edges: dict[str, tuple[str, str]] = field(default_factory=dict)
    diagonal_up: bool = False
    diagonal_down: bool = False


@dataclass
class Alignment:
    """An alignment entry of a cell format."""

    horizontal: str = ""
    indent: int = 0
    justify_last_line: bool = False
    reading_order: int = 0
    relative_indent: int = 0
    shrink_to_fit: bool = False
    text_rotation: int = 0
    vertical: str = ""
    wrap_text: bool = False


@dataclass
class Protection:
    """A protection entry of a cell format."""

    hidden: bool = False
    locked: bool = False


# --- JSON reading ------------------------------------------------------------

_Coerce = Callable[[Any, str], Any]


def _lookup(data: Mapping[str, Any], key: str) -> Any:
    """Find a key exactly, else ignoring case; None when absent."""
    if key in data:
        return data[key]
    lowered = key.lower()
    for name, value in data.items():
        if name.lower() == lowered:
            return value
    return None


def _as_bool(value: Any, where: str) -> bool:
    if not isinstance(value, bool):
        raise ValueError(f"{where}: expected a boolean, got {value!r}")
    return value


def _as_int(value: Any, where: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"{where}: expected an integer, got {value!r}")
    return value


def _as_unsigned(value: Any, where: str) -> int:
    number = _as_int(value, where)
    if number < 0:
        raise ValueError(f"{where}: expected a non-negative integer, got {value!r}")
    return number


def _as_float(value: Any, where: str) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError(f"{where}: expected a number, got {value!r}")
    return float(value)


def _as_str(value: Any, where: str) -> str:
    if not isinstance(value, str):
        raise ValueError(f"{where}: expected a string, got {value!r}")
    return value


def _as_object(value: Any, where: str) -> Mapping[str, Any]:
    if not isinstance(value, dict):
        raise ValueError(f"{where}: expected an object, got {value!r}")
    return value


def _as_list(value: Any, where: str) -> list[Any]:
    if not isinstance(value, list):
        raise ValueError(f"{where}: expected an array, got {value!r}")
    return value


def _read_fields(
    data: Mapping[str, Any], fields: Mapping[str, tuple[str, _Coerce]], where: str
) -> dict[str, Any]:
    values = {}
    for attr, (key, coerce) in fields.items():
        raw = _lookup(data, key)
        if raw is not None:
            values[attr] = coerce(raw, f"{where}.{key}")
    return values


def _parse_font(value: Any, where: str) -> FontFormat:
    fields = {
        "bold": ("bold", _as_bool),
        "italic": ("italic", _as_bool),
        "underline": ("underline", _as_str),
        "family": ("family", _as_str),
        "size": ("size", _as_float),
        "color": ("color", _as_str),
    }
    return FontFormat(**_read_fields(_as_object(value, where), fields, where))


def _parse_colors(value: Any, where: str) -> tuple[str, ...]:
    return tuple(
        _as_str(item, f"{where}[{index}]")
        for index, item in enumerate(_as_list(value, where))
        if item is not None
    )


def _parse_fill(value: Any, where: str) -> FillFormat:
    fields = {
        "type": ("type", _as_str),
        "pattern": ("pattern", _as_int),
        "color": ("color", _parse_colors),
        "shading": ("shading", _as_int),
    }
    return FillFormat(**_read_fields(_as_object(value, where), fields, where))


def _parse_border_line(value: Any, where: str) -> BorderFormat:
    fields = {
        "type": ("type", _as_str),
        "color": ("color", _as_str),
        "style": ("style", _as_int),
    }
    return BorderFormat(**_read_fields(_as_object(value, where), fields, where))


def _parse_borders(value: Any, where: str) -> list[BorderFormat]:
    return [
        _parse_border_line(item, f"{where}[{index}]")
        for index, item in enumerate(_as_list(value, where))
        if item is not None
    ]


def _parse_alignment(value: Any, where: str) -> AlignmentFormat:
    fields = {
        "horizontal": ("horizontal", _as_str),
        "indent": ("indent", _as_int),
        "justify_last_line": ("justify_last_line", _as_bool),
        "reading_order": ("reading_order", _as_unsigned),
        "relative_indent": ("relative_indent", _as_int),
        "shrink_to_fit": ("shrink_to_fit", _as_bool),
        "text_rotation": ("text_rotation", _as_int),
        "vertical": ("vertical", _as_str),
        "wrap_text": ("wrap_text", _as_bool),
    }
    return AlignmentFormat(**_read_fields(_as_object(value, where), fields, where))


def _parse_protection(value: Any, where: str) -> ProtectionFormat:
    fields = {
        "hidden": ("hidden", _as_bool),
        "locked": ("locked", _as_bool),
    }
    return ProtectionFormat(**_read_fields(_as_object(value, where), fields, where))


_STYLE_FIELDS: dict[str, tuple[str, _Coerce]] = {
    "font": ("font", _parse_font),
    "fill": ("fill", _parse_fill),
    "border": ("border", _parse_borders),
    "alignment": ("alignment", _parse_alignment),
    "protection": ("protection", _parse_protection),
    "number_format": ("number_format", _as_int),
    "decimal_places": ("decimal_places", _as_int),
    "custom_number_format": ("custom_number_format", _as_str),
    "lang": ("lang", _as_str),
    "negred": ("negred", _as_bool),
}


def parse_format_style(style: str) -> FormatStyle:
    """Parse JSON style settings; decimal places default to two.

    Raises ValueError for malformed JSON or settings of the wrong type.
    """
    try:
        data = json.loads(style)
    except json.JSONDecodeError as exc:
        raise ValueError(f"invalid style settings: {exc}") from exc
    if data is None:
        return FormatStyle()
    return FormatStyle(**_read_fields(_as_object(data, "style"), _STYLE_FIELDS, "style"))


# --- building style parts ----------------------------------------------------


def _gradient_fill(fill: FillFormat) -> Fill:
    result = Fill()
    if len(fill.color) != 2:
        return result
    if 0 <= fill.shading < len(GRADIENT_DEGREES):
        result.degree = GRADIENT_DEGREES[fill.shading]
    elif fill.shading == 4:
        result.gradient_type = "path"
    elif fill.shading == 5:
        result.gradient_type = "path"
        result.left = result.right = result.top = result.bottom = 0.5
    result.stops = tuple(
        (float(position), get_palette_color(color))
        for position, color in enumerate(fill.color)
    )
    return result


def _pattern_fill(fill: FillFormat, foreground: bool) -> Fill:
    result = Fill()
    if not 0 <= fill.pattern < len(PATTERNS) or not fill.color:
        return result
    result.pattern_type = PATTERNS[fill.pattern]
    color = get_palette_color(fill.color[0])
    if foreground:
        result.fg_color = color
    else:
        result.bg_color = color
    return result


def build_fill(fmt: FormatStyle, foreground: bool) -> Fill | None:
    """Build the fill of a style, or None when no fill type is given.

    A pattern colour goes to the foreground for cell styles and to the
    background for conditional styles. Unusable settings give an empty fill.
    """
    if fmt.fill.type == "gradient":
        return _gradient_fill(fmt.fill)
    if fmt.fill.type == "pattern":
        return _pattern_fill(fmt.fill, foreground)
    return None


def build_border(fmt: FormatStyle) -> Border:
    """Build the border of a style; later lines for a side win."""
    border = Border()
    for line in fmt.border:
        if not 0 <= line.style < len(BORDER_STYLES):
            continue
        side = _BORDER_SIDES.get(line.type)
        if side is None:
            continue
        border.edges[side] = (BORDER_STYLES[line.style], get_palette_color(line.color))
        if line.type == "diagonalUp":
            border.diagonal_up = True
        elif line.type == "diagonalDown":
            border.diagonal_down = True
    return border


def build_alignment(fmt: FormatStyle) -> Alignment:
    """Build the alignment of a style; empty when none is set."""
    settings = fmt.alignment
    if settings is None:
        return Alignment()
    return Alignment(
        horizontal=settings.horizontal,
        indent=settings.indent,
        justify_last_line=settings.justify_last_line,
        reading_order=settings.reading_order,
        relative_indent=settings.relative_indent,
        shrink_to_fit=settings.shrink_to_fit,
        text_rotation=settings.text_rotation,
        vertical=settings.vertical,
        wrap_text=settings.wrap_text,
    )


def build_protection(fmt: FormatStyle) -> Protection:
    """Build the protection of a style; empty when none is set."""
    settings = fmt.protection
    if settings is None:
        return Protection()
    return Protection(hidden=settings.hidden, locked=settings.locked)