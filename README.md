# xlstyles

Build the style parts of an XLSX workbook in plain Python: fonts, fills,
borders, alignment and protection settings read from JSON, ARGB colour codes,
and conditional formatting rules. The package has no dependencies outside the
standard library.

## Installation

```
pip install xlstyles
```

## Colours

`xlstyles.colors` turns RGB codes into the opaque ARGB codes a workbook stores:

```python
from xlstyles.colors import get_palette_color, theme_color

get_palette_color("#a1b2c3")   # "FFA1B2C3"
theme_color("4472C4", 0)       # "FF4472C4"
theme_color("4472C4", -0.25)   # the same hue, darker
```

`theme_color` lightens a colour for a positive tint and darkens it for a
negative one, by scaling its luminance. It raises `ValueError` when the colour
is not a six-digit hex code.

## Style settings

`xlstyles.formatstyle.parse_format_style` reads style settings given as JSON
into a `FormatStyle` holding `FontFormat`, `FillFormat`, a list of
`BorderFormat`, `AlignmentFormat` and `ProtectionFormat`, plus
`number_format`, `decimal_places` (two by default), `custom_number_format`,
`lang` and `negred`. Keys are matched exactly or, failing that, ignoring case.
Malformed JSON or a setting of the wrong type raises `ValueError`.

The `build_*` functions turn the settings into style parts:

```python
from xlstyles.formatstyle import (
    parse_format_style, build_fill, build_border, build_alignment, build_protection,
)

fmt = parse_format_style(
    '{"fill":{"type":"pattern","color":["#E0EBF5"],"pattern":1},'
    '"border":[{"type":"left","color":"0000FF","style":3}],'
    '"alignment":{"horizontal":"center","wrap_text":true},'
    '"protection":{"hidden":true,"locked":true}}'
)

fill = build_fill(fmt, foreground=True)
fill.pattern_type    # "solid"
fill.fg_color        # "FFE0EBF5"

build_border(fmt).edges       # {"left": ("dashed", "FF0000FF")}
build_alignment(fmt).wrap_text  # True
build_protection(fmt).locked    # True
```

- `build_fill` returns `None` when no fill type is given, a gradient `Fill`
  for `"gradient"` (two colours, `shading` 0 to 5) and a pattern `Fill` for
  `"pattern"` (`pattern` 0 to 18). With `foreground=False` the pattern colour
  goes to `bg_color`, as conditional styles need. Unusable settings give an
  empty fill (`fill.is_empty`).
- `build_border` maps border style indexes 0 to 13 to line styles such as
  `thin`, `dashed` and `double`; `diagonalUp` and `diagonalDown` both set the
  `diagonal` edge and their own flag.
- `build_alignment` and `build_protection` return empty parts when the
  settings hold none.

## Conditional formatting

```python
from xlstyles.conditional import conditional_formatting

cf = conditional_formatting(
    "A1:A10",
    '[{"type":"2_color_scale","criteria":"=","min_type":"num","max_type":"num",'
    '"min_color":"ff0000","max_color":"0000ff"}]',
)
cf.sqref                          # "A1:A10"
rule = cf.rules[0]
rule.type                         # "colorScale"
rule.color_scale.cfvos            # [Cfvo(type="num", val="0"), Cfvo(type="num", val="0")]
rule.color_scale.colors           # ["FFFF0000", "FF0000FF"]
```

`parse_conditional_rules` returns the list of `ConditionalRule` alone. The
supported rule types are `cell`, `top`, `bottom`, `average`, `duplicate`,
`unique`, `2_color_scale`, `3_color_scale`, `data_bar` and `formula`. Settings
of another type, or with unknown criteria (formulas excepted), are skipped.
Priorities follow the positions in the list, starting at 1. Missing colour
scale values default to `0` for minimum and maximum and `50` for the midpoint.
A `top`/`bottom` rule ranks 10 unless `value` is an integer.

## What the package does not do

The package builds style parts and rules as Python objects. It does not keep a
workbook style sheet: it assigns no style or number format ids and has no
default font. It does not render cell values through number formats, and it
does not read or write XLSX files or their XML.

## Running the tests

```
pip install -e ".[test]"
pytest
```