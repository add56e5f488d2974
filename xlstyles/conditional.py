"""Conditional formatting rules built from JSON settings."""

from __future__ import annotations

import json
import re
from dataclasses import dataclass, field
from typing import Any, Callable, Mapping

from .colors import get_palette_color

__all__ = [
    "Cfvo",
    "ColorScale",
    "DataBar",
    "ConditionalRule",
    "ConditionalFormatting",
    "parse_conditional_rules",
    "conditional_formatting",
]

# Setting "type" mapped to the rule type stored in the worksheet.
VALID_TYPES: Mapping[str, str] = {
    "cell": "cellIs",
    "date": "date",
    "time": "time",
    "average": "aboveAverage",
    "duplicate": "duplicateValues",
    "unique": "uniqueValues",
    "top": "top10",
    "bottom": "top10",
    "text": "text",
    "time_period": "timePeriod",
    "blanks": "containsBlanks",
    "no_blanks": "notContainsBlanks",
    "errors": "containsErrors",
    "no_errors": "notContainsErrors",
    "2_color_scale": "2_color_scale",
    "3_color_scale": "3_color_scale",
    "data_bar": "dataBar",
    "formula": "expression",
}

# Setting "criteria" mapped to the rule operator.
CRITERIA_TYPES: Mapping[str, str] = {
    "between": "between",
    "not between": "notBetween",
    "equal to": "equal",
    "=": "equal",
    "==": "equal",
    "not equal to": "notEqual",
    "!=": "notEqual",
    "<>": "notEqual",
    "greater than": "greaterThan",
    ">": "greaterThan",
    "less than": "lessThan",
    "<": "lessThan",
    "greater than or equal to": "greaterThanOrEqual",
    ">=": "greaterThanOrEqual",
    "less than or equal to": "lessThanOrEqual",
    "<=": "lessThanOrEqual",
    "containing": "containsText",
    "not containing": "notContains",
    "begins with": "beginsWith",
    "ends with": "endsWith",
    "yesterday": "yesterday",
    "today": "today",
    "last 7 days": "last7Days",
    "last week": "lastWeek",
    "this week": "thisWeek",
    "continue week": "continueWeek",
    "last month": "lastMonth",
    "this month": "thisMonth",
    "continue month": "continueMonth",
}

DEFAULT_RANK = 10
_RANGE_OPERATORS = frozenset({"between", "notBetween"})
_VALUE_OPERATORS = frozenset({"equal", "notEqual", "greaterThan", "lessThan"})
_INTEGER = re.compile(r"[+-]?[0-9]+")


@dataclass
class Cfvo:
    """A conditional format value object: a threshold type and its value."""

    type: str = ""
    val: str = ""


@dataclass
class ColorScale:
    """Thresholds of a colour scale and the ARGB colour at each."""

    cfvos: list[Cfvo] = field(default_factory=list)
    colors: list[str] = field(default_factory=list)


@dataclass
class DataBar:
    """Thresholds of a data bar and its ARGB colour."""

    cfvos: list[Cfvo] = field(default_factory=list)
    colors: list[str] = field(default_factory=list)


@dataclass
class ConditionalRule:
    """One conditional formatting rule of a worksheet."""

    priority: int
    type: str
    operator: str = ""
    dxf_id: int | None = None
    formulas: list[str] = field(default_factory=list)
    rank: int = 0
    percent: bool = False
    above_average: bool | None = None
    color_scale: ColorScale | None = None
    data_bar: DataBar | None = None


@dataclass
class ConditionalFormatting:
    """Conditional formatting rules applied to a cell area."""

    sqref: str
    rules: list[ConditionalRule] = field(default_factory=list)


@dataclass
class _RuleSettings:
    type: str = ""
    criteria: str = ""
    format: int = 0
    value: str = ""
    minimum: str = ""
    maximum: str = ""
    above_average: bool = False
    percent: bool = False
    min_type: str = ""
    mid_type: str = ""
    max_type: str = ""
    min_value: str = ""
    mid_value: str = ""
    max_value: str = ""
    min_color: str = ""
    mid_color: str = ""
    max_color: str = ""
    bar_color: str = ""


def _lookup(data: Mapping[str, Any], key: str) -> Any:
    if key in data:
        return data[key]
    lowered = key.lower()
    for name, value in data.items():
        if name.lower() == lowered:
            return value
    return None


def _as_str(value: Any, where: str) -> str:
    if not isinstance(value, str):
        raise ValueError(f"{where}: expected a string, got {value!r}")
    return value


def _as_bool(value: Any, where: str) -> bool:
    if not isinstance(value, bool):
        raise ValueError(f"{where}: expected a boolean, got {value!r}")
    return value


def _as_int(value: Any, where: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"{where}: expected an integer, got {value!r}")
    return value


_FIELDS: dict[str, Callable[[Any, str], Any]] = {
    "type": _as_str,
    "criteria": _as_str,
    "format": _as_int,
    "value": _as_str,
    "minimum": _as_str,
    "maximum": _as_str,
    "above_average": _as_bool,
    "percent": _as_bool,
    "min_type": _as_str,
    "mid_type": _as_str,
    "max_type": _as_str,
    "min_value": _as_str,
    "mid_value": _as_str,
    "max_value": _as_str,
    "min_color": _as_str,
    "mid_color": _as_str,
    "max_color": _as_str,
    "bar_color": _as_str,
}


def _parse_settings(item: Any, where: str) -> _RuleSettings:
    if not isinstance(item, dict):
        raise ValueError(f"{where}: expected an object, got {item!r}")
    values = {}
    for key, coerce in _FIELDS.items():
        raw = _lookup(item, key)
        if raw is not None:
            values[key] = coerce(raw, f"{where}.{key}")
    return _RuleSettings(**values)


def _cell_is(priority: int, operator: str, s: _RuleSettings) -> ConditionalRule:
    rule = ConditionalRule(
        priority=priority, type=VALID_TYPES[s.type], operator=operator, dxf_id=s.format
    )
    if operator in _RANGE_OPERATORS:
        rule.formulas.extend((s.minimum, s.maximum))
    if operator in _VALUE_OPERATORS:
        rule.formulas.append(s.value)
    return rule


def _top10(priority: int, operator: str, s: _RuleSettings) -> ConditionalRule:
    rank = int(s.value) if _INTEGER.fullmatch(s.value) else DEFAULT_RANK
    return ConditionalRule(
        priority=priority,
        type=VALID_TYPES[s.type],
        rank=rank,
        dxf_id=s.format,
        percent=s.percent,
    )


def _above_average(priority: int, operator: str, s: _RuleSettings) -> ConditionalRule:
    return ConditionalRule(
        priority=priority,
        type=VALID_TYPES[s.type],
        above_average=s.above_average,
        dxf_id=s.format,
    )


def _duplicate_unique(priority: int, operator: str, s: _RuleSettings) -> ConditionalRule:
    return ConditionalRule(priority=priority, type=VALID_TYPES[s.type], dxf_id=s.format)


def _color_scale(priority: int, operator: str, s: _RuleSettings) -> ConditionalRule:
    scale = ColorScale(
        cfvos=[Cfvo(s.min_type, s.min_value or "0")],
        colors=[get_palette_color(s.min_color)],
    )
    if VALID_TYPES[s.type] == "3_color_scale":
        scale.cfvos.append(Cfvo(s.mid_type, s.mid_value or "50"))
        scale.colors.append(get_palette_color(s.mid_color))
    scale.cfvos.append(Cfvo(s.max_type, s.max_value or "0"))
    scale.colors.append(get_palette_color(s.max_color))
    return ConditionalRule(priority=priority, type="colorScale", color_scale=scale)


def _data_bar(priority: int, operator: str, s: _RuleSettings) -> ConditionalRule:
    return ConditionalRule(
        priority=priority,
        type=VALID_TYPES[s.type],
        data_bar=DataBar(
            cfvos=[Cfvo(s.min_type), Cfvo(s.max_type)],
            colors=[get_palette_color(s.bar_color)],
        ),
    )


def _expression(priority: int, operator: str, s: _RuleSettings) -> ConditionalRule:
    return ConditionalRule(
        priority=priority,
        type=VALID_TYPES[s.type],
        formulas=[s.criteria],
        dxf_id=s.format,
    )


_BUILDERS: dict[str, Callable[[int, str, _RuleSettings], ConditionalRule]] = {
    "cellIs": _cell_is,
    "top10": _top10,
    "aboveAverage": _above_average,
    "duplicateValues": _duplicate_unique,
    "uniqueValues": _duplicate_unique,
    "2_color_scale": _color_scale,
    "3_color_scale": _color_scale,
    "dataBar": _data_bar,
    "expression": _expression,
}


def parse_conditional_rules(format_set: str) -> list[ConditionalRule]:
    """Build rules from a JSON list of settings.

    Settings of an unknown or unsupported type, or with unknown criteria
    (except formulas), are skipped; priorities follow list positions.
    Raises ValueError for malformed JSON or settings of the wrong type.
    """
    try:
        data = json.loads(format_set)
    except json.JSONDecodeError as exc:
        raise ValueError(f"invalid conditional format settings: {exc}") from exc
    if data is None:
        return []
    if not isinstance(data, list):
        raise ValueError(f"conditional format settings must be an array, got {data!r}")
    rules = []
    for position, item in enumerate(data):
        settings = _parse_settings(item, f"rules[{position}]")
        rule_type = VALID_TYPES.get(settings.type)
        if rule_type is None:
            continue
        operator = CRITERIA_TYPES.get(settings.criteria)
        if operator is None and rule_type != "expression":
            continue
        builder = _BUILDERS.get(rule_type)
        if builder is not None:
            rules.append(builder(position + 1, operator or "", settings))
    return rules


def conditional_formatting(area: str, format_set: str) -> ConditionalFormatting:
    """Build the conditional formatting of a cell area from JSON settings."""
    return ConditionalFormatting(sqref=area, rules=parse_conditional_rules(format_set))