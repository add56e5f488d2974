import pytest

from xlstyles.conditional import (
    Cfvo,
    ColorScale,
    ConditionalRule,
    DataBar,
    conditional_formatting,
    parse_conditional_rules,
)


@pytest.mark.parametrize(
    "label, format_set, rules",
    [
        (
            "3_color_scale",
            """[{
                "type":"3_color_scale", "criteria":"=",
                "min_type":"num", "mid_type":"num", "max_type":"num",
                "min_value": "-10", "mid_value": "0", "max_value": "10",
                "min_color":"ff0000", "mid_color":"00ff00", "max_color":"0000ff"
            }]""",
            [
                ConditionalRule(
                    priority=1,
                    type="colorScale",
                    color_scale=ColorScale(
                        cfvos=[Cfvo("num", "-10"), Cfvo("num", "0"), Cfvo("num", "10")],
                        colors=["FFFF0000", "FF00FF00", "FF0000FF"],
                    ),
                )
            ],
        ),
        (
            "3_color_scale default min/mid/max",
            """[{
                "type":"3_color_scale", "criteria":"=",
                "min_type":"num", "mid_type":"num", "max_type":"num",
                "min_color":"ff0000", "mid_color":"00ff00", "max_color":"0000ff"
            }]""",
            [
                ConditionalRule(
                    priority=1,
                    type="colorScale",
                    color_scale=ColorScale(
                        cfvos=[Cfvo("num", "0"), Cfvo("num", "50"), Cfvo("num", "0")],
                        colors=["FFFF0000", "FF00FF00", "FF0000FF"],
                    ),
                )
            ],
        ),
        (
            "2_color_scale default min/max",
            """[{
                "type":"2_color_scale", "criteria":"=",
                "min_type":"num", "max_type":"num",
                "min_color":"ff0000", "max_color":"0000ff"
            }]""",
            [
                ConditionalRule(
                    priority=1,
                    type="colorScale",
                    color_scale=ColorScale(
                        cfvos=[Cfvo("num", "0"), Cfvo("num", "0")],
                        colors=["FFFF0000", "FF0000FF"],
                    ),
                )
            ],
        ),
    ],
)
def test_color_scale_cases(label, format_set, rules):
    result = conditional_formatting("A1:A1", format_set)
    assert result.sqref == "A1:A1", label
    assert len(result.rules) == 1, label
    assert result.rules == rules, label


def test_cell_greater_than():
    rules = parse_conditional_rules('[{"type":"cell","criteria":">","format":3,"value":"6"}]')
    assert rules == [
        ConditionalRule(priority=1, type="cellIs", operator="greaterThan", dxf_id=3, formulas=["6"])
    ]


def test_cell_between_uses_minimum_and_maximum():
    rules = parse_conditional_rules(
        '[{"type":"cell","criteria":"between","format":1,"minimum":"6","maximum":"8"}]'
    )
    assert rules[0].operator == "between"
    assert rules[0].formulas == ["6", "8"]


def test_cell_greater_or_equal_has_no_formula():
    rules = parse_conditional_rules('[{"type":"cell","criteria":">=","format":0,"value":"1"}]')
    assert rules[0].operator == "greaterThanOrEqual"
    assert rules[0].formulas == []


def test_top_rank_and_percent():
    rules = parse_conditional_rules(
        '[{"type":"top","criteria":"=","format":2,"value":"6","percent":true}]'
    )
    assert rules[0].type == "top10"
    assert rules[0].rank == 6
    assert rules[0].percent is True
    assert rules[0].dxf_id == 2


def test_top_default_rank():
    rules = parse_conditional_rules('[{"type":"bottom","criteria":"=","value":"abc"}]')
    assert rules[0].rank == 10


def test_average_and_duplicate():
    rules = parse_conditional_rules(
        '[{"type":"average","criteria":"=","format":1,"above_average":false},'
        '{"type":"duplicate","criteria":"=","format":4}]'
    )
    assert rules[0].type == "aboveAverage"
    assert rules[0].above_average is False
    assert rules[1] == ConditionalRule(priority=2, type="duplicateValues", dxf_id=4)


def test_data_bar():
    rules = parse_conditional_rules(
        '[{"type":"data_bar","criteria":"=","min_type":"min","max_type":"max","bar_color":"#638EC6"}]'
    )
    assert rules == [
        ConditionalRule(
            priority=1,
            type="dataBar",
            data_bar=DataBar(cfvos=[Cfvo("min"), Cfvo("max")], colors=["FF638EC6"]),
        )
    ]


def test_formula_without_known_criteria():
    rules = parse_conditional_rules('[{"type":"formula","criteria":"$A1>5","format":7}]')
    assert rules == [
        ConditionalRule(priority=1, type="expression", formulas=["$A1>5"], dxf_id=7)
    ]


def test_skipped_entries_keep_priority_positions():
    rules = parse_conditional_rules(
        '[{"type":"bogus","criteria":"="},{"type":"cell","criteria":"??"},'
        '{"type":"text","criteria":"containing"},{"type":"unique","criteria":"="}]'
    )
    assert [(r.priority, r.type) for r in rules] == [(4, "uniqueValues")]


def test_null_gives_empty_rules():
    assert conditional_formatting("B1:B2", "null").rules == []


def test_invalid_json_raises():
    with pytest.raises(ValueError):
        parse_conditional_rules("[{")


def test_wrong_field_type_raises():
    with pytest.raises(ValueError):
        parse_conditional_rules('[{"type":"cell","criteria":">","format":"1"}]')


def test_non_list_raises():
    with pytest.raises(ValueError):
        parse_conditional_rules('{"type":"cell"}')