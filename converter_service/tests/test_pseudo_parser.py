"""
Tests del parser de pseudocódigo
================================

Cada forma de línea, el manejo de ámbitos por indentación y los diagnósticos
que el parser registra en vez de lanzar excepciones.
"""

import pytest

from app.domain.ir_models import Assign, Call, Define, ForEach, If, SetProperty, While
from app.infrastructure.grammar_loader import GrammarLoader
from app.services.pseudo_parser import (
    MSG_ELSE_WITHOUT_IF,
    MSG_INVALID,
    MSG_NO_SCOPE,
    MSG_ORPHAN_BLOCK,
    LINE_RULES,
    ParserConfig,
    indentation_of,
    parse_pseudocode,
    split_arguments,
    unquote,
)


# ============================================================================
# HELPERS
# ============================================================================

def test_unquote_strips_matching_quotes_only():
    assert unquote('"Hi"') == "Hi"
    assert unquote("'Hi'") == "Hi"
    assert unquote("\"Hi'") == "\"Hi'"
    assert unquote("Hi") == "Hi"
    assert unquote('"') == '"'


def test_split_arguments_respects_quotes():
    assert split_arguments('a, "x, y", 3') == ["a", "x, y", "3"]
    assert split_arguments("") == []
    assert split_arguments(None) == []


def test_indentation_counts_whitespace_width():
    assert indentation_of("    Set x to 1") == 4
    assert indentation_of("\tSet x to 1") == 4
    assert indentation_of("Set x to 1") == 0


# ============================================================================
# SINGLE RULES
# ============================================================================

def test_event_with_property_set():
    """`On Button1.Click do` + `Set Label1.Text to "Hi"` debe dar un evento con una acción"""
    parsed = parse_pseudocode('On Button1.Click do\nSet Label1.Text to "Hi"')

    assert parsed.errors == []
    assert len(parsed.events) == 1
    event = parsed.events[0]
    assert (event.component, event.event) == ("Button1", "Click")
    assert event.actions == [SetProperty(component="Label1", property="Text", value="Hi")]
    assert parsed.components == ["Button1", "Label1"]


def test_when_header_without_do():
    parsed = parse_pseudocode("When Clock1.Timer\n  Call Player1.Start")
    assert parsed.errors == []
    assert parsed.events[0].event == "Timer"
    assert parsed.events[0].actions == [Call(component="Player1", method="Start", parameters=[])]


def test_keywords_are_case_insensitive():
    parsed = parse_pseudocode("on Button1.Click DO\n  set Label1.Text to 'x'")
    assert parsed.errors == []
    assert parsed.events[0].actions[0].value == "x"


def test_variable_declaration_top_level():
    parsed = parse_pseudocode('Define message as "Welcome"')
    assert parsed.errors == []
    assert [(v.name, v.value) for v in parsed.variables] == [("message", "Welcome")]
    assert parsed.events == []


def test_variable_declaration_inside_event_is_kept_in_place():
    parsed = parse_pseudocode("On Button1.Click do\n  Define tmp as 3")
    assert parsed.errors == []
    assert parsed.variables[0].name == "tmp"
    assert parsed.events[0].actions == [Define(variable="tmp", value="3")]


def test_procedure_definition_with_parameters():
    parsed = parse_pseudocode("Define ShowMessage(text, color)\n  Set Label2.Text to text")
    assert parsed.errors == []
    proc = parsed.procedures[0]
    assert proc.name == "ShowMessage"
    assert proc.parameters == ["text", "color"]
    assert proc.actions == [SetProperty(component="Label2", property="Text", value="text")]


def test_procedure_definition_without_parameters():
    parsed = parse_pseudocode("Define Reset\n  Set counter to 0")
    assert parsed.procedures[0].parameters == []
    assert parsed.procedures[0].actions == [Assign(variable="counter", value="0")]


def test_variable_assignment_is_not_a_property_set():
    parsed = parse_pseudocode("On Button1.Click do\n  Set counter to counter + 1")
    assert parsed.events[0].actions == [Assign(variable="counter", value="counter + 1")]
    assert parsed.components == ["Button1"]


def test_dotted_subject_is_claimed_by_property_rule():
    parsed = parse_pseudocode("On Button1.Click do\n  Set Screen1.BackgroundColor to Green")
    action = parsed.events[0].actions[0]
    assert isinstance(action, SetProperty)
    assert action.property == "BackgroundColor"


def test_doubly_dotted_subject_is_invalid():
    parsed = parse_pseudocode("On Button1.Click do\n  Set a.b.c to 1")
    assert [(e.line, e.message) for e in parsed.errors] == [(2, MSG_INVALID)]


def test_method_call_with_arguments():
    parsed = parse_pseudocode('On Button1.Click do\n  Call Notifier1.ShowAlert with "Hello, you", 3')
    assert parsed.events[0].actions == [
        Call(component="Notifier1", method="ShowAlert", parameters=["Hello, you", "3"])
    ]
    assert "Notifier1" in parsed.components


def test_procedure_call_uses_name_for_component_and_method():
    parsed = parse_pseudocode("On Button2.Click do\n  Call ShowMessage(message)")
    call = parsed.events[0].actions[0]
    assert call == Call(component="ShowMessage", method="ShowMessage", parameters=["message"])
    assert call.is_procedure_call
    assert parsed.components == ["Button2", "ShowMessage"]


# ============================================================================
# CONTROL FLOW
# ============================================================================

def test_if_else_by_indentation():
    code = "\n".join([
        "On Button1.Click do",
        "    If counter > 5 then",
        '        Set Label3.Text to "High count"',
        "        Call Player1.Start",
        "    Else",
        '        Set Label3.Text to "Low count"',
    ])
    parsed = parse_pseudocode(code)

    assert parsed.errors == []
    actions = parsed.events[0].actions
    assert len(actions) == 1
    cond = actions[0]
    assert isinstance(cond, If)
    assert cond.condition == "counter > 5"
    assert [type(a) for a in cond.actions] == [SetProperty, Call]
    assert cond.else_actions == [SetProperty(component="Label3", property="Text", value="Low count")]


def test_else_if_chain_nests_in_else_actions():
    code = "\n".join([
        "On GestureDetector1.Swipe do",
        '    If direction = "left" then',
        '        Set Label5.Text to "Left"',
        '    Else If direction = "right" then',
        '        Set Label5.Text to "Right"',
        "    Else",
        '        Set Label5.Text to "Other"',
        '    Set Label6.Text to "done"',
    ])
    parsed = parse_pseudocode(code)

    assert parsed.errors == []
    actions = parsed.events[0].actions
    assert len(actions) == 2
    outer = actions[0]
    assert outer.condition == 'direction = "left"'
    assert len(outer.else_actions) == 1
    inner = outer.else_actions[0]
    assert isinstance(inner, If)
    assert inner.condition == 'direction = "right"'
    assert inner.actions[0].value == "Right"
    assert inner.else_actions[0].value == "Other"
    assert actions[1].value == "done"


def test_dedent_closes_block():
    code = "\n".join([
        "On Button1.Click do",
        "    While counter < 3 do",
        "        Set counter to counter + 1",
        "    Set Label1.Text to counter",
    ])
    parsed = parse_pseudocode(code)
    actions = parsed.events[0].actions
    assert isinstance(actions[0], While)
    assert actions[0].condition == "counter < 3"
    assert actions[0].actions == [Assign(variable="counter", value="counter + 1")]
    assert actions[1] == SetProperty(component="Label1", property="Text", value="counter")


def test_for_each_nested_in_if():
    code = "\n".join([
        "On Button2.Click do",
        "  If ready then",
        "    For each name in nameList do",
        "      Set Label4.Text to name",
    ])
    parsed = parse_pseudocode(code)
    loop = parsed.events[0].actions[0].actions[0]
    assert isinstance(loop, ForEach)
    assert (loop.item, loop.list) == ("name", "nameList")
    assert loop.actions[0].component == "Label4"


def test_end_lines_are_noise():
    code = "\n".join([
        "On Button1.Click do",
        "  If x then",
        "    Set y to 1",
        "  End If",
        "End",
    ])
    parsed = parse_pseudocode(code)
    assert parsed.errors == []
    assert len(parsed.events[0].actions) == 1


def test_else_after_loop_is_a_diagnostic():
    code = "\n".join([
        "On Button1.Click do",
        "  While x do",
        "    Set y to 1",
        "  Else",
    ])
    parsed = parse_pseudocode(code)
    assert [(e.line, e.message) for e in parsed.errors] == [(4, MSG_ELSE_WITHOUT_IF)]


def test_second_else_is_a_diagnostic():
    code = "On A1.B do\n  If x then\n    Set y to 1\n  Else\n    Set y to 2\n  Else"
    parsed = parse_pseudocode(code)
    assert [e.line for e in parsed.errors] == [6]


# ============================================================================
# DIAGNOSTICS AND GLOBAL PROPERTIES
# ============================================================================

def test_blank_and_comment_lines_only():
    parsed = parse_pseudocode("\n// a comment\n   \n  // another\n")
    assert parsed.events == []
    assert parsed.variables == []
    assert parsed.procedures == []
    assert parsed.components == []
    assert parsed.errors == []


def test_custom_comment_prefix():
    parsed = parse_pseudocode("# note\nDefine x as 1", ParserConfig(comment_prefix="#"))
    assert parsed.errors == []


@pytest.mark.parametrize("line", ["Frobnicate the widget", "Set x", "Call", "For each x do"])
def test_unrecognized_line_reports_its_line_number(line):
    parsed = parse_pseudocode(f"On Button1.Click do\n\n{line}")
    assert len(parsed.errors) == 1
    assert parsed.errors[0].line == 3
    assert parsed.errors[0].message == MSG_INVALID


def test_action_outside_scope_is_a_diagnostic():
    parsed = parse_pseudocode('Set Label1.Text to "Hi"')
    assert [(e.line, e.message) for e in parsed.errors] == [(1, MSG_NO_SCOPE)]
    assert parsed.components == []


def test_control_structure_outside_scope_is_a_diagnostic():
    parsed = parse_pseudocode("If x then\n  Set y to 1")
    assert [(e.line, e.message) for e in parsed.errors] == [(1, MSG_ORPHAN_BLOCK)]
    assert parsed.events == []


def test_components_sorted_and_deduplicated():
    code = "\n".join([
        "On Screen1.Initialize do",
        "  Set Label2.Text to 1",
        "On Button1.Click do",
        "  Set Label2.Text to 2",
        "  Call Button1.Hide",
    ])
    parsed = parse_pseudocode(code)
    assert parsed.components == ["Button1", "Label2", "Screen1"]


def test_events_keep_source_order():
    parsed = parse_pseudocode("On B1.Click do\nOn A1.Click do\nDefine P\nDefine Q")
    assert [e.component for e in parsed.events] == ["B1", "A1"]
    assert [p.name for p in parsed.procedures] == ["P", "Q"]


def test_parse_is_repeatable():
    code = "Define counter as 0\nOn Button1.Click do\n  Set counter to counter + 1"
    assert parse_pseudocode(code) == parse_pseudocode(code)


def test_windows_line_endings():
    parsed = parse_pseudocode("On Button1.Click do\r\n  Set Label1.Text to 1\r\n")
    assert parsed.errors == []
    assert parsed.events[0].actions[0].value == "1"


# ============================================================================
# GRAMÁTICA
# ============================================================================

def test_line_rules_cover_every_grammar_rule():
    """Cada regla de línea de la gramática debe tener su manejador"""
    grammar = GrammarLoader.load()
    for rule in LINE_RULES:
        assert f"\n{rule}:" in grammar


def test_else_if_without_then_is_noise():
    code = "\n".join([
        "On A1.B do",
        "  If x then",
        "    Set y to 1",
        "  Else If z",
        "    Set y to 2",
    ])
    parsed = parse_pseudocode(code)
    assert parsed.errors == []
    cond, after = parsed.events[0].actions
    assert isinstance(cond, If)
    assert cond.else_actions == []
    assert after == Assign(variable="y", value="2")


def test_condition_keeps_inner_then_word():
    parsed = parse_pseudocode("On A1.B do\n  If thenCount > 1 then\n    Set y to 1")
    assert parsed.events[0].actions[0].condition == "thenCount > 1"


def test_property_value_may_contain_keywords():
    parsed = parse_pseudocode('On A1.B do\n  Set Label1.Text to "do it then set to"')
    assert parsed.events[0].actions[0].value == "do it then set to"


def test_procedure_call_without_arguments():
    parsed = parse_pseudocode("On A1.B do\n  Call Reset()")
    assert parsed.events[0].actions == [Call(component="Reset", method="Reset", parameters=[])]


@pytest.mark.parametrize("line", ["Define", "Define F(a,", "Call F(a", "On Button1 do", "While x"])
def test_incomplete_lines_are_invalid(line):
    parsed = parse_pseudocode(f"On A1.B do\n  {line}")
    assert [(e.line, e.message) for e in parsed.errors] == [(2, MSG_INVALID)]
