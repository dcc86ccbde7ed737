"""
Tests de la pila de ámbitos
===========================

El cierre de marcos se ejercita sin reconocer ninguna línea.
"""

from app.domain.ir_models import Assign, Event, If, Procedure, While
from app.services.scope_stack import (
    EventFrame,
    IfFrame,
    ProcedureFrame,
    ScopeStack,
    WhileFrame,
)


def test_add_without_frames_is_rejected():
    stack = ScopeStack()
    assert stack.add(Assign(variable="x", value="1")) is False
    assert len(stack) == 0


def test_close_blocks_keeps_root_frame():
    stack = ScopeStack()
    stack.push(EventFrame(indent=0, component="Button1", event="Click"))
    stack.push(WhileFrame(indent=4, condition="x"))
    stack.add(Assign(variable="x", value="1"))

    assert stack.close_blocks(0) == []
    assert len(stack) == 1
    assert isinstance(stack.top, EventFrame)

    (event,) = stack.close_all()
    assert isinstance(event, Event)
    assert event.actions == [While(condition="x", actions=[Assign(variable="x", value="1")])]


def test_close_blocks_only_pops_frames_at_or_above_indent():
    stack = ScopeStack()
    stack.push(ProcedureFrame(indent=0, name="P"))
    stack.push(IfFrame(indent=2, condition="a"))
    stack.push(WhileFrame(indent=4, condition="b"))

    stack.close_blocks(4)
    assert isinstance(stack.top, IfFrame)
    stack.close_blocks(3)
    assert isinstance(stack.top, IfFrame)
    stack.close_blocks(2)
    assert isinstance(stack.top, ProcedureFrame)

    (proc,) = stack.close_all()
    assert isinstance(proc, Procedure)
    assert proc.actions == [If(condition="a", actions=[While(condition="b")])]


def test_else_switches_target_list():
    stack = ScopeStack()
    stack.push(EventFrame(indent=0, component="B", event="Click"))
    stack.push(IfFrame(indent=2, condition="a"))
    stack.add(Assign(variable="x", value="1"))

    frame = stack.open_if_for_else(2)
    assert frame is not None
    frame.in_else = True
    stack.add(Assign(variable="x", value="2"))

    (event,) = stack.close_all()
    cond = event.actions[0]
    assert cond.actions == [Assign(variable="x", value="1")]
    assert cond.else_actions == [Assign(variable="x", value="2")]


def test_else_closes_deeper_blocks_first():
    stack = ScopeStack()
    stack.push(EventFrame(indent=0, component="B", event="Click"))
    stack.push(IfFrame(indent=2, condition="a"))
    stack.push(WhileFrame(indent=4, condition="b"))

    frame = stack.open_if_for_else(2)
    assert isinstance(frame, IfFrame)
    assert frame.actions == [While(condition="b")]


def test_else_without_if_returns_none():
    stack = ScopeStack()
    stack.push(EventFrame(indent=0, component="B", event="Click"))
    stack.push(WhileFrame(indent=2, condition="b"))
    assert stack.open_if_for_else(2) is None
