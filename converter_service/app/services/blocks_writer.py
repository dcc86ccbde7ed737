"""
blocks_writer.py — Archivo de bloques de la pantalla (.bky)
===========================================================

Responsabilidad: bajar la IR al XML de Blockly que carga el editor de
App Inventor.

Disposición del documento:
    1. un `global_declaration` por variable
    2. un `procedures_defnoreturn` por procedimiento
    3. un `component_event` por manejador de evento

Los bloques de nivel superior comparten la x y avanzan en y. Las listas de
sentencias se encadenan como en Blockly: cada bloque salvo el último lleva un
elemento `<next>` con su sucesor.
"""

import logging
import xml.etree.ElementTree as ET
from typing import Dict, List, Optional, Sequence

from ..domain.ir_models import (
    Assign, Call, Define, ForEach, If, ParsedCode, SetProperty, While,
)
from ..domain.literals import classify_literal
from .component_catalog import ComponentCatalog

logger = logging.getLogger(__name__)

BLOCKLY_NS = "https://developers.google.com/blockly/xml"

VARIABLE_STEP = 100
PROCEDURE_STEP = 150
EVENT_STEP = 150


# ============================================================================
# UTILIDADES XML
# ============================================================================

def _title(parent: ET.Element, name: str, text: str) -> ET.Element:
    el = ET.SubElement(parent, "title", name=name)
    el.text = text
    return el


def _mutation(parent: ET.Element, **attrs: str) -> ET.Element:
    return ET.SubElement(parent, "mutation", attrs)


def chain(blocks: Sequence[ET.Element]) -> Optional[ET.Element]:
    """Enlaza los bloques con elementos `<next>` y devuelve el primero."""
    for current, following in zip(blocks, blocks[1:]):
        ET.SubElement(current, "next").append(following)
    return blocks[0] if blocks else None


def _missing_fields(action) -> List[str]:
    """Campos de texto obligatorios vacíos (IR construida a mano o con model_construct)."""
    required = {
        SetProperty: ("component", "property"),
        Assign: ("variable",),
        Call: ("component", "method"),
        If: ("condition",),
        While: ("condition",),
        ForEach: ("item", "list"),
    }.get(type(action), ())
    return [name for name in required if not getattr(action, name, None)]


class BlocksWriter:
    """Construye el documento de bloques de una pantalla."""

    def __init__(self, catalog: ComponentCatalog, x: int = 20, y_start: int = 20):
        self.catalog = catalog
        self.x = x
        self.y_start = y_start
        self._globals: set = set()
        self._procedures: Dict[str, List[str]] = {}

    # ------------------------------------------------------------------
    # Documento
    # ------------------------------------------------------------------

    def build(self, parsed: ParsedCode) -> ET.Element:
        self._globals = {v.name for v in parsed.variables}
        self._procedures = {p.name: p.parameters for p in parsed.procedures}

        root = ET.Element("xml", xmlns=BLOCKLY_NS)
        y = self.y_start

        for variable in parsed.variables:
            block = self._top_block(root, "global_declaration", y)
            _title(block, "NAME", variable.name)
            self._value(block, "VALUE", variable.value)
            y += VARIABLE_STEP

        for procedure in parsed.procedures:
            block = self._top_block(root, "procedures_defnoreturn", y)
            mutation = _mutation(block)
            for param in procedure.parameters:
                ET.SubElement(mutation, "arg", name=param)
            _title(block, "NAME", procedure.name)
            self._statement(block, "STACK", procedure.actions)
            y += PROCEDURE_STEP

        for event in parsed.events:
            block = self._top_block(root, "component_event", y)
            _mutation(
                block,
                component_type=self.catalog.kind_of(event.component),
                instance_name=event.component,
                event_name=event.event,
                is_generic="false",
            )
            _title(block, "COMPONENT_SELECTOR", event.component)
            self._statement(block, "DO", event.actions)
            y += EVENT_STEP

        return root

    def render(self, parsed: ParsedCode) -> str:
        root = self.build(parsed)
        ET.indent(root, space="  ")
        return ET.tostring(root, encoding="unicode")

    def _top_block(self, root: ET.Element, block_type: str, y: int) -> ET.Element:
        return ET.SubElement(root, "block", type=block_type, x=str(self.x), y=str(y))

    # ------------------------------------------------------------------
    # Valores y sentencias
    # ------------------------------------------------------------------

    def _variable_ref(self, name: str) -> str:
        return f"global {name}" if name in self._globals else name

    def _value(self, parent: ET.Element, name: str, raw: str) -> ET.Element:
        value = ET.SubElement(parent, "value", name=name)
        literal = classify_literal(raw, self.catalog.tables.colors)
        block = ET.SubElement(value, "block", type=literal.block_type)
        _title(block, literal.title, literal.text)
        return value

    def _statement(self, parent: ET.Element, name: str, actions) -> None:
        head = chain(self.lower_all(actions))
        if head is not None:
            ET.SubElement(parent, "statement", name=name).append(head)

    def lower_all(self, actions) -> List[ET.Element]:
        lowered = []
        for action in actions:
            block = self.lower(action)
            if block is not None:
                lowered.append(block)
        return lowered

    # ------------------------------------------------------------------
    # Acciones
    # ------------------------------------------------------------------

    def lower(self, action) -> Optional[ET.Element]:
        """Una acción -> un bloque (None si la acción se omite)."""
        if isinstance(action, Define):
            # Se emite una sola vez como declaración global.
            return None

        missing = _missing_fields(action)
        if missing:
            logger.warning("Omitiendo acción incompleta %r (falta %s)", action, ", ".join(missing))
            return None

        if isinstance(action, SetProperty):
            return self._set_property(action)
        if isinstance(action, Assign):
            return self._assign(action)
        if isinstance(action, Call):
            if action.is_procedure_call:
                return self._call_procedure(action)
            return self._call_method(action)
        if isinstance(action, If):
            return self._if(action)
        if isinstance(action, While):
            return self._while(action)
        if isinstance(action, ForEach):
            return self._for_each(action)

        logger.warning("Omitiendo acción desconocida %r", action)
        return None

    def _set_property(self, action: SetProperty) -> ET.Element:
        kind = self.catalog.kind_of(action.component)
        block = ET.Element("block", type="component_set_get")
        _mutation(
            block,
            component_type=kind,
            set_or_get="set",
            property_name=action.property,
            is_generic="true" if self.catalog.is_extension(kind) else "false",
            instance_name=action.component,
        )
        _title(block, "COMPONENT_SELECTOR", action.component)
        self._value(block, "VALUE", action.value)
        return block

    def _assign(self, action: Assign) -> ET.Element:
        block = ET.Element("block", type="lexical_variable_set")
        _title(block, "VAR", self._variable_ref(action.variable))
        self._value(block, "VALUE", action.value)
        return block

    def _call_method(self, action: Call) -> ET.Element:
        block = ET.Element("block", type="component_method")
        _mutation(
            block,
            component_type=self.catalog.kind_of(action.component),
            method_name=action.method,
            is_generic="false",
            instance_name=action.component,
        )
        _title(block, "COMPONENT_SELECTOR", action.component)
        for i, arg in enumerate(action.parameters):
            self._value(block, f"ARG{i}", arg)
        return block

    def _call_procedure(self, action: Call) -> ET.Element:
        formals = self._procedures.get(action.method, [])
        block = ET.Element("block", type="procedures_callnoreturn")
        mutation = _mutation(block, name=action.method)
        for i in range(len(action.parameters)):
            ET.SubElement(mutation, "arg", name=formals[i] if i < len(formals) else f"arg{i}")
        _title(block, "PROCNAME", action.method)
        for i, arg in enumerate(action.parameters):
            self._value(block, f"ARG{i}", arg)
        return block

    def _if(self, action: If) -> ET.Element:
        block = ET.Element("block", type="controls_if")
        if action.else_actions:
            _mutation(block, **{"else": "1"})
        self._value(block, "IF0", action.condition)
        self._statement(block, "DO0", action.actions)
        self._statement(block, "ELSE", action.else_actions)
        return block

    def _while(self, action: While) -> ET.Element:
        block = ET.Element("block", type="controls_whileUntil")
        _title(block, "MODE", "WHILE")
        self._value(block, "BOOL", action.condition)
        self._statement(block, "DO", action.actions)
        return block

    def _for_each(self, action: ForEach) -> ET.Element:
        block = ET.Element("block", type="controls_forEach")
        _title(block, "VAR", action.item)
        value = ET.SubElement(block, "value", name="LIST")
        get = ET.SubElement(value, "block", type="lexical_variable_get")
        _title(get, "VAR", self._variable_ref(action.list))
        self._statement(block, "DO", action.actions)
        return block
