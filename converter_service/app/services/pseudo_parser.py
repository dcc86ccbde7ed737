"""
pseudo_parser.py — Parser del dialecto de pseudocódigo por líneas
=================================================================

Responsabilidad: convertir texto de pseudocódigo en la IR (`ParsedCode`).

Flujo general
-------------

1. El texto se divide en líneas numeradas desde 1. Las líneas vacías y los
   comentarios se saltan.

2. Cada línea restante se reconoce con la gramática Lark
   (`grammar/pseudocode.lark`). El nombre de la regla del parse tree elige la
   entrada de `LINE_RULES`: (manejador, política de cierre).

3. Antes de ejecutar el manejador, la política de cierre decide qué ámbitos
   abiertos cierra la línea:
       * ALL    -> todos los marcos (cabeceras de evento y procedimiento)
       * BLOCKS -> marcos de bloque abiertos con indentación >= la de la línea
       * NONE   -> el manejador gestiona los ámbitos (Else / Else If)

4. Una línea que la gramática no reconoce produce un `Diagnostic`; el parseo
   nunca lanza excepciones.

Punto de entrada público: `parse_pseudocode(code: str) -> ParsedCode`.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict, List, Optional, Set

from lark import Tree

from ..domain.ir_models import (
    Assign, Call, Define, Diagnostic, Event, ParsedCode, Procedure, SetProperty, Variable,
)
from ..infrastructure.lark_parser import get_line_parser
from .scope_stack import EventFrame, ForEachFrame, IfFrame, ProcedureFrame, ScopeStack, WhileFrame

logger = logging.getLogger(__name__)

__all__ = ["PseudoCodeParser", "ParserConfig", "LINE_RULES", "parse_pseudocode"]


MSG_INVALID = "Invalid syntax - see documentation for supported commands"
MSG_NO_SCOPE = "Action found without preceding event handler, procedure, or control structure"
MSG_ORPHAN_BLOCK = "Control structure found outside an event handler or procedure"
MSG_ELSE_WITHOUT_IF = "'Else' without a matching 'If' block"

TAB_WIDTH = 4


# ============================================================================
# 1. UTILIDADES
# ============================================================================

def indentation_of(line: str) -> int:
    """Ancho del espacio inicial, con tabuladores expandidos."""
    expanded = line.expandtabs(TAB_WIDTH)
    return len(expanded) - len(expanded.lstrip())


def unquote(value: str) -> str:
    """Quita un par de comillas (simples o dobles) coincidentes."""
    value = value.strip()
    if len(value) >= 2 and value[0] == value[-1] and value[0] in ("'", '"'):
        return value[1:-1]
    return value


def split_arguments(text: Optional[str]) -> List[str]:
    """
    Divide una lista de argumentos separada por comas, sin cortar dentro de
    comillas.

    Ejemplo:
        'a, "x, y", 3'  ->  ['a', 'x, y', '3']
    """
    if not text:
        return []

    args, buf, quote = [], [], None
    for ch in text:
        if quote:
            buf.append(ch)
            if ch == quote:
                quote = None
        elif ch in ("'", '"'):
            quote = ch
            buf.append(ch)
        elif ch == ",":
            args.append("".join(buf))
            buf = []
        else:
            buf.append(ch)
    args.append("".join(buf))

    return [unquote(a) for a in args if a.strip()]


# ============================================================================
# 2. REGLAS DE LÍNEA
# ============================================================================

class Closing(Enum):
    ALL = "all"
    BLOCKS = "blocks"
    NONE = "none"


@dataclass(frozen=True)
class LineRule:
    handler: Callable
    closing: Closing


@dataclass(frozen=True)
class ParserConfig:
    comment_prefix: str = "//"


class _ParseRun:
    """Estado de una llamada a parse. Los manejadores acumulan en el estado."""

    def __init__(self, config: ParserConfig):
        self.config = config
        self.line_parser = get_line_parser()
        self.scopes = ScopeStack()
        self.events: List[Event] = []
        self.procedures: List[Procedure] = []
        self.variables: List[Variable] = []
        self.components: Set[str] = set()
        self.errors: List[Diagnostic] = []
        self.line_no = 0
        self.indent = 0

    # ------------------------------------------------------------------
    # Contabilidad
    # ------------------------------------------------------------------

    def error(self, message: str) -> None:
        self.errors.append(Diagnostic(line=self.line_no, message=message))

    def emit(self, action, component: Optional[str] = None) -> None:
        if not self.scopes.add(action):
            self.error(MSG_NO_SCOPE)
        elif component is not None:
            self.components.add(component)

    def collect(self, nodes) -> None:
        """Reparte los nodos que salieron de la pila sin marco padre."""
        for node in nodes:
            if isinstance(node, Event):
                self.events.append(node)
            elif isinstance(node, Procedure):
                self.procedures.append(node)
            else:
                # Bloque abierto fuera de todo ámbito raíz; ya diagnosticado.
                logger.debug("Descartando bloque huérfano %s", type(node).__name__)

    def open_block(self, frame) -> None:
        if not self.scopes.has_root:
            self.error(MSG_ORPHAN_BLOCK)
        self.scopes.push(frame)

    # ------------------------------------------------------------------
    # Manejadores (uno por regla de la gramática)
    # ------------------------------------------------------------------

    def on_event(self, component: str, event: str) -> None:
        self.components.add(component)
        self.scopes.push(EventFrame(indent=self.indent, component=component, event=event))

    def on_procedure(self, name: str, *parameters: str) -> None:
        self.scopes.push(ProcedureFrame(indent=self.indent, name=name, parameters=list(parameters)))

    def on_variable(self, name: str, raw_value: str) -> None:
        value = unquote(raw_value)
        self.variables.append(Variable(name=name, value=value))
        # Indentada bajo un ámbito abierto: también se conserva en su sitio.
        top = self.scopes.top
        if top is not None and self.indent > top.indent:
            self.scopes.add(Define(variable=name, value=value))

    def on_set_property(self, component: str, prop: str, value: str) -> None:
        self.emit(SetProperty(component=component, property=prop, value=unquote(value)), component)

    def on_set_variable(self, name: str, value: str) -> None:
        self.emit(Assign(variable=name, value=unquote(value)))

    def on_call_method(self, component: str, method: str, args: Optional[str] = None) -> None:
        self.emit(Call(component=component, method=method, parameters=split_arguments(args)), component)

    def on_call_procedure(self, name: str, args: Optional[str] = None) -> None:
        # Llamada a procedimiento: componente == método.
        self.emit(Call(component=name, method=name, parameters=split_arguments(args)), name)

    def on_else_if(self, condition: str) -> None:
        frame = self.scopes.open_if_for_else(self.indent)
        if frame is None:
            self.error(MSG_ELSE_WITHOUT_IF)
            return
        frame.in_else = True
        self.scopes.push(IfFrame(indent=frame.indent, condition=condition.strip(), chained=True))

    def on_else(self) -> None:
        frame = self.scopes.open_if_for_else(self.indent)
        if frame is None:
            self.error(MSG_ELSE_WITHOUT_IF)
            return
        frame.in_else = True

    def on_if(self, condition: str) -> None:
        self.open_block(IfFrame(indent=self.indent, condition=condition.strip()))

    def on_for_each(self, item: str, list_name: str) -> None:
        self.open_block(ForEachFrame(indent=self.indent, item=item, list_name=list_name))

    def on_while(self, condition: str) -> None:
        self.open_block(WhileFrame(indent=self.indent, condition=condition.strip()))

    def on_noise(self) -> None:
        """`End If`, `End`, ... : el cierre ya lo resuelve la indentación."""

    # ------------------------------------------------------------------
    # Conducción
    # ------------------------------------------------------------------

    def feed(self, line_no: int, raw: str) -> None:
        stripped = raw.strip()
        if not stripped or stripped.startswith(self.config.comment_prefix):
            return

        self.line_no = line_no
        self.indent = indentation_of(raw)

        tree: Optional[Tree] = self.line_parser.parse(stripped)
        rule = LINE_RULES.get(tree.data) if tree is not None else None
        if rule is None:
            self.error(MSG_INVALID)
            return

        if rule.closing is Closing.ALL:
            self.collect(self.scopes.close_all())
        elif rule.closing is Closing.BLOCKS:
            self.collect(self.scopes.close_blocks(self.indent))
        rule.handler(self, *[str(tok) for tok in tree.children])

    def finish(self) -> ParsedCode:
        self.collect(self.scopes.close_all())
        return ParsedCode(
            events=self.events,
            components=sorted(self.components),
            errors=self.errors,
            variables=self.variables,
            procedures=self.procedures,
        )


# Regla de la gramática -> (manejador, política de cierre).
# El orden de prioridad entre formas parecidas vive en la gramática.
LINE_RULES: Dict[str, LineRule] = {
    "event_header": LineRule(_ParseRun.on_event, Closing.ALL),
    "procedure_header": LineRule(_ParseRun.on_procedure, Closing.ALL),
    "variable_decl": LineRule(_ParseRun.on_variable, Closing.BLOCKS),
    "set_property": LineRule(_ParseRun.on_set_property, Closing.BLOCKS),
    "set_variable": LineRule(_ParseRun.on_set_variable, Closing.BLOCKS),
    "call_method": LineRule(_ParseRun.on_call_method, Closing.BLOCKS),
    "call_procedure": LineRule(_ParseRun.on_call_procedure, Closing.BLOCKS),
    "else_if": LineRule(_ParseRun.on_else_if, Closing.NONE),
    "else_line": LineRule(_ParseRun.on_else, Closing.NONE),
    "if_header": LineRule(_ParseRun.on_if, Closing.BLOCKS),
    "for_each": LineRule(_ParseRun.on_for_each, Closing.BLOCKS),
    "while_header": LineRule(_ParseRun.on_while, Closing.BLOCKS),
    "noise": LineRule(_ParseRun.on_noise, Closing.BLOCKS),
}


# ============================================================================
# 3. API PÚBLICA
# ============================================================================

class PseudoCodeParser:
    """
    Parser del dialecto de pseudocódigo.

    Sin estado entre llamadas: cada `parse` construye una IR nueva, así que
    la misma instancia puede compartirse.
    """

    def __init__(self, config: Optional[ParserConfig] = None):
        self.config = config or ParserConfig()

    def parse(self, code: str) -> ParsedCode:
        """
        Parsea pseudocódigo a un `ParsedCode`.

        Nunca lanza: los fallos inesperados en una línea se vuelven
        diagnósticos.
        """
        run = _ParseRun(self.config)
        for line_no, raw in enumerate(code.split("\n"), start=1):
            try:
                run.feed(line_no, raw.rstrip("\r"))
            except Exception as e:
                logger.exception("Fallo inesperado al parsear la línea %d", line_no)
                run.errors.append(Diagnostic(line=line_no, message=f"Parsing error: {e}"))
        return run.finish()


def parse_pseudocode(code: str, config: Optional[ParserConfig] = None) -> ParsedCode:
    """Parsea `code` con la configuración por defecto (o la indicada)."""
    return PseudoCodeParser(config).parse(code)
