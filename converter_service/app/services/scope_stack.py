"""
scope_stack.py — Pila explícita de ámbitos abiertos
===================================================

Responsabilidad: saber qué manejador de evento, procedimiento, condicional o
bucle recibe las acciones que encuentra el parser, y cerrar ámbitos cuando
baja la indentación.

Dos familias de marcos:
    - marcos raíz (manejador de evento, procedimiento): solo los cierra la
      siguiente línea de cabecera o el final de la entrada.
    - marcos de bloque (If, While, For each): recuerdan la indentación de la
      línea que los abrió y se cierran cuando una línea posterior no está más
      indentada que ella.

Cerrar un marco construye su nodo de la IR y lo añade a la lista de acciones
del marco inferior, así que el resultado es siempre un árbol.
"""

from dataclasses import dataclass, field
from typing import List, Optional

from pydantic import BaseModel

from ..domain.ir_models import Event, ForEach, If, Procedure, While


@dataclass
class Frame:
    """Marco base: una indentación y la lista que recibe las acciones."""

    indent: int
    actions: List[BaseModel] = field(default_factory=list)

    is_block = True

    @property
    def target(self) -> List[BaseModel]:
        return self.actions

    def build(self) -> BaseModel:
        raise NotImplementedError


@dataclass
class EventFrame(Frame):
    component: str = ""
    event: str = ""

    is_block = False

    def build(self) -> Event:
        return Event(component=self.component, event=self.event, actions=self.actions)


@dataclass
class ProcedureFrame(Frame):
    name: str = ""
    parameters: List[str] = field(default_factory=list)

    is_block = False

    def build(self) -> Procedure:
        return Procedure(name=self.name, parameters=self.parameters, actions=self.actions)


@dataclass
class IfFrame(Frame):
    """
    Marco condicional.

    `in_else` cambia el destino a `else_actions`. Un marco abierto por
    `Else If` es `chained`: vive en la rama else del marco anterior, con
    la misma indentación.
    """

    condition: str = ""
    else_actions: List[BaseModel] = field(default_factory=list)
    in_else: bool = False
    chained: bool = False

    @property
    def target(self) -> List[BaseModel]:
        return self.else_actions if self.in_else else self.actions

    def build(self) -> If:
        return If(condition=self.condition, actions=self.actions, else_actions=self.else_actions)


@dataclass
class WhileFrame(Frame):
    condition: str = ""

    def build(self) -> While:
        return While(condition=self.condition, actions=self.actions)


@dataclass
class ForEachFrame(Frame):
    item: str = ""
    list_name: str = ""

    def build(self) -> ForEach:
        return ForEach(item=self.item, list=self.list_name, actions=self.actions)


class ScopeStack:
    """Pila de marcos abiertos; en el fondo, el marco raíz (si lo hay)."""

    def __init__(self):
        self._frames: List[Frame] = []

    def __len__(self) -> int:
        return len(self._frames)

    @property
    def top(self) -> Optional[Frame]:
        return self._frames[-1] if self._frames else None

    @property
    def has_root(self) -> bool:
        return bool(self._frames) and not self._frames[0].is_block

    def push(self, frame: Frame) -> None:
        self._frames.append(frame)

    def add(self, action: BaseModel) -> bool:
        """Añade una acción al ámbito abierto más interno. False si no hay ninguno."""
        if not self._frames:
            return False
        self._frames[-1].target.append(action)
        return True

    def close_blocks(self, indent: int) -> List[BaseModel]:
        """Cierra los marcos de bloque abiertos con indentación >= `indent`."""
        closed = []
        while self.top is not None and self.top.is_block and self.top.indent >= indent:
            closed.extend(self._pop())
        return closed

    def close_blocks_above(self, indent: int) -> List[BaseModel]:
        """Cierra los marcos de bloque abiertos con indentación > `indent`."""
        closed = []
        while self.top is not None and self.top.is_block and self.top.indent > indent:
            closed.extend(self._pop())
        return closed

    def close_all(self) -> List[BaseModel]:
        """Cierra todos los marcos; devuelve los nodos que no tenían marco padre."""
        closed = []
        while self._frames:
            closed.extend(self._pop())
        return closed

    def open_if_for_else(self, indent: int) -> Optional[IfFrame]:
        """
        Busca el condicional al que pertenece una línea `Else` / `Else If` en `indent`.

        Primero cierra los bloques más indentados que la línea. Devuelve None si
        el marco más interno que queda no es un `If` aún en su rama then.
        """
        self.close_blocks_above(indent)
        top = self.top
        if isinstance(top, IfFrame) and not top.in_else:
            return top
        return None

    def _pop(self) -> List[BaseModel]:
        frame = self._frames.pop()
        node = frame.build()
        if self._frames:
            self._frames[-1].target.append(node)
            return []
        return [node]
