"""Representación intermedia (IR) del pseudocódigo parseado.

Define los modelos pydantic que produce el parser y lee el generador:
- Diagnostic: un problema de sintaxis en una línea (desde 1)
- Acciones: SetProperty, Assign, Call, Define, If, While, ForEach
- Contenedores: Event, Procedure, Variable
- ParsedCode: raíz de la IR

La unión de acciones se discrimina por el literal `kind`, así que una IR
serializada con `model_dump()` se valida de vuelta sin ambigüedad.
"""

import logging
from typing import Annotated, Any, List, Literal, Union

from pydantic import BaseModel, BeforeValidator, Field, TypeAdapter, ValidationError

logger = logging.getLogger(__name__)


# DIAGNÓSTICOS

class Diagnostic(BaseModel):
    """
    Problema de sintaxis recuperable.

    Attributes:
        line (int): línea (desde 1) que produjo el diagnóstico.
        message (str): descripción legible.
    """
    line: int = Field(ge=1)
    message: str


# ---------------------------------------------------------------------------
# ACCIONES
# ---------------------------------------------------------------------------

_action_adapter = None


def _drop_malformed(items: Any) -> Any:
    """Descarta las entradas que no validan como acción.

    Solo se filtran listas de dicts (IR que vuelve de JSON); las instancias
    construidas por el parser pasan sin tocar.
    """
    global _action_adapter
    if not isinstance(items, list):
        return items
    if _action_adapter is None:
        _action_adapter = TypeAdapter(Action)

    kept = []
    for item in items:
        if isinstance(item, BaseModel):
            kept.append(item)
            continue
        try:
            kept.append(_action_adapter.validate_python(item))
        except ValidationError as e:
            logger.warning("Omitiendo acción incompleta %r: %s", item, e.error_count())
    return kept


ActionList = Annotated[List["Action"], BeforeValidator(_drop_malformed)]


class SetProperty(BaseModel):
    """`Set Component.Property to Value`."""
    kind: Literal["set_property"] = "set_property"
    component: str
    property: str
    value: str


class Assign(BaseModel):
    """`Set Variable to Value`."""
    kind: Literal["assign"] = "assign"
    variable: str
    value: str


class Call(BaseModel):
    """
    Llamada a método de componente o a procedimiento del usuario.

    Una llamada a procedimiento se codifica con `component == method`.
    """
    kind: Literal["call"] = "call"
    component: str
    method: str
    parameters: List[str] = Field(default_factory=list)

    @property
    def is_procedure_call(self) -> bool:
        return self.component == self.method


class Define(BaseModel):
    """`Define Variable as Value` dentro de un ámbito (la entrada Variable es la que vale)."""
    kind: Literal["define"] = "define"
    variable: str
    value: str


class If(BaseModel):
    """Condicional; las cadenas `Else If` son Ifs anidados en `else_actions`."""
    kind: Literal["if"] = "if"
    condition: str
    actions: ActionList = Field(default_factory=list)
    else_actions: ActionList = Field(default_factory=list)


class While(BaseModel):
    """Bucle `While <cond> do`."""
    kind: Literal["while"] = "while"
    condition: str
    actions: ActionList = Field(default_factory=list)


class ForEach(BaseModel):
    """Bucle `For each <item> in <list> do`."""
    kind: Literal["for_each"] = "for_each"
    item: str
    list: str
    actions: ActionList = Field(default_factory=list)


Action = Annotated[
    Union[SetProperty, Assign, Call, Define, If, While, ForEach],
    Field(discriminator="kind"),
]


# CONTENEDORES

class Variable(BaseModel):
    """Declaración de variable global."""
    name: str
    value: str


class Procedure(BaseModel):
    """
    Procedimiento definido por el usuario.

    Attributes:
        name (str): nombre del procedimiento.
        parameters (List[str]): nombres de los parámetros formales.
        actions (List[Action]): cuerpo.
    """
    name: str
    parameters: List[str] = Field(default_factory=list)
    actions: ActionList = Field(default_factory=list)


class Event(BaseModel):
    """Manejador de evento ligado a `component.event`."""
    component: str
    event: str
    actions: ActionList = Field(default_factory=list)


class ParsedCode(BaseModel):
    """
    Raíz de la IR, una por llamada a parse.

    Attributes:
        events (List[Event]): manejadores en orden de aparición.
        variables (List[Variable]): declaraciones globales en orden de aparición.
        procedures (List[Procedure]): procedimientos en orden de aparición.
        components (List[str]): nombres de componente referenciados, ordenados y sin repetir.
        errors (List[Diagnostic]): diagnósticos de sintaxis por orden de línea.
    """
    events: List[Event]
    components: List[str]
    variables: List[Variable] = Field(default_factory=list)
    procedures: List[Procedure] = Field(default_factory=list)
    errors: List[Diagnostic] = Field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors


# REFERENCIAS ADELANTADAS

for _M in (If, While, ForEach, Procedure, Event, ParsedCode):
    _M.model_rebuild()
