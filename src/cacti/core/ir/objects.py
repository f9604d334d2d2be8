"""
Runtime values produced by the Cacti evaluator.

Values are immutable. Booleans and null are shared singletons
(``TRUE``, ``FALSE``, ``NULL``) so that ``==``/``!=`` on them can compare
identity; integers and strings are always fresh instances.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from typing import TYPE_CHECKING, ClassVar

if TYPE_CHECKING:
    from cacti.core.ir.nodes import BlockStatement, Identifier
    from cacti.core.lang.environment import Environment


class ObjectType(StrEnum):
    """Type tags, as shown in runtime error messages."""

    INTEGER = "INTEGER"
    BOOLEAN = "BOOLEAN"
    STRING = "STRING"
    NULL = "NULL"
    RETURN_VALUE = "RETURN_VALUE"
    FUNCTION = "FUNCTION"
    ERROR = "ERROR"


class Obj:
    """Base for all runtime values."""

    type: ClassVar[ObjectType]

    def inspect(self) -> str:
        raise NotImplementedError


@dataclass(frozen=True, eq=False)
class IntegerObj(Obj):
    type: ClassVar[ObjectType] = ObjectType.INTEGER

    value: int

    def inspect(self) -> str:
        return str(self.value)


@dataclass(frozen=True, eq=False)
class BooleanObj(Obj):
    type: ClassVar[ObjectType] = ObjectType.BOOLEAN

    value: bool

    def inspect(self) -> str:
        return "true" if self.value else "false"


@dataclass(frozen=True, eq=False)
class StringObj(Obj):
    type: ClassVar[ObjectType] = ObjectType.STRING

    value: str

    def inspect(self) -> str:
        return self.value


@dataclass(frozen=True, eq=False)
class NullObj(Obj):
    type: ClassVar[ObjectType] = ObjectType.NULL

    def inspect(self) -> str:
        return "null"


@dataclass(frozen=True, eq=False)
class ReturnValue(Obj):
    """Wraps the value of a return statement while it unwinds enclosing blocks."""

    type: ClassVar[ObjectType] = ObjectType.RETURN_VALUE

    value: Obj

    def inspect(self) -> str:
        return self.value.inspect()


@dataclass(frozen=True, eq=False)
class FunctionObj(Obj):
    """A closure: parameters and body plus the environment it was defined in."""

    type: ClassVar[ObjectType] = ObjectType.FUNCTION

    parameters: list[Identifier]
    body: BlockStatement
    env: Environment = field(repr=False)

    def inspect(self) -> str:
        params = ", ".join(str(p) for p in self.parameters)
        return f"fn({params}) {self.body}"


@dataclass(frozen=True, eq=False)
class ErrorObj(Obj):
    """A runtime error. Terminal for the evaluation path that produced it."""

    type: ClassVar[ObjectType] = ObjectType.ERROR

    message: str

    def inspect(self) -> str:
        return f"ERROR: {self.message}"


TRUE = BooleanObj(True)
FALSE = BooleanObj(False)
NULL = NullObj()


def native_bool_to_boolean(value: bool) -> BooleanObj:
    """Map a Python bool onto the shared boolean singletons."""
    return TRUE if value else FALSE


def is_error(obj: Obj | None) -> bool:
    return isinstance(obj, ErrorObj)
