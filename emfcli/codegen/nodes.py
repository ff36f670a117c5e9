"""Syntax tree for generated Python source, walked by a PythonVisitor."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, ClassVar, List, Optional


class PythonVisitor(ABC):
    """Receives every kind of node in the tree."""

    @abstractmethod
    def visit_file(self, file: "File") -> Any: ...

    @abstractmethod
    def visit_function(self, function: "Function") -> Any: ...

    @abstractmethod
    def visit_class(self, cls: "Class") -> Any: ...

    @abstractmethod
    def visit_field(self, field: "Field") -> Any: ...

    @abstractmethod
    def visit_parameter(self, parameter: "Parameter") -> Any: ...

    @abstractmethod
    def visit_import(self, import_stmt: "Import") -> Any: ...

    @abstractmethod
    def visit_import_what(self, import_what: "ImportWhat") -> Any: ...

    @abstractmethod
    def visit_function_call(self, call: "FunctionCall") -> Any: ...

    @abstractmethod
    def visit_function_call_parameter(self, parameter: "FunctionCallParameter") -> Any: ...

    @abstractmethod
    def visit_assignment_stmt(self, assignment: "AssignmentStmt") -> Any: ...

    @abstractmethod
    def visit_function_call_stmt(self, stmt: "FunctionCallStmt") -> Any: ...

    @abstractmethod
    def visit_comment_stmt(self, comment: "CommentStmt") -> Any: ...

    @abstractmethod
    def visit_return_stmt(self, stmt: "ReturnStmt") -> Any: ...

    @abstractmethod
    def visit_if_stmt(self, stmt: "IfStmt") -> Any: ...

    @abstractmethod
    def visit_elif_stmt(self, stmt: "ElifStmt") -> Any: ...

    @abstractmethod
    def visit_else_stmt(self, stmt: "ElseStmt") -> Any: ...


class Node:
    """A tree node; dispatches itself to the matching visitor method."""

    _visit: ClassVar[str] = ""

    def accept(self, visitor: PythonVisitor) -> Any:
        """Call the visitor method for this kind of node and return its result."""
        return getattr(visitor, self._visit)(self)


@dataclass
class ImportWhat(Node):
    """One imported name, optionally aliased."""

    _visit: ClassVar[str] = "visit_import_what"

    name: str = ""
    alias: str = ""


@dataclass
class Import(Node):
    """An ``import`` or ``from ... import`` statement."""

    _visit: ClassVar[str] = "visit_import"

    what: List[ImportWhat] = field(default_factory=list)
    from_: str = ""
    alias: str = ""


@dataclass
class Parameter(Node):
    """A function parameter with optional annotation and default."""

    _visit: ClassVar[str] = "visit_parameter"

    name: str = ""
    type: str = ""
    default: str = ""


@dataclass
class Field(Node):
    """An annotated class attribute."""

    _visit: ClassVar[str] = "visit_field"

    name: str = ""
    type: str = ""


@dataclass
class Function(Node):
    """A function or method definition."""

    _visit: ClassVar[str] = "visit_function"

    name: str = ""
    return_type: str = ""
    params: List[Parameter] = field(default_factory=list)
    imports: List[Import] = field(default_factory=list)
    body: List[Node] = field(default_factory=list)


@dataclass
class Class(Node):
    """A class definition."""

    _visit: ClassVar[str] = "visit_class"

    name: str = ""
    extend: str = ""
    statements: List[Node] = field(default_factory=list)
    fields: List[Field] = field(default_factory=list)
    methods: List[Function] = field(default_factory=list)


@dataclass
class File(Node):
    """A whole generated module."""

    _visit: ClassVar[str] = "visit_file"

    name: str = ""
    header_comments: List[str] = field(default_factory=list)
    imports: List[Import] = field(default_factory=list)
    functions: List[Function] = field(default_factory=list)
    classes: List[Class] = field(default_factory=list)


@dataclass
class FunctionCallParameter(Node):
    """A positional (no name) or keyword argument of a call."""

    _visit: ClassVar[str] = "visit_function_call_parameter"

    name: str = ""
    value: str = ""


@dataclass
class FunctionCall(Node):
    """A call expression."""

    _visit: ClassVar[str] = "visit_function_call"

    name: str = ""
    params: List[FunctionCallParameter] = field(default_factory=list)


@dataclass
class FunctionCallStmt(FunctionCall):
    """A call used as a statement of its own."""

    _visit: ClassVar[str] = "visit_function_call_stmt"


@dataclass
class AssignmentStmt(Node):
    """Assignment of either a literal expression or a call to a variable."""

    _visit: ClassVar[str] = "visit_assignment_stmt"

    variable: str = ""
    type: str = ""
    string_value: str = ""
    function_call_value: Optional[FunctionCall] = None


@dataclass
class CommentStmt(Node):
    """A comment: one line uses ``#``, several use a triple-quoted block."""

    _visit: ClassVar[str] = "visit_comment_stmt"

    lines: List[str] = field(default_factory=list)


@dataclass
class ReturnStmt(Node):
    """A return statement, bare when value is empty."""

    _visit: ClassVar[str] = "visit_return_stmt"

    value: str = ""


@dataclass
class ElifStmt(Node):
    """An ``elif`` branch."""

    _visit: ClassVar[str] = "visit_elif_stmt"

    condition: str = ""
    body: List[Node] = field(default_factory=list)


@dataclass
class ElseStmt(Node):
    """An ``else`` branch."""

    _visit: ClassVar[str] = "visit_else_stmt"

    body: List[Node] = field(default_factory=list)


@dataclass
class IfStmt(Node):
    """An ``if`` statement with optional ``elif`` and ``else`` branches."""

    _visit: ClassVar[str] = "visit_if_stmt"

    condition: str = ""
    body: List[Node] = field(default_factory=list)
    elifs: List[ElifStmt] = field(default_factory=list)
    else_stmt: Optional[ElseStmt] = None