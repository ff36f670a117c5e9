"""Render a codegen syntax tree as Python source text."""

from __future__ import annotations

from typing import List, Optional

from emfcli.codegen.nodes import (
    AssignmentStmt,
    Class,
    CommentStmt,
    ElifStmt,
    ElseStmt,
    Field,
    File,
    Function,
    FunctionCall,
    FunctionCallParameter,
    FunctionCallStmt,
    IfStmt,
    Import,
    ImportWhat,
    Node,
    Parameter,
    PythonVisitor,
    ReturnStmt,
)

_TAB = "    "


class CodeGenerationError(Exception):
    """Raised when a tree cannot be rendered as valid Python.

    When raised by ``PythonCodeGenerator.generate``, ``line`` and ``column``
    locate the failure and ``code`` holds the partial output with a marker.
    """

    def __init__(
        self,
        message: str,
        line: Optional[int] = None,
        column: Optional[int] = None,
        code: Optional[str] = None,
    ) -> None:
        super().__init__(message)
        self.line = line
        self.column = column
        self.code = code


class PythonCodeGenerator(PythonVisitor):
    """Visitor that writes Python source for a tree of nodes.

    Indentation is four spaces per level, or eight when
    ``indent_four_spaces`` is false.
    """

    def __init__(self, indent_four_spaces: bool = True) -> None:
        self.indent_four_spaces = indent_four_spaces
        self.indent_level = 0
        self.current_line = 1
        self.current_column = 0
        self._parts: List[str] = []

    @property
    def output(self) -> str:
        """The text written so far."""
        return "".join(self._parts)

    # -- low-level writing -------------------------------------------------

    def _reset(self) -> None:
        self._parts.clear()
        self.indent_level = 0
        self.current_line = 1
        self.current_column = 0

    def _up(self) -> None:
        self.indent_level += 1

    def _down(self) -> None:
        self.indent_level = max(0, self.indent_level - 1)

    def _track(self, text: str) -> None:
        if text.endswith("\n"):
            self.current_line += 1
            self.current_column = 0
        else:
            self.current_column += len(text)

    def _append_indented(self, line: str) -> None:
        tab = _TAB if self.indent_four_spaces else _TAB * 2
        text = tab * self.indent_level + line
        self._parts.append(text)
        self._track(text)

    def _append(self, text: str) -> None:
        self._parts.append(text)
        self._track(text)

    def _new_line(self) -> None:
        self.current_line += 1
        self.current_column = 0
        self._parts.append("\n")

    def _accept_all(self, nodes) -> None:
        for node in nodes:
            node.accept(self)

    # -- visitors ------------------------------------------------------------

    def visit_file(self, file: File) -> None:
        for comment in file.header_comments:
            self._append("# " + comment + "\n")
        if file.header_comments:
            self._new_line()

        self._accept_all(file.imports)
        if file.imports:
            self._new_line()

        self._accept_all(file.classes)
        if file.classes:
            self._new_line()

        self._accept_all(file.functions)
        if file.functions:
            self._new_line()

    def visit_function(self, function: Function) -> None:
        self._append_indented("def ")
        if not function.name:
            raise CodeGenerationError("function name cannot be empty")
        self._append(function.name + "(")

        default_found = False
        last = len(function.params) - 1
        for position, param in enumerate(function.params):
            if param.default:
                default_found = True
            param.accept(self)
            if not param.default and default_found:
                raise CodeGenerationError("non-default argument follows default argument")
            if position < last:
                self._append(", ")

        if function.return_type:
            self._append(") -> " + function.return_type + ":\n")
        else:
            self._append("):\n")

        self._up()
        self._accept_all(function.imports)
        self._accept_all(function.body)
        if not function.body and not function.imports:
            self._append_indented("pass\n")
        self._down()

    def visit_class(self, cls: Class) -> None:
        self._append_indented("class ")
        if not cls.name:
            raise CodeGenerationError("class name cannot be empty")
        self._append(cls.name)

        if cls.extend:
            self._append("(" + cls.extend + "):\n")
        else:
            self._append(":\n")

        self._up()

        self._accept_all(cls.fields)
        if cls.fields:
            self._new_line()

        self._accept_all(cls.statements)
        if cls.statements:
            self._new_line()

        self._accept_all(cls.methods)

        if not cls.fields and not cls.methods and not cls.statements:
            self._append_indented("pass\n")

        self._down()

    def visit_field(self, field: Field) -> None:
        if not field.name:
            raise CodeGenerationError("field name cannot be empty")
        self._append_indented(field.name + ": ")
        if not field.type:
            raise CodeGenerationError("field type cannot be empty")
        self._append(field.type + "\n")

    def visit_parameter(self, parameter: Parameter) -> None:
        if not parameter.name:
            raise CodeGenerationError("parameter name cannot be empty")
        if not parameter.type:
            self._append(parameter.name)
        elif parameter.default:
            self._append(f"{parameter.name}: {parameter.type} = {parameter.default}")
        else:
            self._append(f"{parameter.name}: {parameter.type}")

    def visit_import(self, import_stmt: Import) -> None:
        if import_stmt.from_:
            self._append_indented("from " + import_stmt.from_ + " import ")
        else:
            self._append_indented("import ")

        if not import_stmt.what:
            raise CodeGenerationError("import statement must have at least one item")

        for position, what in enumerate(import_stmt.what):
            if position > 0:
                self._append(", ")
            what.accept(self)

        self._new_line()

    def visit_import_what(self, import_what: ImportWhat) -> None:
        if not import_what.name:
            raise CodeGenerationError('import what "name" cannot be empty')
        self._append(import_what.name)
        if import_what.alias:
            self._append(" as " + import_what.alias)

    def visit_assignment_stmt(self, assignment: AssignmentStmt) -> None:
        if not assignment.variable:
            raise CodeGenerationError("assignment variable cannot be empty")

        if assignment.type:
            self._append_indented(f"{assignment.variable}: {assignment.type} = ")
        else:
            self._append_indented(assignment.variable + " = ")

        has_call = assignment.function_call_value is not None
        if has_call and assignment.string_value:
            raise CodeGenerationError(
                "assignment cannot have both function call and string value"
            )
        if not has_call and not assignment.string_value:
            raise CodeGenerationError(
                "assignment must have either function call or string value"
            )

        if has_call:
            assignment.function_call_value.accept(self)
        else:
            self._append(assignment.string_value + "\n")

    def visit_comment_stmt(self, comment: CommentStmt) -> None:
        if not comment.lines:
            raise CodeGenerationError("comment must have at least one line")

        if len(comment.lines) == 1:
            self._append_indented("# " + comment.lines[0] + "\n")
            return

        self._append_indented('"""\n')
        for line in comment.lines:
            self._append_indented(line + "\n")
        self._append_indented('"""\n')

    def visit_function_call_stmt(self, stmt: FunctionCallStmt) -> None:
        self._append_indented("")
        self.visit_function_call(stmt)

    def visit_function_call(self, call: FunctionCall) -> None:
        if not call.name:
            raise CodeGenerationError("function call name cannot be empty")

        self._append(call.name + "(\n")
        self._up()

        keyword_found = False
        last = len(call.params) - 1
        for position, param in enumerate(call.params):
            if param.name:
                keyword_found = True
            self._append_indented("")
            param.accept(self)

            # **kwargs may follow keyword arguments; plain positionals may not.
            if not param.name and not param.value.startswith("**") and keyword_found:
                raise CodeGenerationError("positional argument follows keyword argument")

            if position < last:
                self._append(",\n")

        self._down()
        self._new_line()
        self._append_indented(")\n")

    def visit_function_call_parameter(self, parameter: FunctionCallParameter) -> None:
        if not parameter.value:
            raise CodeGenerationError("function call parameter value cannot be empty")
        if not parameter.name:
            self._append(parameter.value)
        else:
            self._append(f"{parameter.name} = {parameter.value}")

    def visit_return_stmt(self, stmt: ReturnStmt) -> None:
        if not stmt.value:
            self._append_indented("return\n")
        else:
            self._append_indented("return " + stmt.value + "\n")

    def _visit_block(self, body: List[Node]) -> None:
        self._up()
        self._accept_all(body)
        if not body:
            self._append_indented("pass\n")
        self._down()

    def visit_if_stmt(self, stmt: IfStmt) -> None:
        self._append_indented("if ")
        if not stmt.condition:
            raise CodeGenerationError("if statement condition cannot be empty")
        self._append(stmt.condition + ":\n")

        self._visit_block(stmt.body)
        self._accept_all(stmt.elifs)
        if stmt.else_stmt is not None:
            stmt.else_stmt.accept(self)

    def visit_elif_stmt(self, stmt: ElifStmt) -> None:
        self._append_indented("elif ")
        if not stmt.condition:
            raise CodeGenerationError("elif statement condition cannot be empty")
        self._append(stmt.condition + ":\n")
        self._visit_block(stmt.body)

    def visit_else_stmt(self, stmt: ElseStmt) -> None:
        self._append_indented("else:\n")
        self._visit_block(stmt.body)

    # -- entry point -----------------------------------------------------------

    def generate(self, file: File) -> str:
        """Render ``file`` and return the source text.

        On failure, raises CodeGenerationError carrying the location and the
        partial output followed by a marker under the failing column.
        """
        self._reset()
        try:
            file.accept(self)
        except CodeGenerationError as exc:
            marker = "\n"
            if self.current_column >= 1:
                marker += "~" * (self.current_column - 1)
            marker += "^^^\n"
            self._parts.append(marker)
            raise CodeGenerationError(
                f"error generating code (L{self.current_line}, "
                f"Col{self.current_column}): {exc}",
                line=self.current_line,
                column=self.current_column,
                code=self.output,
            ) from exc
        return self.output