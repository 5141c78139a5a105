from __future__ import annotations
from typing import List, Optional, Union

from ast_nodes import *
from interpreter import stringify

class AstPrinter:
    """Renders a syntax tree in a parenthesized prefix form, for debugging."""

    def print(self, node: Union[Expr, Stmt, None]) -> str:
        if node is None:
            return "<error>"
        if isinstance(node, Stmt):
            return self.print_stmt(node)
        return self.print_expr(node)

    def print_program(self, statements: List[Optional[Stmt]]) -> str:
        lines = [self.print(st) for st in statements]
        return "\n".join(lines)

    def parenthesize(self, name: str, *parts: Union[Expr, Stmt, str, None]) -> str:
        out = [name]
        for part in parts:
            out.append(part if isinstance(part, str) else self.print(part))
        return "(" + " ".join(out) + ")"

    # -------- statements ----------
    def print_stmt(self, st: Stmt) -> str:
        if isinstance(st, ExprStmt):
            return self.parenthesize(";", st.expression)

        if isinstance(st, PrintStmt):
            return self.parenthesize("print", st.expression)

        if isinstance(st, VarDecl):
            if st.initializer is None:
                return self.parenthesize("var", st.name.lexeme)
            return self.parenthesize("var", st.name.lexeme, st.initializer)

        if isinstance(st, Block):
            return self.parenthesize("block", *st.statements)

        if isinstance(st, IfStmt):
            if st.else_branch is None:
                return self.parenthesize("if", st.condition, st.then_branch)
            return self.parenthesize("if", st.condition, st.then_branch, st.else_branch)

        raise NotImplementedError(f"cannot print {type(st).__name__}")

    # -------- expressions ----------
    def print_expr(self, e: Expr) -> str:
        if isinstance(e, Literal):
            if isinstance(e.value, str):
                return f'"{e.value}"'
            return stringify(e.value)

        if isinstance(e, Grouping):
            return self.parenthesize("group", e.expression)

        if isinstance(e, Variable):
            return e.name.lexeme

        if isinstance(e, Assign):
            return self.parenthesize("=", e.name.lexeme, e.value)

        if isinstance(e, Unary):
            return self.parenthesize(e.operator.lexeme, e.right)

        # Printing is structural, so the reserved Logical node renders like Binary
        if isinstance(e, (Binary, Logical)):
            return self.parenthesize(e.operator.lexeme, e.left, e.right)

        raise NotImplementedError(f"cannot print {type(e).__name__}")
