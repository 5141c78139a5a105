from __future__ import annotations
import math
import sys
from typing import Any, List, Optional, TextIO

from ast_nodes import *
from environment import Environment
from errors import RuntimeFault, TypeMismatch
from tokens import Token, TokenType

def is_truthy(value: Any) -> bool:
    if value is None:
        return False
    if isinstance(value, bool):
        return value
    return True

def is_equal(a: Any, b: Any) -> bool:
    # nil is only equal to nil
    if a is None and b is None:
        return True
    if a is None or b is None:
        return False
    # No coercion between kinds: true != 1
    if type(a) is not type(b):
        return False
    if isinstance(a, float) and math.isnan(a) and math.isnan(b):
        return True
    return a == b

def stringify(value: Any) -> str:
    if value is None:
        return "nil"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float):
        if math.isnan(value):
            return "NaN"
        if math.isinf(value):
            return "Infinity" if value > 0 else "-Infinity"
        if value.is_integer():
            # int() drops the sign of -0.0
            sign = "-" if value == 0 and math.copysign(1.0, value) < 0 else ""
            return sign + str(int(value))
        return repr(value)
    return str(value)

def _divide(left: float, right: float) -> float:
    try:
        return left / right
    except ZeroDivisionError:
        # IEEE 754: x/0 is a signed infinity, 0/0 is nan
        if left == 0 or math.isnan(left):
            return math.nan
        return math.copysign(math.inf, left) * math.copysign(1.0, right)

class Interpreter:
    def __init__(self, output: Optional[TextIO] = None):
        self.output = output
        self.globals = Environment()
        self.environment = self.globals

    def interpret(self, statements: List[Optional[Stmt]]) -> Optional[RuntimeFault]:
        """Execute statements in order.

        Stops at the first runtime fault and returns it; statements after the
        faulting one are not executed. Returns None on success. None entries
        (declarations the parser discarded) are skipped.
        """
        for stmt in statements:
            if stmt is None:
                continue
            try:
                self.execute(stmt)
            except RuntimeFault as fault:
                return fault
            except RecursionError:
                # Blocks restore their environments in `finally` while unwinding
                return RuntimeFault(_anchor_token(stmt), "Too much nesting.")
        return None

    # ---------- Statements ----------
    def execute(self, st: Stmt):
        if isinstance(st, ExprStmt):
            self.evaluate(st.expression)
        elif isinstance(st, PrintStmt):
            value = self.evaluate(st.expression)
            print(stringify(value), file=self.output if self.output is not None else sys.stdout)
        elif isinstance(st, VarDecl):
            value = None
            if st.initializer is not None:
                value = self.evaluate(st.initializer)
            self.environment.define(st.name.lexeme, value)
        elif isinstance(st, Block):
            self.execute_block(st.statements, Environment(enclosing=self.environment))
        elif isinstance(st, IfStmt):
            if is_truthy(self.evaluate(st.condition)):
                self.execute(st.then_branch)
            elif st.else_branch is not None:
                self.execute(st.else_branch)
        else:
            raise NotImplementedError(f"no execution rule for {type(st).__name__}")

    def execute_block(self, statements: List[Optional[Stmt]], environment: Environment):
        previous = self.environment
        self.environment = environment
        try:
            for stmt in statements:
                if stmt is not None:
                    self.execute(stmt)
        finally:
            self.environment = previous

    # ---------- Expressions ----------
    def evaluate(self, e: Expr) -> Any:
        if isinstance(e, Literal):
            return e.value

        if isinstance(e, Grouping):
            return self.evaluate(e.expression)

        if isinstance(e, Variable):
            return self.environment.get(e.name)

        if isinstance(e, Assign):
            value = self.evaluate(e.value)
            self.environment.assign(e.name, value)
            return value

        if isinstance(e, Unary):
            right = self.evaluate(e.right)
            if e.operator.kind == TokenType.MINUS:
                self._require_number(e.operator, right)
                return -right
            if e.operator.kind == TokenType.BANG:
                return not is_truthy(right)

        if isinstance(e, Binary):
            return self._binary(e)

        raise NotImplementedError(f"no evaluation rule for {type(e).__name__}")

    def _binary(self, e: Binary) -> Any:
        # Binary levels are left associative, so long chains like 1 + 2 + ... + n
        # grow down the left spine; walk it with a loop instead of recursing
        spine: List[Binary] = []
        node: Expr = e
        while isinstance(node, Binary):
            spine.append(node)
            node = node.left

        left = self.evaluate(node)
        for b in reversed(spine):
            right = self.evaluate(b.right)
            left = self._apply(b.operator, left, right)
        return left

    def _apply(self, op: Token, left: Any, right: Any) -> Any:
        kind = op.kind

        # Equality never faults
        if kind == TokenType.EQUAL_EQUAL:
            return is_equal(left, right)
        if kind == TokenType.BANG_EQUAL:
            return not is_equal(left, right)

        if kind == TokenType.PLUS:
            if _is_number(left) and _is_number(right):
                return left + right
            if isinstance(left, str) and isinstance(right, str):
                return left + right
            raise TypeMismatch(op, "Operands must be two numbers or two strings.")

        self._require_numbers(op, left, right)
        if kind == TokenType.MINUS:
            return left - right
        if kind == TokenType.STAR:
            return left * right
        if kind == TokenType.SLASH:
            return _divide(left, right)
        if kind == TokenType.GREATER:
            return left > right
        if kind == TokenType.GREATER_EQUAL:
            return left >= right
        if kind == TokenType.LESS:
            return left < right
        if kind == TokenType.LESS_EQUAL:
            return left <= right

        raise NotImplementedError(f"no evaluation rule for operator {op.lexeme!r}")

    def _require_number(self, op: Token, operand: Any):
        if not _is_number(operand):
            raise TypeMismatch(op, "Operand must be a number.")

    def _require_numbers(self, op: Token, left: Any, right: Any):
        if not (_is_number(left) and _is_number(right)):
            raise TypeMismatch(op, "Operands must be numbers.")

def _is_number(value: Any) -> bool:
    return isinstance(value, float)

def _anchor_token(node) -> Token:
    """First token found walking down from a statement, for fault line numbers."""
    while node is not None:
        if isinstance(node, (Binary, Logical, Unary)):
            return node.operator
        if isinstance(node, (Variable, Assign, VarDecl)):
            return node.name
        if isinstance(node, (ExprStmt, PrintStmt, Grouping)):
            node = node.expression
        elif isinstance(node, IfStmt):
            node = node.condition
        elif isinstance(node, Block):
            node = next((st for st in node.statements if st is not None), None)
        else:
            break
    return Token(TokenType.EOF, "", None, 0)
