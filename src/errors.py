from __future__ import annotations
from dataclasses import dataclass

from tokens import Token

@dataclass
class Diagnostic:
    """A static error found while scanning or parsing."""
    line: int
    where: str
    message: str

    def __str__(self) -> str:
        return f"[line {self.line}] Error{self.where}: {self.message}"


class RuntimeFault(Exception):
    """Raised by the interpreter; carries the token the fault is reported at."""

    def __init__(self, token: Token, message: str):
        super().__init__(message)
        self.token = token
        self.message = message

    def render(self) -> str:
        return f"{self.message}\n[line {self.token.line}]"


class UndefinedVariable(RuntimeFault):
    def __init__(self, name: Token):
        super().__init__(name, f"Undefined variable '{name.lexeme}'.")


class TypeMismatch(RuntimeFault):
    pass
