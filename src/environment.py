from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from errors import UndefinedVariable
from tokens import Token

@dataclass
class Environment:
    enclosing: Optional["Environment"] = None
    values: Dict[str, Any] = field(default_factory=dict)

    def define(self, name: str, value: Any):
        # Redefinition in the same scope replaces the old binding
        self.values[name] = value

    def get(self, name: Token) -> Any:
        cur = self
        while cur:
            if name.lexeme in cur.values:
                return cur.values[name.lexeme]
            cur = cur.enclosing
        raise UndefinedVariable(name)

    def assign(self, name: Token, value: Any):
        cur = self
        while cur:
            if name.lexeme in cur.values:
                cur.values[name.lexeme] = value
                return
            cur = cur.enclosing
        raise UndefinedVariable(name)
