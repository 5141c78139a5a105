from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, List, Optional

from tokens import Token

# ---------- Expressions ----------
class Expr: ...

@dataclass
class Binary(Expr):
    left: Expr
    operator: Token
    right: Expr

@dataclass
class Grouping(Expr):
    expression: Expr

@dataclass
class Literal(Expr):
    value: Any

@dataclass
class Unary(Expr):
    operator: Token
    right: Expr

@dataclass
class Variable(Expr):
    name: Token

@dataclass
class Assign(Expr):
    name: Token
    value: Expr

# Reserved for 'and' / 'or'; the parser never builds it and it has no evaluation rule
@dataclass
class Logical(Expr):
    left: Expr
    operator: Token
    right: Expr

# ---------- Statements ----------
class Stmt: ...

@dataclass
class ExprStmt(Stmt):
    expression: Expr

@dataclass
class PrintStmt(Stmt):
    expression: Expr

@dataclass
class VarDecl(Stmt):
    name: Token
    initializer: Optional[Expr] = None

@dataclass
class Block(Stmt):
    statements: List[Optional[Stmt]] = field(default_factory=list)

@dataclass
class IfStmt(Stmt):
    condition: Expr
    then_branch: Stmt
    else_branch: Optional[Stmt] = None
