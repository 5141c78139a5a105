from __future__ import annotations
from typing import List, Optional

from ast_nodes import *
from errors import Diagnostic
from tokens import Token, TokenType

class ParseError(Exception):
    def __init__(self, token: Token, message: str):
        super().__init__(f"ParseError at line {token.line} - {message}")
        self.token = token
        self.message = message

# Reported when nesting exhausts the Python stack
TOO_DEEP = "Too much nesting."

# Tokens that can begin a statement; synchronization stops in front of them
STATEMENT_STARTS = {
    TokenType.CLASS, TokenType.FUN, TokenType.VAR, TokenType.FOR,
    TokenType.IF, TokenType.WHILE, TokenType.PRINT, TokenType.RETURN,
}

class TokenStream:
    def __init__(self, tokens: List[Token]):
        self.tokens = tokens
        self.i = 0

    def peek(self) -> Token:
        return self.tokens[self.i]

    def previous(self) -> Token:
        return self.tokens[self.i - 1]

    def at_end(self) -> bool:
        return self.peek().kind == TokenType.EOF

    def advance(self) -> Token:
        if not self.at_end():
            self.i += 1
        return self.previous()

    def check(self, kind: TokenType) -> bool:
        if self.at_end():
            return False
        return self.peek().kind == kind

    def match(self, *kinds: TokenType) -> Optional[Token]:
        for kind in kinds:
            if self.check(kind):
                return self.advance()
        return None

    def expect(self, kind: TokenType, message: str) -> Token:
        if self.check(kind):
            return self.advance()
        raise ParseError(self.peek(), message)

class Parser:
    def __init__(self, tokens: List[Token]):
        self.ts = TokenStream(tokens)
        self.errors: List[Diagnostic] = []

    def error(self, token: Token, message: str):
        if token.kind == TokenType.EOF:
            where = " at end"
        else:
            where = f" at '{token.lexeme}'"
        self.errors.append(Diagnostic(token.line, where, message))

    def parse(self) -> List[Optional[Stmt]]:
        """Parse a whole program.

        A declaration that fails to parse is reported, skipped up to the next
        statement boundary and left in the result as None.
        """
        statements: List[Optional[Stmt]] = []
        while not self.ts.at_end():
            statements.append(self.parse_declaration())
        return statements

    def parse_expression(self) -> Optional[Expr]:
        """Parse input holding a single expression and nothing else."""
        try:
            expr = self.parse_expr()
            if not self.ts.at_end():
                raise ParseError(self.ts.peek(), "Expect end of expression.")
            return expr
        except ParseError as e:
            self.error(e.token, e.message)
            return None
        except RecursionError:
            self.error(self.ts.peek(), TOO_DEEP)
            return None

    def synchronize(self):
        self.ts.advance()
        while not self.ts.at_end():
            if self.ts.previous().kind == TokenType.SEMICOLON:
                return
            if self.ts.peek().kind in STATEMENT_STARTS:
                return
            self.ts.advance()

    # ---------------- DECLARATIONS / STATEMENTS ----------------
    def parse_declaration(self) -> Optional[Stmt]:
        try:
            if self.ts.match(TokenType.VAR):
                return self.parse_vardecl()
            return self.parse_stmt()
        except ParseError as e:
            self.error(e.token, e.message)
            self.synchronize()
            return None
        except RecursionError:
            self.error(self.ts.peek(), TOO_DEEP)
            self.synchronize()
            return None

    def parse_vardecl(self) -> VarDecl:
        name = self.ts.expect(TokenType.IDENTIFIER, "Expect variable name.")
        initializer = None
        if self.ts.match(TokenType.EQUAL):
            initializer = self.parse_expr()
        self.ts.expect(TokenType.SEMICOLON, "Expect ';' after variable declaration.")
        return VarDecl(name=name, initializer=initializer)

    def parse_stmt(self) -> Stmt:
        if self.ts.match(TokenType.IF):
            return self.parse_if()
        if self.ts.match(TokenType.PRINT):
            value = self.parse_expr()
            self.ts.expect(TokenType.SEMICOLON, "Expect ';' after value.")
            return PrintStmt(expression=value)
        if self.ts.match(TokenType.LEFT_BRACE):
            return Block(statements=self.parse_block())

        expr = self.parse_expr()
        self.ts.expect(TokenType.SEMICOLON, "Expect ';' after expression.")
        return ExprStmt(expression=expr)

    def parse_if(self) -> IfStmt:
        self.ts.expect(TokenType.LEFT_PAREN, "Expect '(' after 'if'.")
        condition = self.parse_expr()
        self.ts.expect(TokenType.RIGHT_PAREN, "Expect ')' after if condition.")

        then_branch = self.parse_stmt()
        else_branch = None
        # Greedy: an 'else' belongs to the innermost 'if' still open
        if self.ts.match(TokenType.ELSE):
            else_branch = self.parse_stmt()
        return IfStmt(condition=condition, then_branch=then_branch, else_branch=else_branch)

    def parse_block(self) -> List[Optional[Stmt]]:
        statements: List[Optional[Stmt]] = []
        while not self.ts.check(TokenType.RIGHT_BRACE) and not self.ts.at_end():
            statements.append(self.parse_declaration())
        self.ts.expect(TokenType.RIGHT_BRACE, "Expect '}' after block.")
        return statements

    # ---------------- EXPRESSIONS (precedence) ----------------
    def parse_expr(self) -> Expr:
        return self.parse_assignment()

    def parse_assignment(self) -> Expr:
        expr = self.parse_equality()

        equals = self.ts.match(TokenType.EQUAL)
        if equals:
            value = self.parse_assignment()
            if isinstance(expr, Variable):
                return Assign(name=expr.name, value=value)
            # Reported, not raised: the parser is still in a sane state
            self.error(equals, "Invalid assignment target.")

        return expr

    def parse_equality(self) -> Expr:
        expr = self.parse_comparison()
        while True:
            op_tok = self.ts.match(TokenType.BANG_EQUAL, TokenType.EQUAL_EQUAL)
            if not op_tok:
                break
            rhs = self.parse_comparison()
            expr = Binary(left=expr, operator=op_tok, right=rhs)
        return expr

    def parse_comparison(self) -> Expr:
        expr = self.parse_addition()
        while True:
            op_tok = self.ts.match(TokenType.GREATER, TokenType.GREATER_EQUAL,
                                   TokenType.LESS, TokenType.LESS_EQUAL)
            if not op_tok:
                break
            rhs = self.parse_addition()
            expr = Binary(left=expr, operator=op_tok, right=rhs)
        return expr

    def parse_addition(self) -> Expr:
        expr = self.parse_multiplication()
        while True:
            op_tok = self.ts.match(TokenType.MINUS, TokenType.PLUS)
            if not op_tok:
                break
            rhs = self.parse_multiplication()
            expr = Binary(left=expr, operator=op_tok, right=rhs)
        return expr

    def parse_multiplication(self) -> Expr:
        expr = self.parse_unary()
        while True:
            op_tok = self.ts.match(TokenType.STAR, TokenType.SLASH)
            if not op_tok:
                break
            rhs = self.parse_unary()
            expr = Binary(left=expr, operator=op_tok, right=rhs)
        return expr

    def parse_unary(self) -> Expr:
        op_tok = self.ts.match(TokenType.BANG, TokenType.MINUS)
        if op_tok:
            operand = self.parse_unary()
            return Unary(operator=op_tok, right=operand)
        return self.parse_primary()

    def parse_primary(self) -> Expr:
        if self.ts.match(TokenType.FALSE):
            return Literal(False)
        if self.ts.match(TokenType.TRUE):
            return Literal(True)
        if self.ts.match(TokenType.NIL):
            return Literal(None)

        tok = self.ts.match(TokenType.NUMBER, TokenType.STRING)
        if tok:
            return Literal(tok.literal)

        tok = self.ts.match(TokenType.IDENTIFIER)
        if tok:
            return Variable(name=tok)

        if self.ts.match(TokenType.LEFT_PAREN):
            expr = self.parse_expr()
            self.ts.expect(TokenType.RIGHT_PAREN, "Expect ')' after expression.")
            return Grouping(expression=expr)

        raise ParseError(self.ts.peek(), "Expect expression.")
