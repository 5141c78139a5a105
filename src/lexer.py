from __future__ import annotations
from typing import List, Tuple

import ply.lex as lex

from errors import Diagnostic
from tokens import KEYWORDS, Token, TokenType

class LoxLexer:

    # Every kind except EOF, which is appended after ply runs out of input
    tokens = tuple(kind.name for kind in TokenType if kind is not TokenType.EOF)

    # Ignored characters
    t_ignore = ' \t\r'

    # String rules are sorted by decreasing regex length, so the
    # two-character operators are tried before their one-character prefixes
    t_BANG_EQUAL = r'!='
    t_EQUAL_EQUAL = r'=='
    t_GREATER_EQUAL = r'>='
    t_LESS_EQUAL = r'<='

    t_BANG = r'!'
    t_EQUAL = r'='
    t_GREATER = r'>'
    t_LESS = r'<'

    # Single-character tokens
    t_LEFT_PAREN = r'\('
    t_RIGHT_PAREN = r'\)'
    t_LEFT_BRACE = r'\{'
    t_RIGHT_BRACE = r'\}'
    t_COMMA = r','
    t_DOT = r'\.'
    t_MINUS = r'-'
    t_PLUS = r'\+'
    t_SEMICOLON = r';'
    t_SLASH = r'/'
    t_STAR = r'\*'

    def __init__(self):
        self.lexer = None
        self.diagnostics: List[Diagnostic] = []

    def error(self, line: int, message: str):
        self.diagnostics.append(Diagnostic(line, "", message))

    # Function rules are tried in definition order, ahead of the string rules

    def t_BLOCK_COMMENT(self, t):
        r'/\*[\s\S]*?\*/'
        t.lexer.lineno += t.value.count('\n')

    def t_UNCLOSED_COMMENT(self, t):
        r'/\*[\s\S]*'
        self.error(t.lineno, "Unclosed comment block.")
        t.lexer.lineno += t.value.count('\n')

    def t_LINE_COMMENT(self, t):
        r'//[^\n]*'
        pass

    def t_STRING(self, t):
        r'"[^"\n]*"'
        t.literal = t.value[1:-1]
        return t

    # Stops at the newline, which is then scanned normally
    def t_UNCLOSED_STRING(self, t):
        r'"[^"\n]*'
        self.error(t.lineno, "Unclosed string literal.")

    def t_NUMBER(self, t):
        r'\d+(?:\.\d+)?'
        t.literal = float(t.value)
        return t

    def t_IDENTIFIER(self, t):
        r'[A-Za-z_][A-Za-z0-9_]*'
        keyword = KEYWORDS.get(t.value)
        if keyword is not None:
            t.type = keyword.name
        return t

    #  line number tracking
    def t_newline(self, t):
        r'\n+'
        t.lexer.lineno += len(t.value)

    # Error handling
    def t_error(self, t):
        self.error(t.lineno, "Unexpected character.")
        t.lexer.skip(1)

    def build(self, **kwargs):
        """Build the lexer"""
        self.lexer = lex.lex(module=self, **kwargs)
        return self.lexer

    def tokenize(self, data: str) -> Tuple[List[Token], List[Diagnostic]]:
        if not self.lexer:
            self.build()

        self.diagnostics = []
        self.lexer.lineno = 1
        self.lexer.input(data)
        tokens: List[Token] = []

        while True:
            tok = self.lexer.token()
            if not tok:
                break
            tokens.append(Token(
                kind=TokenType[tok.type],
                lexeme=tok.value,
                literal=getattr(tok, 'literal', None),
                line=tok.lineno,
            ))

        tokens.append(Token(TokenType.EOF, "", None, self.lexer.lineno))
        return tokens, self.diagnostics


def print_tokens(tokens: List[Token]):
    print(f"{'Line':<6}| {'Token':<15}| {'Lexeme':<20}| Literal")
    print("-" * 70)

    for tok in tokens:
        lexeme = tok.lexeme
        # Limit length for display
        if len(lexeme) > 20:
            lexeme = lexeme[:17] + "..."
        literal = "" if tok.literal is None else repr(tok.literal)

        print(f"{tok.line:<6}| {tok.kind.name:<15}| {lexeme:<20}| {literal}")
