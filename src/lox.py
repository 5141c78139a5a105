"""Entry points tying the scanner, parser and interpreter together.

Nothing here prints or exits: static errors come back as Diagnostic lists
and runtime errors as a RuntimeFault, so callers (the command-line driver,
a REPL, tests) decide what to do with them.
"""
from __future__ import annotations
from dataclasses import dataclass, field
from typing import List, Optional, TextIO, Tuple

from ast_nodes import Stmt
from errors import Diagnostic, RuntimeFault
from interpreter import Interpreter
from lexer import LoxLexer
from parser import Parser
from tokens import Token

EXIT_USAGE = 64
EXIT_STATIC_ERROR = 65
EXIT_RUNTIME_ERROR = 70

def tokenize(source: str) -> Tuple[List[Token], List[Diagnostic]]:
    return LoxLexer().tokenize(source)

def parse(tokens: List[Token]) -> Tuple[List[Optional[Stmt]], List[Diagnostic]]:
    parser = Parser(tokens)
    statements = parser.parse()
    return statements, parser.errors

def interpret(statements: List[Optional[Stmt]], output: Optional[TextIO] = None) -> Optional[RuntimeFault]:
    return Interpreter(output).interpret(statements)

@dataclass
class RunResult:
    diagnostics: List[Diagnostic] = field(default_factory=list)
    fault: Optional[RuntimeFault] = None

    @property
    def exit_code(self) -> int:
        if self.diagnostics:
            return EXIT_STATIC_ERROR
        if self.fault is not None:
            return EXIT_RUNTIME_ERROR
        return 0

def run(source: str, interpreter: Optional[Interpreter] = None,
        output: Optional[TextIO] = None) -> RunResult:
    """Scan, parse and (if both were clean) execute one program.

    Pass an interpreter to keep global variables between calls.
    """
    tokens, scan_errors = tokenize(source)
    statements, parse_errors = parse(tokens)

    diagnostics = scan_errors + parse_errors
    if diagnostics:
        return RunResult(diagnostics=diagnostics)

    if interpreter is None:
        interpreter = Interpreter(output)
    return RunResult(fault=interpreter.interpret(statements))
