import io

import pytest

from interpreter import Interpreter
from lox import parse, run, tokenize


@pytest.fixture
def output():
    return io.StringIO()


@pytest.fixture
def interpreter(output):
    """A fresh interpreter printing into the `output` buffer."""
    return Interpreter(output)


@pytest.fixture
def execute(interpreter, output):
    """Runs a program and returns (printed lines, RunResult)."""
    def _execute(source):
        result = run(source, interpreter=interpreter)
        return output.getvalue().splitlines(), result
    return _execute


@pytest.fixture
def parse_program():
    """Tokenizes and parses source, asserting there are no scanner errors."""
    def _parse(source):
        tokens, scan_errors = tokenize(source)
        assert scan_errors == []
        return parse(tokens)
    return _parse
