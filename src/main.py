import sys
from ast_printer import AstPrinter
from interpreter import Interpreter
from lexer import LoxLexer, print_tokens
from lox import EXIT_STATIC_ERROR, EXIT_USAGE, RunResult, parse, run

MODES = ("run", "lex", "ast")

def read_input(argv):
    if len(argv) == 1:
        with open(argv[0], "r", encoding="utf-8") as f:
            return f.read()
    return sys.stdin.read()

def usage():
    print("Usage:")
    print("  python main.py                 start the interactive prompt")
    print("  python main.py file.lox        run a script")
    print("  python main.py run file.lox")
    print("  python main.py lex file.lox    print the token table")
    print("  python main.py ast file.lox    print the syntax tree")
    print("  or, reading the script from stdin:")
    print("  python main.py run < file.lox")

def report(result: RunResult):
    for d in result.diagnostics:
        print(str(d), file=sys.stderr)
    if result.fault is not None:
        print(result.fault.render(), file=sys.stderr)

def run_prompt():
    # One interpreter for the whole session so globals survive between lines
    interpreter = Interpreter()
    while True:
        try:
            line = input("> ")
        except EOFError:
            print()
            break
        if line == "exit":
            break
        report(run(line, interpreter=interpreter))

def show_tokens(source: str) -> int:
    tokens, diagnostics = LoxLexer().tokenize(source)
    print_tokens(tokens)
    for d in diagnostics:
        print(str(d), file=sys.stderr)
    return EXIT_STATIC_ERROR if diagnostics else 0

def show_ast(source: str) -> int:
    tokens, scan_errors = LoxLexer().tokenize(source)
    statements, parse_errors = parse(tokens)
    diagnostics = scan_errors + parse_errors
    if diagnostics:
        report(RunResult(diagnostics=diagnostics))
        return EXIT_STATIC_ERROR
    print(AstPrinter().print_program(statements))
    return 0

def main(argv=None):
    args = sys.argv[1:] if argv is None else argv

    if not args:
        run_prompt()
        return

    if args[0] in MODES:
        mode, rest = args[0], args[1:]
    else:
        mode, rest = "run", args

    if len(rest) > 1:
        usage()
        sys.exit(EXIT_USAGE)

    source = read_input(rest)

    if mode == "lex":
        code = show_tokens(source)
    elif mode == "ast":
        code = show_ast(source)
    else:
        result = run(source)
        report(result)
        code = result.exit_code

    if code:
        sys.exit(code)

if __name__ == "__main__":
    main()
