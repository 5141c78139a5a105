import pytest

from ast_nodes import (
    Assign, Binary, Block, ExprStmt, Grouping, IfStmt, Literal, Logical,
    PrintStmt, Unary, VarDecl, Variable,
)
from ast_printer import AstPrinter
from lexer import LoxLexer
from parser import Parser
from tokens import TokenType as T


def sexpr(statements):
    return [AstPrinter().print(st) for st in statements]


def messages(errors):
    return [str(e) for e in errors]


class TestPrecedence:
    @pytest.mark.parametrize("source, expected", [
        ("1 + 2 * 3;", "(; (+ 1 (* 2 3)))"),
        ("1 - 2 - 3;", "(; (- (- 1 2) 3))"),
        ("8 / 4 / 2;", "(; (/ (/ 8 4) 2))"),
        ("(1 + 2) * 3;", "(; (* (group (+ 1 2)) 3))"),
        ("-!x;", "(; (- (! x)))"),
        ("--1;", "(; (- (- 1)))"),
        ("1 < 2 == true;", "(; (== (< 1 2) true))"),
        ("1 + 2 >= 3 * 4;", "(; (>= (+ 1 2) (* 3 4)))"),
        ("a != b == c;", "(; (== (!= a b) c))"),
        ("a = b = 1;", "(; (= a (= b 1)))"),
        ('"x" + nil;', '(; (+ "x" nil))'),
        ("1.5;", "(; 1.5)"),
    ])
    def test_expression_shapes(self, parse_program, source, expected):
        statements, errors = parse_program(source)
        assert errors == []
        assert sexpr(statements) == [expected]

    def test_binary_nodes_carry_operator_tokens(self, parse_program):
        statements, _ = parse_program("1 + 2 * 3;")
        expr = statements[0].expression
        assert isinstance(expr, Binary)
        assert expr.operator.kind == T.PLUS
        assert expr.left == Literal(1.0)
        assert isinstance(expr.right, Binary)
        assert expr.right.operator.kind == T.STAR

    def test_assignment_node(self, parse_program):
        statements, _ = parse_program("a = 1;")
        expr = statements[0].expression
        assert isinstance(expr, Assign)
        assert expr.name.lexeme == "a"
        assert expr.value == Literal(1.0)

    def test_grouping_and_unary(self, parse_program):
        statements, _ = parse_program("-(x);")
        expr = statements[0].expression
        assert isinstance(expr, Unary)
        assert isinstance(expr.right, Grouping)
        assert isinstance(expr.right.expression, Variable)


class TestStatements:
    def test_var_declarations(self, parse_program):
        statements, errors = parse_program('var a; var b = "s";')
        assert errors == []
        assert isinstance(statements[0], VarDecl)
        assert statements[0].initializer is None
        assert sexpr(statements) == ["(var a)", '(var b "s")']

    def test_block(self, parse_program):
        statements, _ = parse_program("{ var a = 1; print a; }")
        assert isinstance(statements[0], Block)
        assert sexpr(statements) == ["(block (var a 1) (print a))"]

    def test_nested_empty_blocks(self, parse_program):
        statements, _ = parse_program("{ {} }")
        assert sexpr(statements) == ["(block (block))"]

    def test_if_else(self, parse_program):
        statements, _ = parse_program("if (a) print 1; else { print 2; }")
        stmt = statements[0]
        assert isinstance(stmt, IfStmt)
        assert isinstance(stmt.then_branch, PrintStmt)
        assert isinstance(stmt.else_branch, Block)

    def test_if_without_else(self, parse_program):
        statements, _ = parse_program("if (a) a = 1;")
        assert statements[0].else_branch is None
        assert isinstance(statements[0].then_branch, ExprStmt)

    def test_dangling_else_binds_to_nearest_if(self, parse_program):
        statements, _ = parse_program("if (a) if (b) print 1; else print 2;")
        outer = statements[0]
        assert outer.else_branch is None
        assert outer.then_branch.else_branch is not None
        assert sexpr(statements) == ["(if a (if b (print 1) (print 2)))"]


class TestErrors:
    def test_missing_semicolon_at_end(self, parse_program):
        statements, errors = parse_program("print 1")
        assert messages(errors) == ["[line 1] Error at end: Expect ';' after value."]
        assert statements == [None]

    def test_missing_operand(self, parse_program):
        _, errors = parse_program("1 + ;")
        assert messages(errors) == ["[line 1] Error at ';': Expect expression."]

    def test_two_broken_statements_give_two_errors(self, parse_program):
        statements, errors = parse_program("print ;\nvar = 1;\nprint 3;")
        assert messages(errors) == [
            "[line 1] Error at ';': Expect expression.",
            "[line 2] Error at '=': Expect variable name.",
        ]
        assert statements[:2] == [None, None]
        assert isinstance(statements[2], PrintStmt)

    def test_synchronizes_before_statement_keyword(self, parse_program):
        statements, errors = parse_program("var 1 print 2;")
        assert len(errors) == 1
        assert statements[0] is None
        assert sexpr(statements[1:]) == ["(print 2)"]

    def test_invalid_assignment_target(self, parse_program):
        statements, errors = parse_program("1 = 2;\n(a) = 3;")
        assert messages(errors) == [
            "[line 1] Error at '=': Invalid assignment target.",
            "[line 2] Error at '=': Invalid assignment target.",
        ]
        # Parsing carries on with the left-hand side; no Assign node is built
        assert sexpr(statements) == ["(; 1)", "(; (group a))"]

    def test_unclosed_block(self, parse_program):
        _, errors = parse_program("{ print 1;")
        assert messages(errors) == ["[line 1] Error at end: Expect '}' after block."]

    def test_if_needs_parentheses(self, parse_program):
        _, errors = parse_program("if 1) print 1;")
        assert messages(errors) == ["[line 1] Error at '1': Expect '(' after 'if'."]

    def test_if_needs_closing_parenthesis(self, parse_program):
        _, errors = parse_program("if (1 print 1;")
        assert messages(errors) == ["[line 1] Error at 'print': Expect ')' after if condition."]

    def test_unclosed_group(self, parse_program):
        _, errors = parse_program("(1 + 2;")
        assert messages(errors) == ["[line 1] Error at ';': Expect ')' after expression."]

    def test_error_inside_block_is_local(self, parse_program):
        statements, errors = parse_program("{ print ; print 1; }")
        assert len(errors) == 1
        assert sexpr(statements) == ["(block <error> (print 1))"]

    def test_logical_operators_are_not_parsed(self, parse_program):
        # 'and'/'or' have tokens and an AST node but no grammar rule yet
        statements, errors = parse_program("true and false;")
        assert messages(errors) == ["[line 1] Error at 'and': Expect ';' after expression."]
        assert not any(isinstance(st, ExprStmt) and isinstance(st.expression, Logical)
                       for st in statements)


class TestParseExpression:
    def test_single_expression(self):
        tokens, _ = LoxLexer().tokenize("1 + 2")
        parser = Parser(tokens)
        expr = parser.parse_expression()
        assert parser.errors == []
        assert AstPrinter().print(expr) == "(+ 1 2)"

    def test_trailing_tokens(self):
        tokens, _ = LoxLexer().tokenize("1 2")
        parser = Parser(tokens)
        assert parser.parse_expression() is None
        assert messages(parser.errors) == ["[line 1] Error at '2': Expect end of expression."]

    def test_empty_program(self):
        tokens, _ = LoxLexer().tokenize("")
        assert Parser(tokens).parse() == []


class TestDeepNesting:
    def test_deep_parentheses_are_reported(self, parse_program):
        source = "print " + "(" * 1000 + "1" + ")" * 1000 + ";\nprint 2;"
        statements, errors = parse_program(source)
        assert [e.message for e in errors] == ["Too much nesting."]
        assert statements[0] is None
        assert sexpr(statements[1:]) == ["(print 2)"]

    def test_deep_unary_in_single_expression(self):
        tokens, _ = LoxLexer().tokenize("-" * 5000 + "1")
        parser = Parser(tokens)
        assert parser.parse_expression() is None
        assert [e.message for e in parser.errors] == ["Too much nesting."]

    def test_moderate_nesting_still_parses(self, parse_program):
        statements, errors = parse_program("print " + "(" * 20 + "1" + ")" * 20 + ";")
        assert errors == []
        assert isinstance(statements[0], PrintStmt)
