import pytest

from monkey.environment import Environment
from monkey.interpreter import Interpreter, run_program
from monkey.parser import parse_program
from monkey.types import (
    Integer, String, Array, Function, Error, TRUE, FALSE, NULL,
)


def _eval(source: str):
    return run_program(source)


@pytest.mark.parametrize("source, expected", [
    ("5", 5),
    ("-10", -10),
    ("5 + 5 + 5 + 5 - 10", 10),
    ("2 * 2 * 2 * 2 * 2", 32),
    ("-50 + 100 + -50", 0),
    ("20 + 2 * -10", 0),
    ("50 / 2 * 2 + 10", 60),
    ("3 * (3 * 3) + 10", 37),
    ("(5 + 10 * 2 + 15 / 3) * 2 + -10", 50),
    ("10 / 3", 3),
    ("-7 / 2", -3),
    ("7 / -2", -3),
    ("9223372036854775807 + 1", -9223372036854775808),
    ("-9223372036854775807 - 1 - 1", 9223372036854775807),
    ("(-9223372036854775807 - 1) / -1", -9223372036854775808),
])
def test_integer_arithmetic(source, expected):
    assert _eval(source) == Integer(expected)


@pytest.mark.parametrize("source, expected", [
    ("true", TRUE),
    ("false", FALSE),
    ("1 < 2", TRUE),
    ("1 > 2", FALSE),
    ("1 == 1", TRUE),
    ("1 != 1", FALSE),
    ("true == true", TRUE),
    ("true != false", TRUE),
    ("(1 < 2) == true", TRUE),
    ("(1 > 2) == true", FALSE),
    ("!true", FALSE),
    ("!5", FALSE),
    ("!0", FALSE),
    ("!!5", TRUE),
])
def test_boolean_expressions(source, expected):
    assert _eval(source) is expected


def test_booleans_and_null_compare_by_identity():
    assert _eval("let n = if (false) { 1 }; n == n") is TRUE
    assert _eval("let n = if (false) { 1 }; n == false") is FALSE
    assert _eval("let n = if (false) { 1 }; !n") is TRUE


@pytest.mark.parametrize("source, expected", [
    ("if (true) { 10 }", Integer(10)),
    ("if (false) { 10 }", NULL),
    ("if (1) { 10 }", Integer(10)),
    ("if (0) { 10 } else { 20 }", Integer(10)),
    ("if (1 > 2) { 10 } else { 20 }", Integer(20)),
    ("if (\"\") { 1 } else { 2 }", Integer(1)),
])
def test_if_else_expressions(source, expected):
    assert _eval(source) == expected


@pytest.mark.parametrize("source, expected", [
    ("return 10;", 10),
    ("return 10; 9;", 10),
    ("return 2 * 5; 9;", 10),
    ("9; return 2 * 5; 9;", 10),
    ("if (10 > 1) { if (10 > 1) { return 10; } return 1; }", 10),
    ("let f = fn(x) { return x; x + 10; }; f(10);", 10),
    ("let f = fn(x) { let result = x + 10; return result; return 10; }; f(10);", 20),
])
def test_return_statements(source, expected):
    assert _eval(source) == Integer(expected)


def test_bare_return_yields_null():
    assert _eval("let f = fn() { return; 5 }; f()") is NULL


@pytest.mark.parametrize("source, message", [
    ("5 + true;", "type mismatch: INTEGER + BOOLEAN"),
    ("5 + true; 5;", "type mismatch: INTEGER + BOOLEAN"),
    ("-true", "unknown operator: -BOOLEAN"),
    ("true + false;", "unknown operator: BOOLEAN + BOOLEAN"),
    ("5; true + false; 5", "unknown operator: BOOLEAN + BOOLEAN"),
    ("if (10 > 1) { true + false; }", "unknown operator: BOOLEAN + BOOLEAN"),
    ("if (10 > 1) { if (10 > 1) { return true + false; } return 1; }", "unknown operator: BOOLEAN + BOOLEAN"),
    ("foobar", "identifier not found: foobar"),
    ('"Hello" - "World"', "unknown operator: STRING - STRING"),
    ('"a" == "a"', "type mismatch: STRING == STRING"),
    ("[1] == [1]", "type mismatch: ARRAY == ARRAY"),
    ("true < false", "type mismatch: BOOLEAN < BOOLEAN"),
    ("1 == true", "type mismatch: INTEGER == BOOLEAN"),
    ("5 / 0", "division by zero"),
    ("5(1)", "not a function: INTEGER"),
    ("fn(x) { x }(1, 2)", "wrong number of arguments: want=1, got=2"),
    ("1[0]", "index operator not supported: INTEGER"),
    ('[1, 2]["a"]', "index must be INTEGER, got STRING"),
    ("[1, 2 + true, 3]", "type mismatch: INTEGER + BOOLEAN"),
])
def test_error_handling(source, message):
    assert _eval(source) == Error(message)


def test_errors_stop_argument_evaluation(capsys):
    result = _eval('let f = fn(a, b) { a }; f(missing, puts("evaluated"))')
    assert result == Error("identifier not found: missing")
    assert capsys.readouterr().out == ''


def test_let_statements():
    assert _eval("let a = 5; a;") == Integer(5)
    assert _eval("let a = 5 * 5; a;") == Integer(25)
    assert _eval("let a = 5; let b = a; b;") == Integer(5)
    assert _eval("let a = 5; let b = a; let c = a + b + 5; c;") == Integer(15)


def test_let_result_is_null():
    assert _eval("let a = 1;") is NULL


def test_empty_program_is_null():
    assert _eval("") is NULL


def test_function_object():
    fn = _eval("fn(x) { x + 2; };")
    assert isinstance(fn, Function)
    assert [p.name for p in fn.parameters] == ['x']
    assert str(fn.body) == '{ (x + 2) }'
    assert fn.inspect() == 'fn(x) { (x + 2) }'


@pytest.mark.parametrize("source, expected", [
    ("let identity = fn(x) { x; }; identity(5);", 5),
    ("let identity = fn(x) { return x; }; identity(5);", 5),
    ("let double = fn(x) { x * 2; }; double(5);", 10),
    ("let add = fn(x, y) { x + y; }; add(5, 5);", 10),
    ("let add = fn(x, y) { x + y; }; add(5 + 5, add(5, 5));", 20),
    ("fn(x) { x; }(5)", 5),
])
def test_function_application(source, expected):
    assert _eval(source) == Integer(expected)


def test_closures():
    source = "let newAdder = fn(x) { fn(y) { x + y } }; let addTwo = newAdder(2); addTwo(3);"
    assert _eval(source) == Integer(5)


def test_closures_see_later_rebinding_of_outer_names():
    source = "let x = 1; let get = fn() { x }; let x = 2; get()"
    assert _eval(source) == Integer(2)


def test_let_in_function_shadows_outer_binding():
    source = "let x = 1; let f = fn() { let x = 2; x }; f() + x"
    assert _eval(source) == Integer(3)


def test_blocks_do_not_open_a_scope():
    assert _eval("if (true) { let inner = 7; }; inner") == Integer(7)


def test_recursive_function():
    source = """
    let countdown = fn(n) { if (n == 0) { 0 } else { countdown(n - 1) } };
    countdown(20)
    """
    assert _eval(source) == Integer(0)


@pytest.mark.parametrize("source, expected", [
    ("let f = fn() { let x = if (true) { return 5; }; 10 }; f()", Integer(5)),
    ("fn() { [if (true) { return 1; }] }()", Integer(1)),
    ("fn() { 1 + if (true) { return 2; } }()", Integer(2)),
    ("fn() { len([if (true) { return 3; }, 0]) }()", Integer(3)),
    ("fn() { -if (true) { return 4; } }()", Integer(4)),
    ("fn() { if (if (true) { return 5; }) { 0 } }()", Integer(5)),
    ("fn() { [1, 2][if (true) { return 6; }] }()", Integer(6)),
    ("fn() { puts(if (true) { return 7; }) }()", Integer(7)),
])
def test_return_inside_an_expression_leaves_the_function(source, expected):
    assert _eval(source) == expected


def test_deep_recursion():
    source = """
    let count = fn(n) { if (n == 0) { 0 } else { 1 + count(n - 1) } };
    count(1000)
    """
    assert _eval(source) == Integer(1000)


def test_map_over_a_long_array():
    source = """
    let build = fn(n, acc) { if (n == 0) { acc } else { build(n - 1, push(acc, n)) } };
    let map = fn(arr, f) {
        let iter = fn(arr, acc) {
            if (len(arr) == 0) { acc } else { iter(rest(arr), push(acc, f(first(arr)))) }
        };
        iter(arr, [])
    };
    len(map(build(200, []), fn(x) { x * 2 }))
    """
    assert _eval(source) == Integer(200)


def test_unbounded_recursion_is_an_error_value():
    result = _eval("let f = fn(n) { f(n + 1) }; f(0)")
    assert result == Error("maximum recursion depth exceeded")


def test_functions_as_arguments():
    source = "let apply = fn(f, x) { f(x) }; apply(fn(n) { n * n }, 7)"
    assert _eval(source) == Integer(49)


def test_string_literal_and_concatenation():
    assert _eval('"Hello World!"') == String('Hello World!')
    assert _eval('"Hello" + " " + "World!"') == String('Hello World!')


def test_array_literal():
    result = _eval("[1, 2 * 2, 3 + 3]")
    assert result == Array([Integer(1), Integer(4), Integer(6)])
    assert result.inspect() == '[1, 4, 6]'


@pytest.mark.parametrize("source, expected", [
    ("[1, 2, 3][0]", Integer(1)),
    ("[1, 2, 3][1]", Integer(2)),
    ("let i = 0; [1][i];", Integer(1)),
    ("[1, 2, 3][1 + 1];", Integer(3)),
    ("let myArray = [1, 2, 3]; myArray[0] + myArray[1] + myArray[2];", Integer(6)),
    ("[1, 2, 3][3]", NULL),
    ("[1, 2, 3][5]", NULL),
    ("[1, 2, 3][-1]", NULL),
])
def test_array_index_expressions(source, expected):
    assert _eval(source) == expected


def test_arrays_are_shared_by_reference():
    interp = Interpreter()
    interp.run(parse_program("let a = [1, 2]; let b = a;"))
    assert interp.global_env.get('a') is interp.global_env.get('b')


def test_run_keeps_global_environment_between_programs():
    interp = Interpreter()
    interp.run(parse_program("let x = 40;"))
    assert interp.run(parse_program("x + 2")) == Integer(42)


def test_run_with_explicit_environment():
    env = Environment()
    env.set('seed', Integer(3))
    assert run_program("seed * 3", env) == Integer(9)


def test_debug_trace_goes_to_file(tmp_path):
    debug_file = tmp_path / 'debug.txt'
    with Interpreter(debug_level=3, debug_file=str(debug_file)) as interp:
        interp.run(parse_program("let x = 2; if (x > 1) { [x][0] }"))
    trace = debug_file.read_text(encoding='utf-8')
    assert 'let x = 2' in trace
    assert 'if condition true -> True' in trace
    assert 'index [2][0]' in trace


def test_debug_trace_defaults_to_stderr(capsys):
    interp = Interpreter(debug_level=1)
    interp.run(parse_program("1"))
    captured = capsys.readouterr()
    assert captured.out == ''
    assert 'result INTEGER: 1' in captured.err


def test_unknown_node_type_is_a_programmer_error():
    with pytest.raises(NotImplementedError):
        Interpreter().evaluate(object(), Environment())


def test_round_trip_rendering_evaluates_the_same():
    source = "let f = fn(a, b) { if (a > b) { return a - b; } b - a }; [f(10, 3), f(3, 10)][1] * -2"
    program = parse_program(source)
    assert run_program(str(program)) == run_program(source) == Integer(-14)
