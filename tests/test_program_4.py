from pathlib import Path

from monkey.interpreter import Interpreter
from monkey.parser import parse_program

EXAMPLES = Path(__file__).resolve().parent.parent / 'examples'


def test_program_4_map_reduce(capsys):
    """Test program 4: higher-order functions over arrays.

    `map` and `reduce` are written in Monkey with `first`, `rest` and
    `push`. The source array must come out untouched since `push` copies.
    """
    with open(EXAMPLES / 'program_4.mk', 'r', encoding='utf-8') as f:
        source = f.read()
    ast = parse_program(source)
    interp = Interpreter()
    interp.run(ast)
    out_lines = capsys.readouterr().out.strip().split('\n')
    assert out_lines == ['[2, 4, 6, 8, 10]', '15', '[1, 2, 3, 4, 5]']
