import builtins
import io

from minilang.grammar import parse_with_lark
from minilang.repl import Session
from minilang.types import Number


def test_lines_accumulate_until_terminator():
    out = io.StringIO()
    session = Session(out=out)
    assert session.feed('x = 1 +')
    assert out.getvalue() == ''
    assert session.feed('  2;')
    assert session.feed('print x;')
    assert out.getvalue() == '3.0\n'


def test_block_spanning_lines_runs_at_closing_brace():
    out = io.StringIO()
    session = Session(out=out)
    session.feed('i = 0;')
    session.feed('while (i < 2) {')
    session.feed('  i = i + 1;')
    assert out.getvalue() == ''
    session.feed('  print i; }')
    assert out.getvalue() == '1.0\n2.0\n'


def test_error_is_reported_and_session_continues():
    out = io.StringIO()
    session = Session(out=out)
    session.feed('print missing;')
    session.feed('print 1 / 0;')
    session.feed('print "ok";')
    assert out.getvalue().splitlines() == [
        'Error: NameError: undefined variable missing',
        'Error: ArithmeticError: division by zero',
        'ok',
    ]


def test_failed_fragment_buffer_is_discarded():
    out = io.StringIO()
    session = Session(out=out)
    session.feed('x = ;')
    assert session.buffer == []
    session.feed('x = 5;')
    assert session.interpreter.env.get('x') == Number(5.0)


def test_variables_persist_across_fragments():
    out = io.StringIO()
    session = Session(out=out)
    session.feed('total = 10;')
    session.feed('total = total * 2;')
    session.feed('print total;')
    assert out.getvalue() == '20.0\n'


def test_exit_command_ends_session():
    session = Session(out=io.StringIO())
    assert not session.feed('  exit;  ')


def test_loop_reads_input_until_exit(monkeypatch, capsys):
    lines = iter(['print "hi";', 'exit;', 'print "never";'])
    monkeypatch.setattr(builtins, 'input', lambda prompt='': next(lines))
    Session().loop()
    out_lines = capsys.readouterr().out.strip().split('\n')
    assert out_lines[1:] == ['hi']


def test_loop_stops_at_end_of_input(monkeypatch, capsys):
    def no_more_input(prompt=''):
        raise EOFError
    monkeypatch.setattr(builtins, 'input', no_more_input)
    Session().loop()
    assert 'exit;' in capsys.readouterr().out


def test_session_with_lark_parser():
    out = io.StringIO()
    session = Session(parse=parse_with_lark, out=out)
    session.feed('print "lark " + 1;')
    session.feed('print "open;')
    lines = out.getvalue().splitlines()
    assert lines[0] == 'lark 1'
    assert lines[1].startswith('Error: LexError: unterminated string literal')


def test_braces_inside_strings_do_not_hold_the_fragment():
    out = io.StringIO()
    session = Session(out=out)
    session.feed('print "{";')
    assert out.getvalue() == '{\n'


def test_deeply_nested_fragment_is_reported_and_session_continues():
    out = io.StringIO()
    session = Session(out=out)
    assert session.feed('print ' + '(' * 80 + '1' + ')' * 80 + ';')
    assert session.feed('{' * 300 + '}' * 300)
    assert session.feed('print "still here";')
    lines = out.getvalue().splitlines()
    assert lines[0].startswith('Error: ParseError: nested too deeply')
    assert lines[1].startswith('Error: ParseError: nested too deeply')
    assert lines[2] == 'still here'


def test_deeply_nested_fragment_with_lark_parser_is_reported():
    out = io.StringIO()
    session = Session(parse=parse_with_lark, out=out)
    session.feed('{' * 2000 + '}' * 2000)
    session.feed('print "still here";')
    lines = out.getvalue().splitlines()
    assert lines[0] == 'Error: ParseError: program nested too deeply'
    assert lines[1] == 'still here'
