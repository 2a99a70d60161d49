import builtins
import json

import pytest

from minilang.__main__ import main


def write_program(tmp_path, text, name='prog.mini'):
    path = tmp_path / name
    path.write_text(text, encoding='utf-8')
    return path


def test_runs_program_file(tmp_path, capsys):
    path = write_program(tmp_path, 'x = 2;\nprint x * 21;\n')
    main([str(path)])
    assert capsys.readouterr().out == '42.0\n'


def test_runs_program_file_with_lark_parser(tmp_path, capsys):
    path = write_program(tmp_path, 'print "via " + "lark";')
    main(['--parser', 'lark', str(path)])
    assert capsys.readouterr().out == 'via lark\n'


def test_runtime_error_exits_with_status_1(tmp_path, capsys):
    path = write_program(tmp_path, 'print 1 / 0;')
    with pytest.raises(SystemExit) as excinfo:
        main([str(path)])
    assert excinfo.value.code == 1
    assert 'ArithmeticError: division by zero' in capsys.readouterr().err


def test_parse_error_exits_with_status_1(tmp_path, capsys):
    path = write_program(tmp_path, 'print ;')
    with pytest.raises(SystemExit) as excinfo:
        main([str(path)])
    assert excinfo.value.code == 1
    assert 'ParseError' in capsys.readouterr().err


def test_missing_file(tmp_path, capsys):
    with pytest.raises(SystemExit):
        main([str(tmp_path / 'absent.mini')])
    assert 'not found' in capsys.readouterr().err


def test_emit_ast_then_run_it(tmp_path, capsys):
    path = write_program(tmp_path, 'i = 0; while (i < 2) { print "i=" + i; i = i + 1; }')
    main(['--emit-ast', str(path)])
    ast_path = tmp_path / 'prog.mini.ast.json'
    assert capsys.readouterr().out.strip() == str(ast_path)
    assert json.loads(ast_path.read_text(encoding='utf-8'))['type'] == 'Program'
    main(['--ast', str(ast_path)])
    assert capsys.readouterr().out == 'i=0\ni=1\n'


def test_debug_flag_writes_trace(tmp_path, monkeypatch, capsys):
    monkeypatch.chdir(tmp_path)
    path = write_program(tmp_path, 'x = 1;')
    main(['-vv', str(path)])
    assert 'assign x' in (tmp_path / 'debug.txt').read_text(encoding='utf-8')


def test_interactive_session_without_program(monkeypatch, capsys):
    lines = iter(['a = 4;', 'print a + 1;', 'exit;'])
    monkeypatch.setattr(builtins, 'input', lambda prompt='': next(lines))
    main([])
    out_lines = capsys.readouterr().out.strip().split('\n')
    assert out_lines[-1] == '5.0'


@pytest.mark.parametrize('content', [
    '{not json',
    '{"type": "Script", "body": []}',
    '{"type": "Program", "body": [{"type": "PrintStmt"}]}',
    '{"type": "Program", "body": [42]}',
])
def test_invalid_ast_file_exits_with_status_1(tmp_path, capsys, content):
    path = write_program(tmp_path, content, name='bad.ast.json')
    with pytest.raises(SystemExit) as excinfo:
        main(['--ast', str(path)])
    assert excinfo.value.code == 1
    assert 'invalid AST file' in capsys.readouterr().err
