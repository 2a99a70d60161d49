import pytest

from minilang.errors import LexError
from minilang.lexer import render_tokens, tokenize
from minilang.tokens import Token, TokenKind


def kinds_and_texts(source):
    return [(tok.kind, tok.text) for tok in tokenize(source)]


def test_classifies_each_token_kind():
    assert kinds_and_texts('x = 3.5 + "hi"; if') == [
        (TokenKind.IDENTIFIER, 'x'),
        (TokenKind.SYMBOL, '='),
        (TokenKind.NUMBER, '3.5'),
        (TokenKind.OPERATOR, '+'),
        (TokenKind.STRING, 'hi'),
        (TokenKind.SYMBOL, ';'),
        (TokenKind.KEYWORD, 'if'),
        (TokenKind.EOF, ''),
    ]


def test_empty_source_is_only_end_of_input():
    tokens = tokenize('   \n\t ')
    assert tokens == [Token(TokenKind.EOF, '')]


def test_exactly_one_end_of_input_token():
    tokens = tokenize('print 1;')
    assert [t.kind for t in tokens].count(TokenKind.EOF) == 1
    assert tokens[-1].kind is TokenKind.EOF


def test_keywords_are_exact_words():
    tokens = tokenize('while whiles print_it true false else')
    assert [t.kind for t in tokens[:-1]] == [
        TokenKind.KEYWORD,
        TokenKind.IDENTIFIER,
        TokenKind.IDENTIFIER,
        TokenKind.KEYWORD,
        TokenKind.KEYWORD,
        TokenKind.KEYWORD,
    ]


def test_identifiers_may_start_with_underscore_and_hold_digits():
    assert kinds_and_texts('_tmp9')[0] == (TokenKind.IDENTIFIER, '_tmp9')


def test_two_character_operators_win_over_one_character():
    texts = [t.text for t in tokenize('a==b!=c<=d>=e&&f||!g')[:-1]]
    assert texts == ['a', '==', 'b', '!=', 'c', '<=', 'd', '>=', 'e', '&&', 'f', '||', '!', 'g']


def test_single_equals_is_a_symbol_and_double_is_an_operator():
    tokens = tokenize('= ==')
    assert (tokens[0].kind, tokens[1].kind) == (TokenKind.SYMBOL, TokenKind.OPERATOR)


def test_number_run_accepts_several_dots():
    assert kinds_and_texts('1.2.3')[0] == (TokenKind.NUMBER, '1.2.3')


def test_string_keeps_raw_contents_without_escapes():
    tokens = tokenize(r'"a\nb"')
    assert tokens[0].text == r'a\nb'


def test_unterminated_string_fails():
    with pytest.raises(LexError) as excinfo:
        tokenize('print "oops;')
    assert 'unterminated string' in excinfo.value.message


def test_unexpected_character_fails():
    with pytest.raises(LexError) as excinfo:
        tokenize('x = 1 @ 2;')
    assert "'@'" in str(excinfo.value)
    assert excinfo.value.kind == 'LexError'


def test_lone_ampersand_is_not_an_operator():
    with pytest.raises(LexError):
        tokenize('a & b')


def test_positions_are_tracked_but_not_compared():
    tokens = tokenize('x\n  y')
    assert (tokens[1].line, tokens[1].column) == (2, 3)
    assert tokens[1] == Token(TokenKind.IDENTIFIER, 'y')


def test_render_round_trip_is_token_equivalent():
    source = 'x=1.5;while(x<10){x=x*2;}print "x is "+x;if(!done)print(-x)%3;'
    tokens = tokenize(source)
    rendered = render_tokens(tokens)
    assert tokenize(rendered) == tokens
    assert rendered.startswith('x = 1.5 ;')
    assert '"x is "' in rendered
