'''
Input lexer tests
'''

import regex

from clac.lexer import Lexer


def kinds(line):
    l = Lexer()
    return [(kind, text)
            for match in l.lex(line)
            if l.isfeedable(match)
            for kind, text in l.matchedgroups(match).items()]


def test_numbers_and_words():
    assert kinds('1 2 +') == [('number', '1'), ('number', '2'),
                              ('word', '+')]


def test_number_prefixed_words():
    assert kinds('2^ 10^') == [('word', '2^'), ('word', '10^')]


def test_signs():
    assert kinds('-5 - +1') == [('number', '-5'), ('word', '-'),
                                ('number', '+1')]


def test_radix_and_exponent():
    assert kinds('0x1f 1e3 0x') == [('number', '0x1f'), ('number', '1e3'),
                                    ('word', '0x')]


def test_whitespace_is_not_feedable():
    l = Lexer()
    matches = list(l.lex(' \t1\n'))
    assert [l.isfeedable(m) for m in matches] == [False, True, False]


def test_grammar_compiles():
    assert regex.compile(Lexer.LEXEME, flags=Lexer.FLAGS)
