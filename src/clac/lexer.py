import regex

from .util import ClacError
from .numeric import NumericEngine


class Lexer:
    '''
    Lexer for clac input lines: numbers, command words and whitespace.

    For consistency, for now, needs to be instantiated, despite holding no
    internal state.
    '''
    NUMBER = NumericEngine.NUMBER
    # Only a whole word is a number, so 2^ and 10^ lex as commands.
    DELIMITED = r'(?=\s|$)'
    WORD = r'\S+'
    SPACE = r'\s+'

    # All possible lexemes.
    LEXEME = r'(?<number>' + NUMBER + DELIMITED + r')|' \
             r'(?<word>' + WORD + r')|' \
             r'(?<space>' + SPACE + r')'
    KINDS = 'number', 'word', 'space'
    FLAGS = NumericEngine.FLAGS

    def lex(self, line):
        '''
        Take a line and return all lexemes.

        Doesn't yield incomplete or incorrect lexemes, stopping on first bad.
        '''
        while line:
            match = regex.match(type(self).LEXEME, line,
                                flags=type(self).FLAGS)
            if match is None:
                break
            yield match
            line = line[len(match.group(0)):]
        if line:
            raise ClacError("Couldn't lex {0}".format(line.strip()))

    def isfeedable(self, match):
        '''
        Return True if lexeme means something to the calculator.
        '''
        return 'space' not in self.matchedgroups(match).keys()

    def matchedgroups(self, match):
        '''
        Return the kind of lexeme matched, mapped to its text.
        '''
        return {key: value
                for key, value
                in match.groupdict().items()
                if value and key in type(self).KINDS}
