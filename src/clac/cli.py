from os import isatty
import sys
from sys import stdin, stdout, exit
from argparse import ArgumentParser, REMAINDER, OPTIONAL
from functools import partial
import logging

from prompt_toolkit import PromptSession

from .util import ClacError
from .numeric import NumericEngine
from .ops import Clac
from .lexer import Lexer


logger = logging.getLogger(__name__)


def commands(clac):
    '''
    Return the command registry for clac: name to bound method.
    '''
    return {
        'neg': clac.neg,
        'n': clac.neg,
        'abs': clac.abs,
        'a': clac.abs,
        'inv': clac.inv,
        'i': clac.inv,
        '+': clac.add,
        '-': clac.sub,
        '*': clac.mul,
        'x': clac.mul,
        '/': clac.div,
        'div': clac.intdiv,
        '%': clac.mod,
        'exp': clac.exp,
        '^': clac.pow,
        '2^': clac.pow2,
        '10^': clac.pow10,
        'logn': clac.logn,
        'ln': clac.ln,
        'log': clac.log,
        'lg': clac.lg,
        'sqrt': clac.sqrt,
        'root': clac.root,
        '!': clac.factorial,
        'comb': clac.comb,
        'perm': clac.perm,
        'sin': clac.sin,
        'cos': clac.cos,
        'tan': clac.tan,
        'asin': clac.asin,
        'acos': clac.acos,
        'atan': clac.atan,
        'atan2': clac.atan2,
        'sinh': clac.sinh,
        'cosh': clac.cosh,
        'tanh': clac.tanh,
        'asinh': clac.asinh,
        'acosh': clac.acosh,
        'atanh': clac.atanh,
        'dtor': clac.deg_to_rad,
        'rtod': clac.rad_to_deg,
        'rtop': clac.rect_to_polar,
        'ptor': clac.polar_to_rect,
        'floor': clac.floor,
        'ceil': clac.ceil,
        'trunc': clac.trunc,
        'and': clac.and_,
        'or': clac.or_,
        'xor': clac.xor,
        'not': clac.not_,
        'andn': clac.andn,
        'orn': clac.orn,
        'xorn': clac.xorn,
        'sum': clac.sum,
        'avg': clac.avg,
        'min': clac.min,
        'max': clac.max,
        'minn': clac.minn,
        'maxn': clac.maxn,
        'drop': clac.drop,
        'k': clac.drop,
        'dropn': clac.dropn,
        'dropr': clac.dropr,
        'dup': clac.dup,
        'd': clac.dup,
        'dupn': clac.dupn,
        'dupr': clac.dupr,
        'pick': clac.pick,
        'p': clac.pick,
        'swap': clac.swap,
        's': clac.swap,
        'depth': clac.depth,
        'rot': clac.rot,
        'rotr': clac.rotr,
        'unrot': clac.unrot,
        'unrotr': clac.unrotr,
        'mag': clac.mag,
        'hyp': clac.hypot,
        'dot': clac.dot,
        'dot3': clac.dot3,
        'cross': clac.cross,
        'pi': clac.pi,
        'e': clac.e,
        'phi': clac.phi,
        'undo': clac.undo,
        'u': clac.undo,
        'redo': clac.redo,
        'r': clac.redo,
        'clear': clac.clear,
        'c': clac.clear,
        'reset': clac.reset,
    }


def format_stack(stack):
    '''
    Render stack on one line, bottom first, as typed.
    '''
    return ' '.join(str(value) for value in reversed(stack))


class InteractiveInput:
    def __init__(self, prompt, clac):
        self.prompt = prompt
        self.clac = clac

    def __iter__(self):
        try:
            session = PromptSession(message=self.prompt,
                                    vi_mode=True,
                                    enable_suspend=True,
                                    bottom_toolbar=self.toolbar,
                                    prompt_continuation=' ' * len(self.prompt),
                                    erase_when_done=False)
            while True:
                yield session.prompt()
        except EOFError:
            return

    def toolbar(self):
        return format_stack(self.clac.stack) or ' '


class CLI:
    '''
    Command line interface to the calculator.
    '''

    DEFAULT_PROMPT = 'clac> '

    def dumper(self):
        '''
        Dump all lexemes, with what each is to the calculator.
        '''
        clac = self._calculator()
        registry = commands(clac)
        lexer = Lexer()
        print('[kind]\t<repr(lexeme)>\t<meaning>')
        for line in self.args.expressions:
            for match in lexer.lex(line):
                if not lexer.isfeedable(match):
                    continue
                (kind, text), = lexer.matchedgroups(match).items()
                if kind == 'number':
                    try:
                        meaning = repr(clac.numeric.parse(text))
                    except ClacError as e:
                        meaning = str(e)
                else:
                    command = registry.get(text)
                    meaning = command.__name__ if command else '?'
                print(kind, repr(text), meaning, sep='\t')

    def executor(self):
        '''
        Run calculator over the input.
        '''
        clac = self._calculator()
        registry = commands(clac)
        registry['quit'] = registry['q'] = self.quit
        for line in self.args.expressions:
            try:
                self.feed(clac, registry, line)
            # Abort entire rest of line, makes sense anyway
            except ClacError as e:
                logger.debug('line %r failed', line, exc_info=True)
                print(e.args[0], file=sys.stderr)
                self.status = 1
        if not self._interactive():
            print(format_stack(clac.stack))

    def feed(self, clac, registry, line):
        '''
        Run every lexeme on line through clac.
        '''
        lexer = Lexer()
        for match in lexer.lex(line):
            if not lexer.isfeedable(match):
                continue
            groups = lexer.matchedgroups(match)
            token = match.group(0)
            if 'number' in groups:
                run = partial(clac.push, groups['number'])
            elif token in registry:
                run = registry[token]
            else:
                raise ClacError('invalid input: "{}"'.format(token))
            try:
                run()
            except ClacError as e:
                raise ClacError('{}: {}'.format(token, e)) from e

    def quit(self):
        exit(self.status)

    def raw_grammar(self):
        '''
        Print current internally defined grammar.
        '''
        print(Lexer.LEXEME)

    def _calculator(self):
        fmt = 'f' if self.args.float else None
        clac = Clac(numeric=NumericEngine(fmt),
                    history=self._interactive())
        if self._interactive():
            self.args.expressions.clac = clac
        return clac

    def _prompting_input(self):
        '''
        Return prompting stdin.__iter__ decorator...

        If either:
        - prompt explicitly specified.
        - both stdin/out are a tty
        '''
        if self.args.prompt or \
           isatty(stdin.fileno()) and isatty(stdout.fileno()):
            return InteractiveInput(prompt=self.args.prompt or
                                    self.DEFAULT_PROMPT,
                                    clac=None)
        else:
            return stdin

    def __init__(self):
        '''
        Create ready to run CLI.

        Does not run or parse command line arguments.
        '''
        self.status = 0
        self.argument_parser = ArgumentParser(description='RPN calculator')
        self.argument_parser.add_argument('-v', '--verbose',
                                          action='store_true')
        self.argument_parser.add_argument('-f', '--float',
                                          action='store_true',
                                          help='floating point instead of '
                                               'exact arithmetic')
        int_nonint_groups = self.argument_parser.add_mutually_exclusive_group()
        int_nonint_groups.add_argument('-e', '--expression',
                                       nargs=REMAINDER,
                                       dest='expressions')
        int_nonint_groups.add_argument('-p', '--prompt',
                                       nargs=OPTIONAL,
                                       const=self.DEFAULT_PROMPT)
        main_groups = self.argument_parser.add_mutually_exclusive_group()
        for short_, long_, action in [('-G', '--raw-grammar',
                                       self.raw_grammar),
                                      ('-D', '--dump', self.dumper)]:
            main_groups.add_argument(short_, long_,
                                     action='store_const',
                                     const=action,
                                     dest='action')
        self.argument_parser.set_defaults(action=self.executor,
                                          expressions=stdin)

    def _interactive(self):
        return isinstance(self.args.expressions, InteractiveInput)

    def run(self, *, args=None):
        '''
        Run CLI, given these args, or previously passed CLI args.

        Return exit status.
        '''
        self.args = self.argument_parser.parse_args(args)
        logging.basicConfig(level=logging.DEBUG if self.args.verbose
                            else logging.WARNING,
                            format='%(name)s: %(message)s')
        # Exact results like 2000 ! run past the default int to str limit.
        if hasattr(sys, 'set_int_max_str_digits'):
            sys.set_int_max_str_digits(0)
        if self.args.expressions is stdin:
            self.args.expressions = self._prompting_input()
        try:
            self.args.action()
        except KeyboardInterrupt:
            return 1
        return self.status


def main():
    exit(CLI().run())
