from enum import Enum
from functools import wraps, partial
import logging

from .util import NoMoreChanges
from .stack import Stack
from .history import History
from .numeric import NumericEngine


logger = logging.getLogger(__name__)


class Outcome(Enum):
    '''
    What exec did with a command that did not fail.
    '''
    # Working stack recorded into history.
    COMMITTED = 'committed'
    # Succeeded, but history left alone (undo, redo, reset, no-op).
    SKIPPED = 'skipped'


def command(f):
    '''
    Decorator running an Engine method as a transaction through exec.
    '''
    @wraps(f)
    def wrapper(self, *args, **kwargs):
        return self.exec(partial(f, self, *args, **kwargs))
    return wrapper


class Engine:
    '''
    Stack machine with linear undo/redo.

    Commands edit a working copy of the current history snapshot. exec
    decides whether the edit becomes a new snapshot, overwrites the current
    one, or is rolled back.
    '''

    def __init__(self, numeric=None, history=True):
        '''
        Create engine with an empty stack.

        :param numeric: NumericEngine to evaluate with; exact by default.
        :param history: Whether commands add undoable history entries.
        '''
        self.numeric = numeric or NumericEngine()
        self.retain = bool(history)
        self.history = History()
        self.working = Stack()
        self._running = False

    @property
    def stack(self):
        '''
        Current stack, topmost first.
        '''
        return self.working.snapshot()

    def _sync(self):
        self.working = Stack(self.history.snapshot())

    def exec(self, mutate):
        '''
        Run mutate against the working stack as one transaction.

        Unless mutate returns Outcome.SKIPPED, the working stack is then
        committed to history; on SKIPPED history is left alone. If
        mutate raises, the working stack is rolled back to the current
        snapshot and the exception propagates.

        Calls made from inside a running command join the outer transaction,
        but a failing inner call still puts the working stack back as it
        found it.
        '''
        if self._running:
            saved = self.working.snapshot()
            try:
                outcome = mutate()
            except Exception as e:
                logger.debug('inner command rolled back: %s', e)
                self.working = Stack(saved)
                raise
            if outcome is Outcome.SKIPPED:
                return Outcome.SKIPPED
            return Outcome.COMMITTED
        self._sync()
        self._running = True
        try:
            outcome = mutate()
        except Exception as e:
            logger.debug('rolled back: %s', e)
            self._sync()
            raise
        finally:
            self._running = False
        if outcome is Outcome.SKIPPED:
            logger.debug('history update skipped')
        else:
            outcome = Outcome.COMMITTED
            self.history.commit(self.working.snapshot(), retain=self.retain)
        self._sync()
        return outcome

    def enable_history(self, flag=True):
        '''
        Toggle whether commands add history entries or overwrite in place.

        Disabling collapses history down to the current stack.
        '''
        self.retain = bool(flag)
        if not self.retain:
            logger.debug('history disabled, collapsing %d snapshot(s)',
                         len(self.history))
            self.history = History(self.history.snapshot())
            self._sync()

    @command
    def reset(self):
        '''
        Forget everything: empty stack, fresh history.
        '''
        logger.debug('reset')
        self.history = History()
        return Outcome.SKIPPED

    @command
    def undo(self):
        if not self.history.undo():
            raise NoMoreChanges()
        logger.debug('undo to %d', self.history.cursor)
        return Outcome.SKIPPED

    @command
    def redo(self):
        if not self.history.redo():
            raise NoMoreChanges()
        logger.debug('redo to %d', self.history.cursor)
        return Outcome.SKIPPED

    @command
    def push(self, value):
        '''
        Push value, parsing it first if it is text.
        '''
        self.working.push(self.numeric.coerce(value))

    def pop(self):
        '''
        Pop and return the topmost value.
        '''
        popped = []
        self.exec(lambda: popped.append(self.working.pop()))
        return popped[0]

    @command
    def clear(self):
        '''
        Drop everything on the stack, undoably.
        '''
        if not self.working:
            return Outcome.SKIPPED
        self.working.clear()

    @command
    def depth(self):
        '''
        Push the number of values on the stack.
        '''
        self.working.push(self.numeric.coerce(len(self.working)))
