'''
Transaction, history and engine primitive tests
'''

from pytest import raises

from clac import Clac, Engine, Outcome
from clac.util import InvalidArgument, NoMoreChanges, TooFewArguments


def test_exec_commits():
    engine = Engine()
    assert engine.exec(lambda: engine.working.push(1)) is Outcome.COMMITTED
    assert engine.stack == (1,)
    assert len(engine.history) == 2


def test_exec_skipped_leaves_history_alone():
    engine = Engine()

    def peek():
        engine.working.push(1)
        return Outcome.SKIPPED

    assert engine.exec(peek) is Outcome.SKIPPED
    assert engine.stack == ()
    assert len(engine.history) == 1


def test_exec_rolls_back_on_error():
    engine = Engine()
    engine.push(1)

    def bad():
        engine.working.push(5)
        raise InvalidArgument()

    with raises(InvalidArgument):
        engine.exec(bad)
    assert engine.stack == (1,)
    assert len(engine.history) == 2


def test_nested_commands_are_one_transaction():
    clac = Clac()
    clac.push(3)

    def double():
        clac.push(2)
        clac.mul()

    clac.exec(double)
    assert clac.stack == (6,)
    clac.undo()
    assert clac.stack == (3,)


def test_nested_failure_rolls_back_everything():
    clac = Clac()
    clac.push(3)

    def broken():
        clac.push(0)
        clac.div()

    with raises(InvalidArgument):
        clac.exec(broken)
    assert clac.stack == (3,)
    assert len(clac.history) == 2


def test_caught_inner_failure_leaves_no_partial_change(loaded):
    clac = loaded(1, 2, 5)

    def composite():
        try:
            clac.dot()
        except TooFewArguments:
            pass
        clac.add()

    clac.exec(composite)
    assert clac.stack == (7, 1)
    clac.undo()
    assert clac.stack == (5, 2, 1)


def test_undo_all_then_redo_all(loaded):
    clac = loaded()
    commands = [lambda: clac.push(3), lambda: clac.push(4), clac.add,
                clac.dup, clac.mul]
    for command in commands:
        command()
    assert clac.stack == (49,)
    for _ in commands:
        clac.undo()
    assert clac.stack == ()
    for _ in commands:
        clac.redo()
    assert clac.stack == (49,)


def test_new_command_after_undo_discards_redo():
    engine = Engine()
    engine.push(1)
    engine.push(2)
    engine.undo()
    engine.push(3)
    assert engine.stack == (3, 1)
    with raises(NoMoreChanges):
        engine.redo()
    assert engine.stack == (3, 1)


def test_undo_past_start():
    engine = Engine()
    with raises(NoMoreChanges):
        engine.undo()
    engine.push(1)
    assert engine.undo() is Outcome.SKIPPED
    with raises(NoMoreChanges):
        engine.undo()


def test_failed_command_adds_no_history(loaded):
    clac = loaded(1)
    with raises(TooFewArguments):
        clac.add()
    assert len(clac.history) == 2
    clac.undo()
    assert clac.stack == ()


def test_disabling_history_collapses_it():
    engine = Engine()
    engine.push(1)
    engine.push(2)
    engine.enable_history(False)
    assert len(engine.history) == 1
    assert engine.stack == (2, 1)
    engine.push(3)
    assert len(engine.history) == 1
    assert engine.stack == (3, 2, 1)
    with raises(NoMoreChanges):
        engine.undo()


def test_reenabling_history():
    engine = Engine(history=False)
    engine.push(1)
    engine.enable_history()
    engine.push(2)
    engine.undo()
    assert engine.stack == (1,)


def test_reset():
    engine = Engine()
    engine.push(1)
    engine.push(2)
    assert engine.reset() is Outcome.SKIPPED
    assert engine.stack == ()
    assert len(engine.history) == 1
    with raises(NoMoreChanges):
        engine.undo()


def test_push_parses_text():
    engine = Engine()
    engine.push('0x10')
    engine.push('1.5')
    assert engine.stack[0] * 2 == 3
    assert engine.stack[1] == 16
    with raises(InvalidArgument):
        engine.push('abc')
    assert len(engine.stack) == 2


def test_pop():
    engine = Engine()
    engine.push(7)
    engine.push(8)
    assert engine.pop() == 8
    assert engine.stack == (7,)
    engine.undo()
    assert engine.stack == (8, 7)


def test_pop_empty():
    engine = Engine()
    with raises(TooFewArguments):
        engine.pop()
    assert len(engine.history) == 1


def test_clear():
    engine = Engine()
    assert engine.clear() is Outcome.SKIPPED
    assert len(engine.history) == 1
    engine.push(1)
    engine.push(2)
    assert engine.clear() is Outcome.COMMITTED
    assert engine.stack == ()
    engine.undo()
    assert engine.stack == (2, 1)


def test_depth():
    engine = Engine()
    engine.push(5)
    engine.push(5)
    engine.depth()
    assert engine.stack == (2, 5, 5)


def test_stack_is_read_only_copy():
    engine = Engine()
    engine.push(1)
    stack = engine.stack
    engine.push(2)
    assert stack == (1,)
