from pytest import Item, fixture

from clac import Clac, NumericEngine


def pytest_assertion_pass(item: Item,
                          lineno: int,
                          orig: str,
                          expl: str) -> None:
    '''
    Log every assertion, in case we later need to audit a run.

    Use with pytest -rP and enable_assertion_pass_hook = true.
    '''
    print('given', item.name + ':' + str(lineno), str(orig))  # no repr()!
    print('actual', item.name + ':' + str(lineno),
          '\n'.join(str(expl).splitlines()[:-2]))


@fixture
def loaded():
    '''
    Factory for calculators with values pushed in order, last on top.
    '''
    def load(*values, fmt=None):
        clac = Clac(numeric=NumericEngine(fmt))
        for value in values:
            clac.push(value)
        return clac
    return load
