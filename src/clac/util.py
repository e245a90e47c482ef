from functools import wraps


class ClacError(Exception):
    '''
    Base of every error the calculator core raises.
    '''
    pass


class TooFewArguments(ClacError):
    def __init__(self, message='too few arguments'):
        super().__init__(message)


class InvalidArgument(ClacError):
    def __init__(self, message='invalid argument'):
        super().__init__(message)


class OutOfRange(ClacError):
    def __init__(self, message='argument out of range'):
        super().__init__(message)


class NoMoreChanges(ClacError):
    def __init__(self, message='no more changes'):
        super().__init__(message)


class EvaluationError(ClacError):
    pass


def wrap_numeric_errors(fmt):
    '''
    Decorator converting stray exceptions into ClacErrors.

    Passes through ClacErrors. fmt is formatted with the wrapped call's
    arguments and used as the message.
    '''
    def decorator(f):
        @wraps(f)
        def wrapper(*args, **kwargs):
            try:
                return f(*args, **kwargs)
            except ClacError:
                raise
            except (ZeroDivisionError, ValueError, TypeError) as e:
                raise InvalidArgument(fmt.format(*args, **kwargs)) from e
            except OverflowError as e:
                raise OutOfRange(fmt.format(*args, **kwargs)) from e
            except Exception as e:
                raise EvaluationError(fmt.format(*args, **kwargs)) from e
        return wrapper
    return decorator
