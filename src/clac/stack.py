from .util import InvalidArgument, TooFewArguments


class Stack:
    '''
    Stack of values, addressed from the top.

    Index 0 is the most recently pushed value (x), index 1 the one below it
    (y), and so on. Every primitive validates its range before touching
    anything, so a failing call leaves the stack as it was.
    '''

    def __init__(self, values=()):
        '''
        Create stack holding values, topmost first.
        '''
        self.values = list(values)

    def __len__(self):
        return len(self.values)

    def __iter__(self):
        return iter(self.values)

    def __getitem__(self, index):
        return self.values[index]

    def __eq__(self, other):
        if isinstance(other, Stack):
            return self.values == other.values
        try:
            return self.values == list(other)
        except TypeError:
            return NotImplemented

    def __repr__(self):
        return '{}({!r})'.format(type(self).__name__, self.values)

    def snapshot(self):
        '''
        Return an immutable copy, topmost first.
        '''
        return tuple(self.values)

    def check_range(self, pos, count, end_ok=False):
        '''
        Return inclusive (start, end) of count values from index pos.

        :param end_ok: Allow the range to touch one past the bottom, for
                       inserting below the last value.
        '''
        limit = len(self.values) + 1 if end_ok else len(self.values)
        start, end = pos, pos + count - 1
        if start < 0 or start > end:
            raise InvalidArgument()
        if start >= limit or end >= limit:
            raise TooFewArguments()
        return start, end

    def insert(self, values, pos):
        '''
        Splice values in at index pos, keeping their order.
        '''
        start, _ = self.check_range(pos, 1, end_ok=True)
        self.values[start:start] = values

    def remove(self, pos, count):
        '''
        Remove and return count values from index pos, topmost first.
        '''
        start, end = self.check_range(pos, count)
        removed = self.values[start:end + 1]
        del self.values[start:end + 1]
        return removed

    def peek(self, pos, count):
        '''
        Return count values from index pos without removing them.
        '''
        start, end = self.check_range(pos, count)
        return self.values[start:end + 1]

    def push(self, value):
        self.insert([value], 0)

    def pop(self):
        try:
            return self.remove(0, 1)[0]
        except (InvalidArgument, TooFewArguments):
            raise TooFewArguments() from None

    def dup(self, pos, count):
        '''
        Copy count values from index pos onto the top.
        '''
        self.insert(self.peek(pos, count), 0)

    def drop(self, pos, count):
        self.remove(pos, count)

    def rotate(self, pos, count, down):
        '''
        Move a block of count values between the top and index pos.

        Down brings the block at pos to the top; up sends the top block down
        so that it ends at pos.
        '''
        source, target = pos, 0
        if not down:
            source, target = 0, pos - count + 1
        # Validate the target against the stack as it will be once the block
        # is out, so that nothing is removed unless it can go back in.
        self.check_range(source, count)
        if not 0 <= target <= len(self.values) - count:
            raise InvalidArgument() if target < 0 else TooFewArguments()
        self.insert(self.remove(source, count), target)

    def clear(self):
        del self.values[:]
