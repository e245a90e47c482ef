import logging


logger = logging.getLogger(__name__)


class History:
    '''
    Linear undo/redo history of stack snapshots.

    Never empty: starts out holding a single empty stack. The cursor selects
    the current snapshot; undo and redo only move the cursor. Committing after
    an undo throws away everything that could have been redone.
    '''

    def __init__(self, snapshot=()):
        self.snapshots = [tuple(snapshot)]
        self.cursor = 0

    def __len__(self):
        return len(self.snapshots)

    def snapshot(self):
        '''
        Return the snapshot at the cursor.
        '''
        return self.snapshots[self.cursor]

    def commit(self, snapshot, retain=True):
        '''
        Record snapshot as the current state.

        :param retain: Append after the cursor, discarding the redoable tail.
                       Otherwise overwrite the snapshot at the cursor in place.
        '''
        snapshot = tuple(snapshot)
        if retain:
            del self.snapshots[self.cursor + 1:]
            self.snapshots.append(snapshot)
            self.cursor += 1
        else:
            self.snapshots[self.cursor] = snapshot
        logger.debug('committed %d value(s) at %d/%d', len(snapshot),
                     self.cursor, len(self.snapshots) - 1)

    def can_undo(self):
        return self.cursor > 0

    def can_redo(self):
        return self.cursor < len(self.snapshots) - 1

    def undo(self):
        '''
        Step back one snapshot. Return False if already at the oldest.
        '''
        if not self.can_undo():
            return False
        self.cursor -= 1
        return True

    def redo(self):
        '''
        Step forward one snapshot. Return False if already at the newest.
        '''
        if not self.can_redo():
            return False
        self.cursor += 1
        return True
