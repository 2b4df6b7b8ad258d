_PUSH, _POP = 'push', 'pop'


class Stack:
    """
    A LIFO list of spans with nested snapshots.

    `snapshot` opens a transaction, `restore` undoes every push and pop made
    since the most recent snapshot, and `clear_snapshot` commits it. Snapshots
    must be resolved in the reverse order of their creation.
    """

    def __init__(self, items=()):
        self._items = list(items)
        # Operations made while at least one snapshot is open, for undoing.
        self._ops = []
        self._snapshots = []

    def __len__(self):
        return len(self._items)

    def __iter__(self):
        return iter(self._items)

    def __getitem__(self, index):
        return self._items[index]

    def __repr__(self):
        return f'Stack({self._items!r})'

    def is_empty(self):
        return not self._items

    def push(self, item):
        self._items.append(item)
        if self._snapshots:
            self._ops.append((_PUSH, item))

    def pop(self):
        if not self._items:
            return None
        item = self._items.pop()
        if self._snapshots:
            self._ops.append((_POP, item))
        return item

    def peek(self):
        return self._items[-1] if self._items else None

    def clear(self):
        while self._items:
            self.pop()

    def slice(self, start, end=None):
        """
        Returns the items in ``[start, end)``, counted from the top.

        Index 0 is the most recently pushed item and ``end=None`` means
        "through the bottom". Negative indexes count back from the bottom, the
        way Python sequence indexes do. Returns ``None`` when an index falls
        outside of the stack.
        """
        size = len(self._items)
        start = _normalize_index(start, size)
        end = size if end is None else _normalize_index(end, size)
        if start is None or end is None:
            return None
        if end <= start:
            return []
        top_down = self._items[::-1]
        return top_down[start:end]

    def snapshot(self):
        self._snapshots.append(len(self._ops))

    def restore(self):
        if not self._snapshots:
            raise IndexError('restore() called without a matching snapshot()')
        mark = self._snapshots.pop()
        for op, item in reversed(self._ops[mark:]):
            if op is _PUSH:
                self._items.pop()
            else:
                self._items.append(item)
        del self._ops[mark:]

    def clear_snapshot(self):
        if not self._snapshots:
            raise IndexError('clear_snapshot() called without a matching snapshot()')
        self._snapshots.pop()
        # Keep the log while an enclosing snapshot may still need to undo it.
        if not self._snapshots:
            self._ops.clear()


def _normalize_index(index, size):
    if index > size:
        return None
    if index >= 0:
        return index
    index += size
    return index if index >= 0 else None
