from bisect import bisect_left, bisect_right


class OutOfOrderAppendError(ValueError):
    """Raised when an appended item would break the sort order."""


def _identity(item):
    return item


class SortedList:
    """
    A list-backed sequence that is always kept in sorted order.

    Inserts and searches use a binary search over the sort keys and finish in
    O(log n) comparisons; removals additionally shift the backing list.
    Elements with equal keys keep their insertion order.
    """

    def __init__(self, iterable=None, key=None):
        """
        Parameters
        ----------
        iterable : iterable, optional
            Initial elements. Another SortedList is copied shallowly and keeps
            its key function unless one is given.
        key : callable, optional
            Maps an element to its sort key. Defaults to the element itself.
        """
        if isinstance(iterable, SortedList):
            self._key = key or iterable._key
            self._items = list(iterable._items)
            return

        self._key = key or _identity
        self._items = []
        if iterable is not None:
            for item in iterable:
                self.add(item)

    def copy(self) -> "SortedList":
        """Shallow copy: independent positions, shared element references."""
        return SortedList(self)

    def __len__(self) -> int:
        return len(self._items)

    def __getitem__(self, position):
        return self._items[position]

    def __iter__(self):
        return iter(self._items)

    def __contains__(self, item) -> bool:
        position = self.index_of(item)
        return position < len(self._items) and self._items[position] == item

    def is_empty(self) -> bool:
        return not self._items

    def clear(self) -> None:
        self._items.clear()

    def _compare_equal(self, a, b) -> bool:
        key_a, key_b = self._key(a), self._key(b)
        return not (key_a < key_b or key_b < key_a)

    def add(self, item) -> int:
        """Insert an item at its sorted position and return that position."""
        position = bisect_right(self._items, self._key(item), key=self._key)
        self._items.insert(position, item)
        return position

    def append(self, item) -> None:
        """
        Append an item to the end of the list in O(1).

        The item must not sort before the current last item; use add() for
        arbitrary inserts.
        """
        if self._items and self._key(item) < self._key(self._items[-1]):
            raise OutOfOrderAppendError("Appended item less than last item")
        self._items.append(item)

    def index_of(self, item) -> int:
        """First position of an element equal to item, or where it would go."""
        return bisect_left(self._items, self._key(item), key=self._key)

    def last_index_of(self, item) -> int:
        """
        Last position of an element equal to item.

        If no element compares equal, returns the position where item would be
        inserted, like index_of().
        """
        position = self.index_of(item)
        while position + 1 < len(self._items) and self._compare_equal(item, self._items[position + 1]):
            position += 1
        return position

    def remove(self, item) -> bool:
        """Remove an item, returning False if it is not in the list."""
        position = self.index_of(item)
        while position < len(self._items) and self._compare_equal(item, self._items[position]):
            if self._items[position] == item:
                del self._items[position]
                return True
            position += 1
        return False

    def pop(self, position: int = -1):
        """Remove and return the element at the given position."""
        return self._items.pop(position)

    def format(self, first: int, last: int) -> str:
        """Render the elements between two positions (both inclusive)."""
        return "{" + ", ".join(str(item) for item in self._items[first:last + 1]) + "}"

    def __str__(self) -> str:
        return self.format(0, len(self._items) - 1)

    def __repr__(self) -> str:
        return f"SortedList({self._items!r})"
