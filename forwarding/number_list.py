"""
Growable, ordered sequence of phone numbers.

`NumberList` serves two roles:
- the **payload** of a trie node (exactly one entry in the forward trie, any
  number of source prefixes in the reverse trie), and
- the **result sequence** returned by `ForwardTable.get` / `ForwardTable.reverse`.

Storage is a slot array whose `capacity` doubles when `size` reaches it, so the
two are tracked separately. Growth is the only step that allocates; if it fails
the list is left exactly as it was.

Complexity
----------
- append: amortized O(1)
- remove_value: O(n) (order preserving shift)
- remove_all_with_prefix: O(n * L) (swap-with-last, order not preserved)
- sort: O(n log n * L); dedup: O(n)
"""

from forwarding import symbols


class NumberList:
  __slots__ = ("_items", "_size", "_capacity")

  def __init__(self, numbers=()):
    self._items = [None]
    self._size = 0
    self._capacity = 1
    for number in numbers:
      if not self.append(number):
        raise MemoryError("could not build NumberList")

  def _grow(self):
    """Double the capacity; return False (and change nothing) on MemoryError."""
    try:
      self._items.extend([None] * self._capacity)
    except MemoryError:
      return False
    self._capacity *= 2
    return True

  def append(self, number):
    """Append `number`; return False if growing the storage failed.

    On failure the list is unchanged and `number` is still the caller's to keep
    or discard.
    """
    if self._size == self._capacity and not self._grow():
      return False
    self._items[self._size] = number
    self._size += 1
    return True

  def remove_value(self, number):
    """Remove the first element equal to `number`, keeping order.

    Returns
    -------
    bool
        True if the list is empty afterwards; the owner should drop it.
    """
    for i in range(self._size):
      if symbols.are_equal(self._items[i], number):
        last = self._size - 1
        self._items[i:last] = self._items[i + 1:self._size]
        self._items[last] = None
        self._size = last
        break
    return self._size == 0

  def remove_all_with_prefix(self, prefix):
    """Remove every element starting with `prefix` (swap-with-last compaction).

    Order of the survivors is not preserved. Returns True if the list is empty
    afterwards.
    """
    i = 0
    while i < self._size:
      if symbols.is_prefix_of(prefix, self._items[i]):
        last = self._size - 1
        self._items[i] = self._items[last]
        self._items[last] = None
        self._size = last
      else:
        i += 1
    return self._size == 0

  def sort(self):
    """Sort symbol-wise ('*' and '#' after '9')."""
    head = sorted(self._items[:self._size], key=symbols.sort_key)
    self._items[:self._size] = head

  def dedup(self):
    """Drop adjacent duplicates. Only meaningful right after `sort`."""
    if self._size < 2:
      return
    write = 1
    for read in range(1, self._size):
      if not symbols.are_equal(self._items[read], self._items[write - 1]):
        self._items[write] = self._items[read]
        write += 1
    for i in range(write, self._size):
      self._items[i] = None
    self._size = write

  def clear(self):
    """Drop every element and shrink back to the initial capacity."""
    self._items = [None]
    self._size = 0
    self._capacity = 1

  # ------------------------------------------------------------------
  # Sequence accessors
  # ------------------------------------------------------------------

  def size(self):
    return self._size

  @property
  def capacity(self):
    return self._capacity

  def at(self, idx):
    """Return the number at `idx`, or None when `idx` is out of range."""
    if isinstance(idx, bool) or not isinstance(idx, int):
      return None
    if idx < 0 or idx >= self._size:
      return None
    return self._items[idx]

  def to_list(self):
    return self._items[:self._size]

  def __len__(self):
    return self._size

  def __getitem__(self, idx):
    if idx < 0:
      idx += self._size
    if idx < 0 or idx >= self._size:
      raise IndexError("NumberList index out of range")
    return self._items[idx]

  def __iter__(self):
    return iter(self._items[:self._size])

  def __eq__(self, other):
    if isinstance(other, NumberList):
      return self.to_list() == other.to_list()
    if isinstance(other, list):
      return self.to_list() == other
    return NotImplemented

  __hash__ = None

  def __repr__(self):
    return f"NumberList({self.to_list()!r})"
