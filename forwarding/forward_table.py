"""
Phone-number forwarding table: prefix rewrite rules with inverse lookup.

A rule `add(P, Q)` means "every number starting with P is reported as if P were
replaced by Q". The table keeps two tries in lockstep:

- **forward** - keyed by the source prefix P; the node for P holds `[Q]`.
- **reverse** - keyed by the target Q; the node for Q holds every source prefix
  currently rewritten to Q.

Mirror invariant: the forward node for P holds `[Q]` if and only if the reverse
node for Q lists P. Every public mutation either completes with the invariant
intact or, when an allocation fails (`MemoryError`), leaves both tries exactly
as they were before the call.

Public API
----------
- `ForwardTable.add(num_from, num_to) -> bool`
- `ForwardTable.remove(prefix) -> None`
- `ForwardTable.get(number) -> NumberList | None`
- `ForwardTable.reverse(number) -> NumberList | None`
- `ForwardTable.clear()`
- Handle-style wrappers at module level (`create`, `destroy`, `add`, `remove`,
  `get`, `reverse`, `size`, `at`, `destroy_sequence`) that accept a `None` table.

Invalid input never raises: `add` returns False, `remove` does nothing and
`get` / `reverse` return an empty `NumberList`. `None` is returned by `get` /
`reverse` only when an allocation failed.
"""

import logging

from forwarding import symbols
from forwarding.number_list import NumberList
from forwarding.number_trie import NumberTrie

logger = logging.getLogger(__name__)


class ForwardTable:
  __slots__ = ("forward_index", "reverse_index")

  def __init__(self):
    self.forward_index = NumberTrie()
    self.reverse_index = NumberTrie()

  # ------------------------------------------------------------------
  # Mutations
  # ------------------------------------------------------------------

  def add(self, num_from, num_to):
    """Install (or overwrite) the rule `num_from -> num_to`.

    Every fallible step (path creation on both sides, building the new forward
    payload, appending the reverse mirror) runs before any existing entry is
    touched, so a failure only has to undo what this call created. The stale
    mirror of an overwritten rule is removed last; removal cannot fail.

    Returns
    -------
    bool
        False for invalid numbers, `num_from == num_to`, or allocation failure.
    """
    if not symbols.are_suitable_for_rewrite(num_from, num_to):
      return False

    node, undo_forward = self.forward_index.get_or_create_path(num_from)
    if node is None:
      return False

    overwritten = None
    if node.numbers is not None and len(node.numbers) > 0:
      overwritten = node.numbers[0]

    payload = _single(num_to)
    if payload is None:
      self.forward_index.rollback(undo_forward)
      return False

    mirror, undo_reverse = self.reverse_index.get_or_create_path(num_to)
    if mirror is None:
      self.forward_index.rollback(undo_forward)
      return False

    if not _append_mirror(mirror, num_from):
      self.reverse_index.rollback(undo_reverse)
      self.forward_index.rollback(undo_forward)
      return False

    node.numbers = payload
    if overwritten is not None:
      self._remove_reverse_entry(overwritten, num_from)
    return True

  def remove(self, prefix):
    """Remove every rule whose source starts with `prefix`.

    No-op when `prefix` is not a number or no forward path exists for it.
    """
    if not symbols.is_number(prefix):
      return
    found = self.forward_index.find_with_prune_point(prefix)
    if found is None:
      return

    _, cut_parent, cut_digit = found
    subtree = self.forward_index.detach(cut_parent, cut_digit)

    def unmirror(numbers):
      self._remove_reverse_with_prefix(numbers[0], prefix)

    self.forward_index.delete_path(subtree, cleanup=unmirror)
    logger.debug("Removed forwarding subtree for prefix %r", prefix)

  def clear(self):
    """Delete both tries completely; the table is empty afterwards."""
    self.forward_index.clear()
    self.reverse_index.clear()

  # ------------------------------------------------------------------
  # Queries
  # ------------------------------------------------------------------

  def get(self, number):
    """Rewrite `number` using the longest matching rule prefix.

    Returns a one-element `NumberList` (the number itself when no rule
    matches), an empty one for invalid input, or None on allocation failure.
    """
    try:
      result = NumberList()
      if not symbols.is_number(number):
        return result
      target, matched = self.forward_index.find_longest_payload_prefix(number)
      if target is None:
        value = number
      else:
        value = symbols.splice(number, target[0], matched)
      if not result.append(value):
        return None
    except MemoryError:
      logger.warning("Out of memory while forwarding %r", number)
      return None
    return result

  def reverse(self, number):
    """Return every number that the current rules map onto `number`.

    For each prefix of `number` that is the target of some rules, every source
    prefix of those rules, followed by the rest of `number`, is a candidate.
    `number` itself is always included. The result is sorted symbol-wise and
    holds no duplicates.
    """
    try:
      result = NumberList()
      if not symbols.is_number(number):
        return result
      for depth, sources in self.reverse_index.walk_payloads(number):
        for source in sources:
          if not result.append(symbols.splice(number, source, depth)):
            return None
      if not result.append(number):
        return None
      result.sort()
      result.dedup()
    except MemoryError:
      logger.warning("Out of memory while reversing %r", number)
      return None
    return result

  def count_nodes(self):
    """Return `(forward_nodes, reverse_nodes)`, roots included."""
    return self.forward_index.count_nodes(), self.reverse_index.count_nodes()

  def is_empty(self):
    return self.forward_index.is_empty() and self.reverse_index.is_empty()

  # ------------------------------------------------------------------
  # Reverse-trie maintenance
  # ------------------------------------------------------------------

  def _remove_reverse_entry(self, target, source):
    self.reverse_index.discard(target, lambda numbers: numbers.remove_value(source))

  def _remove_reverse_with_prefix(self, target, prefix):
    self.reverse_index.discard(target, lambda numbers: numbers.remove_all_with_prefix(prefix))


def _single(number):
  """A fresh one-element payload, or None if it could not be allocated."""
  try:
    payload = NumberList()
  except MemoryError:
    return None
  if not payload.append(number):
    return None
  return payload


def _append_mirror(node, source):
  """Append `source` to `node`'s payload, creating the payload if needed.

  On failure a payload created here is dropped again and False is returned.
  """
  created = node.numbers is None
  try:
    if created:
      node.numbers = NumberList()
    appended = node.numbers.append(source)
  except MemoryError:
    appended = False
  if appended:
    return True
  logger.warning("Out of memory while mirroring %r", source)
  if created:
    node.numbers = None
  return False


# ----------------------------------------------------------------------
# Handle-style API
# ----------------------------------------------------------------------

def create():
  return ForwardTable()


def destroy(table):
  if table is not None:
    table.clear()


def add(table, num_from, num_to):
  if table is None:
    return False
  return table.add(num_from, num_to)


def remove(table, prefix):
  if table is not None:
    table.remove(prefix)


def get(table, number):
  if table is None:
    return None
  return table.get(number)


def reverse(table, number):
  if table is None:
    return None
  return table.reverse(number)


def size(seq):
  return 0 if seq is None else seq.size()


def at(seq, idx):
  """Number at `idx` in a result sequence, or None when absent/out of range."""
  return None if seq is None else seq.at(idx)


def destroy_sequence(seq):
  """Release a result sequence's entries."""
  if seq is not None:
    seq.clear()
