"""
12-ary trie over phone-number symbols with undoable path creation and
iterative, pruning deletion.

One `NumberTrie` class backs both sides of a `ForwardTable`: the forward trie
(prefix -> single rewrite target) and the reverse trie (target -> source
prefixes). Payloads are `NumberList` objects hung on nodes; the trie itself does
not interpret them.

Key design choices:
- **Memory efficiency:** `TrieNode` uses `__slots__` and a *lazy* child array
  (`children=None` until the first child is attached, reset to None when the
  last child is detached).
- **Navigation-only parents:** `parent` is used solely to walk back up during
  deletion. The deletion walk clears the parent of the node it starts from, so
  it cannot climb out of the subtree it was asked to delete.
- **Iterative traversals:** creation, search and deletion are loops, never
  recursion, so arbitrarily long numbers are safe.
- **Undo records:** `get_or_create_path` reports the first node it attached
  (and where), which is all that is needed to undo the whole call.


Classes
-------
TrieNode
    `children` (None | list of 12 slots), `numbers` (payload) and `parent`.
UndoRecord
    `(parent, digit, node)` of the first node created by a path creation.
NumberTrie
    Path creation/rollback, deletion, prune-point search and lookups.


Complexity (typical)
--------------------
- get_or_create_path / find_node / find_longest_payload_prefix: O(L)
- delete_path: O(nodes_in_subtree * 12)
- count_nodes: O(#nodes)


Conventions & Notes
-------------------
- Numbers passed in are assumed valid; `ForwardTable` validates at its boundary.
- A node with no payload and no children is dead weight. `discard` and the
  facade's removals prune such nodes immediately.
"""

import logging

from forwarding import symbols
from forwarding.symbols import NUM_SYMBOLS

logger = logging.getLogger(__name__)


class TrieNode:
  __slots__ = ("children", "numbers", "parent")

  def __init__(self, parent=None):
    self.children = None
    self.numbers = None
    self.parent = parent

  def child(self, digit):
    children = self.children
    return None if children is None else children[digit]

  def set_child(self, digit, node):
    """Attach `node` under `digit`; `node=None` detaches the slot."""
    if self.children is None:
      if node is None:
        return
      self.children = [None] * NUM_SYMBOLS
    self.children[digit] = node
    if node is None and not any(self.children):
      self.children = None

  def first_child(self):
    children = self.children
    if children is None:
      return None
    for c in children:
      if c is not None:
        return c
    return None


def count_children(node):
  """Number of occupied child slots of `node`."""
  children = node.children
  if children is None:
    return 0
  return sum(1 for c in children if c is not None)


class UndoRecord:
  __slots__ = ("parent", "digit", "node")

  def __init__(self, parent=None, digit=-1, node=None):
    self.parent = parent
    self.digit = digit
    self.node = node

  @classmethod
  def empty(cls):
    return cls()

  def is_empty(self):
    return self.node is None


class NumberTrie:
  __slots__ = ("root", )

  def __init__(self):
    self.root = TrieNode()

  def get_or_create_path(self, number):
    """Return the node for `number`, creating missing nodes on the way.

    Returns
    -------
    tuple[TrieNode | None, UndoRecord]
        `(end_node, undo)`. `undo` names the first node this call attached;
        it is empty when the whole path already existed.
        `(None, UndoRecord.empty())` if a node allocation raised MemoryError;
        in that case every node created by this call has already been removed.
    """
    node = self.root
    undo = UndoRecord.empty()
    try:
      for ch in number:
        digit = symbols.encode(ch)
        nxt = node.child(digit)
        if nxt is None:
          nxt = TrieNode(node)
          node.set_child(digit, nxt)
          if undo.is_empty():
            undo = UndoRecord(node, digit, nxt)
        node = nxt
    except MemoryError:
      logger.warning("Out of memory while creating path for %r; rolling back", number)
      self.rollback(undo)
      return None, UndoRecord.empty()
    return node, undo

  def rollback(self, undo):
    """Sever and delete everything recorded by `undo`. No-op when empty."""
    if undo.is_empty():
      return
    logger.debug("Rolling back path created under digit %d", undo.digit)
    undo.parent.set_child(undo.digit, None)
    self.delete_path(undo.node)

  def delete_path(self, node, cleanup=None):
    """Delete the subtree rooted at `node`, `node` included, bottom-up.

    Repeatedly descends to a leaf, discards it, detaches it from its parent and
    continues from the parent, until the starting node itself is discarded.
    The caller detaches `node` from its own parent beforehand (see `detach`);
    when `node` is the root, the root object survives as an empty node.

    Parameters
    ----------
    node : TrieNode | None
    cleanup : Callable[[NumberList], None] | None
        Called with the payload of every deleted node that carries one, before
        the payload is dropped.
    """
    if node is None:
      return
    node.parent = None
    current = node

    while current is not None:
      nxt = current.first_child()
      if nxt is not None:
        current = nxt
        continue

      payload = current.numbers
      current.numbers = None
      if cleanup is not None and payload is not None and len(payload) > 0:
        cleanup(payload)

      parent = current.parent
      if parent is None:
        break
      for digit, c in enumerate(parent.children):
        if c is current:
          parent.set_child(digit, None)
          break
      current.parent = None
      current = parent

  def detach(self, parent, digit):
    """Cut `parent`'s child slot `digit` and return the detached node."""
    node = parent.child(digit)
    parent.set_child(digit, None)
    if node is not None:
      node.parent = None
    return node

  def find_node(self, number):
    """Return the node at the end of `number`'s path, or None if it is missing."""
    node = self.root
    for ch in number:
      node = node.child(symbols.encode(ch))
      if node is None:
        return None
    return node

  def find_with_prune_point(self, number):
    """Walk `number` and find the highest point that can be cut for it.

    The cut point is the child slot below the deepest ancestor that has a
    payload or more than one child; when no ancestor qualifies it is the
    root's slot. Cutting there removes the path to `number` together with
    exactly those ancestors that would otherwise be left as dead weight.

    Returns
    -------
    tuple[TrieNode, TrieNode, int] | None
        `(node, cut_parent, cut_digit)`, or None if the path is absent.
    """
    node = self.root
    cut_parent, cut_digit = None, -1
    for ch in number:
      digit = symbols.encode(ch)
      nxt = node.child(digit)
      if nxt is None:
        return None
      if cut_parent is None or node.numbers is not None or count_children(node) > 1:
        cut_parent, cut_digit = node, digit
      node = nxt
    return node, cut_parent, cut_digit

  def discard(self, number, remove):
    """Shrink the payload at `number` and prune the path if it became dead.

    `remove(numbers)` mutates the payload and returns True once it is empty.
    Does nothing if the path or the payload is absent.
    """
    found = self.find_with_prune_point(number)
    if found is None:
      return
    node, cut_parent, cut_digit = found
    if node.numbers is None:
      return
    if remove(node.numbers):
      node.numbers = None
    if node.numbers is None and node.children is None and cut_parent is not None:
      self.delete_path(self.detach(cut_parent, cut_digit))

  def find_longest_payload_prefix(self, number):
    """Return `(numbers, matched_len)` for the deepest payload on `number`'s path.

    `(None, 0)` when no node along the path carries a payload.
    """
    node = self.root
    best, best_len = None, 0
    for i, ch in enumerate(number):
      node = node.child(symbols.encode(ch))
      if node is None:
        break
      if node.numbers is not None and len(node.numbers) > 0:
        best, best_len = node.numbers, i + 1
    return best, best_len

  def walk_payloads(self, number):
    """Yield `(depth, numbers)` for every payload-carrying node on the path."""
    node = self.root
    for i, ch in enumerate(number):
      node = node.child(symbols.encode(ch))
      if node is None:
        return
      if node.numbers is not None and len(node.numbers) > 0:
        yield i + 1, node.numbers

  def clear(self):
    """Delete every node below the root."""
    self.delete_path(self.root)

  def is_empty(self):
    return self.root.children is None and self.root.numbers is None

  def count_nodes(self, get_avg_branch_factor=False):
    """Return total node count, or average branching factor over internal nodes.

    Parameters
    ----------
    get_avg_branch_factor : bool, default=False
        If True, return `sum(children) / (# internal nodes)` instead.

    Complexity
    ----------
    O(#nodes) time, O(depth * 12) extra space.
    """
    total_nodes = 0
    internal = 0
    total_deg = 0

    stack = [self.root]
    while stack:
      node = stack.pop()
      total_nodes += 1
      children = node.children
      if children:
        kids = [c for c in children if c is not None]
        total_deg += len(kids)
        internal += 1
        stack.extend(kids)
    if get_avg_branch_factor:
      return (total_deg / internal) if internal else 0.0
    return total_nodes
