"""
Phone-number alphabet, validation and symbol-wise comparison helpers.

A *number* is a non-empty string over twelve symbols: the digits `0`-`9` plus
`*` and `#`. Every trie in this package is 12-ary and indexes its children by
the dense code returned from `encode`.

Conventions & Notes
-------------------
- **Valid-symbol runs:** comparisons (`are_equal`, `is_prefix_of`) only look at
  the leading run of valid symbols of each argument, so they are safe to call
  on unchecked input; use `is_number` when the *whole* string must be valid.
- **Ordering:** `sort_key` orders by encoded value, not by character code, so
  `*` and `#` sort after `9`.
- All functions are pure; the tables below are never mutated.
"""

ALPHABET = "0123456789*#"
NUM_SYMBOLS = len(ALPHABET)

STAR_CODE = 10
HASH_CODE = 11

_CODES = {ch: i for i, ch in enumerate(ALPHABET)}


def is_valid_symbol(ch):
  """Return True for '0'-'9', '*' and '#'."""
  return isinstance(ch, str) and ch in _CODES


def encode(ch):
  """Map a symbol to its child index in [0, 11].

  Raises
  ------
  KeyError
      If `ch` is not a valid symbol. Callers validate first.
  """
  return _CODES[ch]


def number_length(s):
  """Length of the leading run of valid symbols in `s`."""
  n = 0
  for ch in s:
    if ch not in _CODES:
      break
    n += 1
  return n


def is_number(s):
  """True iff `s` is a non-empty str made only of valid symbols."""
  if not isinstance(s, str) or not s:
    return False
  return number_length(s) == len(s)


def are_equal(a, b):
  la, lb = number_length(a), number_length(b)
  return la == lb and a[:la] == b[:lb]


def is_prefix_of(prefix, full):
  """True iff the valid run of `prefix` is a prefix of the valid run of `full`."""
  lp, lf = number_length(prefix), number_length(full)
  return lp <= lf and full[:lp] == prefix[:lp]


def are_suitable_for_rewrite(a, b):
  """Both arguments are numbers and they differ (no rewriting to itself)."""
  return is_number(a) and is_number(b) and a != b


def sort_key(number):
  return tuple(_CODES[ch] for ch in number[:number_length(number)])


def splice(number, new_prefix, replaced_len):
  """Replace the first `replaced_len` symbols of `number` with `new_prefix`."""
  return new_prefix + number[replaced_len:]
