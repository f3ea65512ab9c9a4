import logging
from dataclasses import dataclass

import numpy as np

log = logging.getLogger(__name__)

# Matrix cell type. Costs are integers, so the grid stays integral.
DTYPE = np.int64
DTYPE_MAX = int(np.iinfo(DTYPE).max)


class InvalidCostConfiguration(ValueError):
    """
    Raised when a cost model would let an optimal edit path swap the same
    character twice, or when a cost is negative.
    """


def _to_ords(s):
    """
    Helper to convert a sequence to a list of comparable symbols.
    'a' -> 97, '😊' -> 128522, b'a' -> 97, [x, y] -> [x, y]

    Strings become code points but other iterables are kept as-is, so a
    str never equals a list of one-character strings: ("ab", ["a", "b"])
    is at distance 2, not 0.
    """
    if s is None:
        raise TypeError("expected a sequence, got None")
    if isinstance(s, str):
        return [ord(c) for c in s]
    if isinstance(s, (bytes, bytearray)):
        return [b for b in s]
    return list(s)


def _check_cost(name, value):
    # bool is an int subclass
    if isinstance(value, bool) or not isinstance(value, (int, np.integer)):
        raise TypeError("%s must be an int, got %r" % (name, value))
    if value < 0:
        raise InvalidCostConfiguration("%s must be non-negative, got %d" % (name, value))
    return int(value)


@dataclass(frozen=True)
class CostModel:
    """
    Costs of the four edit operations.

    Two swaps of one character must never beat a delete followed by an
    insert (``2 * swap >= insert + delete``); that is what keeps the
    restricted recurrence O(n*m).
    """
    delete: int = 1
    insert: int = 1
    substitute: int = 1
    swap: int = 1

    def __post_init__(self):
        for name in ("delete", "insert", "substitute", "swap"):
            object.__setattr__(self, name, _check_cost(name, getattr(self, name)))
        if 2 * self.swap < self.insert + self.delete:
            raise InvalidCostConfiguration(
                "unsupported cost assignment: 2 * swap (%d) < insert (%d) + delete (%d)"
                % (2 * self.swap, self.insert, self.delete)
            )


DEFAULT_COSTS = CostModel()


class RestrictedDistanceEngine(object):
    """
    Damerau-Levenshtein distance with configurable operation costs.

    A swap applies when two symbols of the source appear in the target in
    reverse order; the symbols strictly between them are deleted from the
    source or inserted into the target at the usual price. No symbol takes
    part in more than one swap.

    :param delete_cost: cost of deleting a symbol from the source
    :param insert_cost: cost of inserting a symbol into the target
    :param substitute_cost: cost of replacing one symbol with another
    :param swap_cost: cost of exchanging two adjacent symbols
    """

    def __init__(self, delete_cost=1, insert_cost=1, substitute_cost=1, swap_cost=1):
        self.costs = CostModel(delete_cost, insert_cost, substitute_cost, swap_cost)
        log.debug("restricted engine configured with %s", self.costs)

    @classmethod
    def from_costs(cls, costs):
        """Build an engine from an existing :class:`CostModel`."""
        return cls(costs.delete, costs.insert, costs.substitute, costs.swap)

    def __repr__(self):
        c = self.costs
        return "%s(delete_cost=%d, insert_cost=%d, substitute_cost=%d, swap_cost=%d)" % (
            type(self).__name__, c.delete, c.insert, c.substitute, c.swap)

    def distance(self, str1, str2):
        """
        Minimum cost of turning ``str1`` into ``str2``.

        ``str1`` is always the source and ``str2`` the target; the result is
        only symmetric when the delete and insert costs are equal.
        """
        s1 = _to_ords(str1)
        s2 = _to_ords(str2)
        len1 = len(s1)
        len2 = len(s2)

        c_del = self.costs.delete
        c_ins = self.costs.insert
        c_sub = self.costs.substitute
        c_swap = self.costs.swap

        if len1 == 0 or len2 == 0:
            result = len2 * c_ins + len1 * c_del
            log.debug("restricted distance %d x %d -> %d", len1, len2, result)
            return result

        # No cell or candidate exceeds this; past int64 fall back to Python ints.
        bound = (len1 + len2 + 2) * max(c_del, c_ins, c_sub, c_swap)
        dtype = DTYPE if bound <= DTYPE_MAX else object

        # d[i, j] holds the cost for prefixes of length i + 1 and j + 1.
        d = np.zeros((len1, len2), dtype=dtype)

        if s1[0] != s2[0]:
            d[0, 0] = min(c_sub, c_del + c_ins)

        # da: last row of s1 holding each symbol
        da = {s1[0]: 0}

        # Logical column 0: delete everything but one symbol, which is
        # either matched, substituted or deleted and re-inserted.
        for i in range(1, len1):
            c_delete = d[i - 1, 0] + c_del
            c_insert = (i + 1) * c_del + c_ins
            c_match = i * c_del + (0 if s1[i] == s2[0] else c_sub)
            d[i, 0] = min(c_delete, c_insert, c_match)

        # Logical row 0, the same with insert and delete exchanged.
        for j in range(1, len2):
            c_delete = (j + 1) * c_ins + c_del
            c_insert = d[0, j - 1] + c_ins
            c_match = j * c_ins + (0 if s1[0] == s2[j] else c_sub)
            d[0, j] = min(c_delete, c_insert, c_match)

        for i in range(1, len1):
            char_i = s1[i]
            # Last column of s2 matching char_i, -1 if none so far
            db = 0 if char_i == s2[0] else -1

            for j in range(1, len2):
                char_j = s2[j]
                k = da.get(char_j)
                l = db

                c_delete = d[i - 1, j] + c_del
                c_insert = d[i, j - 1] + c_ins
                c_match = d[i - 1, j - 1]
                if char_i != char_j:
                    c_match += c_sub
                else:
                    db = j

                best = min(c_delete, c_insert, c_match)

                if k is not None and l != -1:
                    if k == 0 and l == 0:
                        pre_swap = 0
                    else:
                        pre_swap = d[max(0, k - 1), max(0, l - 1)]
                    c_trans = (pre_swap +
                               (i - k - 1) * c_del +
                               (j - l - 1) * c_ins +
                               c_swap)
                    best = min(best, c_trans)

                d[i, j] = best

            da[char_i] = i

        result = int(d[len1 - 1, len2 - 1])
        log.debug("restricted distance %d x %d -> %d", len1, len2, result)
        return result


class UnrestrictedDistanceEngine(object):
    """
    True Damerau-Levenshtein distance with unit costs.

    A symbol may take part in any number of swaps along the edit path,
    which makes the result a metric: it is symmetric and satisfies the
    triangle inequality.
    """

    def __repr__(self):
        return "%s()" % type(self).__name__

    @staticmethod
    def distance(str1, str2):
        """
        Fewest unit edits turning ``str1`` (the source) into ``str2``.
        """
        s1 = _to_ords(str1)
        s2 = _to_ords(str2)
        len1 = len(s1)
        len2 = len(s2)

        # Larger than any real distance; stands in for infinity
        max_possible = len1 + len2

        # da: every symbol of either side, last row of s1 holding it
        da = {}
        for c in s1:
            da.setdefault(c, 0)
        for c in s2:
            da.setdefault(c, 0)

        # Logical -1 -> NumPy 0, Logical 0 -> NumPy 1
        d = np.zeros((len1 + 2, len2 + 2), dtype=DTYPE)

        d[0, 0] = max_possible
        for i in range(len1 + 1):
            d[i + 1, 0] = max_possible
            d[i + 1, 1] = i
        for j in range(len2 + 1):
            d[0, j + 1] = max_possible
            d[1, j + 1] = j

        for i in range(1, len1 + 1):
            char_i = s1[i - 1]
            db = 0

            for j in range(1, len2 + 1):
                char_j = s2[j - 1]
                k = da[char_j]
                l = db

                if char_i == char_j:
                    cost = 0
                    db = j
                else:
                    cost = 1

                d[i + 1, j + 1] = min(
                    d[i, j] + cost,                             # substitution
                    d[i + 1, j] + 1,                            # insertion
                    d[i, j + 1] + 1,                            # deletion
                    d[k, l] + (i - k - 1) + 1 + (j - l - 1),    # transposition
                )

            da[char_i] = i

        result = int(d[len1 + 1, len2 + 1])
        log.debug("unrestricted distance %d x %d -> %d", len1, len2, result)
        return result


def restricted_distance(
    str1,
    str2,
    delete_cost=1,
    insert_cost=1,
    substitute_cost=1,
    swap_cost=1
):
    """
    Restricted Damerau-Levenshtein distance supporting full Unicode.

    Builds a throwaway :class:`RestrictedDistanceEngine`; keep an engine
    around instead when comparing many pairs with the same costs.
    """
    engine = RestrictedDistanceEngine(delete_cost, insert_cost, substitute_cost, swap_cost)
    return engine.distance(str1, str2)

rdl = restricted_distance


def unrestricted_distance(str1, str2):
    """
    True (metric) Damerau-Levenshtein distance supporting full Unicode.
    """
    return UnrestrictedDistanceEngine.distance(str1, str2)

dam_lev = unrestricted_distance
