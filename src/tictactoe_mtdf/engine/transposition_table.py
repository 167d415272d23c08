"""
Transposition table for caching MTD(f) search bounds.

MTD(f) calls the alpha-beta search many times with null windows on the same
tree, so almost every node is visited repeatedly. Caching the bounds proven
for each position lets later passes cut off immediately.

Key concepts:
- Each entry is a (lower_bound, upper_bound) pair on the position's value
- Entries are keyed by the 64-bit Zobrist hash only: two different positions
  sharing a hash share an entry. Collisions are accepted, not detected.
- Entries come from a node pool that is rewound, not freed, between searches
"""

from typing import Optional

# Score range. The extremes double as +/- infinity for search windows.
MAX_SCORE = 2 ** 62
MIN_SCORE = -MAX_SCORE


class SearchBound:
    """Proven bounds on the minimax value of one position."""

    __slots__ = ('lower_bound', 'upper_bound')

    def __init__(self):
        self.lower_bound = MIN_SCORE
        self.upper_bound = MAX_SCORE

    def __repr__(self):
        return f"SearchBound({self.lower_bound}, {self.upper_bound})"

    def reset(self):
        self.lower_bound = MIN_SCORE
        self.upper_bound = MAX_SCORE


class NodePool:
    """
    Freelist of reusable ``SearchBound`` records.

    ``obtain`` hands out records up to a high-water mark and allocates new
    ones past it; ``release_all`` rewinds the mark to zero so the next search
    reuses every record allocated so far.
    """

    def __init__(self):
        self._nodes: list[SearchBound] = []
        self._head = 0

    def obtain(self) -> SearchBound:
        """Return a record reset to (MIN_SCORE, MAX_SCORE)."""
        if self._head >= len(self._nodes):
            node = SearchBound()
            self._nodes.append(node)
        else:
            node = self._nodes[self._head]
            node.reset()
        self._head += 1
        return node

    def release_all(self):
        """Make every allocated record available again without freeing it."""
        self._head = 0

    @property
    def allocated(self) -> int:
        return len(self._nodes)

    @property
    def in_use(self) -> int:
        return self._head


class TranspositionTable:
    """
    Map from position hash to ``SearchBound``.

    Populated only by the nested search; the MTD(f) driver and the root search
    never write to it.
    """

    def __init__(self, pool: Optional[NodePool] = None):
        """
        Args:
            pool: Node pool to draw entries from (a private one if omitted)
        """
        self.pool = pool if pool is not None else NodePool()
        self._entries: dict[int, SearchBound] = {}

        # Statistics
        self.hits = 0
        self.misses = 0
        self.stores = 0

    def __len__(self):
        return len(self._entries)

    def __contains__(self, zobrist_hash: int) -> bool:
        return zobrist_hash in self._entries

    def probe(self, zobrist_hash: int) -> Optional[SearchBound]:
        """Return the cached bounds for ``zobrist_hash``, if any."""
        entry = self._entries.get(zobrist_hash)
        if entry is None:
            self.misses += 1
        else:
            self.hits += 1
        return entry

    def obtain(self, zobrist_hash: int) -> SearchBound:
        """Return the entry for ``zobrist_hash``, creating it from the pool if missing."""
        entry = self._entries.get(zobrist_hash)
        if entry is None:
            entry = self.pool.obtain()
            self._entries[zobrist_hash] = entry
            self.stores += 1
        return entry

    def clear(self):
        """Drop all entries and rewind the pool (use at the end of each search)."""
        self._entries.clear()
        self.pool.release_all()
        self._reset_stats()

    def _reset_stats(self):
        self.hits = 0
        self.misses = 0
        self.stores = 0

    def get_stats(self) -> dict:
        """
        Get transposition table statistics.

        Returns:
            Dictionary with hits, misses, hit rate, stores and current size
        """
        total_queries = self.hits + self.misses
        hit_rate = self.hits / total_queries if total_queries > 0 else 0.0

        return {
            'hits': self.hits,
            'misses': self.misses,
            'hit_rate': hit_rate,
            'stores': self.stores,
            'size_entries': len(self._entries),
        }
