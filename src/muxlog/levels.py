"""
Level registry — maps level names to prime tags.

Every defined level gets a tag drawn from the successive primes
(2, 3, 5, 7, ...). Because tags are pairwise coprime, a sink's set of
accepted levels can be stored as the product of their tags (see accept.py).

Tag assignments:
    debug   2   reserved, always defined, never undefined
    <next>  3   first level defined after debug
    ...         each definition takes the next prime

Undefining a level frees its tag. The level holding the largest tag is
moved onto the freed tag, so the live tags always stay the first k primes
and tag magnitude does not grow as levels churn.
"""

from typing import Dict, Iterable, List, Optional, Tuple


DEBUG = 'debug'            # Reserved level, also receives unknown levels
DEBUG_TAG = 2              # Smallest prime, always bound to DEBUG
UNKNOWN_TAG = 1            # Sentinel: level name is not defined

DEFAULT_LEVELS = ('error', 'info')


def is_prime(n: int) -> bool:
    """Trial division primality test."""
    if n < 2:
        return False
    i = 2
    while i * i <= n:
        if n % i == 0:
            return False
        i += 1
    return True


def next_prime(p: int) -> int:
    """Return the smallest prime strictly greater than p."""
    q = p + 1
    while not is_prime(q):
        q += 1
    return q


class LevelRegistry:
    """Bijection between live level names and prime tags.

    The registry only manages names and tags. Keeping sink subscriptions
    consistent on undefine is the caller's job: undefine() reports which
    tag was freed and which tag (if any) was moved onto it.

    Usage::

        reg = LevelRegistry()
        reg.define(['info', 'error'])     # info=3, error=5
        reg.lookup('error')               # 5
        reg.lookup('nope')                # 1 (UNKNOWN_TAG)
        reg.undefine('info')              # (3, 5): error moves to 3
    """

    def __init__(self):
        self._tags: Dict[str, int] = {DEBUG: DEBUG_TAG}
        self._largest = DEBUG_TAG

    def define(self, names: Iterable) -> List:
        """Bind each new string name to the next prime tag.

        Names already defined keep their tag.

        Returns:
            The entries that were rejected because they are not strings.
        """
        rejected = []
        for name in names:
            if not isinstance(name, str):
                rejected.append(name)
                continue
            if name in self._tags:
                continue
            self._largest = next_prime(self._largest)
            self._tags[name] = self._largest
        return rejected

    def undefine(self, name: str) -> Optional[Tuple[int, Optional[int]]]:
        """Remove a level and compact the tag space.

        The names holding the two largest tags are located first. If the
        removed name held the largest tag, the allocation counter simply
        rolls back to the second largest. Otherwise the largest-tag name
        is rebound to the freed tag.

        Args:
            name: Level to remove. DEBUG and unknown names are ignored.

        Returns:
            None if nothing was removed, else ``(freed, moved)`` where
            ``freed`` is the removed level's tag and ``moved`` is the old
            tag of the level rebound onto ``freed`` (None when no level
            was moved).
        """
        if name == DEBUG or not isinstance(name, str) or name not in self._tags:
            return None

        freed = self._tags[name]
        ranked = self.names()
        top = ranked[-1]
        moved = self._tags[top]

        # Live tags stay the first k primes: new largest = old runner-up.
        del self._tags[name]
        self._largest = self._tags[ranked[-2]] if ranked[-2] != name else freed

        if top == name:
            return freed, None

        self._tags[top] = freed
        return freed, moved

    def lookup(self, name) -> int:
        """Return the tag bound to name, or UNKNOWN_TAG."""
        if not isinstance(name, str):
            return UNKNOWN_TAG
        return self._tags.get(name, UNKNOWN_TAG)

    def names(self) -> List[str]:
        """Defined level names in tag order."""
        return sorted(self._tags, key=self._tags.__getitem__)

    def items(self) -> List[Tuple[str, int]]:
        """(name, tag) pairs in tag order."""
        return [(n, self._tags[n]) for n in self.names()]

    @property
    def largest_tag(self) -> int:
        """The most recently allocated (largest live) tag."""
        return self._largest

    def __contains__(self, name) -> bool:
        return isinstance(name, str) and name in self._tags

    def __len__(self) -> int:
        return len(self._tags)
