"""
AcceptSet — the set of levels a sink listens to.

The set is stored as a single integer: the product of the prime tags of
the accepted levels. With pairwise coprime tags this is exact:

    accepts(tag)   value % tag == 0
    add(tag)       value *= tag     (only if not already a factor)
    remove(tag)    value //= tag    (only if a factor)

An empty set has value 1. Level names that are not defined resolve to
UNKNOWN_TAG; such messages are accepted only by sets that accept debug.
"""

from typing import Iterable, List

from .levels import DEBUG, UNKNOWN_TAG, LevelRegistry


class AcceptSet:
    """Product-of-primes encoding of accepted level tags."""

    __slots__ = ('value',)

    def __init__(self, value: int = 1):
        self.value = value

    @classmethod
    def build(cls, level_names: Iterable[str],
              registry: LevelRegistry) -> 'AcceptSet':
        """Build a set from level names.

        Undefined names are skipped and repeated names count once.
        """
        accept = cls()
        for name in level_names:
            accept.add(name, registry)
        return accept

    # -------------------------------------------------------------------------
    # Tag-level operations
    # -------------------------------------------------------------------------
    def has_tag(self, tag: int) -> bool:
        return self.value % tag == 0

    def add_tag(self, tag: int) -> None:
        if tag > UNKNOWN_TAG and not self.has_tag(tag):
            self.value *= tag

    def discard_tag(self, tag: int) -> None:
        if tag > UNKNOWN_TAG and self.has_tag(tag):
            self.value //= tag

    def retag(self, old: int, new: int) -> None:
        """Move membership of tag ``old`` onto tag ``new``.

        Used when the registry rebinds a level to a freed tag. Membership
        of every other tag is left as it was.
        """
        if self.has_tag(old):
            self.value //= old
            self.add_tag(new)

    # -------------------------------------------------------------------------
    # Level-name operations
    # -------------------------------------------------------------------------
    def accepts(self, level, registry: LevelRegistry) -> bool:
        """True if a message at ``level`` should be written.

        Unknown levels fall through to the debug subscription.
        """
        tag = registry.lookup(level)
        if tag == UNKNOWN_TAG:
            tag = registry.lookup(DEBUG)
        return self.has_tag(tag)

    def add(self, level, registry: LevelRegistry) -> None:
        self.add_tag(registry.lookup(level))

    def remove(self, level, registry: LevelRegistry) -> None:
        self.discard_tag(registry.lookup(level))

    def levels(self, registry: LevelRegistry) -> List[str]:
        """Names of the defined levels in this set, in tag order."""
        return [name for name, tag in registry.items() if self.has_tag(tag)]

    def __eq__(self, other):
        if not isinstance(other, AcceptSet):
            return NotImplemented
        return self.value == other.value

    def __repr__(self):
        return f"AcceptSet({self.value})"
