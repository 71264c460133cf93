#! /usr/bin/env python
import logging

log = logging.getLogger(__name__)

HIT = "hit"
MISS = "miss"
MISS_EVICTION = "miss eviction"


def decodeAddress(address, setBits, blockBits):
    """Split an address into (tag, setIndex, offset).

    Parameters
    ----------

    address (int):
        The raw (unsigned) memory address.
    setBits (int):
        Number of set index bits, `s`.
    blockBits (int):
        Number of block offset bits, `b`.
    """
    if address < 0:
        raise ValueError("address must be non-negative, got %d" % address)
    offset = address % (1 << blockBits)
    setIndex = (address >> blockBits) % (1 << setBits)
    tag = address >> (setBits + blockBits)
    return tag, setIndex, offset


class CacheLine:


    def __init__(self):
        self.tag = 0
        self.valid = False
        self.lastAccess = 0

    def __repr__(self):
        return "CacheLine(tag=%#x, valid=%s, lastAccess=%d)" % (self.tag, self.valid, self.lastAccess)


class CacheSet:
    """One set of an associative cache, `associativity` lines ordered by way."""

    def __init__(self, associativity):
        self.lines = [CacheLine() for i in range(associativity)]

    def __len__(self):
        return len(self.lines)

    def __iter__(self):
        return iter(self.lines)

    def __getitem__(self, way):
        return self.lines[way]

    def find(self, tag):
        """Return the way holding a valid line for `tag`, or None."""
        for i, line in enumerate(self.lines):
            if line.valid and line.tag == tag:
                return i
        return None

    def victim(self):
        """Select the way to fill on a miss.

        Returns (way, evicts). The first invalid way is used if there is one,
        otherwise the way with the smallest lastAccess (lowest way on ties)
        and `evicts` is True.
        """
        for i, line in enumerate(self.lines):
            if not line.valid:
                return i, False
        index = 0
        minAccess = self.lines[0].lastAccess
        for i, line in enumerate(self.lines):
            if line.lastAccess < minAccess:
                index = i
                minAccess = line.lastAccess
        return index, True

    def validTags(self):
        return [line.tag for line in self.lines if line.valid]


class Cache:


    def __init__(self, setBits=4, associativity=1, blockBits=4):
        """Single level set associative cache with LRU replacement.

        Only tag presence is modelled, there is no data and no write policy.

        Parameters
        ----------

        setBits (int):
            Number of set index bits, the cache has 2**setBits sets.
        associativity (int):
            Number of lines per set, 1 for direct mapped.
        blockBits (int):
            Number of block offset bits, blocks are 2**blockBits bytes.
        """
        if setBits < 0:
            raise ValueError("setBits must be non-negative, got %d" % setBits)
        if blockBits < 0:
            raise ValueError("blockBits must be non-negative, got %d" % blockBits)
        if associativity < 1:
            raise ValueError("associativity must be at least 1, got %d" % associativity)

        self.setBits = setBits
        self.blockBits = blockBits
        self.associativity = associativity

        self.nSets = 1 << self.setBits
        self.blockSize = 1 << self.blockBits

        self.sets = [CacheSet(self.associativity) for i in range(self.nSets)]

        # logical clock for LRU, never reset
        self.counter = 0

        self.hit = 0
        self.miss = 0
        self.eviction = 0

        log.debug("S:%d E:%d B:%d", self.nSets, self.associativity, self.blockSize)

    def decode(self, address):
        return decodeAddress(address, self.setBits, self.blockBits)

    def access(self, address):
        """Access a given address.

        Parameters
        ----------
        address (int):
            The address which is accessed. Accesses are assumed not to cross
            a block boundary, so only the block holding `address` is touched.

        Returns one of HIT, MISS or MISS_EVICTION.
        """
        tag, setIndex, offset = self.decode(address)
        cacheSet = self.sets[setIndex]

        way = cacheSet.find(tag)
        if way is not None:
            self.hit += 1
            self.accessDirect(setIndex, way)
            return HIT

        self.miss += 1
        way, evicts = cacheSet.victim()
        if evicts:
            self.eviction += 1
        line = cacheSet[way]
        line.tag = tag
        line.valid = True
        self.accessDirect(setIndex, way)
        return MISS_EVICTION if evicts else MISS

    def accessDirect(self, setIndex, way):
        self.counter += 1
        self.sets[setIndex][way].lastAccess = self.counter

    def summary(self):
        """(hits, misses, evictions) for the accesses so far."""
        return self.hit, self.miss, self.eviction
