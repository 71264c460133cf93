#! /usr/bin/env python
"""Replay valgrind (lackey) memory traces against a Cache.

Trace lines look like::

    I 0400d7d4,8
     L 7ff0005b8,8
     S 7ff0005c8,8
     M 0421c7f0,4

Instruction fetches (I) are ignored, only the data cache is simulated. A
modify (M) is a load followed by a store to the same address, so it is two
accesses: two hits, or a miss (maybe with an eviction) and then a hit.
"""
import logging
import re

log = logging.getLogger(__name__)

HEX = re.compile(r"[0-9a-fA-F]+\Z")
DEC = re.compile(r"[0-9]+\Z")

LOAD = "L"
STORE = "S"
MODIFY = "M"
INSTRUCTION = "I"

DATA_OPS = (LOAD, STORE, MODIFY)


def parseRecord(line):
    """Parse one trace line into (op, address, size).

    Returns None if the line is not of the form `op address,size`, with a
    single letter op, a hex address and a decimal size.
    """
    fields = line.split(None, 1)
    if len(fields) != 2 or len(fields[0]) != 1:
        return None
    op = fields[0]
    addr, sep, size = fields[1].partition(',')
    addr, size = addr.strip(), size.strip()
    if not sep or not HEX.match(addr) or not DEC.match(size):
        return None
    return op, int(addr, 16), int(size)


def replay(cache, source):
    """Feed every data access in `source` to `cache`.

    Parameters
    ----------

    cache (Cache):
        The cache to drive.
    source (iterable of str):
        Trace lines, e.g. an open file.

    Returns the number of data records (L, S, M) that were applied. The size
    field of a record is ignored, every access is assumed to fit in a block.
    """
    applied = 0
    for i, line in enumerate(source):
        record = parseRecord(line)
        if record is None:
            if line.strip():
                log.debug("skipping malformed trace line %d: %r", i + 1, line)
            continue
        op, address, size = record
        if op not in DATA_OPS:
            continue

        results = [cache.access(address)]
        if op == MODIFY:
            results.append(cache.access(address))
        applied += 1

        log.info("%s %x,%d %s", op, address, size, ' '.join(results))
    return applied


def replayFile(cache, path):
    """Replay the trace file at `path`. OSError propagates to the caller."""
    # undecodable bytes become U+FFFD so the line is skipped as malformed
    with open(path, errors="replace") as f:
        return replay(cache, f)
