#! /usr/bin/env python3
"""Cache simulator: replays a valgrind trace and reports hits, misses and
evictions for an LRU set associative cache."""
import argparse
import logging
import sys

from csim.cache import Cache
from csim.trace import replayFile

RESULTS_FILE = ".csim_results"

EXAMPLES = """\
Examples:
  linux>  %(prog)s -s 4 -E 1 -b 4 -t traces/yi.trace
  linux>  %(prog)s -v -s 8 -E 2 -b 4 -t traces/yi.trace
"""


def printSummary(hits, misses, evictions, resultsFile=RESULTS_FILE):
    """Print the statistics and write them to `resultsFile` as `hits misses evictions`."""
    print("hits:%d misses:%d evictions:%d" % (hits, misses, evictions))
    if resultsFile:
        with open(resultsFile, "w") as f:
            f.write("%d %d %d\n" % (hits, misses, evictions))


def buildParser():
    parser = argparse.ArgumentParser(prog="csim", description=__doc__, epilog=EXAMPLES,
                                     formatter_class=argparse.RawDescriptionHelpFormatter)
    parser.add_argument("-v", dest="verbose", action="store_true", help="Optional verbose flag.")
    parser.add_argument("-s", dest="setBits", type=int, metavar="<num>", help="Number of set index bits.")
    parser.add_argument("-E", dest="associativity", type=int, metavar="<num>", help="Number of lines per set.")
    parser.add_argument("-b", dest="blockBits", type=int, metavar="<num>", help="Number of block offset bits.")
    parser.add_argument("-t", dest="trace", metavar="<file>", help="Trace file.")
    parser.add_argument("-o", "--results", default=RESULTS_FILE, metavar="<file>",
                        help="Where to write the results (default %s)." % RESULTS_FILE)
    return parser


def main(argv=None):
    parser = buildParser()
    args = parser.parse_args(argv)

    logging.basicConfig(format="%(message)s", level=logging.INFO if args.verbose else logging.WARNING)

    if not args.setBits or not args.associativity or not args.blockBits or args.trace is None:
        print("%s: Missing required command line argument" % parser.prog, file=sys.stderr)
        parser.print_help(sys.stderr)
        return 1

    try:
        cache = Cache(setBits=args.setBits, associativity=args.associativity, blockBits=args.blockBits)
    except ValueError as e:
        print("%s: %s" % (parser.prog, e), file=sys.stderr)
        return 1

    try:
        replayFile(cache, args.trace)
    except OSError as e:
        print("%s: cannot read trace %s: %s" % (parser.prog, args.trace, e.strerror or e), file=sys.stderr)
        return 1

    printSummary(*cache.summary(), resultsFile=args.results)
    return 0


if __name__ == '__main__':
    sys.exit(main())
