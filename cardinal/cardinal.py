#!/usr/bin/env python
from __future__ import annotations
import sys
import os
import argparse
import csv
import gzip
import warnings
from multiprocessing import Pool
from typing import Dict, Iterator, List, Optional, Tuple
import numpy as np # type: ignore
from cardinal.lib.errors import HLLError, describe_error
from cardinal.lib.hashing import HashFunction, hash_string, integer_hash, xxhash_function
from cardinal.lib.hyperloglog import HyperLogLog, MIN_PRECISION, MAX_PRECISION

HASH_CHOICES = ['djb2', 'xxhash', 'jenkins']

def make_hash_function(name: str, seed: int = 0, hash_size: int = 32) -> HashFunction:
    """Resolve a hash function by its command line name.

    Args:
        name: One of 'djb2', 'xxhash' or 'jenkins'
        seed: Seed for xxhash (ignored by the others)
        hash_size: Size of hash in bits; djb2 and jenkins only produce 32 bits

    Returns:
        Callable (element, length) -> int
    """
    if name == 'xxhash':
        return xxhash_function(seed=seed, hash_size=hash_size)
    if hash_size != 32:
        raise ValueError(f"The {name} hash only produces 32-bit values")
    if name == 'djb2':
        return hash_string
    if name == 'jenkins':
        return integer_hash
    raise ValueError(f"Unknown hash function: {name}")

def read_lines(filepath: str) -> Iterator[str]:
    """Yield the lines of a plain or gzipped text file without line endings."""
    opener = gzip.open if filepath.endswith(".gz") else open
    with opener(filepath, "rt") as f:
        for line in f:
            yield line.rstrip("\r\n")

def process_file(filepath: str, precision: int = 10, hash_name: str = 'djb2',
                 hash_size: int = 32, seed: int = 0) -> Tuple[str, np.ndarray]:
    """Sketch the distinct lines of one file.

    Jenkins hashing treats each non-blank line as an integer.

    Returns:
        Tuple of (filepath, register array)
    """
    hash_function = make_hash_function(hash_name, seed=seed, hash_size=hash_size)
    sketch = HyperLogLog(precision=precision, hash_function=hash_function, hash_size=hash_size)
    for lineno, line in enumerate(read_lines(filepath), start=1):
        if hash_name == 'jenkins':
            if not line.strip():
                continue
            try:
                value = int(line)
            except ValueError:
                raise ValueError(f"{filepath}:{lineno}: expected an integer, got {line!r}") from None
            sketch.add_int(value)
        else:
            sketch.add_string(line)
    return filepath, sketch.registers

def sketch_files(filepaths: List[str], precision: int = 10, hash_name: str = 'djb2',
                 hash_size: int = 32, seed: int = 0, threads: Optional[int] = None,
                 debug: bool = False) -> Dict[str, HyperLogLog]:
    """Build one sketch per file, in a process pool when threads > 1."""
    hash_function = make_hash_function(hash_name, seed=seed, hash_size=hash_size)
    pool_args = [(path, precision, hash_name, hash_size, seed) for path in filepaths]
    if threads is not None and threads > 1 and len(filepaths) > 1:
        with Pool(min(threads, len(filepaths))) as pool:
            results = pool.starmap(process_file, pool_args)
    else:
        results = [process_file(*args) for args in pool_args]

    sketches = {}
    for path, registers in results:
        sketch = HyperLogLog(precision=precision, hash_function=hash_function,
                             hash_size=hash_size, debug=debug)
        sketch.registers[:] = registers
        sketches[path] = sketch
    return sketches

def union_of(sketches: Dict[str, HyperLogLog], strict: bool = False) -> HyperLogLog:
    """Merge all sketches into a fresh one."""
    first = next(iter(sketches.values()))
    union = HyperLogLog(precision=first.precision, hash_function=first.hash_function,
                        hash_size=first.hash_size, debug=first.debug)
    for sketch in sketches.values():
        union.merge(sketch, strict=strict)
    return union

def write_results(rows: List[Dict[str, object]], outprefix: str) -> str:
    """Write result rows to <outprefix>_cardinality.csv and return the path."""
    outfile = f"{outprefix}_cardinality.csv"
    with open(outfile, "w", newline="") as f:
        writer = csv.DictWriter(f, fieldnames=['file', 'estimate', 'precision', 'hash'])
        writer.writeheader()
        writer.writerows(rows)
    return outfile

def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    arg_parser = argparse.ArgumentParser(
        description="""Estimate the number of distinct lines in each input file and in
        their union using HyperLogLog sketches.

        Files ending in .gz are decompressed on the fly.
        """,
        formatter_class=argparse.RawDescriptionHelpFormatter
    )
    arg_parser.add_argument('files', nargs='+', help='Text files to sketch, one element per line')
    arg_parser.add_argument('--outprefix', '-o', '--out', type=str, default="cardinal", help='The output file prefix')
    arg_parser.add_argument("--precision", "-p", type=int, default=10,
                            help=f"Precision for HyperLogLog sketching ({MIN_PRECISION}-{MAX_PRECISION})")
    arg_parser.add_argument("--hash", choices=HASH_CHOICES, default='djb2', dest='hash_name',
                            help="Hash function (jenkins expects one integer per line)")
    arg_parser.add_argument('--hashsize', type=int, default=32, choices=[32, 64],
                            help='Hash size in bits (32 or 64, default: 32)', dest='hash_size')
    arg_parser.add_argument("--seed", type=int, default=42, help="Random seed for xxhash")
    arg_parser.add_argument("--threads", type=int, default=None, help="Number of processes to use")
    arg_parser.add_argument("--strict-merge", action="store_true",
                            help="Fail instead of warning when merging sketches of different precision")
    arg_parser.add_argument("--debug", action="store_true", help="Enable debug mode")
    return arg_parser.parse_args(argv)

def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for cardinal."""
    args = parse_args(argv)

    if args.precision < 8:
        warnings.warn(f"Precision {args.precision} gives a standard error above 6%. "
                      "This may reduce accuracy.", RuntimeWarning)

    files = list(dict.fromkeys(args.files))
    if len(files) < len(args.files):
        warnings.warn("Ignoring repeated input paths; each file is sketched once.", RuntimeWarning)

    missing = [path for path in files if not os.path.exists(path)]
    if missing:
        for path in missing:
            print(f"Error: File {path} does not exist", file=sys.stderr)
        return 2

    try:
        sketches = sketch_files(files, precision=args.precision, hash_name=args.hash_name,
                                hash_size=args.hash_size, seed=args.seed,
                                threads=args.threads, debug=args.debug)
        union = union_of(sketches, strict=args.strict_merge)
    except HLLError as e:
        print(f"Error: {describe_error(e)}: {e}", file=sys.stderr)
        return 1
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    rows = []
    for path, sketch in sketches.items():
        rows.append({'file': path, 'estimate': sketch.estimate_cardinality(),
                     'precision': args.precision, 'hash': args.hash_name})
    rows.append({'file': 'UNION', 'estimate': union.estimate_cardinality(),
                 'precision': args.precision, 'hash': args.hash_name})

    for row in rows:
        print(f"{row['file']}\t{row['estimate']}")
    outfile = write_results(rows, args.outprefix)
    print(f"Results written to {outfile}")
    return 0

if __name__ == "__main__":
    sys.exit(main())
