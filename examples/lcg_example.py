#!/usr/bin/env python3
"""
Count distinct values of a pseudo random integer stream.

A linear congruential generator produces 3000 values, each reduced modulo
5000 and hashed with Bob Jenkins' integer hash. The exact number of distinct
values is tracked alongside for comparison.
"""

from cardinal import HyperLogLog, integer_hash

# LCG parameters (a, c, m)
MAGIC1 = 1664525
MAGIC2 = 1013904223
MAGIC3 = 1 << 31

MAX_NUMBER = 5000
MAX_ITERATIONS = 3000

def lcg(seed):
    return (MAGIC1 * seed + MAGIC2) % MAGIC3

def main():
    hll = HyperLogLog(precision=10, hash_function=integer_hash)

    unique_numbers = set()
    random_value = lcg(6969)
    for _ in range(MAX_ITERATIONS):
        value = random_value % MAX_NUMBER
        unique_numbers.add(value)
        hll.add_int(value)
        random_value = lcg(random_value)

    estimate = hll.estimate_cardinality()
    print(f"Expected: {len(unique_numbers)}")
    print(f"Estimate: {estimate}")

    hll.release()

if __name__ == "__main__":
    main()
