"""combine(strict=True): catching producers of different lengths.

Demonstrates: combine, LengthMismatchError, bounded reads from a generator
Output: two rows, then "argument 2 is too short"
"""

import itertools

from zipstrict import LengthMismatchError, combine

ids = itertools.count(1)
names = ["ada", "grace"]

try:
    for row in combine(ids, names, strict=True):
        print(row)
except LengthMismatchError as e:
    print(f"mismatch at argument {e.position}: {e}")

# Only one id past the shortest input was consumed.
print("next id:", next(ids))
