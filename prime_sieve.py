"""
Prime generation for the visual side of the demo.

generate_primes() yields primes forever by trial division against the primes
found so far; consumers pull as many as they want. PrimeWindow keeps only the
most recent primes so a long running display does not grow without bound.
"""

from collections import deque
from itertools import islice

import numpy as np

# Number of primes kept for display
DEFAULT_WINDOW = 1000


def generate_primes():
    """Yield 2, 3, 5, 7, ... indefinitely."""
    found = []
    num = 2
    while True:
        is_prime = True
        for p in found:
            if p * p > num:
                break
            if num % p == 0:
                is_prime = False
                break
        if is_prime:
            found.append(num)
            yield num
        num += 1


def take_primes(count):
    """The first count primes as a list."""
    if count < 0:
        raise ValueError(f"count must be non-negative, got {count}")
    return list(islice(generate_primes(), count))


def primes_up_to(limit):
    """Generate all primes up to limit using the Sieve of Eratosthenes."""
    if limit < 2:
        return []

    sieve = np.ones(limit + 1, dtype=bool)
    sieve[:2] = False

    for i in range(2, int(limit ** 0.5) + 1):
        if sieve[i]:
            sieve[i * i::i] = False

    return np.flatnonzero(sieve).tolist()


def prime_gaps(primes):
    """Differences between consecutive primes."""
    if len(primes) < 2:
        return []
    return np.diff(np.asarray(primes, dtype=np.int64)).tolist()


class PrimeWindow:
    """
    Bounded view over a prime stream.

    Pulls primes from a source iterator on demand and retains at most maxlen
    of them, together with their 1-based index in the full sequence.
    """

    def __init__(self, source=None, maxlen=DEFAULT_WINDOW):
        if maxlen < 1:
            raise ValueError(f"maxlen must be positive, got {maxlen}")
        self._source = source if source is not None else generate_primes()
        self._primes = deque(maxlen=maxlen)
        self.count = 0

    def advance(self, steps=1):
        """Pull the next steps primes from the source; returns them."""
        fresh = list(islice(self._source, steps))
        self._primes.extend(fresh)
        self.count += len(fresh)
        return fresh

    @property
    def primes(self):
        return list(self._primes)

    @property
    def first_index(self):
        """1-based index of the oldest prime still in the window."""
        return self.count - len(self._primes) + 1

    def labels(self):
        """'index: prime' labels for the retained primes."""
        start = self.first_index
        return [f"{start + i}: {p}" for i, p in enumerate(self._primes)]

    def gaps(self):
        return prime_gaps(self.primes)

    def __len__(self):
        return len(self._primes)
