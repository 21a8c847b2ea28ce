import random

from daily_guesser.errors import InvalidSampleSize


def sample(pool, k, seed):
    """Draw k items from pool without replacement.

    The generator is private to the call, so the same (pool, k, seed) always
    gives the same items in the same order.
    """
    remaining = list(pool)
    if k < 0 or k > len(remaining):
        raise InvalidSampleSize(k, len(remaining))

    rng = random.Random(str(seed))
    picked = []
    while len(picked) < k:
        picked.append(remaining.pop(rng.randrange(len(remaining))))
    return picked
