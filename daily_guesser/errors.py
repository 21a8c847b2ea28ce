class GuesserError(Exception):
    """Base class for every error raised by the guesser engine."""


class UnknownCountry(GuesserError, KeyError):
    def __init__(self, code):
        self.code = code
        super().__init__(code)

    def __str__(self):
        return f"Country {self.code!r} not found"


class InvalidSampleSize(GuesserError, ValueError):
    def __init__(self, k, pool_size):
        self.k = k
        self.pool_size = pool_size
        super().__init__(f"Cannot sample {k} items from a pool of {pool_size}")


class CatalogError(GuesserError, ValueError):
    """Static country data is malformed."""


class GameOver(GuesserError):
    """A guess was made after the day's game had already finished."""


class DuplicateGuess(GuesserError):
    def __init__(self, code):
        self.code = code
        super().__init__(f"Country {code!r} was already guessed")
