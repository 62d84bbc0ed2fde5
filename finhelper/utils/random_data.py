"""
Seeded random data for fixtures and demo seeding.

Usage:
    rnd = RandomData(seed=42)
    rnd.username()   -> "qwhzkb"
    rnd.amount()     -> 512
"""
import random
import string

CURRENCIES = ("USD", "EUR", "RUB")


class RandomData:
    """Each instance owns its generator; the same seed gives the same sequence."""

    def __init__(self, seed: int | None = None):
        self.seed = seed
        self._rng = random.Random(seed)

    def integer(self, low: int, high: int) -> int:
        """Random integer in [low, high]"""
        return self._rng.randint(low, high)

    def word(self, n: int) -> str:
        return "".join(self._rng.choice(string.ascii_lowercase) for _ in range(n))

    def username(self) -> str:
        return self.word(6)

    def email(self) -> str:
        return f"{self.word(6)}@example.com"

    def password(self) -> str:
        return self.word(8)

    def amount(self) -> int:
        return self.integer(100, 1000)

    def currency(self) -> str:
        return self._rng.choice(CURRENCIES)
