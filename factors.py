"""
Factorization value type: a sparse mapping from prime to exponent.
"""
from typing import Iterable, Iterator, Mapping


class Factorization:
    """
    Prime -> exponent mapping with multiplicative operations.

    Iteration order is insertion order, so a factorization built by walking
    a factor base keeps the factor base's order. Zero exponents are never
    stored; get() reports 0 for absent primes.
    """

    __slots__ = ("_powers",)

    def __init__(self, powers: Mapping[int, int] | None = None):
        self._powers: dict[int, int] = {}
        if powers:
            for p, k in powers.items():
                self.set(p, k)

    @classmethod
    def from_factors(cls, factors: Iterable[int]) -> "Factorization":
        """Build from a flat list of prime factors with repetition, e.g. [2, 2, 3]."""
        f = cls()
        for p in factors:
            f.set(p, f.get(p) + 1)
        return f

    def get(self, p: int) -> int:
        return self._powers.get(p, 0)

    def set(self, p: int, k: int) -> None:
        if p < 2:
            raise ValueError(f"factor {p} is not a valid prime")
        if k < 0:
            raise ValueError(f"negative exponent {k} for factor {p}")
        if k == 0:
            self._powers.pop(p, None)
        else:
            self._powers[p] = k

    def __mul__(self, other: "Factorization") -> "Factorization":
        if not isinstance(other, Factorization):
            return NotImplemented
        result = Factorization(self._powers)
        for p, k in other._powers.items():
            result._powers[p] = result._powers.get(p, 0) + k
        return result

    def sqrt(self) -> "Factorization":
        """
        Halve every exponent.

        Raises:
            ValueError: if any exponent is odd (not a perfect square)
        """
        odd = [p for p, k in self._powers.items() if k & 1]
        if odd:
            raise ValueError(f"not a perfect square: odd exponent for {odd}")
        return Factorization({p: k >> 1 for p, k in self._powers.items()})

    def product(self, modulus: int | None = None) -> int:
        """Reconstruct the integer value, reduced mod modulus if given."""
        result = 1
        if modulus is None:
            for p, k in self._powers.items():
                result *= p ** k
            return result
        for p, k in self._powers.items():
            result = result * pow(p, k, modulus) % modulus
        return result

    def is_one(self) -> bool:
        return not self._powers

    def primes(self) -> list[int]:
        return list(self._powers)

    def items(self) -> Iterator[tuple[int, int]]:
        return iter(self._powers.items())

    def __iter__(self) -> Iterator[tuple[int, int]]:
        return self.items()

    def __len__(self) -> int:
        return len(self._powers)

    def __eq__(self, other) -> bool:
        if not isinstance(other, Factorization):
            return NotImplemented
        return self._powers == other._powers

    def __repr__(self) -> str:
        inner = ", ".join(f"{p}: {k}" for p, k in self._powers.items())
        return f"Factorization({{{inner}}})"
