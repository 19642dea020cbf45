"""
Bit matrix over GF(2) for finding square products of smooth values.

Each row pairs two bit vectors:
- elements: exponent parity of every factor-base prime (one column per prime)
- indices: which original rows have been XORed together to make this row

Row operations update both vectors together, so whenever a row's elements
become all zero its indices name exactly the original rows whose product
is a perfect square.

Storage is a pair of dense NumPy uint8 arrays; the row operations and the
row-echelon reduction are Numba JIT-compiled kernels.
"""
from dataclasses import dataclass
from typing import Iterable, Sequence

import numpy as np
from numba import njit

from factors import Factorization


# ============================================================================
# JIT KERNELS
# ============================================================================

@njit
def _swap_rows_kernel(elements: np.ndarray, indices: np.ndarray, i: int, j: int) -> None:
    """Swap rows i and j of both bit arrays."""
    if i == j:
        return
    for k in range(elements.shape[1]):
        tmp = elements[i, k]
        elements[i, k] = elements[j, k]
        elements[j, k] = tmp
    for k in range(indices.shape[1]):
        tmp = indices[i, k]
        indices[i, k] = indices[j, k]
        indices[j, k] = tmp


@njit
def _xor_rows_kernel(elements: np.ndarray, indices: np.ndarray, src: int, dest: int) -> None:
    """dest ^= src on both bit arrays."""
    for k in range(elements.shape[1]):
        elements[dest, k] = elements[dest, k] ^ elements[src, k]
    for k in range(indices.shape[1]):
        indices[dest, k] = indices[dest, k] ^ indices[src, k]


@njit
def _row_echelon_kernel(elements: np.ndarray, indices: np.ndarray) -> int:
    """
    In-place Gaussian elimination over GF(2) to row echelon form.

    Returns the number of pivot rows; every row at or after that position
    is all zero in elements.
    """
    nrows = elements.shape[0]
    ncols = elements.shape[1]
    target_row = 0

    for col in range(ncols):
        # Look for a leading 1 in this column
        for source_row in range(target_row, nrows):
            if elements[source_row, col] != 0:
                _swap_rows_kernel(elements, indices, source_row, target_row)

                # Clear the remaining 1s below it
                for other_row in range(source_row + 1, nrows):
                    if elements[other_row, col] != 0:
                        _xor_rows_kernel(elements, indices, target_row, other_row)

                target_row += 1
                break
        # invariant: rows >= target_row are zero in columns <= col

    return target_row


# ============================================================================
# ROW / MATRIX TYPES
# ============================================================================

@dataclass(frozen=True)
class BitRow:
    """Snapshot of one matrix row as sets of set-bit positions."""
    elements: frozenset[int]
    indices: frozenset[int]

    @classmethod
    def of(cls, elements: Iterable[int], indices: Iterable[int]) -> "BitRow":
        return cls(frozenset(elements), frozenset(indices))

    def is_all_zero(self) -> bool:
        return not self.elements

    def leading_column(self) -> int | None:
        return min(self.elements) if self.elements else None


class BitMatrix:
    """Dense GF(2) matrix with per-row contributing-index bookkeeping."""

    def __init__(self, elements: np.ndarray, indices: np.ndarray):
        if elements.ndim != 2 or indices.ndim != 2:
            raise ValueError("bit arrays must be two-dimensional")
        if elements.shape[0] != indices.shape[0]:
            raise ValueError(
                f"row count mismatch: {elements.shape[0]} elements rows, "
                f"{indices.shape[0]} indices rows"
            )
        self.elements = np.ascontiguousarray(elements, dtype=np.uint8)
        self.indices = np.ascontiguousarray(indices, dtype=np.uint8)

    @classmethod
    def from_rows(cls, rows: Sequence[BitRow], width: int) -> "BitMatrix":
        """Build a matrix from row snapshots (mostly for literal matrices in tests)."""
        nrows = len(rows)
        index_width = max([nrows] + [i + 1 for row in rows for i in row.indices])

        elements = np.zeros((nrows, width), dtype=np.uint8)
        indices = np.zeros((nrows, index_width), dtype=np.uint8)
        for r, row in enumerate(rows):
            for col in row.elements:
                if not 0 <= col < width:
                    raise ValueError(f"column {col} outside width {width}")
                elements[r, col] = 1
            for i in row.indices:
                indices[r, i] = 1
        return cls(elements, indices)

    @classmethod
    def from_factorizations(
        cls,
        factorizations: Sequence[Factorization],
        primes: Sequence[int]
    ) -> "BitMatrix":
        """
        Build the exponent-parity matrix of a list of factorizations.

        Column order follows the order of primes; row i initially has index set {i}.

        Args:
            factorizations: One factorization per row
            primes: Factor base defining the columns

        Returns:
            New BitMatrix
        """
        nrows = len(factorizations)
        elements = np.zeros((nrows, len(primes)), dtype=np.uint8)
        for r, fact in enumerate(factorizations):
            elements[r, :] = [fact.get(p) & 1 for p in primes]
        indices = np.eye(nrows, dtype=np.uint8)
        return cls(elements, indices)

    @property
    def nrows(self) -> int:
        return self.elements.shape[0]

    @property
    def ncols(self) -> int:
        return self.elements.shape[1]

    def get_elem(self, row: int, col: int) -> bool:
        return bool(self.elements[row, col])

    def swap_rows(self, i: int, j: int) -> None:
        _swap_rows_kernel(self.elements, self.indices, i, j)

    def xor_update_row(self, src: int, dest: int) -> None:
        """XOR row src into row dest, overwriting dest."""
        _xor_rows_kernel(self.elements, self.indices, src, dest)

    def to_row_echelon(self) -> int:
        """Reduce in place to row echelon form; returns the rank."""
        return int(_row_echelon_kernel(self.elements, self.indices))

    def row(self, r: int) -> BitRow:
        return BitRow(
            frozenset(int(c) for c in np.flatnonzero(self.elements[r])),
            frozenset(int(i) for i in np.flatnonzero(self.indices[r])),
        )

    def rows(self) -> list[BitRow]:
        return [self.row(r) for r in range(self.nrows)]

    def zero_rows(self) -> list[BitRow]:
        """Rows whose elements are all zero, in row order."""
        zero_mask = ~self.elements.any(axis=1)
        return [self.row(int(r)) for r in np.flatnonzero(zero_mask)]

    def copy(self) -> "BitMatrix":
        return BitMatrix(self.elements.copy(), self.indices.copy())

    def __eq__(self, other) -> bool:
        if not isinstance(other, BitMatrix):
            return NotImplemented
        return (
            np.array_equal(self.elements, other.elements)
            and np.array_equal(self.indices, other.indices)
        )

    def __repr__(self) -> str:
        lines = [f"BitMatrix({self.nrows}x{self.ncols})"]
        for row in self.rows():
            lines.append(f"  {sorted(row.elements)} {sorted(row.indices)}")
        return "\n".join(lines)
