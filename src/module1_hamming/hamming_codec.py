# file: src/module1_hamming/hamming_codec.py

"""
Hamming(7,4) codec implementation.

Uses numpy for the generator and parity-check products over GF(2).
Handles input validation and single-bit syndrome correction.
"""

from dataclasses import dataclass
from itertools import combinations, product
from typing import Dict, List, Optional, Sequence, Tuple

import numpy as np

from .errors import InvalidInputError
from .metrics import compute_redundancy_overhead

# Type aliases
DataWord = Tuple[int, ...]  # Exactly 4 bits
Codeword = Tuple[int, ...]  # Exactly 7 bits, layout [p1, p2, d1, p3, d2, d3, d4]
Syndrome = Tuple[int, ...]  # Exactly 3 bits (s1, s2, s3)

DATA_LENGTH = 4
CODE_LENGTH = 7
PARITY_LENGTH = CODE_LENGTH - DATA_LENGTH

# Generator matrix: one row per output bit, one column per data bit
GENERATOR_MATRIX = np.array([
    [1, 1, 0, 1],  # p1 = d1 ^ d2 ^ d4
    [1, 0, 1, 1],  # p2 = d1 ^ d3 ^ d4
    [1, 0, 0, 0],  # d1
    [0, 1, 1, 1],  # p3 = d2 ^ d3 ^ d4
    [0, 1, 0, 0],  # d2
    [0, 0, 1, 0],  # d3
    [0, 0, 0, 1],  # d4
], dtype=np.uint8)

# Parity-check matrix: column j is the binary expansion of position j + 1
PARITY_CHECK_MATRIX = np.array([
    [1, 0, 1, 0, 1, 0, 1],  # s1 over positions 1, 3, 5, 7
    [0, 1, 1, 0, 0, 1, 1],  # s2 over positions 2, 3, 6, 7
    [0, 0, 0, 1, 1, 1, 1],  # s3 over positions 4, 5, 6, 7
], dtype=np.uint8)

# 0-based indices of d1..d4 inside a codeword
DATA_POSITIONS = (2, 4, 5, 6)


def validate_bits(bits: Sequence[int], length: int, name: str = "bits") -> Tuple[int, ...]:
    """
    Validate a bit vector and return it as an immutable tuple of ints.

    Args:
        bits: Sequence (list, tuple or 1-D numpy array) of 0/1 values
        length: Required number of bits
        name: Label used in error messages

    Returns:
        Tuple of exactly ``length`` ints, each 0 or 1

    Raises:
        InvalidInputError: If the input is not a sequence of ``length`` bits
    """
    if isinstance(bits, np.ndarray):
        if bits.ndim != 1:
            raise InvalidInputError(f"{name} must be 1-D, got shape {bits.shape}")
        bits = bits.tolist()

    if isinstance(bits, (str, bytes)) or not hasattr(bits, '__len__'):
        raise InvalidInputError(f"{name} must be a sequence of bits, got {type(bits).__name__}")

    if len(bits) != length:
        raise InvalidInputError(f"{name} must contain exactly {length} bits, got {len(bits)}")

    validated = []
    for index, bit in enumerate(bits):
        if isinstance(bit, (str, bytes)) or bit not in (0, 1):
            raise InvalidInputError(f"{name}[{index}] must be 0 or 1, got {bit!r}")
        validated.append(int(bit))

    return tuple(validated)


def hamming_distance(word1: Sequence[int], word2: Sequence[int]) -> int:
    """Number of positions at which two equal-length bit vectors differ."""
    if len(word1) != len(word2):
        raise InvalidInputError(
            f"Length mismatch: word1={len(word1)}, word2={len(word2)}"
        )
    return sum(1 for a, b in zip(word1, word2) if a != b)


def syndrome_value(syndrome: Syndrome) -> int:
    """Convert a syndrome (s1, s2, s3) to its integer value s1 + 2*s2 + 4*s3."""
    return syndrome[0] * 1 + syndrome[1] * 2 + syndrome[2] * 4


@dataclass(frozen=True)
class DecodeResult:
    """Outcome of decoding one received codeword."""
    data_bits: DataWord
    corrected_codeword: Codeword
    error_detected: bool
    error_position: Optional[int]  # 1-indexed, None when the syndrome is zero
    syndrome: Syndrome
    syndrome_value: int

    def __iter__(self):
        # Allows ``data, detected, position = codec.decode(code)``
        return iter((self.data_bits, self.error_detected, self.error_position))


class HammingCodec:
    """
    Hamming(7,4) systematic linear block code.

    Invariants:
        - n = 7, k = 4, minimum distance 3
        - Corrects any single bit error exactly
        - Two or more bit errors are miscorrected or missed (undefined)

    The codec is stateless; one instance can be shared freely.
    """

    n = CODE_LENGTH
    k = DATA_LENGTH
    r = PARITY_LENGTH

    def encode(self, data: Sequence[int]) -> Codeword:
        """
        Encode 4 data bits into a 7-bit codeword.

        Args:
            data: 4 bits [d1, d2, d3, d4]

        Returns:
            Codeword [p1, p2, d1, p3, d2, d3, d4]

        Raises:
            InvalidInputError: If data is not exactly 4 bits
        """
        data_word = validate_bits(data, DATA_LENGTH, "data word")
        codeword = GENERATOR_MATRIX.dot(np.array(data_word, dtype=np.uint8)) % 2
        return tuple(int(bit) for bit in codeword)

    def syndrome(self, code: Sequence[int]) -> Syndrome:
        """
        Compute the 3-bit syndrome of a received codeword.

        Raises:
            InvalidInputError: If code is not exactly 7 bits
        """
        codeword = validate_bits(code, CODE_LENGTH, "codeword")
        return self._syndrome(codeword)

    def decode(self, code: Sequence[int]) -> DecodeResult:
        """
        Decode a 7-bit codeword, correcting a single bit error if present.

        A nonzero syndrome value v is read as "bit v is wrong" and that bit
        is flipped before the data bits are extracted. With two or more
        flipped bits this lands on the wrong codeword.

        Args:
            code: 7 received bits

        Returns:
            DecodeResult with data bits, corrected codeword and diagnostics

        Raises:
            InvalidInputError: If code is not exactly 7 bits
        """
        codeword = validate_bits(code, CODE_LENGTH, "codeword")

        syndrome = self._syndrome(codeword)
        value = syndrome_value(syndrome)

        corrected = list(codeword)
        error_position = None
        if value != 0:
            error_position = value
            corrected[value - 1] ^= 1

        data_bits = tuple(corrected[i] for i in DATA_POSITIONS)

        return DecodeResult(
            data_bits=data_bits,
            corrected_codeword=tuple(corrected),
            error_detected=error_position is not None,
            error_position=error_position,
            syndrome=syndrome,
            syndrome_value=value,
        )

    def is_valid_codeword(self, code: Sequence[int]) -> bool:
        """True when every parity relation holds for the given codeword."""
        return syndrome_value(self.syndrome(code)) == 0

    def generate_codebook(self) -> List[Tuple[DataWord, Codeword]]:
        """
        Generate all 16 (data word, codeword) pairs in ascending data order.
        """
        return [(bits, self.encode(bits)) for bits in product((0, 1), repeat=DATA_LENGTH)]

    def minimum_distance(self) -> int:
        """Pairwise minimum Hamming distance across the full codebook."""
        codewords = [codeword for _, codeword in self.generate_codebook()]
        return min(hamming_distance(a, b) for a, b in combinations(codewords, 2))

    def get_code_rate(self) -> float:
        """
        Calculate code rate.

        Returns:
            Code rate: k / n
        """
        return self.k / self.n

    def get_code_properties(self) -> Dict[str, object]:
        """Static description of the code structure."""
        return {
            'name': 'Hamming(7,4)',
            'n': self.n,
            'k': self.k,
            'r': self.r,
            'code_rate': self.k / self.n,
            'redundancy': self.r / self.n,
            'redundancy_overhead': compute_redundancy_overhead(self.k, self.n),
            'minimum_distance': 3,
            'error_correction_capability': 1,
            'error_detection_capability': 2,
            'total_codewords': 2 ** self.k,
        }

    @staticmethod
    def _syndrome(codeword: Codeword) -> Syndrome:
        bits = PARITY_CHECK_MATRIX.dot(np.array(codeword, dtype=np.uint8)) % 2
        return tuple(int(bit) for bit in bits)


_DEFAULT_CODEC = HammingCodec()


def encode(data: Sequence[int]) -> Codeword:
    """Encode 4 data bits with the shared default codec."""
    return _DEFAULT_CODEC.encode(data)


def decode(code: Sequence[int]) -> DecodeResult:
    """Decode a 7-bit codeword with the shared default codec."""
    return _DEFAULT_CODEC.decode(code)
