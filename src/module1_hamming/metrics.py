# file: src/module1_hamming/metrics.py

"""
Block code performance metrics.

Provides utilities to compute Bit Error Rate (BER) between bit vectors and
the parity overhead of an (n, k) block code.
"""

from typing import Sequence

from .errors import InvalidInputError, InvalidParameterError


def compute_ber(original: Sequence[int], received: Sequence[int]) -> float:
    """
    Compute Bit Error Rate (BER) between two bit vectors.

    BER = (number of bit errors) / (total number of bits)

    Args:
        original: Transmitted bits
        received: Received (possibly corrupted) bits

    Returns:
        BER as a float in [0.0, 1.0]

    Raises:
        InvalidInputError: If inputs have different lengths

    Example:
        >>> compute_ber((0, 0, 0, 0), (1, 0, 0, 0))
        0.25
    """
    if len(original) != len(received):
        raise InvalidInputError(
            f"Length mismatch: original={len(original)}, received={len(received)}"
        )

    if len(original) == 0:
        return 0.0

    bit_errors = sum(1 for b1, b2 in zip(original, received) if b1 != b2)
    return bit_errors / len(original)


def compute_redundancy_overhead(data_length: int, code_length: int) -> float:
    """
    Parity bits spent per data bit, as a percentage.

    A (n, k) block code appends r = n - k parity bits to every k data bits,
    so the overhead is 100 * r / k. Hamming(7,4) carries 3 parity bits for
    4 data bits.

    Example:
        >>> compute_redundancy_overhead(4, 7)
        75.0

    Raises:
        InvalidParameterError: If k is not positive or n < k
    """
    if data_length <= 0:
        raise InvalidParameterError(
            f"data length k must be > 0, got {data_length}",
            parameter="data_length",
            value=data_length,
        )
    parity_length = code_length - data_length
    if parity_length < 0:
        raise InvalidParameterError(
            f"code length n={code_length} is shorter than data length k={data_length}",
            parameter="code_length",
            value=code_length,
        )

    return 100.0 * parity_length / data_length
