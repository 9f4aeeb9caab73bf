# file: src/module1_hamming/noise.py

"""
Bit-flip noise for codewords.

All randomness comes from an explicit numpy Generator (or a seed used to
build one), never from the global numpy state.
"""

from typing import Sequence, Union

import numpy as np

from .errors import InvalidParameterError
from .hamming_codec import CODE_LENGTH, DATA_LENGTH, Codeword, DataWord, validate_bits

RandomSource = Union[np.random.Generator, int, None]


def as_generator(rng: RandomSource = None) -> np.random.Generator:
    """
    Normalize a random source into a numpy Generator.

    Args:
        rng: Existing Generator (returned as-is), an integer seed, or None
             for fresh OS entropy
    """
    if isinstance(rng, np.random.Generator):
        return rng
    return np.random.default_rng(rng)


def validate_probability(value: float, name: str) -> float:
    """Return value as float, raising InvalidParameterError outside [0, 1]."""
    if isinstance(value, bool) or not isinstance(value, (int, float, np.floating, np.integer)):
        raise InvalidParameterError(
            f"{name} must be a number in [0, 1], got {value!r}", parameter=name, value=value
        )
    if not 0.0 <= value <= 1.0:
        raise InvalidParameterError(
            f"{name} must be in [0, 1], got {value}", parameter=name, value=value
        )
    return float(value)


def inject_errors(
    code: Sequence[int],
    error_rate: float,
    rng: RandomSource = None
) -> Codeword:
    """
    Flip each bit of a codeword independently with probability error_rate.

    Draws exactly 7 uniforms from rng per call. Because the uniforms lie in
    [0, 1), a rate of 0.0 never flips and a rate of 1.0 always flips.

    Args:
        code: 7-bit codeword
        error_rate: Per-bit flip probability in [0, 1]
        rng: Generator or seed

    Returns:
        Noisy codeword

    Raises:
        InvalidParameterError: If error_rate is outside [0, 1]
        InvalidInputError: If code is not exactly 7 bits

    Example:
        >>> noisy = inject_errors((0, 0, 0, 0, 0, 0, 0), 1.0, rng=42)
        >>> assert noisy == (1, 1, 1, 1, 1, 1, 1)
    """
    error_rate = validate_probability(error_rate, "error_rate")
    codeword = validate_bits(code, CODE_LENGTH, "codeword")

    flips = as_generator(rng).random(CODE_LENGTH) < error_rate
    return tuple(bit ^ int(flip) for bit, flip in zip(codeword, flips))


def inject_single_error(code: Sequence[int], position: int) -> Codeword:
    """
    Flip exactly one bit of a codeword.

    Args:
        code: 7-bit codeword
        position: 1-indexed bit position to flip

    Raises:
        InvalidParameterError: If position is not in 1..7
    """
    codeword = validate_bits(code, CODE_LENGTH, "codeword")
    if isinstance(position, bool) or not isinstance(position, (int, np.integer)) \
            or not 1 <= position <= CODE_LENGTH:
        raise InvalidParameterError(
            f"position must be an integer in 1..{CODE_LENGTH}, got {position!r}",
            parameter="position",
            value=position,
        )
    noisy = list(codeword)
    noisy[position - 1] ^= 1
    return tuple(noisy)


def random_data_word(rng: RandomSource = None) -> DataWord:
    """Draw a uniformly random 4-bit data word."""
    return tuple(int(bit) for bit in as_generator(rng).integers(0, 2, size=DATA_LENGTH))
