# file: src/module1_hamming/__init__.py

"""
Module 1: Hamming(7,4) Block Code Engine

Systematic linear block code over GF(2) with syndrome-based single-error
correction, plus bit-flip noise injection driven by an explicit random
source. Stateless and deterministic given the random source.

Public API:
    - encode(data) -> Codeword
    - decode(code) -> DecodeResult
    - inject_errors(code, error_rate, rng) -> Codeword
    - HammingCodec: codebook, minimum distance, code properties
"""

from .hamming_codec import (
    HammingCodec,
    DecodeResult,
    DataWord,
    Codeword,
    Syndrome,
    encode,
    decode,
    hamming_distance,
    syndrome_value,
    validate_bits,
)
from .noise import (
    as_generator,
    inject_errors,
    inject_single_error,
    random_data_word,
    validate_probability,
)
from .metrics import compute_ber, compute_redundancy_overhead
from .errors import (
    HammingSimError,
    InvalidInputError,
    InvalidParameterError,
)

__version__ = "1.0.0"

__all__ = [
    "HammingCodec",
    "DecodeResult",
    "DataWord",
    "Codeword",
    "Syndrome",
    "encode",
    "decode",
    "hamming_distance",
    "syndrome_value",
    "validate_bits",
    "as_generator",
    "inject_errors",
    "inject_single_error",
    "random_data_word",
    "validate_probability",
    "compute_ber",
    "compute_redundancy_overhead",
    "HammingSimError",
    "InvalidInputError",
    "InvalidParameterError",
]
