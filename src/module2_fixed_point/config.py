# file: src/module2_fixed_point/config.py

"""
Solver configuration.

Configuration lives in a YAML file with ``solver`` and ``batch`` sections.
When no path is given the packaged default_config.yaml is used, and when
that is missing the hardcoded defaults below apply.
"""

import dataclasses
import logging
import os
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional

import numpy as np
import yaml

from ..module1_hamming.errors import InvalidParameterError
from ..module1_hamming.noise import validate_probability

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = os.path.join(os.path.dirname(__file__), "default_config.yaml")

DEFAULT_BATCH_SETTINGS = {
    "runs": 100,
    "error_rate_jitter": 0.01,
    "seed": None,
}


@dataclass(frozen=True)
class SolverConfig:
    """
    Parameters of one fixed-point solve.

    Attributes
    ----------
    max_iterations:
        Hard iteration limit, a positive integer.
    tolerance:
        Convergence threshold on the fractional Hamming distance between
        successive iterates, strictly inside (0, 1).
    error_rate:
        Per-bit flip probability of the noisy channel, in [0, 1].
    damping_factor:
        Probability of reverting a changed bit when adaptive stepping is on.
    adaptive_step:
        Enables probabilistic damping of non-converged transitions.
    """

    max_iterations: int = 100
    tolerance: float = 1e-6
    error_rate: float = 0.05
    damping_factor: float = 0.5
    adaptive_step: bool = True

    def validate(self) -> "SolverConfig":
        """
        Check every field against its declared range.

        Returns:
            self, so calls can be chained

        Raises:
            InvalidParameterError: On the first out-of-range field
        """
        max_iterations = self.max_iterations
        if isinstance(max_iterations, bool) or not isinstance(max_iterations, (int, np.integer)):
            raise InvalidParameterError(
                f"max_iterations must be an integer, got {max_iterations!r}",
                parameter="max_iterations",
                value=max_iterations,
            )
        if max_iterations <= 0:
            raise InvalidParameterError(
                f"max_iterations must be > 0, got {max_iterations}",
                parameter="max_iterations",
                value=max_iterations,
            )

        tolerance = self.tolerance
        if isinstance(tolerance, bool) or not isinstance(tolerance, (int, float, np.floating)):
            raise InvalidParameterError(
                f"tolerance must be a number, got {tolerance!r}",
                parameter="tolerance",
                value=tolerance,
            )
        if not 0.0 < tolerance < 1.0:
            raise InvalidParameterError(
                f"tolerance must be in (0, 1), got {tolerance}",
                parameter="tolerance",
                value=tolerance,
            )

        validate_probability(self.error_rate, "error_rate")
        validate_probability(self.damping_factor, "damping_factor")

        if not isinstance(self.adaptive_step, bool):
            raise InvalidParameterError(
                f"adaptive_step must be a bool, got {self.adaptive_step!r}",
                parameter="adaptive_step",
                value=self.adaptive_step,
            )

        return self

    def replace(self, **changes: Any) -> "SolverConfig":
        """Return a validated copy with the given fields changed."""
        try:
            updated = dataclasses.replace(self, **changes)
        except TypeError as e:
            raise InvalidParameterError(f"Unknown solver option: {e}") from e
        return updated.validate()

    @classmethod
    def from_dict(cls, options: Optional[Mapping[str, Any]]) -> "SolverConfig":
        """
        Build a validated config from a mapping of field names.

        Missing keys keep their defaults; unknown keys are rejected.

        Raises:
            InvalidParameterError: On unknown keys or invalid values
        """
        if options is None:
            options = {}
        if not isinstance(options, Mapping):
            raise InvalidParameterError(
                f"Solver options must be a mapping, got {type(options).__name__}",
                value=options,
            )
        options = dict(options)
        known = {f.name for f in dataclasses.fields(cls)}
        unknown = sorted(set(options) - known, key=repr)
        if unknown:
            raise InvalidParameterError(
                f"Unknown solver option(s): {', '.join(map(repr, unknown))}",
                parameter=unknown[0],
            )
        return cls(**options).validate()

    def to_dict(self) -> Dict[str, Any]:
        return dataclasses.asdict(self)


def _read_yaml(config_path: Optional[str]) -> Dict[str, Any]:
    """
    Load the raw YAML mapping, or an empty dict when no file is available.

    Raises:
        InvalidParameterError: If the file cannot be parsed or is not a mapping
    """
    if config_path is None:
        if not os.path.exists(DEFAULT_CONFIG_PATH):
            logger.debug("No default_config.yaml found, using hardcoded defaults")
            return {}
        config_path = DEFAULT_CONFIG_PATH

    try:
        with open(config_path, 'r') as f:
            config = yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as e:
        raise InvalidParameterError(f"Cannot load config {config_path}: {e}") from e

    if config is None:
        return {}
    if not isinstance(config, dict):
        raise InvalidParameterError(
            f"Config {config_path} must contain a mapping, got {type(config).__name__}"
        )

    logger.debug(f"Loaded configuration from {config_path}")
    return config


def _section(config: Dict[str, Any], name: str) -> Dict[str, Any]:
    section = config.get(name) or {}
    if not isinstance(section, dict):
        raise InvalidParameterError(
            f"Config section '{name}' must be a mapping, got {type(section).__name__}",
            parameter=name,
        )
    return section


def load_solver_config(config_path: Optional[str] = None) -> SolverConfig:
    """
    Load the ``solver`` section of a YAML config file.

    Args:
        config_path: Path to configuration YAML file.
                     If None, uses the packaged default configuration.

    Returns:
        Validated SolverConfig

    Raises:
        InvalidParameterError: If the file is malformed or values are out of range
    """
    return SolverConfig.from_dict(_section(_read_yaml(config_path), "solver"))


def load_batch_settings(config_path: Optional[str] = None) -> Dict[str, Any]:
    """
    Load the ``batch`` section of a YAML config file merged over defaults.

    Returns:
        Dictionary with keys 'runs', 'error_rate_jitter' and 'seed'
    """
    section = _section(_read_yaml(config_path), "batch")
    unknown = sorted(set(section) - set(DEFAULT_BATCH_SETTINGS), key=repr)
    if unknown:
        raise InvalidParameterError(
            f"Unknown batch option(s): {', '.join(map(repr, unknown))}",
            parameter=unknown[0],
        )
    settings = dict(DEFAULT_BATCH_SETTINGS)
    settings.update(section)
    return settings
