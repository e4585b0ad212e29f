"""
Solver configuration
Defaults can be overridden per deployment through environment variables
"""

import os
from typing import Mapping, Optional
from dataclasses import dataclass
import logging

from .parser import DEFAULT_MAX_NESTING
from .search import DEFAULT_MAX_DEPTH, SearchBudget

logger = logging.getLogger(__name__)

ENV_PREFIX = "LOGIC_PROVER_"


@dataclass(frozen=True)
class SolverConfig:
    """Limits applied to every solve call"""
    max_depth: int = DEFAULT_MAX_DEPTH
    max_nesting: int = DEFAULT_MAX_NESTING
    max_expansions: Optional[int] = None
    timeout_ms: Optional[int] = None

    def __post_init__(self):
        if self.max_depth < 1:
            raise ValueError(f"max_depth must be at least 1, got {self.max_depth}")
        if self.max_nesting < 1:
            raise ValueError(f"max_nesting must be at least 1, got {self.max_nesting}")

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "SolverConfig":
        """
        Build a config from LOGIC_PROVER_* variables

        Args:
            environ: Mapping to read, defaults to os.environ

        Returns:
            SolverConfig with unset variables left at their defaults
        """
        environ = os.environ if environ is None else environ
        overrides = {}

        for name in ('max_depth', 'max_nesting', 'max_expansions', 'timeout_ms'):
            key = ENV_PREFIX + name.upper()
            raw = environ.get(key, '').strip()
            if not raw:
                continue
            try:
                overrides[name] = int(raw)
            except ValueError:
                raise ValueError(f"{key} must be an integer, got {raw!r}")

        config = cls(**overrides)
        if overrides:
            logger.info(f"Solver config overridden from environment: {overrides}")
        return config

    def budget(self) -> SearchBudget:
        """Fresh budget for one search"""
        return SearchBudget(max_expansions=self.max_expansions, timeout_ms=self.timeout_ms)
