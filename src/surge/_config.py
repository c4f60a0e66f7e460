"""
Surge Config - Runtime Configuration

Property-based configuration for view checks, kernel routing and
allocation. Defaults are read from environment variables at import time:

    SURGE_PRECISION         Default element precision ('f32' or 'f64').
    SURGE_NO_BOUNDS_CHECK   Disable per-access index checks ('1', 'true').
    SURGE_NO_BLAS           Route level-1 operations through numpy only.
"""

from __future__ import annotations

import os
import threading
import logging
from dataclasses import dataclass, asdict
from typing import Any, Callable, Dict, List

logger = logging.getLogger("surge.config")


def _env_flag(name: str) -> bool:
    return os.environ.get(name, '').lower() in ('1', 'true', 'yes')


# =============================================================================
# Configuration Classes
# =============================================================================

@dataclass
class CheckConfig:
    """Configuration for accessor checks."""
    bounds: bool = True            # Check logical indices on every access


@dataclass
class KernelConfig:
    """Configuration for kernel dispatch."""
    use_blas: bool = True          # Route eligible level-1 ops through BLAS
    precision: str = 'f64'         # Default precision for new containers


@dataclass
class MemoryConfig:
    """Configuration for owning container allocation."""
    alignment: int = 64            # Byte alignment of fresh buffers


@dataclass
class ComputeConfig:
    """Configuration for approximate comparisons."""
    rtol: float = 1e-5
    atol: float = 1e-8


def _default_check() -> CheckConfig:
    return CheckConfig(bounds=not _env_flag('SURGE_NO_BOUNDS_CHECK'))


def _default_kernel() -> KernelConfig:
    precision = os.environ.get('SURGE_PRECISION', 'f64')
    if precision not in ('f32', 'f64'):
        logger.warning("Ignoring invalid SURGE_PRECISION=%r, using 'f64'", precision)
        precision = 'f64'
    return KernelConfig(use_blas=not _env_flag('SURGE_NO_BLAS'), precision=precision)


# =============================================================================
# Global Configuration Manager
# =============================================================================

class SurgeConfig:
    """
    Global configuration manager for Surge.

    Provides thread-local configuration with context manager support.

    Example:
        # Global configuration
        surge.config.kernel.use_blas = False

        # Local configuration (context manager)
        with surge.config.local(check=CheckConfig(bounds=False)):
            total = surge.math.reductions.sum(view)
        # Back to global config
    """

    _SECTIONS = ("check", "kernel", "memory", "compute")

    def __init__(self):
        self._global_check = _default_check()
        self._global_kernel = _default_kernel()
        self._global_memory = MemoryConfig()
        self._global_compute = ComputeConfig()

        # Thread-local storage for context overrides
        self._local = threading.local()

        self._callbacks: Dict[str, List[Callable]] = {name: [] for name in self._SECTIONS}

    # -------------------------------------------------------------------------
    # Property Accessors (with thread-local override support)
    # -------------------------------------------------------------------------

    def _get(self, name: str):
        value = getattr(self._local, name, None)
        if value is not None:
            return value
        return getattr(self, f"_global_{name}")

    def _set(self, name: str, value: Any):
        setattr(self, f"_global_{name}", value)
        self._notify(name, value)

    @property
    def check(self) -> CheckConfig:
        return self._get("check")

    @check.setter
    def check(self, value: CheckConfig):
        self._set("check", value)

    @property
    def kernel(self) -> KernelConfig:
        return self._get("kernel")

    @kernel.setter
    def kernel(self, value: KernelConfig):
        self._set("kernel", value)

    @property
    def memory(self) -> MemoryConfig:
        return self._get("memory")

    @memory.setter
    def memory(self, value: MemoryConfig):
        self._set("memory", value)

    @property
    def compute(self) -> ComputeConfig:
        return self._get("compute")

    @compute.setter
    def compute(self, value: ComputeConfig):
        self._set("compute", value)

    # -------------------------------------------------------------------------
    # Convenience Properties
    # -------------------------------------------------------------------------

    @property
    def bounds_check(self) -> bool:
        """Whether accessors check logical indices."""
        return self.check.bounds

    @property
    def default_dtype(self) -> str:
        """Element type used when a container is created without one."""
        return 'float32' if self.kernel.precision == 'f32' else 'float64'

    # -------------------------------------------------------------------------
    # Context Manager Support
    # -------------------------------------------------------------------------

    def local(self, **kwargs) -> "_LocalConfigContext":
        """
        Create a local configuration context.

        Args:
            **kwargs: Section overrides (check, kernel, memory, compute)

        Returns:
            Context manager
        """
        unknown = set(kwargs) - set(self._SECTIONS)
        if unknown:
            raise ValueError(f"Unknown config sections: {sorted(unknown)}")
        return _LocalConfigContext(self, **kwargs)

    def _set_local(self, **kwargs):
        for key, value in kwargs.items():
            if value is not None:
                setattr(self._local, key, value)

    def _clear_local(self, keys: List[str]):
        for key in keys:
            if hasattr(self._local, key):
                setattr(self._local, key, None)

    # -------------------------------------------------------------------------
    # Callback Registration
    # -------------------------------------------------------------------------

    def on_change(self, config_name: str, callback: Callable):
        """
        Register callback for configuration changes.

        Args:
            config_name: Section name ("check", "kernel", ...)
            callback: Function called with the new section value
        """
        if config_name in self._callbacks:
            self._callbacks[config_name].append(callback)

    def _notify(self, config_name: str, value: Any):
        for callback in self._callbacks.get(config_name, []):
            try:
                callback(value)
            except Exception:
                logger.exception("Config callback for %r failed", config_name)

    # -------------------------------------------------------------------------
    # Reset / Serialization
    # -------------------------------------------------------------------------

    def reset(self):
        """Reset all configurations to defaults."""
        self._global_check = _default_check()
        self._global_kernel = _default_kernel()
        self._global_memory = MemoryConfig()
        self._global_compute = ComputeConfig()

    def to_dict(self) -> Dict[str, Any]:
        """Export configuration as dictionary."""
        return {name: asdict(self._get(name)) for name in self._SECTIONS}

    def __repr__(self) -> str:
        return f"SurgeConfig({self.to_dict()})"


class _LocalConfigContext:
    """Context manager for local configuration override."""

    def __init__(self, config: SurgeConfig, **kwargs):
        self._config = config
        self._kwargs = kwargs
        self._keys = list(kwargs.keys())

    def __enter__(self):
        self._config._set_local(**self._kwargs)
        return self._config

    def __exit__(self, exc_type, exc_val, exc_tb):
        self._config._clear_local(self._keys)
        return False


# =============================================================================
# Global Instance
# =============================================================================

config = SurgeConfig()


def get_config() -> SurgeConfig:
    """Get the global configuration instance."""
    return config


def set_bounds_check(enabled: bool = True):
    """Enable or disable per-access index checks globally."""
    config.check = CheckConfig(bounds=enabled)


def set_blas(enabled: bool = True):
    """Enable or disable BLAS routing for level-1 operations."""
    current = config._global_kernel
    config.kernel = KernelConfig(use_blas=enabled, precision=current.precision)


__all__ = [
    "CheckConfig",
    "KernelConfig",
    "MemoryConfig",
    "ComputeConfig",
    "SurgeConfig",
    "config",
    "get_config",
    "set_bounds_check",
    "set_blas",
]
