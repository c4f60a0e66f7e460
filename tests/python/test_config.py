"""
Tests for runtime configuration.
"""

import logging
import threading

import pytest
import numpy as np

import surge
from surge import (
    CheckConfig,
    KernelConfig,
    ComputeConfig,
    SurgeConfig,
    ValueArray,
    IndexOutOfBoundsError,
)


class TestDefaults:

    def test_sections(self):
        cfg = SurgeConfig()

        assert cfg.check.bounds is True
        assert cfg.kernel.use_blas is True
        assert cfg.kernel.precision == 'f64'
        assert cfg.memory.alignment == 64
        assert cfg.compute == ComputeConfig(rtol=1e-5, atol=1e-8)
        assert cfg.default_dtype == 'float64'

    def test_to_dict(self):
        d = SurgeConfig().to_dict()

        assert set(d) == {'check', 'kernel', 'memory', 'compute'}
        assert d['kernel'] == {'use_blas': True, 'precision': 'f64'}

    def test_get_config_is_global(self):
        assert surge.get_config() is surge.config


class TestEnvironment:

    def test_flags(self, monkeypatch):
        monkeypatch.setenv('SURGE_NO_BOUNDS_CHECK', '1')
        monkeypatch.setenv('SURGE_NO_BLAS', 'true')
        monkeypatch.setenv('SURGE_PRECISION', 'f32')
        cfg = SurgeConfig()

        assert cfg.bounds_check is False
        assert cfg.kernel.use_blas is False
        assert cfg.default_dtype == 'float32'

    def test_invalid_precision_falls_back(self, monkeypatch, caplog):
        monkeypatch.setenv('SURGE_PRECISION', 'f16')

        with caplog.at_level(logging.WARNING, logger="surge.config"):
            cfg = SurgeConfig()

        assert cfg.kernel.precision == 'f64'
        assert "SURGE_PRECISION" in caplog.text


class TestGlobalSetters:

    def test_set_bounds_check(self):
        surge.set_bounds_check(False)

        assert surge.config.bounds_check is False

    def test_set_blas_keeps_precision(self):
        surge.config.kernel = KernelConfig(precision='f32')
        surge.set_blas(False)

        assert surge.config.kernel == KernelConfig(use_blas=False, precision='f32')

    def test_reset(self):
        surge.set_blas(False)
        surge.config.reset()

        assert surge.config.kernel.use_blas is True


class TestLocal:

    def test_override_and_restore(self):
        with surge.config.local(check=CheckConfig(bounds=False)) as cfg:
            assert cfg is surge.config
            assert surge.config.bounds_check is False
        assert surge.config.bounds_check is True

    def test_restored_after_exception(self):
        with pytest.raises(RuntimeError):
            with surge.config.local(kernel=KernelConfig(use_blas=False)):
                raise RuntimeError("boom")

        assert surge.config.kernel.use_blas is True

    def test_unknown_section(self):
        with pytest.raises(ValueError):
            surge.config.local(logging=True)

    def test_override_is_thread_local(self):
        seen = []

        def worker():
            seen.append(surge.config.bounds_check)

        with surge.config.local(check=CheckConfig(bounds=False)):
            t = threading.Thread(target=worker)
            t.start()
            t.join()

        assert seen == [True]

    def test_disabling_bounds_checks_skips_index_validation(self):
        buf = np.arange(4, dtype=np.float64)
        view = surge.LinearReference(buf, 0, 2, 1)

        with pytest.raises(IndexOutOfBoundsError):
            view[2]
        with surge.config.local(check=CheckConfig(bounds=False)):
            assert view[2] == 2.0

    def test_default_dtype_follows_local_precision(self):
        with surge.config.local(kernel=KernelConfig(precision='f32')):
            assert ValueArray(2).dtype == np.float32
        assert ValueArray(2).dtype == np.float64


class TestCallbacks:

    def test_on_change(self):
        cfg = SurgeConfig()
        received = []
        cfg.on_change("kernel", received.append)

        cfg.kernel = KernelConfig(use_blas=False)

        assert received == [KernelConfig(use_blas=False)]

    def test_failing_callback_is_logged(self, caplog):
        cfg = SurgeConfig()

        def broken(value):
            raise RuntimeError("callback failure")

        cfg.on_change("check", broken)
        with caplog.at_level(logging.ERROR, logger="surge.config"):
            cfg.check = CheckConfig(bounds=False)

        assert cfg.check.bounds is False
        assert "callback" in caplog.text

    def test_unknown_section_ignored(self):
        cfg = SurgeConfig()
        cfg.on_change("nonexistent", lambda value: None)

        assert "nonexistent" not in cfg.to_dict()
