"""Tests for telescope configuration and pupil caching."""

import copy
import dataclasses
import pickle
from concurrent.futures import ThreadPoolExecutor

import numpy as np
import pytest

from aolib import (
    ConfigurationError,
    IntegrationSettings,
    TelescopeConfig,
    VonKarmanAtmosphere,
)
from aolib.utils import ARCMIN_TO_RADIAN, ARCSEC_TO_RADIAN


class TestTelescopeConfig:
    """Tests for TelescopeConfig validation and derived quantities."""

    def test_basic_creation(self):
        """Test defaults of a minimal configuration."""
        tel = TelescopeConfig(diameter=8.0)
        assert tel.diameter == 8.0
        assert tel.obstruction_ratio == 0.0
        assert tel.resolution is None
        assert tel.aberration is None
        assert tel.field_of_view == 0.0

    def test_area(self):
        """Collecting area is πD²(1-ρ²)/4."""
        tel = TelescopeConfig(diameter=8.0, obstruction_ratio=0.14)
        assert np.isclose(tel.area, np.pi * 64.0 * (1 - 0.14**2) / 4)
        assert np.isclose(tel.obstruction_diameter, 1.12)

    @pytest.mark.parametrize("diameter", [0.0, -1.0])
    def test_invalid_diameter(self, diameter):
        """Non-positive diameters are rejected."""
        with pytest.raises(ConfigurationError, match="Diameter"):
            TelescopeConfig(diameter=diameter)

    @pytest.mark.parametrize("ratio", [-0.1, 1.0, 1.5])
    def test_invalid_obstruction_ratio(self, ratio):
        """Obstruction ratio must lie in [0, 1)."""
        with pytest.raises(ConfigurationError, match="Obstruction ratio"):
            TelescopeConfig(diameter=8.0, obstruction_ratio=ratio)

    def test_configuration_error_is_value_error(self):
        """ConfigurationError can be caught as ValueError."""
        with pytest.raises(ValueError):
            TelescopeConfig(diameter=-8.0)

    @pytest.mark.parametrize("resolution", [0, -4, 2.5])
    def test_invalid_resolution(self, resolution):
        with pytest.raises(ConfigurationError, match="Resolution"):
            TelescopeConfig(diameter=8.0, resolution=resolution)

    def test_field_of_view_units(self):
        """Field of view is converted to radians from either unit."""
        tel_arcmin = TelescopeConfig(diameter=8.0, field_of_view_arcmin=2.0)
        tel_arcsec = TelescopeConfig(diameter=8.0, field_of_view_arcsec=120.0)
        assert np.isclose(tel_arcmin.field_of_view, 2.0 * ARCMIN_TO_RADIAN)
        assert np.isclose(tel_arcsec.field_of_view, 120.0 * ARCSEC_TO_RADIAN)
        assert np.isclose(tel_arcmin.field_of_view, tel_arcsec.field_of_view)

    def test_field_of_view_both_units_rejected(self):
        with pytest.raises(ConfigurationError, match="not both"):
            TelescopeConfig(
                diameter=8.0, field_of_view_arcsec=60.0, field_of_view_arcmin=1.0
            )

    def test_invalid_sampling_time(self):
        with pytest.raises(ConfigurationError, match="Sampling time"):
            TelescopeConfig(diameter=8.0, sampling_time=0.0)

    def test_aberration_contract(self):
        """Objects lacking long_exposure_otf or r0 are rejected."""
        with pytest.raises(ConfigurationError, match="long_exposure_otf"):
            TelescopeConfig(diameter=8.0, aberration=object())

    def test_aberration_held_by_reference(self):
        atm = VonKarmanAtmosphere(r0=0.15)
        tel = TelescopeConfig(diameter=8.0, aberration=atm)
        assert tel.aberration is atm

    def test_frozen(self):
        tel = TelescopeConfig(diameter=8.0)
        with pytest.raises(dataclasses.FrozenInstanceError):
            tel.diameter = 4.0


class TestPupilCache:
    """Tests for the memoized pupil grid."""

    def test_no_resolution_no_pupil(self):
        tel = TelescopeConfig(diameter=8.0)
        assert tel.get_pupil() is None
        assert tel.get_pupil_logical() is None

    def test_pupil_computed_once(self):
        """Repeated access returns the same cached array."""
        tel = TelescopeConfig(diameter=8.0, resolution=32)
        first = tel.get_pupil()
        assert first.shape == (32, 32)
        assert tel.get_pupil() is first

    def test_pupil_read_only(self):
        tel = TelescopeConfig(diameter=8.0, resolution=32)
        with pytest.raises(ValueError):
            tel.get_pupil()[0, 0] = 1.0

    def test_pupil_logical(self):
        tel = TelescopeConfig(diameter=8.0, resolution=32, obstruction_ratio=0.3)
        mask = tel.get_pupil_logical()
        assert mask.dtype == bool
        assert mask.sum() == tel.get_pupil().sum()

    def test_precompute_pupil(self):
        tel = TelescopeConfig(diameter=8.0, resolution=16, precompute_pupil=True)
        assert tel._pupil is not None
        assert tel.get_pupil() is tel._pupil

    def test_replace_invalidates_cache(self):
        """A config derived with new parameters gets a fresh pupil."""
        tel = TelescopeConfig(diameter=8.0, resolution=32)
        pupil = tel.get_pupil()
        obstructed = dataclasses.replace(tel, obstruction_ratio=0.3)
        assert obstructed.get_pupil() is not pupil
        assert obstructed.get_pupil().sum() < pupil.sum()
        assert tel.get_pupil() is pupil

    def test_concurrent_access(self):
        """Concurrent callers all receive the same pupil instance."""
        tel = TelescopeConfig(diameter=8.0, resolution=128)
        with ThreadPoolExecutor(max_workers=8) as pool:
            pupils = list(pool.map(lambda _: tel.get_pupil(), range(16)))
        assert all(p is pupils[0] for p in pupils)

    def test_deepcopy_gets_own_pupil(self):
        """A deep copy is equal but samples its own pupil."""
        tel = TelescopeConfig(diameter=8.0, resolution=16, obstruction_ratio=0.2)
        pupil = tel.get_pupil()
        clone = copy.deepcopy(tel)
        assert clone == tel
        assert clone.get_pupil() is not pupil
        assert np.array_equal(clone.get_pupil(), pupil)
        assert tel.get_pupil() is pupil

    def test_pickle_round_trip(self):
        """Configs survive pickling, e.g. to reach a process pool."""
        tel = TelescopeConfig(
            diameter=8.0,
            resolution=16,
            precompute_pupil=True,
            aberration=VonKarmanAtmosphere(r0=0.15, L0=30.0),
        )
        restored = pickle.loads(pickle.dumps(tel))
        assert restored.diameter == tel.diameter
        assert restored.resolution == tel.resolution
        assert restored.aberration.r0 == 0.15
        assert restored._pupil is not None
        assert restored.get_pupil() is not tel.get_pupil()
        assert np.array_equal(restored.get_pupil(), tel.get_pupil())

    def test_pickled_lazy_pupil(self):
        tel = TelescopeConfig(diameter=8.0, resolution=16)
        tel.get_pupil()
        restored = pickle.loads(pickle.dumps(tel))
        assert restored._pupil is None
        assert restored.get_pupil().shape == (16, 16)

    def test_not_shared_between_instances(self):
        tel1 = TelescopeConfig(diameter=8.0, resolution=32)
        tel2 = TelescopeConfig(diameter=8.0, resolution=32)
        assert tel1.get_pupil() is not tel2.get_pupil()
        assert np.array_equal(tel1.get_pupil(), tel2.get_pupil())


class TestIntegrationSettings:
    """Tests for quadrature settings validation."""

    def test_defaults(self):
        settings = IntegrationSettings()
        assert settings.epsabs > 0
        assert settings.limit >= 50
        assert settings.workers is None

    def test_negative_tolerance(self):
        with pytest.raises(ConfigurationError, match="non-negative"):
            IntegrationSettings(epsabs=-1.0)

    def test_zero_tolerances(self):
        with pytest.raises(ConfigurationError, match="positive"):
            IntegrationSettings(epsabs=0.0, epsrel=0.0)

    def test_invalid_limit_and_workers(self):
        with pytest.raises(ConfigurationError, match="limit"):
            IntegrationSettings(limit=0)
        with pytest.raises(ConfigurationError, match="workers"):
            IntegrationSettings(workers=0)
