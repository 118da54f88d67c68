"""Tests for device identities."""
import random
import uuid

import pytest

from igmobile.core.device import (
    AndroidVersion,
    DeviceIdentity,
    DEVICE_CATALOG,
    create_device,
    generate_device_id,
)


class TestAndroidVersion:
    """Tests for AndroidVersion."""

    @pytest.mark.parametrize('release, api_level', [
        ('7.1.1', '25'),
        ('7.0', '24'),
        ('6.0.1', '23'),
        ('8.1', '27'),
    ])
    def test_from_string(self, release, api_level):
        assert AndroidVersion.from_string(release).api_level == api_level

    def test_unknown_release(self):
        assert AndroidVersion.from_string('12') is None
        assert AndroidVersion.from_string('') is None

    def test_prefix_is_not_a_match(self):
        assert AndroidVersion.from_string('7.10') is None

    def test_from_fingerprint(self):
        version = AndroidVersion.from_fingerprint(
            'google/marlin/marlin:7.1.1/NOF26V/3725044:user/release-keys'
        )

        assert version.codename == 'Nougat'
        assert version.version_number == '7.1'

    def test_bad_fingerprint(self):
        assert AndroidVersion.from_fingerprint('garbage') is None


class TestCreateDevice:
    """Tests for create_device()."""

    def test_catalog_device(self, device):
        assert device.hardware_manufacturer == 'Google'
        assert device.hardware_model == 'Pixel XL'
        assert device.android_version.api_level == '25'

    def test_ids(self, device):
        assert device.device_id.startswith('android-')
        assert len(device.device_id) == len('android-') + 16
        assert device.device_guid.version == 4
        assert device.phone_id != device.device_guid

    def test_reproducible_with_seed(self):
        first = create_device('galaxy-s7', rng=random.Random(1))
        second = create_device('galaxy-s7', rng=random.Random(1))

        assert first == second

    def test_random_catalog_entry(self):
        device = create_device(rng=random.Random(3))

        assert device.hardware_model in {p.model for p in DEVICE_CATALOG.values()}

    def test_unknown_name(self):
        with pytest.raises(KeyError):
            create_device('nokia-3310')

    def test_user_agent(self, device):
        assert device.user_agent == (
            'Instagram 35.0.0.20.96 Android (25/7.1; 560dpi; 1440x2560; '
            'Google; Pixel XL; marlin; qcom; en_US)'
        )

    def test_every_catalog_device_has_known_android(self):
        for name in DEVICE_CATALOG:
            assert create_device(name).android_version is not None


class TestDeviceIdentity:
    """Tests for DeviceIdentity serialization."""

    def test_dict_round_trip(self, device):
        assert DeviceIdentity.from_dict(device.to_dict()) == device

    def test_to_dict_uses_strings(self, device):
        data = device.to_dict()

        assert data['device_guid'] == str(device.device_guid)
        uuid.UUID(data['phone_id'])

    def test_generate_device_id_is_stable(self):
        assert generate_device_id('seed') == generate_device_id('seed')
        assert generate_device_id('seed') != generate_device_id('other')
