"""Builds device identities from a catalog of real Android devices."""
import random
import uuid
from dataclasses import dataclass
from typing import Dict, Optional

from .models import DeviceIdentity, AndroidVersion, generate_device_id
from ..constants import USER_AGENT_TEMPLATE, IG_APP_VERSION, LOCALE


@dataclass(frozen=True)
class DeviceProfile:
    """Static hardware description of a catalog device."""
    manufacturer: str
    model: str
    device_name: str
    brand: str
    fingerprint: str
    board: str
    bootloader: str
    dpi: str
    resolution: str
    cpu: str


DEVICE_CATALOG: Dict[str, DeviceProfile] = {
    'pixel-xl': DeviceProfile(
        manufacturer='Google',
        model='Pixel XL',
        device_name='marlin',
        brand='google',
        fingerprint='google/marlin/marlin:7.1.1/NOF26V/3725044:user/release-keys',
        board='marlin',
        bootloader='8996-012001-1611091517',
        dpi='560dpi',
        resolution='1440x2560',
        cpu='qcom',
    ),
    'galaxy-s7': DeviceProfile(
        manufacturer='samsung',
        model='SM-G930F',
        device_name='herolte',
        brand='samsung',
        fingerprint='samsung/heroltexx/herolte:7.0/NRD90M/G930FXXU1DQAS:user/release-keys',
        board='universal8890',
        bootloader='G930FXXU1DQAS',
        dpi='640dpi',
        resolution='1440x2560',
        cpu='samsungexynos8890',
    ),
    'lg-g5': DeviceProfile(
        manufacturer='LGE/lge',
        model='LG-H850',
        device_name='h1',
        brand='lge',
        fingerprint='lge/h1_global_com/h1:6.0.1/MMB29M/1606314361d44:user/release-keys',
        board='msm8996',
        bootloader='unknown',
        dpi='640dpi',
        resolution='1440x2392',
        cpu='h1',
    ),
    'oneplus-3t': DeviceProfile(
        manufacturer='OnePlus',
        model='ONEPLUS A3010',
        device_name='OnePlus3T',
        brand='OnePlus',
        fingerprint='OnePlus/OnePlus3/OnePlus3T:7.1.1/NMF26F/12211016:user/release-keys',
        board='msm8996',
        bootloader='unknown',
        dpi='420dpi',
        resolution='1080x1920',
        cpu='qcom',
    ),
}


def build_user_agent(profile: DeviceProfile, app_version: str = IG_APP_VERSION, locale: str = LOCALE) -> str:
    """Format the User-Agent for a device profile."""
    version = AndroidVersion.from_fingerprint(profile.fingerprint)
    return USER_AGENT_TEMPLATE.format(
        app_version=app_version,
        android_api=version.api_level if version else '23',
        android_release=version.version_number if version else '6.0',
        dpi=profile.dpi,
        resolution=profile.resolution,
        manufacturer=profile.manufacturer,
        model=profile.model,
        device=profile.device_name,
        cpu=profile.cpu,
        locale=locale,
    )


def create_device(
    name: Optional[str] = None,
    app_version: str = IG_APP_VERSION,
    rng: Optional[random.Random] = None
) -> DeviceIdentity:
    """
    Create a fresh device identity.

    Args:
        name: Catalog key; a random catalog device is used when omitted
        app_version: App version advertised in the User-Agent
        rng: Optional random generator (for reproducible tests)

    Returns:
        New DeviceIdentity with freshly generated ids

    Raises:
        KeyError: If name is not in the catalog
    """
    rng = rng or random.Random()
    if name is None:
        name = rng.choice(sorted(DEVICE_CATALOG))
    profile = DEVICE_CATALOG[name]

    device_guid = uuid.UUID(int=rng.getrandbits(128), version=4)
    phone_id = uuid.UUID(int=rng.getrandbits(128), version=4)

    return DeviceIdentity(
        device_guid=device_guid,
        phone_id=phone_id,
        device_id=generate_device_id(device_guid.hex),
        hardware_manufacturer=profile.manufacturer,
        hardware_model=profile.model,
        device_name=profile.device_name,
        firmware_brand=profile.brand,
        firmware_fingerprint=profile.fingerprint,
        android_board=profile.board,
        android_bootloader=profile.bootloader,
        dpi=profile.dpi,
        resolution=profile.resolution,
        cpu=profile.cpu,
        user_agent=build_user_agent(profile, app_version),
    )
