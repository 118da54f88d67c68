"""
Device identity models.

A DeviceIdentity is created once per client instance and never changes;
every request builder reads it.
"""
import uuid
from dataclasses import dataclass
from typing import Optional, Dict, Any, List, Tuple

from Crypto.Hash import MD5


@dataclass(frozen=True)
class AndroidVersion:
    """Android release as reported in the configure payloads."""
    codename: str
    version_number: str
    api_level: str

    @classmethod
    def from_string(cls, version: str) -> Optional['AndroidVersion']:
        """
        Match a version string such as '7.1.1' against known releases.

        Returns:
            AndroidVersion or None if the release is unknown
        """
        if not version:
            return None
        for entry in ANDROID_VERSIONS:
            if version == entry.version_number or version.startswith(entry.version_number + '.'):
                return entry
        return None

    @classmethod
    def from_fingerprint(cls, fingerprint: str) -> Optional['AndroidVersion']:
        """
        Extract the release from a firmware fingerprint.

        'google/marlin/marlin:7.1.1/NOF26V/3725044:user/release-keys' -> 7.1
        """
        try:
            release = fingerprint.split('/')[2].split(':')[1]
        except (AttributeError, IndexError):
            return None
        return cls.from_string(release)


_VERSIONS: List[Tuple[str, str, str]] = [
    ('Oreo', '8.1', '27'),
    ('Oreo', '8.0', '26'),
    ('Nougat', '7.1', '25'),
    ('Nougat', '7.0', '24'),
    ('Marshmallow', '6.0', '23'),
    ('Lollipop', '5.1', '22'),
    ('Lollipop', '5.0', '21'),
    ('KitKat', '4.4', '19'),
]

ANDROID_VERSIONS: List[AndroidVersion] = [
    AndroidVersion(codename, number, api) for codename, number, api in _VERSIONS
]


def generate_device_id(seed: Optional[str] = None) -> str:
    """Android id in the 'android-' + 16 hex chars form."""
    seed = seed or uuid.uuid4().hex
    digest = MD5.new(seed.encode('utf-8')).hexdigest()
    return f"android-{digest[:16]}"


@dataclass(frozen=True)
class DeviceIdentity:
    """
    Immutable identity of the emulated Android device.

    Attributes:
        device_guid: Device GUID sent as '_uuid' and 'guid'
        phone_id: Phone id, used in the rank token
        device_id: Android id ('android-...')
        hardware_manufacturer: e.g. 'samsung'
        hardware_model: e.g. 'SM-G930F'
        device_name: Device code name, e.g. 'herolte'
        firmware_brand: Brand part of the fingerprint
        firmware_fingerprint: Full build fingerprint
        android_board: Board name
        android_bootloader: Bootloader version
        dpi: Screen density ('640dpi')
        resolution: Screen resolution ('1440x2560')
        cpu: CPU / chipset name
        user_agent: Complete User-Agent header value
    """
    device_guid: uuid.UUID
    phone_id: uuid.UUID
    device_id: str
    hardware_manufacturer: str
    hardware_model: str
    device_name: str
    firmware_brand: str
    firmware_fingerprint: str
    android_board: str = ''
    android_bootloader: str = ''
    dpi: str = '640dpi'
    resolution: str = '1440x2560'
    cpu: str = 'qcom'
    user_agent: str = ''

    @property
    def android_version(self) -> Optional[AndroidVersion]:
        return AndroidVersion.from_fingerprint(self.firmware_fingerprint)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            'device_guid': str(self.device_guid),
            'phone_id': str(self.phone_id),
            'device_id': self.device_id,
            'hardware_manufacturer': self.hardware_manufacturer,
            'hardware_model': self.hardware_model,
            'device_name': self.device_name,
            'firmware_brand': self.firmware_brand,
            'firmware_fingerprint': self.firmware_fingerprint,
            'android_board': self.android_board,
            'android_bootloader': self.android_bootloader,
            'dpi': self.dpi,
            'resolution': self.resolution,
            'cpu': self.cpu,
            'user_agent': self.user_agent,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'DeviceIdentity':
        """Create from dictionary."""
        return cls(
            device_guid=uuid.UUID(data['device_guid']),
            phone_id=uuid.UUID(data['phone_id']),
            device_id=data['device_id'],
            hardware_manufacturer=data['hardware_manufacturer'],
            hardware_model=data['hardware_model'],
            device_name=data.get('device_name', ''),
            firmware_brand=data.get('firmware_brand', ''),
            firmware_fingerprint=data['firmware_fingerprint'],
            android_board=data.get('android_board', ''),
            android_bootloader=data.get('android_bootloader', ''),
            dpi=data.get('dpi', '640dpi'),
            resolution=data.get('resolution', '1440x2560'),
            cpu=data.get('cpu', 'qcom'),
            user_agent=data.get('user_agent', ''),
        )
