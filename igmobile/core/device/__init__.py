"""Android device identity."""
from .models import DeviceIdentity, AndroidVersion, ANDROID_VERSIONS, generate_device_id
from .factory import DeviceProfile, DEVICE_CATALOG, create_device, build_user_agent

__all__ = [
    'DeviceIdentity',
    'AndroidVersion',
    'ANDROID_VERSIONS',
    'DeviceProfile',
    'DEVICE_CATALOG',
    'create_device',
    'build_user_agent',
    'generate_device_id',
]
