"""Protocol constants of the mobile API."""

BASE_URL = 'https://i.instagram.com'
API_PATH = '/api/v1'

IG_APP_VERSION = '35.0.0.20.96'
IG_SIGNATURE_KEY = '937463b5272b5d60e9d20f0f8d7d192193dd95095a3ad43725d494300a5ea5fc'
IG_SIGNATURE_KEY_VERSION = '4'

USER_AGENT_TEMPLATE = (
    'Instagram {app_version} Android ({android_api}/{android_release}; '
    '{dpi}; {resolution}; {manufacturer}; {model}; {device}; {cpu}; {locale})'
)

# Signed body field names, also used as duplicate headers
HEADER_IG_SIGNATURE = 'signed_body'
HEADER_IG_SIGNATURE_KEY_VERSION = 'ig_sig_key_version'

HEADER_USER_AGENT = 'User-Agent'
HEADER_ACCEPT_LANGUAGE = 'Accept-Language'
HEADER_IG_CAPABILITIES = 'X-IG-Capabilities'
HEADER_IG_CONNECTION_TYPE = 'X-IG-Connection-Type'
HEADER_IG_CONNECTION_SPEED = 'X-IG-Connection-Speed'
HEADER_IG_APP_ID = 'X-IG-App-ID'
HEADER_IG_DEVICE_ID = 'X-IG-Device-ID'
HEADER_IG_ANDROID_ID = 'X-IG-Android-ID'
HEADER_COOKIE2 = 'Cookie2'
HEADER_SESSION_ID = 'Session-ID'
HEADER_JOB = 'job'
HEADER_CONTENT_RANGE = 'Content-Range'

IG_CAPABILITIES = '3brTBw=='
IG_CONNECTION_TYPE = 'WIFI'
IG_CONNECTION_SPEED = '-1kbps'
IG_APP_ID = '567067343352427'
COOKIE2_VALUE = '$Version=1'
ACCEPT_LANGUAGE = 'en-US'
LOCALE = 'en_US'

CSRFTOKEN = 'csrftoken'
TIMEZONE_OFFSET = 43200

IMAGE_COMPRESSION = '{"lib_name":"jt","lib_version":"1.3.0","quality":"87"}'

# Upload
VIDEO_CHUNK_SIZE = 204800
VIDEO_CHUNK_COUNT = 2
MEDIA_TYPE_PHOTO = 1
MEDIA_TYPE_VIDEO = 2
DEFAULT_VIDEO_DURATION_MS = 22400
