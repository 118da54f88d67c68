"""Request builder for API requests."""
import uuid
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, Tuple, Union

from ..config import APIConfig
from ...constants import (
    HEADER_USER_AGENT,
    HEADER_ACCEPT_LANGUAGE,
    HEADER_IG_CAPABILITIES,
    HEADER_IG_CONNECTION_TYPE,
    HEADER_IG_CONNECTION_SPEED,
    HEADER_IG_APP_ID,
    HEADER_IG_DEVICE_ID,
    HEADER_IG_ANDROID_ID,
    HEADER_COOKIE2,
    HEADER_IG_SIGNATURE,
    HEADER_IG_SIGNATURE_KEY_VERSION,
    IG_CAPABILITIES,
    IG_CONNECTION_TYPE,
    IG_CONNECTION_SPEED,
    IG_APP_ID,
    COOKIE2_VALUE,
)
from ...crypto import SignatureEngine, SignedPayload
from ...device import DeviceIdentity

Headers = Tuple[Tuple[str, str], ...]


@dataclass(frozen=True)
class FormBody:
    """URL-encoded form fields, in order."""
    fields: Tuple[Tuple[str, str], ...]

    def as_dict(self) -> Dict[str, str]:
        return dict(self.fields)


@dataclass(frozen=True)
class SignedBody(FormBody):
    """Form body carrying a signed envelope ('signed_body', 'ig_sig_key_version')."""
    signed: Optional[SignedPayload] = None


@dataclass(frozen=True)
class MultipartPart:
    """
    One part of a multipart/form-data body.

    Attributes:
        name: Form field name
        data: Text value or raw bytes
        filename: Optional file name (binary parts)
        headers: Extra part headers, e.g. Content-Range
    """
    name: str
    data: Union[str, bytes]
    filename: Optional[str] = None
    headers: Headers = ()


@dataclass(frozen=True)
class MultipartBody:
    """multipart/form-data body with a fixed boundary."""
    parts: Tuple[MultipartPart, ...]
    boundary: str

    def part(self, name: str) -> Optional[MultipartPart]:
        for item in self.parts:
            if item.name == name:
                return item
        return None


Body = Union[FormBody, SignedBody, MultipartBody]


@dataclass(frozen=True)
class RequestDescriptor:
    """
    Transport-agnostic HTTP request.

    Immutable once built.
    """
    method: str
    uri: str
    headers: Headers = ()
    body: Optional[Body] = None

    @property
    def header_map(self) -> Dict[str, str]:
        return dict(self.headers)

    def header(self, name: str) -> Optional[str]:
        """Case-insensitive header lookup."""
        lowered = name.lower()
        for key, value in self.headers:
            if key.lower() == lowered:
                return value
        return None


def _as_pairs(fields: Optional[Union[Mapping[str, Any], Iterable[Tuple[str, Any]]]]) -> Tuple[Tuple[str, str], ...]:
    if fields is None:
        return ()
    items = fields.items() if isinstance(fields, Mapping) else fields
    return tuple((str(key), str(value)) for key, value in items)


class RequestBuilder:
    """
    Builds request descriptors.

    Pure: every session-derived value (csrf token, user id) is passed in
    by the caller.
    """

    def __init__(self, config: Optional[APIConfig] = None, signer: Optional[SignatureEngine] = None):
        """Initializes request builder."""
        self.config = config or APIConfig.default()
        self.signer = signer or SignatureEngine(
            self.config.signature_key,
            self.config.signature_key_version
        )

    def default_headers(self, device: DeviceIdentity) -> List[Tuple[str, str]]:
        """Builds the headers every request carries."""
        headers = [
            (HEADER_USER_AGENT, self.config.user_agent or device.user_agent),
            (HEADER_ACCEPT_LANGUAGE, self.config.accept_language),
            (HEADER_IG_CAPABILITIES, IG_CAPABILITIES),
            (HEADER_IG_CONNECTION_TYPE, IG_CONNECTION_TYPE),
            (HEADER_IG_CONNECTION_SPEED, IG_CONNECTION_SPEED),
            (HEADER_IG_APP_ID, IG_APP_ID),
            (HEADER_IG_DEVICE_ID, str(device.device_guid)),
            (HEADER_IG_ANDROID_ID, device.device_id),
            (HEADER_COOKIE2, COOKIE2_VALUE),
        ]
        headers.extend(self.config.extra_headers.items())
        return headers

    def build_plain_request(
        self,
        method: str,
        uri: str,
        device: DeviceIdentity,
        fields: Optional[Union[Mapping[str, Any], Sequence[Tuple[str, Any]]]] = None,
        extra_headers: Optional[Sequence[Tuple[str, str]]] = None
    ) -> RequestDescriptor:
        """
        Builds an unsigned request.

        Args:
            method: HTTP method
            uri: Absolute URI
            device: Device identity
            fields: Optional form fields
            extra_headers: Headers appended after the defaults

        Returns:
            RequestDescriptor
        """
        headers = self.default_headers(device)
        if extra_headers:
            headers.extend(extra_headers)
        body = FormBody(_as_pairs(fields)) if fields is not None else None
        return RequestDescriptor(method.upper(), uri, tuple(headers), body)

    def build_signed_request(
        self,
        method: str,
        uri: str,
        device: DeviceIdentity,
        fields: Any
    ) -> RequestDescriptor:
        """
        Builds a request with a signed body.

        The payload is serialized once; the same string is signed and sent.
        The envelope and key version travel both as form fields and as
        headers.

        Args:
            method: HTTP method
            uri: Absolute URI
            device: Device identity
            fields: Mapping or payload dataclass

        Returns:
            RequestDescriptor

        Raises:
            InvalidArgumentError: If fields serialize to an empty payload
        """
        signed = self.signer.sign_payload(fields)
        key_version = self.signer.key_version
        envelope = signed.envelope

        headers = self.default_headers(device)
        headers.append((HEADER_IG_SIGNATURE, envelope))
        headers.append((HEADER_IG_SIGNATURE_KEY_VERSION, key_version))

        body = SignedBody(
            fields=(
                (HEADER_IG_SIGNATURE, envelope),
                (HEADER_IG_SIGNATURE_KEY_VERSION, key_version),
            ),
            signed=signed
        )
        return RequestDescriptor(method.upper(), uri, tuple(headers), body)

    def build_multipart_request(
        self,
        uri: str,
        device: DeviceIdentity,
        parts: Sequence[MultipartPart],
        boundary: Optional[str] = None,
        extra_headers: Optional[Sequence[Tuple[str, str]]] = None
    ) -> RequestDescriptor:
        """
        Builds a multipart/form-data POST.

        Args:
            uri: Absolute URI
            device: Device identity
            parts: Body parts, in order
            boundary: Multipart boundary (random when omitted)
            extra_headers: Headers appended after the defaults
        """
        headers = self.default_headers(device)
        if extra_headers:
            headers.extend(extra_headers)
        body = MultipartBody(tuple(parts), boundary or uuid.uuid4().hex)
        return RequestDescriptor('POST', uri, tuple(headers), body)
