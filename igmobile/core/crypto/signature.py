"""Request signing with HMAC-SHA256."""
import json
from dataclasses import dataclass, is_dataclass, asdict
from typing import Any, Mapping, Union

from Crypto.Hash import HMAC, SHA256

from ..exceptions import InvalidArgumentError


def canonical_json(payload: Union[Mapping[str, Any], Any]) -> str:
    """
    Serialize a request payload the one way every signed body is serialized.

    Keys keep their insertion (or dataclass field) order, separators are
    compact and non-ASCII characters are escaped, so the output is stable
    and safe to place in an HTTP header.

    Args:
        payload: Mapping or payload dataclass

    Returns:
        JSON string
    """
    if is_dataclass(payload) and not isinstance(payload, type):
        payload = asdict(payload)
    return json.dumps(payload, separators=(',', ':'), ensure_ascii=True)


def sign(secret_key: Union[str, bytes], canonical_payload: Union[str, bytes]) -> str:
    """
    Compute the hex signature of an already serialized payload.

    Args:
        secret_key: Shared signature key
        canonical_payload: Exact bytes (or text) that will be transmitted

    Returns:
        Lowercase hex HMAC-SHA256 digest

    Raises:
        InvalidArgumentError: If the payload is None or empty
    """
    if not canonical_payload:
        raise InvalidArgumentError("Refusing to sign an empty payload")
    if not secret_key:
        raise InvalidArgumentError("Signature key must not be empty")

    if isinstance(secret_key, str):
        secret_key = secret_key.encode('utf-8')
    if isinstance(canonical_payload, str):
        canonical_payload = canonical_payload.encode('utf-8')

    mac = HMAC.new(secret_key, digestmod=SHA256)
    mac.update(canonical_payload)
    return mac.hexdigest()


def build_signed_envelope(signature: str, payload: str) -> str:
    """Join signature and payload as '{signature}.{payload}'."""
    return f"{signature}.{payload}"


@dataclass(frozen=True)
class SignedPayload:
    """
    One serialization of a payload together with its signature.

    The same `payload` string is used for the HMAC and for transmission.
    """
    payload: str
    signature: str

    @property
    def envelope(self) -> str:
        return build_signed_envelope(self.signature, self.payload)


class SignatureEngine:
    """
    Signs request payloads with a fixed key.

    Example:
        >>> engine = SignatureEngine(key, key_version='4')
        >>> signed = engine.sign_payload({'_uuid': guid, 'media_id': '1_2'})
        >>> signed.envelope
        '3f0c...{"_uuid":"...","media_id":"1_2"}'
    """

    def __init__(self, secret_key: str, key_version: str):
        """
        Initialize signature engine.

        Args:
            secret_key: Shared signature key
            key_version: Key version constant sent next to each signature
        """
        self._secret_key = secret_key
        self.key_version = key_version

    def sign(self, canonical_payload: Union[str, bytes]) -> str:
        return sign(self._secret_key, canonical_payload)

    def sign_payload(self, payload: Union[Mapping[str, Any], Any]) -> SignedPayload:
        """Serialize once and sign the result."""
        if payload is None:
            raise InvalidArgumentError("Refusing to sign an empty payload")
        serialized = canonical_json(payload)
        if serialized in ('{}', '[]', 'null', '""'):
            raise InvalidArgumentError("Refusing to sign an empty payload")
        return SignedPayload(payload=serialized, signature=self.sign(serialized))
