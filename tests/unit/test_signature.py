"""Tests for request signing."""
import hashlib
import hmac
from dataclasses import dataclass

import pytest

from igmobile.core.constants import IG_SIGNATURE_KEY
from igmobile.core.crypto import (
    SignatureEngine,
    canonical_json,
    sign,
    build_signed_envelope,
    comment_breadcrumb,
)
from igmobile.core.exceptions import InvalidArgumentError


@dataclass
class _Payload:
    _uuid: str
    media_id: str


class TestCanonicalJson:
    """Tests for the single payload serializer."""

    def test_compact_and_ordered(self):
        assert canonical_json({'b': 1, 'a': 'x'}) == '{"b":1,"a":"x"}'

    def test_dataclass_uses_field_order(self):
        assert canonical_json(_Payload('g', '1_2')) == '{"_uuid":"g","media_id":"1_2"}'

    def test_non_ascii_is_escaped(self):
        assert canonical_json({'caption': 'café'}) == '{"caption":"caf\\u00e9"}'

    def test_nested_dataclasses(self):
        @dataclass
        class Inner:
            x: int

        @dataclass
        class Outer:
            inner: Inner

        assert canonical_json(Outer(Inner(1))) == '{"inner":{"x":1}}'


class TestSign:
    """Tests for sign()."""

    def test_matches_hmac_sha256(self):
        payload = '{"a":1}'
        expected = hmac.new(IG_SIGNATURE_KEY.encode(), payload.encode(), hashlib.sha256).hexdigest()

        assert sign(IG_SIGNATURE_KEY, payload) == expected

    def test_deterministic(self):
        assert sign('k', '{"a":1}') == sign('k', '{"a":1}')

    def test_lowercase_hex(self):
        signature = sign('k', 'payload')

        assert len(signature) == 64
        assert signature == signature.lower()

    def test_single_field_change_changes_signature(self):
        first = canonical_json({'_uuid': 'g', 'media_id': '1'})
        second = canonical_json({'_uuid': 'g', 'media_id': '2'})

        assert sign('k', first) != sign('k', second)

    @pytest.mark.parametrize('payload', ['', None, b''])
    def test_empty_payload_rejected(self, payload):
        with pytest.raises(InvalidArgumentError):
            sign('k', payload)

    def test_empty_key_rejected(self):
        with pytest.raises(InvalidArgumentError):
            sign('', 'payload')


class TestSignatureEngine:
    """Tests for SignatureEngine."""

    def test_envelope_format(self):
        assert build_signed_envelope('abc', '{"a":1}') == 'abc.{"a":1}'

    def test_sign_payload_signs_the_transmitted_string(self):
        engine = SignatureEngine('k', '4')
        signed = engine.sign_payload({'a': 1})

        assert signed.payload == '{"a":1}'
        assert signed.signature == sign('k', signed.payload)
        assert signed.envelope == f"{signed.signature}.{signed.payload}"

    def test_key_version_exposed(self):
        assert SignatureEngine('k', '4').key_version == '4'

    @pytest.mark.parametrize('payload', [None, {}])
    def test_empty_payload_rejected(self, payload):
        with pytest.raises(InvalidArgumentError):
            SignatureEngine('k', '4').sign_payload(payload)


class TestCommentBreadcrumb:
    """Tests for comment breadcrumbs."""

    def test_format(self):
        import base64
        import random

        crumb = comment_breadcrumb('hello', rng=random.Random(1), now_ms=1500000000000)
        signed, body, trailing = crumb.split('\n')

        assert trailing == ''
        data = base64.b64decode(body).decode('ascii')
        length, _, _, now = data.split(' ')
        assert length == '5'
        assert now == '1500000000000'
        expected = hmac.new(b'iN4$aGr0m', data.encode('ascii'), hashlib.sha256).digest()
        assert base64.b64decode(signed) == expected
