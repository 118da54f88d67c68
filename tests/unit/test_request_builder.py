"""Tests for RequestBuilder."""
import json

import pytest

from igmobile.core.api import APIConfig, RequestBuilder, MultipartPart, SignedBody, FormBody, MultipartBody
from igmobile.core.crypto import sign


class TestDefaultHeaders:
    """Tests for headers every request carries."""

    def test_device_headers(self, builder, device):
        request = builder.build_plain_request('GET', 'https://example/api', device)

        assert request.header('User-Agent') == device.user_agent
        assert request.header('X-IG-Device-ID') == str(device.device_guid)
        assert request.header('X-IG-Android-ID') == device.device_id
        assert request.header('Cookie2') == '$Version=1'
        assert request.header('x-ig-capabilities') == '3brTBw=='

    def test_user_agent_override(self, device):
        builder = RequestBuilder(APIConfig(user_agent='custom/1.0'))

        request = builder.build_plain_request('GET', 'https://example/api', device)

        assert request.header('User-Agent') == 'custom/1.0'

    def test_extra_headers_from_config(self, device):
        builder = RequestBuilder(APIConfig(extra_headers={'X-Test': '1'}))

        request = builder.build_plain_request('GET', 'https://example/api', device)

        assert request.header('X-Test') == '1'


class TestPlainRequest:
    """Tests for unsigned requests."""

    def test_no_body_without_fields(self, builder, device):
        request = builder.build_plain_request('get', 'https://example/api', device)

        assert request.method == 'GET'
        assert request.body is None

    def test_form_fields_keep_order(self, builder, device):
        request = builder.build_plain_request(
            'POST', 'https://example/api', device, [('b', 2), ('a', 'x')]
        )

        assert isinstance(request.body, FormBody)
        assert request.body.fields == (('b', '2'), ('a', 'x'))

    def test_descriptor_is_immutable(self, builder, device):
        request = builder.build_plain_request('GET', 'https://example/api', device)

        with pytest.raises(AttributeError):
            request.uri = 'https://other'


class TestSignedRequest:
    """Tests for signed requests."""

    def test_body_and_headers_carry_same_envelope(self, builder, device):
        request = builder.build_signed_request('POST', 'https://example/api', device, {'media_id': '1_2'})

        assert isinstance(request.body, SignedBody)
        fields = request.body.as_dict()
        assert fields['signed_body'] == request.header('signed_body')
        assert fields['ig_sig_key_version'] == request.header('ig_sig_key_version') == '4'

    def test_envelope_signs_transmitted_payload(self, builder, device, config):
        request = builder.build_signed_request('POST', 'https://example/api', device, {'a': 'b'})

        signature, payload = request.body.as_dict()['signed_body'].split('.', 1)
        assert json.loads(payload) == {'a': 'b'}
        assert signature == sign(config.signature_key, payload)

    def test_same_fields_same_request(self, builder, device):
        first = builder.build_signed_request('POST', 'https://example/api', device, {'a': 1})
        second = builder.build_signed_request('POST', 'https://example/api', device, {'a': 1})

        assert first == second


class TestMultipartRequest:
    """Tests for multipart requests."""

    def test_parts_and_boundary(self, builder, device):
        request = builder.build_multipart_request(
            'https://example/upload',
            device,
            [MultipartPart('upload_id', '1'), MultipartPart('photo', b'\xff', filename='a.jpg')],
            boundary='1',
            extra_headers=[('Session-ID', 's')]
        )

        assert request.method == 'POST'
        assert isinstance(request.body, MultipartBody)
        assert request.body.boundary == '1'
        assert request.body.part('photo').filename == 'a.jpg'
        assert request.body.part('missing') is None
        assert request.header('Session-ID') == 's'

    def test_random_boundary_when_omitted(self, builder, device):
        request = builder.build_multipart_request('https://example/upload', device, [])

        assert request.body.boundary
