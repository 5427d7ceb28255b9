import pytest

from ldstore.errors import StoreError
from ldstore.transport import (HttpResponse, cors_proxy_transport,
                               requests_transport, validate_url)


class FakeResponse(object):
    def __init__(self, status_code=200, headers=None, text='', url=None):
        self.status_code = status_code
        self.headers = headers or {}
        self.text = text
        self.url = url


class FakeSession(object):
    def __init__(self, response=None, error=None):
        self.response = response
        self.error = error
        self.calls = []

    def request(self, method, url, headers=None, data=None, **kwargs):
        self.calls.append((method, url, headers, data, kwargs))
        if self.error is not None:
            raise self.error
        return self.response


class TestValidateUrl:
    def test_http(self):
        validate_url('http://localhost:8080/ldp/')

    def test_unsupported_scheme(self):
        with pytest.raises(StoreError) as exc_info:
            validate_url('ftp://example.org/')
        assert exc_info.value.type == 'ldstore.InvalidUrl'

    def test_relative(self):
        with pytest.raises(StoreError):
            validate_url('/people/alice')

    def test_secure(self):
        validate_url('https://example.org/', secure=True)
        with pytest.raises(StoreError):
            validate_url('http://example.org/', secure=True)

    def test_host_characters(self):
        validate_url('http://user@example.org:8080/')
        for url in ['http://exam!ple.org/', 'http://ex%41mple.org/']:
            with pytest.raises(StoreError) as exc_info:
                validate_url(url)
            assert exc_info.value.type == 'ldstore.InvalidUrl'


class TestRequestsTransport:
    def test_send(self):
        session = FakeSession(FakeResponse(
            201, {'ETag': '"1"', 'Location': 'r1'}, '', 'http://e.org/c/'))
        send = requests_transport(session=session, timeout=5)
        response = send('POST', 'http://e.org/c/',
                        headers={'Content-Type': 'text/turtle'},
                        data='<> <http://schema.org/name> "ä" .\n')
        assert response == HttpResponse(
            201, {'etag': '"1"', 'location': 'r1'}, '', 'http://e.org/c/')
        method, url, headers, data, kwargs = session.calls[0]
        assert method == 'POST'
        assert data == '<> <http://schema.org/name> "ä" .\n'.encode('utf-8')
        assert kwargs == {'timeout': 5}

    def test_wraps_errors(self):
        cause = IOError('connection refused')
        send = requests_transport(session=FakeSession(error=cause))
        with pytest.raises(StoreError) as exc_info:
            send('GET', 'http://e.org/doc')
        assert exc_info.value.type == 'ldstore.TransportError'
        assert exc_info.value.cause is cause

    def test_invalid_url_is_not_sent(self):
        session = FakeSession(FakeResponse())
        send = requests_transport(secure=True, session=session)
        with pytest.raises(StoreError) as exc_info:
            send('GET', 'http://e.org/doc')
        assert exc_info.value.type == 'ldstore.InvalidUrl'
        assert session.calls == []


class TestAiohttpTransport:
    def test_invalid_url(self):
        pytest.importorskip('aiohttp')
        from ldstore.transport import aiohttp_transport

        send = aiohttp_transport()
        with pytest.raises(StoreError) as exc_info:
            send('GET', 'file:///etc/passwd')
        assert exc_info.value.type == 'ldstore.InvalidUrl'


def test_cors_proxy_transport():
    calls = []

    def transport(method, url, headers=None, data=None):
        calls.append((method, url, headers, data))
        return HttpResponse(200, {}, '', url)

    send = cors_proxy_transport('http://proxy.example/', transport)
    send('PUT', 'http://e.org/doc#me', headers={'A': 'b'}, data='x')
    assert calls == [(
        'PUT', 'http://proxy.example/?url=http%3A%2F%2Fe.org%2Fdoc%23me',
        {'A': 'b'}, 'x')]
