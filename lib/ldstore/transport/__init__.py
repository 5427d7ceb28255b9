"""
HTTP transports used by the LDP store.

A transport is a callable ``send(method, url, headers=None, data=None)``
that performs a single request and returns an :class:`HttpResponse`.
"""
import string
import urllib.parse as urllib_parse
from collections import namedtuple

from ldstore.errors import StoreError

HttpResponse = namedtuple('HttpResponse', ['status', 'headers', 'body', 'url'])


def validate_url(url, secure=False):
    """
    Checks that a URL can be dereferenced by a transport.

    :param url: the URL.
    :param secure: require the "https" scheme.
    """
    pieces = urllib_parse.urlparse(url)
    if (not all([pieces.scheme, pieces.netloc]) or
            pieces.scheme not in ['http', 'https'] or
            not set(pieces.netloc) <= set(
                string.ascii_letters + string.digits + '-.:@')):
        raise StoreError(
            'URL could not be dereferenced; only "http" and "https" '
            'URLs are supported.',
            'ldstore.InvalidUrl', {'url': url})
    if secure and pieces.scheme != 'https':
        raise StoreError(
            'URL could not be dereferenced; secure mode enabled and '
            'the URL\'s scheme is not "https".',
            'ldstore.InvalidUrl', {'url': url})


def lower_headers(headers):
    return {k.lower(): v for k, v in headers.items()}


def requests_transport(**kwargs):
    import ldstore.transport.requests

    return ldstore.transport.requests.requests_transport(**kwargs)


def aiohttp_transport(**kwargs):
    import ldstore.transport.aiohttp

    return ldstore.transport.aiohttp.aiohttp_transport(**kwargs)


def cors_proxy_transport(proxy, transport):
    """
    Wraps a transport so every request goes through a CORS proxy.

    The proxied URL is passed percent-encoded in the "url" query parameter.

    :param proxy: the proxy endpoint.
    :param transport: the transport to wrap.

    :return: the wrapping transport.
    """
    def send(method, url, headers=None, data=None):
        proxied = proxy + '?url=' + urllib_parse.quote(url, safe='')
        return transport(method, proxied, headers=headers, data=data)

    return send
