"""
HTTP transport using Requests.

.. module:: ldstore.transport.requests
  :synopsis: HTTP transport using Requests
"""
import logging

from ldstore.errors import StoreError
from ldstore.transport import HttpResponse, lower_headers, validate_url

log = logging.getLogger(__name__)


def requests_transport(secure=False, session=None, **kwargs):
    """
    Create a Requests transport.
    Can be used to setup extra Requests args such as verify, cert, timeout,
    auth or others.
    :param secure: require all requests to use HTTPS (default: False).
    :param session: a requests.Session to reuse connections and cookies.
    :param **kwargs: extra keyword args for the Requests request() call.
    :return: the transport function.
    """
    import requests

    if session is None:
        session = requests.Session()

    def send(method, url, headers=None, data=None):
        """
        Performs a single HTTP request.
        :param method: the HTTP method.
        :param url: the URL.
        :param headers: the request headers.
        :param data: the request body.
        :return: the HttpResponse.
        """
        try:
            validate_url(url, secure)
            log.debug('%s %r', method, url)
            if isinstance(data, str):
                data = data.encode('utf-8')
            response = session.request(
                method, url, headers=headers or {}, data=data, **kwargs)
            return HttpResponse(
                response.status_code, lower_headers(response.headers),
                response.text, response.url)
        except StoreError as e:
            raise e
        except Exception as cause:
            raise StoreError(
                'Could not complete the HTTP request.',
                'ldstore.TransportError', {'method': method, 'url': url},
                cause=cause)

    return send
