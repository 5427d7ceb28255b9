"""
HTTP transport using aiohttp.

.. module:: ldstore.transport.aiohttp
  :synopsis: HTTP transport using aiohttp
"""

import asyncio
import logging
import threading

from ldstore.errors import StoreError
from ldstore.transport import HttpResponse, lower_headers, validate_url

log = logging.getLogger(__name__)

# Background event loop (used when inside an existing async environment)
_background_loop = None
_background_thread = None
_background_lock = threading.Lock()


def _ensure_background_loop():
    """Start a persistent background event loop if not running."""
    global _background_loop, _background_thread
    with _background_lock:
        if _background_loop is None:
            _background_loop = asyncio.new_event_loop()

            def run_loop(loop):
                asyncio.set_event_loop(loop)
                loop.run_forever()

            _background_thread = threading.Thread(
                target=run_loop, args=(_background_loop,), daemon=True)
            _background_thread.start()
    return _background_loop


def aiohttp_transport(secure=False, **kwargs):
    """
    Create a transport that performs requests with aiohttp.

    The returned transport is synchronous, like every other transport; it
    drives the request on a fresh event loop, or on a background loop when
    called from code that already runs inside one.

    :param secure: require all requests to use HTTPS (default: False).
    :param **kwargs: extra keyword args for the aiohttp request() call.

    :return: the transport function.
    """
    import aiohttp

    async def async_send(method, url, headers, data):
        async with aiohttp.ClientSession() as session:
            async with session.request(method, url, headers=headers,
                                       data=data, **kwargs) as response:
                body = await response.text()
                return HttpResponse(
                    response.status, lower_headers(response.headers),
                    body, response.url.human_repr())

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
            coroutine = async_send(method, url, headers or {}, data)

            # Detect whether we're already in an async environment
            try:
                running_loop = asyncio.get_running_loop()
            except RuntimeError:
                running_loop = None

            if not running_loop or not running_loop.is_running():
                return asyncio.run(coroutine)

            loop = _ensure_background_loop()
            future = asyncio.run_coroutine_threadsafe(coroutine, loop)
            return future.result()
        except StoreError as e:
            raise e
        except Exception as cause:
            raise StoreError(
                'Could not complete the HTTP request.',
                'ldstore.TransportError', {'method': method, 'url': url},
                cause=cause)

    return send
