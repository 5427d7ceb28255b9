import json
import os
import re
import sys

import pytest
from pyld import jsonld
from pyld.iri_resolver import resolve

# Add the lib directory to the path so the tests run from a checkout
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'lib'))

from ldstore.transport import HttpResponse

LDP = 'http://www.w3.org/ns/ldp#'
RDF_TYPE = 'http://www.w3.org/1999/02/22-rdf-syntax-ns#type'


def pytest_addoption(parser):
    parser.addoption(
        '--ldp-server', dest='ldp_server', default=None,
        help='Base IRI of a writable LDP container for network tests'
    )


def pytest_configure(config):
    config.addinivalue_line(
        "markers", "network: marks tests as requiring network access (may be slow)"
    )


class MemoryLdpServer(object):
    """
    A transport that answers requests from an in-memory set of documents.

    Documents are kept as N-Triples with absolute IRIs. IRIs ending with
    '/' are containers whose members are the documents directly below them.
    Bodies are served as N-Triples, or as JSON-LD when content_type says so.
    """

    def __init__(self, content_type='application/n-triples'):
        self.content_type = content_type
        self.documents = {}
        self.etags = {}
        self.requests = []
        self.counter = 0
        self.version = 0

    def store(self, iri, body):
        self.version += 1
        self.documents[iri] = body
        self.etags[iri] = '"%d"' % self.version
        return self.etags[iri]

    def _members(self, container):
        return sorted(
            iri for iri in self.documents
            if iri != container and iri.startswith(container) and
            '/' not in iri[len(container):].rstrip('/'))

    def _body(self, iri):
        body = self.documents.get(iri, '')
        if iri.endswith('/'):
            body += '<%s> <%s> <%sBasicContainer> .\n' % (iri, RDF_TYPE, LDP)
            for member in self._members(iri):
                body += '<%s> <%scontains> <%s> .\n' % (iri, LDP, member)
        if self.content_type == 'application/ld+json':
            return json.dumps(jsonld.from_rdf(
                body, {'format': 'application/n-quads'}))
        return body

    def __call__(self, method, url, headers=None, data=None):
        headers = headers or {}
        if isinstance(data, bytes):
            data = data.decode('utf-8')
        self.requests.append({
            'method': method, 'url': url, 'headers': headers, 'data': data})

        if method == 'GET':
            if url not in self.documents and not url.endswith('/'):
                return HttpResponse(404, {}, 'not found', url)
            response_headers = {'content-type': self.content_type}
            if url in self.etags:
                response_headers['etag'] = self.etags[url]
            return HttpResponse(200, response_headers, self._body(url), url)

        if method == 'PUT':
            if_match = headers.get('If-Match')
            if if_match is not None and if_match != self.etags.get(url):
                return HttpResponse(412, {}, 'precondition failed', url)
            status = 204 if url in self.documents else 201
            etag = self.store(url, self._resolve(data, url))
            return HttpResponse(status, {'etag': etag}, '', url)

        if method == 'POST':
            if not url.endswith('/'):
                return HttpResponse(405, {}, 'not a container', url)
            self.counter += 1
            iri = url + 'r%d' % self.counter
            etag = self.store(iri, self._resolve(data, iri))
            return HttpResponse(
                201, {'location': 'r%d' % self.counter, 'etag': etag}, '',
                url)

        if method == 'DELETE':
            if url not in self.documents:
                return HttpResponse(404, {}, 'not found', url)
            del self.documents[url]
            del self.etags[url]
            return HttpResponse(204, {}, '', url)

        return HttpResponse(405, {}, 'method not allowed', url)

    @staticmethod
    def _resolve(turtle, base):
        return re.sub(
            r'<([^>]*)>',
            lambda m: '<%s>' % resolve(m.group(1), base),
            turtle)

    def methods(self):
        return [(r['method'], r['url']) for r in self.requests]


@pytest.fixture
def server():
    """An in-memory LDP server answering in N-Triples."""
    return MemoryLdpServer()


@pytest.fixture
def jsonld_server():
    """An in-memory LDP server answering in JSON-LD."""
    return MemoryLdpServer('application/ld+json')


@pytest.fixture
def ldp_server(request):
    base = request.config.getoption('ldp_server')
    if not base:
        pytest.skip('No LDP server given (use --ldp-server)')
    return base
