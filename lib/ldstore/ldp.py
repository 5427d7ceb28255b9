"""
Client for a Linked Data Platform store.

.. module:: ldstore.ldp
  :synopsis: Read, write, merge and delete RDF documents over HTTP

Every document of the store is exchanged as a whole graph. Reads accept
JSON-LD, N-Triples and N-Quads; writes are sent as Turtle.
"""

import logging

from ldstore import rdf
from ldstore.errors import StoreError
from ldstore.graph import Graph
from ldstore.iri import document_iri, resolve
from ldstore.transport import cors_proxy_transport, requests_transport

__all__ = ['LdpStore', 'StoreError', 'NEW_RESOURCE_IRI']

log = logging.getLogger(__name__)

# Stands in for the IRI of a resource that does not exist until it is
# POSTed to a container; it is written as <> on the wire.
NEW_RESOURCE_IRI = 'urn:ldstore:new-resource'


def _is_success(status):
    return 200 <= status < 300


def _raise_for_status(response, method, iri):
    if _is_success(response.status):
        return
    details = {'method': method, 'iri': iri, 'body': response.body}
    if response.status == 404 or response.status == 410:
        raise StoreError(
            'The document does not exist.',
            'ldstore.NotFound', details, code=response.status)
    if response.status == 412:
        raise StoreError(
            'The document was modified since it was read.',
            'ldstore.PreconditionFailed', details, code=response.status)
    raise StoreError(
        'The store rejected the request.',
        'ldstore.RequestError', details, code=response.status)


class LdpStore(object):
    """
    A graph store backed by an LDP server.
    """

    def __init__(self, options=None):
        """
        Initializes a new LdpStore.

        :param [options]: the options to use.
          [transport] the HTTP transport (default: requests_transport()).
          [corsProxy] route every request through this proxy endpoint.
          [documentLoader(url)] the PyLD document loader used for remote
            contexts in JSON-LD responses.
          [accept] the Accept header for reads (default: every registered
            parser's media type).
        """
        options = options.copy() if options else {}
        transport = options.get('transport') or requests_transport()
        if options.get('corsProxy'):
            transport = cors_proxy_transport(options['corsProxy'], transport)
        self.transport = transport
        self.document_loader = options.get('documentLoader')
        self.accept = options.get('accept') or rdf.accept_header()
        self.serializer = rdf.TurtleSerializer()

    def graph(self, iri, options=None):
        """
        Reads the graph of a document.

        :param iri: the document IRI (a fragment is ignored).
        :param [options]: the options to use.
          [useEtag] record the ETag of the response on the graph
            (default: False).
          [issuer] an IdentifierIssuer to relabel blank nodes.

        :return: the Graph.
        """
        options = options or {}
        iri = document_iri(iri)
        log.debug('graph: %r', iri)
        response = self.transport('GET', iri, headers={'Accept': self.accept})
        _raise_for_status(response, 'GET', iri)

        parser = rdf.find_parser(response.headers.get('content-type'))
        parse_options = {'documentLoader': self.document_loader}
        if options.get('issuer') is not None:
            parse_options['issuer'] = options['issuer']
        graph = parser.parse(response.body or '', iri, parse_options)
        graph.iri = iri
        if options.get('useEtag'):
            graph.etag = response.headers.get('etag')
        log.debug('graph: %r has %d triples', iri, len(graph))
        return graph

    def add(self, iri, graph, options=None):
        """
        Writes a graph.

        With the PUT method the graph replaces the document at the IRI;
        with POST the IRI is a container and a new member is created from
        the graph. In that case the graph's subjects should use
        NEW_RESOURCE_IRI (or fragments of it) for the new resource.

        :param iri: the document or container IRI.
        :param graph: the Graph to write.
        :param [options]: the options to use.
          [method] 'PUT' or 'POST' (default: 'PUT').
          [useEtag] send the graph's etag as If-Match on PUT
            (default: False).

        :return: the written Graph, with the new etag and, for POST, the
          IRI of the created resource.
        """
        options = options or {}
        method = options.get('method', 'PUT').upper()
        iri = document_iri(iri)
        headers = {'Content-Type': self.serializer.content_type}

        if method == 'POST':
            body = self.serializer.serialize(graph, NEW_RESOURCE_IRI)
        else:
            body = self.serializer.serialize(graph)
            if options.get('useEtag') and graph.etag:
                headers['If-Match'] = graph.etag

        log.debug('add: %s %r (%d triples)', method, iri, len(graph))
        response = self.transport(method, iri, headers=headers, data=body)
        _raise_for_status(response, method, iri)

        if method == 'POST':
            location = response.headers.get('location')
            if location:
                added = graph.relocate(
                    NEW_RESOURCE_IRI, resolve(location, iri))
            else:
                added = Graph(graph, iri=None)
        else:
            added = Graph(graph, iri=iri)
        added.etag = response.headers.get('etag')
        return added

    def merge(self, iri, graph, options=None):
        """
        Merges a graph into a document.

        The document is read, united with the graph and written back,
        conditional on the ETag that was read. A missing document is
        treated as empty.

        :param iri: the document IRI.
        :param graph: the Graph to merge.
        :param [options]: unused, accepted for symmetry with add().

        :return: the merged Graph.
        """
        iri = document_iri(iri)
        try:
            existing = self.graph(iri, {'useEtag': True})
        except StoreError as e:
            if e.type != 'ldstore.NotFound':
                raise
            existing = Graph(iri=iri)
        merged = existing.merge(graph)
        log.debug('merge: %r %d + %d => %d triples',
                  iri, len(existing), len(graph), len(merged))
        return self.add(iri, merged, {'useEtag': True})

    def delete(self, iri):
        """
        Deletes a document.

        :param iri: the document IRI.

        :return: True if the store confirmed the deletion, False if not.
        """
        iri = document_iri(iri)
        log.debug('delete: %r', iri)
        response = self.transport('DELETE', iri)
        return _is_success(response.status)
