"""
Parsers and serializers between store documents and graphs.

.. module:: ldstore.rdf
  :synopsis: JSON-LD and N-Triples parsing, JSON-LD and Turtle output

All JSON-LD processing is done by PyLD; this module only moves data
between PyLD's RDF datasets and :class:`ldstore.graph.Graph`.
"""

import json
import logging

from pyld import jsonld

from ldstore.errors import StoreError
from ldstore.graph import Graph
from ldstore.identifier_issuer import IdentifierIssuer
from ldstore import ntriples

log = logging.getLogger(__name__)


def _pyld_options(base, options):
    rval = {'base': base or ''}
    if options.get('documentLoader') is not None:
        rval['documentLoader'] = options['documentLoader']
    return rval


class JsonLdParser(object):
    """Parses JSON-LD documents into graphs."""

    def parse(self, document, base=None, options=None):
        """
        Parses a JSON-LD document.

        :param document: the JSON-LD document (parsed JSON or a string).
        :param [base]: the base IRI for relative IRIs.
        :param [options]: the options to use.
          [issuer] an IdentifierIssuer to relabel blank nodes
            (default: a fresh '_:b' issuer).
          [documentLoader(url)] the PyLD document loader for remote
            contexts.

        :return: the Graph.
        """
        options = options or {}
        if isinstance(document, bytes):
            document = document.decode('utf-8')
        if isinstance(document, str):
            # an empty body is an empty document
            document = json.loads(document) if document.strip() else []
        dataset = jsonld.to_rdf(document, _pyld_options(base, options))
        issuer = options.get('issuer') or IdentifierIssuer('_:b')
        return Graph.from_dataset(dataset, issuer, iri=base or None)


class NQuadsParser(object):
    """
    Parses N-Triples and N-Quads documents into graphs.

    PyLD only reads N-Quads on its way to JSON-LD, so the text is turned
    into expanded JSON-LD first and then into an RDF dataset.
    """

    def parse(self, document, base=None, options=None):
        options = options or {}
        if isinstance(document, bytes):
            document = document.decode('utf-8')
        expanded = jsonld.from_rdf(
            document, {'format': 'application/n-quads'})
        return JsonLdParser().parse(expanded, base, options)


class JsonLdSerializer(object):
    """Serializes graphs to expanded JSON-LD."""

    def serialize(self, graph, options=None):
        """
        Converts a graph into expanded JSON-LD.

        :param graph: the Graph.
        :param [options]: the options to use.
          [useNativeTypes] convert XSD types into native types
            (default: False).

        :return: the expanded JSON-LD (a list of node objects).
        """
        options = options or {}
        return jsonld.from_rdf(graph.to_dataset(), {
            'useNativeTypes': options.get('useNativeTypes', False),
            'useRdfType': False
        })


class TurtleSerializer(object):
    """Serializes graphs to Turtle (written as N-Triples)."""

    content_type = 'text/turtle'

    def serialize(self, graph, base=None):
        return ntriples.serialize_graph(graph, base)


_parsers = {}


def register_parser(content_type, parser):
    """
    Registers a parser for a media type.

    :param content_type: the media type, e.g. 'application/ld+json'.
    :param parser: an object with a parse(document, base, options) method.
    """
    _parsers[content_type] = parser


def unregister_parser(content_type):
    if content_type in _parsers:
        del _parsers[content_type]


def media_type(content_type):
    """Return the bare, lower-cased media type of a Content-Type value."""
    if not content_type:
        return 'application/octet-stream'
    return content_type.split(';', 1)[0].strip().lower()


def find_parser(content_type):
    """
    Looks up the parser for a Content-Type header value.

    :param content_type: the Content-Type value (parameters are ignored).

    :return: the parser.
    """
    type_ = media_type(content_type)
    log.debug('find_parser: %r', type_)
    if type_ not in _parsers:
        raise StoreError(
            'Unknown document format.',
            'ldstore.UnknownFormat', {'contentType': content_type})
    return _parsers[type_]


def accept_header():
    """Build an Accept header listing every registered media type."""
    types = list(_parsers)
    return ', '.join(
        t if i == 0 else '%s;q=%.1f' % (t, max(0.1, 1 - i / 10.0))
        for i, t in enumerate(types))


register_parser('application/ld+json', JsonLdParser())
register_parser('application/json', JsonLdParser())
register_parser('application/n-triples', NQuadsParser())
register_parser('application/n-quads', NQuadsParser())
