import json

import pytest

from ldstore import rdf
from ldstore.errors import StoreError
from ldstore.graph import IRI, LITERAL, XSD_STRING, Graph, Term, Triple
from ldstore.identifier_issuer import issuer_for

DOC = 'http://example.org/people/alice'
NAME = 'http://schema.org/name'

ALICE = {
    '@context': {'@vocab': 'http://schema.org/'},
    '@id': '#me',
    'name': 'Alice',
    'address': {'streetAddress': 'Main Street 1'}
}

ALICE_NT = '<%s#me> <%s> "Alice" .\n' % (DOC, NAME)


class TestJsonLdParser:
    def test_resolves_against_base(self):
        graph = rdf.JsonLdParser().parse(ALICE, DOC)
        assert Triple(Term(IRI, DOC + '#me'), Term(IRI, NAME),
                      Term(LITERAL, 'Alice', XSD_STRING)) in graph
        assert len(graph) == 3
        assert graph.iri == DOC

    def test_parses_strings(self):
        graph = rdf.JsonLdParser().parse(json.dumps(ALICE), DOC)
        assert len(graph) == 3

    def test_empty_body(self):
        assert len(rdf.JsonLdParser().parse('', DOC)) == 0

    def test_uses_issuer(self):
        graph = rdf.JsonLdParser().parse(
            ALICE, DOC, {'issuer': issuer_for(7)})
        labels = [t.object.value for t in graph
                  if t.object.type == 'blank node']
        assert labels == ['_:o7b0']


class TestNQuadsParser:
    def test_parse(self):
        graph = rdf.NQuadsParser().parse(ALICE_NT, DOC)
        assert graph.to_array() == [
            Triple(Term(IRI, DOC + '#me'), Term(IRI, NAME),
                   Term(LITERAL, 'Alice', XSD_STRING))]

    def test_bytes(self):
        assert len(rdf.NQuadsParser().parse(ALICE_NT.encode('utf-8'))) == 1


class TestJsonLdSerializer:
    def test_serialize(self):
        graph = rdf.NQuadsParser().parse(ALICE_NT, DOC)
        assert rdf.JsonLdSerializer().serialize(graph) == [{
            '@id': DOC + '#me',
            NAME: [{'@value': 'Alice'}]
        }]


class TestRegistry:
    def test_find_parser_ignores_parameters(self):
        parser = rdf.find_parser('application/ld+json; charset=utf-8')
        assert isinstance(parser, rdf.JsonLdParser)

    def test_find_parser_ntriples(self):
        assert isinstance(rdf.find_parser('application/n-triples'),
                          rdf.NQuadsParser)

    def test_unknown_format(self):
        with pytest.raises(StoreError) as exc_info:
            rdf.find_parser('text/turtle')
        assert exc_info.value.type == 'ldstore.UnknownFormat'

    def test_missing_content_type(self):
        with pytest.raises(StoreError):
            rdf.find_parser(None)

    def test_register_parser(self):
        parser = rdf.JsonLdParser()
        rdf.register_parser('application/activity+json', parser)
        try:
            assert rdf.find_parser('application/activity+json') is parser
        finally:
            rdf.unregister_parser('application/activity+json')
        with pytest.raises(StoreError):
            rdf.find_parser('application/activity+json')

    def test_accept_header(self):
        accept = rdf.accept_header()
        assert accept.startswith('application/ld+json, ')
        assert 'application/n-triples;q=' in accept


def test_turtle_serializer():
    graph = Graph([Triple(Term(IRI, DOC), Term(IRI, NAME),
                          Term(LITERAL, 'Doc', XSD_STRING))])
    serializer = rdf.TurtleSerializer()
    assert serializer.content_type == 'text/turtle'
    assert serializer.serialize(graph, DOC) == \
        '<> <http://schema.org/name> "Doc" .\n'
