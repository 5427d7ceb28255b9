from ldstore.graph import (BLANK_NODE, IRI, LITERAL, RDF_LANGSTRING,
                           XSD_STRING, Graph, Term, Triple)
from ldstore.ntriples import escape, serialize_graph, serialize_term

XSD_INTEGER = 'http://www.w3.org/2001/XMLSchema#integer'
NAME = Term(IRI, 'http://schema.org/name')


def test_escape():
    assert escape('a "b"\n\tc\\') == 'a \\"b\\"\\n\\tc\\\\'


def test_plain_literal():
    assert serialize_term(Term(LITERAL, 'x', XSD_STRING)) == '"x"'


def test_language_literal():
    assert serialize_term(Term(LITERAL, 'x', RDF_LANGSTRING, 'de')) == \
        '"x"@de'


def test_typed_literal():
    assert serialize_term(Term(LITERAL, '5', XSD_INTEGER)) == \
        '"5"^^<%s>' % XSD_INTEGER


def test_blank_node():
    assert serialize_term(Term(BLANK_NODE, '_:o0b1')) == '_:o0b1'


def test_graph_with_base():
    doc = 'urn:ldstore:new-resource'
    graph = Graph([
        Triple(Term(IRI, doc), NAME, Term(LITERAL, 'Doc', XSD_STRING)),
        Triple(Term(IRI, doc + '#me'), Term(IRI, 'http://schema.org/knows'),
               Term(IRI, 'http://example.org/bob'))])
    assert serialize_graph(graph, doc) == (
        '<> <http://schema.org/name> "Doc" .\n'
        '<#me> <http://schema.org/knows> <http://example.org/bob> .\n')


def test_graph_without_base():
    graph = Graph([Triple(Term(IRI, 'http://example.org/a'), NAME,
                          Term(LITERAL, 'A', XSD_STRING))])
    assert serialize_graph(graph) == \
        '<http://example.org/a> <http://schema.org/name> "A" .\n'
