"""
N-Triples writer.

Every N-Triples document is also valid Turtle, so the output is what the
store sends as ``text/turtle``. Turtle additionally allows relative IRI
references, which lets a graph POSTed to a container name the resource
that is about to be created as ``<>``.
"""

from ldstore.graph import IRI, BLANK_NODE, RDF_LANGSTRING, XSD_STRING
from ldstore.iri import relativize


def escape(value: str):
    return (
        value.replace("\\", "\\\\")
        .replace("\t", "\\t")
        .replace("\n", "\\n")
        .replace("\r", "\\r")
        .replace('"', '\\"')
    )


def serialize_term(term, base=None):
    """
    Converts a Term to its N-Triples form.

    :param term: the Term.
    :param [base]: a document IRI; IRIs of that document are written
      relative to it.

    :return: the serialized term.
    """
    if term.type == IRI:
        return '<' + relativize(term.value, base) + '>'
    if term.type == BLANK_NODE:
        return term.value

    literal = '"' + escape(term.value) + '"'
    if term.datatype == RDF_LANGSTRING:
        if term.language:
            literal += '@' + term.language
    elif term.datatype and term.datatype != XSD_STRING:
        literal += '^^<' + term.datatype + '>'
    return literal


def serialize_triple(triple, base=None):
    return '%s %s %s .\n' % (
        serialize_term(triple.subject, base),
        serialize_term(triple.predicate, base),
        serialize_term(triple.object, base))


def serialize_graph(graph, base=None):
    """
    Converts a graph to N-Triples, one line per triple in graph order.

    :param graph: the Graph.
    :param [base]: a document IRI to write IRIs relative to.

    :return: the N-Triples (Turtle) string.
    """
    return ''.join(serialize_triple(triple, base) for triple in graph)
