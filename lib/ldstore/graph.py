"""
In-memory RDF graph.

.. module:: ldstore.graph
  :synopsis: A set of RDF triples exchanged with an LDP store

Terms use the same vocabulary as the RDF datasets produced and consumed by
``pyld.jsonld.to_rdf`` and ``pyld.jsonld.from_rdf``, so a graph converts to
and from PyLD without any further mapping.
"""

from collections import namedtuple

from ldstore.iri import document_iri

IRI = 'IRI'
BLANK_NODE = 'blank node'
LITERAL = 'literal'

XSD_STRING = 'http://www.w3.org/2001/XMLSchema#string'
RDF_LANGSTRING = 'http://www.w3.org/1999/02/22-rdf-syntax-ns#langString'

Term = namedtuple('Term', ['type', 'value', 'datatype', 'language'])
Term.__new__.__defaults__ = (None, None)

Triple = namedtuple('Triple', ['subject', 'predicate', 'object'])


def term_from_dict(node, issuer=None):
    """
    Converts a PyLD dataset node into a Term.

    :param node: the node dict ({'type', 'value', ['datatype'],
      ['language']}).
    :param [issuer]: relabels blank nodes when given.

    :return: the Term.
    """
    value = node['value']
    if node['type'] == BLANK_NODE and issuer is not None:
        value = issuer.get_id(value)
    if node['type'] == LITERAL:
        return Term(LITERAL, value,
                    node.get('datatype', XSD_STRING), node.get('language'))
    return Term(node['type'], value)


def term_to_dict(term):
    rval = {'type': term.type, 'value': term.value}
    if term.type == LITERAL:
        rval['datatype'] = term.datatype or XSD_STRING
        if term.language:
            rval['language'] = term.language
    return rval


class Graph(object):
    """
    An ordered set of unique triples.

    :ivar etag: the entity tag of the document the graph was read from
      (or written to), None if unknown.
    :ivar iri: the document IRI the graph belongs to, None if unknown.
    """

    def __init__(self, triples=None, etag=None, iri=None):
        self._triples = []
        self._index = set()
        self.etag = etag
        self.iri = iri
        for triple in triples or []:
            self.add(triple)

    def add(self, triple):
        """
        Adds a triple if the graph does not contain it yet.

        :param triple: the Triple.

        :return: this graph.
        """
        if not isinstance(triple, Triple):
            triple = Triple(*triple)
        if triple not in self._index:
            self._index.add(triple)
            self._triples.append(triple)
        return self

    def add_all(self, other):
        """Adds every triple of another graph to this one, in place."""
        for triple in other:
            self.add(triple)
        return self

    def merge(self, other):
        """
        Returns a new graph holding the union of this graph and another.

        The result keeps this graph's etag and iri.
        """
        merged = Graph(self._triples, etag=self.etag, iri=self.iri)
        return merged.add_all(other)

    def to_array(self):
        return list(self._triples)

    def subjects(self):
        seen = []
        for triple in self._triples:
            if triple.subject not in seen:
                seen.append(triple.subject)
        return seen

    def relocate(self, old_iri, new_iri):
        """
        Renames a document IRI, and every fragment IRI of it, in all
        triples.

        :param old_iri: the document IRI to replace.
        :param new_iri: the document IRI to use instead.

        :return: the relocated graph (a new Graph).
        """
        old_iri = document_iri(old_iri)
        new_iri = document_iri(new_iri)

        def rename(term):
            if term.type != IRI:
                return term
            if term.value == old_iri:
                return term._replace(value=new_iri)
            if term.value.startswith(old_iri + '#'):
                return term._replace(
                    value=new_iri + term.value[len(old_iri):])
            return term

        return Graph(
            [Triple(rename(t.subject), rename(t.predicate), rename(t.object))
             for t in self._triples],
            etag=self.etag, iri=new_iri)

    def to_dataset(self):
        """
        Converts this graph into a PyLD RDF dataset with a single default
        graph.
        """
        return {'@default': [
            {
                'subject': term_to_dict(t.subject),
                'predicate': term_to_dict(t.predicate),
                'object': term_to_dict(t.object)
            } for t in self._triples]}

    @classmethod
    def from_dataset(cls, dataset, issuer=None, iri=None):
        """
        Creates a graph from a PyLD RDF dataset.

        Triples of named graphs are merged into the result, the same way
        a store document holds a single graph.

        :param dataset: the RDF dataset (graph name => list of triples).
        :param [issuer]: an IdentifierIssuer used to relabel blank nodes.
        :param [iri]: the document IRI of the graph.

        :return: the Graph.
        """
        graph = cls(iri=iri)
        for name in sorted(dataset, key=lambda n: (n != '@default', n)):
            for triple in dataset[name]:
                graph.add(Triple(
                    term_from_dict(triple['subject'], issuer),
                    term_from_dict(triple['predicate'], issuer),
                    term_from_dict(triple['object'], issuer)))
        return graph

    def __len__(self):
        return len(self._triples)

    def __iter__(self):
        return iter(self._triples)

    def __contains__(self, triple):
        return triple in self._index

    def __eq__(self, other):
        if not isinstance(other, Graph):
            return NotImplemented
        return self._index == other._index

    def __repr__(self):
        return '<Graph iri=%r etag=%r triples=%d>' % (
            self.iri, self.etag, len(self))
