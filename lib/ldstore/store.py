"""
A JSON-LD interface to an LDP store.

.. module:: ldstore.store
  :synopsis: Fetch, compact, merge and persist JSON-LD objects

Objects are addressed by IRI. Hash IRIs share the document of their base
IRI: reading ``http://example.org/doc#a`` fetches ``http://example.org/doc``
and picks the node ``#a`` out of it, and writing or deleting it affects the
whole document.
"""

import copy
import logging

from pyld import jsonld

from ldstore.errors import StoreError
from ldstore.graph import Graph
from ldstore.identifier_issuer import issuer_for
from ldstore.iri import document_iri, parse_iri_objects_args
from ldstore.ldp import LdpStore, NEW_RESOURCE_IRI
from ldstore.rdf import JsonLdParser, JsonLdSerializer
from ldstore.routing import ContextRouter
from ldstore.templates import TemplateRegistry

__all__ = ['JsonLdStore', 'LDP_CONTAINS']

log = logging.getLogger(__name__)

LDP_CONTAINS = 'http://www.w3.org/ns/ldp#contains'


class JsonLdStore(object):
    """
    RESTful interface to an LDP store using JSON-LD.
    """

    def __init__(self, options=None):
        """
        Initializes a new JsonLdStore.

        :param [options]: the options to use.
          [container] the IRI of the container new objects are added to.
          [context] the JSON-LD context used to save and render objects.
          [template] the main template source, used by render().
          [partials] a dict of partial name => template source.
          [routes] a list of context routes, each a dict with 'context' and
            either 'startsWith' or 'regexp'.
          [store] the graph store (default: an LdpStore).
          [transport] the HTTP transport of the default LdpStore.
          [corsProxy] a CORS proxy endpoint for the default LdpStore.
          [documentLoader(url)] the PyLD document loader for remote
            contexts.
        """
        options = options.copy() if options else {}
        self.etags = {}
        self.container = options.get('container')
        self.context = options.get('context')
        self.document_loader = options.get('documentLoader')
        self.templates = TemplateRegistry(options.get('partials'))
        self.main_template = None
        if 'template' in options:
            self.main_template = self.templates.compile(options['template'])
        self.router = ContextRouter(options.get('routes'))

        store = options.get('store')
        if store is None:
            store = LdpStore({
                'transport': options.get('transport'),
                'corsProxy': options.get('corsProxy'),
                'documentLoader': self.document_loader
            })
        self.store = store
        self.parser = JsonLdParser()
        self.serializer = JsonLdSerializer()

    def _jsonld_options(self):
        if self.document_loader is None:
            return {}
        return {'documentLoader': self.document_loader}

    def add_route(self, context, starts_with=None, regexp=None):
        """Route IRIs by prefix or pattern to a JSON-LD context."""
        return self.router.add(context, starts_with=starts_with, regexp=regexp)

    def find_context(self, iri):
        return self.router.find_context(iri)

    def _objects_to_graph(self, iri, objects, route_iri=None):
        """
        Merges JSON-LD objects into a single graph.

        Objects without a context get the routed context of route_iri (or
        iri), objects without an '@id' describe iri. The objects themselves
        are left untouched.
        """
        graph = Graph(iri=iri)
        for index, object_ in enumerate(objects):
            object_ = copy.deepcopy(object_)
            if '@context' not in object_:
                object_['@context'] = self.find_context(route_iri or iri)
            if '@id' not in object_:
                object_['@id'] = iri
            options = self._jsonld_options()
            options['issuer'] = issuer_for(index)
            graph.add_all(self.parser.parse(object_, iri, options))
        return graph

    def get(self, object_, context=None):
        """
        Fetches the JSON-LD object with the given IRI.
        If no context is given, it will try to get the context via routing.

        :param object_: the IRI, or an object with an '@id'.
        :param [context]: the JSON-LD context to compact the object with.

        :return: the compacted object ({} compacted if the document holds
          no node with that IRI).
        """
        iri = object_ if isinstance(object_, str) else object_['@id']
        if context is None:
            context = self.find_context(iri)

        doc = document_iri(iri)
        graph = self.store.graph(doc, {'useEtag': True})
        self.etags[doc] = graph.etag
        log.debug('get: %r etag=%r', iri, graph.etag)

        expanded = self.serializer.serialize(graph)
        framed = jsonld.frame(expanded, {}, self._jsonld_options())
        # a single framed node may come back without a @graph wrapper
        if '@graph' in framed:
            candidates = framed['@graph']
        else:
            candidates = [framed] if '@id' in framed else []
        node = {}
        for candidate in candidates:
            if candidate.get('@id') == iri:
                node = dict(candidate)
                node.pop('@context', None)
        return jsonld.compact(node, context, self._jsonld_options())

    def reset_id(self, o):
        """Moves an 'id' member to '@id', in place."""
        if o.get('id'):
            o['@id'] = o.pop('id')
        return o

    def save(self, object_):
        """
        Saves an object: replaces its document when it has an IRI, else
        adds it to the store's container.

        :param object_: the JSON-LD object.

        :return: the written Graph.
        """
        object_ = self.reset_id(dict(object_))
        if '@context' not in object_ and self.context is not None:
            object_['@context'] = self.context

        if '@id' in object_:
            return self.put(object_)
        return self.add(self.container, object_)

    def list(self, container_iri=None):
        """
        Lists the members of a container.

        :param [container_iri]: the container (default: the store's).

        :return: a list of {'@id': member IRI} objects.
        """
        container = self.get(container_iri or self.container, {})
        members = container.get(LDP_CONTAINS, [])
        if isinstance(members, dict):
            members = [members]
        return [{'@id': m} if isinstance(m, str) else m for m in members]

    def move(self, container_iri):
        """
        Copies every member of another container into this store's
        container.

        Members without a node of their own IRI are skipped. A member that
        cannot be read or written does not stop the others; once every
        member was tried, the failures are raised together.

        :param container_iri: the container to read the members from.

        :return: the list of written Graphs.
        """
        results = []
        errors = []
        for member in self.list(container_iri):
            try:
                object_ = self.get(member, self.context)
                object_.pop('@id', None)
                object_.pop('id', None)
                if not set(object_) - {'@context'}:
                    log.debug('move: nothing to copy in %s', member['@id'])
                    continue
                results.append(self.save(object_))
            except StoreError as cause:
                log.debug('move: %s failed: %s', member['@id'], cause)
                errors.append({'member': member['@id'], 'error': cause})
        if errors:
            raise StoreError(
                'Could not move every member.', 'ldstore.MoveError',
                {'moved': results, 'errors': errors})
        return results

    def render(self, target=None, container_iri=None, template=None,
               context=None):
        """
        Renders the members of a container.

        The template is rendered with {'objects': [...]} once before any
        member is fetched and again after each member arrives; every
        rendering is handed to target.

        :param [target]: a callable receiving each HTML rendering.
        :param [container_iri]: the container (default: the store's).
        :param [template]: a template source or compiled template
          (default: the main template).
        :param [context]: the context to compact members with
          (default: the store's context).

        :return: the final HTML.
        """
        container = container_iri or self.container
        template = template or self.main_template
        if template is None:
            raise ValueError('No template to render with.')
        if isinstance(template, str):
            template = self.templates.compile(template)
        context = context or self.context

        objects = []
        html = template({'objects': objects})
        if target is not None:
            target(html)

        for member in self.list(container):
            objects.append(self.get(member, context))
            html = template({'objects': objects})
            if target is not None:
                target(html)
        return html

    def add(self, *args):
        """
        Adds one or more JSON-LD objects to the given container IRI.

        Call as add(iri, object, ...) or add(object, ...); objects without
        an '@id' describe the new resource.

        :return: the written Graph, its iri set to the created resource.
        """
        param = parse_iri_objects_args(args)
        iri = param['iri'] or self.container
        if iri is None:
            raise ValueError('No container to add the objects to.')

        graph = self._objects_to_graph(
            NEW_RESOURCE_IRI, param['objects'], route_iri=iri)
        if len(graph) == 0:
            raise StoreError('no triples added', 'ldstore.EmptyGraph',
                             {'iri': iri})
        added = self.store.add(document_iri(iri), graph, {'method': 'POST'})
        if added.iri and added.etag:
            self.etags[document_iri(added.iri)] = added.etag
        return added

    def put(self, *args):
        """
        Replaces the document of the given IRI with one or more JSON-LD
        objects.

        The write is conditional on the ETag of the last read of the
        document, if there was one.

        :return: the written Graph.
        """
        param = parse_iri_objects_args(args)
        iri = param['iri']
        if iri is None:
            raise ValueError('No IRI to put the objects to.')

        doc = document_iri(iri)
        graph = self._objects_to_graph(iri, param['objects'])
        if len(graph) == 0:
            raise StoreError('no triples added', 'ldstore.EmptyGraph',
                             {'iri': iri})
        graph.etag = self.etags.get(doc)
        added = self.store.add(doc, graph, {'useEtag': True})
        self.etags[doc] = added.etag
        return added

    def patch(self, *args):
        """
        Merges one or more JSON-LD objects into the document of the given
        IRI.

        :return: the merged Graph.
        """
        param = parse_iri_objects_args(args)
        iri = param['iri']
        if iri is None:
            raise ValueError('No IRI to merge the objects into.')

        doc = document_iri(iri)
        graph = self._objects_to_graph(iri, param['objects'])
        if len(graph) == 0:
            raise StoreError('no triples merged', 'ldstore.EmptyGraph',
                             {'iri': iri})
        merged = self.store.merge(doc, graph)
        self.etags[doc] = merged.etag
        return merged

    def delete(self, iri):
        """
        Deletes the document of the given IRI.

        Also deletes other objects in the same document!

        :param iri: the IRI, or an object with an '@id'.
        """
        if not isinstance(iri, str):
            iri = iri['@id']
        doc = document_iri(iri)
        if not self.store.delete(doc):
            raise StoreError('The store did not delete the document.',
                             'ldstore.DeleteError', {'iri': doc})
        self.etags.pop(doc, None)
