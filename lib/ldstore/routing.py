"""
Context routing: picks a JSON-LD context for an IRI when the caller did not
give one.
"""

import logging
import re

log = logging.getLogger(__name__)


class ContextRouter(object):
    """
    An ordered list of routes. A route matches IRIs either by prefix
    ('startsWith') or by regular expression ('regexp'); the first match
    wins.
    """

    def __init__(self, routes=None):
        self.routes = []
        for route in routes or []:
            self.add(route['context'],
                     starts_with=route.get('startsWith'),
                     regexp=route.get('regexp'))

    def add(self, context, starts_with=None, regexp=None):
        """
        Adds a route.

        :param context: the JSON-LD context to use for matching IRIs.
        :param [starts_with]: match IRIs starting with this prefix.
        :param [regexp]: match IRIs this pattern finds a match in (a string
          or a compiled pattern).
        """
        if starts_with is None and regexp is None:
            raise ValueError('A route needs startsWith or regexp.')
        route = {'context': context}
        if starts_with is not None:
            route['startsWith'] = starts_with
        if regexp is not None:
            route['regexp'] = re.compile(regexp) if isinstance(
                regexp, str) else regexp
        self.routes.append(route)
        return route

    def find_context(self, iri):
        """
        Finds the context of the first route matching an IRI.

        :param iri: the IRI.

        :return: the context, {} if no route matches.
        """
        for route in self.routes:
            if 'startsWith' in route and iri.startswith(route['startsWith']):
                return route['context']
            if 'regexp' in route and route['regexp'].search(iri):
                return route['context']
        log.debug('find_context: no route for %r', iri)
        return {}

    def __len__(self):
        return len(self.routes)
