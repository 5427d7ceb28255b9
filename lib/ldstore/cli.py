#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
ldstorecli - CLI script for LDStore
"""
import codecs
import json
import logging
import os
import sys

import ldstore
from ldstore.transport import aiohttp_transport, requests_transport

log = logging.getLogger()


def read_json(path_or_value):
    """
    Read JSON from a file, or take a non-file value as it is

    :param path_or_value: path to a JSON file, or a string such as a
      context URI
    :returns: the parsed JSON, or the unchanged string
    """
    if path_or_value is None:
        return None
    if os.path.exists(path_or_value):
        with codecs.open(path_or_value, 'r', encoding='utf-8') as f:
            return json.load(f)
    return path_or_value


def read_text(path):
    with codecs.open(path, 'r', encoding='utf-8') as f:
        return f.read()


def build_store(opts):
    """
    Create the JsonLdStore described by the command line options

    :param opts: parsed argparse namespace
    :returns: the store
    :rtype: ldstore.JsonLdStore
    """
    options = read_json(opts.options) if opts.options else {}
    if not isinstance(options, dict):
        raise ValueError('Options file must hold a JSON object: %r'
                         % opts.options)

    kwargs = {'secure': opts.secure}
    if opts.timeout is not None:
        kwargs['timeout'] = opts.timeout
    if opts.loader == 'aiohttp':
        options['transport'] = aiohttp_transport(**kwargs)
    else:
        options['transport'] = requests_transport(**kwargs)

    if opts.container:
        options['container'] = opts.container
    if opts.context:
        options['context'] = read_json(opts.context)
    if opts.template:
        options['template'] = read_text(opts.template)
    if opts.cors_proxy:
        options['corsProxy'] = opts.cors_proxy
    log.debug("build_store: %r" % sorted(options))
    return ldstore.JsonLdStore(options)


def with_context(store, object_):
    """Give a JSON-LD object the store context unless it has its own"""
    if '@context' not in object_ and store.context is not None:
        object_['@context'] = store.context
    return object_


def run(store, opts):
    """
    Run the requested task

    :returns: a JSON-serializable result, or None
    """
    if opts.get:
        return store.get(opts.get, read_json(opts.context))
    if opts.list:
        return store.list(opts.list)
    if opts.put:
        # save() fills in the store context
        return len(store.save(read_json(opts.put)))
    if opts.add:
        if store.container is None:
            raise ValueError('--add needs a --container')
        object_ = with_context(store, read_json(opts.add))
        return store.add(store.container, object_).iri
    if opts.patch:
        return len(store.patch(with_context(store, read_json(opts.patch))))
    if opts.delete:
        store.delete(opts.delete)
        return None
    if opts.render:
        return store.render(container_iri=opts.container)
    return None


def main(*argv):
    import argparse

    prs = argparse.ArgumentParser()

    prs.add_argument('--get',
                     help='TASK: Fetch the object with the given IRI',
                     dest='get',
                     action='store')
    prs.add_argument('--list',
                     help='TASK: List the members of a container',
                     dest='list',
                     action='store')
    prs.add_argument('--put',
                     help='TASK: Replace a document with a JSON-LD file',
                     dest='put',
                     action='store')
    prs.add_argument('--add',
                     help='TASK: Add a JSON-LD file to the container',
                     dest='add',
                     action='store')
    prs.add_argument('--patch',
                     help='TASK: Merge a JSON-LD file into its document',
                     dest='patch',
                     action='store')
    prs.add_argument('--delete',
                     help='TASK: Delete the document of the given IRI',
                     dest='delete',
                     action='store')
    prs.add_argument('--render',
                     help='TASK: Render the container with the template',
                     dest='render',
                     action='store_true')

    prs.add_argument('--container',
                     help='Container IRI',
                     dest='container',
                     action='store')
    prs.add_argument('--context',
                     help='@context file or URI',
                     dest='context',
                     action='store')
    prs.add_argument('--template',
                     help='Template file used by --render',
                     dest='template',
                     action='store')
    prs.add_argument('--options',
                     help='JSON file with store options',
                     dest='options',
                     action='store')
    prs.add_argument('--cors-proxy',
                     help='Send every request through this proxy',
                     dest='cors_proxy',
                     action='store')
    prs.add_argument('--loader',
                     help='HTTP library: requests, aiohttp '
                          '[default: requests]',
                     dest='loader',
                     choices=['requests', 'aiohttp'],
                     default='requests')
    prs.add_argument('--secure',
                     help='Only allow https IRIs',
                     dest='secure',
                     action='store_true')
    prs.add_argument('--timeout',
                     help='HTTP timeout in seconds',
                     dest='timeout',
                     type=float,
                     action='store')
    prs.add_argument('--indent',
                     help='Indent json with n spaces [default: 1]',
                     dest='indent',
                     action='store',
                     type=int,
                     default=1)

    prs.add_argument('-v', '--verbose',
                     dest='verbose',
                     action='store_true',)
    prs.add_argument('-q', '--quiet',
                     dest='quiet',
                     action='store_true',)
    if not argv:
        _argv = sys.argv[1:]
    else:
        _argv = list(argv)
    opts = prs.parse_args(args=_argv)

    if not opts.quiet:
        logging.basicConfig()

        if opts.verbose:
            logging.getLogger().setLevel(logging.DEBUG)

    store = build_store(opts)
    output = run(store, opts)
    if output is not None:
        if opts.render:
            print(output)
        else:
            print(json.dumps(output, indent=opts.indent))

    return 0


if __name__ == "__main__":
    sys.exit(main(*sys.argv[1:]))
