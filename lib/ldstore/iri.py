"""
Document and fragment addressing for hash IRIs.

A resource such as ``http://example.org/people/alice#me`` lives in the
document ``http://example.org/people/alice``; the store reads and writes
whole documents, so every operation first maps an IRI to its document.
"""

from pyld.iri_resolver import resolve as resolve_iri


def document_iri(iri: str) -> str:
    """
    Returns the document part of a hash IRI.

    :param iri: the IRI.

    :return: the IRI without its fragment.
    """
    return iri.split('#', 1)[0]


def fragment(iri: str):
    """Return the fragment of an IRI, or None if it has none."""
    if '#' not in iri:
        return None
    return iri.split('#', 1)[1]


def resolve(iri: str, base: str) -> str:
    """
    Resolves a (possibly relative) IRI against a base IRI.

    :param iri: the IRI to resolve.
    :param base: the base IRI; may be None only for absolute IRIs.

    :return: the absolute IRI.
    """
    return resolve_iri(iri, base)


def relativize(iri: str, base: str) -> str:
    """
    Expresses an IRI relative to a document.

    Only the document itself and its fragments are shortened, to '' and
    '#<fragment>' respectively; every other IRI is returned unchanged.

    :param iri: the absolute IRI.
    :param base: the document IRI.

    :return: the relative reference or the unchanged IRI.
    """
    if not base:
        return iri
    base = document_iri(base)
    if iri == base:
        return ''
    if iri.startswith(base + '#'):
        return iri[len(base):]
    return iri


def parse_iri_objects_args(args):
    """
    Splits the arguments of add/put/patch into a target IRI and objects.

    ``(iri, obj1, obj2, ...)`` targets ``iri``; ``(obj1, obj2, ...)``
    targets the '@id' of the first object (None when it has none).

    :param args: the positional arguments.

    :return: a dict with 'iri' and 'objects'.
    """
    if not args:
        raise ValueError('Expected an IRI or at least one JSON-LD object.')
    if isinstance(args[0], str):
        return {'iri': args[0], 'objects': list(args[1:])}
    return {'iri': args[0].get('@id'), 'objects': list(args)}
