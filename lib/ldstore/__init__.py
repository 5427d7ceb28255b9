""" The LDStore module is used to keep JSON-LD objects in an LDP store. """
from . import ldp
from . import store
from .ldp import LdpStore, StoreError
from .store import JsonLdStore

__all__ = ['ldp', 'store', 'LdpStore', 'StoreError', 'JsonLdStore']
