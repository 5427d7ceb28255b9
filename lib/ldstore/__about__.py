# -*- coding: utf-8 -*-
"""
LDStore metadata.
"""

__all__ = [
    '__copyright__', '__license__', '__version__'
]

__copyright__ = 'Copyright (c) 2015-2026 LDStore contributors'
__license__ = 'New BSD license'
__version__ = '0.3.0'
