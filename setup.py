# -*- coding: utf-8 -*-
"""
LDStore
=======

LDStore_ keeps JSON-LD_ objects in a Linked Data Platform store.

.. _LDStore: http://github.com/ldstore/ldstore
.. _JSON-LD: http://json-ld.org/
"""

from setuptools import setup
import os

# get meta data
about = {}
with open(os.path.join(
        os.path.dirname(__file__), 'lib', 'ldstore', '__about__.py')) as fp:
    exec(fp.read(), about)

with open(os.path.join(os.path.dirname(__file__), 'README.rst')) as fp:
    long_description = fp.read()

setup(
    name='LDStore',
    version=about['__version__'],
    description='JSON-LD objects in a Linked Data Platform store',
    long_description=long_description,
    author='LDStore contributors',
    url='http://github.com/ldstore/ldstore',
    packages=['ldstore', 'ldstore.transport'],
    package_dir={'': 'lib'},
    license='BSD 3-Clause license',
    classifiers=[
        'Development Status :: 4 - Beta',
        'Environment :: Console',
        'Environment :: Web Environment',
        'Intended Audience :: Developers',
        'License :: OSI Approved :: BSD License',
        'Operating System :: OS Independent',
        'Programming Language :: Python',
        'Programming Language :: Python :: 3',
        'Topic :: Internet',
        'Topic :: Software Development :: Libraries',
    ],
    python_requires='>=3.8',
    install_requires=[
        'PyLD>=3.0',
        'requests',
        'Jinja2>=3.0',
    ],
    extras_require={
        'aiohttp': ['aiohttp'],
        'tests': ['pytest'],
    }
)
