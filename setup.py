from setuptools import setup
from codecs import open
from os import path

here = path.abspath(path.dirname(__file__))

# Get the long description from the README file
with open(path.join(here, 'README.rst'), encoding='utf-8') as f:
    long_description = f.read()

setup(
    name='pyvss',
    version='0.1.0.dev1',
    description='Verifiable secret sharing over elliptic curve groups',
    long_description=long_description,
    url='http://github.com/gnosis/pyvss',
    author='Alan Lu',
    author_email='alan.lu@gnosis.pm',
    classifiers=[
        'Development Status :: 2 - Pre-Alpha',

        'Intended Audience :: Developers',
        'Intended Audience :: Science/Research',

        'Topic :: Security :: Cryptography',

        'Programming Language :: Python :: 3',
    ],

    packages=['pyvss'],
    python_requires='>=3.8',
    install_requires=[
        'py_ecc',
        'pycryptodome',
        'sqlalchemy>=1.4',
    ],
    extras_require={
        'test': [
            'flake8',
            'pytest',
        ],
    },

    entry_points={
        'console_scripts': [
            'pyvss=pyvss.__main__:main',
        ],
    },
)
