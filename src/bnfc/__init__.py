"""
bnfc: generate Agda bindings for the Haskell abstract syntax described by an
LBNF grammar.

Packages
- bnfc.core: grammar model, LBNF reader, layout engine, errors.
- bnfc.options: command-line modes and the validated option model.
- bnfc.backend: the Agda binding generator and generated-file naming.
- bnfc.io: run settings and atomic file output.
- bnfc.cli: the ``bnfc`` command.
"""

__version__ = "0.1.0"

__all__ = ["__version__"]
