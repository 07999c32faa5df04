"""
Core package: the grammar model, the LBNF reader, the document layout engine
and the shared error types.

## Contracts
- cf: categories, rules, constructors and data declarations (cf2data).
- lbnf: reads grammar text into a ``cf.Grammar``.
- doc: composable text documents and their rendering.
- errors: UsageError, GrammarError, InternalError.

## Notes
- Zero-IO policy except ``lbnf.read_grammar``, which reads one file.
- Nothing here knows about command-line options or backends.

## Examples
```python
from bnfc.core import parse_grammar
g = parse_grammar('Zero. Nat ::= "0" ; Suc. Nat ::= "S" Nat ;')
[c.name for c in g.data_declarations()[0].constructors]  # ['Zero', 'Suc']
```
"""

from __future__ import annotations

from .cf import (
    BASE_TOKEN_NAMES,
    Cat,
    Category,
    CoercCat,
    Constructor,
    DataDecl,
    Grammar,
    InternalCat,
    ListCat,
    Rule,
    TokenCat,
    normalize,
    show_cat,
    str_to_cat,
)
from .errors import GrammarError, InternalError, UsageError
from .lbnf import parse_grammar, read_grammar

__all__ = [
    "BASE_TOKEN_NAMES",
    "Cat",
    "Category",
    "CoercCat",
    "Constructor",
    "DataDecl",
    "Grammar",
    "InternalCat",
    "ListCat",
    "Rule",
    "TokenCat",
    "normalize",
    "show_cat",
    "str_to_cat",
    "GrammarError",
    "InternalError",
    "UsageError",
    "parse_grammar",
    "read_grammar",
]
