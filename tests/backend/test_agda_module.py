from __future__ import annotations

from bnfc.backend import BACKENDS, backend_for
from bnfc.backend.agda import cf2agda, make_agda
from bnfc.core.cf import Cat, Constructor, DataDecl, Grammar, Rule
from bnfc.core.errors import UsageError
from bnfc.options.model import SharedOptions, Target

import pytest

TIME = "2024-01-01 00:00 UTC"

NAT_MODULE = """\
-- Agda bindings for the Haskell abstract syntax data types.
-- Generated by BNFC at 2024-01-01 00:00 UTC.

module ASTNat where

open import Agda.Builtin.Char using () renaming (Char to #Char)
open import Agda.Builtin.Float using () renaming (Float to Double)
open import Agda.Builtin.Int using () renaming (Int to Integer)
open import Agda.Builtin.List using () renaming (List to #List)
open import Agda.Builtin.String using () renaming
  ( String to #String
  ; primStringFromList to #stringFromList
  )

{-# FOREIGN GHC import qualified Data.Text #-}
{-# FOREIGN GHC import AbsNat #-}
{-# FOREIGN GHC import PrintNat #-}

data Id : Set where
  mkId : #List #Char → Id

{-# COMPILE GHC Id = data Id (Id) #-}

mutual

  data Nat : Set where
    zero : Nat
    suc : Nat → Nat

  {-# COMPILE GHC Nat = data Nat
    ( zero
    | suc
    ) #-}

-- Binding the BNFC pretty printer

printId : Id → #String
printId (mkId s) = #stringFromList s

postulate
  printNat : Nat → #String

{-# COMPILE GHC printNat = \\ x -> Data.Text.pack (printTree (x :: Nat)) #-}
"""

NAT_DATAS = [DataDecl(Cat("Nat"), (Constructor("zero"), Constructor("suc", (Cat("Nat"),))))]


def test_cf2agda_full_module() -> None:
    assert cf2agda(TIME, "ASTNat", "AbsNat", "PrintNat", NAT_DATAS) == NAT_MODULE


def test_cf2agda_is_idempotent() -> None:
    first = cf2agda(TIME, "ASTNat", "AbsNat", "PrintNat", NAT_DATAS)
    second = cf2agda(TIME, "ASTNat", "AbsNat", "PrintNat", NAT_DATAS)
    assert first == second


def test_make_agda_names_file_from_options() -> None:
    grammar = Grammar(
        rules=(
            Rule("zero", Cat("Nat"), ("0",)),
            Rule("suc", Cat("Nat"), ("S", Cat("Nat"))),
        )
    )
    [out] = make_agda(TIME, SharedOptions(lang="Nat"), grammar)
    assert out.path == "ASTNat.agda"
    assert out.content == NAT_MODULE

    [nested] = make_agda(TIME, SharedOptions(lang="Nat", in_dir=True, in_package="My.Pkg"), grammar)
    assert nested.path == "My/Pkg/Nat/AST.agda"
    assert "module My.Pkg.Nat.AST where" in nested.content
    assert "{-# FOREIGN GHC import My.Pkg.Nat.Abs #-}" in nested.content


def test_backend_registry() -> None:
    assert backend_for(Target.HASKELL) is make_agda
    assert set(BACKENDS) == {Target.HASKELL, Target.HASKELL_GADT, Target.PROFILE}
    with pytest.raises(UsageError, match="no backend available for target java"):
        backend_for(Target.JAVA)
