"""λ-terms in the locally nameless representation.

Bound variables are de Bruijn indices: the number of abstractions strictly between an occurrence and its binder, so
`λx -> λy -> x` is `Abs("x", Abs("y", BoundVar(1)))`. Free variables keep their names. Because no bound variable has a
name, substitution can never capture one, and α-equivalent terms are equal.

Terms are immutable values. Every transformation builds a new term, sharing the subtrees it leaves untouched.
"""

from __future__ import annotations

import sys
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Callable, Iterator, Set, Union

__all__ = ["Term", "FreeVar", "BoundVar", "Abs", "App", "Var"]

# map_vars, step and pretty recurse once per App of a spine; a Church numeral n has n of them
RECURSION_LIMIT = 10000
if sys.getrecursionlimit() < RECURSION_LIMIT:
    sys.setrecursionlimit(RECURSION_LIMIT)


class Term(ABC):
    """Base class for λ-terms."""

    def __call__(self, arg: Term) -> Term:
        """Apply this term to an argument."""
        return App(self, arg)

    @abstractmethod
    def map_vars(self, fn: Callable[[Var, int], Term], depth: int = 0) -> Term:
        """
        Rebuild this term with every variable `v` replaced by `fn(v, depth)`, where `depth` is the number of
        abstractions crossed on the way down to `v` (plus the initial `depth`).

        Subtrees in which `fn` changes nothing are returned as-is, not copied.
        """

    def subterms(self) -> Iterator[Term]:
        """Yield this term and all of its subterms, in pre-order."""
        stack = [self]
        while stack:
            term = stack.pop()
            yield term
            if isinstance(term, Abs):
                stack.append(term.body)
            elif isinstance(term, App):
                stack.extend((term.right, term.left))

    def is_well_formed(self, depth: int = 0) -> bool:
        """
        Check that every bound variable refers to an enclosing abstraction, given `depth` enclosing abstractions.

        ```
        Abs("x", BoundVar(0))   # well-formed
        Abs("x", BoundVar(1))   # ill-formed
        Abs("x", FreeVar("y"))  # well-formed, with a free variable
        ```
        """
        stack = [(self, depth)]
        while stack:
            term, depth = stack.pop()
            if isinstance(term, BoundVar) and term.index >= depth:
                return False
            if isinstance(term, Abs):
                stack.append((term.body, depth + 1))
            elif isinstance(term, App):
                stack.extend(((term.left, depth), (term.right, depth)))
        return True

    def free_vars(self) -> Set[str]:
        return {term.name for term in self.subterms() if isinstance(term, FreeVar)}

    def is_closed(self) -> bool:
        return not self.free_vars()


@dataclass(frozen=True)
class FreeVar(Term):
    """A variable that is not bound by any enclosing abstraction."""

    name: str

    def map_vars(self, fn, depth=0):
        return fn(self, depth)


@dataclass(frozen=True)
class BoundVar(Term):
    """
    A variable bound by an enclosing abstraction.

    index=0 refers to the innermost enclosing abstraction, index=1 to the next one out, and so on.
    """

    index: int

    def __post_init__(self):
        if self.index < 0:
            raise ValueError(f"de Bruijn index must be non-negative, got {self.index}")

    def map_vars(self, fn, depth=0):
        return fn(self, depth)


@dataclass(frozen=True)
class Abs(Term):
    """
    An abstraction. BoundVar(0) in `body` refers to this abstraction.

    `hint` is the name the variable had in the source program. It is only used for display and takes no part in
    equality or hashing, so `λx -> x` and `λy -> y` are equal.
    """

    hint: str = field(compare=False)
    body: Term

    def map_vars(self, fn, depth=0):
        body = self.body.map_vars(fn, depth + 1)
        return self if body is self.body else Abs(self.hint, body)


@dataclass(frozen=True)
class App(Term):
    """An application of `left` to `right`."""

    left: Term
    right: Term

    def map_vars(self, fn, depth=0):
        left = self.left.map_vars(fn, depth)
        right = self.right.map_vars(fn, depth)
        if left is self.left and right is self.right:
            return self
        return App(left, right)


Var = Union[FreeVar, BoundVar]
