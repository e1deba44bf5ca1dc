"""Normal-order β-reduction of locally nameless λ-terms.

A redex is an application whose left child is an abstraction. Normal order always contracts the leftmost-outermost
redex, which is the strategy that finds a normal form whenever one exists:

    (λx -> z) ((λw -> w w) (λw -> w w))  →  z

Sources: https://plato.stanford.edu/entries/lambda-calculus/#Com,
         http://pages.cs.wisc.edu/~horwitz/CS704-NOTES/1.LAMBDA-CALCULUS.html#NOR
"""

from dataclasses import dataclass
from typing import List, Optional

from lambdacalc.pure.parser import parse
from lambdacalc.pure.term import Abs, App, BoundVar, Term


def shift(term, amount):
    """Adds amount to every bound variable of term that refers past term's own abstractions."""
    if amount == 0:
        return term

    def go(var, depth):
        if isinstance(var, BoundVar) and var.index >= depth:
            return BoundVar(var.index + amount)
        return var

    return term.map_vars(go)


def instantiate(image, scope):
    """Replaces the variable bound by the abstraction whose body is scope with image.

    Occurrences of the binder under further abstractions receive image shifted past those abstractions, and
    variables referring to abstractions outside scope lose the binder being removed. No names are involved, so
    nothing can be captured.
    """

    def go(var, depth):
        if not isinstance(var, BoundVar) or var.index < depth:
            return var
        if var.index == depth:
            return shift(image, depth)
        return BoundVar(var.index - 1)

    return scope.map_vars(go)


def step(term):
    """Performs at most one normal-order β-reduction. Returns the resulting term and whether a contraction
    occurred.
    """
    if isinstance(term, Abs):
        body, contracted = step(term.body)
        return (Abs(term.hint, body), True) if contracted else (term, False)

    if isinstance(term, App):
        if isinstance(term.left, Abs):
            return instantiate(term.right, term.left.body), True

        # the argument is left alone until the function position cannot be reduced
        left, contracted = step(term.left)
        if contracted:
            return App(left, term.right), True

        right, contracted = step(term.right)
        if contracted:
            return App(term.left, right), True

    return term, False


def reduce(term):
    """Returns term after one step of normal-order β-reduction, or term itself if it is in normal form."""
    return step(term)[0]


@dataclass
class Evaluation:
    """The terms visited while evaluating a term, starting with the term itself. normal is True if the last of
    them is a normal form, and False if evaluation stopped at the step limit.
    """
    steps: List[Term]
    normal: bool

    @property
    def result(self) -> Term:
        return self.steps[-1]

    @property
    def normal_form(self) -> Optional[Term]:
        return self.result if self.normal else None

    def __len__(self):
        return len(self.steps)

    def __iter__(self):
        return iter(self.steps)


def evaluate(term, max_steps=None):
    """Reduces term in normal order until it reaches a normal form or max_steps contractions have been made."""
    if max_steps is None:
        max_steps = NormalOrderReducer.STEP_LIMIT

    steps = [term]
    for __ in range(max_steps):
        term, contracted = step(term)
        if not contracted:
            return Evaluation(steps, normal=True)
        steps.append(term)

    return Evaluation(steps, normal=not step(term)[1])


class NormalOrderReducer:
    """Parses and evaluates a λ-calculus program, reporting through an ErrorHandler when it has no normal form
    within the step limit.
    """
    STEP_LIMIT = 1000

    def __init__(self, expr, max_steps=None):
        self.expr = expr
        self.max_steps = max_steps if max_steps is not None else NormalOrderReducer.STEP_LIMIT
        self.tree = parse(expr)

        self.evaluation = None

    @property
    def reduced(self):
        return self.evaluation is not None

    def beta_reduce(self, error_handler=None):
        """Evaluates self.tree. error_handler is warned if the step limit was reached."""
        self.evaluation = evaluate(self.tree, self.max_steps)

        if not self.evaluation.normal and error_handler is not None:
            msg = "no normal form was reached within {} steps"
            error_handler.warn(msg, args=(self.max_steps,))

        return self.evaluation

    def __iter__(self):
        if not self.reduced:
            self.beta_reduce()
        return iter(self.evaluation)

    def __repr__(self):
        return f"NormalOrderReducer({self.expr!r})"
