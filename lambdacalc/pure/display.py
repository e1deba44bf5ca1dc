"""Rendering of λ-terms back into the concrete syntax accepted by the parser.

Each term is formatted in such a way that:
    1. Consecutive abstractions are combined into one multivariate abstraction: λf -> λx -> x is λf x -> x.
    2. As many superfluous brackets as possible are removed.
    3. Bound variables are printed with the name they had in the source program, unless that name would be captured
       by, or would capture, another variable. In that case a fresh name is chosen (see choose_name).
"""

from lambdacalc.lang.numerical import number
from lambdacalc.pure.term import Abs, App, BoundVar, FreeVar


def choose_name(name, avoid):
    """Returns a name derived from name that is not in avoid: x', x'', x''', then x3, x4, ..."""
    base = name.rstrip("'")
    fresh = name + "'"
    suffix = 1
    while fresh in avoid:
        if suffix < 3:
            fresh += "'"
        else:
            fresh = base + str(suffix)
        suffix += 1
    return fresh


def pretty(term, numerals=False):
    """Returns the string representation of term. If numerals, Church numerals are written as numbers."""
    return _pretty(term, [], term.free_vars(), numerals)


def _pretty(term, names, free, numerals):
    """names are the names given to the enclosing abstractions, innermost first."""
    if isinstance(term, FreeVar):
        return term.name

    if isinstance(term, BoundVar):
        if term.index >= len(names):
            raise ValueError(f"unbound de Bruijn index {term.index}")
        return names[term.index]

    if isinstance(term, Abs):
        num = number(term) if numerals else None
        if num is not None:
            return str(num)

        head = []
        while isinstance(term, Abs):
            name = term.hint
            if name in free or name in names:
                name = choose_name(name, free.union(names))
            names = [name] + names
            head.append(name)
            term = term.body

        return f"λ{' '.join(head)} -> {_pretty(term, names, free, numerals)}"

    left = _pretty(term.left, names, free, numerals)
    right = _pretty(term.right, names, free, numerals)

    if _is_abs(term.left, numerals):
        left = f"({left})"
    if isinstance(term.right, App) or _is_abs(term.right, numerals):
        right = f"({right})"

    return f"{left} {right}"


def _is_abs(term, numerals):
    """Whether or not term is printed as an abstraction, as opposed to an atom."""
    return isinstance(term, Abs) and not (numerals and number(term) is not None)
