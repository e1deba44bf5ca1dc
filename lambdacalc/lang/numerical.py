"""Natural numbers encoded as Church numerals. Note that arithmetic is not implemented here: numerals are ordinary
λ-terms, so operations on them are written in the calculus itself, e.g. `λn f x -> f (n f x)` for the successor.

Source: https://en.wikipedia.org/wiki/Church_encoding#Calculation_with_Church_numerals
"""

from lambdacalc.pure.term import Abs, App, BoundVar


def cnumber(num):
    """Returns the Church numeral λf x -> f (f (... (f x))) of num (cnum = Church numeral)."""
    if isinstance(num, bool) or not isinstance(num, int) or num < 0:
        raise ValueError(f"expected natural number, got {num!r}")

    body = BoundVar(0)
    for __ in range(num):
        body = App(BoundVar(1), body)

    return Abs("f", Abs("x", body))


def number(cnum):
    """Returns the natural number encoded by cnum. If cnum isn't a Church numeral, returns None."""
    if not isinstance(cnum, Abs) or not isinstance(cnum.body, Abs):
        return None

    num = 0
    nth_body = cnum.body.body
    while isinstance(nth_body, App):
        if nth_body.left != BoundVar(1):
            return None
        nth_body = nth_body.right
        num += 1

    return num if nth_body == BoundVar(0) else None
