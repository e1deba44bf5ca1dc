r"""Recursive-descent parser for λ-calculus programs.

The concrete syntax, in EBNF:

```
<term>        ::= <abstraction> | <let> | <application>
<abstraction> ::= "λ" <ident>+ "->" <term>          ; "\" may be used in place of "λ"
                                                    ; - the body is greedy: λx -> x y = λx -> (x y)
<let>         ::= "let" <ident> ":=" <term> "in" <term>
<application> ::= <atom> <atom>*                    ; associating by left: a b c d = ((a b) c) d
<atom>        ::= <ident> | <natural> | "(" <term> ")"
```

Surface syntax is desugared into the three core forms while parsing:
    - λx y z -> t        becomes  λx -> λy -> λz -> t
    - let x := s in t    becomes  (λx -> t) s
    - n                  becomes  the Church numeral λf x -> f (... (f x)), with n applications of f

Variables are resolved against a stack of the names bound by enclosing abstractions: a name bound by the i-th
innermost abstraction becomes BoundVar(i), any other name becomes a FreeVar.
"""

from contextlib import contextmanager

from lambdacalc.lang.error import ParseError
from lambdacalc.lang.numerical import cnumber
from lambdacalc.pure.lexer import TokenKind, lex
from lambdacalc.pure.term import Abs, App, BoundVar, FreeVar

ATOM_PREFIXES = (TokenKind.IDENT, TokenKind.NATURAL, TokenKind.L_PAREN)


def parse(source):
    """Parses source into a Term. Raises LexError or ParseError if source is not a valid λ-term."""
    return Parser(source).parse()


class Parser:
    """Parser for a single λ-calculus program. A Parser should be used for one call to parse only."""

    def __init__(self, source):
        self.source = source
        self.tokens = lex(source)
        self.current = 0

        # names bound by the enclosing abstractions, innermost first: the index of a name is its de Bruijn index
        self.bound = []

    def parse(self):
        if self.peek().kind is TokenKind.EOF:
            self.error("unexpected {}, a term was expected", self.peek().kind.value)

        try:
            term = self.term()
        except RecursionError:
            self.error("the term is nested too deeply")

        if self.peek().kind is not TokenKind.EOF:
            self.error("{} was expected, got {}", TokenKind.EOF.value, self.peek().lexeme)
        return term

    def term(self):
        kind = self.peek().kind
        if kind is TokenKind.LAMBDA:
            return self.abstraction()
        elif kind is TokenKind.LET:
            return self.let()
        return self.application()

    def abstraction(self):
        self.consume(TokenKind.LAMBDA, "a λ was expected")

        names = [self.ident()]
        while self.peek().kind is TokenKind.IDENT:
            names.append(self.ident())

        self.consume(TokenKind.R_ARROW, "a -> was expected")
        with self.binding(names):
            body = self.term()

        for name in reversed(names):
            body = Abs(name, body)
        return body

    def let(self):
        self.consume(TokenKind.LET, "let was expected")
        name = self.ident()
        self.consume(TokenKind.COLON_EQ, "a := was expected")

        definition = self.term()  # not recursive: name is not in scope here

        self.consume(TokenKind.IN, "in was expected")
        with self.binding([name]):
            body = self.term()

        return App(Abs(name, body), definition)

    def application(self):
        left = self.atom()
        while self.peek().kind in ATOM_PREFIXES:
            left = App(left, self.atom())
        return left

    def atom(self):
        token = self.peek()

        if token.kind is TokenKind.IDENT:
            return self.variable()

        elif token.kind is TokenKind.NATURAL:
            self.advance()
            return cnumber(int(token.lexeme))

        elif token.kind is TokenKind.L_PAREN:
            self.advance()
            term = self.term()
            self.consume(TokenKind.R_PAREN, "a ) was expected")
            return term

        if token.kind is TokenKind.EOF:
            self.error("unexpected {}, a term was expected", token.kind.value)
        self.error("a term was expected, got {}", token.lexeme)

    def variable(self):
        name = self.ident()
        if name in self.bound:
            return BoundVar(self.bound.index(name))
        return FreeVar(name)

    def ident(self):
        return self.consume(TokenKind.IDENT, "an identifier was expected").lexeme

    @contextmanager
    def binding(self, names):
        """Brings names into scope, the last of them innermost, for the duration of the with block."""
        self.bound[:0] = reversed(names)
        try:
            yield
        finally:
            del self.bound[:len(names)]

    def peek(self):
        return self.tokens[self.current]

    def advance(self):
        token = self.tokens[self.current]
        if token.kind is not TokenKind.EOF:
            self.current += 1
        return token

    def consume(self, kind, expectation):
        """Advances past the current token if it is of kind, otherwise raises a ParseError."""
        if self.peek().kind is kind:
            return self.advance()

        got = self.peek().lexeme or self.peek().kind.value
        self.error(expectation + ", got {}", got)

    def error(self, msg, *args):
        token = self.peek()
        raise ParseError(msg, self.source, token.position, len(token.lexeme), args=args)
