r"""Lexical analysis of λ-calculus programs.

The lexer turns program text into a flat list of tokens, terminated by a single EOF token. The surface syntax it
recognises is:

```
λ  \                ; an abstraction ("λx -> x" and "\x -> x" are the same term)
->                  ; separates the head of an abstraction from its body
let  :=  in         ; let x := s in t
(  )                ; grouping
x  foo  x'  α       ; identifiers: Unicode ID_Start, then ID_Continue, then any number of apostrophes
0  42               ; natural numbers (desugared into Church numerals by the parser)
-- comment          ; runs until the end of the line
```

Whitespace is any run of Unicode Pattern_White_Space and is never emitted as a token.
"""

from dataclasses import dataclass
from enum import Enum

from lambdacalc.lang.error import LexError


class TokenKind(Enum):
    """The kind of a Token."""
    LAMBDA = "λ"
    LET = "let"
    COLON_EQ = ":="
    IN = "in"
    R_ARROW = "->"
    L_PAREN = "("
    R_PAREN = ")"
    IDENT = "identifier"
    NATURAL = "natural number"
    EOF = "end of input"


@dataclass(frozen=True)
class Token:
    """A lexical token. position is the offset of the token's first character in the original input."""
    kind: TokenKind
    lexeme: str
    position: int


KEYWORDS = {"let": TokenKind.LET, "in": TokenKind.IN}

# The Unicode Pattern_White_Space property is a closed set.
PATTERN_WHITE_SPACE = frozenset("\t\n\x0b\x0c\r \x85\u200e\u200f\u2028\u2029")


def is_ident_start(char):
    """Whether or not char may begin an identifier."""
    return char != "_" and char.isidentifier()


def is_ident_continue(char):
    """Whether or not char may continue an identifier."""
    return ("a" + char).isidentifier()


def is_digit(char):
    return "0" <= char <= "9"


def lex(source):
    """Lexes source into a list of Tokens. Raises LexError on a character that cannot begin a token."""
    return Lexer(source).lex()


class Lexer:
    """Single left-to-right scanner over a λ-calculus program."""

    def __init__(self, source):
        self.source = source
        self.position = 0  # current position of the lexer within source
        self.start = 0     # position of the first character of the current token

        self.tokens = []

    def lex(self):
        while not self.is_at_end():
            self.start = self.position
            self.lex_token()

        self.tokens.append(Token(TokenKind.EOF, "", self.position))
        return self.tokens

    def lex_token(self):
        char = self.advance()

        if char in ("λ", "\\"):  # checked before identifiers: λ is a letter
            self.push(TokenKind.LAMBDA)

        elif char == "-":
            if self.match(">"):
                self.push(TokenKind.R_ARROW)
            elif self.match("-"):
                while not self.is_at_end() and not self.match("\n"):
                    self.advance()
            else:
                raise LexError("got invalid token {}, expected {} or {}", self.source, self.start,
                               args=("-", "->", "--"))

        elif char == ":":
            if self.match("="):
                self.push(TokenKind.COLON_EQ)
            else:
                raise LexError("got invalid token {}, expected {}", self.source, self.start, args=(":", ":="))

        elif char == "(":
            self.push(TokenKind.L_PAREN)

        elif char == ")":
            self.push(TokenKind.R_PAREN)

        elif char in PATTERN_WHITE_SPACE:
            self.skip(lambda c: c in PATTERN_WHITE_SPACE)

        elif is_ident_start(char):
            self.skip(is_ident_continue)
            self.skip(lambda c: c == "'")
            self.push(KEYWORDS.get(self.source[self.start:self.position], TokenKind.IDENT))

        elif is_digit(char):
            self.skip(is_digit)
            self.push(TokenKind.NATURAL)

        else:
            raise LexError("got invalid token {}", self.source, self.start, args=(char,))

    def push(self, kind):
        self.tokens.append(Token(kind, self.source[self.start:self.position], self.start))

    def advance(self):
        """Returns the current character and advances the lexer."""
        char = self.source[self.position]
        self.position += 1
        return char

    def peek(self):
        """Returns the current character, or an empty string at the end of the input."""
        return self.source[self.position] if not self.is_at_end() else ""

    def match(self, char):
        """Advances the lexer if the current character is char."""
        if self.peek() == char:
            self.position += 1
            return True
        return False

    def skip(self, predicate):
        """Advances the lexer over the longest run of characters satisfying predicate."""
        while not self.is_at_end() and predicate(self.peek()):
            self.position += 1

    def is_at_end(self):
        return self.position >= len(self.source)
