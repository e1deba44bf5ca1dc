import unittest

from lambdacalc.lang.error import LexError
from lambdacalc.pure import lexer
from lambdacalc.pure.lexer import Token, TokenKind, lex


def kinds(source):
    return [token.kind for token in lex(source)]


class LexerTestCase(unittest.TestCase):

    def test_identifiers(self):
        cases = {
            "x": [Token(TokenKind.IDENT, "x", 0), Token(TokenKind.EOF, "", 1)],
            "foo": [Token(TokenKind.IDENT, "foo", 0), Token(TokenKind.EOF, "", 3)],
            "α": [Token(TokenKind.IDENT, "α", 0), Token(TokenKind.EOF, "", 1)],
            "x''": [Token(TokenKind.IDENT, "x''", 0), Token(TokenKind.EOF, "", 3)],
            "x1_y": [Token(TokenKind.IDENT, "x1_y", 0), Token(TokenKind.EOF, "", 4)],
        }
        for case, expected in cases.items():
            self.assertEqual(expected, lex(case), case)

    def test_keywords(self):
        cases = {
            "let": [TokenKind.LET, TokenKind.EOF],
            "in": [TokenKind.IN, TokenKind.EOF],
            "lets": [TokenKind.IDENT, TokenKind.EOF],
            "inn": [TokenKind.IDENT, TokenKind.EOF],
            "in'": [TokenKind.IDENT, TokenKind.EOF],
        }
        for case, expected in cases.items():
            self.assertEqual(expected, kinds(case), case)

    def test_natural(self):
        self.assertEqual([Token(TokenKind.NATURAL, "1729", 0), Token(TokenKind.EOF, "", 4)], lex("1729"))
        self.assertEqual([TokenKind.NATURAL, TokenKind.IDENT, TokenKind.EOF], kinds("12ab"))

    def test_let(self):
        expected = [
            Token(TokenKind.LET, "let", 0),
            Token(TokenKind.IDENT, "id", 4),
            Token(TokenKind.COLON_EQ, ":=", 7),
            Token(TokenKind.LAMBDA, "\\", 10),
            Token(TokenKind.IDENT, "x", 11),
            Token(TokenKind.R_ARROW, "->", 13),
            Token(TokenKind.IDENT, "x", 16),
            Token(TokenKind.IN, "in", 18),
            Token(TokenKind.IDENT, "id", 21),
            Token(TokenKind.IDENT, "t", 24),
            Token(TokenKind.EOF, "", 25),
        ]
        self.assertEqual(expected, lex("let id := \\x -> x in id t"))

    def test_abstraction(self):
        expected = [
            Token(TokenKind.L_PAREN, "(", 0),
            Token(TokenKind.LAMBDA, "λ", 1),
            Token(TokenKind.IDENT, "x", 2),
            Token(TokenKind.R_ARROW, "->", 4),
            Token(TokenKind.IDENT, "x", 7),
            Token(TokenKind.R_PAREN, ")", 8),
            Token(TokenKind.IDENT, "t", 10),
            Token(TokenKind.EOF, "", 11),
        ]
        self.assertEqual(expected, lex("(λx -> x) t"))

        # λ is a letter, but never the start of an identifier
        self.assertEqual([TokenKind.LAMBDA, TokenKind.IDENT, TokenKind.EOF], kinds("λx"))
        self.assertEqual([TokenKind.LAMBDA, TokenKind.LAMBDA, TokenKind.IDENT, TokenKind.EOF], kinds("λλx"))

    def test_whitespace(self):
        cases = {" ": 1, "\t": 1, "\n": 1, "\r\n": 2, "\u2028": 1, "  \x85 ": 4, "": 0}
        for case, position in cases.items():
            self.assertEqual([Token(TokenKind.EOF, "", position)], lex(case), repr(case))

        self.assertEqual([Token(TokenKind.IDENT, "x", 2), Token(TokenKind.EOF, "", 4)], lex("  x "))

    def test_comments(self):
        self.assertEqual([Token(TokenKind.EOF, "", 22)], lex("-- informative comment"))
        self.assertEqual([Token(TokenKind.IDENT, "x", 11), Token(TokenKind.EOF, "", 12)], lex("-- comment\nx"))
        self.assertEqual([TokenKind.IDENT, TokenKind.EOF], kinds("x -- trailing comment"))

    def test_invalid(self):
        should_raise = {"-": 0, "x - y": 2, ":": 0, "x : y": 2, "x = y": 2, "λx. x": 2, "#": 0, "a [b]": 2, "_x": 0}
        for case, position in should_raise.items():
            with self.assertRaises(LexError, msg=case) as context:
                lex(case)
            self.assertEqual(position, context.exception.position, case)
            self.assertEqual(case, context.exception.source, case)

    def test_documented_syntax(self):
        # the backslash spelling of λ is shown in the module documentation
        self.assertIn("(\"λx -> x\" and \"\\x -> x\" are the same term)", lexer.__doc__)
        self.assertEqual(kinds("λx -> x"), kinds("\\x -> x"))


if __name__ == '__main__':
    unittest.main()
