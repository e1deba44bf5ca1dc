"""Error handling for the λ-calculus interpreter. Only GenericExceptions should be encountered while lexing and
parsing: if another type of error is raised and makes it all the way to ErrorHandler, it is assumed to be an internal
issue.

The reducer never raises for a term without a normal form; reaching the step bound is reported with a warning.
"""

import sys

from termcolor import colored


class GenericException(Exception):
    """Templates an error message so that it can be displayed by ErrorHandler. `position` is the offset of the
    offending character(s) within `source`, which is the complete, untrimmed program text.
    """

    def __init__(self, msg, source="", position=0, length=1, args=(), diagnosis=True, internal=False):
        self.msg = msg.format(*(colored(str(arg), attrs=["bold"]) for arg in args))  # bold expr snippets
        self.source = source
        self.position = position
        self.end = position + max(length, 1)  # needed for error display

        self.diagnosis = diagnosis
        self.internal = internal

        super().__init__(self.msg)


class LexError(GenericException):
    """Raised by the lexer on a character that cannot start any token."""


class ParseError(GenericException):
    """Raised by the parser on empty input, an unexpected token or unconsumed trailing input."""


class ErrorHandler:
    """Context manager that reports errors and warnings raised while running a program."""
    ERROR = "red"
    WARNING = "magenta"

    def __init__(self, fatal=True):
        self.fatal = fatal
        self.path = None
        self.source = ""

    def register_source(self, path, source):
        """Registers the program currently being run. Should be called before lexing begins."""
        self.path = path
        self.source = source

    @staticmethod
    def locate(source, position):
        """Returns (line, line_num, col) of position in source. line_num and col are 1-based."""
        start = source.rfind("\n", 0, position) + 1
        end = source.find("\n", position)
        if end == -1:
            end = len(source)
        return source[start:end], source.count("\n", 0, start) + 1, position - start + 1

    @staticmethod
    def diagnose(error, warning=False):
        """Returns the offending line of error.source with the offending part highlighted and underlined."""
        color = ErrorHandler.WARNING if warning else ErrorHandler.ERROR

        line, __, col = ErrorHandler.locate(error.source, error.position)
        start = col - 1
        end = min(start + error.end - error.position, max(len(line), start + 1))

        diagnosis = "  " + line[:start]
        diagnosis += colored(line[start:end], color, attrs=["bold"])
        diagnosis += line[end:] + "\n"

        diagnosis += "  " + " " * start
        diagnosis += colored("^" + "~" * (end - start - 1), color, attrs=["bold"])

        return diagnosis

    def _where(self, error=None):
        """Returns the 'path:line:col: ' prefix of a message."""
        if self.path is None:
            return ""
        if error is None or not error.diagnosis or error.source != self.source:
            return colored(f"{self.path}: ", attrs=["bold"])

        __, line_num, col = ErrorHandler.locate(self.source, error.position)
        return colored(f"{self.path}:{line_num}:{col}: ", attrs=["bold"])

    def warn(self, msg, args=()):
        """Generates and prints a runtime warning message."""
        warning = GenericException(msg, args=args, diagnosis=False)
        print(self._where() + colored("warning: ", ErrorHandler.WARNING, attrs=["bold"]) + warning.msg)

    def throw(self, error):
        """Prints error, which must be a GenericException, along with the offending part of the source."""
        error_msg = self._where(error)

        if error.internal:
            error_msg += colored("[internal] ", ErrorHandler.ERROR, attrs=["bold"])

        error_msg += colored("error: ", ErrorHandler.ERROR, attrs=["bold"]) + error.msg
        print(error_msg)

        if not error.internal and error.source and error.diagnosis:
            print(ErrorHandler.diagnose(error))

        if self.fatal:
            sys.exit(1)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        do_exit = False
        if exc_type is KeyboardInterrupt:
            self.throw(GenericException("keyboard interrupt", diagnosis=False))
        elif exc_type is SystemExit:
            do_exit = True
        elif exc_type is RecursionError:
            self.throw(GenericException("normal form might exist, but maximum recursion depth exceeded",
                                        diagnosis=False))
        elif exc_type is not None and issubclass(exc_type, GenericException):
            self.throw(exc_val)
        elif exc_type is not None:
            self.throw(GenericException("unknown error: '{}: {}'", args=(exc_type.__name__, exc_val), internal=True))
            do_exit = True

        return not do_exit
