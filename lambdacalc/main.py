"""Command-line entry point: evaluates a λ-calculus program and prints its normal-order reduction trace. Uses the
error handling context manager. Called from the lc executable script.

The program is read from a file, from -e, or from standard input, in that order of preference.
"""

import argparse
import sys

from lambdacalc.lang.error import ErrorHandler, GenericException
from lambdacalc.pure.display import pretty
from lambdacalc.pure.reducer import NormalOrderReducer


def read_program(args):
    """Returns (path, source) of the program to run, where path is only used in messages."""
    if args.expr is not None:
        return "<expr>", args.expr

    if args.file is not None:
        try:
            with open(args.file, "r", encoding="utf-8") as file:
                return args.file, file.read()
        except OSError:
            raise GenericException("'{}' could not be opened", args=(args.file,), diagnosis=False)

    return "<stdin>", sys.stdin.read()


def main(argv=None):
    """Runs the lc interpreter. argv defaults to the process arguments."""
    with ErrorHandler() as error_handler:
        parser = argparse.ArgumentParser(prog="lc", description="Normal-order λ-calculus interpreter.")
        parser.add_argument("file", help="file to evaluate (if empty, the program is read from stdin)", nargs="?")
        parser.add_argument("-e", "--expr", help="evaluate EXPR instead of a file")
        parser.add_argument("-n", "--max-steps", type=int, default=NormalOrderReducer.STEP_LIMIT,
                            help="number of β-reductions after which a term is considered to have no normal form "
                                 f"(default: {NormalOrderReducer.STEP_LIMIT})")
        parser.add_argument("--numerals", action="store_true", help="print Church numerals as numbers")
        parser.add_argument("-q", "--quiet", action="store_true", help="only print the last term of the trace")
        args = parser.parse_args(argv)

        if args.max_steps < 0:
            parser.error("--max-steps must be non-negative")

        path, source = read_program(args)
        error_handler.register_source(path, source)

        nor = NormalOrderReducer(source, args.max_steps)
        evaluation = nor.beta_reduce(error_handler)

        if args.quiet:
            print(pretty(evaluation.result, args.numerals))
        else:
            for idx, term in enumerate(evaluation):
                print(("β " if idx else "  ") + pretty(term, args.numerals))


if __name__ == "__main__":
    main()
