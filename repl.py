import argparse
import logging
import re

from formula.errors import EvalError
from formula.namespace import Namespace
from formula.parser import ParserError, parse
from formula.tokenizer import TokenizerError, tokenize

ASSIGNMENT_PATT = re.compile(r"^\s*(?P<name>[A-Za-z_]\w*)\s*=(?!=)(?P<code>.*)$")


if __name__ == "__main__":
    arg_parser = argparse.ArgumentParser(description="Evaluate formulas interactively")
    arg_parser.add_argument("--trace", action="store_true", help="log every resolved operand and collapsed operator")
    args = arg_parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.trace else logging.WARNING,
        format="%(name)s: %(message)s",
    )

    variables: dict[str, float] = dict()

    while True:
        try:
            code = input("> ")
        except EOFError:
            print()
            break

        assign_to = None
        match = ASSIGNMENT_PATT.match(code)
        if match:
            assign_to = match.group("name")
            code = match.group("code")

        try:
            tokens = tokenize(code)
        except TokenizerError as e:
            print(e)
            continue

        try:
            expression = parse(tokens)
        except ParserError as e:
            print(e)
            continue

        try:
            result = expression.evaluate(Namespace.from_variables(variables))
        except EvalError as e:
            print(f"[Evaluation error] {e}")
            continue

        if assign_to is not None:
            variables[assign_to] = result
        print(result)
