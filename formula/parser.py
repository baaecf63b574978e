from dataclasses import dataclass

from formula.grammar import Expression, ExpressionToken, FunctionCall, UnaryOperation, Variable
from formula.operators import BinaryOperator, UnaryOperator
from formula.tokenizer import Token, TokenType, untokenize
from formula.value import Constant, Evaler


@dataclass
class ParserError(Exception):
    errmsg: str
    tokens: list[Token]
    error_token_idx: int

    def __str__(self) -> str:
        parsed_tokens = self.tokens[: self.error_token_idx]
        filler_whitespace = " " * len(untokenize(parsed_tokens)) + " "
        return "\n".join([f"Parser error: {self.errmsg}", untokenize(self.tokens), filler_whitespace + "^"])


BINARY_OPERATOR_TOKENS = {
    TokenType.PLUS: BinaryOperator.ADD,
    TokenType.MINUS: BinaryOperator.SUB,
    TokenType.STAR: BinaryOperator.MUL,
    TokenType.SLASH: BinaryOperator.DIV,
    TokenType.PERCENT: BinaryOperator.MOD,
    TokenType.CARET: BinaryOperator.POW,
    TokenType.LESS: BinaryOperator.LT,
    TokenType.LESS_EQUAL: BinaryOperator.LTE,
    TokenType.GREATER: BinaryOperator.GT,
    TokenType.GREATER_EQUAL: BinaryOperator.GTE,
    TokenType.EQUAL_EQUAL: BinaryOperator.EQ,
    TokenType.BANG_EQUAL: BinaryOperator.NE,
    TokenType.AND_AND: BinaryOperator.AND,
    TokenType.OR_OR: BinaryOperator.OR,
}

UNARY_OPERATOR_TOKENS = {
    TokenType.MINUS: UnaryOperator.NEG,
    TokenType.PLUS: UnaryOperator.POS,
    TokenType.BANG: UnaryOperator.NOT,
}

# brackets, unary operators and calls each add a level; evaluation recurses once per level
MAX_NESTING_DEPTH = 100


def parse(tokens: list[Token]) -> Expression:
    expr, i = _consume_expression(tokens, 0)
    if i >= len(tokens) or tokens[i].type is not TokenType.EXPR_END:
        found = tokens[i].type if i < len(tokens) else "end of input"
        raise ParserError(f"Binary operator expected, found {found}", tokens=tokens, error_token_idx=i)
    return expr


def _consume_expression(tokens: list[Token], i: int, depth: int = 0) -> tuple[Expression, int]:
    """Reads operand (operator operand)* into a flat token sequence; precedence is left to the runtime"""
    operand, i = _consume_operand(tokens, i, depth)
    result: list[ExpressionToken] = [operand]
    while i < len(tokens):
        operator = BINARY_OPERATOR_TOKENS.get(tokens[i].type)
        if operator is None:
            break
        operand, i = _consume_operand(tokens, i + 1, depth)
        result.extend((operator, operand))
    return Expression(tuple(result)), i


def _consume_operand(tokens: list[Token], i: int, depth: int) -> tuple[Evaler, int]:
    if i >= len(tokens):
        raise ParserError("Operand expected, found end of input", tokens=tokens, error_token_idx=len(tokens))
    first = tokens[i]
    if first.type is TokenType.NUMBER:
        try:
            return Constant(float(first.lexeme)), i + 1
        except ValueError:
            raise ParserError(f"Malformed number {first.lexeme!r}", tokens=tokens, error_token_idx=i)
    elif first.type is TokenType.IDENTIFIER:
        if i + 1 < len(tokens) and tokens[i + 1].type is TokenType.BRACKET_OPEN:
            _check_depth(tokens, i, depth)
            return _consume_function_call(tokens, i, depth + 1)
        return Variable(first.lexeme), i + 1
    elif first.type is TokenType.BRACKET_OPEN:
        _check_depth(tokens, i, depth)
        expr, j = _consume_expression(tokens, i + 1, depth + 1)
        if j >= len(tokens) or tokens[j].type is not TokenType.BRACKET_CLOSE:
            raise ParserError("Unclosed bracket", tokens=tokens, error_token_idx=i)
        return expr, j + 1
    elif first.type in UNARY_OPERATOR_TOKENS:
        _check_depth(tokens, i, depth)
        operand, j = _consume_operand(tokens, i + 1, depth + 1)
        return UnaryOperation(operator=UNARY_OPERATOR_TOKENS[first.type], operand=operand), j
    else:
        raise ParserError(f"Operand expected, found {first.type}", tokens=tokens, error_token_idx=i)


def _check_depth(tokens: list[Token], i: int, depth: int) -> None:
    if depth >= MAX_NESTING_DEPTH:
        raise ParserError(f"Expression nested deeper than {MAX_NESTING_DEPTH} levels", tokens=tokens, error_token_idx=i)


def _consume_function_call(tokens: list[Token], i: int, depth: int) -> tuple[FunctionCall, int]:
    name = tokens[i].lexeme
    j = i + 2  # skipping name and open bracket
    args: list[Expression] = []
    if j < len(tokens) and tokens[j].type is TokenType.BRACKET_CLOSE:
        return FunctionCall(name=name, args=()), j + 1
    while True:
        arg, j = _consume_expression(tokens, j, depth)
        args.append(arg)
        if j >= len(tokens):
            raise ParserError(f"Unclosed argument list of {name!r}", tokens=tokens, error_token_idx=i + 1)
        if tokens[j].type is TokenType.COMMA:
            j += 1
        elif tokens[j].type is TokenType.BRACKET_CLOSE:
            return FunctionCall(name=name, args=tuple(args)), j + 1
        else:
            raise ParserError(f"Expected ',' or ')', found {tokens[j].type}", tokens=tokens, error_token_idx=j)
