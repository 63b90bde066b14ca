"""
tinywat Recursive Descent Parser

One method per grammar rule, one token of lookahead, no backtracking:

    Program   := Function+
    Function  := 'fn' ID '(' Params ')' '{' Expr '}'
    Params    := (ID (',' ID)*)?
    Expr      := '(' Expr ')'
               | 'if' Expr 'then' Expr 'else' Expr
               | Atom (BinOp Expr)?
    Atom      := NUMBER | ID ('(' ArgList ')')?
    ArgList   := (Expr (',' Expr)*)?
    BinOp     := '+' | '-' | '*' | '/' | '%' | '>' | '<'

All binary operators share a single precedence level. After an operator the
parser reads the rest as a full Expr, so chains nest to the right:
`2 * 3 + 4` is `2 * (3 + 4)`. A parenthesized group is a complete Expr and
cannot be the left operand of an operator.

Author: xwest
"""

from typing import List, Optional, Tuple

from ..lexer.lexer import Cursor, next_token
from ..lexer.tokens import Token, TokenType
from .ast_nodes import (
    BinaryOp, BinaryOperator, Call, Expression, Function, If, Literal, Local,
    Parameter, Program, Type
)
from .errors import (
    ParseError, create_literal_range_error, create_nesting_error,
    create_unexpected_token_error, create_unknown_variable_error
)


# Literals are unsigned; there is no negative literal syntax
I32_MAX = 2 ** 31 - 1

TOKEN_TO_OPERATOR = {
    TokenType.PLUS: BinaryOperator.ADD,
    TokenType.MINUS: BinaryOperator.SUBTRACT,
    TokenType.MULTIPLY: BinaryOperator.MULTIPLY,
    TokenType.DIVIDE: BinaryOperator.DIVIDE,
    TokenType.MODULO: BinaryOperator.MODULO,
    TokenType.GREATER_THAN: BinaryOperator.GREATER_THAN,
    TokenType.LESS_THAN: BinaryOperator.LESS_THAN,
}


class Parser:
    """
    tinywat recursive descent parser.

    Pulls tokens straight from a cursor; nothing is tokenized ahead of time.
    """

    def __init__(self, cursor: Cursor):
        """
        Initialize parser over a cursor.

        Args:
            cursor: Remaining source text; consumed as parsing proceeds
        """
        self.cursor = cursor
        # Parameters of the function whose body is being parsed
        self.params: Tuple[Parameter, ...] = ()
        self.function_name = ""

    def parse(self) -> Program:
        """
        Parse the whole input into a Program.

        Returns:
            Program AST node

        Raises:
            ParseError: If an expected token is missing
            LexError: If the input contains a character no token starts with
        """
        return self._parse_program()

    def _parse_program(self) -> Program:
        functions = [self._parse_function()]

        while not self.cursor.at_end():
            # Anything after a function must start another one
            if not self._check(TokenType.FN):
                raise self._error(TokenType.FN)
            functions.append(self._parse_function())

        return Program(tuple(functions))

    def _parse_function(self) -> Function:
        """Parse a function definition."""
        self._expect(TokenType.FN)
        name = self._expect(TokenType.IDENTIFIER, "function name").value

        self._expect(TokenType.LEFT_PAREN)
        params = self._parse_params()
        self._expect(TokenType.RIGHT_PAREN)

        self.params = params
        self.function_name = name
        try:
            self._expect(TokenType.LEFT_BRACE)
            body = self._parse_expression()
            self._expect(TokenType.RIGHT_BRACE)
        finally:
            self.params = ()
            self.function_name = ""

        return Function(name, params, Type.INT32, body)

    def _parse_params(self) -> Tuple[Parameter, ...]:
        """Parse a possibly empty, comma separated parameter list."""
        params: List[Parameter] = []

        if self._check(TokenType.IDENTIFIER):
            params.append(Parameter(self._advance().value))
            while self._match(TokenType.COMMA):
                name_token = self._expect(TokenType.IDENTIFIER, "parameter name")
                params.append(Parameter(name_token.value))

        return tuple(params)

    def _parse_expression(self) -> Expression:
        """Parse an expression."""
        if self._match(TokenType.LEFT_PAREN):
            inner = self._parse_expression()
            self._expect(TokenType.RIGHT_PAREN)
            return inner

        if self._match(TokenType.IF):
            return self._parse_if()

        return self._parse_operator_tail(self._parse_atom())

    def _parse_if(self) -> If:
        """Parse the remainder of `if c then a else b`; `if` is consumed."""
        condition = self._parse_expression()
        self._expect(TokenType.THEN)
        then_branch = self._parse_expression()
        self._expect(TokenType.ELSE)
        else_branch = self._parse_expression()
        return If(condition, then_branch, else_branch)

    def _parse_operator_tail(self, left: Expression) -> Expression:
        """Parse an optional `BinOp Expr` after a complete operand."""
        token = self._peek()
        if not token.is_operator:
            return left

        self._advance()
        right = self._parse_expression()
        return BinaryOp(TOKEN_TO_OPERATOR[token.type], left, right)

    def _parse_atom(self) -> Expression:
        """Parse an integer literal, a parameter reference or a call."""
        if self._check(TokenType.INTEGER):
            remaining = self.cursor.text
            value = self._advance().value
            if value > I32_MAX:
                raise create_literal_range_error(value, remaining)
            return Literal(value)

        if not self._check(TokenType.IDENTIFIER):
            raise self._error("expression")

        remaining = self.cursor.text
        name = self._advance().value

        if self._match(TokenType.LEFT_PAREN):
            arguments = self._parse_arguments()
            self._expect(TokenType.RIGHT_PAREN)
            return Call(name, arguments)

        return self._resolve_local(name, remaining)

    def _parse_arguments(self) -> Tuple[Expression, ...]:
        """Parse a possibly empty, comma separated argument list."""
        arguments: List[Expression] = []

        if not self._check(TokenType.RIGHT_PAREN):
            arguments.append(self._parse_expression())
            while self._match(TokenType.COMMA):
                arguments.append(self._parse_expression())

        return tuple(arguments)

    def _resolve_local(self, name: str, remaining: str) -> Local:
        """First parameter with a matching name wins."""
        for index, param in enumerate(self.params):
            if param.name == name:
                return Local(index, param)
        raise create_unknown_variable_error(name, self.function_name, remaining)

    # Utility methods

    def _peek(self) -> Token:
        """Return the next token without consuming it."""
        return next_token(self.cursor, peek=True)

    def _advance(self) -> Token:
        """Consume and return the next token."""
        return next_token(self.cursor)

    def _check(self, token_type: TokenType) -> bool:
        """Check if the next token matches type without consuming."""
        return self._peek().type == token_type

    def _match(self, token_type: TokenType) -> bool:
        """Consume the next token if it matches type."""
        if self._check(token_type):
            self._advance()
            return True
        return False

    def _expect(self, token_type: TokenType, description: Optional[str] = None) -> Token:
        """Consume a token of expected type or raise; the cursor is untouched on failure."""
        token = self._peek()
        if token.type != token_type:
            raise self._error(description or token_type, token)
        return self._advance()

    def _error(self, expected, found: Optional[Token] = None) -> ParseError:
        if found is None and not self.cursor.at_end():
            found = self._peek()
        return create_unexpected_token_error(expected, found, self.cursor.text)


def parse_program(cursor: Cursor) -> Program:
    """
    Parse every function remaining in a cursor.

    Args:
        cursor: Remaining input; left positioned where parsing stopped

    Returns:
        Program AST

    Raises:
        ParseError: If parsing fails, including input nested deeper than the
            interpreter can recurse
        LexError: If lexing fails
    """
    try:
        return Parser(cursor).parse()
    except RecursionError:
        raise create_nesting_error(cursor.text) from None


def parse(source: str) -> Program:
    """
    Convenience function to parse a source string.

    Args:
        source: Source code string

    Returns:
        Program AST

    Raises:
        ParseError: If parsing fails
        LexError: If lexing fails
    """
    return parse_program(Cursor(source))
