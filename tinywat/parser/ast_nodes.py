"""
Abstract Syntax Tree node definitions for tinywat.

The node set is closed: Literal, Local, BinaryOp, If, Call, Function and
Program. Every consumer is an ASTVisitor, and ASTVisitor declares one
abstract method per node kind, so adding a node kind means every consumer
must grow a handler before it can be instantiated again.

Nodes are frozen dataclasses. A tree is built once by the parser and never
mutated; equality is structural.

Author: xwest
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Any, Iterator, List, Optional, Sequence, Tuple, Union


class Type(Enum):
    """
    Value types.

    NONE is the "ill-typed" sentinel, not the absence of a value. It renders
    as the literal word `none` wherever a type tag would go.
    """
    NONE = "none"
    INT32 = "i32"

    def __str__(self) -> str:
        return self.value


class BinaryOperator(Enum):
    """Binary operators, valued by their instruction mnemonic."""
    ADD = "add"
    SUBTRACT = "sub"
    MULTIPLY = "mul"
    DIVIDE = "div"
    MODULO = "mod"
    GREATER_THAN = "gt"
    LESS_THAN = "lt"

    @property
    def mnemonic(self) -> str:
        return self.value

    @property
    def symbol(self) -> str:
        return _OPERATOR_SYMBOLS[self]


_OPERATOR_SYMBOLS = {
    BinaryOperator.ADD: "+",
    BinaryOperator.SUBTRACT: "-",
    BinaryOperator.MULTIPLY: "*",
    BinaryOperator.DIVIDE: "/",
    BinaryOperator.MODULO: "%",
    BinaryOperator.GREATER_THAN: ">",
    BinaryOperator.LESS_THAN: "<",
}


class ASTVisitor(ABC):
    """
    Abstract visitor over the closed node set.

    Subclasses must implement every visit_* method.
    """

    def visit(self, node: 'ASTNode') -> Any:
        return node.accept(self)

    @abstractmethod
    def visit_literal(self, node: 'Literal') -> Any:
        pass

    @abstractmethod
    def visit_local(self, node: 'Local') -> Any:
        pass

    @abstractmethod
    def visit_binary_op(self, node: 'BinaryOp') -> Any:
        pass

    @abstractmethod
    def visit_if(self, node: 'If') -> Any:
        pass

    @abstractmethod
    def visit_call(self, node: 'Call') -> Any:
        pass

    @abstractmethod
    def visit_function(self, node: 'Function') -> Any:
        pass

    @abstractmethod
    def visit_program(self, node: 'Program') -> Any:
        pass


class ASTNode(ABC):
    """Base class for all AST nodes."""

    @abstractmethod
    def accept(self, visitor: ASTVisitor) -> Any:
        """Accept a visitor (visitor pattern)."""

    @abstractmethod
    def children(self) -> List['ASTNode']:
        """Get all child nodes."""


@dataclass(frozen=True)
class Parameter:
    """A function parameter. Every parameter is an i32."""
    name: str
    type: Type = Type.INT32


# ============================================================================
# Expressions
# ============================================================================

@dataclass(frozen=True)
class Literal(ASTNode):
    """Integer constant."""
    value: int

    def accept(self, visitor: ASTVisitor) -> Any:
        return visitor.visit_literal(self)

    def children(self) -> List[ASTNode]:
        return []


@dataclass(frozen=True)
class Local(ASTNode):
    """Reference to the index-th parameter of the enclosing function."""
    index: int
    parameter: Parameter

    def accept(self, visitor: ASTVisitor) -> Any:
        return visitor.visit_local(self)

    def children(self) -> List[ASTNode]:
        return []


@dataclass(frozen=True)
class BinaryOp(ASTNode):
    operator: BinaryOperator
    left: 'Expression'
    right: 'Expression'

    def accept(self, visitor: ASTVisitor) -> Any:
        return visitor.visit_binary_op(self)

    def children(self) -> List[ASTNode]:
        return [self.left, self.right]


@dataclass(frozen=True)
class If(ASTNode):
    """Conditional expression; both branches are required."""
    condition: 'Expression'
    then_branch: 'Expression'
    else_branch: 'Expression'

    def accept(self, visitor: ASTVisitor) -> Any:
        return visitor.visit_if(self)

    def children(self) -> List[ASTNode]:
        return [self.condition, self.then_branch, self.else_branch]


@dataclass(frozen=True)
class Call(ASTNode):
    """
    Call to a top-level function.

    Only the name is recorded; the callee is looked up in the function
    table whenever a type is needed.
    """
    name: str
    arguments: Tuple['Expression', ...] = ()

    def accept(self, visitor: ASTVisitor) -> Any:
        return visitor.visit_call(self)

    def children(self) -> List[ASTNode]:
        return list(self.arguments)


Expression = Union[Literal, Local, BinaryOp, If, Call]


# ============================================================================
# Top-level nodes
# ============================================================================

@dataclass(frozen=True)
class Function(ASTNode):
    """Function definition."""
    name: str
    params: Tuple[Parameter, ...]
    return_type: Type
    body: Expression

    def accept(self, visitor: ASTVisitor) -> Any:
        return visitor.visit_function(self)

    def children(self) -> List[ASTNode]:
        return [self.body]


@dataclass(frozen=True)
class Program(ASTNode):
    """
    Root node: the ordered top-level functions.

    A Program is also the function table that Call resolution searches, so
    it iterates like a sequence of Function nodes.
    """
    functions: Tuple[Function, ...]

    def accept(self, visitor: ASTVisitor) -> Any:
        return visitor.visit_program(self)

    def children(self) -> List[ASTNode]:
        return list(self.functions)

    def __iter__(self) -> Iterator[Function]:
        return iter(self.functions)

    def __len__(self) -> int:
        return len(self.functions)

    def __getitem__(self, index: int) -> Function:
        return self.functions[index]

    def lookup(self, name: str) -> Optional[Function]:
        return lookup_function(self.functions, name)


FunctionTable = Sequence[Function]


def lookup_function(function_table: FunctionTable, name: str) -> Optional[Function]:
    """First function in the table with the given name, or None."""
    for function in function_table:
        if function.name == name:
            return function
    return None


def walk(node: ASTNode) -> Iterator[ASTNode]:
    """Pre-order traversal of a subtree."""
    stack = [node]
    while stack:
        current = stack.pop()
        yield current
        stack.extend(reversed(current.children()))


def postorder(node: ASTNode) -> Iterator[ASTNode]:
    """
    Post-order traversal of a subtree: every node comes after its children.

    Both traversals keep their own stack, so operator chains far deeper than
    the interpreter's recursion limit can still be visited.
    """
    stack = [(node, False)]
    while stack:
        current, expanded = stack.pop()
        if expanded:
            yield current
            continue
        stack.append((current, True))
        for child in reversed(current.children()):
            stack.append((child, False))
