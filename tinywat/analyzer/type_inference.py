"""
Structural type inference for tinywat.

A node's type is computed from its children's types every time it is asked
for; nothing is cached on the tree. Mismatches produce Type.NONE rather
than an exception, and call arguments are never checked against the
callee's parameters.

Subtrees are settled bottom-up over an explicit stack, so inference depth is
not bounded by the interpreter's recursion limit.

Author: xwest
"""

from typing import Dict, List

from ..parser.ast_nodes import (
    ASTNode, ASTVisitor, BinaryOp, Call, Function, FunctionTable, If, Literal,
    Local, Program, Type, lookup_function, postorder, walk
)
from .errors import (
    TypeWarning, create_function_type_warning, create_undefined_function_warning
)


class TypeInferencer(ASTVisitor):
    """
    Infers the type of any node against a function table.

    The function table is only consulted for Call nodes.
    """

    def __init__(self, function_table: FunctionTable):
        self.function_table = function_table
        # Types of the nodes settled during the current traversal, by id
        self._settled: Dict[int, Type] = {}

    def visit(self, node: ASTNode) -> Type:
        settled = self._settled.get(id(node))
        if settled is not None:
            return settled
        return node.accept(self)

    def settle(self, node: ASTNode) -> Type:
        """Infer a node whose children are already settled and remember it."""
        node_type = node.accept(self)
        self._settled[id(node)] = node_type
        return node_type

    def forget(self):
        """Drop every settled type."""
        self._settled.clear()

    def infer(self, node: ASTNode) -> Type:
        """Infer a whole subtree, children first."""
        try:
            node_type = Type.NONE
            for current in postorder(node):
                node_type = self.settle(current)
            return node_type
        finally:
            self.forget()

    def visit_literal(self, node: Literal) -> Type:
        return Type.INT32

    def visit_local(self, node: Local) -> Type:
        return node.parameter.type

    def visit_binary_op(self, node: BinaryOp) -> Type:
        # The operator itself never changes the type; comparisons are i32 too
        return _agree(self.visit(node.left), self.visit(node.right))

    def visit_if(self, node: If) -> Type:
        return _agree(self.visit(node.then_branch), self.visit(node.else_branch))

    def visit_call(self, node: Call) -> Type:
        callee = lookup_function(self.function_table, node.name)
        if callee is None:
            return Type.NONE
        return callee.return_type

    def visit_function(self, node: Function) -> Type:
        return _agree(node.return_type, self.visit(node.body))

    def visit_program(self, node: Program) -> Type:
        return Type.NONE


def _agree(first: Type, second: Type) -> Type:
    return first if first == second else Type.NONE


def infer_type(node: ASTNode, function_table: FunctionTable) -> Type:
    """
    Infer the type of a node.

    Args:
        node: Any AST node
        function_table: Functions visible to calls (usually the Program)

    Returns:
        Type.INT32, or Type.NONE if the node is ill-typed
    """
    return TypeInferencer(function_table).infer(node)


def collect_type_warnings(program: Program) -> List[TypeWarning]:
    """
    Report the silent type errors in a program.

    Returns:
        One warning per ill-typed function and per call to an undefined
        function, in source order
    """
    inferencer = TypeInferencer(program)
    warnings: List[TypeWarning] = []

    for function in program:
        for node in walk(function.body):
            if isinstance(node, Call) and lookup_function(program, node.name) is None:
                warnings.append(create_undefined_function_warning(node.name, function.name, node))

        if inferencer.infer(function) == Type.NONE:
            warnings.append(create_function_type_warning(
                function.name,
                str(function.return_type),
                str(inferencer.infer(function.body)),
                function
            ))

    return warnings
