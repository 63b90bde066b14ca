"""
Text emitter for tinywat.

Renders an AST as a stack-machine module in S-expression form:

    (module
     (export "f" $f) (func $f (param $0 i32) (result i32) (i32.const 1)))

Rendering never fails on a parsed tree. Instruction type tags come from
type inference, so an ill-typed subtree renders with the tag `none`.

Author: xwest
"""

from typing import Dict, Optional

from ..parser.ast_nodes import (
    ASTNode, ASTVisitor, BinaryOp, Call, Function, FunctionTable, If, Literal,
    Local, Program, Type, postorder
)
from ..analyzer.type_inference import TypeInferencer


MODULE_HEADER = "(module \n"
MODULE_FOOTER = ")"

# Parameters are always declared with the one scalar type there is
PARAMETER_TYPE = Type.INT32


class WatEmitter(ASTVisitor):
    """
    Renders nodes to instruction text.

    Output is a pure function of the tree and the function table. Nodes are
    emitted children first, each one settling its type and its text in the
    same step, so no visit recurses further than one level down.
    """

    def __init__(self, function_table: FunctionTable):
        self.function_table = function_table
        self.types = TypeInferencer(function_table)
        # Text of emitted nodes whose parent has not been emitted yet, by id
        self._emitted: Dict[int, str] = {}

    def emit(self, root: ASTNode) -> str:
        """Emit a whole subtree."""
        try:
            for node in postorder(root):
                self.types.settle(node)
                self._emitted[id(node)] = node.accept(self)
                for child in node.children():
                    self._emitted.pop(id(child), None)
            return self._emitted[id(root)]
        finally:
            self._emitted.clear()
            self.types.forget()

    def visit(self, node: ASTNode) -> str:
        emitted = self._emitted.get(id(node))
        if emitted is not None:
            return emitted
        return node.accept(self)

    def visit_literal(self, node: Literal) -> str:
        return f"(i32.const {node.value})"

    def visit_local(self, node: Local) -> str:
        return f"(get_local ${node.index})"

    def visit_binary_op(self, node: BinaryOp) -> str:
        type_tag = self.types.visit(node)
        left = self.visit(node.left)
        right = self.visit(node.right)
        return f"({type_tag}.{node.operator.mnemonic} {left} {right})"

    def visit_if(self, node: If) -> str:
        type_tag = self.types.visit(node)
        condition = self.visit(node.condition)
        then_branch = self.visit(node.then_branch)
        else_branch = self.visit(node.else_branch)
        return f"(if {type_tag} {condition} {then_branch} {else_branch})"

    def visit_call(self, node: Call) -> str:
        result = f"(call ${node.name}"
        for argument in node.arguments:
            result += " " + self.visit(argument)
        return result + ")"

    def visit_function(self, node: Function) -> str:
        result = f' (export "{node.name}" ${node.name}) '
        result += f"(func ${node.name} "

        for index in range(len(node.params)):
            result += f"(param ${index} {PARAMETER_TYPE}) "

        # Emitted from the body, not the declared return type
        result += f"(result {self.types.visit(node.body)}) "
        result += self.visit(node.body)
        result += ")"
        return result

    def visit_program(self, node: Program) -> str:
        result = MODULE_HEADER
        for function in node:
            result += self.visit(function)
        result += MODULE_FOOTER
        return result


def render(node: ASTNode, function_table: Optional[FunctionTable] = None) -> str:
    """
    Render a node as instruction text.

    Args:
        node: Any AST node
        function_table: Functions visible to calls; defaults to the node
            itself when rendering a whole Program

    Returns:
        The rendered text
    """
    if function_table is None:
        function_table = node if isinstance(node, Program) else ()
    return WatEmitter(function_table).emit(node)
