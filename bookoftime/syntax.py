"""
The set of parse-nodes in simple form.
The parser calls these constructors bottom-up as it recognizes each phrase.
Nodes are immutable tuples, so two trees compare equal exactly when they have the same shape,
and a node belongs only to its parent.
"""
from enum import Enum
from typing import NamedTuple, Union

class Fixity(Enum):
	PREFIX = "prefix"
	INFIX = "infix"

class Associativity(Enum):
	LEFT = "left"
	RIGHT = "right"

class Number(NamedTuple):
	value: float

class Reference(NamedTuple):
	name: str

class Call(NamedTuple):
	callee: Reference
	args: tuple["Node", ...] = ()

class UnaryOp(NamedTuple):
	op: str
	fixity: Fixity
	operand: "Node"

class BinaryOp(NamedTuple):
	op: str
	left: "Node"
	right: "Node"

class Binding(NamedTuple):
	""" let name = bound_expr in body_expr """
	name: Reference
	bound_expr: "Node"
	body_expr: "Node"

class Function(NamedTuple):
	""" let name(params) = body in context """
	name: Reference
	params: tuple[Reference, ...]
	body: "Node"
	context: "Node"

class If(NamedTuple):
	cond: "Node"
	then_expr: "Node"
	else_expr: "Node"

Node = Union[Number, Reference, Call, UnaryOp, BinaryOp, Binding, Function, If]


def show(node:Node) -> str:
	""" Fully-parenthesized text for a tree. Handy to see how a formula was grouped. """
	if isinstance(node, Number):
		return "%g" % node.value
	if isinstance(node, Reference):
		return node.name
	if isinstance(node, Call):
		return "%s(%s)" % (node.callee.name, ", ".join(map(show, node.args)))
	if isinstance(node, UnaryOp):
		return "(%s%s)" % (node.op, show(node.operand))
	if isinstance(node, BinaryOp):
		return "(%s %s %s)" % (show(node.left), node.op, show(node.right))
	if isinstance(node, Binding):
		return "let %s = %s in %s" % (node.name.name, show(node.bound_expr), show(node.body_expr))
	if isinstance(node, Function):
		params = ", ".join(p.name for p in node.params)
		return "let %s(%s) = %s in %s" % (node.name.name, params, show(node.body), show(node.context))
	if isinstance(node, If):
		return "if %s then %s else %s" % (show(node.cond), show(node.then_expr), show(node.else_expr))
	raise TypeError(type(node))
