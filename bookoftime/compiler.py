"""
Lower a syntax tree into a tree of Python closures.

Every node becomes a function of one argument: the current run-time frame.
Frames are tuples. Slot zero holds the parent frame and the rest hold values;
the root frame is (None, x, y, t). All names are resolved here, once, so at run time
the closures do nothing but arithmetic, slot reads, and calls to their pre-resolved children.
Nothing here generates or executes source text.
"""
from typing import Callable, Sequence

import numpy as np
from boozetools.support.foundation import Visitor

from . import syntax, primitive, diagnostics
from .environment import Scope, FrameScope, DefinitionScope, FunctionEntry, root_scope
from .front_end import parse_text

Closure = Callable[[tuple], np.float64]
Evaluator = Callable[[float, float, float], float]

class Compiler(Visitor):
	"""
	Each visit method takes a node and the scope it appears in, and returns its closure.
	Unresolvable names and unsupported operators raise CompileError,
	so compilation either succeeds completely or produces nothing.
	"""

	def visit_Number(self, node:syntax.Number, scope:Scope) -> Closure:
		value = np.float64(node.value)
		return lambda frame: value

	def visit_Reference(self, node:syntax.Reference, scope:Scope) -> Closure:
		name = node.name
		found = scope.resolve(name)
		if found is not None:
			if isinstance(found.entry, FunctionEntry):
				raise diagnostics.needs_call(name)
			return _read_slot(found.hops, found.entry)
		if name in primitive.CONSTANTS:
			value = primitive.CONSTANTS[name]
			return lambda frame: value
		if name in primitive.FUNCTIONS:
			raise diagnostics.needs_call(name)
		raise diagnostics.undefined_name(name)

	def visit_Call(self, node:syntax.Call, scope:Scope) -> Closure:
		name = node.callee.name
		found = scope.resolve(name)
		if found is not None:
			if not isinstance(found.entry, FunctionEntry):
				raise diagnostics.not_callable(name)
			_check_arity(name, found.entry.arity, node.args)
			return _call_function(found.hops, found.entry, self._visit_args(node.args, scope))
		if name in primitive.FUNCTIONS:
			prim = primitive.FUNCTIONS[name]
			_check_arity(name, prim.arity, node.args)
			return _call_primitive(prim.fn, self._visit_args(node.args, scope))
		if name in primitive.CONSTANTS:
			raise diagnostics.not_callable(name)
		raise diagnostics.undefined_name(name)

	def _visit_args(self, args:Sequence[syntax.Node], scope:Scope) -> list[Closure]:
		return [self.visit(a, scope) for a in args]

	def visit_UnaryOp(self, node:syntax.UnaryOp, scope:Scope) -> Closure:
		if node.fixity is not syntax.Fixity.PREFIX or node.op not in primitive.UNARY:
			raise diagnostics.unsupported_operator(node.op, node.fixity)
		fn = primitive.UNARY[node.op]
		operand = self.visit(node.operand, scope)
		return lambda frame: fn(operand(frame))

	def visit_BinaryOp(self, node:syntax.BinaryOp, scope:Scope) -> Closure:
		if node.op not in primitive.BINARY and node.op not in primitive.SHORT_CUT:
			raise diagnostics.unsupported_operator(node.op, syntax.Fixity.INFIX)
		left = self.visit(node.left, scope)
		right = self.visit(node.right, scope)
		truthy = primitive.truthy
		if node.op == "&&":
			def conjunction(frame):
				value = left(frame)
				return right(frame) if truthy(value) else value
			return conjunction
		if node.op == "||":
			def disjunction(frame):
				value = left(frame)
				return value if truthy(value) else right(frame)
			return disjunction
		fn = primitive.BINARY[node.op]
		return lambda frame: fn(left(frame), right(frame))

	def visit_Binding(self, node:syntax.Binding, scope:Scope) -> Closure:
		# The bound expression cannot see its own name.
		bound = self.visit(node.bound_expr, scope)
		body = self.visit(node.body_expr, FrameScope([node.name.name], scope))
		return lambda frame: body((frame, bound(frame)))

	def visit_Function(self, node:syntax.Function, scope:Scope) -> Closure:
		name = node.name.name
		params = [p.name for p in node.params]
		for index, param in enumerate(params):
			if param in params[:index]:
				raise diagnostics.duplicate_parameter(name, param)
		entry = FunctionEntry(name, len(params))
		here = DefinitionScope(entry, scope)
		entry.body = self.visit(node.body, FrameScope(params, here))
		return self.visit(node.context, here)

	def visit_If(self, node:syntax.If, scope:Scope) -> Closure:
		# Both branches must compile, though only one will run.
		cond = self.visit(node.cond, scope)
		then_part = self.visit(node.then_expr, scope)
		else_part = self.visit(node.else_expr, scope)
		truthy = primitive.truthy
		return lambda frame: then_part(frame) if truthy(cond(frame)) else else_part(frame)

def _check_arity(name:str, need:int, args:Sequence[syntax.Node]):
	if len(args) != need:
		raise diagnostics.wrong_arity(name, need, len(args))

def _read_slot(hops:int, index:int) -> Closure:
	if hops == 0: return lambda frame: frame[index]
	if hops == 1: return lambda frame: frame[0][index]
	def read(frame):
		for _ in range(hops): frame = frame[0]
		return frame[index]
	return read

def _call_primitive(fn:Callable, args:list[Closure]) -> Closure:
	if len(args) == 0: return lambda frame: fn()
	if len(args) == 1:
		a, = args
		return lambda frame: fn(a(frame))
	if len(args) == 2:
		a, b = args
		return lambda frame: fn(a(frame), b(frame))
	return lambda frame: fn(*[arg(frame) for arg in args])

def _call_function(hops:int, entry:FunctionEntry, args:list[Closure]) -> Closure:
	# The callee's frame links to the frame where it was defined, found `hops` up from the caller.
	def call(frame):
		link = frame
		for _ in range(hops): link = link[0]
		return entry.body((link, *[arg(frame) for arg in args]))
	return call

def compile_tree(tree:syntax.Node) -> Evaluator:
	""" Turn a syntax tree into an evaluator f(x, y, t) -> float, or raise CompileError. """
	root = Compiler().visit(tree, root_scope)
	@np.errstate(all="ignore")
	def evaluator(x:float, y:float, t:float) -> float:
		return float(root((None, np.float64(x), np.float64(y), np.float64(t))))
	return evaluator

def compile_text(text:str) -> Evaluator:
	""" Parse, then compile. Raises ParseError or CompileError. """
	return compile_tree(parse_text(text))
