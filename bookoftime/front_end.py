"""
Recursive-descent front end for formulas.

Terms are recognized by hand. Operators come from the declarative table in `operators`,
and a generic precedence-climbing loop arranges them into a correctly grouped tree.
The compound forms (let-bindings, let-functions, if-then-else) get first refusal
wherever a term may appear; they extend as far to the right as they can.
"""
from typing import Optional, Sequence

from . import syntax
from .diagnostics import ParseError, parse_error
from .lexical import Reader
from .operators import Operator, TABLE, RIGHT, prefix_operators, infix_operators

class FormulaParser:
	def __init__(self, table:Sequence[Operator]):
		self._prefix = prefix_operators(table)
		self._infix = infix_operators(table)

	def parse(self, text:str) -> syntax.Node:
		reader = Reader(text)
		tree = self.expression(reader)
		if not reader.at_end():
			raise _syntax_error(reader)
		return tree

	def expression(self, reader:Reader) -> syntax.Node:
		return self._climb(reader, 0)

	def _climb(self, reader:Reader, min_prec:int) -> syntax.Node:
		left = self._term(reader)
		while True:
			op = self._infix_operator(reader, min_prec)
			if op is None: return left
			next_min = op.precedence if op.associativity is RIGHT else op.precedence + 1
			right = self._climb(reader, next_min)
			left = syntax.BinaryOp(op.symbol, left, right)

	def _infix_operator(self, reader:Reader, min_prec:int) -> Optional[Operator]:
		for op in self._infix:
			if op.precedence < min_prec: break
			if reader.token(op.symbol) is not None: return op
		return None

	def _term(self, reader:Reader) -> syntax.Node:
		# Prefix operators apply to the immediate term only, innermost-first.
		prefixes = []
		while (op := self._prefix_operator(reader)) is not None:
			prefixes.append(op)
		node = self._core(reader)
		for op in reversed(prefixes):
			node = syntax.UnaryOp(op.symbol, op.fixity, node)
		return node

	def _prefix_operator(self, reader:Reader) -> Optional[Operator]:
		for op in self._prefix:
			if reader.token(op.symbol) is not None: return op
		return None

	def _core(self, reader:Reader) -> syntax.Node:
		for alternative in (self._binding, self._function, self._if, self._parenthesized, self._call_or_reference, _number):
			node = alternative(reader)
			if node is not None: return node
		raise _syntax_error(reader)

	def _binding(self, reader:Reader) -> Optional[syntax.Binding]:
		start = reader.mark()
		if reader.keyword("let") and (name := reader.name()) and reader.token("="):
			bound = self.expression(reader)
			_expect_keyword(reader, "in")
			return syntax.Binding(syntax.Reference(name), bound, self.expression(reader))
		reader.reset(start)
		return None

	def _function(self, reader:Reader) -> Optional[syntax.Function]:
		start = reader.mark()
		if reader.keyword("let") and (name := reader.name()) and reader.token("("):
			params = tuple(map(syntax.Reference, _comma_list(reader, _expect_name)))
			_expect_token(reader, "=")
			body = self.expression(reader)
			_expect_keyword(reader, "in")
			return syntax.Function(syntax.Reference(name), params, body, self.expression(reader))
		reader.reset(start)
		return None

	def _if(self, reader:Reader) -> Optional[syntax.If]:
		if reader.keyword("if") is None: return None
		cond = self.expression(reader)
		_expect_keyword(reader, "then")
		then_expr = self.expression(reader)
		_expect_keyword(reader, "else")
		return syntax.If(cond, then_expr, self.expression(reader))

	def _parenthesized(self, reader:Reader) -> Optional[syntax.Node]:
		if reader.token("(") is None: return None
		inside = self.expression(reader)
		_expect_token(reader, ")")
		return inside

	def _call_or_reference(self, reader:Reader) -> Optional[syntax.Node]:
		name = reader.name()
		if name is None: return None
		ref = syntax.Reference(name)
		if reader.token("(") is None: return ref
		return syntax.Call(ref, tuple(_comma_list(reader, self.expression)))

def _number(reader:Reader) -> Optional[syntax.Number]:
	text = reader.number()
	if text is None: return None
	return syntax.Number(float(text))

def _comma_list(reader:Reader, item) -> list:
	""" Items separated by commas, up to and including the closing parenthesis. """
	items = []
	if reader.token(")") is not None: return items
	items.append(item(reader))
	while reader.token(",") is not None:
		items.append(item(reader))
	_expect_token(reader, ")")
	return items

def _expect_token(reader:Reader, literal:str):
	if reader.token(literal) is None: raise _syntax_error(reader)

def _expect_keyword(reader:Reader, word:str):
	if reader.keyword(word) is None: raise _syntax_error(reader)

def _expect_name(reader:Reader) -> str:
	name = reader.name()
	if name is None: raise _syntax_error(reader)
	return name

def _syntax_error(reader:Reader) -> ParseError:
	return parse_error(reader.text, reader.furthest, reader.expected, _best_hint(reader.expected))

formula_parser = FormulaParser(TABLE)

def parse_text(text:str) -> syntax.Node:
	""" Turn formula text into a syntax tree, or raise ParseError. """
	return formula_parser.parse(text)

##########################
#
#  Advice for common mistakes. The first hint whose token
#  was among those expected at the failure point wins.
#

_hints = []

def _hint(expected:str, text:str):
	_hints.append((expected, text))

def _best_hint(expected) -> Optional[str]:
	for token, text in _hints:
		if token in expected: return text
	return None

_hint("')'", "I suspect a missing ')' closing parentheses.")
_hint("'in'", "A let needs IN, followed by the formula where the new name applies.")
_hint("'then'", "IF needs THEN.")
_hint("'else'", "IF-THEN needs an ELSE clause; every formula must have a value.")
_hint("'='", "A let needs '=' after the name, or after the parameter list of a function.")
_hint("the end of the formula", "Seems to be missing some sort of operator here.")
