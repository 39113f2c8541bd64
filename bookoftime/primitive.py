"""
The primitive namespace: constants and functions every formula may use without defining them,
plus the implementations behind the operator symbols.

Arithmetic happens on numpy.float64 scalars. With numpy's error state set to ignore,
division by zero, overflow and domain errors give inf or nan the IEEE-754 way,
rather than raising the way Python's own floats and math module would.
"""
import operator, random
from typing import NamedTuple, Callable
import numpy as np

class Primitive(NamedTuple):
	name: str
	arity: int
	fn: Callable

TRUE, FALSE = np.float64(1.0), np.float64(0.0)

def truthy(value) -> bool:
	""" Nonzero and not NaN. """
	return value != 0 and value == value

CONSTANTS = {
	"pi": np.float64(np.pi),
	"e": np.float64(np.e),
}

FUNCTIONS: dict[str, Primitive] = {}

def _install(arity:int, **functions):
	for name, fn in functions.items():
		FUNCTIONS[name] = Primitive(name, arity, fn)

def _round(value): return np.floor(value + 0.5)

def _rand(): return np.float64(random.random())

_install(0, rand=_rand)
_install(
	1,
	abs=np.abs, acos=np.arccos, acosh=np.arccosh, asin=np.arcsin, asinh=np.arcsinh,
	atan=np.arctan, atanh=np.arctanh, cbrt=np.cbrt, ceil=np.ceil, cos=np.cos, cosh=np.cosh,
	exp=np.exp, expm1=np.expm1, floor=np.floor, log=np.log, log10=np.log10, log1p=np.log1p,
	log2=np.log2, round=_round, sign=np.sign, sin=np.sin, sinh=np.sinh, sqrt=np.sqrt,
	tan=np.tan, tanh=np.tanh, trunc=np.trunc,
)
_install(2, atan2=np.arctan2, hypot=np.hypot, max=np.maximum, min=np.minimum, pow=np.power)

def _relation(test):
	def relate(a, b): return TRUE if test(a, b) else FALSE
	return relate

UNARY = {
	"-": operator.neg,
	"+": operator.pos,
}

BINARY = {
	"+": operator.add,
	"-": operator.sub,
	"*": operator.mul,
	"/": operator.truediv,
	"^": operator.pow,
	"<": _relation(operator.lt),
	"<=": _relation(operator.le),
	">": _relation(operator.gt),
	">=": _relation(operator.ge),
	"==": _relation(operator.eq),
	"!=": _relation(operator.ne),
}

# These take their right operand only on demand, so the compiler builds them specially.
SHORT_CUT = frozenset(["&&", "||"])
