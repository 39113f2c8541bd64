"""
Success-or-failure values.

An Either is a tagged pair: the side says which it is, and the payload is
an explanatory message on the LEFT or a value on the RIGHT.
"""
from enum import Enum
from typing import Any, NamedTuple

class Side(Enum):
	LEFT = "left"
	RIGHT = "right"

class Either(NamedTuple):
	side: Side
	payload: Any

def left(message:str) -> Either:
	return Either(Side.LEFT, message)

def right(value:Any=None) -> Either:
	return Either(Side.RIGHT, value)

def is_left(it:Either) -> bool: return it.side is Side.LEFT
def is_right(it:Either) -> bool: return it.side is Side.RIGHT

def from_right(it:Either) -> Any:
	if it.side is Side.LEFT:
		raise ValueError(it.payload)
	return it.payload

def assert_right(it:Either, msg:str="Assertion error") -> None:
	if it.side is Side.LEFT:
		raise AssertionError(msg + ": " + it.payload)
