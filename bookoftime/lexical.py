"""
Lexical helpers for the recursive-descent front end.

A Reader is a cursor over the formula text. Each matcher either consumes what it was
asked for, along with any white space after it, and returns the matched text;
or it leaves the cursor where it was and returns None. Every miss is tallied at the
position where it happened, keeping only the furthest position reached, so that
a parse error can say what would have been acceptable at the spot where things went wrong.
"""
import re
from typing import Optional

NUMBER = re.compile(r"(?=\.?[0-9])(?:(?:[1-9][0-9]*|0)?\.[0-9]*|[1-9][0-9]*|0)")
NAME = re.compile(r"[A-Za-z_][A-Za-z0-9_]*")
KEYWORDS = frozenset(["let", "in", "if", "then", "else"])

_WHITE = re.compile(r"\s*")
_KEYWORD = {word: re.compile(re.escape(word) + r"(?![A-Za-z0-9_])") for word in KEYWORDS}

class Reader:
	text: str
	pos: int
	furthest: int
	expected: set[str]

	def __init__(self, text:str):
		self.text = text
		self.pos = 0
		self.furthest = 0
		self.expected = set()
		self._skip()

	def _skip(self):
		self.pos = _WHITE.match(self.text, self.pos).end()

	def mark(self) -> int: return self.pos
	def reset(self, mark:int): self.pos = mark

	def miss(self, what:str) -> None:
		if self.pos > self.furthest:
			self.furthest, self.expected = self.pos, {what}
		elif self.pos == self.furthest:
			self.expected.add(what)
		return None

	def _hit(self, end:int) -> str:
		found = self.text[self.pos:end]
		self.pos = end
		self._skip()
		return found

	def token(self, literal:str) -> Optional[str]:
		if self.text.startswith(literal, self.pos):
			return self._hit(self.pos + len(literal))
		return self.miss(repr(literal))

	def keyword(self, word:str) -> Optional[str]:
		""" Like token, but the next character must not continue a word: `include` is not `in`. """
		return self._pattern(_KEYWORD[word], repr(word))

	def number(self) -> Optional[str]:
		return self._pattern(NUMBER, "a number")

	def name(self) -> Optional[str]:
		""" An identifier that is not a keyword. """
		match = NAME.match(self.text, self.pos)
		if match and match.group() not in KEYWORDS:
			return self._hit(match.end())
		return self.miss("a name")

	def _pattern(self, pattern:re.Pattern, description:str) -> Optional[str]:
		match = pattern.match(self.text, self.pos)
		if match: return self._hit(match.end())
		return self.miss(description)

	def at_end(self) -> bool:
		if self.pos == len(self.text): return True
		self.miss("the end of the formula")
		return False
