"""
Compile-time scope chain. This is the canonical list-structured search.

Most links correspond to one run-time frame: a tuple whose slot zero holds the parent frame
and whose remaining slots hold values in declaration order. A link for a let-function
adds a name but no frame. Resolving a name says how many frames to climb and what
is found there, so once the compiler is done, nothing is ever looked up by name.
"""
from typing import NamedTuple, Optional, Sequence, Union, Callable
import abc

class FunctionEntry:
	""" A `let f(...)` definition. The compiler fills in `body` after compiling it, which allows recursion. """
	body: Callable

	def __init__(self, name:str, arity:int):
		self.name = name
		self.arity = arity

	def __repr__(self): return "<fn %s/%d>" % (self.name, self.arity)

class Found(NamedTuple):
	hops: int  # How many parent-links to follow from the current frame
	entry: Union[int, FunctionEntry]  # A slot index in that frame, or a function defined there

class Scope(abc.ABC):
	@abc.abstractmethod
	def resolve(self, name:str) -> Optional[Found]:
		pass

class NullScope(Scope):
	""" Beyond the outermost frame. Builtins are the compiler's business, not this chain's. """
	def resolve(self, name:str) -> Optional[Found]:
		return None
null_scope = NullScope()

class FrameScope(Scope):
	def __init__(self, names:Sequence[str], static_link:Scope):
		self._slots = {name: index for index, name in enumerate(names, 1)}
		self._static_link = static_link

	def resolve(self, name:str) -> Optional[Found]:
		if name in self._slots:
			return Found(0, self._slots[name])
		found = self._static_link.resolve(name)
		if found is not None:
			return Found(found.hops + 1, found.entry)

class DefinitionScope(Scope):
	def __init__(self, entry:FunctionEntry, static_link:Scope):
		self._entry = entry
		self._static_link = static_link

	def resolve(self, name:str) -> Optional[Found]:
		if name == self._entry.name:
			return Found(0, self._entry)
		return self._static_link.resolve(name)

PARAMETERS = ("x", "y", "t")

# The root frame is (None, x, y, t).
root_scope = FrameScope(PARAMETERS, null_scope)
