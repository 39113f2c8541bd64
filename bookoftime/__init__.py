"""
Turn formula text in x, y and t into a fast numeric function, for plotting animated surfaces.

	>>> from bookoftime import compile_text
	>>> f = compile_text("let r = sqrt(x^2 + y^2) in sin(r - t)")
	>>> f(0, 0, 0)
	0.0
"""
from .diagnostics import ParseError, CompileError
from .front_end import parse_text
from .compiler import compile_tree, compile_text
