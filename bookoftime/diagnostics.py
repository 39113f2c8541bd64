"""
Everything to do with things going wrong: the two kinds of error a formula can suffer,
the pictures that explain them, and a Report that collects them for whoever is watching.
"""
import sys, random
from typing import Sequence

from boozetools.parsing.interface import ParseError as BoozeParseError, SemanticError
from boozetools.support.failureprone import SourceText, illustration

class TooManyIssues(Exception):
	pass

class ParseError(BoozeParseError):
	"""
	Malformed formula text.
	The arguments are: the message, the unparsed remainder of the input
	from the point of failure, the tokens that would have been acceptable there,
	and the offset of that point.
	"""
	def __init__(self, message:str, remaining:str, expected:tuple[str, ...], offset:int):
		super().__init__(message, remaining, expected, offset)

	@property
	def message(self) -> str: return self.args[0]
	@property
	def remaining(self) -> str: return self.args[1]
	@property
	def expected(self) -> tuple[str, ...]: return self.args[2]
	@property
	def offset(self) -> int: return self.args[3]

	def __str__(self): return self.message

class CompileError(SemanticError):
	""" Well-formed text that still does not make sense, such as a name that refers to nothing. """
	def __init__(self, message:str):
		super().__init__(message)

	@property
	def message(self) -> str: return self.args[0]

	def __str__(self): return self.message


def _outburst():
	particle = ["Oh, ", "Well, ", "Aw, ", "", ""]

	minced_oaths = [
		'Ack', 'Blargh', 'Confound it', 'Crud', 'Curses', 'Drat',
		'Fiddlesticks', 'Good Grief', 'Great Scott', 'Heavens', 'Nuts', 'Rats',
	]

	resignations = [
		'The surface will not rise.',
		'Time stands still.',
		'I cannot plot that.',
		'I need to ask for help.',
	]

	return "%s%s! %s"%tuple(map(random.choice, (particle, minced_oaths, resignations)))


class Annotation:
	""" Points at one spot in a formula, with an optional caption. """
	def __init__(self, text:str, offset:int, width:int=1, caption:str=""):
		self.text = text
		self.offset = offset
		self.width = width
		self.caption = caption

	def illustrate(self):
		source = SourceText(self.text)
		row, col = source.find_row_col(self.offset)
		single_line = source.line_of_text(row)
		return illustration(single_line, col, self.width, prefix='% 6d |' % row, caption=self.caption)

class Pic:
	def __init__(self, intro:str, anns:list[Annotation], footer:Sequence[str]=()):
		self._intro, self._anns, self._footer = intro, anns, footer
	def as_text(self):
		lines = [self._intro]
		if self._anns: lines.append("")
		lines.extend(ann.illustrate() for ann in self._anns)
		lines.extend(self._footer)
		return '\n'.join(lines)


def _what_is_at(text:str, offset:int) -> str:
	rest = text[offset:].strip()
	if not rest: return "the end of the formula"
	word = rest.split()[0]
	return repr(word if len(word) <= 12 else word[:12]+"...")

def parse_error(text:str, offset:int, expected:Sequence[str], hint:str=None) -> ParseError:
	""" Build the ParseError for a failure at `offset`, with a picture of the spot. """
	expected = tuple(sorted(expected))
	intro = "I got confused by %s. I was expecting %s." % (_what_is_at(text, offset), _one_of(expected))
	footer = [hint] if hint else []
	pic = Pic(intro, [Annotation(text, offset, 1, "here")], footer)
	return ParseError(pic.as_text(), text[offset:], expected, offset)

def _one_of(expected:Sequence[str]) -> str:
	if not expected: return "something else"
	if len(expected) == 1: return expected[0]
	return "one of " + ", ".join(expected)

def undefined_name(name:str) -> CompileError:
	return CompileError("I don't see what '%s' refers to." % name)

def not_callable(name:str) -> CompileError:
	return CompileError("'%s' is a value, not a function, so it cannot be called." % name)

def needs_call(name:str) -> CompileError:
	return CompileError("'%s' is a function. Call it with (arguments) to get a number." % name)

def wrong_arity(name:str, need:int, got:int) -> CompileError:
	plural = '' if need == 1 else 's'
	return CompileError("'%s' takes %d argument%s, but got %d instead." % (name, need, plural, got))

def duplicate_parameter(function:str, param:str) -> CompileError:
	return CompileError("Function '%s' names the parameter '%s' more than once." % (function, param))

def unsupported_operator(op:str, fixity) -> CompileError:
	return CompileError("There is no implementation for the %s operator '%s'." % (fixity.value, op))


class Report:
	"""
	Collects the issues that happen to formulas, and gossips about them on stderr
	when asked to be verbose. A max_issues of None means there is no cap.
	"""
	_issues : list[Pic]

	def __init__(self, *, verbose:int=0, max_issues=3):
		self._verbose = verbose or 0   # Because None is incomparable.
		self._issues = []
		self._max_issues = max_issues

	def ok(self): return not self._issues
	def sick(self): return bool(self._issues)

	@property
	def issues(self) -> list[Pic]: return list(self._issues)

	def issue(self, it:Pic):
		self._issues.append(it)
		if len(self._issues) == self._max_issues:
			raise TooManyIssues(self)

	def reset(self):
		self._issues.clear()

	def info(self, *args):
		if self._verbose:
			print(*args, file=sys.stderr)

	def rejected_formula(self, text:str, error:Exception):
		""" Make an entry for a formula that could not become an evaluator. """
		self.info("Rejected formula:", repr(text))
		self.issue(Pic(str(error), [], ["The previous formula stays in effect."]))

	def complain_to_console(self):
		""" Emit all the issues to the console. """
		_bemoan(self._issues)

	def assert_no_issues(self, message):
		""" Does what it says on the tin """
		if self._issues:
			self.complain_to_console()
			raise AssertionError(_outburst()+" "+message)

def _bemoan(issues):
	""" Emit all the issues to the console. """
	if issues:
		print("*"*60, file=sys.stderr)
		print(_outburst(), file=sys.stderr)
	for i in issues:
		print("  -"*20, file=sys.stderr)
		print(i.as_text(), file=sys.stderr)
	sys.stderr.flush()
