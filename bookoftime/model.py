"""
The settings store behind a plot: the x/y range, the clock, and the formula.

Setting the formula parses and compiles it on the spot. Failure leaves the previous
evaluator in place and hands back the reason; success replaces the evaluator
in one assignment, so anybody midway through a frame with the old one is unaffected.
Listeners hear the name of each setting that changes, followed by "any".
"""
import math
from typing import Callable

import numpy as np

from . import syntax
from .compiler import Evaluator, compile_tree
from .diagnostics import Report, ParseError, CompileError, TooManyIssues
from .either import Either, left, right, assert_right
from .front_end import parse_text

RANGE_LIMIT = 1000
TIME_LIMIT = 600
STEPS = 50

class Observer:
	def __init__(self):
		self._callbacks: list[Callable[[str], None]] = []

	def listen(self, callback:Callable[[str], None]):
		self._callbacks.append(callback)

	def unlisten(self, callback:Callable[[str], None]):
		self._callbacks = [f for f in self._callbacks if f != callback]

	def dispatch(self, topic:str):
		for f in list(self._callbacks):
			f(topic)

class GraphModel:
	_func: str
	_evaluator: Evaluator

	def __init__(self, min:float, max:float, func:str, time:float, *, report:Report=None):
		self._observer = Observer()
		self._report = report or Report(verbose=0, max_issues=None)
		assert_right(self.set_min(min), 'Invalid min')
		assert_right(self.set_max(max), 'Invalid max')
		assert_right(self.set_func(func), 'Invalid func')
		assert_right(self.set_time(time), 'Invalid time')
		self._running = False
		self._paused = False

	def _changed(self, topic:str) -> Either:
		self._observer.dispatch(topic)
		self._observer.dispatch('any')
		return right()

	@property
	def report(self) -> Report: return self._report

	@property
	def is_running(self) -> bool: return self._running

	@property
	def is_paused(self) -> bool: return self._paused

	@property
	def min(self) -> float: return self._min

	def set_min(self, value:float) -> Either:
		problem = _check_range(value)
		if problem: return left(problem)
		self._min = value
		return self._changed('min')

	@property
	def max(self) -> float: return self._max

	def set_max(self, value:float) -> Either:
		problem = _check_range(value)
		if problem: return left(problem)
		self._max = value
		return self._changed('max')

	@property
	def step(self) -> float:
		return (self._max - self._min) / STEPS

	@property
	def func(self) -> str: return self._func

	@property
	def evaluator(self) -> Evaluator: return self._evaluator

	def set_func(self, text:str) -> Either:
		try:
			tree = parse_text(text)
			compiled = compile_tree(tree)
		except (ParseError, CompileError) as ex:
			try: self._report.rejected_formula(text, ex)
			except TooManyIssues:
				# Full: show what piled up and start afresh.
				self._report.complain_to_console()
				self._report.reset()
			return left(ex.message)
		self._report.reset()
		self._report.info("Accepted formula:", syntax.show(tree))
		self._func, self._evaluator = text, compiled
		return self._changed('func')

	@property
	def time(self) -> float: return self._time

	def set_time(self, value:float) -> Either:
		if math.isnan(value): return left('Not a number')
		if value < 0 or value > TIME_LIMIT: return left('Time must be between [0, %d]' % TIME_LIMIT)
		self._time = value
		return self._changed('time')

	def listen(self, callback:Callable[[str], None]):
		self._observer.listen(callback)

	def unlisten(self, callback:Callable[[str], None]):
		self._observer.unlisten(callback)

	def start(self) -> Either:
		if self._running and not self._paused: return left('Running already')
		if not self._running:
			self._running = True
			self._observer.dispatch('running')
		if self._paused:
			self._paused = False
			self._observer.dispatch('paused')
		self._observer.dispatch('any')
		return right()

	def pause(self) -> Either:
		if not self._running: return left('Cannot pause when stopped')
		self._paused = not self._paused
		return self._changed('paused')

	def stop(self) -> Either:
		if not self._running: return left('Stopped already')
		self._running = False
		self._observer.dispatch('running')
		if self._paused:
			self._paused = False
			self._observer.dispatch('paused')
		self._observer.dispatch('any')
		return right()

	def sample(self, t:float) -> np.ndarray:
		"""
		Heights of the surface over the grid at time t: one row per y, one column per x,
		each axis holding STEPS points from min by step, so max itself is never sampled.
		"""
		if not self._max > self._min:
			return np.empty((0, 0))
		axis = self._min + self.step * np.arange(STEPS)
		fn = self._evaluator
		return np.array([[fn(x, y, t) for x in axis] for y in axis], dtype=np.float64)

def _check_range(value:float):
	if math.isnan(value): return 'Not a number'
	if value < -RANGE_LIMIT or value > RANGE_LIMIT:
		return 'Range must be between [-%d, %d]' % (RANGE_LIMIT, RANGE_LIMIT)
