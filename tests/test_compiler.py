import math
import unittest
from unittest import mock

from bookoftime import compile_text, compile_tree, parse_text
from bookoftime import operators, primitive
from bookoftime.syntax import BinaryOp, UnaryOp, Number, Fixity

SAMPLE_POINTS = [(0, 0, 0), (1, 2, 3), (-4.5, 0.25, 600), (1e6, -1e-6, 7)]

def value_of(text, x=0.0, y=0.0, t=0.0):
	return compile_text(text)(x, y, t)

class ArithmeticTests(unittest.TestCase):

	def test_parameters(self):
		f = compile_text("x * y + t")
		self.assertEqual(10.0, f(2, 3, 4))
		self.assertEqual(-1.0, f(1, -1, 0))

	def test_operators(self):
		for text, expect in [
			("1 + 2", 3), ("1 - 2", -1), ("2 * 3", 6), ("7 / 2", 3.5), ("2 ^ 10", 1024),
			("-3", -3), ("+3", 3), ("--3", 3),
			("2^3*4+5", 37), ("2+3*-4^5", -3070), ("-2^2", 4), ("2^3^2", 512), ("1-2-3", -4),
			("1 < 2", 1), ("2 < 1", 0), ("2 <= 2", 1), ("3 > 2", 1), ("2 >= 3", 0),
			("2 == 2", 1), ("2 != 2", 0), ("1 == 2 == 0", 1),
		]:
			with self.subTest(text):
				self.assertEqual(float(expect), value_of(text))

	def test_result_is_a_plain_float(self):
		self.assertIs(float, type(value_of("1 + 2")))
		self.assertIs(float, type(value_of("1 < 2")))

	def test_ieee_754_instead_of_exceptions(self):
		self.assertEqual(math.inf, value_of("1 / 0"))
		self.assertEqual(-math.inf, value_of("-1 / 0"))
		self.assertEqual(math.inf, value_of("10 ^ 400"))
		self.assertEqual(math.inf, value_of("exp(1000)"))
		self.assertEqual(-math.inf, value_of("log(0)"))
		for text in ["0 / 0", "sqrt(-1)", "(-8) ^ (1/3)", "log(-1)", "acos(2)", "sin(1/0)"]:
			with self.subTest(text):
				self.assertTrue(math.isnan(value_of(text)))

	def test_nan_compares_unequal(self):
		self.assertEqual(0.0, value_of("(0/0) == (0/0)"))
		self.assertEqual(1.0, value_of("(0/0) != (0/0)"))

class BuiltinTests(unittest.TestCase):

	def test_constants(self):
		self.assertAlmostEqual(math.pi, value_of("pi"))
		self.assertAlmostEqual(math.e, value_of("e"))

	def test_functions(self):
		for text, expect in [
			("sin(0)", 0), ("cos(0)", 1), ("tan(0)", 0), ("sqrt(16)", 4), ("abs(-3)", 3),
			("floor(2.7)", 2), ("ceil(2.1)", 3), ("log(e)", 1), ("exp(0)", 1),
			("round(2.5)", 3), ("round(-2.5)", -2), ("trunc(-2.7)", -2), ("sign(-9)", -1),
			("log2(8)", 3), ("log10(1000)", 3), ("cbrt(27)", 3),
			("atan2(1, 1) * 4", math.pi), ("hypot(3, 4)", 5), ("max(1, 2)", 2), ("min(1, 2)", 1),
			("pow(2, 5)", 32),
		]:
			with self.subTest(text):
				self.assertAlmostEqual(float(expect), value_of(text))

	def test_rand(self):
		f = compile_text("rand()")
		for _ in range(20):
			r = f(0, 0, 0)
			self.assertGreaterEqual(r, 0.0)
			self.assertLess(r, 1.0)

	def test_rand_is_consulted_on_every_call(self):
		with mock.patch("bookoftime.primitive.random.random", side_effect=[0.25, 0.5]):
			f = compile_text("rand() * 4")
			self.assertEqual(1.0, f(0, 0, 0))
			self.assertEqual(2.0, f(0, 0, 0))

class ShortCutTests(unittest.TestCase):
	""" && and || pass along whichever operand decided the matter. """

	def test_values(self):
		for text, expect in [
			("0 && 5", 0), ("2 && 5", 5), ("0 || 5", 5), ("2 || 5", 2),
			("-1 && 0", 0), ("0 || 0", 0), ("3 && 4 && 5", 5), ("0 || 0 || 7", 7),
			("(0/0) || 5", 5),
		]:
			with self.subTest(text):
				self.assertEqual(float(expect), value_of(text))

	def test_nan_is_falsy(self):
		self.assertTrue(math.isnan(value_of("(0/0) && 5")))
		self.assertEqual(2.0, value_of("if 0/0 then 1 else 2"))

	def test_right_operand_runs_only_on_demand(self):
		with mock.patch("bookoftime.primitive.random.random", side_effect=[0.5]) as rand:
			f = compile_text("1 || rand()")
			self.assertEqual(1.0, f(0, 0, 0))
			g = compile_text("0 && rand()")
			self.assertEqual(0.0, g(0, 0, 0))
			self.assertEqual(0, rand.call_count)

class CompoundFormTests(unittest.TestCase):

	def test_binding(self):
		f = compile_text("let foo = 3 in foo")
		for point in SAMPLE_POINTS:
			self.assertEqual(3.0, f(*point))

	def test_function(self):
		f = compile_text("let add(x,y) = x + y in add(2,3)")
		for point in SAMPLE_POINTS:
			self.assertEqual(5.0, f(*point))

	def test_if(self):
		self.assertEqual(200.0, value_of("if 1 > 2 then 100 else 200"))
		self.assertEqual(100.0, value_of("if 1 < 2 then 100 else 200"))
		f = compile_text("if x then 1 else 2")
		self.assertEqual(2.0, f(0, 0, 0))
		self.assertEqual(1.0, f(-0.5, 0, 0))

	def test_only_one_branch_runs(self):
		with mock.patch("bookoftime.primitive.random.random", side_effect=[0.5]) as rand:
			f = compile_text("if 1 then 2 else rand()")
			self.assertEqual(2.0, f(0, 0, 0))
			self.assertEqual(0, rand.call_count)

	def test_inner_names_shadow_outer_ones(self):
		self.assertEqual(7.0, value_of("let x = 7 in x", x=1))
		self.assertEqual(2.0, value_of("let a = 1 in let a = 2 in a"))
		self.assertEqual(4.0, value_of("let sin = 4 in sin"))
		self.assertEqual(1.0, value_of("let a = 1 in (let a = 2 in a) * 0 + a"))

	def test_bound_expression_sees_outer_scope(self):
		self.assertEqual(3.0, value_of("let a = 1 in let a = a + 2 in a"))

	def test_functions_see_their_defining_scope(self):
		self.assertEqual(11.0, value_of("let a = 10 in let f(n) = n + a in f(1)"))
		self.assertEqual(6.0, value_of("let f(a) = a * x in f(2)", x=3))
		self.assertEqual(3.0, value_of("let f(a) = let g(b) = a + b in g(2) in f(1)"))
		self.assertEqual(13.0, value_of("let a = 1 in let b = 2 in x + a + b", x=10))

	def test_function_scope_is_lexical_not_dynamic(self):
		text = "let a = 1 in let f() = a in let a = 100 in f()"
		self.assertEqual(1.0, value_of(text))

	def test_recursion(self):
		self.assertEqual(120.0, value_of("let fact(n) = if n <= 1 then 1 else n * fact(n - 1) in fact(5)"))
		fib = "let fib(n) = if n < 2 then n else fib(n - 1) + fib(n - 2) in fib(x)"
		self.assertEqual(55.0, value_of(fib, x=10))

	def test_arguments_evaluate_left_to_right(self):
		with mock.patch("bookoftime.primitive.random.random", side_effect=[0.75, 0.25]):
			self.assertEqual(0.5, value_of("let sub(a, b) = a - b in sub(rand(), rand())"))

class EvaluatorTests(unittest.TestCase):

	def test_evaluator_is_pure(self):
		f = compile_text("let r = sqrt(x^2 + y^2) in sin(r - t) / (r + 1)")
		for point in SAMPLE_POINTS:
			first, second = f(*point), f(*point)
			self.assertEqual(first.hex(), second.hex())

	def test_compile_text_is_parse_then_compile(self):
		text = "x^2 - y^2 + t"
		self.assertEqual(compile_text(text)(1, 2, 3), compile_tree(parse_text(text))(1, 2, 3))

	def test_every_operator_in_the_table_compiles(self):
		for op in operators.TABLE:
			with self.subTest(op.symbol, fixity=op.fixity):
				if op.fixity is Fixity.PREFIX:
					tree = UnaryOp(op.symbol, op.fixity, Number(1.0))
				else:
					tree = BinaryOp(op.symbol, Number(1.0), Number(2.0))
				self.assertIsInstance(compile_tree(tree)(0, 0, 0), float)

	def test_every_implemented_operator_is_in_the_table(self):
		symbols = {(op.symbol, op.fixity) for op in operators.TABLE}
		for symbol in primitive.UNARY:
			self.assertIn((symbol, Fixity.PREFIX), symbols)
		for symbol in set(primitive.BINARY) | primitive.SHORT_CUT:
			self.assertIn((symbol, Fixity.INFIX), symbols)

if __name__ == '__main__':
	unittest.main()
