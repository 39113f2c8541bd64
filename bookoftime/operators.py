"""
The operator table.

Tiers are listed highest precedence first; every operator in a tier shares its precedence,
fixity and associativity. The front end's climbing loop reads precedence and associativity
from this table and nothing else, so adding an operator means adding it here
(and giving it an implementation in `primitive`).

Tier number i, counting from zero, has precedence len(TIERS) - i.
Within a tier, operators are tried in the order given, so a symbol must come
before any other symbol in the same tier that it starts with.
"""
from typing import NamedTuple, Optional, Sequence
from .syntax import Fixity, Associativity

PREFIX, INFIX = Fixity.PREFIX, Fixity.INFIX
LEFT, RIGHT = Associativity.LEFT, Associativity.RIGHT

class Operator(NamedTuple):
	symbol: str
	fixity: Fixity
	associativity: Optional[Associativity]  # None for prefix operators
	precedence: int

class Tier(NamedTuple):
	fixity: Fixity
	associativity: Optional[Associativity]
	symbols: tuple[str, ...]

TIERS = (
	Tier(PREFIX, None, ("-", "+")),
	Tier(INFIX, RIGHT, ("^",)),
	Tier(INFIX, LEFT, ("*", "/")),
	Tier(INFIX, LEFT, ("+", "-")),
	Tier(INFIX, LEFT, ("&&",)),
	Tier(INFIX, LEFT, ("||",)),
	Tier(INFIX, LEFT, ("<=", "<", ">=", ">", "==", "!=")),
)

def build_table(tiers:Sequence[Tier]) -> tuple[Operator, ...]:
	table = []
	for index, tier in enumerate(tiers):
		assert (tier.fixity is PREFIX) == (tier.associativity is None), tier
		for symbol in tier.symbols:
			table.append(Operator(symbol, tier.fixity, tier.associativity, len(tiers) - index))
	return tuple(table)

TABLE = build_table(TIERS)

def prefix_operators(table:Sequence[Operator]) -> tuple[Operator, ...]:
	return tuple(op for op in table if op.fixity is PREFIX)

def infix_operators(table:Sequence[Operator]) -> tuple[Operator, ...]:
	""" Highest precedence first, as declared. """
	return tuple(op for op in table if op.fixity is INFIX)
