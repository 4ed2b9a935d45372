"""Structural locators used by the per-format mapping tables."""

from dataclasses import dataclass
import re

_PREDICATE = re.compile(r"\[[^\]]*\]")


def _split_steps(path: str) -> list[str]:
    """Split an element path on ``/`` outside of predicate brackets."""
    steps: list[str] = []
    depth = 0
    current = ""
    for char in path:
        if char == "[":
            depth += 1
        elif char == "]":
            depth -= 1
        if char == "/" and depth == 0:
            steps.append(current)
            current = ""
        else:
            current += char
    steps.append(current)
    return steps


@dataclass(frozen=True)
class Locator:
    """
    Location of a canonical field inside a wire grammar.

    ``path`` is an element path relative to the entity's context node, using
    the prefixes of the format's namespace table. Steps may carry an XPath
    predicate that qualifies which sibling holds the value, e.g.
    ``cac:PartyTaxScheme[cac:TaxScheme/cbc:ID='VAT']/cbc:CompanyID``.

    ``attribute`` names an attribute of the leaf element when the canonical
    value lives there (unit code, currency, scheme identifier).
    """

    path: str
    attribute: str | None = None

    @property
    def xpath(self) -> str:
        """XPath expression selecting the leaf element."""
        return self.path

    @property
    def steps(self) -> list[str]:
        """Predicate-free element steps, as a writer creates them."""
        return [_PREDICATE.sub("", step) for step in _split_steps(self.path)]

