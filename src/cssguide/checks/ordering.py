"""Property order check.

Declarations are ordered alphabetically. The exceptions are data, not
control flow:

* a vendor-prefixed property sits immediately above its unprefixed
  counterpart (``-webkit-transition`` then ``transition``);
* properties listed in ``GROUPED_AFTER`` follow their anchor property in the
  listed order, and the formatter indents them one extra level::

      position: absolute;
          top: 0;
          left: 0;

Variables (``$name``, ``--name``) come first, in their original order.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Sequence

from cssguide.model.diagnostic import Severity, Violation
from cssguide.model.tree import Declaration, Node, Stylesheet, body_of

if TYPE_CHECKING:
    from cssguide.config import StyleConfig

GROUPED_AFTER: dict[str, tuple[str, ...]] = {
    "position": ("top", "right", "bottom", "left"),
}

_GROUP_MEMBERS: dict[str, tuple[str, int]] = {
    member: (anchor, rank)
    for anchor, members in GROUPED_AFTER.items()
    for rank, member in enumerate(members, 1)
}

SortKey = tuple[int, str, int, int, str]


def sort_key(decl: Declaration, present: frozenset[str]) -> SortKey:
    """Position of *decl* in the canonical order, given the properties *present*."""
    if decl.is_variable:
        return (0, "", 0, 0, "")
    name = decl.unprefixed
    anchor, rank = _GROUP_MEMBERS.get(name, (name, 0))
    if anchor not in present:
        anchor, rank = name, 0
    return (1, anchor, rank, 0 if decl.vendor_prefix else 1, decl.vendor_prefix)


def expected_order(decls: Sequence[Declaration]) -> list[Declaration]:
    present = frozenset(d.unprefixed for d in decls if not d.is_variable)
    return sorted(decls, key=lambda d: sort_key(d, present))


def is_grouped_member(decl: Declaration, anchor: str) -> bool:
    return decl.unprefixed in GROUPED_AFTER.get(anchor, ())


def _related(a: str, b: str) -> bool:
    """Same property, or a shorthand and one of its longhands."""
    return a == b or a.startswith(b + "-") or b.startswith(a + "-")


def can_reorder(body: Sequence[Node]) -> bool:
    """Whether sorting the declarations of *body* cannot change the cascade.

    Sorting is refused when the declarations are interleaved with other nodes,
    when a property is declared twice, or when a shorthand and one of its
    longhands (or a prefixed and unprefixed pair) would swap.
    """
    positions = [k for k, node in enumerate(body) if isinstance(node, Declaration)]
    if not positions or positions[-1] - positions[0] + 1 != len(positions):
        return False
    decls = [node for node in body if isinstance(node, Declaration)]
    names = [d.name.lower() for d in decls]
    if len(set(names)) != len(names):
        return False
    rank = {id(d): k for k, d in enumerate(expected_order(decls))}
    for i, a in enumerate(decls):
        for b in decls[i + 1:]:
            if a.is_variable or b.is_variable:
                continue
            if _related(a.unprefixed, b.unprefixed) and rank[id(a)] > rank[id(b)]:
                return False
    return True


def first_out_of_order(decls: Sequence[Declaration]) -> tuple[Declaration, Declaration] | None:
    """Return ``(actual, expected)`` at the first position where they differ."""
    for actual, expected in zip(decls, expected_order(decls)):
        if actual is not expected:
            return actual, expected
    return None


def check_property_order(sheet: Stylesheet, config: StyleConfig) -> list[Violation]:
    """Declarations follow the canonical alphabetical order."""
    violations: list[Violation] = []
    for block, _ in sheet.blocks():
        decls = [n for n in body_of(block) if isinstance(n, Declaration)]
        if len(decls) < 2:
            continue
        mismatch = first_out_of_order(decls)
        if mismatch is None:
            continue
        actual, expected = mismatch
        order = ", ".join(d.name for d in expected_order(decls))
        violations.append(
            Violation(
                rule="property-order",
                severity=Severity.WARNING,
                message=(
                    f"Property '{actual.name}' is out of order; "
                    f"expected '{expected.name}' here."
                ),
                line=actual.line,
                column=actual.column,
                fix=f"Order declarations as: {order}.",
            )
        )
    return violations
