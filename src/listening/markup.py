"""Inline markup resolver: raw line → tree of styled text nodes.

Every rule is searched independently over the whole text, then the candidate
matches are reconciled globally: earliest start wins, longer match wins on a
shared start, earlier rule wins on a full tie. Matched payloads are resolved
recursively, which is how markers nest.

Unmatched or losing delimiters stay in the output as literal text.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import StrEnum
from typing import TypeAlias


class MarkupKind(StrEnum):
    """The closed set of marker families."""

    DELETION = "deletion"
    UNDERLINE = "underline"
    STRONG = "strong"
    EMPHASIS = "emphasis"
    SIZE_UP = "size_up"
    SIZE_DOWN = "size_down"


@dataclass(frozen=True)
class MarkupRule:
    """One row of the rule table.

    ``pattern`` must have exactly one capture group holding the payload.
    A rule has either a semantic ``tag`` or a ``scale`` for a generic container.
    """

    kind: MarkupKind
    pattern: re.Pattern[str]
    tag: str | None = None
    scale: float | None = None


# Order is significant: on a full tie the earlier rule wins.
RULES: tuple[MarkupRule, ...] = (
    MarkupRule(MarkupKind.DELETION, re.compile(r"~~(.*?)~~"), tag="del"),
    MarkupRule(MarkupKind.UNDERLINE, re.compile(r"__(.*?)__"), tag="u"),
    MarkupRule(MarkupKind.STRONG, re.compile(r"\*\*(.*?)\*\*"), tag="strong"),
    MarkupRule(MarkupKind.EMPHASIS, re.compile(r"\*(.*?)\*"), tag="em"),
    MarkupRule(MarkupKind.SIZE_UP, re.compile(r"\+\+(.*?)\+\+"), scale=1.2),
    MarkupRule(MarkupKind.SIZE_DOWN, re.compile(r"--(.*?)--"), scale=0.8),
)


@dataclass(frozen=True)
class Candidate:
    """A provisional match of one rule at one position."""

    start: int
    length: int
    rule: MarkupRule
    rule_index: int
    payload: str

    @property
    def end(self) -> int:
        return self.start + self.length


@dataclass(frozen=True)
class TextNode:
    """Literal text leaf."""

    text: str


@dataclass(frozen=True)
class StyledNode:
    """Container styled by ``rule`` wrapping already-resolved children."""

    rule: MarkupRule
    children: tuple[RenderNode, ...] = ()

    @property
    def kind(self) -> MarkupKind:
        return self.rule.kind


RenderNode: TypeAlias = TextNode | StyledNode


def discover(text: str, rules: tuple[MarkupRule, ...] = RULES) -> list[Candidate]:
    """Collect every occurrence of every rule, each rule scanned on its own."""
    candidates: list[Candidate] = []
    for index, rule in enumerate(rules):
        for match in rule.pattern.finditer(text):
            # A bare "**" is a strong delimiter or literal, never an empty emphasis
            if rule.kind is MarkupKind.EMPHASIS and not match.group(1):
                continue
            candidates.append(
                Candidate(
                    start=match.start(),
                    length=match.end() - match.start(),
                    rule=rule,
                    rule_index=index,
                    payload=match.group(1),
                )
            )
    return candidates


def order_candidates(candidates: list[Candidate]) -> list[Candidate]:
    """Sort by start ascending, length descending, then rule-table order."""
    return sorted(candidates, key=lambda c: (c.start, -c.length, c.rule_index))


def _overlaps(candidate: Candidate, accepted: list[Candidate]) -> bool:
    return any(
        max(candidate.start, other.start) < min(candidate.end, other.end) for other in accepted
    )


def select_ranges(candidates: list[Candidate]) -> list[Candidate]:
    """Greedily accept non-overlapping candidates in priority order.

    A candidate touching any position of an accepted one is dropped whole.
    The result is sorted by start offset.
    """
    accepted: list[Candidate] = []
    for candidate in order_candidates(candidates):
        if _overlaps(candidate, accepted):
            continue
        accepted.append(candidate)
    return sorted(accepted, key=lambda c: c.start)


def emit(
    text: str, ranges: list[Candidate], rules: tuple[MarkupRule, ...] = RULES
) -> list[RenderNode]:
    """Build nodes for ``text`` given its selected ranges, recursing into payloads."""
    nodes: list[RenderNode] = []
    last = 0
    for selected in ranges:
        if selected.start > last:
            nodes.append(TextNode(text[last : selected.start]))
        children = resolve(selected.payload, rules)
        nodes.append(StyledNode(selected.rule, tuple(children)))
        last = selected.end
    if last < len(text):
        nodes.append(TextNode(text[last:]))
    return nodes


def resolve(text: str, rules: tuple[MarkupRule, ...] = RULES) -> list[RenderNode]:
    """Resolve one line of markup into render nodes. Never raises."""
    return emit(text, select_ranges(discover(text, rules)), rules)


def plain_text(nodes: list[RenderNode] | tuple[RenderNode, ...]) -> str:
    """Concatenate every literal leaf in document order."""
    parts: list[str] = []
    for node in nodes:
        if isinstance(node, TextNode):
            parts.append(node.text)
        else:
            parts.append(plain_text(node.children))
    return "".join(parts)
