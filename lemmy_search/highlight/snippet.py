from __future__ import annotations

"""Search-term highlighting for post bodies."""

import re
from typing import Collection, Sequence

from lemmy_search.highlight.types import (
    TRUNCATION_MARKER,
    Segment,
    SnippetResult,
    TokenSequence,
)

SNIPPET_BUDGET = 200


class TermPatternError(ValueError):
    pass


def compile_term_pattern(terms: Sequence[str], escape: bool = True) -> re.Pattern[str] | None:
    """Build a case-insensitive ``(t1)|(t2)|...`` alternation over the terms.

    Terms keep their given order and duplicates are not merged, so an earlier
    term wins when two alternatives match at the same position. With
    ``escape=False`` terms are inserted verbatim and any metacharacters they
    carry change what the pattern matches. Empty terms are skipped; ``None``
    is returned when nothing usable remains.
    """
    usable = [term for term in terms if term]
    if not usable:
        return None
    if escape:
        usable = [re.escape(term) for term in usable]
    source = "(" + ")|(".join(usable) + ")"
    try:
        return re.compile(source, re.IGNORECASE)
    except re.error as exc:
        raise TermPatternError(f"Invalid query term pattern: {exc}") from exc


def segment_body(body: str, pattern: re.Pattern[str] | None) -> TokenSequence:
    """Split the body into plain and matched tokens in order of appearance."""
    if pattern is None:
        return TokenSequence.from_parts([body])
    return TokenSequence.from_parts(pattern.split(body))


def accumulate_budget(
    tokens: TokenSequence,
    terms: Collection[str],
    budget: int = SNIPPET_BUDGET,
) -> SnippetResult:
    """Classify tokens and keep them until the character budget is spent."""
    budget = max(0, budget)
    lookup = set(terms)
    segments: list[Segment] = []
    consumed = 0
    cut = False
    for token in tokens:
        if consumed >= budget:
            cut = True
            break
        take = min(budget - consumed, len(token))
        if take < len(token):
            cut = True
        segments.append(Segment(text=token[:take], highlighted=token in lookup))
        consumed += take
    if cut:
        segments.append(Segment(text=TRUNCATION_MARKER, highlighted=False))
    return SnippetResult(segments=tuple(segments), truncated=cut)


def highlight_snippet(
    body: str,
    query_terms: Sequence[str],
    budget: int = SNIPPET_BUDGET,
    escape_terms: bool = True,
) -> SnippetResult:
    """Return the highlighted snippet for one post body.

    An empty term list disables highlighting: the body is passed through as
    plain text, still bounded by the budget.
    """
    pattern = compile_term_pattern(query_terms, escape=escape_terms)
    tokens = segment_body(body, pattern)
    return accumulate_budget(tokens, query_terms, budget=budget)
