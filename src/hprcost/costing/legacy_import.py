"""Bulk import of legacy prices from pasted spreadsheet text.

Each non-blank line is reduced to its numeric tokens. A line naming one of the breakpoint
volumes prices that breakpoint; other lines fill the next unassigned breakpoint in ascending
order. Target resolution runs as a short chain of resolvers, first hit wins.
"""

from __future__ import annotations

import re
from collections.abc import Sequence
from dataclasses import dataclass, field, replace
from typing import Protocol

from hprcost.core.numeric import parse_number
from hprcost.costing.legacy import LegacyPriceTable, breakpoint_index

_NUMERIC_TOKEN = re.compile(r"-?[0-9]+(?:[.,][0-9]+)?")
_LINE_BREAK = re.compile(r"\r?\n")
_TOLERANCE = 1e-6


@dataclass(frozen=True)
class PasteToken:
    text: str
    value: float


@dataclass(frozen=True)
class PriceTarget:
    """Breakpoint chosen for a line and the token proposed as its price."""

    index: int
    price_token: PasteToken
    matched_volume: float | None = None


@dataclass(slots=True)
class ImportState:
    """Bookkeeping shared by all lines of one import pass."""

    volumes: tuple[float, ...]
    assigned: set[int] = field(default_factory=set)
    cursor: int = 0

    @property
    def size(self) -> int:
        return len(self.volumes)


class TargetResolver(Protocol):
    def resolve(self, tokens: Sequence[PasteToken], state: ImportState) -> PriceTarget | None:
        ...


def _differs(value: float, reference: float | None) -> bool:
    return reference is None or abs(value - reference) > _TOLERANCE


class BreakpointMatchResolver:
    """Target the breakpoint whose volume appears on the line."""

    def resolve(self, tokens: Sequence[PasteToken], state: ImportState) -> PriceTarget | None:
        for token in tokens:
            if token.value <= 0:
                continue
            index = breakpoint_index(token.value, tolerance=_TOLERANCE, volumes=state.volumes)
            if index is None:
                continue
            price_token = next(
                (candidate for candidate in tokens if _differs(candidate.value, token.value)),
                tokens[-1],
            )
            return PriceTarget(index=index, price_token=price_token, matched_volume=token.value)
        return None


class PositionalResolver:
    """Assign the line's last token to the next breakpoint not yet priced in this pass."""

    def resolve(self, tokens: Sequence[PasteToken], state: ImportState) -> PriceTarget | None:
        while state.cursor < state.size and state.cursor in state.assigned:
            state.cursor += 1
        if state.cursor >= state.size:
            return None
        index = state.cursor
        state.cursor += 1
        return PriceTarget(index=index, price_token=tokens[-1])


DEFAULT_RESOLVERS: tuple[TargetResolver, ...] = (BreakpointMatchResolver(), PositionalResolver())


@dataclass(frozen=True)
class BulkImportResult:
    table: LegacyPriceTable
    updated: bool
    assigned_indices: tuple[int, ...] = ()


def tokenize_line(line: str) -> list[PasteToken]:
    return [PasteToken(text, parse_number(text)) for text in _NUMERIC_TOKEN.findall(line)]


def _reassigned_price_token(target: PriceTarget, tokens: Sequence[PasteToken]) -> PasteToken:
    # A second line for an already priced breakpoint: skip non-positive tokens and the volume.
    return next(
        (
            token
            for token in tokens
            if token.value > 0
            and (not target.matched_volume or abs(token.value - target.matched_volume) > _TOLERANCE)
        ),
        target.price_token,
    )


def apply_bulk_pricing(
    table: LegacyPriceTable,
    text: str,
    *,
    resolvers: Sequence[TargetResolver] = DEFAULT_RESOLVERS,
) -> BulkImportResult:
    """Parse pasted ``text`` into prices for ``table``.

    Parameters
    ----------
    table:
        Current legacy price table; it is not modified.
    text:
        Free-form multi-line text, e.g. two spreadsheet columns (volume, price) or a single
        price column.
    resolvers:
        Target resolvers tried in order for each line.

    Returns
    -------
    BulkImportResult
        New table plus ``updated`` (at least one price committed). Only strictly positive
        prices are committed; breakpoints without a usable price keep their previous value.
    """

    trimmed = text.strip()
    if not trimmed:
        return BulkImportResult(table=table, updated=False)

    state = ImportState(volumes=tuple(entry.average_volume for entry in table.entries))
    prices = table.prices
    committed: list[int] = []

    for raw_line in _LINE_BREAK.split(trimmed):
        line = raw_line.strip()
        if not line:
            continue
        tokens = tokenize_line(line)
        if not tokens:
            continue
        target = next(
            (hit for resolver in resolvers if (hit := resolver.resolve(tokens, state)) is not None),
            None,
        )
        if target is None:
            continue
        price_token = target.price_token
        if target.index in state.assigned:
            price_token = _reassigned_price_token(target, tokens)
        if price_token.value > 0:
            prices[target.index] = price_token.value
            state.assigned.add(target.index)
            committed.append(target.index)

    if not committed:
        return BulkImportResult(table=table, updated=False)
    return BulkImportResult(
        table=LegacyPriceTable(
            tuple(replace(entry, price=price) for entry, price in zip(table.entries, prices))
        ),
        updated=True,
        assigned_indices=tuple(committed),
    )


__all__ = [
    "PasteToken",
    "PriceTarget",
    "ImportState",
    "TargetResolver",
    "BreakpointMatchResolver",
    "PositionalResolver",
    "DEFAULT_RESOLVERS",
    "BulkImportResult",
    "tokenize_line",
    "apply_bulk_pricing",
]
