"""Per-item outcomes collected during one retrieval pass."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class ItemOutcome:
    operation: str
    target: str
    ok: bool
    reason: str = ""


@dataclass
class RetrievalReport:
    outcomes: list[ItemOutcome] = field(default_factory=list)

    def succeeded(self, operation: str, target: str) -> None:
        self.outcomes.append(ItemOutcome(operation=operation, target=target, ok=True))

    def skipped(self, operation: str, target: str, reason: object) -> None:
        self.outcomes.append(ItemOutcome(operation=operation, target=target, ok=False, reason=str(reason)))

    @property
    def successes(self) -> list[ItemOutcome]:
        return [outcome for outcome in self.outcomes if outcome.ok]

    @property
    def failures(self) -> list[ItemOutcome]:
        return [outcome for outcome in self.outcomes if not outcome.ok]
