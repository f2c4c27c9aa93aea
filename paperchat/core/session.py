from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Tuple

from .models import ConversationTurn


@dataclass
class ConversationLog:
    """Append-only record of completed exchanges for a conversation session."""

    turns: List[ConversationTurn] = field(default_factory=list)

    def reset(self) -> None:
        self.turns.clear()

    def record_exchange(self, message: str, reply: str) -> None:
        self.turns.append(ConversationTurn(role="user", content=message))
        self.turns.append(ConversationTurn(role="assistant", content=reply))

    def snapshot(self) -> Tuple[ConversationTurn, ...]:
        return tuple(self.turns)

    def __len__(self) -> int:
        return len(self.turns)
