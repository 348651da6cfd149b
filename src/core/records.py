from __future__ import annotations
from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class UserQuery:
    """One utterance; intent is set for training rows and None for live input."""
    text: str
    intent: Optional[str] = None


__all__ = ['UserQuery']
