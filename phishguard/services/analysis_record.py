"""
Analysis record stored in the history
"""

from dataclasses import asdict, dataclass
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class Analysis:
    """One completed analysis; never modified after creation"""
    text: str
    score: int
    label: str
    time: str
    explanation: str
    engine: str = "local"  # "local" or "remote"
    source: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Analysis":
        return cls(
            text=data["text"],
            score=int(data["score"]),
            label=data["label"],
            time=data["time"],
            explanation=data.get("explanation", ""),
            engine=data.get("engine", "local"),
            source=data.get("source"),
        )
