"""Bank entity."""

from dataclasses import dataclass
from typing import Any, Dict


@dataclass(frozen=True)
class Bank:
    """A destination bank and its CBN code."""

    name: str
    code: str

    @classmethod
    def from_payload(cls, item: Dict[str, Any]) -> "Bank":
        return cls(
            name=item.get("BANKNAME") or "",
            code=item.get("BANKCODE") or "",
        )
