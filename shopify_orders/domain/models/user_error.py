"""
User error reported by a Shopify mutation.
"""

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class UserError:
    """
    Field-level validation failure attached to a mutation response.

    Attributes:
        field: Path to the offending input field (may be empty)
        message: Human readable description
    """

    message: str
    field: tuple[str, ...] = ()

    @classmethod
    def from_graphql(cls, node: dict[str, Any]) -> "UserError":
        return cls(message=node.get("message") or "Unknown error", field=tuple(node.get("field") or ()))

    def __str__(self) -> str:
        field_str = ".".join(self.field) if self.field else "general"
        return f"{field_str}: {self.message}"
