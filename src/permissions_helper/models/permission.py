"""Permission models.

This module provides:
- Permission: outcome of one permission check or request
- PromptResult: host dialog callback payload
"""

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class Permission:
    """State of a permission that was requested.

    Attributes:
        identifier: Permission name (e.g. "CAMERA")
        granted: Whether the permission is held
        show_rationale: Host hint that the user has not permanently blocked
            future prompts. Only meaningful when granted is False.
    """

    identifier: str
    granted: bool
    show_rationale: bool = False

    def __post_init__(self) -> None:
        if not self.identifier:
            raise ValueError("Permission identifier must be a non-empty string")

    def to_dict(self) -> dict[str, Any]:
        """Convert to a JSON-friendly dictionary.

        Examples:
            >>> Permission("CAMERA", False, True).to_dict()
            {'permission': 'CAMERA', 'granted': False, 'show_rationale': True}
        """
        return {
            "permission": self.identifier,
            "granted": self.granted,
            "show_rationale": self.show_rationale,
        }


@dataclass
class PromptResult:
    """Result of one host permission dialog.

    The three lists are parallel and follow the order of the identifiers
    passed to the host prompt. The host is responsible for that contract;
    it is not re-validated here.

    Attributes:
        request_code: Correlation token passed to prompt_async
        identifiers: Prompted permission identifiers
        grants: Grant outcome per identifier
        rationales: Show-rationale hint per identifier
    """

    request_code: int
    identifiers: list[str]
    grants: list[bool] = field(default_factory=list)
    rationales: list[bool] = field(default_factory=list)

    def to_permissions(self) -> list[Permission]:
        """Build one Permission per entry, correlated by position."""
        return [
            Permission(identifier, self.grants[i], self.rationales[i])
            for i, identifier in enumerate(self.identifiers)
        ]
