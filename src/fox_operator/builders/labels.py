"""Labels shared by the subresources of a FoxService."""

from __future__ import annotations

from ..constants import LABEL_APP_NAME, LABEL_MANAGED_BY, MANAGED_BY_VALUE


def selector_labels(name: str) -> dict[str, str]:
    """Labels identifying the pods of one FoxService."""
    return {LABEL_APP_NAME: name}


def common_labels(name: str) -> dict[str, str]:
    """Labels applied to every object the operator creates."""
    return {
        **selector_labels(name),
        LABEL_MANAGED_BY: MANAGED_BY_VALUE,
    }
