from typing import Set

from servible.domain.invariants.exceptions import IllegalTransition
from servible.models.site import SITE_DRAFT, SITE_PUBLISHED

# Explicit allowed state transitions
ALLOWED_SITE_TRANSITIONS: dict[str, Set[str]] = {
    SITE_DRAFT: {SITE_PUBLISHED},
    SITE_PUBLISHED: {SITE_DRAFT},
}


def assert_site_transition(*, from_status: str, to_status: str) -> None:
    """
    Guards site lifecycle transitions.
    Single source of truth for status changes.
    """
    allowed = ALLOWED_SITE_TRANSITIONS.get(from_status, set())

    if to_status not in allowed:
        raise IllegalTransition(
            f"Illegal site transition: {from_status} -> {to_status}"
        )
