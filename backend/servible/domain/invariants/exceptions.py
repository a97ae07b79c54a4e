class InvariantViolation(Exception):
    """Raised when a write would break a content or site invariant."""


class IllegalTransition(InvariantViolation):
    pass


class SiteNotFound(Exception):
    """
    No visible site for the request.

    Absent, unpublished and unresolvable hosts all map here so the
    public caller cannot tell a draft from a missing site.
    """
