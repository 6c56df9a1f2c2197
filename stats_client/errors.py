"""Fetch error taxonomy shared by all upstream clients."""


class FetchError(Exception):
    """Base error for a failed lookup. Carries the HTTP status to report."""

    status = 500

    def __init__(self, cause: str, status: int | None = None):
        self.cause = cause
        if status is not None:
            self.status = status
        super().__init__(cause)

    def to_dict(self) -> dict:
        return {"success": False, "status": self.status, "cause": self.cause}


class NotFoundError(FetchError):
    """Requested identity does not exist upstream."""

    status = 404


class UpstreamError(FetchError):
    """Upstream call failed: network error, non-2xx status or malformed payload."""

    status = 500


class UpstreamTimeout(UpstreamError):
    """Upstream call exceeded the request deadline."""

    status = 504


class LeaderboardNotFound(NotFoundError):
    """No leaderboard is registered under the requested name."""


class ValidationError(FetchError):
    """Malformed or missing request argument; rejected before any lookup."""

    status = 400


class NotReadyError(FetchError):
    """A dependent subsystem has not finished loading."""

    status = 503
