# sync/errors.py


class GridStoreError(RuntimeError):
    """Base error raised by grid store adapters."""


class StoreUnavailable(GridStoreError):
    """
    A fetch or persist call failed (network, auth, quota, filesystem).
    The message is surfaced to HTTP callers verbatim.
    """
