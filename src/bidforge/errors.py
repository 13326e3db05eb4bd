from __future__ import annotations


class BidforgeError(Exception):
    """Base class for errors that map onto an HTTP status."""

    status_code = 500


class InvalidRequestError(BidforgeError):
    status_code = 400


class MissingFieldsError(InvalidRequestError):
    pass


class NotFoundError(BidforgeError):
    status_code = 404


class PermissionDeniedError(BidforgeError):
    status_code = 403


class ConflictError(BidforgeError):
    status_code = 409


class DuplicateApplicationError(ConflictError):
    pass


class InvalidTransitionError(ConflictError):
    pass


class ConfigurationError(BidforgeError):
    status_code = 500


class UpstreamError(BidforgeError):
    status_code = 500
