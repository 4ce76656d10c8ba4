class DomainError(Exception):
    """Base exception for business rule violations."""

    http_status = 400
    reason = "domain_error"


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""

    reason = "validation_error"


class NotFoundError(DomainError):
    """Raised when a referenced entity does not exist."""

    http_status = 404
    reason = "not_found"


class ConflictError(DomainError):
    """Raised on unique-key clashes and rows still referenced elsewhere."""

    reason = "conflict"


class AuthenticationError(DomainError):
    """Raised when login credentials or bearer tokens are rejected."""

    http_status = 401
    reason = "authentication_failed"


class TokenMissingError(AuthenticationError):
    reason = "token_missing"


class TokenInvalidError(AuthenticationError):
    """Bad signature, malformed token or past its expiry."""

    http_status = 403
    reason = "token_invalid"


class InactiveUserError(AuthenticationError):
    reason = "user_inactive"


class AuthorizationError(DomainError):
    """Raised when a user lacks permission for an action."""

    http_status = 403
    reason = "forbidden"


class UnknownBarcodeError(NotFoundError):
    reason = "unknown_barcode"


class DuplicateScanError(DomainError):
    http_status = 409
    reason = "duplicate_scan"


class OutsideGeofenceError(DomainError):
    http_status = 403
    reason = "outside_geofence"


class ScheduleNotActiveError(DomainError):
    http_status = 422
    reason = "schedule_not_active"
