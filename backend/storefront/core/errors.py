from __future__ import annotations


class StorefrontError(RuntimeError):
    """Base class for failures surfaced to API callers.

    Every subclass maps to one HTTP status and a stable machine-readable code;
    the exception handler in ``storefront.main`` renders them uniformly.
    """

    status_code: int = 500
    code: str = "error"
    default_message: str = "Internal error"

    def __init__(self, message: str | None = None):
        super().__init__(message or self.default_message)
        self.message = message or self.default_message


class Unauthenticated(StorefrontError):
    status_code = 401
    code = "unauthenticated"
    default_message = "You must be signed in"


class Forbidden(StorefrontError):
    status_code = 403
    code = "forbidden"
    default_message = "You don't have permission to do that"


class NotFound(StorefrontError):
    status_code = 404
    code = "not_found"
    default_message = "Not found"


class InvalidInput(StorefrontError):
    status_code = 400
    code = "invalid_input"
    default_message = "Invalid input"


class PasswordMismatch(InvalidInput):
    default_message = "Passwords don't match"


class InvalidOrExpired(StorefrontError):
    status_code = 400
    code = "invalid_or_expired"
    default_message = "This token is either invalid or expired"


class GatewayError(StorefrontError):
    status_code = 402
    code = "payment_failed"
    default_message = "Payment could not be processed"


class PostChargeFailure(StorefrontError):
    """The card was charged but the order could not be recorded.

    Not retried and not refunded automatically: operators reconcile by hand
    using ``charge_id``.
    """

    status_code = 500
    code = "post_charge_failure"
    default_message = "Payment was taken but the order could not be saved"

    def __init__(self, *, user_id: int, charge_id: str, amount: int, message: str | None = None):
        super().__init__(message)
        self.user_id = user_id
        self.charge_id = charge_id
        self.amount = amount
