"""
Error taxonomy for the AquaSentinel core.

None of these are fatal. Validation errors block a single submission,
store errors leave the affected view loading until the next fetch, and a
geolocation denial silently keeps the default coordinates.
"""


class AquaError(Exception):
    """Base class for all core errors."""
    pass


class ReportValidationError(AquaError):
    """A submission was blocked. `code` is machine-readable, the message human-readable."""

    code = "invalid_report"

    def __init__(self, message: str, field: str):
        super().__init__(message)
        self.field = field

    def to_dict(self) -> dict:
        return {"code": self.code, "field": self.field, "detail": str(self)}


class InvalidLocation(ReportValidationError):
    code = "invalid_location"


class InvalidCategory(ReportValidationError):
    code = "invalid_category"


class StoreError(AquaError):
    """The external record store could not complete a request."""

    def __init__(self, message: str, collection: str):
        super().__init__(message)
        self.collection = collection


class FetchFailure(StoreError):
    pass


class StoreWriteFailure(StoreError):
    pass


class GeolocationDenied(AquaError):
    """The user (or the device) refused to share a position."""
    pass
