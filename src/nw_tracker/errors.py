"""Error hierarchy for the net-worth tracker."""

from __future__ import annotations


class NwError(Exception):
    """Base exception for everything the tracker raises on purpose."""

    pass


# ---------------------------------------------------------------------------
# Domain validation
# ---------------------------------------------------------------------------


class DomainError(NwError):
    """Raised when user-supplied data breaks a portfolio rule."""

    pass


class DuplicateAssetId(DomainError):
    def __init__(self, asset_id: str):
        self.asset_id = asset_id
        super().__init__(f"asset id '{asset_id}' already exists")


class AssetNotFound(DomainError):
    def __init__(self, asset_id: str):
        self.asset_id = asset_id
        super().__init__(f"asset id '{asset_id}' not found")


class SnapshotAlreadyExists(DomainError):
    def __init__(self, date: str):
        self.date = date
        super().__init__(f"snapshot for date '{date}' already exists")


class SnapshotNotFound(DomainError):
    def __init__(self, date: str):
        self.date = date
        super().__init__(f"snapshot for date '{date}' not found")


class UsdRateRejected(DomainError):
    def __init__(self):
        super().__init__("USD is the base currency and cannot have a rate")


class InvalidRate(DomainError):
    def __init__(self, currency: str, rate: float):
        self.currency = currency
        self.rate = rate
        super().__init__(f"rate for '{currency}' must be a positive number, got {rate}")


class InvalidValue(DomainError):
    def __init__(self, asset_id: str, value: float):
        self.asset_id = asset_id
        self.value = value
        super().__init__(f"value for asset '{asset_id}' must be non-negative, got {value}")


class InvalidDate(DomainError):
    def __init__(self, value: str):
        self.value = value
        super().__init__(f"invalid date format '{value}': expected YYYY-MM-DD")


class InvalidHistoryRange(DomainError):
    def __init__(self, token: str):
        self.token = token
        super().__init__(f"invalid history range '{token}': expected 1M, 6M, 1Y, 5Y, or ALL")


class RateMissing(DomainError):
    """Raised when a snapshot has no rate for a non-USD asset currency."""

    def __init__(self, currency: str):
        self.currency = currency
        super().__init__(f"no rate found for currency '{currency}'")


# ---------------------------------------------------------------------------
# Storage
# ---------------------------------------------------------------------------


class StoreError(NwError):
    """Raised when the portfolio document cannot be read or written."""

    action = "access"

    def __init__(self, path: str, reason: object = ""):
        self.path = str(path)
        self.reason = reason
        super().__init__(self.describe())

    def describe(self) -> str:
        message = f"failed to {self.action} portfolio file at {self.path}"
        if self.reason:
            message += f": {self.reason}"
        return message


class ReadFileError(StoreError):
    action = "read"


class WriteFileError(StoreError):
    action = "write"


class SerializeError(StoreError):
    action = "serialize"


class MalformedDocumentError(StoreError):
    def describe(self) -> str:
        return f"malformed JSON in {self.path}: {self.reason}"


class ConfigDirError(NwError):
    def __init__(self):
        super().__init__("could not determine config directory")
