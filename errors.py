"""
Error taxonomy for the key service.

Each error carries the HTTP status it maps to and a short message that is
safe to show to the caller.
"""


class KeystoreError(Exception):
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InputError(KeystoreError):
    """Malformed request body or missing fields."""
    status_code = 400


class GenerationError(KeystoreError):
    """Key generation or PEM encoding failed."""


class ClientInitError(KeystoreError):
    """Vault client could not be built."""


class StoreWriteError(KeystoreError):
    pass


class StoreReadError(KeystoreError):
    pass
