"""
Exceptions shared by the store, the provider adapters and the API layer.
main.py maps them to HTTP status codes.
"""


class OutreachError(Exception):
    """Base exception for the outreach service"""
    def __init__(self, message: str = "An error occurred"):
        self.message = message
        super().__init__(self.message)


class NotFoundError(OutreachError):
    """Resource not found"""
    def __init__(self, resource: str = "Resource", resource_id=None):
        message = f"{resource} not found"
        if resource_id:
            message = f"{resource} with id '{resource_id}' not found"
        super().__init__(message)


class ValidationError(OutreachError):
    """Validation failed"""
    def __init__(self, message: str = "Validation failed", field: str = None):
        if field:
            message = f"Validation failed for field '{field}': {message}"
        super().__init__(message)


class StorageError(OutreachError):
    """Database call failed"""


class ProviderError(OutreachError):
    """External service call failed"""
    def __init__(self, service: str = "External service", message: str = None):
        self.service = service
        msg = f"{service} call failed"
        if message:
            msg = f"{msg}: {message}"
        super().__init__(msg)


class ProviderConfigError(ProviderError):
    """External service is not configured (missing key etc.)"""
    def __init__(self, service: str, setting: str):
        self.setting = setting
        super().__init__(service, f"{setting} is not set")


class GenerationError(ProviderError):
    """Generative-text provider returned nothing usable"""


class DeliveryError(OutreachError):
    """Email provider rejected the send"""
