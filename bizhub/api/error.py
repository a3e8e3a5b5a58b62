from typing import NoReturn

from fastapi import status

from bizhub.libs.result import Error


class ClientError(Exception):
    def __init__(self, base_error: Error, status_code: int = status.HTTP_400_BAD_REQUEST):
        self.base_error = base_error
        self.status_code = status_code
        super().__init__(base_error.message)


class ServerError(Exception):
    def __init__(
        self, base_error: Error, status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    ):
        self.base_error = base_error
        self.status_code = status_code
        super().__init__(base_error.message)


# Error code -> HTTP status. Codes missing here are validation errors (400).
STATUS_BY_CODE = {
    "NOT_AUTHENTICATED": status.HTTP_401_UNAUTHORIZED,
    "INSUFFICIENT_ROLE": status.HTTP_403_FORBIDDEN,
    "FEATURE_NOT_ENABLED": status.HTTP_403_FORBIDDEN,
    "TENANT_NOT_FOUND": status.HTTP_404_NOT_FOUND,
    "MEMBERSHIP_NOT_FOUND": status.HTTP_404_NOT_FOUND,
    "PRINCIPAL_NOT_FOUND": status.HTTP_404_NOT_FOUND,
    "SEGMENT_NOT_FOUND": status.HTTP_404_NOT_FOUND,
    "CUSTOM_DOMAIN_NOT_SET": status.HTTP_404_NOT_FOUND,
    "DUPLICATE_OWNER": status.HTTP_409_CONFLICT,
    "ALREADY_MEMBER": status.HTTP_409_CONFLICT,
    "TENANT_ALREADY_EXISTS": status.HTTP_409_CONFLICT,
    "DOMAIN_UNAVAILABLE": status.HTTP_409_CONFLICT,
    "CANNOT_REMOVE_OWNER": status.HTTP_409_CONFLICT,
    "INVALID_STATUS_TRANSITION": status.HTTP_409_CONFLICT,
    "SUBSCRIPTION_REQUIRED": status.HTTP_402_PAYMENT_REQUIRED,
    "RATE_LIMITED": status.HTTP_429_TOO_MANY_REQUESTS,
    "ALLOCATION_EXHAUSTED": status.HTTP_503_SERVICE_UNAVAILABLE,
    "STORAGE_ERROR": status.HTTP_503_SERVICE_UNAVAILABLE,
    "NETWORK_ERROR": status.HTTP_503_SERVICE_UNAVAILABLE,
    "DATA_INTEGRITY_ERROR": status.HTTP_500_INTERNAL_SERVER_ERROR,
}


def status_for(error: Error) -> int:
    return STATUS_BY_CODE.get(error.code, status.HTTP_400_BAD_REQUEST)


def raise_for_error(error: Error) -> NoReturn:
    """Raise the ClientError/ServerError matching a use case error"""
    status_code = status_for(error)
    if status_code >= status.HTTP_500_INTERNAL_SERVER_ERROR:
        raise ServerError(error, status_code=status_code)
    raise ClientError(error, status_code=status_code)
