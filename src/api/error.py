from typing import Dict, Optional

from fastapi import status
from libs.result import Error

# Session failures shared by every authenticated route
SESSION_ERROR_STATUS = {
    "SESSION_NOT_FOUND": status.HTTP_401_UNAUTHORIZED,
    "SESSION_INACTIVE": status.HTTP_401_UNAUTHORIZED,
    "SESSION_EXPIRED": status.HTTP_401_UNAUTHORIZED,
    "ACCOUNT_INACTIVE": status.HTTP_401_UNAUTHORIZED,
    "UNAUTHORIZED": status.HTTP_403_FORBIDDEN,
}


class ClientError(Exception):
    def __init__(self, base_error: Error, status_code: int = status.HTTP_400_BAD_REQUEST):
        self.base_error = base_error
        self.status_code = status_code
        super().__init__(base_error.message)


class ServerError(Exception):
    def __init__(self, base_error: Error):
        self.base_error = base_error
        super().__init__(base_error.message)


def raise_for_error(error: Error, status_map: Optional[Dict[str, int]] = None):
    """Raise the ClientError mapped to error.code, or ServerError if unmapped"""
    status_code = (status_map or {}).get(error.code)
    if status_code is None:
        status_code = SESSION_ERROR_STATUS.get(error.code)
    if status_code is None:
        raise ServerError(error)
    raise ClientError(error, status_code=status_code)
