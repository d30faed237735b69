"""MEGA API error codes and exceptions."""
from typing import Dict

from ..exceptions import MegaGlobException


class APIErrorCodes:
    """MEGA API error codes relevant to folder listing."""
    
    ERROR_CODES: Dict[int, str] = {
        1: 'EINTERNAL (-1): An internal error has occurred.',
        2: 'EARGS (-2): You have passed invalid arguments to this command.',
        3: 'EAGAIN (-3): A temporary congestion or server malfunction prevented your request from being processed. No data was altered.',
        4: 'ERATELIMIT (-4): You have exceeded your command weight per time quota. Please wait a few seconds, then try again.',
        6: 'ETOOMANY (-6): Too many concurrent IP addresses are accessing this resource.',
        9: 'ENOENT (-9): Object (typically, node or user) not found.',
        11: 'EACCESS (-11): Access violation.',
        16: 'EBLOCKED (-16): Resource blocked',
        17: 'EOVERQUOTA (-17): Request over quota',
        18: 'ETEMPUNAVAIL (-18): Resource temporarily not available, please try again later',
    }
    
    @classmethod
    def get_message(cls, code: int) -> str:
        """Gets error message for error code."""
        return cls.ERROR_CODES.get(abs(code), f"Unknown error: {code}")


class MegaAPIError(MegaGlobException):
    """Exception raised for MEGA API errors."""
    
    def __init__(self, code: int):
        self.code = code
        self.message = APIErrorCodes.get_message(code)
        super().__init__(self.message, code)
