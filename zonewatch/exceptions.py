"""
Zone Editor Exceptions
"""


class ZoneError(Exception):
    """Base class for zone editor failures that map to an HTTP response."""
    status_code = 400

    def __init__(self, message, status_code=None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code

    def to_dict(self):
        return {'error': True, 'message': self.message}


class ZoneValidationError(ZoneError):
    """Blank name, unknown severity or too few polygon points."""
    status_code = 400


class EditorStateError(ZoneError):
    """Action not allowed in the current editor state."""
    status_code = 409
