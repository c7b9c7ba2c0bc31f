"""
Store-level exceptions shared by the feature modules.

Routes translate these into JSON ``{"message": ...}`` responses.
"""


class NotFound(LookupError):
    """A requested document or sub-document does not exist (404)"""

    def __init__(self, message='Not found.'):
        super().__init__(message)
        self.message = message


class Invalid(ValueError):
    """Request data the store cannot act on (400)"""

    def __init__(self, message='Invalid request.'):
        super().__init__(message)
        self.message = message


class Conflict(Exception):
    """Operation clashes with existing state (409)"""

    def __init__(self, message='Conflict.'):
        super().__init__(message)
        self.message = message


class Forbidden(Exception):
    """Caller is identified but not allowed (403)"""

    def __init__(self, message='Forbidden.'):
        super().__init__(message)
        self.message = message


class InvalidFieldName(Invalid):
    """A top-level key the store would read as a path or an operator"""

    def __init__(self, field):
        super().__init__('Field names must not contain "." or start with "$".')
        self.field = field
