class PhotoDeskError(Exception):
    """Base error; each subclass maps to one HTTP status."""

    status_code = 500

    def __init__(self, message):
        super().__init__(message)
        self.message = message

    def to_dict(self):
        return {"error": self.message}


class AuthError(PhotoDeskError):
    status_code = 401

    def __init__(self, message="unauthorized"):
        super().__init__(message)


class ValidationError(PhotoDeskError):
    status_code = 400


class NotFoundError(PhotoDeskError):
    status_code = 404


class StorageError(PhotoDeskError):
    status_code = 500
