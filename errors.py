"""Request-scoped failures. Each one carries the HTTP status it renders as."""


class AppError(Exception):
    status_code = 400
    message = 'Bad request'

    def __init__(self, message=None):
        super().__init__(message or self.message)
        if message:
            self.message = message

    def to_dict(self):
        return {'error': self.message}


class Unauthorized(AppError):
    status_code = 401
    message = 'Access denied'


class Forbidden(AppError):
    status_code = 403
    message = 'Invalid token'


class NotFound(AppError):
    status_code = 404
    message = 'Not found'


class Conflict(AppError):
    status_code = 409
    message = 'Already exists'


class DuplicateEmail(Conflict):
    message = 'User already exists'


class EdgeExists(Conflict):
    message = 'Friend request already exists'


class InvalidCredential(AppError):
    status_code = 400
    message = 'Invalid password'


class ValidationError(AppError):
    status_code = 400
    message = 'Missing required field'
