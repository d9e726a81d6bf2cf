# utils/errors.py
"""
Domain error taxonomy.

Services raise these; main.py renders them as {"error": message} with the
matching status code. Messages are caller-facing and must stay terse.
"""


class AppError(Exception):
     """Base class for errors that map onto an HTTP response."""
     status_code = 500

     def __init__(self, message: str):
          super().__init__(message)
          self.message = message


class ValidationError(AppError):
     """Malformed, missing or out-of-range input."""
     status_code = 400


class AuthenticationError(AppError):
     """No valid session."""
     status_code = 401

     def __init__(self, message: str = "Unauthorized"):
          super().__init__(message)


class AuthorizationError(AppError):
     """Valid session, insufficient rights."""
     status_code = 403

     def __init__(self, message: str = "Access denied"):
          super().__init__(message)


class NotFoundError(AppError):
     """Referenced entity is absent or outside the caller's scope."""
     status_code = 404


class ConflictError(AppError):
     """Duplicate membership or duplicate email."""
     # The public API reports conflicts as plain bad requests.
     status_code = 400
