# movies_backend/services/errors.py
"""Domain errors raised by the services. Routers turn them into HTTP responses."""
from fastapi import status


class ServiceError(Exception):
    message_key = "errors.server.internal"
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR


# ---------------- AUTH ----------------

class AuthError(ServiceError):
    status_code = status.HTTP_401_UNAUTHORIZED


class MissingToken(AuthError):
    message_key = "errors.auth.noToken"


class TokenRevoked(AuthError):
    message_key = "errors.auth.tokenBlacklisted"


class InvalidToken(AuthError):
    message_key = "errors.auth.invalidToken"


class InvalidCredentials(AuthError):
    message_key = "errors.auth.invalidCredentials"


# ---------------- CONFLICTS ----------------

class ConflictError(ServiceError):
    status_code = status.HTTP_409_CONFLICT


class EmailInUse(ConflictError):
    message_key = "errors.auth.emailInUse"


class AlreadyFavorited(ConflictError):
    message_key = "errors.favorites.alreadyFavorited"


class AlreadyRevoked(ConflictError):
    message_key = "errors.auth.alreadyLoggedOut"


# ---------------- NOT FOUND ----------------

class NotFoundError(ServiceError):
    status_code = status.HTTP_404_NOT_FOUND


class UserNotFound(NotFoundError):
    message_key = "errors.favorites.userNotFound"


class MovieNotAvailable(NotFoundError):
    message_key = "errors.favorites.movieNotAvailable"


# ---------------- UPSTREAM ----------------

class CatalogUnavailable(ServiceError):
    """The external movie catalog was unreachable or answered with an error."""

    message_key = "errors.movies.catalogUnavailable"
    status_code = status.HTTP_502_BAD_GATEWAY

    def __init__(self, message: str = "", upstream_status: int | None = None):
        super().__init__(message)
        self.upstream_status = upstream_status
