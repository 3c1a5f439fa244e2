from __future__ import annotations

from portal.commons.exceptions import (
    BaseCoreException,
    BaseServiceConflictException,
    BaseServiceException,
    BaseServiceValidationException,
)


class AuthServiceException(BaseServiceException):
    pass


class AuthServiceValidationException(BaseServiceValidationException):
    pass


class MissingFieldException(AuthServiceValidationException):
    pass


class InvalidUsernameException(AuthServiceValidationException):
    pass


class InvalidPasswordException(AuthServiceValidationException):
    pass


class DuplicateUsernameException(BaseServiceConflictException):
    pass


class SessionCreationException(BaseCoreException):
    pass
