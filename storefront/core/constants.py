"""全局常量（会话、错误提示、校验提示）"""

from typing import Final

# 会话
SESSION_KEY_PREFIX: Final = "Session_"
SESSION_EXPIRATION_MINUTES: Final = 30
AUTH_HEADER_NAME: Final = "X-Session-Token"


class ErrorMessages:
    UNAUTHORIZED_ACCESS = "Unauthorized access. Please login."
    INVALID_CREDENTIALS = "Invalid username or password."
    SESSION_EXPIRED = "Your session has expired. Please login again."
    VALIDATION_FAILED = "Validation failed."
    INTERNAL_SERVER_ERROR = "An internal server error occurred."
    RESOURCE_NOT_FOUND = "The requested resource was not found."
    SESSION_TOKEN_MISSING = "Session token not provided"
    REGISTRATION_FAILED = "Registration failed"
    PERSISTENCE_CONFLICT = "The change conflicts with existing data."


class ValidationMessages:
    REQUIRED_FIELD = "{0} is required."
    INVALID_EMAIL = "Invalid email format."
    MIN_LENGTH = "{0} must be at least {1} characters."
    MAX_LENGTH = "{0} must not exceed {1} characters."
    USERNAME_TAKEN = "Username is already taken."
    EMAIL_TAKEN = "Email is already registered."
    PRICE_NOT_POSITIVE = "Price must be greater than zero."
    PRICE_TOO_LARGE = "Price must not exceed {0}."
    STOCK_NEGATIVE = "Stock cannot be negative."
