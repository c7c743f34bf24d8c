from enum import Enum

class ErrorCode(str, Enum):
    # --- Generic / HTTP-ish ---
    INTERNAL_ERROR = "internal_error"
    BAD_REQUEST = "bad_request"
    VALIDATION_ERROR = "validation_error"
    UNAUTHORIZED = "unauthorized"
    FORBIDDEN = "forbidden"
    NOT_FOUND = "not_found"
    CONFLICT = "conflict"
    RATE_LIMITED = "rate_limited"

    # --- Auth / Tokens ---
    EMAIL_ALREADY_REGISTERED = "email_already_registered"
    INVALID_CREDENTIALS = "invalid_credentials"
    LOGIN_BLOCKED = "login_blocked"                 # throttle active
    TOKEN_MISSING = "token_missing"
    TOKEN_INVALID = "token_invalid"
    REFRESH_TOKEN_INVALID = "refresh_token_invalid"
    PASSWORD_RESET_INVALID = "password_reset_invalid"

    # --- Users / Profile ---
    USER_NOT_FOUND = "user_not_found"
    PROFILE_UPDATE_FAILED = "profile_update_failed"
    INVALID_FILE_TYPE = "invalid_file_type"

    # --- Follows ---
    CANNOT_FOLLOW_SELF = "cannot_follow_self"
    ALREADY_FOLLOWING = "already_following"
    FOLLOW_REQUEST_EXISTS = "follow_request_exists"
    FOLLOW_REQUEST_NOT_FOUND = "follow_request_not_found"

    # --- Posts ---
    POST_NOT_FOUND = "post_not_found"

    # --- Infra ---
    DATABASE_ERROR = "database_error"
    UNIQUE_CONSTRAINT_VIOLATION = "unique_constraint_violation"
