from linkup.schemas.common import ErrorResponse

_DESCRIPTIONS = {
    400: "Request not valid for the current state",
    401: "Missing or invalid credentials or token",
    403: "Authenticated but not allowed",
    404: "Referenced user or post does not exist",
    409: "Email already in use",
    422: "Request body or parameters failed validation",
    429: "Too many failed logins",
    500: "Unexpected server or storage failure",
}


def error_responses(*codes: int) -> dict:
    """OpenAPI ``responses`` entries for the given status codes."""
    return {code: {"model": ErrorResponse, "description": _DESCRIPTIONS[code]} for code in codes}
