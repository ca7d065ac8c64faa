# =============================================================================
# relay/core/errors.py — Error kinds raised while relaying a request
# =============================================================================
# Every error is terminal for the request. The adapters turn them into an
# HTTP response using status_code; the message is returned to the caller as-is.
# =============================================================================


class RelayError(Exception):
    status_code: int = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class BadRequest(RelayError):
    status_code = 400


class MethodNotAllowed(RelayError):
    status_code = 405


class ConfigurationError(RelayError):
    status_code = 500


class UpstreamUnavailable(RelayError):
    status_code = 502


class UpstreamError(RelayError):
    status_code = 502

    def __init__(self, upstream_status: int, upstream_body: str) -> None:
        super().__init__(f"Anthropic API error: {upstream_status} - {upstream_body}")
        self.upstream_status = upstream_status
        self.upstream_body = upstream_body


class UpstreamProtocolError(RelayError):
    status_code = 502


class EmptyUpstreamResponse(RelayError):
    status_code = 502
