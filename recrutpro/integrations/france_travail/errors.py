from __future__ import annotations


class FranceTravailError(RuntimeError):
    status_code = 500

    def __init__(self, message: str, *, status_code: int | None = None, details: str | None = None):
        super().__init__(message)
        if status_code is not None:
            self.status_code = status_code
        self.details = details


class ValidationError(FranceTravailError):
    """Request rejected before any network call."""

    status_code = 400


class MissingEndpointError(ValidationError):
    def __init__(self) -> None:
        super().__init__("Missing endpoint parameter")


class UnknownEndpointError(ValidationError):
    def __init__(self, endpoint: str):
        super().__init__("Unknown endpoint")
        self.endpoint = endpoint


class MissingParameterError(ValidationError):
    def __init__(self, name: str):
        super().__init__(f"Missing parameter: {name}")
        self.parameter = name


class AuthError(FranceTravailError):
    """The client-credentials exchange was refused by the identity provider."""

    def __init__(self, upstream_status: int, body: str):
        super().__init__(f"Authentication failed: {upstream_status}", details=body)
        self.upstream_status = upstream_status


class DownstreamError(FranceTravailError):
    def __init__(self, upstream_status: int, body: str):
        super().__init__(f"API Error: {upstream_status}", status_code=upstream_status, details=body)
        self.upstream_status = upstream_status
