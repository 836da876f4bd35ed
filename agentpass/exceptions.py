"""AgentPass exception classes."""


class AgentPassError(Exception):
    """Base exception for all AgentPass errors."""

    def __init__(self, code: str, message: str) -> None:
        self.code = code
        self.message = message
        super().__init__(f"[{code}] {message}")


class NotFoundError(AgentPassError):
    """Raised when a referenced agent, skill or task does not exist."""

    def __init__(self, kind: str, identifier: str) -> None:
        self.kind = kind
        self.identifier = identifier
        super().__init__("NOT_FOUND", f"{kind} not found: {identifier}")


class MissingParameterError(AgentPassError):
    """Raised when a skill invocation omits a required parameter."""

    def __init__(self, parameter: str) -> None:
        self.parameter = parameter
        super().__init__("MISSING_PARAMETER", f"Missing required parameter: {parameter}")


class InvalidRequestError(AgentPassError):
    """Raised when a write request is malformed."""

    def __init__(self, message: str) -> None:
        super().__init__("INVALID_REQUEST", message)


class ExternalFetchError(AgentPassError):
    """Raised when an external signal source errors or times out."""

    def __init__(self, source: str, message: str) -> None:
        self.source = source
        super().__init__("EXTERNAL_FETCH_FAILED", f"{source}: {message}")


class ChainError(AgentPassError):
    """Raised when a Solana RPC call fails."""

    def __init__(self, message: str) -> None:
        super().__init__("CHAIN_ERROR", message)


class UnavailableError(AgentPassError):
    """Raised when a component the request needs is not running."""

    def __init__(self, component: str) -> None:
        self.component = component
        super().__init__("UNAVAILABLE", f"{component} not started")
