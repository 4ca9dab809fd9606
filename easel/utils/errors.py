"""Custom error classes for Easel."""


class EaselError(Exception):
    """Base exception for all Easel errors."""

    pass


class GraphValidationError(EaselError):
    """Raised when a graph update would break graph invariants."""

    pass


class NodeNotFoundError(EaselError):
    """Raised when a node id does not resolve against the graph."""

    def __init__(self, node_id: str):
        self.node_id = node_id
        super().__init__(f"Node '{node_id}' not found")


class NodeLockedError(EaselError):
    """Raised when editing the content or geometry of a locked node."""

    def __init__(self, node_id: str):
        self.node_id = node_id
        super().__init__(f"Node '{node_id}' is locked")


class ContentLimitError(EaselError):
    """Raised when a text payload or the node count exceeds its limit."""

    pass


class InvalidNodeTypeError(EaselError):
    """Raised when an unknown node type is encountered."""

    pass


class ExecutorConfigurationError(EaselError):
    """Raised when the executor registry does not map a node type to exactly one executor.

    This is a programming error and is never turned into a run outcome.
    """

    pass


class ExecutionCancelledError(EaselError):
    """Raised at a cancellation checkpoint after the node was stopped."""

    def __init__(self, node_id: str):
        self.node_id = node_id
        super().__init__(f"Execution of node '{node_id}' was stopped")


class ServiceError(EaselError):
    """Raised when an external classification/generation service fails."""

    pass


class ServiceNotConfiguredError(ServiceError):
    """Raised when an executor needs a service that was never provided."""

    def __init__(self, service: str):
        self.service = service
        super().__init__(f"{service} is not configured")
