"""Exception hierarchy shared by the sparse subtree and the staged tree."""


class AuthTreeError(Exception):
    """Base class for all authtrees errors."""


class InvalidProofError(AuthTreeError):
    """A proof does not verify against the expected root."""

    def __init__(self, path: int, value_hash: int, message: str | None = None):
        self.path = path
        self.value_hash = value_hash
        if message is None:
            message = f"invalid proof, path: {path}, value hash: {value_hash}"
        super().__init__(message)


class UnknownKeyError(AuthTreeError, KeyError):
    """The subtree holds no branch for the requested key."""

    def __init__(self, path: int):
        self.path = path
        super().__init__(f"the subtree does not contain a branch for path {path}")

    def __str__(self) -> str:
        # KeyError quotes its argument
        return self.args[0]


class IncompleteSubtreeError(AuthTreeError):
    """A node needed to walk a path is missing from the node store."""

    def __init__(self, path: int, level: int, node_hash: int):
        self.path = path
        self.level = level
        self.node_hash = node_hash
        super().__init__(
            f"missing node {node_hash} at level {level} on path {path}; "
            "add the branches covering this key with add_branch first"
        )


class PersistenceError(AuthTreeError):
    """The durable store failed to read or write."""


class TreeNotFoundError(PersistenceError):
    """No tree metadata is stored under the requested name."""


class TreeCapacityError(AuthTreeError):
    """Appending would exceed the 2**depth leaves of a fixed-height tree."""


class MembershipError(AuthTreeError, AssertionError):
    """A recomputed root does not match the expected root."""


class InvariantError(AuthTreeError):
    """Raised when a tree invariant is violated."""
