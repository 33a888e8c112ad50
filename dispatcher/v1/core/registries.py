from typing import Any, Generic, Protocol, TypeVar

# Base registry implementation
T = TypeVar("T")


class Registry(Generic[T]):
    """Generic registry for pluggable implementations."""

    def __init__(self, name: str):
        self.name = name
        self._implementations: dict[str, T] = {}
        self._frozen = False

    def register(self, name: str, implementation: T) -> None:
        """Register an implementation with a given name."""
        if self._frozen:
            raise RuntimeError(
                f"Cannot register '{name}' in {self.name.lower()} registry: "
                "registry is frozen in production mode"
            )
        self._implementations[name] = implementation

    def get(self, name: str) -> T:
        """Get an implementation by name."""
        if name not in self._implementations:
            raise KeyError(
                f"No {self.name.lower()} implementation registered with name: {name}"
            )
        return self._implementations[name]

    def list(self) -> list[str]:
        """List all registered implementation names."""
        return list(self._implementations.keys())

    def freeze(self) -> None:
        """Freeze the registry to prevent further modifications."""
        self._frozen = True

    def is_frozen(self) -> bool:
        """Check if the registry is frozen."""
        return self._frozen


# Push Sender Registry - delivery through a push-messaging provider
class PushSender(Protocol):
    """Protocol for push-messaging providers."""

    async def send(self, message: Any) -> str:  # OutboundMessage
        """
        Deliver one message to the provider.

        Returns the provider's message id. Raises PushSendError on failure.
        """
        ...


class PushSenderRegistry(Registry[PushSender]):
    """Registry for push senders (fcm, stub)."""

    def __init__(self):
        super().__init__("PushSender")


# Job Registry - handlers for created job documents, keyed by collection
class JobHandler(Protocol):
    """Protocol for handlers invoked once per created job document."""

    async def handle(self, snapshot: dict[str, Any]) -> Any:  # DispatchResult
        """
        Handle a newly created job document.

        Args:
            snapshot: Field snapshot of the document at creation time

        Returns:
            The dispatch result; handlers never raise for delivery problems
        """
        ...


class JobRegistry(Registry[JobHandler]):
    """Registry for job handlers, keyed by document collection."""

    def __init__(self):
        super().__init__("Job")


# Global registry instances (singletons)
push_sender_registry = PushSenderRegistry()
job_registry = JobRegistry()
