"""Errors raised by the sequence engine and its collaborators."""


class SequenceError(ValueError):
    """Base class for all sequence related errors."""


class MalformedSequence(SequenceError):
    """An address does not match the grammar of the active scheme."""

    def __init__(self, address: str, reason: str):
        self.address = address
        self.reason = reason
        super().__init__(f"Malformed sequence {address!r}: {reason}")


class InvalidComponent(SequenceError):
    """A component cannot be encoded or decoded by the letter codec."""

    def __init__(self, component: str | int, reason: str):
        self.component = component
        self.reason = reason
        super().__init__(f"Invalid component {component!r}: {reason}")


class UnknownSequence(SequenceError):
    """The target address is not present in the collection."""

    def __init__(self, address: str):
        self.address = address
        super().__init__(f"Sequence {address!r} does not exist")


class AddressClaimed(SequenceError):
    """Another writer currently holds the claim on an address."""

    def __init__(self, address: str):
        self.address = address
        super().__init__(f"Address {address!r} is already claimed")


class AllocationConflict(SequenceError):
    """A new address could not be secured within the allowed attempts."""

    def __init__(self, target: str | None, attempts: int):
        self.target = target
        self.attempts = attempts
        super().__init__(
            f"Could not allocate a new address for {target!r} after {attempts} attempts"
        )
