"""Errors raised by the analytics engine."""


class InsufficientData(ValueError):
    """
    The record sequence is empty or too short for the requested operation.

    Raised only where a ratio would otherwise be corrupted (averages over
    zero days, a trend line through fewer than two points). Structurally
    empty buckets are reported as zero or None instead.
    """

    def __init__(self, operation: str, required: int, available: int):
        self.operation = operation
        self.required = required
        self.available = available
        super().__init__(
            f"{operation} needs at least {required} record(s), got {available}"
        )
