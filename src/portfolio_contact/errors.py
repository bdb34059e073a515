"""Domain-specific exception classes for the contact service."""


class ContactError(Exception):
    """Base class for all domain errors in the contact service."""


class ReplyParseError(ContactError):
    """Raised when model output cannot be parsed into a subject/html reply.

    Attributes:
        raw: The raw text returned by the model.
    """

    def __init__(self, reason: str, raw: str) -> None:
        self.raw = raw
        super().__init__(f"Could not parse composed reply: {reason}")


class EmailDeliveryError(ContactError):
    """Raised when the email provider rejects or fails to accept a message.

    Attributes:
        label: Which outbound email failed (e.g. ``"notification email"``).
    """

    def __init__(self, label: str, detail: str) -> None:
        self.label = label
        super().__init__(f"Failed to deliver {label}: {detail}")


class DeliveryTimeoutError(EmailDeliveryError):
    """Raised when an email send exceeds its deadline.

    Attributes:
        timeout: The deadline in seconds that was exceeded.
    """

    def __init__(self, label: str, timeout: float) -> None:
        self.timeout = timeout
        super().__init__(label, f"timed out after {timeout:g}s")
