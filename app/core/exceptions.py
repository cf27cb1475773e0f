class DataAccessError(Exception):
    """A read or write against the external store failed."""

    def __init__(self, resource: str, message: str):
        self.resource = resource
        super().__init__(f"{resource}: {message}")


class MailDeliveryError(Exception):
    """The outbound email provider rejected or failed a send."""
