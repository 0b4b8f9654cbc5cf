class RetrievalError(Exception):
    """Catalog or interaction store failed; the request fails with no partial output."""

    def __init__(self, store: str, message: str):
        self.store = store
        super().__init__(f"{store} retrieval failed: {message}")


class ExplanationError(Exception):
    """The explanation generator failed for one product."""
