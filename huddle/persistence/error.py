"""Entity store errors.

Repositories translate these into the domain error taxonomy.
"""


class StoreError(Exception):
    """Base entity store error (transient failures included)."""

    pass


class RecordNotFoundError(StoreError):
    """Raised when a record does not exist."""

    def __init__(self, collection: str, record_id: str):
        self.collection = collection
        self.record_id = record_id
        super().__init__(f"{collection}/{record_id} not found")


class DuplicateRecordError(StoreError):
    """Raised when creating a record whose explicit id already exists."""

    def __init__(self, collection: str, record_id: str):
        self.collection = collection
        self.record_id = record_id
        super().__init__(f"{collection}/{record_id} already exists")


class ConflictError(StoreError):
    """Raised when a conditional update finds the record in another state."""

    def __init__(self, collection: str, record_id: str):
        self.collection = collection
        self.record_id = record_id
        super().__init__(f"{collection}/{record_id} changed concurrently")
