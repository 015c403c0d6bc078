"""
Base protocol/interface for document store implementations.
All storage adapters must implement this protocol.
"""

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class DocumentStore(Protocol):
    """
    Protocol defining the interface for document store operations.

    Records are plain dictionaries keyed by stored field names. Filters are
    equality matches on every given field. Each write is atomic at the
    granularity of a single record; nothing spans records.

    Implementations wrap their own failures in StorageError.
    """

    async def initialize(self) -> None:
        """
        Open the connection and prepare collections.
        This should be called once when the application starts.
        """
        ...

    async def close(self) -> None:
        """
        Release the connection.
        This should be called once when the application shuts down.
        """
        ...

    async def insert(self, collection: str, record: dict[str, Any]) -> None:
        """
        Insert a new record.

        Args:
            collection: Collection name
            record: Record to insert. When it has no "_id" the store assigns one.

        Raises:
            DuplicateKeyError: A record with the same "_id" already exists
            StorageError: The insert failed
        """
        ...

    async def find_one(
        self,
        collection: str,
        filter: dict[str, Any],
    ) -> dict[str, Any] | None:
        """
        Find the first record matching the filter.

        Args:
            collection: Collection name
            filter: Field equality conditions

        Returns:
            The matching record or None
        """
        ...

    async def find_many(
        self,
        collection: str,
        filter: dict[str, Any] | None = None,
    ) -> list[dict[str, Any]]:
        """
        Find every record matching the filter.

        Args:
            collection: Collection name
            filter: Field equality conditions (None matches everything)

        Returns:
            A point-in-time list of matching records
        """
        ...

    async def update_one(
        self,
        collection: str,
        filter: dict[str, Any],
        record: dict[str, Any],
        upsert: bool = False,
    ) -> bool:
        """
        Replace the record matching the filter.

        Args:
            collection: Collection name
            filter: Field equality conditions
            record: Replacement record
            upsert: Insert the record when nothing matches

        Returns:
            True if a record was replaced or inserted, False otherwise
        """
        ...

    async def find_one_and_update(
        self,
        collection: str,
        filter: dict[str, Any],
        changes: dict[str, Any],
    ) -> dict[str, Any] | None:
        """
        Atomically apply changes to the single record matching the filter.

        Only the fields in ``changes`` are written. Matching and writing happen
        in one step, so two concurrent calls with a filter that the first
        write invalidates cannot both succeed. When several records match,
        nothing is written.

        Args:
            collection: Collection name
            filter: Field equality conditions
            changes: Fields to set on the matching record

        Returns:
            The record after the update, or None if nothing matched

        Raises:
            ConsistencyError: More than one record matches the filter
        """
        ...

    async def update_many(
        self,
        collection: str,
        filter: dict[str, Any],
        changes: dict[str, Any],
    ) -> int:
        """
        Apply changes to every record matching the filter.

        Args:
            collection: Collection name
            filter: Field equality conditions
            changes: Fields to set on each matching record

        Returns:
            Number of records updated
        """
        ...
