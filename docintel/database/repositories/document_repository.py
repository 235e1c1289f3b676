import uuid
from collections.abc import Collection
from enum import Enum
from typing import Any

from psycopg import sql
from psycopg.rows import dict_row
from psycopg.types.json import Jsonb

from docintel.database.connection import get_connection
from docintel.documents.models import DocumentCategory, DocumentRecord, DocumentStatus
from docintel.processor.exceptions import DocumentNotFoundError
from docintel.search.models import SearchFilters

_COLUMNS = (
    "id, filename, original_name, mime_type, size, storage_key, status, "
    "extracted_text, summary, keywords, category, confidence, language, sentiment, "
    "metadata, extracted_fields, embeddings, created_at, updated_at"
)

_JSON_COLUMNS = frozenset({"keywords", "metadata", "extracted_fields", "embeddings"})
_ENUM_CASTS = {"status": "document_status", "category": "document_category"}
_UPDATABLE_COLUMNS = frozenset(
    {
        "status",
        "extracted_text",
        "summary",
        "keywords",
        "category",
        "confidence",
        "language",
        "sentiment",
        "metadata",
        "extracted_fields",
        "embeddings",
    }
)


def _to_db_value(column: str, value: object) -> object:
    if isinstance(value, Enum):
        return value.value
    if column in _JSON_COLUMNS and value is not None:
        return Jsonb(value)
    return value


def _is_uuid(document_id: str) -> bool:
    try:
        uuid.UUID(document_id)
    except (ValueError, TypeError, AttributeError):
        return False
    return True


def _row_to_record(row: dict[str, Any]) -> DocumentRecord:
    return DocumentRecord(
        id=str(row["id"]),
        filename=row["filename"],
        original_name=row["original_name"],
        mime_type=row["mime_type"],
        size=row["size"],
        storage_key=row["storage_key"],
        status=DocumentStatus(row["status"]),
        extracted_text=row["extracted_text"],
        summary=row["summary"],
        keywords=row["keywords"] or [],
        category=DocumentCategory(row["category"]) if row["category"] else None,
        confidence=row["confidence"],
        language=row["language"],
        sentiment=row["sentiment"],
        extracted_fields=row["extracted_fields"] or {},
        embeddings=row["embeddings"] or [],
        metadata=row["metadata"] or {},
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


class DocumentRepository:
    """Database operations for the documents table.

    Writes are last-write-wins; there is no version column.
    """

    def create(self, record: DocumentRecord) -> DocumentRecord:
        """Insert a new document row and return it with generated id and timestamps."""
        with get_connection() as conn:
            with conn.cursor(row_factory=dict_row) as cur:
                cur.execute(
                    f"""
                    INSERT INTO documents
                    (filename, original_name, mime_type, size, storage_key, status, metadata)
                    VALUES (%s, %s, %s, %s, %s, %s::document_status, %s)
                    RETURNING {_COLUMNS}
                    """,
                    (
                        record.filename,
                        record.original_name,
                        record.mime_type,
                        record.size,
                        record.storage_key,
                        record.status.value,
                        Jsonb(record.metadata),
                    ),
                )
                row = cur.fetchone()
            conn.commit()

        if row is None:
            raise RuntimeError("INSERT into documents returned no row")
        return _row_to_record(row)

    def find_by_id(self, document_id: str) -> DocumentRecord | None:
        """Find a document by ID. Returns None if it does not exist."""
        if not _is_uuid(document_id):
            return None
        with get_connection() as conn:
            with conn.cursor(row_factory=dict_row) as cur:
                cur.execute(
                    f"SELECT {_COLUMNS} FROM documents WHERE id = %s",
                    (document_id,),
                )
                row = cur.fetchone()

        if row is None:
            return None
        return _row_to_record(row)

    def update_fields(self, document_id: str, fields: dict[str, object]) -> None:
        """Write all given columns in one UPDATE and refresh updated_at.

        Raises:
            ValueError: if a column is not updatable.
            DocumentNotFoundError: if no document with this ID exists.
        """
        unknown = set(fields) - _UPDATABLE_COLUMNS
        if unknown:
            raise ValueError(f"Cannot update columns: {sorted(unknown)}")
        if not fields:
            return
        if not _is_uuid(document_id):
            raise DocumentNotFoundError(f"Document {document_id} not found")

        assignments = []
        for column in fields:
            placeholder = (
                sql.SQL("%s::{}").format(sql.Identifier(_ENUM_CASTS[column]))
                if column in _ENUM_CASTS
                else sql.SQL("%s")
            )
            assignments.append(
                sql.SQL("{} = {}").format(sql.Identifier(column), placeholder)
            )
        query = sql.SQL("UPDATE documents SET {}, updated_at = NOW() WHERE id = %s").format(
            sql.SQL(", ").join(assignments)
        )
        params = [_to_db_value(column, value) for column, value in fields.items()]

        with get_connection() as conn:
            with conn.cursor() as cur:
                cur.execute(query, (*params, document_id))
                if cur.rowcount == 0:
                    raise DocumentNotFoundError(f"Document {document_id} not found")
            conn.commit()

    def update_status(
        self,
        document_id: str,
        status: DocumentStatus,
        metadata: dict[str, object] | None = None,
    ) -> None:
        """Set the status and merge ``metadata`` into the metadata column.

        Raises:
            DocumentNotFoundError: if no document with this ID exists.
        """
        if not _is_uuid(document_id):
            raise DocumentNotFoundError(f"Document {document_id} not found")
        with get_connection() as conn:
            with conn.cursor() as cur:
                cur.execute(
                    """
                    UPDATE documents
                    SET status = %s::document_status,
                        metadata = COALESCE(metadata, '{}'::jsonb) || %s,
                        updated_at = NOW()
                    WHERE id = %s
                    """,
                    (status.value, Jsonb(metadata or {}), document_id),
                )
                if cur.rowcount == 0:
                    raise DocumentNotFoundError(f"Document {document_id} not found")
            conn.commit()

    def list_processed(
        self,
        filters: SearchFilters,
        limit: int | None = None,
    ) -> list[DocumentRecord]:
        """Processed documents matching the filters, newest first."""
        conditions = [sql.SQL("status = 'processed'")]
        params: list[object] = []
        if filters.category is not None:
            conditions.append(sql.SQL("category = %s::document_category"))
            params.append(filters.category.value)
        if filters.language is not None:
            conditions.append(sql.SQL("language = %s"))
            params.append(filters.language)
        if filters.min_confidence is not None:
            conditions.append(sql.SQL("confidence >= %s"))
            params.append(filters.min_confidence)

        query = sql.SQL("SELECT {} FROM documents WHERE {} ORDER BY created_at DESC").format(
            sql.SQL(_COLUMNS), sql.SQL(" AND ").join(conditions)
        )
        if limit is not None:
            query = query + sql.SQL(" LIMIT %s")
            params.append(limit)

        with get_connection() as conn:
            with conn.cursor(row_factory=dict_row) as cur:
                cur.execute(query, params)
                rows = cur.fetchall()
        return [_row_to_record(row) for row in rows]

    def list_all(self) -> list[DocumentRecord]:
        """All documents, newest first."""
        with get_connection() as conn:
            with conn.cursor(row_factory=dict_row) as cur:
                cur.execute(f"SELECT {_COLUMNS} FROM documents ORDER BY created_at DESC")
                rows = cur.fetchall()
        return [_row_to_record(row) for row in rows]

    def delete(self, document_id: str) -> None:
        """Delete a document row.

        Raises:
            DocumentNotFoundError: if no document with this ID exists.
        """
        if not _is_uuid(document_id):
            raise DocumentNotFoundError(f"Document {document_id} not found")
        with get_connection() as conn:
            with conn.cursor() as cur:
                cur.execute("DELETE FROM documents WHERE id = %s", (document_id,))
                if cur.rowcount == 0:
                    raise DocumentNotFoundError(f"Document {document_id} not found")
            conn.commit()

    def claim_uploaded(
        self,
        limit: int,
        older_than_seconds: int,
        stale_processing_seconds: int,
        exclude_ids: Collection[str] = (),
    ) -> list[str]:
        """Claim documents waiting for a worker using FOR UPDATE SKIP LOCKED.

        Two kinds of rows are claimed and flipped to 'processing':

        - 'uploaded' rows older than ``older_than_seconds``; fresh uploads are
          already queued by the upload path.
        - 'processing' rows untouched for ``stale_processing_seconds``, left
          behind by a worker that died mid-run.

        Ids in ``exclude_ids`` (jobs already queued or running in this process)
        are never claimed.
        """
        excluded = [document_id for document_id in exclude_ids if _is_uuid(document_id)]
        with get_connection() as conn:
            with conn.cursor() as cur:
                cur.execute(
                    """
                    UPDATE documents
                    SET status = 'processing', updated_at = NOW()
                    WHERE id IN (
                        SELECT id FROM documents
                        WHERE (
                            (status = 'uploaded'
                             AND created_at < NOW() - make_interval(secs => %s))
                            OR (status = 'processing'
                                AND updated_at < NOW() - make_interval(secs => %s))
                          )
                          AND NOT (id = ANY(%s::uuid[]))
                        ORDER BY created_at
                        LIMIT %s
                        FOR UPDATE SKIP LOCKED
                    )
                    RETURNING id
                    """,
                    (older_than_seconds, stale_processing_seconds, excluded, limit),
                )
                rows = cur.fetchall()
            conn.commit()
        return [str(row[0]) for row in rows]
