from typing import Any

import psycopg
import pytest
from psycopg import sql

from docintel.database.repositories.document_repository import DocumentRepository
from docintel.documents.models import DocumentCategory, DocumentRecord, DocumentStatus
from docintel.processor.exceptions import DocumentNotFoundError
from docintel.search.models import SearchFilters


def _new_record(name: str = "invoice.pdf") -> DocumentRecord:
    return DocumentRecord(
        id="",
        filename="abc.pdf",
        original_name=name,
        mime_type="application/pdf",
        size=1024,
        storage_key="documents/abc.pdf",
    )


def _backdate(
    db_conn: psycopg.Connection[Any],
    document_id: str,
    seconds: int,
    column: str = "created_at",
) -> None:
    query = sql.SQL(
        "UPDATE documents SET {} = NOW() - make_interval(secs => %s) WHERE id = %s"
    ).format(sql.Identifier(column))
    with db_conn.cursor() as cur:
        cur.execute(query, (seconds, document_id))
    db_conn.commit()


@pytest.mark.integration
class TestDocumentRepositoryLifecycle:
    def test_create_and_find(self, integration_cleanup: list[str]) -> None:
        repo = DocumentRepository()

        created = repo.create(_new_record())
        integration_cleanup.append(created.id)

        found = repo.find_by_id(created.id)
        assert found is not None
        assert found.status is DocumentStatus.UPLOADED
        assert found.original_name == "invoice.pdf"
        assert found.created_at is not None

    def test_update_fields_and_status(self, integration_cleanup: list[str]) -> None:
        repo = DocumentRepository()
        created = repo.create(_new_record())
        integration_cleanup.append(created.id)

        repo.update_status(created.id, DocumentStatus.FAILED, {"error": "boom"})
        repo.update_fields(
            created.id,
            {
                "status": DocumentStatus.PROCESSED,
                "summary": "An invoice.",
                "keywords": ["invoice", "hosting"],
                "category": DocumentCategory.INVOICE,
                "confidence": 0.8,
                "extracted_fields": {"amounts": ["10 EUR"]},
            },
        )

        found = repo.find_by_id(created.id)
        assert found is not None
        assert found.status is DocumentStatus.PROCESSED
        assert found.category is DocumentCategory.INVOICE
        assert found.keywords == ["invoice", "hosting"]
        assert found.extracted_fields == {"amounts": ["10 EUR"]}
        assert found.metadata == {"error": "boom"}

    def test_list_processed_filters(self, integration_cleanup: list[str]) -> None:
        repo = DocumentRepository()
        created = repo.create(_new_record())
        integration_cleanup.append(created.id)
        repo.update_fields(
            created.id,
            {"status": DocumentStatus.PROCESSED, "category": DocumentCategory.REPORT},
        )

        ids = [d.id for d in repo.list_processed(SearchFilters(category=DocumentCategory.REPORT))]
        assert created.id in ids
        ids = [d.id for d in repo.list_processed(SearchFilters(category=DocumentCategory.FORM))]
        assert created.id not in ids

    def test_delete(self, integration_cleanup: list[str]) -> None:
        repo = DocumentRepository()
        created = repo.create(_new_record())

        repo.delete(created.id)

        assert repo.find_by_id(created.id) is None
        with pytest.raises(DocumentNotFoundError):
            repo.delete(created.id)


@pytest.mark.integration
class TestClaimUploaded:
    def test_claims_only_stale_uploads(
        self, db_conn: psycopg.Connection[Any], integration_cleanup: list[str]
    ) -> None:
        repo = DocumentRepository()
        fresh = repo.create(_new_record("fresh.pdf"))
        stale = repo.create(_new_record("stale.pdf"))
        integration_cleanup.extend([fresh.id, stale.id])
        _backdate(db_conn, stale.id, 600)

        claimed = repo.claim_uploaded(100, 60, 900)

        assert stale.id in claimed
        assert fresh.id not in claimed
        found = repo.find_by_id(stale.id)
        assert found is not None
        assert found.status is DocumentStatus.PROCESSING

    def test_claimed_document_is_not_claimed_twice(
        self, db_conn: psycopg.Connection[Any], integration_cleanup: list[str]
    ) -> None:
        repo = DocumentRepository()
        stale = repo.create(_new_record())
        integration_cleanup.append(stale.id)
        _backdate(db_conn, stale.id, 600)

        first = repo.claim_uploaded(100, 60, 900)
        second = repo.claim_uploaded(100, 60, 900)

        assert stale.id in first
        assert stale.id not in second

    def test_skips_excluded_ids(
        self, db_conn: psycopg.Connection[Any], integration_cleanup: list[str]
    ) -> None:
        repo = DocumentRepository()
        queued = repo.create(_new_record())
        integration_cleanup.append(queued.id)
        _backdate(db_conn, queued.id, 600)

        claimed = repo.claim_uploaded(100, 60, 900, exclude_ids=[queued.id])

        assert queued.id not in claimed
        found = repo.find_by_id(queued.id)
        assert found is not None
        assert found.status is DocumentStatus.UPLOADED

    def test_reclaims_abandoned_processing_rows(
        self, db_conn: psycopg.Connection[Any], integration_cleanup: list[str]
    ) -> None:
        repo = DocumentRepository()
        abandoned = repo.create(_new_record("abandoned.pdf"))
        running = repo.create(_new_record("running.pdf"))
        integration_cleanup.extend([abandoned.id, running.id])
        repo.update_status(abandoned.id, DocumentStatus.PROCESSING)
        repo.update_status(running.id, DocumentStatus.PROCESSING)
        _backdate(db_conn, abandoned.id, 3600, column="updated_at")

        claimed = repo.claim_uploaded(100, 60, 900)

        assert abandoned.id in claimed
        assert running.id not in claimed

    def test_malformed_id_is_not_found(self) -> None:
        repo = DocumentRepository()

        assert repo.find_by_id("not-a-uuid") is None
        with pytest.raises(DocumentNotFoundError):
            repo.delete("not-a-uuid")
