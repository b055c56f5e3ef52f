import logging
from datetime import datetime

from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.database import new_id
from app.core.errors import ValidationError
from app.models.enums import LeadStatus
from app.models.lead import Lead
from app.models.user import User
from app.services import csv_parser

logger = logging.getLogger(__name__)

INSERTS = {
    "postgresql": pg_insert,
    "sqlite": sqlite_insert,
}


class LeadImportService:
    def __init__(self, db: Session, actor: User):
        self.db = db
        self.actor = actor
        self.batch_size = settings.IMPORT_BATCH_SIZE

    def _insert_skipping_duplicates(self, rows) -> int:
        """Bulk insert; rows hitting a unique constraint are dropped. Returns rows written."""
        insert = INSERTS.get(self.db.get_bind().dialect.name)
        if insert is None:
            raise RuntimeError(f"Bulk import not supported on {self.db.get_bind().dialect.name}")

        stmt = insert(Lead).values(rows).on_conflict_do_nothing()
        result = self.db.execute(stmt)
        return result.rowcount or 0

    def _build_row(self, fields: dict, now: datetime) -> dict:
        return {
            "id": new_id(),
            **fields,
            "status": LeadStatus.NEW,
            "assigned_to_id": self.actor.id,
            "created_at": now,
            "updated_at": now,
        }

    def import_csv(self, content: str) -> dict:
        _, rows = csv_parser.parse_csv(content)
        if not rows:
            raise ValidationError("No data found in CSV")

        results = {
            "total": len(rows),
            "created": 0,
            "skipped": 0,
            "errors": [],
        }
        now = datetime.utcnow()

        for start in range(0, len(rows), self.batch_size):
            batch = rows[start:start + self.batch_size]
            to_create = []

            for offset, row in enumerate(batch):
                # +2: header is line 1, data starts on line 2
                line_no = start + offset + 2
                try:
                    fields = csv_parser.row_to_lead_fields(row)
                    if fields is None:
                        results["skipped"] += 1
                        continue
                    to_create.append(self._build_row(fields, now))
                except Exception as e:
                    logger.warning(f"CSV import: row {line_no} rejected: {e}")
                    results["errors"].append(f"Row {line_no}: {e}")
                    results["skipped"] += 1

            if to_create:
                results["created"] += self._insert_skipping_duplicates(to_create)
                self.db.commit()

        logger.info(
            f"CSV import by {self.actor.id}: {results['created']} created, "
            f"{results['skipped']} skipped of {results['total']}"
        )
        return {
            "success": True,
            "message": f"Imported {results['created']} leads",
            "details": results,
        }

    def preview(self, content: str) -> dict:
        return csv_parser.preview_rows(content)
