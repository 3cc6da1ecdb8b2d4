"""
Drug store – the only component that touches the drugs table.

A DrugStore is constructed explicitly (by create_app() or an operator
script) around a SQLAlchemy session and passed to whoever needs it.
Every database failure is re-raised as StorageUnavailableError.
"""

import logging
from dataclasses import dataclass, field
from typing import Iterable, NoReturn, Optional

from flask import current_app
from sqlalchemy import delete, func, select, text
from sqlalchemy.exc import SQLAlchemyError

from druglist.errors import StorageUnavailableError
from druglist.models.models import Drug
from druglist.services.drug_normalizer import CanonicalDrugRecord

logger = logging.getLogger("druglist.store")

MAX_PAGE_SIZE = 100


@dataclass
class DrugPage:
    rows: list[Drug] = field(default_factory=list)
    total: int = 0


def clamp_page_size(page_size: int) -> int:
    return min(MAX_PAGE_SIZE, max(1, page_size))


class DrugStore:
    """Repository over the drugs table."""

    def __init__(self, session):
        self.session = session

    def replace_all(self, records: Iterable[CanonicalDrugRecord]) -> int:
        """
        Delete every row and insert *records* in order, in one transaction.
        Returns the number of rows inserted. On failure nothing changes.
        """
        rows = [
            Drug(
                code=r.code,
                generic_name=r.generic_name,
                brand_name=r.brand_name,
                company=r.company,
                launch_date=r.launch_date,
            )
            for r in records
        ]
        try:
            self.session.execute(delete(Drug))
            # add_all keeps insertion order, so ids follow input order
            self.session.add_all(rows)
            self.session.commit()
        except SQLAlchemyError as exc:
            self.session.rollback()
            logger.error("Bulk load of %d drugs failed: %s", len(rows), exc)
            raise StorageUnavailableError(f"Failed to load drugs: {exc}") from exc

        logger.info("Replaced drugs table with %d records", len(rows))
        return len(rows)

    def list_companies(self) -> list[str]:
        stmt = select(Drug.company).distinct().order_by(Drug.company)
        try:
            return list(self.session.execute(stmt).scalars())
        except SQLAlchemyError as exc:
            self._read_failed("list companies", exc)

    def query(self, company: Optional[str] = None, page: int = 1, page_size: int = 50) -> DrugPage:
        """One page of drugs, newest launch first, plus the total matching count."""
        page = max(1, page)
        page_size = clamp_page_size(page_size)
        offset = (page - 1) * page_size

        count_stmt = select(func.count(Drug.id))
        rows_stmt = select(Drug)
        if company:
            count_stmt = count_stmt.where(Drug.company == company)
            rows_stmt = rows_stmt.where(Drug.company == company)
        rows_stmt = (
            rows_stmt
            .order_by(Drug.launch_date.desc(), Drug.id.asc())
            .limit(page_size)
            .offset(offset)
        )

        try:
            total = self.session.execute(count_stmt).scalar_one()
            rows = list(self.session.execute(rows_stmt).scalars())
        except SQLAlchemyError as exc:
            self._read_failed("query drugs", exc)
        return DrugPage(rows=rows, total=total)

    def count(self) -> int:
        try:
            return self.session.execute(select(func.count(Drug.id))).scalar_one()
        except SQLAlchemyError as exc:
            self._read_failed("count drugs", exc)

    def sample(self, n: int = 3) -> list[Drug]:
        try:
            return list(self.session.execute(select(Drug).order_by(Drug.id).limit(n)).scalars())
        except SQLAlchemyError as exc:
            self._read_failed("sample drugs", exc)

    def ping(self) -> None:
        try:
            self.session.execute(text("SELECT 1"))
        except SQLAlchemyError as exc:
            self._read_failed("reach the database", exc)

    def close(self) -> None:
        """Release the session; scoped sessions are removed, plain ones closed."""
        remove = getattr(self.session, "remove", None)
        if callable(remove):
            remove()
        else:
            self.session.close()

    def _read_failed(self, action: str, exc: Exception) -> NoReturn:
        self.session.rollback()
        logger.error("Could not %s: %s", action, exc)
        raise StorageUnavailableError(f"Could not {action}: {exc}") from exc


def current_store() -> DrugStore:
    """The DrugStore owned by the running Flask app."""
    return current_app.extensions["drug_store"]
