"""Expert directory: executes a DirectoryQuery against the experts table."""

import asyncio
from typing import Any

from sqlalchemy import Engine, Select, and_, func, or_, select
from sqlalchemy.exc import SQLAlchemyError

from db.tables import experts
from matching.filters import TEXT_SEARCH_FIELDS, DirectoryQuery
from models.errors import DirectoryQueryError
from utils.logger import get_logger

logger = get_logger(__name__)

LIKE_ESCAPE = "\\"


def _contains_pattern(value: str) -> str:
    """ILIKE pattern matching ``value`` literally anywhere in the column."""
    escaped = (
        value.replace(LIKE_ESCAPE, LIKE_ESCAPE * 2)
        .replace("%", LIKE_ESCAPE + "%")
        .replace("_", LIKE_ESCAPE + "_")
    )
    return f"%{escaped}%"


def _ilike(column, value: str):
    return column.ilike(_contains_pattern(value), escape=LIKE_ESCAPE)


def build_statement(query: DirectoryQuery) -> Select:
    """
    Compile a DirectoryQuery into a SELECT over the experts table.

    Each populated group becomes one AND-ed condition; ORs only occur inside
    the free-text and specialty groups.
    """
    conditions = []

    if query.active_only:
        conditions.append(experts.c.is_active.is_(True))

    if query.text:
        conditions.append(or_(*(_ilike(experts.c[name], query.text) for name in TEXT_SEARCH_FIELDS)))

    if query.specialties:
        conditions.append(
            or_(*(_ilike(experts.c.specialization, specialty) for specialty in query.specialties))
        )

    if query.location:
        conditions.append(_ilike(experts.c.location, query.location))

    if query.min_experience is not None:
        conditions.append(experts.c.years_of_experience >= query.min_experience)
    if query.max_experience is not None:
        conditions.append(experts.c.years_of_experience <= query.max_experience)

    if query.min_rate is not None:
        conditions.append(experts.c.hourly_rate >= query.min_rate)
    if query.max_rate is not None:
        conditions.append(experts.c.hourly_rate <= query.max_rate)

    if query.trial_testimony_required:
        conditions.append(experts.c.has_trial_experience.is_(True))

    if query.languages:
        conditions.append(experts.c.languages.contains(list(query.languages)))

    if query.certifications:
        conditions.append(
            _ilike(func.array_to_string(experts.c.certifications, " "), query.certifications)
        )

    order_column = experts.c[query.order_by]
    order = order_column.desc() if query.descending else order_column.asc()

    statement = select(experts)
    if conditions:
        statement = statement.where(and_(*conditions))
    return statement.order_by(order.nulls_last()).limit(query.limit)


class ExpertDirectory:
    """
    Read-only access to the expert directory.

    Failures of any kind surface as DirectoryQueryError so callers can tell
    "the query failed" apart from "nothing matched".
    """

    def __init__(
        self,
        engine: Engine | None = None,
        timeout_s: float = 10.0,
        database_url: str | None = None,
    ):
        """
        Args:
            engine: SQLAlchemy engine; defaults to the process engine from db.engine
            timeout_s: Upper bound for one directory query
            database_url: Used to build the process engine when ``engine`` is None
        """
        self._engine = engine
        self.timeout_s = timeout_s
        self.database_url = database_url

    def _get_engine(self) -> Engine:
        if self._engine is None:
            from db.engine import get_engine

            try:
                self._engine = get_engine(self.database_url)
            except ValueError as e:
                logger.error(f"Expert directory not configured: {e}")
                raise DirectoryQueryError(
                    "Expert directory not configured", details="Set DATABASE_URL"
                ) from e
        return self._engine

    def search(self, query: DirectoryQuery) -> list[dict[str, Any]]:
        statement = build_statement(query)
        engine = self._get_engine()

        try:
            with engine.connect() as conn:
                rows = conn.execute(statement).mappings().all()
        except SQLAlchemyError as e:
            logger.error(
                f"Database query failed: {e}",
                exc_info=True,
                extra={"extra_fields": {"query": query.describe()}},
            )
            raise DirectoryQueryError(f"Database query failed: {e.__class__.__name__}") from e

        logger.debug(f"Directory returned {len(rows)} experts")
        return [dict(row) for row in rows]

    async def search_async(self, query: DirectoryQuery) -> list[dict[str, Any]]:
        """Run search() in a worker thread, bounded by timeout_s."""
        try:
            return await asyncio.wait_for(asyncio.to_thread(self.search, query), timeout=self.timeout_s)
        except asyncio.TimeoutError as e:
            logger.error(f"Database query timed out after {self.timeout_s}s")
            raise DirectoryQueryError("Database query timed out") from e
