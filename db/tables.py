"""
Table definitions for the columns this service reads from the expert directory.

CRITICAL: This module does NOT create tables. The directory schema is owned
by the hosted database; these definitions only describe it for query building.
"""

import os

from sqlalchemy import (
    Boolean,
    Column,
    DateTime,
    Integer,
    MetaData,
    Numeric,
    Table,
    Text,
    Uuid,
)
from sqlalchemy.dialects.postgresql import ARRAY

DB_SCHEMA = os.getenv("DB_SCHEMA", "public")

metadata = MetaData(schema=DB_SCHEMA)

experts = Table(
    "experts",
    metadata,
    Column("id", Uuid(as_uuid=False), primary_key=True),
    Column("full_name", Text, nullable=False),
    Column("specialization", Text),
    Column("bio", Text),
    Column("location", Text),
    Column("years_of_experience", Integer),
    Column("hourly_rate", Numeric(10, 2)),
    Column("rating", Numeric(3, 2)),
    Column("review_count", Integer),
    Column("case_count", Integer),
    Column("languages", ARRAY(Text)),
    Column("certifications", ARRAY(Text)),
    Column("education", ARRAY(Text)),
    Column("has_trial_experience", Boolean),
    Column("is_active", Boolean, nullable=False),
    Column("contact_status", Text),
    Column("contact_email", Text),
    Column("contact_phone", Text),
    Column("linkedin_url", Text),
    Column("profile_url", Text),
    Column("created_at", DateTime(timezone=True)),
)
