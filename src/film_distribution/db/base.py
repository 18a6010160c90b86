"""
Declarative base and portable column types shared by all models
"""
from sqlalchemy import JSON, String
from sqlalchemy.dialects.postgresql import ARRAY, JSONB
from sqlalchemy.orm import declarative_base

Base = declarative_base()

# JSONB on PostgreSQL, plain JSON elsewhere
JSONType = JSON().with_variant(JSONB(), "postgresql")

# text[] on PostgreSQL, stored as a JSON list on SQLite
StringArray = ARRAY(String).with_variant(JSON(), "sqlite")
