"""Shared metadata for all tables."""

from sqlalchemy import MetaData

# Single metadata so cross-table foreign keys resolve on create_all
metadata = MetaData()
