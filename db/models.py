"""
db.models - SQLAlchemy ORM declarations.

Tables
------
AD_Table            - application dictionary: one row per physical table.
AD_Tab              - window tab bound to a table; import templates point here.
AD_Column           - dictionary columns with their display type and length.
AD_Sequence         - table-scoped primary-key sequences (IsTableID='Y').
AIT_ImportTemplate  - stored import definition: target tab, optional header
                      definition and default client/org for inserted rows.

Column names follow the ERP dictionary (mixed case, ``*_ID`` keys) because
the import engine addresses these tables with dynamically built SQL.
"""

from __future__ import annotations

import uuid
from datetime import datetime, timezone

from sqlalchemy import (
    Column, String, Integer, DateTime, Text, ForeignKey, Index,
)
from sqlalchemy.orm import DeclarativeBase, relationship


def _now():
    return datetime.now(timezone.utc)


class Base(DeclarativeBase):
    pass


class ADTable(Base):
    __tablename__ = "AD_Table"

    id         = Column("AD_Table_ID", Integer, primary_key=True)
    table_name = Column("TableName", String(40), nullable=False, unique=True)
    name       = Column("Name", String(60), default="")
    is_active  = Column("IsActive", String(1), default="Y")

    columns = relationship(
        "ADColumn", back_populates="table",
        cascade="all, delete-orphan", lazy="selectin",
    )
    tabs = relationship("ADTab", back_populates="table")


class ADTab(Base):
    __tablename__ = "AD_Tab"

    id       = Column("AD_Tab_ID", Integer, primary_key=True)
    table_id = Column("AD_Table_ID", Integer,
                      ForeignKey("AD_Table.AD_Table_ID"), nullable=True)
    name     = Column("Name", String(60), default="")

    table = relationship("ADTable", back_populates="tabs")


class ADColumn(Base):
    __tablename__ = "AD_Column"

    id             = Column("AD_Column_ID", Integer, primary_key=True)
    table_id       = Column("AD_Table_ID", Integer,
                            ForeignKey("AD_Table.AD_Table_ID", ondelete="CASCADE"),
                            nullable=False, index=True)
    column_name    = Column("ColumnName", String(40), nullable=False)
    reference_id   = Column("AD_Reference_ID", Integer, nullable=False)   # display type
    field_length   = Column("FieldLength", Integer, default=0)
    is_key         = Column("IsKey", String(1), default="N")

    table = relationship("ADTable", back_populates="columns")

    __table_args__ = (
        Index("ix_column_lookup", "AD_Table_ID", "ColumnName"),
    )


class ADSequence(Base):
    __tablename__ = "AD_Sequence"

    id            = Column("AD_Sequence_ID", Integer, primary_key=True)
    name          = Column("Name", String(60), nullable=False, index=True)   # table name
    is_table_id   = Column("IsTableID", String(1), default="Y")
    current_next  = Column("CurrentNext", Integer, nullable=False, default=1000000)
    increment_no  = Column("IncrementNo", Integer, nullable=False, default=1)


class ImportTemplate(Base):
    __tablename__ = "AIT_ImportTemplate"

    id          = Column("AIT_ImportTemplate_ID", Integer, primary_key=True)
    client_id   = Column("AD_Client_ID", Integer, nullable=False, default=0)
    org_id      = Column("AD_Org_ID", Integer, nullable=False, default=0)
    name        = Column("Name", String(60), nullable=False)
    description = Column("Description", String(255), default="")
    window_id   = Column("AD_Window_ID", Integer, nullable=True)
    tab_id      = Column("AD_Tab_ID", Integer,
                         ForeignKey("AD_Tab.AD_Tab_ID"), nullable=True)
    header_csv  = Column("AIT_HeaderCSV", Text, nullable=True)   # comma-separated tokens
    uuid        = Column("UUID", String(36), default=lambda: str(uuid.uuid4()))
    is_active   = Column("IsActive", String(1), default="Y")

    created     = Column("Created", DateTime, default=_now)
    created_by  = Column("CreatedBy", Integer, default=0)
    updated     = Column("Updated", DateTime, default=_now, onupdate=_now)
    updated_by  = Column("UpdatedBy", Integer, default=0)

    tab = relationship("ADTab")

    # ── Serialisation ──────────────────────────────────────────────────
    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description or "",
            "client_id": self.client_id or 0,
            "org_id": self.org_id or 0,
            "window_id": self.window_id,
            "tab_id": self.tab_id,
            "header_csv": self.header_csv or "",
            "uuid": self.uuid or "",
            "created": self.created.isoformat() if self.created else "",
        }
