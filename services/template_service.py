"""
services.template_service - Access to stored import templates.

All session management is the caller's responsibility (open before,
close/commit after).
"""

from __future__ import annotations

from typing import Optional

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from db.models import ImportTemplate


class TemplateService:

    @staticmethod
    def get(session: Session, template_id: int) -> Optional[ImportTemplate]:
        if not template_id or template_id <= 0:
            return None
        return session.get(ImportTemplate, template_id)

    @staticmethod
    def list_active(session: Session, *, limit: int = 100, offset: int = 0,
                    ) -> tuple[list[ImportTemplate], int]:
        """Active templates ordered by name, plus the total count."""
        base = select(ImportTemplate).where(ImportTemplate.is_active == "Y")
        total = session.execute(
            select(func.count()).select_from(base.subquery())
        ).scalar_one()
        rows = session.execute(
            base.order_by(ImportTemplate.name).limit(limit).offset(offset)
        ).scalars().all()
        return list(rows), total

    @staticmethod
    def header_tokens(template: ImportTemplate) -> Optional[list[str]]:
        """
        Tokens of the template's own header definition, or None.

        The stored definition always uses "," whatever separator the
        data file uses.
        """
        header = template.header_csv
        if header is None or not header.strip():
            return None
        return header.split(",")
