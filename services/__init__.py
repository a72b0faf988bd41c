"""
services - Business-logic layer sitting between API/engine and DB.
"""

from services.sequence_service import next_primary_key       # noqa: F401
from services.template_service import TemplateService        # noqa: F401
