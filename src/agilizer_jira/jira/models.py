"""
models.py

Pydantic model for the issue payload returned by the Jira client.
"""

from typing import Any, Dict, Optional

from pydantic import BaseModel, Field


class Issue(BaseModel):
    """
    A Jira issue as returned by the "get issue" endpoint.

    Only the key is interpreted here; the raw field map is kept as-is so the
    orchestration layer can read custom fields without this model knowing them.
    """

    key: str = Field(..., description="Stable external identifier (e.g. PROJ-123)")
    fields: Dict[str, Any] = Field(default_factory=dict, description="Raw Jira field map")

    def field(self, name: str, default: Optional[Any] = None) -> Any:
        return self.fields.get(name, default)
