from datetime import datetime
from typing import Optional

from pydantic import BaseModel, computed_field

from .enums import DocumentType


class Document(BaseModel):
    """A downloadable file or form listed on the documents sheet."""

    id: str
    name: str
    description: str = "Brak opisu"
    file_url: str = "#"
    file_type: str = DocumentType.PDF.value
    raw_date: Optional[str] = None  # As delivered by the sheet
    date: Optional[datetime] = None  # Parsed from raw_date, if possible

    @computed_field  # type: ignore[misc]
    @property
    def is_form(self) -> bool:
        """Forms open in a new tab instead of being downloaded."""
        return self.file_type.upper() == DocumentType.FORM.value
