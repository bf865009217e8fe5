from enum import Enum


class DisciplineName(str, Enum):
    BASKETBALL = "Koszykówka"
    VOLLEYBALL = "Siatkówka"
    FOOTBALL = "Piłka nożna"


class DocumentType(str, Enum):
    PDF = "PDF"
    FORM = "FORM"
    # Other values pass through as raw strings on Document.file_type
