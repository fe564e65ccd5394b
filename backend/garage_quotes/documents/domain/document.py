"""Modèle de document indépendant du moteur de rendu.

Un `QuoteDocument` est une liste ordonnée de sections (en-tête, métadonnées,
client, véhicule, tableau des prestations, total, pied de page). Le moteur
PDF le consomme tel quel; ce module ne fait aucune entrée/sortie.
"""
import base64
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class SectionKind(str, Enum):
    HEADER = "header"
    METADATA = "metadata"
    CLIENT = "client"
    VEHICLE = "vehicle"
    SERVICES = "services"
    TOTAL = "total"
    FOOTER = "footer"


class EmbeddedImage(BaseModel):
    """Image embarquée (logo) pour éviter tout accès réseau au rendu."""
    model_config = ConfigDict(ser_json_bytes="base64")

    content: bytes = Field(..., repr=False)
    mime_type: str = "image/png"

    @classmethod
    def from_bytes(cls, content: bytes) -> "EmbeddedImage":
        """Devine le type MIME à partir de la signature du fichier."""
        if content.startswith(b"\xff\xd8"):
            mime_type = "image/jpeg"
        elif content[:6] in (b"GIF87a", b"GIF89a"):
            mime_type = "image/gif"
        else:
            mime_type = "image/png"
        return cls(content=content, mime_type=mime_type)

    @property
    def data_uri(self) -> str:
        encoded = base64.b64encode(self.content).decode("ascii")
        return f"data:{self.mime_type};base64,{encoded}"


class DocumentField(BaseModel):
    label: str
    value: str


class DocumentTableRow(BaseModel):
    description: str
    sub_line: Optional[str] = Field(None, description="Sous-ligne en italique")
    amount: str
    shaded: bool = Field(False, description="Indication de présentation (lignes alternées)")


class DocumentSection(BaseModel):
    kind: SectionKind
    title: Optional[str] = None
    fields: List[DocumentField] = Field(default_factory=list)
    columns: List[str] = Field(default_factory=list)
    rows: List[DocumentTableRow] = Field(default_factory=list)
    notes: List[str] = Field(default_factory=list)
    footnotes: List[str] = Field(default_factory=list)

    def field_value(self, label: str) -> Optional[str]:
        for field in self.fields:
            if field.label == label:
                return field.value
        return None


class QuoteDocument(BaseModel):
    title: str
    quote_number: str
    logo: Optional[EmbeddedImage] = None
    sections: List[DocumentSection]

    def section(self, kind: SectionKind) -> DocumentSection:
        for section in self.sections:
            if section.kind == kind:
                return section
        raise KeyError(kind)
