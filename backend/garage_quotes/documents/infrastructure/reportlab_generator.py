import io
import logging
import os
from typing import List, Optional
from xml.sax.saxutils import escape

# ReportLab Imports
from reportlab.lib import colors
from reportlab.lib.enums import TA_CENTER, TA_RIGHT
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
from reportlab.lib.units import inch, mm
from reportlab.lib.utils import ImageReader
from reportlab.platypus import HRFlowable, Image, Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle

# Domain
from garage_quotes.documents.config import DocumentSettings
from garage_quotes.documents.domain.document import (
    DocumentSection,
    EmbeddedImage,
    QuoteDocument,
    SectionKind,
)
from garage_quotes.documents.domain.exceptions import PDFGenerationException
from garage_quotes.documents.domain.generator import AbstractPDFGenerator

logger = logging.getLogger(__name__)

LOGO_MAX_WIDTH = 2.3 * inch


class ReportLabPDFGenerator(AbstractPDFGenerator):
    """Implémentation du générateur PDF utilisant ReportLab."""

    def __init__(self, settings: DocumentSettings):
        self.settings = settings
        self.primary = colors.HexColor(settings.PRIMARY_COLOR_HEX)
        self.dark = colors.HexColor(settings.DARK_COLOR_HEX)
        self.accent = colors.HexColor(settings.ACCENT_COLOR_HEX)
        self.muted = colors.HexColor(settings.MUTED_COLOR_HEX)
        self.zebra = colors.HexColor(settings.ZEBRA_COLOR_HEX)
        self.border = colors.HexColor(settings.BORDER_COLOR_HEX)
        self._styles = self._build_styles()
        logger.info("[ReportLabPDFGenerator] Initialisé.")

    def _build_styles(self) -> dict:
        base = getSampleStyleSheet()
        normal = ParagraphStyle(name="QuoteNormal", parent=base["Normal"], fontSize=10, textColor=self.dark)
        return {
            "normal": normal,
            "brand": ParagraphStyle(name="Brand", parent=base["Heading1"], alignment=TA_CENTER, textColor=self.dark),
            "centered_muted": ParagraphStyle(name="CenteredMuted", parent=normal, alignment=TA_CENTER, fontSize=9, textColor=self.muted),
            "band_label": ParagraphStyle(name="BandLabel", parent=normal, fontSize=8, textColor=colors.HexColor("#A8DADC")),
            "band_value": ParagraphStyle(name="BandValue", parent=normal, fontName="Helvetica-Bold", fontSize=13, textColor=colors.white),
            "box_title": ParagraphStyle(name="BoxTitle", parent=normal, fontName="Helvetica-Bold", textColor=self.primary, spaceAfter=4),
            "section_title": ParagraphStyle(name="SectionTitle", parent=normal, fontName="Helvetica-Bold", fontSize=11, textColor=self.primary, spaceAfter=6),
            "cell": normal,
            "cell_sub": ParagraphStyle(name="CellSub", parent=normal, fontName="Helvetica-Oblique", fontSize=8, textColor=self.muted),
            "amount": ParagraphStyle(name="Amount", parent=normal, fontName="Helvetica-Bold", alignment=TA_RIGHT),
            "header_cell": ParagraphStyle(name="HeaderCell", parent=normal, fontName="Helvetica-Bold", textColor=colors.white),
            "total_label": ParagraphStyle(name="TotalLabel", parent=normal, fontName="Helvetica-Bold", fontSize=12, textColor=colors.white),
            "total_value": ParagraphStyle(name="TotalValue", parent=normal, fontName="Helvetica-Bold", fontSize=18, leading=22, alignment=TA_RIGHT, textColor=colors.white),
            "footer_note": ParagraphStyle(name="FooterNote", parent=normal, alignment=TA_CENTER, fontName="Helvetica-Oblique", fontSize=8, textColor=self.muted),
        }

    async def generate_quote_pdf(
        self,
        document: QuoteDocument,
        output_path: Optional[str] = None
    ) -> bytes:
        quote_number = document.quote_number
        logger.info(f"[PDFGen] Génération PDF devis #{quote_number}")

        buffer = io.BytesIO()  # Buffer mémoire pour le PDF
        margin = self.settings.PAGE_MARGIN_MM * mm
        doc = SimpleDocTemplate(
            buffer,
            pagesize=A4,
            leftMargin=margin,
            rightMargin=margin,
            topMargin=margin,
            bottomMargin=margin,
            title=document.title,
        )

        try:
            elements = []
            for section in document.sections:
                elements.extend(self._render_section(section, document, doc.width))
            doc.build(elements)
            pdf_bytes = buffer.getvalue()
        except Exception as e:
            logger.error(f"[PDFGen] Erreur ReportLab build() pour devis #{quote_number}: {e}", exc_info=True)
            raise PDFGenerationException(f"Erreur lors de la construction du PDF: {e}", original_exception=e)
        finally:
            buffer.close()

        logger.info(f"[PDFGen] PDF devis #{quote_number} généré en mémoire ({len(pdf_bytes)} bytes).")
        if output_path:
            self._save(pdf_bytes, output_path, quote_number)
        return pdf_bytes

    def _save(self, pdf_bytes: bytes, output_path: str, quote_number: str) -> None:
        """Écrit le PDF; un fichier partiel est supprimé en cas d'échec."""
        try:
            output_dir = os.path.dirname(output_path)
            if output_dir:
                os.makedirs(output_dir, exist_ok=True)
            with open(output_path, "wb") as f:
                f.write(pdf_bytes)
            logger.info(f"[PDFGen] PDF devis #{quote_number} sauvegardé dans: {output_path}")
        except OSError as save_err:
            logger.error(f"[PDFGen] Erreur sauvegarde PDF dans {output_path}: {save_err}", exc_info=True)
            if os.path.exists(output_path):
                os.remove(output_path)
            raise PDFGenerationException(f"Impossible d'écrire {output_path}", original_exception=save_err)

    # --- Sections ---

    def _render_section(self, section: DocumentSection, document: QuoteDocument, width: float) -> List:
        if section.kind == SectionKind.HEADER:
            return self._header(section, document.logo)
        if section.kind == SectionKind.METADATA:
            return self._metadata_band(section, width)
        if section.kind in (SectionKind.CLIENT, SectionKind.VEHICLE):
            # Les blocs client et véhicule sont rendus côte à côte
            if section.kind == SectionKind.CLIENT:
                vehicle = document.section(SectionKind.VEHICLE)
                return self._info_boxes([section, vehicle], width)
            return []
        if section.kind == SectionKind.SERVICES:
            return self._services_table(section, width)
        if section.kind == SectionKind.TOTAL:
            return self._total_banner(section, width)
        if section.kind == SectionKind.FOOTER:
            return self._footer(section)
        logger.warning(f"[PDFGen] Section inconnue ignorée: {section.kind}")
        return []

    def _header(self, section: DocumentSection, logo: Optional[EmbeddedImage]) -> List:
        elements = []
        logo_flowable = self._logo_flowable(logo) if logo else None
        if logo_flowable is not None:
            elements.append(logo_flowable)
        else:
            elements.append(Paragraph(escape((section.title or "").upper()), self._styles["brand"]))
        for note in section.notes:
            elements.append(Paragraph(escape(note), self._styles["centered_muted"]))
        elements.append(Spacer(1, 0.1 * inch))
        elements.append(HRFlowable(width="100%", thickness=3, color=self.accent))
        elements.append(Spacer(1, 0.2 * inch))
        return elements

    def _logo_flowable(self, logo: EmbeddedImage) -> Optional[Image]:
        try:
            reader = ImageReader(io.BytesIO(logo.content))
            img_width, img_height = reader.getSize()
            width = min(LOGO_MAX_WIDTH, float(img_width))
            height = width * img_height / img_width
            flowable = Image(io.BytesIO(logo.content), width=width, height=height)
            flowable.hAlign = "CENTER"
            return flowable
        except Exception as img_err:
            logger.error(f"[PDFGen] Erreur chargement logo: {img_err}. Utilisation titre.", exc_info=True)
            return None

    def _metadata_band(self, section: DocumentSection, width: float) -> List:
        cells = []
        for field in section.fields:
            cells.append([
                Paragraph(escape(field.label.upper()), self._styles["band_label"]),
                Paragraph(escape(field.value), self._styles["band_value"]),
            ])
        band = Table([cells], colWidths=[width / max(len(cells), 1)] * len(cells))
        band.setStyle(TableStyle([
            ("BACKGROUND", (0, 0), (-1, -1), self.primary),
            ("VALIGN", (0, 0), (-1, -1), "MIDDLE"),
            ("LEFTPADDING", (0, 0), (-1, -1), 14),
            ("TOPPADDING", (0, 0), (-1, -1), 10),
            ("BOTTOMPADDING", (0, 0), (-1, -1), 10),
        ]))
        return [band, Spacer(1, 0.2 * inch)]

    def _info_boxes(self, sections: List[DocumentSection], width: float) -> List:
        boxes = []
        for section in sections:
            content = [Paragraph(escape((section.title or "").upper()), self._styles["box_title"])]
            for field in section.fields:
                content.append(Paragraph(
                    f"<b>{escape(field.label)}:</b> {escape(field.value)}",
                    self._styles["normal"],
                ))
            boxes.append(content)
        gap = 0.15 * inch
        box_width = (width - gap) / 2
        table = Table([[boxes[0], "", boxes[1]]], colWidths=[box_width, gap, box_width])
        table.setStyle(TableStyle([
            ("BACKGROUND", (0, 0), (0, 0), self.zebra),
            ("BACKGROUND", (2, 0), (2, 0), self.zebra),
            ("LINEBEFORE", (0, 0), (0, 0), 4, self.primary),
            ("LINEBEFORE", (2, 0), (2, 0), 4, self.primary),
            ("VALIGN", (0, 0), (-1, -1), "TOP"),
            ("TOPPADDING", (0, 0), (-1, -1), 10),
            ("BOTTOMPADDING", (0, 0), (-1, -1), 10),
            ("LEFTPADDING", (0, 0), (-1, -1), 12),
        ]))
        return [table, Spacer(1, 0.2 * inch)]

    def _services_table(self, section: DocumentSection, width: float) -> List:
        header = [Paragraph(escape(col.upper()), self._styles["header_cell"]) for col in section.columns]
        table_data = [header]
        style_commands = [
            ("BACKGROUND", (0, 0), (-1, 0), self.primary),
            ("VALIGN", (0, 0), (-1, -1), "TOP"),
            ("LINEBELOW", (0, 1), (-1, -1), 0.5, self.border),
            ("BOX", (0, 0), (-1, -1), 0.5, self.border),
            ("TOPPADDING", (0, 0), (-1, -1), 8),
            ("BOTTOMPADDING", (0, 0), (-1, -1), 8),
        ]
        for row_index, row in enumerate(section.rows, start=1):
            description = [Paragraph(f"<b>{escape(row.description)}</b>", self._styles["cell"])]
            if row.sub_line:
                description.append(Paragraph(escape(row.sub_line), self._styles["cell_sub"]))
            table_data.append([description, Paragraph(escape(row.amount), self._styles["amount"])])
            if row.shaded:
                style_commands.append(("BACKGROUND", (0, row_index), (-1, row_index), self.zebra))

        table = Table(table_data, colWidths=[width * 0.72, width * 0.28], repeatRows=1)
        table.setStyle(TableStyle(style_commands))
        return [
            Paragraph(escape((section.title or "").upper()), self._styles["section_title"]),
            table,
            Spacer(1, 0.2 * inch),
        ]

    def _total_banner(self, section: DocumentSection, width: float) -> List:
        field = section.fields[0]
        banner = Table(
            [[
                Paragraph(escape(field.label.upper()), self._styles["total_label"]),
                Paragraph(escape(field.value), self._styles["total_value"]),
            ]],
            colWidths=[width * 0.5, width * 0.5],
        )
        banner.setStyle(TableStyle([
            ("BACKGROUND", (0, 0), (-1, -1), self.accent),
            ("VALIGN", (0, 0), (-1, -1), "MIDDLE"),
            ("TOPPADDING", (0, 0), (-1, -1), 14),
            ("BOTTOMPADDING", (0, 0), (-1, -1), 14),
            ("LEFTPADDING", (0, 0), (-1, -1), 16),
            ("RIGHTPADDING", (0, 0), (-1, -1), 16),
        ]))
        return [banner, Spacer(1, 0.3 * inch)]

    def _footer(self, section: DocumentSection) -> List:
        elements = [Paragraph(f"<b>{escape(section.title or '')}</b>", self._styles["centered_muted"])]
        for note in section.notes:
            elements.append(Paragraph(escape(note), self._styles["centered_muted"]))
        if section.footnotes:
            elements.append(Spacer(1, 0.08 * inch))
            elements.append(Paragraph("<br/>".join(escape(n) for n in section.footnotes), self._styles["footer_note"]))
        return elements
