"""Export-Modul: JSON, Excel (openpyxl) und PDF (fpdf2) für Stundenpläne."""

from export.excel_export import ExcelExporter
from export.pdf_export import PdfExporter
from export.json_export import (
    load_schedule_json, save_schedule_json, schedule_to_clipboard_json,
    schedule_to_export_dict,
)

__all__ = [
    "ExcelExporter", "PdfExporter",
    "load_schedule_json", "save_schedule_json",
    "schedule_to_clipboard_json", "schedule_to_export_dict",
]
