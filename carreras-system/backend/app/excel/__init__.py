"""Spreadsheet exports."""

from app.excel.writer import build_carreras_workbook

__all__ = ["build_carreras_workbook"]
