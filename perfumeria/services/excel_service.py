"""
Servicio de generación de Excel para el reporte de stock bajo.
Arma una planilla con los items que alcanzaron su umbral de reposición.
"""
import openpyxl
from openpyxl.styles import Font, PatternFill, Alignment
from openpyxl.utils import get_column_letter
from io import BytesIO
from datetime import datetime

from perfumeria.services.stock_service import meta_de_item

COLUMNAS = ['Nombre', 'Tipo', 'Cantidad', 'Umbral']
ANCHOS = [40, 14, 12, 12]

FILL_ENCABEZADO = PatternFill(start_color='09090B', end_color='09090B', fill_type='solid')
FONT_ENCABEZADO = Font(bold=True, color='FFFFFF')
FONT_CRITICO = Font(bold=True, color='D32F2F')


def _valor(item, campo):
    if isinstance(item, dict):
        return item.get(campo)
    return getattr(item, campo, None)


def generar_reporte_stock_excel(items, titulo=None) -> BytesIO:
    """
    Genera el reporte de stock bajo.

    Args:
        items: Items de inventario (modelos o dicts) ya filtrados por stock bajo
        titulo: Título de la primera fila

    Returns:
        BytesIO: Buffer con el archivo Excel listo para descarga
    """
    wb = openpyxl.Workbook()
    ws = wb.active
    ws.title = 'Stock Bajo'

    # =========================================================================
    # 1. CABECERA (Filas 1-3)
    # =========================================================================
    ws['A1'] = titulo or 'Reporte de Stock Bajo'
    ws['A1'].font = Font(bold=True, size=14)
    ws['A2'] = f"Generado: {datetime.now().strftime('%d/%m/%Y %H:%M')} - {len(items)} items"

    for col, (nombre, ancho) in enumerate(zip(COLUMNAS, ANCHOS), start=1):
        celda = ws.cell(row=3, column=col, value=nombre)
        celda.font = FONT_ENCABEZADO
        celda.fill = FILL_ENCABEZADO
        celda.alignment = Alignment(horizontal='center')
        ws.column_dimensions[get_column_letter(col)].width = ancho

    # =========================================================================
    # 2. ITEMS (desde fila 4)
    # =========================================================================
    for i, item in enumerate(items):
        row = 4 + i
        ws.cell(row=row, column=1, value=_valor(item, 'nombre'))
        ws.cell(row=row, column=2, value=_valor(item, 'tipo'))
        ws.cell(row=row, column=3, value=_valor(item, 'cantidad') or 0).font = FONT_CRITICO
        ws.cell(row=row, column=4, value=meta_de_item(item).threshold)

    ws.freeze_panes = 'A4'

    output = BytesIO()
    wb.save(output)
    output.seek(0)

    return output
