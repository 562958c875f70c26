"""
Rutas API de Inventario.
Incluye el listado con aviso de stock bajo y el reporte en Excel.
"""
from datetime import datetime
from flask import Blueprint, jsonify, request, send_file, current_app
from perfumeria.models.inventario import Inventario
from perfumeria.services.stock_service import filtrar_stock_bajo
from perfumeria.services.excel_service import generar_reporte_stock_excel
from perfumeria.utils.error_utils import handle_errors, log_request

inventario_bp = Blueprint('inventario', __name__)


def _query_inventario():
    query = Inventario.query
    tipo = request.args.get('tipo', '').strip()
    if tipo:
        query = query.filter(Inventario.tipo.ilike(tipo))
    return query.order_by(Inventario.tipo, Inventario.nombre).all()


@inventario_bp.route('/inventario', methods=['GET'])
@handle_errors
def listar_inventario():
    """
    Lista el inventario con su aviso de stock.
    Query params:
        - tipo: filtrar por tipo (Perfume, Frasco, Etiqueta, Esencia, Insumo)
        - stock_bajo: 'true' para devolver solo items en stock bajo
    """
    items = _query_inventario()
    if request.args.get('stock_bajo', '').lower() in ('1', 'true', 'si'):
        items = filtrar_stock_bajo(items)

    return jsonify([item.to_dict() for item in items])


@inventario_bp.route('/inventario/stock-bajo/excel', methods=['GET'])
@handle_errors
def descargar_stock_bajo_excel():
    """
    Descarga el reporte de stock bajo en Excel (.xlsx).
    """
    items = filtrar_stock_bajo(_query_inventario())
    log_request('stock_bajo_excel', items=len(items))

    excel_buffer = generar_reporte_stock_excel(items, titulo=current_app.config.get('STOCK_REPORT_TITLE'))

    filename = f"stock-bajo-{datetime.now().strftime('%Y-%m-%d')}.xlsx"
    return send_file(
        excel_buffer,
        mimetype='application/vnd.openxmlformats-officedocument.spreadsheetml.sheet',
        as_attachment=True,
        download_name=filename
    )
