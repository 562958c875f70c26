"""
Rutas API de cotizaciones.
Cada endpoint sirve el cache de su proveedor y solo consulta afuera cuando venció.
"""
import logging
from flask import Blueprint, jsonify, current_app
from perfumeria.utils.error_utils import UpstreamError, log_request

logger = logging.getLogger('perfumeria.api')

tasas_bp = Blueprint('tasas', __name__)


def _servir_cache(nombre):
    cache = current_app.extensions['tasas'][nombre]
    log_request(f'tasas_{nombre}', vigente=cache.is_fresh())
    try:
        return jsonify(cache.get())
    except UpstreamError as e:
        logger.error(f"Error fetching rates ({nombre}): {e.message}")
        return jsonify({'error': 'API error'}), 500


@tasas_bp.route('/dolar', methods=['GET'])
def obtener_dolar():
    """
    Dólar oficial (venta) desde DolarApi.
    Respuesta: {"ARS": <pesos por dólar>}
    """
    return _servir_cache('dolar')


@tasas_bp.route('/exchange-rate', methods=['GET'])
def obtener_exchange_rate():
    """
    Tasas con base USD desde ExchangeRate-API.
    Respuesta: {"USD": 1, "ARS": ..., "EUR": ..., ...}
    """
    return _servir_cache('exchange')
