"""
Rutas API de la Calculadora de Margen.
"""
import logging
from flask import Blueprint, request, current_app
from perfumeria.extensions import db
from perfumeria.models.proveedor import Proveedor
from perfumeria.models.esencia import Esencia
from perfumeria.models.insumo import Insumo
from perfumeria.services.margen_service import (
    InputsGenerales, InsumoCosto, calcular_margen, seleccionar_insumos
)
from perfumeria.utils.error_utils import (
    APIError, ConfigurationError, UpstreamError, handle_errors, success_response,
    log_request, log_operation, validate_required
)

logger = logging.getLogger('perfumeria.api')

calculadora_bp = Blueprint('calculadora', __name__)

CAMPOS_REQUERIDOS = ['precio_esencia', 'moneda', 'gramos_lote', 'margen', 'descuento_mayorista']


def _float(valor):
    return float(valor) if valor is not None else None


def _tasas_para(moneda):
    """
    Cotización del dólar oficial para el cálculo.
    Si la esencia está en USD la tasa es obligatoria; si no, solo se usa
    para mostrar los precios en dólares y se omite si el proveedor falla.
    """
    cache = current_app.extensions['tasas']['dolar']
    if moneda == 'USD':
        return cache.get()
    try:
        return cache.get()
    except UpstreamError as e:
        logger.warning(f"Calculadora sin precios en USD: {e.message}")
        return None


@calculadora_bp.route('/calculadora-margen', methods=['POST'])
@handle_errors
def calcular():
    """
    Calcula precio sugerido y mayorista de un perfume.

    Body JSON:
        - proveedor_id: completa margen y gramos por perfume si no se envían
        - esencia_id o precio_esencia + moneda ('ARS' | 'USD')
        - gramos_lote, margen, descuento_mayorista
        - tipo_frasco: 'femenino' | 'masculino' | 'otro' (default 'femenino')
        - categoria_id: categoría de insumos (requerida si no se envía 'insumos')
        - insumos: lista explícita de insumos (opcional)
        - redondeo: 'cien' | 'mil' (default 'mil')
        - modo: 'precio' | 'costo' (default 'precio')
    """
    data = request.get_json(silent=True)
    if not data:
        raise APIError('Payload JSON requerido', 400)

    log_request('calculadora_margen', proveedor_id=data.get('proveedor_id'), moneda=data.get('moneda'))

    params = dict(data)

    proveedor = None
    if data.get('proveedor_id'):
        proveedor = db.session.get(Proveedor, data['proveedor_id'])
        if not proveedor:
            raise APIError('Proveedor no encontrado', 404)
        if params.get('margen') is None:
            params['margen'] = proveedor.margen_venta
        if params.get('gramos_por_perfume') is None:
            params['gramos_por_perfume'] = proveedor.gramos_configurados

    if data.get('esencia_id') and params.get('precio_esencia') is None:
        esencia = db.session.get(Esencia, data['esencia_id'])
        if not esencia:
            raise APIError('Esencia no encontrada', 404)
        params['precio_esencia'], params['moneda'] = esencia.precio_y_moneda()
        if params.get('categoria_id') is None:
            params['categoria_id'] = esencia.insumos_categorias_id

    params.setdefault('moneda', 'ARS')
    validate_required(params, CAMPOS_REQUERIDOS)

    inputs = InputsGenerales(
        precio_esencia=_float(params['precio_esencia']),
        moneda=params['moneda'],
        gramos_lote=_float(params['gramos_lote']),
        margen=_float(params['margen']),
        descuento_mayorista=_float(params['descuento_mayorista']),
        proveedor_id=params.get('proveedor_id'),
        tipo_frasco=params.get('tipo_frasco', 'femenino'),
        gramos_por_perfume=_float(params.get('gramos_por_perfume')),
        categoria_id=params.get('categoria_id'),
    )

    if 'insumos' in data:
        explicitos = data['insumos']
        if not isinstance(explicitos, list) or not all(isinstance(i, dict) for i in explicitos):
            raise ConfigurationError("'insumos' debe ser una lista de objetos")
        insumos = [InsumoCosto.from_dict(i) for i in explicitos]
    else:
        validate_required(params, ['categoria_id'])
        cargados = Insumo.query.filter_by(insumos_categorias_id=inputs.categoria_id).order_by(Insumo.nombre).all()
        insumos = seleccionar_insumos(
            [i.to_calculo() for i in cargados],
            inputs.proveedor_id, inputs.categoria_id, inputs.tipo_frasco
        )

    resultado = calcular_margen(
        inputs, insumos,
        tasas=_tasas_para(inputs.moneda),
        redondeo=params.get('redondeo', 'mil'),
        modo=params.get('modo', 'precio'),
    )

    log_operation('calcular_margen', costo_total=resultado.costo_total,
                  precio_sugerido=resultado.precio_sugerido_redondeado, insumos=len(insumos))
    return success_response(resultado.to_dict())
