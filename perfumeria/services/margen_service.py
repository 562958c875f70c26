"""
Calculadora de margen para perfumes fraccionados.

Combina el costo de la esencia, los insumos por unidad (frasco, alcohol,
etiqueta, etc.), el margen deseado y el descuento mayorista para obtener
el precio sugerido de venta y el precio mayorista.

Fórmulas:
    costo_insumo   = precio_lote / cantidad_lote * cantidad_necesaria
    costo_esencia  = precio_esencia_ars * gramos_por_perfume / gramos_lote
    costo_total    = costo_esencia + sum(costo_insumo)
    precio         = costo_total / (1 - margen/100)      (modo "precio")
                     costo_total * (1 + margen/100)      (modo "costo")
    mayorista      = precio * (1 - descuento_mayorista/100)
"""
import logging
import math
from dataclasses import dataclass, field, asdict
from typing import Dict, List, Optional

from perfumeria.utils.error_utils import ConfigurationError
from perfumeria.utils.formato import format_currency
from perfumeria.utils.redondeo import redondear, GRILLAS

logger = logging.getLogger('perfumeria.margen')

MONEDAS = ('ARS', 'USD')
TIPOS_FRASCO = ('femenino', 'masculino', 'otro')
# "precio": el margen es una fracción del precio final
# "costo": el margen se suma sobre el costo (markup)
MODOS_MARGEN = ('precio', 'costo')


def to2(n: float) -> float:
    return round(n, 2)


def es_numero(valor) -> bool:
    """True para int/float finitos (no bool, no NaN, no infinito)."""
    return isinstance(valor, (int, float)) and not isinstance(valor, bool) and math.isfinite(valor)


def _numero_de_insumo(data: dict, campo: str, default=None) -> Optional[float]:
    valor = data.get(campo)
    if valor is None:
        return default
    try:
        return float(valor)
    except (TypeError, ValueError):
        nombre = data.get('nombre') or ''
        raise ConfigurationError(
            f"El insumo '{nombre}' tiene un valor no numérico en {campo} ({valor!r})",
            payload={'insumo': nombre, 'insumo_id': data.get('id')}
        )


@dataclass(frozen=True)
class InsumoCosto:
    """Insumo tal como lo consume el cálculo (independiente de la base de datos)."""
    id: Optional[str]
    nombre: str
    precio_lote: Optional[float]
    cantidad_lote: Optional[float]
    cantidad_necesaria: float
    is_general: bool = False
    proveedor_id: Optional[str] = None
    categoria_id: Optional[str] = None

    @classmethod
    def from_dict(cls, data: dict) -> 'InsumoCosto':
        return cls(
            id=data.get('id'),
            nombre=data.get('nombre') or '',
            precio_lote=_numero_de_insumo(data, 'precio_lote'),
            cantidad_lote=_numero_de_insumo(data, 'cantidad_lote'),
            cantidad_necesaria=_numero_de_insumo(data, 'cantidad_necesaria', default=0.0),
            is_general=bool(data.get('is_general', False)),
            proveedor_id=data.get('proveedor_id'),
            categoria_id=data.get('insumos_categorias_id') or data.get('categoria_id'),
        )

    @property
    def es_frasco(self) -> bool:
        nombre = self.nombre.strip().lower()
        return 'frasco' in nombre and ('femenino' in nombre or 'masculino' in nombre)


@dataclass(frozen=True)
class InputsGenerales:
    precio_esencia: float
    moneda: str
    gramos_lote: float
    margen: float
    descuento_mayorista: float
    proveedor_id: Optional[str] = None
    tipo_frasco: str = 'femenino'
    gramos_por_perfume: Optional[float] = None
    categoria_id: Optional[str] = None


@dataclass
class CostoInsumo:
    insumo_id: Optional[str]
    nombre: str
    costo_unitario: float


@dataclass
class ResultadoCalculo:
    # costos (exactos)
    costo_esencia: float
    costo_insumos: float
    costo_total: float

    # precios sugeridos
    precio_sugerido_exacto: float
    precio_sugerido_redondeado: float
    ajuste_redondeo_sugerido: float  # redondeado - exacto

    # precios mayoristas
    precio_mayorista_exacto: float
    precio_mayorista_redondeado: float

    # márgenes teóricos (sin redondeo), porcentaje sobre el costo
    margen_dinero_teorico: float
    margen_porcentaje_teorico: float

    # márgenes efectivos (usando precio redondeado de venta)
    margen_dinero_efectivo: float
    margen_porcentaje_efectivo: float

    redondeo: str = 'mil'
    modo: str = 'precio'
    tasa_ars: Optional[float] = None
    desglose: List[CostoInsumo] = field(default_factory=list)

    @property
    def precio_sugerido_usd(self) -> Optional[float]:
        if not self.tasa_ars:
            return None
        return to2(self.precio_sugerido_redondeado / self.tasa_ars)

    @property
    def precio_mayorista_usd(self) -> Optional[float]:
        if not self.tasa_ars:
            return None
        return to2(self.precio_mayorista_redondeado / self.tasa_ars)

    def to_dict(self) -> dict:
        data = asdict(self)
        data['precio_sugerido_usd'] = self.precio_sugerido_usd
        data['precio_mayorista_usd'] = self.precio_mayorista_usd
        data['formateado'] = {
            'costo_total': format_currency(self.costo_total, 'ARS'),
            'precio_sugerido': format_currency(self.precio_sugerido_redondeado, 'ARS'),
            'precio_mayorista': format_currency(self.precio_mayorista_redondeado, 'ARS'),
            'precio_sugerido_usd': format_currency(self.precio_sugerido_usd, 'USD'),
            'precio_mayorista_usd': format_currency(self.precio_mayorista_usd, 'USD'),
        }
        return data


def _validar(inputs: InputsGenerales, insumos: List[InsumoCosto], redondeo: str, modo: str):
    if inputs.moneda not in MONEDAS:
        raise ConfigurationError(f"Moneda inválida: {inputs.moneda}. Opciones: {', '.join(MONEDAS)}")
    if modo not in MODOS_MARGEN:
        raise ConfigurationError(f"Modo de margen inválido: {modo}. Opciones: {', '.join(MODOS_MARGEN)}")
    if redondeo not in GRILLAS:
        raise ConfigurationError(f"Redondeo inválido: {redondeo}. Opciones: {', '.join(GRILLAS)}")

    if not es_numero(inputs.precio_esencia) or inputs.precio_esencia < 0:
        raise ConfigurationError(f"Precio de esencia inválido ({inputs.precio_esencia})")
    if not es_numero(inputs.gramos_lote) or inputs.gramos_lote <= 0:
        raise ConfigurationError("Los gramos del lote deben ser mayores a 0")
    if inputs.gramos_por_perfume is not None and (
            not es_numero(inputs.gramos_por_perfume) or inputs.gramos_por_perfume <= 0):
        raise ConfigurationError("Los gramos por perfume deben ser mayores a 0")
    if not es_numero(inputs.margen) or inputs.margen < 0:
        raise ConfigurationError(f"Margen inválido ({inputs.margen})")
    if modo == 'precio' and inputs.margen >= 100:
        raise ConfigurationError(
            f"El margen debe ser menor a 100% (recibido {inputs.margen}%)",
            payload={'margen': inputs.margen}
        )
    if not es_numero(inputs.descuento_mayorista) or not 0 <= inputs.descuento_mayorista <= 100:
        raise ConfigurationError("El descuento mayorista debe estar entre 0 y 100")

    for insumo in insumos:
        payload = {'insumo': insumo.nombre, 'insumo_id': insumo.id}
        if not es_numero(insumo.cantidad_lote) or insumo.cantidad_lote <= 0:
            raise ConfigurationError(
                f"El insumo '{insumo.nombre}' tiene cantidad de lote inválida ({insumo.cantidad_lote})",
                payload=payload
            )
        if not es_numero(insumo.precio_lote) or insumo.precio_lote < 0:
            raise ConfigurationError(
                f"El insumo '{insumo.nombre}' tiene precio de lote inválido ({insumo.precio_lote})",
                payload=payload
            )
        if not es_numero(insumo.cantidad_necesaria) or insumo.cantidad_necesaria < 0:
            raise ConfigurationError(
                f"El insumo '{insumo.nombre}' tiene cantidad necesaria inválida ({insumo.cantidad_necesaria})",
                payload=payload
            )


def costo_unitario(insumo: InsumoCosto) -> float:
    return insumo.precio_lote / insumo.cantidad_lote * insumo.cantidad_necesaria


def calcular_margen(inputs: InputsGenerales, insumos: List[InsumoCosto],
                    tasas: Optional[Dict[str, float]] = None,
                    redondeo: str = 'mil', modo: str = 'precio') -> ResultadoCalculo:
    """
    Calcula costo total, precio sugerido y precio mayorista.

    Args:
        inputs: Datos generales del cálculo
        insumos: Insumos por unidad, en el orden en que se muestran
        tasas: Mapeo de cotizaciones; se usa tasas['ARS'] (pesos por dólar)
               para convertir la esencia si viene en USD y para los precios en USD
        redondeo: 'cien' o 'mil'
        modo: 'precio' (margen sobre precio final) o 'costo' (markup sobre costo)

    Raises:
        ConfigurationError: entradas inválidas, antes de calcular nada
    """
    _validar(inputs, insumos, redondeo, modo)

    tasa_ars = (tasas or {}).get('ARS')
    precio_esencia = inputs.precio_esencia
    if inputs.moneda == 'USD':
        if not es_numero(tasa_ars) or tasa_ars <= 0:
            raise ConfigurationError("No hay cotización ARS disponible para convertir el precio en USD")
        precio_esencia = precio_esencia * tasa_ars

    gramos_por_perfume = inputs.gramos_por_perfume or inputs.gramos_lote
    costo_esencia = precio_esencia * gramos_por_perfume / inputs.gramos_lote

    desglose = [CostoInsumo(i.id, i.nombre, to2(costo_unitario(i))) for i in insumos]
    costo_insumos = sum(costo_unitario(i) for i in insumos)

    costo_total = to2(costo_esencia + costo_insumos)

    if modo == 'precio':
        precio_sugerido_exacto = to2(costo_total / (1 - inputs.margen / 100))
    else:
        precio_sugerido_exacto = to2(costo_total * (1 + inputs.margen / 100))

    if not math.isfinite(precio_sugerido_exacto):
        raise ConfigurationError("Los montos ingresados exceden el rango de cálculo")

    precio_mayorista_exacto = to2(precio_sugerido_exacto * (1 - inputs.descuento_mayorista / 100))

    # Redondeos "comerciales"
    precio_sugerido_redondeado = redondear(precio_sugerido_exacto, redondeo)
    precio_mayorista_redondeado = redondear(precio_mayorista_exacto, redondeo)

    margen_dinero_teorico = to2(precio_sugerido_exacto - costo_total)
    margen_dinero_efectivo = to2(precio_sugerido_redondeado - costo_total)

    resultado = ResultadoCalculo(
        costo_esencia=to2(costo_esencia),
        costo_insumos=to2(costo_insumos),
        costo_total=costo_total,
        precio_sugerido_exacto=precio_sugerido_exacto,
        precio_sugerido_redondeado=precio_sugerido_redondeado,
        ajuste_redondeo_sugerido=to2(precio_sugerido_redondeado - precio_sugerido_exacto),
        precio_mayorista_exacto=precio_mayorista_exacto,
        precio_mayorista_redondeado=precio_mayorista_redondeado,
        margen_dinero_teorico=margen_dinero_teorico,
        margen_porcentaje_teorico=to2(margen_dinero_teorico / costo_total * 100) if costo_total > 0 else 0,
        margen_dinero_efectivo=margen_dinero_efectivo,
        margen_porcentaje_efectivo=to2(margen_dinero_efectivo / costo_total * 100) if costo_total > 0 else 0,
        redondeo=redondeo,
        modo=modo,
        tasa_ars=tasa_ars,
        desglose=desglose,
    )
    logger.debug(f"Cálculo de margen: costo={costo_total} precio={precio_sugerido_exacto}")
    return resultado


def seleccionar_insumos(insumos: List[InsumoCosto], proveedor_id: Optional[str],
                        categoria_id: Optional[str], tipo_frasco: str = 'femenino') -> List[InsumoCosto]:
    """
    Arma la lista de insumos de un cálculo a partir de todos los insumos cargados:
        1. Generales de la categoría, del proveedor elegido o sin proveedor
        2. El frasco que corresponde al tipo (femenino / masculino)
        3. El resto de los insumos no generales de la categoría que no son frascos
    """
    if tipo_frasco not in TIPOS_FRASCO:
        raise ConfigurationError(f"Tipo de frasco inválido: {tipo_frasco}")

    de_categoria = [i for i in insumos if i.categoria_id == categoria_id]

    generales = [
        i for i in de_categoria
        if i.is_general and (i.proveedor_id == proveedor_id or i.proveedor_id is None)
    ]

    frasco = None
    if tipo_frasco != 'otro':
        frasco = next(
            (i for i in de_categoria
             if 'frasco' in i.nombre.strip().lower() and tipo_frasco in i.nombre.strip().lower()),
            None
        )

    ids_base = {i.id for i in generales}
    seleccion = list(generales)
    if frasco is not None and frasco.id not in ids_base:
        seleccion.append(frasco)
        ids_base.add(frasco.id)

    # Los generales de otros proveedores no se suman
    agregados = [
        i for i in de_categoria
        if i.id not in ids_base and not i.es_frasco and not i.is_general
    ]
    return seleccion + agregados
