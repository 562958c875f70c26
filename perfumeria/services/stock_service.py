"""
Política de stock bajo del inventario.
La clasificación se deriva del tipo y nombre del item en cada lectura; no se persiste.
"""
from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class StockMeta:
    low: bool
    threshold: Optional[int]

    def to_dict(self) -> dict:
        return {'stock_bajo': self.low, 'umbral': self.threshold}


SIN_ALERTA = StockMeta(low=False, threshold=None)

# Umbrales por tipo de item (cantidad <= umbral => stock bajo)
UMBRALES_POR_TIPO = {
    'frasco': 4,
    'etiqueta': 4,
    'esencia': 15,
}

# Insumos genéricos: se identifican por una parte del nombre
UMBRALES_INSUMO_POR_NOMBRE = (
    ('alcohol', 500),
    ('bolsas de madera', 10),
)


def get_low_stock_meta(tipo, nombre, cantidad) -> StockMeta:
    """
    Determina si un item del inventario está en stock bajo.
    Reglas por tipo, gana la primera que aplica:
        - Perfume: nunca alerta
        - Frasco / Etiqueta: <= 4
        - Esencia: <= 15
        - Insumo con "alcohol" en el nombre: <= 500
        - Insumo con "bolsas de madera" en el nombre: <= 10
    """
    tipo = (tipo or '').strip().lower()
    nombre = (nombre or '').strip().lower()
    cantidad = cantidad if cantidad is not None else 0

    if tipo == 'perfume':
        return SIN_ALERTA

    if tipo in UMBRALES_POR_TIPO:
        umbral = UMBRALES_POR_TIPO[tipo]
        return StockMeta(low=cantidad <= umbral, threshold=umbral)

    if tipo == 'insumo':
        for fragmento, umbral in UMBRALES_INSUMO_POR_NOMBRE:
            if fragmento in nombre:
                return StockMeta(low=cantidad <= umbral, threshold=umbral)

    return SIN_ALERTA


def _campo(item, nombre):
    if isinstance(item, dict):
        return item.get(nombre)
    return getattr(item, nombre, None)


def meta_de_item(item) -> StockMeta:
    """Acepta un modelo Inventario o un dict con tipo, nombre y cantidad."""
    return get_low_stock_meta(_campo(item, 'tipo'), _campo(item, 'nombre'), _campo(item, 'cantidad'))


def filtrar_stock_bajo(items):
    """Items en stock bajo, respetando el orden de entrada."""
    return [item for item in items if meta_de_item(item).low]
