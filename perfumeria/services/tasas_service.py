"""
Servicio de cotizaciones de moneda.

Cada proveedor externo tiene su propio RateCache: guarda el último mapeo
moneda -> tasa y el momento en que se obtuvo, y solo vuelve a consultar al
proveedor cuando pasó el tiempo de vida (30 minutos por defecto).

Si la consulta falla se levanta UpstreamError y el cache queda como estaba.
No hay reintentos ni deduplicación de consultas concurrentes: dos requests
simultáneos con el cache vencido pueden disparar dos consultas.
"""
import logging
import time
from typing import Callable, Dict, Optional

import requests

from perfumeria.utils.error_utils import UpstreamError, log_operation

logger = logging.getLogger('perfumeria.tasas')

CurrencyRates = Dict[str, float]

CACHE_MINUTOS_DEFAULT = 30


class RateCache:
    """
    Cache de un solo valor con tiempo de vida.

    Args:
        fetcher: Callable sin argumentos que devuelve el mapeo de tasas
        ttl_minutes: Minutos que el valor se considera vigente
        nombre: Identificador para logs
        clock: Fuente de tiempo en segundos (inyectable en tests)
    """

    def __init__(self, fetcher: Callable[[], CurrencyRates], ttl_minutes: float = CACHE_MINUTOS_DEFAULT,
                 nombre: str = 'tasas', clock: Callable[[], float] = time.time):
        self.fetcher = fetcher
        self.ttl = ttl_minutes * 60
        self.nombre = nombre
        self.clock = clock
        self.value: Optional[CurrencyRates] = None
        self.fetched_at: float = 0.0

    def edad_segundos(self) -> Optional[float]:
        if self.value is None:
            return None
        return self.clock() - self.fetched_at

    def is_fresh(self) -> bool:
        return self.value is not None and self.clock() - self.fetched_at < self.ttl

    def reset(self):
        self.value = None
        self.fetched_at = 0.0

    def get(self) -> CurrencyRates:
        if self.is_fresh():
            logger.debug(f"Cache {self.nombre} vigente ({self.edad_segundos():.0f}s)")
            return self.value

        logger.info(f"Cache {self.nombre} vencido o vacío, consultando proveedor")
        try:
            rates = self.fetcher()
        except UpstreamError as e:
            log_operation('refrescar_tasas', status='error', cache=self.nombre, error=e.message)
            raise
        except (requests.RequestException, ValueError, KeyError, TypeError) as e:
            log_operation('refrescar_tasas', status='error', cache=self.nombre, error=str(e))
            raise UpstreamError(f"Error al obtener tasas ({self.nombre}): {e}") from e

        self.value = rates
        self.fetched_at = self.clock()
        log_operation('refrescar_tasas', cache=self.nombre, monedas=len(rates))
        return rates


def fetch_dolar_oficial(url: str, timeout: Optional[float] = None) -> CurrencyRates:
    """
    Dólar oficial desde DolarApi (sin API key).
    Normaliza {"compra": ..., "venta": ...} a {"ARS": venta}.
    """
    res = requests.get(url, timeout=timeout)
    if not res.ok:
        raise UpstreamError(f"Failed to fetch from DolarApi (HTTP {res.status_code})")

    data = res.json()
    return {'ARS': float(data['venta'])}


def fetch_exchangerate_api(api_key: Optional[str], base_url: str, timeout: Optional[float] = None) -> CurrencyRates:
    """
    Tasas con base USD desde ExchangeRate-API (requiere EXCHANGERATE_API_KEY).
    Devuelve el mapeo "conversion_rates" tal como lo entrega el proveedor.
    """
    if not api_key:
        raise UpstreamError("EXCHANGERATE_API_KEY no configurada")

    res = requests.get(f"{base_url.rstrip('/')}/{api_key}/latest/USD", timeout=timeout)
    if not res.ok:
        raise UpstreamError(f"Failed to fetch from ExchangeRate-API (HTTP {res.status_code})")

    data = res.json()
    return {moneda: float(tasa) for moneda, tasa in data['conversion_rates'].items()}


def crear_caches_tasas(config) -> Dict[str, RateCache]:
    """
    Crea los caches de ambos proveedores a partir de la configuración de la app.
    Se guardan en app.extensions['tasas'] bajo las claves 'dolar' y 'exchange'.
    """
    ttl = config.get('RATES_CACHE_MINUTES', CACHE_MINUTOS_DEFAULT)
    timeout = config.get('RATES_HTTP_TIMEOUT')

    dolar_url = config.get('DOLAR_API_URL')
    api_key = config.get('EXCHANGERATE_API_KEY')
    exchange_url = config.get('EXCHANGERATE_API_URL')

    return {
        'dolar': RateCache(
            lambda: fetch_dolar_oficial(dolar_url, timeout=timeout),
            ttl_minutes=ttl, nombre='dolar'
        ),
        'exchange': RateCache(
            lambda: fetch_exchangerate_api(api_key, exchange_url, timeout=timeout),
            ttl_minutes=ttl, nombre='exchange'
        ),
    }
