"""
Formateo de montos para mostrar en pantalla y en reportes.
"""
import math
from decimal import Decimal

# Convenciones por moneda: símbolo, separador de miles, separador decimal
FORMATOS_MONEDA = {
    'ARS': {'simbolo': '$\u00a0', 'miles': '.', 'decimal': ','},  # es-AR
    'USD': {'simbolo': '$', 'miles': ',', 'decimal': '.'},  # en-US
}


def format_currency(value, currency: str = "ARS", decimals: int = 2) -> str:
    """
    Formatea un monto con el símbolo, agrupación y decimales de la moneda.

    Args:
        value: Monto numérico. None o NaN devuelven "N/A".
        currency: "ARS" (default) o "USD"
        decimals: Cantidad fija de decimales (default 2)

    Returns:
        str: Ej. "$ 1.234,50" para ARS, "$1,234.50" para USD
    """
    if value is None or isinstance(value, bool) or not isinstance(value, (int, float, Decimal)):
        return "N/A"
    if not math.isfinite(value):
        return "N/A"

    formato = FORMATOS_MONEDA.get(currency)
    if formato is None:
        raise ValueError(f"Moneda no soportada: {currency}")

    # Primero en formato en-US y luego se reemplazan los separadores
    numero = f"{abs(value):,.{decimals}f}"
    numero = (numero.replace(',', '\0')
                    .replace('.', formato['decimal'])
                    .replace('\0', formato['miles']))

    signo = '-' if value < 0 else ''
    return f"{signo}{formato['simbolo']}{numero}"
