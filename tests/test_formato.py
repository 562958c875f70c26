"""
Tests del formateo de montos.
"""
import math
from decimal import Decimal

import pytest
from perfumeria.utils.formato import format_currency


class TestFormatCurrency:

    @pytest.mark.parametrize('valor', [None, math.nan, float('inf'), 'abc'])
    def test_valores_invalidos_devuelven_na(self, valor):
        assert format_currency(valor) == "N/A"

    def test_pesos_argentinos(self):
        # es-AR: punto para miles, coma para decimales
        assert format_currency(1234.5, "ARS") == "$\u00a01.234,50"

    def test_ars_es_la_moneda_por_defecto(self):
        assert format_currency(1234.5) == format_currency(1234.5, "ARS")

    def test_dolares(self):
        assert format_currency(1234.5, "USD") == "$1,234.50"

    def test_millones_y_decimales(self):
        assert format_currency(1234567.891, "ARS") == "$\u00a01.234.567,89"
        assert format_currency(1234567.891, "USD", decimals=0) == "$1,234,568"

    def test_negativos(self):
        assert format_currency(-50, "USD") == "-$50.00"
        assert format_currency(-1500, "ARS") == "-$\u00a01.500,00"

    def test_decimal(self):
        assert format_currency(Decimal("10.5"), "USD") == "$10.50"

    def test_moneda_no_soportada(self):
        with pytest.raises(ValueError):
            format_currency(10, "EUR")
