"""
Tests de la calculadora de margen.
"""
import math

import pytest
from perfumeria.services.margen_service import (
    InputsGenerales, InsumoCosto, calcular_margen, seleccionar_insumos
)
from perfumeria.utils.error_utils import ConfigurationError


def _inputs(**kwargs):
    base = dict(precio_esencia=1000.0, moneda='ARS', gramos_lote=30.0,
                margen=40.0, descuento_mayorista=10.0)
    base.update(kwargs)
    return InputsGenerales(**base)


def _insumo(nombre='Frasco femenino 30ml', precio_lote=200.0, cantidad_lote=1.0,
            cantidad_necesaria=1.0, **kwargs):
    return InsumoCosto(id=kwargs.pop('id', nombre), nombre=nombre, precio_lote=precio_lote,
                       cantidad_lote=cantidad_lote, cantidad_necesaria=cantidad_necesaria, **kwargs)


class TestCalcularMargen:

    def test_ejemplo_base(self):
        """
        Esencia 1000 + insumo 200 con margen 40% y descuento 10%:
            precio = 1200 / (1 - 0.40) = 2000
            mayorista = 2000 * 0.90 = 1800
        """
        r = calcular_margen(_inputs(), [_insumo()])

        assert r.costo_total == 1200.0
        assert r.precio_sugerido_exacto == pytest.approx(2000.0)
        assert r.precio_mayorista_exacto == pytest.approx(1800.0)
        assert r.precio_sugerido_redondeado == 2000
        assert r.precio_mayorista_redondeado == 2000
        assert r.margen_dinero_teorico == pytest.approx(800.0)

    def test_costo_por_unidad_del_lote(self):
        # 100 frascos a 50.000 => 500 c/u; 1000 ml alcohol a 8.000, se usan 20 ml => 160
        insumos = [
            _insumo('Frasco', precio_lote=50000, cantidad_lote=100),
            _insumo('Alcohol', precio_lote=8000, cantidad_lote=1000, cantidad_necesaria=20),
        ]
        r = calcular_margen(_inputs(precio_esencia=0), insumos)

        assert [c.costo_unitario for c in r.desglose] == [500.0, 160.0]
        assert r.costo_insumos == 660.0
        assert r.costo_total == 660.0

    def test_esencia_prorrateada_por_gramos(self):
        # 100 g de esencia a 30.000; el perfume lleva 15 g => 4.500
        r = calcular_margen(_inputs(precio_esencia=30000, gramos_lote=100, gramos_por_perfume=15), [])
        assert r.costo_esencia == 4500.0

    def test_esencia_en_usd_usa_la_cotizacion(self):
        r = calcular_margen(_inputs(precio_esencia=2, moneda='USD'), [], tasas={'ARS': 1000.0})

        assert r.costo_esencia == 2000.0
        assert r.tasa_ars == 1000.0
        assert r.precio_sugerido_usd == pytest.approx(r.precio_sugerido_redondeado / 1000.0)

    def test_usd_sin_cotizacion(self):
        with pytest.raises(ConfigurationError):
            calcular_margen(_inputs(moneda='USD'), [], tasas={})

    def test_modo_costo_suma_sobre_el_costo(self):
        r = calcular_margen(_inputs(margen=100), [_insumo()], modo='costo')
        assert r.precio_sugerido_exacto == 2400.0
        assert r.margen_porcentaje_teorico == 100.0

    def test_redondeo_a_cien(self):
        r = calcular_margen(_inputs(precio_esencia=1234, margen=0, descuento_mayorista=0), [], redondeo='cien')
        assert r.precio_sugerido_redondeado == 1300
        assert r.ajuste_redondeo_sugerido == 66.0
        assert r.margen_dinero_efectivo == 66.0


class TestErroresDeConfiguracion:

    def test_lote_en_cero_nombra_el_insumo(self):
        insumos = [_insumo('Etiqueta'), _insumo('Caja', cantidad_lote=0, id='caja-1')]

        with pytest.raises(ConfigurationError) as exc:
            calcular_margen(_inputs(), insumos)

        assert 'Caja' in exc.value.message
        assert exc.value.payload == {'insumo': 'Caja', 'insumo_id': 'caja-1'}

    def test_lote_nulo(self):
        with pytest.raises(ConfigurationError):
            calcular_margen(_inputs(), [_insumo('Caja', cantidad_lote=None)])

    @pytest.mark.parametrize('margen', [100, 150])
    def test_margen_cien_o_mas_se_rechaza(self, margen):
        with pytest.raises(ConfigurationError):
            calcular_margen(_inputs(margen=margen), [_insumo()])

    @pytest.mark.parametrize('cambios', [
        {'margen': -1},
        {'descuento_mayorista': 101},
        {'descuento_mayorista': -5},
        {'gramos_lote': 0},
        {'moneda': 'EUR'},
        {'precio_esencia': -10},
    ])
    def test_entradas_fuera_de_rango(self, cambios):
        with pytest.raises(ConfigurationError):
            calcular_margen(_inputs(**cambios), [])

    @pytest.mark.parametrize('cambios', [
        {'margen': math.nan},
        {'precio_esencia': math.nan},
        {'precio_esencia': math.inf},
        {'gramos_lote': math.nan},
        {'gramos_lote': math.inf},
        {'gramos_por_perfume': math.nan},
        {'descuento_mayorista': math.nan},
    ])
    def test_entradas_no_finitas(self, cambios):
        with pytest.raises(ConfigurationError):
            calcular_margen(_inputs(**cambios), [_insumo()])

    @pytest.mark.parametrize('campo', ['cantidad_lote', 'precio_lote', 'cantidad_necesaria'])
    @pytest.mark.parametrize('valor', [math.nan, math.inf])
    def test_insumo_no_finito_nombra_el_insumo(self, campo, valor):
        insumos = [_insumo('Etiqueta'), _insumo('Caja', id='caja-1', **{campo: valor})]

        with pytest.raises(ConfigurationError) as exc:
            calcular_margen(_inputs(), insumos)

        assert exc.value.payload == {'insumo': 'Caja', 'insumo_id': 'caja-1'}

    def test_usd_con_cotizacion_no_finita(self):
        with pytest.raises(ConfigurationError):
            calcular_margen(_inputs(moneda='USD'), [], tasas={'ARS': math.nan})

    def test_redondeo_y_modo_invalidos(self):
        with pytest.raises(ConfigurationError):
            calcular_margen(_inputs(), [], redondeo='diez')
        with pytest.raises(ConfigurationError):
            calcular_margen(_inputs(), [], modo='otro')


def test_to_dict_incluye_montos_formateados():
    r = calcular_margen(_inputs(), [_insumo()], tasas={'ARS': 1000.0})
    data = r.to_dict()

    assert data['precio_sugerido_redondeado'] == 2000
    assert data['precio_sugerido_usd'] == 2.0
    assert data['formateado']['precio_sugerido'] == "$\u00a02.000,00"
    assert data['formateado']['precio_sugerido_usd'] == "$2.00"
    assert data['desglose'][0]['costo_unitario'] == 200.0


def test_to_dict_sin_tasa_muestra_na():
    data = calcular_margen(_inputs(), []).to_dict()
    assert data['precio_sugerido_usd'] is None
    assert data['formateado']['precio_mayorista_usd'] == "N/A"


class TestInsumoDesdeJson:

    def test_convierte_textos_numericos(self):
        insumo = InsumoCosto.from_dict({'id': 'c', 'nombre': 'Caja', 'precio_lote': '500',
                                        'cantidad_lote': '10', 'cantidad_necesaria': '2'})
        assert (insumo.precio_lote, insumo.cantidad_lote, insumo.cantidad_necesaria) == (500.0, 10.0, 2.0)

    def test_cantidad_necesaria_por_defecto(self):
        insumo = InsumoCosto.from_dict({'nombre': 'Caja', 'precio_lote': 500, 'cantidad_lote': 10})
        assert insumo.cantidad_necesaria == 0.0

    def test_valor_no_numerico_nombra_el_insumo(self):
        with pytest.raises(ConfigurationError) as exc:
            InsumoCosto.from_dict({'id': 'c', 'nombre': 'Caja', 'precio_lote': 'quinientos', 'cantidad_lote': 10})

        assert exc.value.payload == {'insumo': 'Caja', 'insumo_id': 'c'}


class TestSeleccionarInsumos:

    def _catalogo(self):
        return [
            _insumo('Alcohol', id='alc', is_general=True, categoria_id='fina'),
            _insumo('Etiqueta prov B', id='etq-b', is_general=True, proveedor_id='B', categoria_id='fina'),
            _insumo('Frasco masculino 100ml', id='fr-m', categoria_id='fina'),
            _insumo('Frasco femenino 100ml', id='fr-f', categoria_id='fina'),
            _insumo('Caja regalo', id='caja', categoria_id='fina'),
            _insumo('Alcohol', id='alc-otra', is_general=True, categoria_id='otra'),
        ]

    def test_generales_frasco_y_agregados(self):
        ids = [i.id for i in seleccionar_insumos(self._catalogo(), 'A', 'fina', 'femenino')]
        assert ids == ['alc', 'fr-f', 'caja']

    def test_generales_del_proveedor(self):
        ids = [i.id for i in seleccionar_insumos(self._catalogo(), 'B', 'fina', 'masculino')]
        assert ids == ['alc', 'etq-b', 'fr-m', 'caja']

    def test_tipo_otro_no_agrega_frasco(self):
        ids = [i.id for i in seleccionar_insumos(self._catalogo(), 'A', 'fina', 'otro')]
        assert ids == ['alc', 'caja']

    def test_tipo_frasco_invalido(self):
        with pytest.raises(ConfigurationError):
            seleccionar_insumos(self._catalogo(), 'A', 'fina', 'unisex')
