import math


# Redondea hacia arriba al número más cercano que sea múltiplo de 100
def redondear_al_cien_mas_cercano(valor):
    return valor if valor % 100 == 0 else math.ceil(valor / 100) * 100


# Redondea hacia arriba al número más cercano que sea múltiplo de 1000
def redondear_al_mil_mas_cercano(valor):
    return valor if valor % 1000 == 0 else math.ceil(valor / 1000) * 1000


GRILLAS = {
    'cien': redondear_al_cien_mas_cercano,
    'mil': redondear_al_mil_mas_cercano,
}


def redondear(valor, grilla='mil'):
    """Redondeo comercial hacia arriba según la grilla ('cien' o 'mil')."""
    try:
        return GRILLAS[grilla](valor)
    except KeyError:
        raise ValueError(f"Grilla de redondeo inválida: {grilla}. Opciones: {', '.join(GRILLAS)}")
