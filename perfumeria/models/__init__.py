# Importar todos los modelos para facilitar acceso
from perfumeria.models.proveedor import Proveedor
from perfumeria.models.insumo import Insumo, InsumoCategoria
from perfumeria.models.esencia import Esencia
from perfumeria.models.inventario import Inventario
