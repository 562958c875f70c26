from perfumeria.extensions import db
from perfumeria.models.base import nuevo_id


class Proveedor(db.Model):
    """
    Proveedor de esencias.
    gramos_configurados: gramos de esencia que lleva un perfume de este proveedor.
    margen_venta: margen sugerido (%) que la calculadora usa por defecto.
    """
    __tablename__ = 'proveedores'

    id = db.Column(db.String(36), primary_key=True, default=nuevo_id)
    nombre = db.Column(db.String(100), nullable=False)
    gramos_configurados = db.Column(db.Float)
    margen_venta = db.Column(db.Float)

    def to_dict(self):
        return {
            'id': self.id,
            'nombre': self.nombre,
            'gramos_configurados': self.gramos_configurados,
            'margen_venta': self.margen_venta
        }

    def __repr__(self):
        return f'<Proveedor {self.nombre}>'
