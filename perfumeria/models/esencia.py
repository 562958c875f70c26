from perfumeria.extensions import db
from perfumeria.models.base import nuevo_id


class Esencia(db.Model):
    __tablename__ = 'esencias'

    id = db.Column(db.String(36), primary_key=True, default=nuevo_id)
    nombre = db.Column(db.String(200), nullable=False)
    genero = db.Column(db.String(20)) # 'masculino', 'femenino', 'ambiente', 'otro'

    # Precio de compra: según el proveedor viene en dólares o en pesos
    precio_usd = db.Column(db.Float)
    precio_ars = db.Column(db.Float)
    cantidad_gramos = db.Column(db.Float)

    proveedor_id = db.Column(db.String(36), db.ForeignKey('proveedores.id'))
    insumos_categorias_id = db.Column(db.String(36), db.ForeignKey('insumos_categorias.id'))

    proveedor = db.relationship('Proveedor', backref='esencias')

    def precio_y_moneda(self):
        """Precio de compra y su moneda; se prioriza USD si está cargado."""
        if self.precio_usd is not None:
            return self.precio_usd, 'USD'
        return self.precio_ars, 'ARS'

    def to_dict(self):
        return {
            'id': self.id,
            'nombre': self.nombre,
            'genero': self.genero,
            'precio_usd': self.precio_usd,
            'precio_ars': self.precio_ars,
            'cantidad_gramos': self.cantidad_gramos,
            'proveedor_id': self.proveedor_id,
            'insumos_categorias_id': self.insumos_categorias_id
        }

    def __repr__(self):
        return f'<Esencia {self.nombre}>'
