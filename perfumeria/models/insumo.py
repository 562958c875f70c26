from perfumeria.extensions import db
from perfumeria.models.base import nuevo_id
from perfumeria.services.margen_service import InsumoCosto


class InsumoCategoria(db.Model):
    __tablename__ = 'insumos_categorias'

    id = db.Column(db.String(36), primary_key=True, default=nuevo_id)
    nombre = db.Column(db.String(100), nullable=False) # e.g. "Perfumería fina"

    def __repr__(self):
        return f'<InsumoCategoria {self.nombre}>'


class Insumo(db.Model):
    __tablename__ = 'insumos'

    id = db.Column(db.String(36), primary_key=True, default=nuevo_id)
    nombre = db.Column(db.String(200), nullable=False)

    # INPUT: Compra por lote (ej. 100 frascos a $50.000)
    precio_lote = db.Column(db.Float, nullable=False, default=0.0)
    cantidad_lote = db.Column(db.Float, nullable=False, default=1.0)
    # INPUT: Cuánto lleva un perfume (ej. 1 frasco, 20 ml de alcohol)
    cantidad_necesaria = db.Column(db.Float, nullable=False, default=1.0)

    # General = se aplica a todos los perfumes de la categoría
    is_general = db.Column(db.Boolean, default=False)

    proveedor_id = db.Column(db.String(36), db.ForeignKey('proveedores.id'), nullable=True)
    insumos_categorias_id = db.Column(db.String(36), db.ForeignKey('insumos_categorias.id'), nullable=False)

    proveedor = db.relationship('Proveedor', backref='insumos')
    categoria = db.relationship('InsumoCategoria', backref='insumos')

    @property
    def costo_unitario(self):
        """Costo por perfume. None si el lote no tiene cantidad."""
        if not self.cantidad_lote or self.cantidad_lote <= 0:
            return None
        return (self.precio_lote or 0.0) / self.cantidad_lote * (self.cantidad_necesaria or 0.0)

    def to_calculo(self):
        return InsumoCosto(
            id=self.id,
            nombre=self.nombre,
            precio_lote=self.precio_lote,
            cantidad_lote=self.cantidad_lote,
            cantidad_necesaria=self.cantidad_necesaria or 0.0,
            is_general=bool(self.is_general),
            proveedor_id=self.proveedor_id,
            categoria_id=self.insumos_categorias_id,
        )

    def to_dict(self):
        return {
            'id': self.id,
            'nombre': self.nombre,
            'precio_lote': self.precio_lote,
            'cantidad_lote': self.cantidad_lote,
            'cantidad_necesaria': self.cantidad_necesaria,
            'costo_unitario': self.costo_unitario,
            'is_general': self.is_general,
            'proveedor_id': self.proveedor_id,
            'insumos_categorias_id': self.insumos_categorias_id
        }

    def __repr__(self):
        return f'<Insumo {self.nombre}>'
