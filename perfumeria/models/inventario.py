from perfumeria.extensions import db
from perfumeria.models.base import nuevo_id
from perfumeria.services.stock_service import get_low_stock_meta
from datetime import datetime, timezone


class Inventario(db.Model):
    """
    Item del inventario físico (perfumes, frascos, etiquetas, esencias, insumos).
    El aviso de stock bajo se calcula al leer; no se guarda.
    """
    __tablename__ = 'inventario'

    id = db.Column(db.String(36), primary_key=True, default=nuevo_id)
    nombre = db.Column(db.String(200), nullable=False)
    tipo = db.Column(db.String(50), nullable=False) # 'Perfume', 'Frasco', 'Etiqueta', 'Esencia', 'Insumo'
    genero = db.Column(db.String(20))
    cantidad = db.Column(db.Float, default=0)
    updated_at = db.Column(db.DateTime, default=lambda: datetime.now(timezone.utc),
                           onupdate=lambda: datetime.now(timezone.utc))

    @property
    def stock_meta(self):
        return get_low_stock_meta(self.tipo, self.nombre, self.cantidad)

    def to_dict(self):
        return {
            'id': self.id,
            'nombre': self.nombre,
            'tipo': self.tipo,
            'genero': self.genero,
            'cantidad': self.cantidad,
            'updated_at': self.updated_at.isoformat() if self.updated_at else None,
            **self.stock_meta.to_dict()
        }

    def __repr__(self):
        return f'<Inventario {self.tipo} {self.nombre}>'
