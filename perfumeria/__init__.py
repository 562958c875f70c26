import logging

from flask import Flask
from perfumeria.config import Config
from perfumeria.extensions import db, cors


def create_app(config_class=Config):
    app = Flask(__name__)
    app.config.from_object(config_class)

    logging.basicConfig(
        level=app.config.get('LOG_LEVEL', 'INFO'),
        format='%(asctime)s %(levelname)s [%(name)s] %(message)s'
    )

    db.init_app(app)
    cors.init_app(app) # Importante para que el Frontend pueda llamar al Backend

    # --- IMPORTAR MODELOS ---
    # Se registran en SQLAlchemy antes de que los blueprints los usen.
    from perfumeria.models import proveedor, insumo, esencia, inventario

    # --- CACHES DE COTIZACIONES ---
    # Una instancia por proveedor de tasas, compartida por todo el proceso.
    from perfumeria.services.tasas_service import crear_caches_tasas
    app.extensions['tasas'] = crear_caches_tasas(app.config)

    # --- REGISTRO DE RUTAS ---
    from perfumeria.api.rutas_tasas import tasas_bp
    from perfumeria.api.rutas_calculadora import calculadora_bp
    from perfumeria.api.rutas_inventario import inventario_bp
    # Todo lo que esté en esos archivos empezará con /api
    app.register_blueprint(tasas_bp, url_prefix='/api')
    app.register_blueprint(calculadora_bp, url_prefix='/api')
    app.register_blueprint(inventario_bp, url_prefix='/api')

    return app
