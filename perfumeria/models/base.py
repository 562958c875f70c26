import uuid


def nuevo_id():
    """Los ids del servicio de datos son UUID en texto."""
    return str(uuid.uuid4())
