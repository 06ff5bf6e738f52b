from app.models.carrera import Carrera
from app.models.venta_tipo import CarreraVentaTipo, Moneda, VentaCategoria
from app.models.fotografo import CarreraFotografo, Fotografo
from app.models.gasto_especifico import GastoEspecifico
from app.models.cuenta import Cuenta
from app.models.transaccion import Alcance, Operacion, TipoMovimiento, Transaccion
from app.models.usuario import Usuario

__all__ = [
    "Carrera",
    "CarreraVentaTipo",
    "Moneda",
    "VentaCategoria",
    "CarreraFotografo",
    "Fotografo",
    "GastoEspecifico",
    "Cuenta",
    "Alcance",
    "Operacion",
    "TipoMovimiento",
    "Transaccion",
    "Usuario",
]
