import math
from dataclasses import dataclass
from datetime import date

from app.config import settings
from app.exceptions import InvalidDate, InvalidEnum, ScopeViolation
from app.models.transaccion import Operacion
from app.utils.date_helpers import parse_date_iso


@dataclass(frozen=True)
class MovimientoNormalizado:
    fecha: date
    moneda: str
    operacion: Operacion | None
    cuenta_desde_id: int | None
    cuenta_hasta_id: int | None


def validate_fecha(raw: object) -> date:
    fecha = parse_date_iso(raw)
    if fecha is None:
        raise InvalidDate("fecha debe ser YYYY-MM-DD")
    return fecha


def normalize_moneda(raw: object) -> str:
    """Upper-case the currency code; blank means the home currency."""
    moneda = str(raw or "").strip().upper() or settings.HOME_CURRENCY
    if moneda not in settings.CURRENCIES:
        raise InvalidEnum(
            f"moneda inválida: {moneda} (válidas: {', '.join(settings.CURRENCIES)})"
        )
    return moneda


def validate_operacion(raw: object, *, global_scope: bool = True) -> Operacion | None:
    if raw is None or (isinstance(raw, str) and not raw.strip()):
        return None
    value = raw.value if isinstance(raw, Operacion) else str(raw).strip().lower()
    try:
        operacion = Operacion(value)
    except ValueError:
        valid = ", ".join(o.value for o in Operacion)
        raise InvalidEnum(f"operacion inválida: {raw} (válidas: {valid})") from None
    if operacion is Operacion.OPENING and not global_scope:
        raise InvalidEnum("operacion 'opening' solo existe en la caja global")
    return operacion


def coerce_cuenta_id(raw: object) -> int | None:
    """Whole-number account id, or None when absent or not a finite number."""
    if raw is None or isinstance(raw, bool):
        return None
    try:
        value = float(raw)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(value):
        return None
    return int(value)


def normalize_movimiento(
    fecha: object,
    moneda: object = None,
    operacion: object = None,
    cuenta_desde: object = None,
    cuenta_hasta: object = None,
    *,
    global_scope: bool = True,
) -> MovimientoNormalizado:
    """Validate and normalize the fields of a cash movement before it is stored."""
    op = validate_operacion(operacion, global_scope=global_scope)
    desde = coerce_cuenta_id(cuenta_desde)
    hasta = coerce_cuenta_id(cuenta_hasta)
    if op is Operacion.TRANSFER and desde is not None and desde == hasta:
        raise ValueError("No se puede transferir a la misma cuenta")
    return MovimientoNormalizado(
        fecha=validate_fecha(fecha),
        moneda=normalize_moneda(moneda),
        operacion=op,
        cuenta_desde_id=desde,
        cuenta_hasta_id=hasta,
    )


def ensure_global(transaccion) -> None:
    """Reject ledger rows that belong to an event."""
    if transaccion.carrera_id is not None:
        raise ScopeViolation(
            "Movimiento de carrera no se puede modificar desde caja"
        )
