"""Per-event financial figures.

Pure functions over already-fetched rows. Both the detail view and the
executive list go through ``build_calculo`` so the two can never disagree
on an event's costs or net result.

Rows are duck-typed: ORM objects or anything exposing the same attributes
(``precio_cents``, ``cantidad``, ``moneda``, ``comision_pct`` for sales,
``costo_cents`` for photographers, ``monto_cents`` for specific expenses).
"""

from collections import defaultdict
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from decimal import Decimal

from app.utils.currency import apply_pct


@dataclass(frozen=True)
class FeeSchedule:
    """The five percentage fees of an event. Applied to ARS revenue only."""

    mp_pct: Decimal | None = None
    ib_pct: Decimal | None = None
    iva_pct: Decimal | None = None
    prov_pct: Decimal | None = None
    deb_cred_pct: Decimal | None = None

    @classmethod
    def from_carrera(cls, carrera) -> "FeeSchedule":
        return cls(
            mp_pct=carrera.mp_pct,
            ib_pct=carrera.ib_pct,
            iva_pct=carrera.iva_pct,
            prov_pct=carrera.prov_pct,
            deb_cred_pct=carrera.deb_cred_pct,
        )


@dataclass
class VentasResumen:
    ingresos_ars: int = 0
    ingresos_usd: int = 0
    pedidos_totales: int = 0
    comision_ars: int = 0
    comision_usd: int = 0


@dataclass(frozen=True)
class CarreraCalculo:
    ingresos_ars: int
    ingresos_usd: int
    costo_fot: int
    costo_mp: int
    costo_ib: int
    costo_iva: int
    costo_prov: int
    costo_deb_cred: int
    costo_venta_tipos_ars: int
    costo_venta_tipos_usd: int
    costo_gastos_especificos: int
    gastos_totales_ars: int
    gastos_totales_usd: int
    resultado_final_ars: int
    resultado_final_usd: int
    pedidos_totales: int
    comision_ars: int
    comision_usd: int
    # Organizer commissions are no longer charged; kept at 0 for old clients
    costo_org_pre: int = 0
    costo_org_post: int = 0

    # Legacy single-currency figures
    @property
    def costo_venta_tipos(self) -> int:
        return self.costo_venta_tipos_ars + self.costo_venta_tipos_usd

    @property
    def gastos_totales(self) -> int:
        return self.gastos_totales_ars

    @property
    def resultado_final(self) -> int:
        return self.resultado_final_ars


def _as_int(value) -> int:
    return int(value or 0)


def _is_usd(moneda) -> bool:
    return moneda == "USD"


def sale_subtotal(venta) -> int:
    """precio x cantidad for one sale type, in cents."""
    return _as_int(venta.precio_cents) * _as_int(venta.cantidad)


def summarize_sales(ventas: Iterable) -> VentasResumen:
    """Revenue, orders and per-row commission, bucketed by currency."""
    resumen = VentasResumen()
    for venta in ventas:
        subtotal = sale_subtotal(venta)
        usd = _is_usd(venta.moneda)

        if usd:
            resumen.ingresos_usd += subtotal
        else:
            resumen.ingresos_ars += subtotal

        resumen.pedidos_totales += _as_int(venta.cantidad)

        if venta.comision_pct is not None:
            comision = apply_pct(subtotal, venta.comision_pct)
            if usd:
                resumen.comision_usd += comision
            else:
                resumen.comision_ars += comision
    return resumen


def revenue_by_currency(ventas: Iterable) -> tuple[int, int]:
    """Return (ars_cents, usd_cents) for a set of sale types."""
    resumen = summarize_sales(ventas)
    return resumen.ingresos_ars, resumen.ingresos_usd


def build_calculo(
    ventas: VentasResumen,
    costo_fot: int,
    costo_gastos_especificos: int,
    fees: FeeSchedule,
) -> CarreraCalculo:
    ingresos_ars = ventas.ingresos_ars

    costo_mp = apply_pct(ingresos_ars, fees.mp_pct)
    costo_ib = apply_pct(ingresos_ars, fees.ib_pct)
    costo_iva = apply_pct(ingresos_ars, fees.iva_pct)
    costo_prov = apply_pct(ingresos_ars, fees.prov_pct)
    costo_deb_cred = apply_pct(ingresos_ars, fees.deb_cred_pct)

    gastos_totales_ars = (
        costo_fot
        + costo_mp
        + costo_ib
        + costo_iva
        + costo_prov
        + costo_deb_cred
        + ventas.comision_ars
        + costo_gastos_especificos
    )
    gastos_totales_usd = ventas.comision_usd

    return CarreraCalculo(
        ingresos_ars=ingresos_ars,
        ingresos_usd=ventas.ingresos_usd,
        costo_fot=costo_fot,
        costo_mp=costo_mp,
        costo_ib=costo_ib,
        costo_iva=costo_iva,
        costo_prov=costo_prov,
        costo_deb_cred=costo_deb_cred,
        costo_venta_tipos_ars=ventas.comision_ars,
        costo_venta_tipos_usd=ventas.comision_usd,
        costo_gastos_especificos=costo_gastos_especificos,
        gastos_totales_ars=gastos_totales_ars,
        gastos_totales_usd=gastos_totales_usd,
        resultado_final_ars=ingresos_ars - gastos_totales_ars,
        resultado_final_usd=ventas.ingresos_usd - gastos_totales_usd,
        pedidos_totales=ventas.pedidos_totales,
        comision_ars=ventas.comision_ars,
        comision_usd=ventas.comision_usd,
    )


def compute_carrera(
    ventas: Iterable,
    fotografos: Iterable,
    gastos_especificos: Iterable,
    fees: FeeSchedule,
) -> CarreraCalculo:
    """Full cost breakdown and net result for a single event."""
    costo_fot = sum(_as_int(f.costo_cents) for f in fotografos)
    costo_gastos = sum(_as_int(g.monto_cents) for g in gastos_especificos)
    return build_calculo(summarize_sales(ventas), costo_fot, costo_gastos, fees)


@dataclass(frozen=True)
class CostosCarrera:
    """ARS cost sums for one event, as returned by a grouped query."""

    costo_fot: int = 0
    costo_gastos_especificos: int = 0


def compute_carreras_list(
    carreras: Iterable,
    ventas: Iterable,
    costos: Mapping[int, CostosCarrera],
) -> dict[int, CarreraCalculo]:
    """Fold bulk-fetched rows into one CarreraCalculo per event.

    ``ventas`` holds the sale types of every listed event; ``costos`` maps
    event id to its grouped cost sums. Events without rows get zeros.
    Keys follow the order of ``carreras``.
    """
    ventas_por_carrera: dict[int, list] = defaultdict(list)
    for venta in ventas:
        ventas_por_carrera[venta.carrera_id].append(venta)

    out: dict[int, CarreraCalculo] = {}
    for carrera in carreras:
        c = costos.get(carrera.id) or CostosCarrera()
        out[carrera.id] = build_calculo(
            summarize_sales(ventas_por_carrera.get(carrera.id, ())),
            c.costo_fot,
            c.costo_gastos_especificos,
            FeeSchedule.from_carrera(carrera),
        )
    return out
