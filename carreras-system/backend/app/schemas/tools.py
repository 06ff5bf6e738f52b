from pydantic import BaseModel


class BackupSnapshot(BaseModel):
    """Every business table as a list of plain rows, parents first.

    Users are not part of a snapshot: importing or resetting never locks
    anyone out.
    """

    version: int = 1
    tipos_movimiento: list[dict] = []
    cuentas: list[dict] = []
    fotografos: list[dict] = []
    carreras: list[dict] = []
    carrera_venta_tipos: list[dict] = []
    carrera_fotografos: list[dict] = []
    gastos_especificos: list[dict] = []
    transacciones: list[dict] = []


class ImportResult(BaseModel):
    counts: dict[str, int]
