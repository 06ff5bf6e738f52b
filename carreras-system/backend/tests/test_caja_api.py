from datetime import date

import pytest

from app.models.transaccion import Transaccion

API = "/api/v1/caja"


@pytest.fixture
async def movimiento_de_carrera(db, carrera):
    txn = Transaccion(
        fecha=date(2024, 5, 12), carrera_id=carrera.id, tipo_id="iva",
        grupo="variable", moneda="ARS", monto_cents=4200,
    )
    db.add(txn)
    await db.commit()
    return txn


class TestCatalog:
    async def test_tipos_are_global_only(self, client):
        body = (await client.get(f"{API}/tipos")).json()
        assert body["success"]
        ids = {t["id"] for t in body["data"]}
        assert ids == {"gasto_fijo", "gasto_operativo", "inversion", "adelanto_socio", "deuda"}
        assert all(t["alcance"] == "global" for t in body["data"])

    async def test_default_account_seeded(self, client):
        cuentas = (await client.get(f"{API}/cuentas")).json()["data"]
        assert [c["nombre"] for c in cuentas] == ["Caja"]
        assert cuentas[0]["is_default"] is True

    async def test_create_account(self, client):
        body = (await client.post(f"{API}/cuentas", json={"nombre": "Banco", "moneda": "usd"})).json()
        assert body["success"], body
        assert body["data"]["moneda"] == "USD"
        dup = (await client.post(f"{API}/cuentas", json={"nombre": "Banco"})).json()
        assert dup["success"] is False


class TestCreateMovimiento:
    async def test_defaults(self, client):
        body = (await client.post(
            f"{API}/movimientos", json={"fecha": "2024-03-01", "monto": "1.500,50"}
        )).json()
        assert body["success"], body
        data = body["data"]
        assert data["carrera_id"] is None
        assert data["tipo_id"] == "gasto_operativo"
        assert data["grupo"] == "variable"
        assert data["tipo"]["nombre"] == "Gasto operativo"
        assert data["moneda"] == "ARS"
        assert data["monto_cents"] == "150050"
        assert data["estado"] == "pendiente"
        assert data["factura_estado"] == "no_corresponde"

    async def test_explicit_tipo_copies_group(self, client):
        body = (await client.post(
            f"{API}/movimientos",
            json={"fecha": "2024-03-01", "tipo_id": "inversion", "operacion": "expense", "moneda": "usd"},
        )).json()
        assert body["data"]["grupo"] == "inversion"
        assert body["data"]["operacion"] == "expense"
        assert body["data"]["moneda"] == "USD"

    @pytest.mark.parametrize(
        "payload",
        [
            {"fecha": "2024-02-30"},
            {"fecha": "2024-03-01", "moneda": "EUR"},
            {"fecha": "2024-03-01", "operacion": "refund"},
            {"fecha": "2024-03-01", "tipo_id": "no_existe"},
            {"fecha": "2024-03-01", "cuenta_desde": 999},
        ],
    )
    async def test_rejected(self, client, payload):
        body = (await client.post(f"{API}/movimientos", json=payload)).json()
        assert body["success"] is False
        assert body["error"]

    async def test_transfer_to_same_account(self, client):
        cuenta = (await client.get(f"{API}/cuentas")).json()["data"][0]
        body = (await client.post(
            f"{API}/movimientos",
            json={"fecha": "2024-03-01", "operacion": "transfer",
                  "cuenta_desde": cuenta["id"], "cuenta_hasta": float(cuenta["id"])},
        )).json()
        assert body["success"] is False
        assert "misma cuenta" in body["error"]


class TestListMovimientos:
    async def test_global_only_with_filters(self, client, movimiento_de_carrera):
        for fecha, moneda in (("2024-01-10", "ARS"), ("2024-02-10", "USD"), ("2023-02-10", "ARS")):
            await client.post(f"{API}/movimientos", json={"fecha": fecha, "moneda": moneda, "monto": "10"})

        body = (await client.get(f"{API}/movimientos")).json()
        assert body["meta"]["total"] == 3
        assert all(m["carrera_id"] is None for m in body["data"])
        assert [m["fecha"] for m in body["data"]] == ["2024-02-10", "2024-01-10", "2023-02-10"]

        body = (await client.get(f"{API}/movimientos", params={"year": 2024, "month": 2})).json()
        assert [m["fecha"] for m in body["data"]] == ["2024-02-10"]

        body = (await client.get(f"{API}/movimientos", params={"moneda": "ars"})).json()
        assert body["meta"]["total"] == 2

        body = (await client.get(f"{API}/movimientos", params={"limit": 1, "page": 2})).json()
        assert [m["fecha"] for m in body["data"]] == ["2024-01-10"]


class TestUpdateDeleteMovimiento:
    async def test_update(self, client):
        created = (await client.post(f"{API}/movimientos", json={"fecha": "2024-03-01"})).json()["data"]
        body = (await client.put(
            f"{API}/movimientos/{created['id']}",
            json={"nota": "alquiler", "estado": "pagado", "monto": "99,9", "tipo_id": "gasto_fijo"},
        )).json()
        assert body["success"], body
        assert body["data"]["nota"] == "alquiler"
        assert body["data"]["estado"] == "pagado"
        assert body["data"]["monto_cents"] == "9990"
        assert body["data"]["grupo"] == "fijo"

    async def test_update_without_data(self, client):
        created = (await client.post(f"{API}/movimientos", json={"fecha": "2024-03-01"})).json()["data"]
        body = (await client.put(f"{API}/movimientos/{created['id']}", json={})).json()
        assert body["success"] is False

    async def test_invalid_update_changes_nothing(self, client):
        created = (await client.post(
            f"{API}/movimientos", json={"fecha": "2024-03-01", "nota": "original"}
        )).json()["data"]
        body = (await client.put(
            f"{API}/movimientos/{created['id']}", json={"nota": "cambiada", "moneda": "EUR"}
        )).json()
        assert body["success"] is False
        listed = (await client.get(f"{API}/movimientos")).json()["data"]
        assert listed[0]["nota"] == "original"

    async def test_event_rows_cannot_be_touched(self, client, movimiento_de_carrera):
        url = f"{API}/movimientos/{movimiento_de_carrera.id}"
        body = (await client.put(url, json={"nota": "x"})).json()
        assert body["success"] is False
        assert "carrera" in body["error"]
        body = (await client.delete(url)).json()
        assert body["success"] is False

    async def test_delete(self, client):
        created = (await client.post(f"{API}/movimientos", json={"fecha": "2024-03-01"})).json()["data"]
        url = f"{API}/movimientos/{created['id']}"
        assert (await client.delete(url)).json()["success"]
        assert (await client.delete(url)).json()["success"] is False
