import io

import openpyxl

API = "/api/v1/admin"


async def _populate(client, make_carrera):
    created = await make_carrera(nombre="Respaldo", fecha="2024-07-07", mp_pct="2,5")
    cid = created["id"]
    await client.put(
        f"/api/v1/carreras/{cid}/ventas",
        json={"items": [{"nombre": "Pack", "tipo": "PACK", "precio": "1.500,00", "cantidad": 12},
                        {"nombre": "USD", "moneda": "USD", "precio": "8", "cantidad": 3}]},
    )
    await client.put(
        f"/api/v1/carreras/{cid}/fotografos",
        json={"items": [{"nombre": "Lucía", "costo": "4000", "horas_trabajadas": "3,5"}]},
    )
    await client.put(
        f"/api/v1/carreras/{cid}/gastos-especificos",
        json={"items": [{"nombre": "Flete", "monto": "700"}]},
    )
    await client.post("/api/v1/caja/movimientos", json={"fecha": "2024-07-08", "operacion": "opening"})
    return cid


class TestBackup:
    async def test_export_reset_import_round_trip(self, client, make_carrera):
        cid = await _populate(client, make_carrera)
        before = (await client.get("/api/v1/carreras")).json()["data"]

        snapshot = (await client.get(f"{API}/export")).json()["data"]
        assert len(snapshot["carreras"]) == 1
        assert snapshot["carreras"][0]["ingreso_ars_cents"] == "1800000"
        assert "usuarios" not in snapshot

        reset = (await client.post(f"{API}/reset")).json()
        assert reset["success"]
        assert reset["data"]["counts"]["carreras"] == 1
        assert (await client.get("/api/v1/carreras")).json()["data"] == []
        # Catalogs come back after a reset
        assert len((await client.get("/api/v1/caja/tipos")).json()["data"]) == 5

        imported = (await client.post(f"{API}/import", json=snapshot)).json()
        assert imported["success"], imported
        assert imported["data"]["counts"]["carrera_fotografos"] == 1

        after = (await client.get("/api/v1/carreras")).json()["data"]
        assert after == before
        detail = (await client.get(f"/api/v1/carreras/{cid}")).json()["data"]
        assert detail["fotografos"][0]["horas_trabajadas"] == 3.5
        movimientos = (await client.get("/api/v1/caja/movimientos")).json()["data"]
        assert movimientos[0]["operacion"] == "opening"

    async def test_malformed_snapshot_leaves_data_alone(self, client, make_carrera):
        await _populate(client, make_carrera)
        snapshot = (await client.get(f"{API}/export")).json()["data"]
        snapshot["carreras"][0]["fecha"] = "07/07/2024"

        body = (await client.post(f"{API}/import", json=snapshot)).json()
        assert body["success"] is False
        assert "carreras[0].fecha" in body["error"]
        assert len((await client.get("/api/v1/carreras")).json()["data"]) == 1


class TestXlsxExport:
    async def test_workbook(self, client, make_carrera):
        await _populate(client, make_carrera)
        resp = await client.get(f"{API}/export/carreras.xlsx")
        assert resp.status_code == 200
        assert resp.headers["content-type"].startswith(
            "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"
        )

        wb = openpyxl.load_workbook(io.BytesIO(resp.content))
        ws = wb["Carreras"]
        assert ws.cell(row=1, column=1).value == "Fecha"
        assert ws.cell(row=2, column=2).value == "Respaldo"
        assert ws.cell(row=2, column=6).value == 18000
        assert ws.max_row == 2
