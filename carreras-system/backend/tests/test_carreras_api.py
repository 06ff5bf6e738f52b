from datetime import date

from sqlalchemy import func, select

from app.models.transaccion import Transaccion

API = "/api/v1/carreras"

VENTAS = [
    {"nombre": "Pack 5 fotos", "tipo": "PACK", "moneda": "ARS", "precio": "1.000,00", "cantidad": 30},
    {"nombre": "", "moneda": "ARS", "precio": "999", "cantidad": 99},
    {"nombre": "Foto suelta USD", "tipo": "UNIDAD", "moneda": "USD", "precio": "10", "cantidad": 2,
     "comision_pct": "10"},
]


async def _get(client, path):
    resp = await client.get(path)
    assert resp.status_code == 200
    return resp.json()


class TestCreateCarrera:
    async def test_defaults_applied(self, make_carrera):
        data = await make_carrera(nombre="  Trail Sur  ")
        assert data["nombre"] == "Trail Sur"
        assert data["fecha"] == "2024-06-01"
        assert data["moneda_base"] == "ARS"
        assert data["mp_pct"] == 2.0
        assert data["ib_pct"] == 4.0
        assert data["iva_pct"] == 10.5
        assert data["prov_pct"] == 17.0
        assert data["deb_cred_pct"] == 1.2
        assert data["ingreso_ars_cents"] == "0"

    async def test_explicit_values(self, make_carrera):
        data = await make_carrera(mp_pct="3,5", ingreso_ars="1.234,56")
        assert data["mp_pct"] == 3.5
        assert data["ingreso_ars_cents"] == "123456"

    async def test_invalid_date(self, client):
        resp = await client.post(API, json={"nombre": "X", "fecha": "2024-02-30"})
        body = resp.json()
        assert body["success"] is False
        assert "YYYY-MM-DD" in body["error"]

    async def test_name_required(self, client):
        resp = await client.post(API, json={"nombre": "  ", "fecha": "2024-02-01"})
        assert resp.json()["success"] is False


class TestUpdateCarrera:
    async def test_partial_update_keeps_blank_fields(self, client, make_carrera):
        created = await make_carrera()
        resp = await client.put(
            f"{API}/{created['id']}", json={"nombre": "Renombrada", "mp_pct": "", "iva_pct": "21"}
        )
        body = resp.json()
        assert body["success"], body
        assert body["data"]["nombre"] == "Renombrada"
        assert body["data"]["mp_pct"] == 2.0
        assert body["data"]["iva_pct"] == 21.0

    async def test_no_data(self, client, make_carrera):
        created = await make_carrera()
        resp = await client.put(f"{API}/{created['id']}", json={"mp_pct": ""})
        body = resp.json()
        assert body["success"] is False
        assert body["error"] == "sin datos para actualizar"

    async def test_invalid_date(self, client, make_carrera):
        created = await make_carrera()
        resp = await client.put(f"{API}/{created['id']}", json={"fecha": "2024/01/01"})
        assert resp.json()["success"] is False

    async def test_missing(self, client):
        resp = await client.put(f"{API}/9999", json={"nombre": "X"})
        assert resp.json()["success"] is False


class TestVentas:
    async def test_replace_skips_blank_names_and_recomputes_revenue(self, client, make_carrera):
        created = await make_carrera()
        resp = await client.put(f"{API}/{created['id']}/ventas", json={"items": VENTAS})
        body = resp.json()
        assert body["success"], body
        assert [v["nombre"] for v in body["data"]] == ["Pack 5 fotos", "Foto suelta USD"]

        detail = (await _get(client, f"{API}/{created['id']}"))["data"]
        assert detail["ingreso_ars_cents"] == "3000000"
        assert detail["ingreso_usd_cents"] == "2000"
        assert detail["calculo"]["ingresos_ars"] == "3000000"
        assert detail["calculo"]["comision_usd"] == "200"
        assert detail["calculo"]["pedidos_totales"] == 32

    async def test_replacing_twice_is_idempotent(self, client, make_carrera):
        created = await make_carrera()
        for _ in range(2):
            await client.put(f"{API}/{created['id']}/ventas", json={"items": VENTAS})
        ventas = (await _get(client, f"{API}/{created['id']}/ventas"))["data"]
        detail = (await _get(client, f"{API}/{created['id']}"))["data"]
        assert len(ventas) == 2
        assert detail["ingreso_ars_cents"] == "3000000"
        assert detail["ingreso_usd_cents"] == "2000"

    async def test_unknown_carrera(self, client):
        resp = await client.put(f"{API}/9999/ventas", json={"items": VENTAS})
        assert resp.json()["success"] is False


class TestFotografosAsignados:
    async def test_resolves_by_name_and_creates_missing(self, client, make_carrera):
        created = await make_carrera()
        items = [
            {"nombre": "Lucía", "costo": "20.000,00", "fotos_tomadas": 800, "descargas": 200,
             "descargas_unicas": 150, "horas_trabajadas": "5,5"},
            {"nombre": "Pedro", "costo": "15000"},
        ]
        resp = await client.put(f"{API}/{created['id']}/fotografos", json={"items": items})
        body = resp.json()
        assert body["success"], body
        rows = body["data"]
        assert [r["nombre"] for r in rows] == ["Lucía", "Pedro"]
        assert all(r["fotografo_id"] for r in rows)
        assert rows[0]["costo_cents"] == "2000000"
        assert rows[0]["horas_trabajadas"] == 5.5

        fotografos = (await _get(client, "/api/v1/fotografos"))["data"]
        assert sorted(f["nombre"] for f in fotografos) == ["Lucía", "Pedro"]

    async def test_resolves_by_id(self, client, make_carrera):
        created = await make_carrera()
        fot = (await client.post("/api/v1/fotografos", json={"nombre": "Marta"})).json()["data"]
        resp = await client.put(
            f"{API}/{created['id']}/fotografos",
            json={"items": [{"fotografo_id": fot["id"], "costo": "100"}]},
        )
        rows = resp.json()["data"]
        assert rows[0]["fotografo_id"] == fot["id"]
        assert rows[0]["nombre"] == "Marta"

    async def test_empty_replacement_is_refused(self, client, make_carrera):
        created = await make_carrera()
        url = f"{API}/{created['id']}/fotografos"
        await client.put(url, json={"items": [{"nombre": "Uno"}, {"nombre": "Dos"}]})

        for items in ([], [{"nombre": "  "}, {"costo": "100"}]):
            body = (await client.put(url, json={"items": items})).json()
            assert body["success"] is False
            assert "al menos uno" in body["error"]

        rows = (await _get(client, url))["data"]
        assert [r["nombre"] for r in rows] == ["Uno", "Dos"]

    async def test_empty_list_allowed_when_nothing_assigned(self, client, make_carrera):
        created = await make_carrera()
        body = (await client.put(f"{API}/{created['id']}/fotografos", json={"items": []})).json()
        assert body["success"]
        assert body["data"] == []


class TestGastosEspecificos:
    async def test_replace(self, client, make_carrera):
        created = await make_carrera()
        url = f"{API}/{created['id']}/gastos-especificos"
        items = [
            {"nombre": "Hidratación", "tipo": "logistica", "monto": "1.500,50", "pagado": True},
            {"nombre": "", "monto": "99"},
        ]
        body = (await client.put(url, json={"items": items})).json()
        assert body["success"], body
        assert len(body["data"]) == 1
        assert body["data"][0]["monto_cents"] == "150050"
        assert body["data"][0]["pagado"] is True


class TestFigures:
    async def test_worked_example(self, client, make_carrera):
        created = await make_carrera(mp_pct="2", ib_pct="4", iva_pct="0", prov_pct="0", deb_cred_pct="0")
        await client.put(
            f"{API}/{created['id']}/ventas",
            json={"items": [{"nombre": "Foto", "moneda": "ARS", "precio": "10", "cantidad": 30}]},
        )
        calculo = (await _get(client, f"{API}/{created['id']}"))["data"]["calculo"]
        assert calculo["ingresos_ars"] == "30000"
        assert calculo["costo_mp"] == "600"
        assert calculo["costo_ib"] == "1200"
        assert calculo["gastos_totales_ars"] == "1800"
        assert calculo["resultado_final_ars"] == "28200"
        assert calculo["resultado_final"] == "28200"
        assert calculo["costo_org_pre"] == "0"

    async def test_list_matches_detail(self, client, make_carrera):
        first = await make_carrera(nombre="Primera", fecha="2024-03-01")
        second = await make_carrera(nombre="Segunda", fecha="2024-04-01")
        await make_carrera(nombre="Vacía", fecha="2024-01-01")

        await client.put(f"{API}/{first['id']}/ventas", json={"items": VENTAS})
        await client.put(
            f"{API}/{first['id']}/fotografos",
            json={"items": [{"nombre": "Lucía", "costo": "20000"}, {"nombre": "Pedro", "costo": "5000"}]},
        )
        await client.put(
            f"{API}/{first['id']}/gastos-especificos",
            json={"items": [{"nombre": "Hidratación", "monto": "1500"}]},
        )
        await client.put(
            f"{API}/{second['id']}/ventas",
            json={"items": [{"nombre": "Preventa", "tipo": "PREVENTA", "precio": "2500", "cantidad": 40,
                             "comision_pct": "5"}]},
        )

        listed = (await _get(client, API))["data"]
        assert [c["nombre"] for c in listed] == ["Segunda", "Primera", "Vacía"]

        for item in listed:
            calculo = (await _get(client, f"{API}/{item['id']}"))["data"]["calculo"]
            assert item["ingresos_ars"] == calculo["ingresos_ars"]
            assert item["ingresos_usd"] == calculo["ingresos_usd"]
            assert item["costo_mp"] == calculo["costo_mp"]
            assert item["costo_fotografos"] == calculo["costo_fot"]
            assert item["costo_gastos_especificos"] == calculo["costo_gastos_especificos"]
            assert item["gastos_ars"] == calculo["gastos_totales_ars"]
            assert item["resultado_ars"] == calculo["resultado_final_ars"]
            assert item["gastos_usd"] == calculo["gastos_totales_usd"]
            assert item["resultado_usd"] == calculo["resultado_final_usd"]
            assert item["pedidos_totales"] == calculo["pedidos_totales"]
            assert item["comision_ars"] == calculo["comision_ars"]


class TestDeleteCarrera:
    async def test_cascades_to_children(self, client, db, carrera):
        db.add(
            Transaccion(
                fecha=date(2024, 5, 12), carrera_id=carrera.id, tipo_id="iva",
                grupo="variable", moneda="ARS", monto_cents=1000,
            )
        )
        await db.commit()
        await client.put(f"{API}/{carrera.id}/ventas", json={"items": VENTAS})
        await client.put(f"{API}/{carrera.id}/fotografos", json={"items": [{"nombre": "Lucía"}]})

        body = (await client.delete(f"{API}/{carrera.id}")).json()
        assert body["success"]

        assert (await _get(client, f"{API}/{carrera.id}"))["success"] is False
        assert (await _get(client, f"{API}/{carrera.id}/ventas"))["data"] == []
        assert (await _get(client, f"{API}/{carrera.id}/fotografos"))["data"] == []
        remaining = await db.execute(
            select(func.count(Transaccion.id)).where(Transaccion.carrera_id == carrera.id)
        )
        assert remaining.scalar() == 0
        # The photographer itself survives
        assert len((await _get(client, "/api/v1/fotografos"))["data"]) == 1

    async def test_missing(self, client):
        assert (await client.delete(f"{API}/9999")).json()["success"] is False
