import uuid

import pytest


async def _create_tool(client, mold_id="MOLDE-A", tool_id="FER-A1", useful_life=100000, notes=""):
    resp = await client.post(
        "/api/tools",
        json={"moldId": mold_id, "toolId": tool_id, "usefulLife": useful_life, "notes": notes},
    )
    assert resp.status_code == 201, resp.text
    return resp.json()


@pytest.mark.asyncio
async def test_list_tools_initially_empty(client):
    resp = await client.get("/api/tools")
    assert resp.status_code == 200, resp.text
    assert resp.json() == []


@pytest.mark.asyncio
async def test_create_tool_returns_camel_case_view(client):
    body = await _create_tool(client, notes="Ferramenta de precisão.")

    uuid.UUID(body["id"])
    assert body["moldId"] == "MOLDE-A"
    assert body["toolId"] == "FER-A1"
    assert body["usefulLife"] == 100000
    assert body["accumulatedProduction"] == 0
    assert body["condition"] == "OK"
    assert body["statusLabel"] == "OK"
    assert body["warning"] is False
    assert body["isActive"] is True
    assert body["notes"] == "Ferramenta de precisão."
    assert body["productionHistory"] == []
    assert len(body["lastUpdate"].split("/")) == 3


@pytest.mark.asyncio
async def test_create_tool_accepts_snake_case(client):
    resp = await client.post("/api/tools", json={"mold_id": "MOLDE-A", "tool_id": "FER-A1", "useful_life": 10})
    assert resp.status_code == 201, resp.text


@pytest.mark.asyncio
async def test_duplicate_tool_conflicts(client):
    await _create_tool(client)

    resp = await client.post("/api/tools", json={"moldId": "MOLDE-A", "toolId": "FER-A1", "usefulLife": 5})

    assert resp.status_code == 409, resp.text
    assert resp.json()["code"] == "E_CONFLICT"


@pytest.mark.asyncio
async def test_create_tool_rejects_non_positive_life(client):
    resp = await client.post("/api/tools", json={"moldId": "MOLDE-A", "toolId": "FER-A1", "usefulLife": 0})

    assert resp.status_code == 400, resp.text
    assert resp.json()["code"] == "E_INVALID_INPUT"


@pytest.mark.asyncio
async def test_production_and_swap_flow(client):
    tool = await _create_tool(client)

    resp = await client.put(f"/api/tools/{tool['id']}/production", json={"pieces": 75000, "date": "20/08/2025"})
    assert resp.status_code == 200, resp.text
    body = resp.json()
    assert body["condition"] == "WARN"
    assert body["statusLabel"] == "Atenção!"
    assert body["warning"] is True

    resp = await client.put(f"/api/tools/{tool['id']}/production", json={"pieces": 10000, "date": "21/08/2025"})
    body = resp.json()
    assert body["accumulatedProduction"] == 85000
    assert body["condition"] == "REPLACE"
    assert body["statusLabel"] == "Trocar Ferramenta (TF)"
    assert body["productionHistory"] == [
        {"date": "20/08/2025", "pieces": 75000},
        {"date": "21/08/2025", "pieces": 10000},
    ]

    resp = await client.put(f"/api/tools/{tool['id']}/swap")
    assert resp.status_code == 200, resp.text
    body = resp.json()
    assert body["accumulatedProduction"] == 0
    assert body["condition"] == "OK"
    assert body["productionHistory"] == []

    resp = await client.get("/api/tools/swap-history")
    assert resp.status_code == 200, resp.text
    history = resp.json()
    assert len(history) == 1
    assert history[0]["moldId"] == "MOLDE-A"
    assert history[0]["toolId"] == "FER-A1"
    assert history[0]["productionBeforeSwap"] == 85000
    assert len(history[0]["date"]) == len("21/08/2025 08:00:00")


@pytest.mark.asyncio
async def test_production_defaults_to_today(client):
    tool = await _create_tool(client)

    resp = await client.put(f"/api/tools/{tool['id']}/production", json={"pieces": 5})

    assert resp.status_code == 200, resp.text
    assert resp.json()["productionHistory"][0]["date"] == resp.json()["lastUpdate"]


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "payload",
    [
        {"pieces": 0},
        {"pieces": -3},
        {"pieces": 10, "date": "2025-08-21"},
    ],
)
async def test_production_rejects_invalid_input(client, payload):
    tool = await _create_tool(client)

    resp = await client.put(f"/api/tools/{tool['id']}/production", json=payload)

    assert resp.status_code == 400, resp.text


@pytest.mark.asyncio
async def test_unknown_tool_is_404(client):
    missing = uuid.uuid4()

    resp = await client.put(f"/api/tools/{missing}/production", json={"pieces": 1})
    assert resp.status_code == 404, resp.text
    assert resp.json()["code"] == "E_NOT_FOUND"

    assert (await client.put(f"/api/tools/{missing}/swap")).status_code == 404
    assert (await client.put(f"/api/tools/{missing}/retire")).status_code == 404
    assert (await client.delete(f"/api/tools/{missing}")).status_code == 404
    assert (await client.delete("/api/tools/not-a-uuid")).status_code == 404


@pytest.mark.asyncio
async def test_retire_and_delete(client):
    tool = await _create_tool(client)

    resp = await client.put(f"/api/tools/{tool['id']}/retire")
    assert resp.status_code == 200, resp.text
    assert resp.json()["isActive"] is False
    assert (await client.get("/api/tools")).json() == []

    resp = await client.delete(f"/api/tools/{tool['id']}")
    assert resp.status_code == 200, resp.text
    assert resp.json() == {"message": "Tool deleted"}
    assert (await client.delete(f"/api/tools/{tool['id']}")).status_code == 404


@pytest.mark.asyncio
async def test_mold_comments(client):
    resp = await client.post(
        "/api/tools/mold-comments",
        json={"moldId": "MOLDE-A", "comment": "Pequeno ajuste de pressão.", "date": "21/08/2025"},
    )
    assert resp.status_code == 201, resp.text
    assert resp.json() == {"moldId": "MOLDE-A", "comment": "Pequeno ajuste de pressão.", "date": "21/08/2025"}

    await client.post(
        "/api/tools/mold-comments",
        json={"moldId": "MOLDE-A", "comment": "Verificar rebarba.", "date": "21/08/2025"},
    )

    resp = await client.get("/api/tools/mold-comments/MOLDE-A")
    assert resp.status_code == 200, resp.text
    assert resp.json() == {"21/08/2025": ["Verificar rebarba.", "Pequeno ajuste de pressão."]}

    resp = await client.post(
        "/api/tools/mold-comments",
        json={"moldId": "MOLDE-A", "comment": "x", "date": "21-08-2025"},
    )
    assert resp.status_code == 400, resp.text


@pytest.mark.asyncio
async def test_scrap_replace_semantics(client):
    resp = await client.post("/api/tools/scrap", json={"moldId": "MOLDE-A", "monthYear": "08/2025", "quantity": 100})
    assert resp.status_code == 200, resp.text
    resp = await client.post("/api/tools/scrap", json={"moldId": "MOLDE-A", "monthYear": "08/2025", "quantity": 150})
    assert resp.json() == {"moldId": "MOLDE-A", "monthYear": "08/2025", "quantity": 150}

    resp = await client.get("/api/tools/scrap")
    assert resp.status_code == 200, resp.text
    assert resp.json() == {"08/2025": {"MOLDE-A": 150}}


@pytest.mark.asyncio
async def test_scrap_rejects_malformed_month(client):
    resp = await client.post("/api/tools/scrap", json={"moldId": "MOLDE-A", "monthYear": "2025-08", "quantity": 1})

    assert resp.status_code == 400, resp.text
    assert resp.json()["code"] == "E_INVALID_INPUT"


@pytest.mark.asyncio
async def test_request_headers(client):
    resp = await client.get("/api/tools")

    assert "x-request-id" in resp.headers
    assert "x-process-time" in resp.headers
