import pytest
from httpx import ASGITransport, AsyncClient

from pyvolley.api import create_app


@pytest.fixture(autouse=True)
def _clear_tolerance_env(monkeypatch):
    monkeypatch.delenv("PYVOLLEY_ROLE_SWAP_TOLERANCE", raising=False)


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture
async def client():
    app = create_app()
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://testserver") as async_client:
        yield async_client


def _sample_players(count: int = 12) -> list[dict]:
    positions = ["levantador", "setter", "libero", "líbero", "atacante", "meio"]
    return [
        {
            "id": index + 1,
            "name": f"Player {index + 1}",
            "gender": "M" if index % 2 else "F",
            "position": positions[index % len(positions)],
            "level": index % 5 + 1,
        }
        for index in range(count)
    ]


@pytest.mark.anyio
async def test_health(client: AsyncClient):
    resp = await client.get("/health")
    assert resp.status_code == 200
    assert resp.json()["status"] == "ok"


@pytest.mark.anyio
async def test_stats_endpoint(client: AsyncClient):
    resp = await client.post("/teams/stats", json={"players": _sample_players()})
    assert resp.status_code == 200

    payload = resp.json()
    assert payload["format"] == "INDOOR_6"
    assert payload["stats"]["total"] == 12
    assert payload["stats"]["byGender"] == {"men": 6, "women": 6}
    assert payload["stats"]["byPosition"]["setter"] == 4
    assert payload["stats"]["byPosition"]["libero"] == 4
    assert payload["stats"]["averageLevel"] == 2.8
    assert payload["eligibility"]["eligible"] is True
    assert payload["players"][0]["id"] == "1"
    assert payload["players"][0]["position"] == "setter"


@pytest.mark.anyio
async def test_stats_endpoint_reports_short_roster(client: AsyncClient):
    resp = await client.post("/teams/stats", json={"players": _sample_players(5)})
    assert resp.status_code == 200

    eligibility = resp.json()["eligibility"]
    assert eligibility["eligible"] is False
    assert eligibility["missingPlayers"] == 7
    assert eligibility["warnings"][0].startswith("Insufficient players")


@pytest.mark.anyio
async def test_generate_endpoint(client: AsyncClient):
    resp = await client.post("/teams/generate", json={"players": _sample_players(13)})
    assert resp.status_code == 200

    payload = resp.json()
    teams = payload["teams"]
    assert [team["teamNumber"] for team in teams] == [1, 2]
    assert len(teams[0]["players"]) == len(teams[1]["players"]) == 6
    assert all(team["hasSetter"] and team["hasLibero"] for team in teams)
    assert len(payload["benchPlayers"]) == 1
    summary = payload["summary"]
    assert summary["totalConfirmedPlayers"] == 13
    assert summary["playersInTeams"] == 12
    assert summary["playersOnBench"] == 1
    assert summary["averageLevelDifference"] >= 0


@pytest.mark.anyio
async def test_generate_rejects_short_roster_unless_forced(client: AsyncClient):
    resp = await client.post("/teams/generate", json={"players": _sample_players(5)})
    assert resp.status_code == 400
    assert resp.json()["detail"].startswith("Insufficient players")

    forced = await client.post("/teams/generate", json={"players": _sample_players(5), "force": True})
    assert forced.status_code == 200
    assert forced.json()["summary"]["playersOnBench"] == 1


@pytest.mark.anyio
async def test_generate_with_quads_format(client: AsyncClient):
    resp = await client.post("/teams/generate", json={"players": _sample_players(8), "format": "quads_4"})
    assert resp.status_code == 200
    assert resp.json()["format"] == "QUADS_4"


@pytest.mark.anyio
async def test_unknown_format_is_rejected(client: AsyncClient):
    resp = await client.post("/teams/generate", json={"players": _sample_players(), "format": "BEACH_9"})
    assert resp.status_code == 400
    assert "BEACH_9" in resp.json()["detail"]


@pytest.mark.anyio
async def test_duplicate_ids_fail_validation(client: AsyncClient):
    players = _sample_players()
    players[1]["id"] = players[0]["id"]
    resp = await client.post("/teams/generate", json={"players": players})
    assert resp.status_code == 422
