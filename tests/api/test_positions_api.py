"""
API tests for position endpoints.

Tests cover:
- Recording trades over REST
- Listing positions
- Valuing a position at a given price
- Validation and insufficient position errors
"""

from decimal import Decimal

from fastapi.testclient import TestClient


def buy(client: TestClient, symbol: str, quantity: int, price: str):
    return client.post("/positions/trades", json={
        "symbol": symbol,
        "action": "buy",
        "quantity": quantity,
        "price": price,
    })


class TestRecordTradeAPI:
    """Tests for POST /positions/trades."""

    def test_buy_success(self, client: TestClient):
        """
        GIVEN an empty ledger
        WHEN I POST a buy of 10 AAPL @ 100
        THEN response is 201 with the position valued at the trade price
        """
        response = buy(client, "aapl", 10, "100")

        assert response.status_code == 201
        body = response.json()
        assert body["symbol"] == "AAPL"
        assert body["quantity"] == 10
        assert Decimal(body["investment_value"]) == Decimal("1000")
        assert Decimal(body["profit_loss"]) == 0

    def test_oversell_is_400(self, client: TestClient):
        buy(client, "AAPL", 10, "100")

        response = client.post("/positions/trades", json={
            "symbol": "AAPL",
            "action": "sell",
            "quantity": 15,
            "price": "100",
        })

        assert response.status_code == 400
        assert response.json()["error"] == "INSUFFICIENT_POSITION"
        position = client.get("/positions/AAPL", params={"last_price": "100"}).json()
        assert position["quantity"] == 10

    def test_oversized_price_is_400(self, client: TestClient):
        """
        GIVEN a price beyond the accepted range
        WHEN I POST a buy with it
        THEN the trade is rejected and nothing is recorded
        """
        response = buy(client, "TCS", 2, "9e999999")

        assert response.status_code == 400
        assert response.json()["error"] == "INVALID_TRADE_REQUEST"
        assert client.get("/positions/").json()["count"] == 0

    def test_invalid_payload_is_422(self, client: TestClient):
        response = client.post("/positions/trades", json={
            "symbol": "AAPL",
            "action": "hold",
            "quantity": 0,
            "price": "-1",
        })

        assert response.status_code == 422


class TestPositionQueries:
    """Tests for GET /positions endpoints."""

    def test_snapshot_scenario(self, client: TestClient):
        """
        GIVEN buy(AAPL, 10, 100)
        WHEN I GET /positions/AAPL?last_price=110
        THEN investment 1000, P/L 100, P/L% 10
        """
        buy(client, "AAPL", 10, "100")

        response = client.get("/positions/AAPL", params={"last_price": "110"})

        assert response.status_code == 200
        body = response.json()
        assert Decimal(body["investment_value"]) == Decimal("1000")
        assert body["quantity"] == 10
        assert Decimal(body["profit_loss"]) == Decimal("100")
        assert Decimal(body["profit_loss_percent"]) == Decimal("10")

    def test_oversized_valuation_price_is_422(self, client: TestClient):
        buy(client, "AAPL", 10, "100")

        response = client.get("/positions/AAPL", params={"last_price": "9e999999"})

        assert response.status_code == 422

    def test_list_positions(self, client: TestClient):
        buy(client, "TCS", 1, "4000")
        buy(client, "INFY", 2, "1800")

        response = client.get("/positions/")

        assert response.status_code == 200
        body = response.json()
        assert body["count"] == 2
        assert [p["symbol"] for p in body["positions"]] == ["INFY", "TCS"]

    def test_health_and_root(self, client: TestClient):
        assert client.get("/health").json() == {"status": "healthy"}
        assert client.get("/").json()["feed"] == "/ws/feed"
