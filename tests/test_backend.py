import pytest

from networth.backend import app


@pytest.fixture
def client():
    app.config["TESTING"] = True
    with app.test_client() as client:
        yield client


PLAN = {
    "startYear": 2024,
    "endYear": 2026,
    "userAge": 35,
    "incomeStreams": [
        {"id": "salary", "name": "Salary", "startYear": 2024, "endYear": 2026, "annualAmount": 1000, "annualGrowth": 0}
    ],
    "expenseStreams": [],
    "majorExpenses": [],
    "assets": [
        {
            "id": "cash",
            "type": "Cash & Equivalents",
            "name": "Cash",
            "currentAmount": 100,
            "annualGrowth": 0,
            "spendPriority": 5,
            "isForSavings": True,
        }
    ],
    "savingsDistributions": [{"id": "r", "startYear": 2024, "endYear": 2026, "distribution": {"cash": 100}}],
}


def test_healthcheck(client):
    response = client.get("/api/health")

    assert response.status_code == 200
    assert response.get_json() == {"status": "ok"}
    assert response.headers["Access-Control-Allow-Origin"] == "*"


def test_schema_lists_editor_tables(client):
    payload = client.get("/api/schema").get_json()

    assert {"incomeStreams", "expenseStreams", "majorExpenses", "assets", "planDefaults"} <= set(payload)
    assert [col["field"] for col in payload["assets"]["columns"]][:2] == ["type", "name"]


def test_projection_preview(client):
    response = client.post("/api/projection", json=PLAN)

    body = response.get_json()
    assert response.status_code == 200
    assert body["warnings"] == []
    assert body["result"]["years"] == [2024, 2025, 2026]
    assert body["result"]["assets"]["cash"] == [100.0, 1100.0, 2100.0]
    assert body["result"]["degraded"] is False


def test_projection_rejects_non_objects(client):
    assert client.post("/api/projection", json=[1, 2]).status_code == 400
    assert client.post("/api/projection", json={"startYear": "soon"}).status_code == 400


def test_put_portfolio_then_export(client):
    response = client.put("/api/portfolio", json=PLAN)
    assert response.status_code == 200

    stored = client.get("/api/portfolio").get_json()
    assert stored["assets"][0]["id"] == "cash"

    exported = client.get("/api/export.csv")
    assert exported.mimetype == "text/csv"
    assert "financial-projection.csv" in exported.headers["Content-Disposition"]
    lines = exported.get_data(as_text=True).split("\n")
    assert lines[0] == "Year,Income: salary,Expense: default,Asset: cash,Net Worth,Savings"
    assert lines[-1] == "2026,1000.00,0.00,2100.00,2100.00,1000.00"


def test_installment_preview(client):
    response = client.get("/api/installment?principal=10000&interest=0&startYear=2024&endYear=2028")

    assert response.get_json() == {"annualInstallmentAmount": 2000.0}


def test_installment_preview_validates_input(client):
    assert client.get("/api/installment?interest=5&startYear=2024").status_code == 400
    assert client.get("/api/installment?principal=100&startYear=2024&endYear=2020").status_code == 400
