def test_health(client):
    r = client.get("/v1/health")
    assert r.status_code == 200
    assert r.json() == {"status": "ok"}


def test_issue_admin_numbers(client):
    body = {"channel": "admin", "reference_date": "2024-01-15"}

    first = client.post("/v1/order-numbers", json=body)
    second = client.post("/v1/order-numbers", json=body)

    assert first.status_code == 201
    assert first.json() == {
        "order_number": "ADM-20240115-001",
        "key": "admin:20240115",
        "prefix": "ADM",
        "day": "20240115",
        "sequence": 1,
    }
    assert second.json()["order_number"] == "ADM-20240115-002"


def test_issue_sales_rep_number_defaults_to_today(client):
    # app clock pinned to 2024-01-15 by the generator fixture
    r = client.post("/v1/order-numbers", json={"channel": "sales-rep", "actor_id": "user-00001234"})

    assert r.status_code == 201
    assert r.json()["order_number"] == "SRP-1234-20240115-001"
    assert r.json()["key"] == "rep:user-00001234:20240115"


def test_datetime_reference_is_reduced_to_utc_day(client):
    r = client.post(
        "/v1/order-numbers",
        json={"channel": "customer-portal", "reference_date": "2024-01-15T23:30:00-05:00"},
    )
    assert r.json()["order_number"] == "CPO-20240116-001"


def test_unknown_channel_is_a_400(client, generator):
    r = client.post("/v1/order-numbers", json={"channel": "bogus-channel"})

    assert r.status_code == 400
    assert r.json()["detail"]["code"] == "INVALID_CHANNEL"
    assert len(generator.store) == 0


def test_missing_actor_is_a_400(client, generator):
    r = client.post("/v1/order-numbers", json={"channel": "sales-rep"})

    assert r.status_code == 400
    assert r.json()["detail"]["code"] == "MISSING_ACTOR"
    assert len(generator.store) == 0


def test_counter_lookup(client):
    client.post("/v1/order-numbers", json={"channel": "admin"})

    assert client.get("/v1/order-numbers/counters/admin:20240115").json() == {
        "key": "admin:20240115",
        "value": 1,
    }
    assert client.get("/v1/order-numbers/counters/admin:19990101").json()["value"] == 0


def test_reset_requires_admin_token(client):
    client.post("/v1/order-numbers", json={"channel": "admin"})

    assert client.post("/v1/order-numbers/reset").status_code == 403
    assert client.post("/v1/order-numbers/reset", headers={"X-Admin-Token": "wrong"}).status_code == 403
    assert client.get("/v1/order-numbers/counters/admin:20240115").json()["value"] == 1


def test_reset_restarts_sequences(client, admin_headers):
    client.post("/v1/order-numbers", json={"channel": "admin"})
    client.post("/v1/order-numbers", json={"channel": "admin"})

    r = client.post("/v1/order-numbers/reset", headers=admin_headers)
    assert r.status_code == 200

    again = client.post("/v1/order-numbers", json={"channel": "admin"})
    assert again.json()["order_number"] == "ADM-20240115-001"


def test_reset_disabled_without_configured_token(generator, ledger):
    from fastapi.testclient import TestClient

    from orderdesk.app.core.config import Settings
    from orderdesk.app.main import create_app

    app = create_app(Settings(admin_token=None), order_numbers=generator, stock_ledger=ledger)
    with TestClient(app) as c:
        r = c.post("/v1/order-numbers/reset", headers={"X-Admin-Token": "anything"})

    assert r.status_code == 503


def test_offset_midnight_belongs_to_the_previous_utc_day(client):
    # 00:00 at +05:00 is 19:00 UTC on the 14th
    r = client.post(
        "/v1/order-numbers",
        json={"channel": "admin", "reference_date": "2024-01-15T00:00:00+05:00"},
    )

    assert r.status_code == 201
    assert r.json()["day"] == "20240114"
    assert r.json()["order_number"] == "ADM-20240114-001"


def test_error_body_is_documented(client):
    spec = client.get("/openapi.json").json()

    bad_request = spec["paths"]["/v1/order-numbers"]["post"]["responses"]["400"]
    ref = bad_request["content"]["application/json"]["schema"]["$ref"]
    assert ref.endswith("/OrderNumberErrorResponse")
    assert set(spec["components"]["schemas"]["OrderNumberErrorRead"]["properties"]) == {"code", "message"}


def test_each_app_reads_its_own_settings(generator, ledger):
    from fastapi.testclient import TestClient

    from orderdesk.app.core.config import Settings
    from orderdesk.app.main import create_app

    settings = Settings(app_name="Depot Orders", admin_token="depot-token")
    app = create_app(settings, order_numbers=generator, stock_ledger=ledger)

    assert app.state.settings is settings
    with TestClient(app) as c:
        assert c.post("/v1/order-numbers/reset", headers={"X-Admin-Token": "depot-token"}).status_code == 200
        assert c.get("/openapi.json").json()["info"]["title"] == "Depot Orders"
