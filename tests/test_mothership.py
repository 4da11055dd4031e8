from mothership import main


def test_register_then_resolve(client):
    res = client.post("/register", json={
        "topic_name": "telemetry",
        "node_id": "node-abc",
        "node_port": 9000,
    })
    assert res.status_code == 200
    assert res.content == b""

    res = client.get("/topics/telemetry")
    assert res.status_code == 200
    # TestClient connects from host "testclient"
    assert res.json() == {
        "node_address": "testclient:9000",
        "node_id": "node-abc",
        "node_topic": "telemetry",
    }


def test_host_in_body_is_ignored(client):
    client.post("/register", json={
        "topic_name": "telemetry",
        "node_id": "node-abc",
        "node_port": 9000,
        "ip": "6.6.6.6",
    })
    assert client.get("/topics/telemetry").json()["node_address"] == "testclient:9000"


def test_unknown_topic_is_400(client):
    res = client.get("/topics/never-registered")
    assert res.status_code == 400
    assert res.json() == {"error": "topic not found"}


def test_corrupt_record_is_500(client, store):
    store.put(b"telemetry", b"no separator here")
    res = client.get("/topics/telemetry")
    assert res.status_code == 500
    assert res.json() == {"error": "bad data for mothership entry"}


def test_missing_field_is_rejected(client):
    res = client.post("/register", json={"topic_name": "telemetry", "node_port": 9000})
    assert res.status_code == 422


def test_bad_port_is_rejected(client):
    res = client.post("/register", json={
        "topic_name": "telemetry",
        "node_id": "node-abc",
        "node_port": 70000,
    })
    assert res.status_code == 422


def test_pipe_in_node_id_is_rejected(client):
    res = client.post("/register", json={
        "topic_name": "telemetry",
        "node_id": "node|abc",
        "node_port": 9000,
    })
    assert res.status_code == 422
    assert client.get("/topics/telemetry").status_code == 400


def test_store_failures_are_500_and_opaque(broken_client):
    res = broken_client.post("/register", json={
        "topic_name": "telemetry",
        "node_id": "node-abc",
        "node_port": 9000,
    })
    assert res.status_code == 500
    assert res.json() == {"error": "directory unavailable"}

    res = broken_client.get("/topics/telemetry")
    assert res.status_code == 500
    assert res.json() == {"error": "directory unavailable"}


def test_status(client):
    client.post("/register", json={"topic_name": "a", "node_id": "n1", "node_port": 9000})
    client.post("/register", json={"topic_name": "b", "node_id": "n2", "node_port": 9001})
    assert client.get("/status").json() == {"node_id": "mothership-test", "topic_count": 2}


def test_main_fails_on_missing_config(tmp_path):
    assert main([str(tmp_path / "nope.toml")]) == 1


def test_main_fails_when_store_cannot_open(tmp_path, monkeypatch):
    blocker = tmp_path / "blocker"
    blocker.write_text("")
    config_path = tmp_path / "mothership.toml"
    config_path.write_text(
        f'port = 8000\ndb_path = "{(blocker / "db").as_posix()}"\nlog_dir = "{(tmp_path / "logs").as_posix()}"\n'
    )
    monkeypatch.setattr("mothership.setup_logging", lambda *a, **kw: None)
    monkeypatch.setattr("mothership.uvicorn.run", lambda *a, **kw: None)
    assert main([str(config_path)]) == 1


def test_topic_with_slash_resolves(client):
    res = client.post("/register", json={
        "topic_name": "sensors/temp",
        "node_id": "node-abc",
        "node_port": 9000,
    })
    assert res.status_code == 200

    expected = {
        "node_address": "testclient:9000",
        "node_id": "node-abc",
        "node_topic": "sensors/temp",
    }
    for path in ("/topics/sensors%2Ftemp", "/topics/sensors/temp"):
        res = client.get(path)
        assert res.status_code == 200
        assert res.json() == expected
