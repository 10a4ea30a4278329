from fastapi.testclient import TestClient

from santuri_mcp.api.main import create_app


def test_api_tools_traces_metrics(config, santuri_api) -> None:
    app = create_app(client=santuri_api.client(config))

    with TestClient(app) as client:
        health = client.get("/health")
        assert health.status_code == 200
        assert health.json()["mode"] == "authenticated"
        assert health.json()["stack_id"] == "test-stack-id"

        tools_resp = client.get("/tools")
        assert tools_resp.status_code == 200
        assert [item["name"] for item in tools_resp.json()["items"]] == [
            "search_documentation",
            "list_sources",
        ]
        assert tools_resp.json()["items"][0]["tags"] == ["retrieval", "search"]
        assert tools_resp.json()["items"][1]["tags"] == ["catalog"]

        search_resp = client.post(
            "/tools/search_documentation",
            json={"query": "test query", "limit": 3},
        )
        assert search_resp.status_code == 200
        payload = search_resp.json()
        assert payload["isError"] is False
        assert payload["content"][0]["type"] == "text"
        assert "Anthropic" in payload["content"][0]["text"]

        invalid_resp = client.post("/tools/search_documentation", json={"query": "x", "limit": 99})
        assert invalid_resp.status_code == 200
        assert invalid_resp.json()["isError"] is True

        missing_resp = client.post("/tools/unknown_tool", json={})
        assert missing_resp.status_code == 404
        assert "unknown_tool" in missing_resp.json()["detail"]

        traces_resp = client.get("/traces")
        assert traces_resp.status_code == 200
        items = traces_resp.json()["items"]
        assert [item["tool"] for item in items] == ["search_documentation", "search_documentation"]

        detail_resp = client.get(f"/traces/{items[0]['trace_id']}")
        assert detail_resp.status_code == 200
        assert detail_resp.json()["arguments"] == {"query": "test query", "limit": 3}

        metrics_resp = client.get("/metrics")
        assert metrics_resp.status_code == 200
        assert metrics_resp.json()["total_calls"] == 2
        assert metrics_resp.json()["error_calls"] == 1


def test_api_reads_environment_when_no_config_given(monkeypatch) -> None:
    monkeypatch.setenv("SANTURI_STACK_ID", "env-stack")
    monkeypatch.delenv("SANTURI_API_KEY", raising=False)

    with TestClient(create_app()) as client:
        health = client.get("/health").json()

    assert health["stack_id"] == "env-stack"
    assert health["mode"] == "anonymous"
