# tests/clients/test_consul_client.py
"""
Testes do cliente HTTP do service registry.

As chamadas são servidas por `httpx.MockTransport`: nenhum Consul real
é necessário. Os testes asseguram que:

- cada operação usa o método, caminho e corpo esperados
- o token de gerenciamento vai no header `X-Consul-Token`
- respostas não-2xx e erros de transporte viram `RegistryRequestError`
- respostas sem o campo esperado também viram `RegistryRequestError`

Limites explícitos:
    - Não valida retry (não existe)
"""

import json

import pytest

try:
    import httpx

    from nexus_bootstrap.clients.consul import TOKEN_HEADER, ConsulClient
    from nexus_bootstrap.core.exceptions import ExternalServiceFailure, RegistryRequestError
except Exception as e:  # noqa: BLE001
    httpx = None
    TOKEN_HEADER = None
    ConsulClient = None
    ExternalServiceFailure = None
    RegistryRequestError = None
    _IMPORT_ERR = e
else:
    _IMPORT_ERR = None


def _require_imports():
    if _IMPORT_ERR is not None:
        pytest.fail(f"Missing ConsulClient. Import error: {_IMPORT_ERR}")


def _client(handler):
    return ConsulClient("http://consul.test:8500", transport=httpx.MockTransport(handler))


def test_bootstrap_acl_returns_secret_id():
    _require_imports()
    seen = []

    def handler(request):
        seen.append(request)
        return httpx.Response(200, json={"SecretID": "mgmt-token", "AccessorID": "x"})

    with _client(handler) as client:
        assert client.bootstrap_acl() == "mgmt-token"

    assert seen[0].method == "PUT"
    assert seen[0].url.path == "/v1/acl/bootstrap"
    assert TOKEN_HEADER not in seen[0].headers


def test_create_policy_sends_rules_and_credential():
    """
    Verifica o contrato da criação de policy.

    Invariantes:
        - corpo contém Name (escopo), Description e Rules (conteúdo do rules.hcl)
        - o token global vai no header X-Consul-Token
        - o PolicyRecord devolvido usa ID e Name da resposta
    """
    _require_imports()
    seen = []

    def handler(request):
        seen.append(request)
        return httpx.Response(200, json={"ID": "pol-1", "Name": "orders-api"})

    with _client(handler) as client:
        record = client.create_policy("mgmt", 'key_prefix "" { policy = "read" }', "orders-api")

    body = json.loads(seen[0].content)
    assert seen[0].url.path == "/v1/acl/policy"
    assert seen[0].headers[TOKEN_HEADER] == "mgmt"
    assert body["Name"] == "orders-api"
    assert body["Rules"] == 'key_prefix "" { policy = "read" }'
    assert (record.id, record.name) == ("pol-1", "orders-api")


def test_create_token_links_policy_by_name():
    _require_imports()
    seen = []

    def handler(request):
        seen.append(request)
        return httpx.Response(200, json={"SecretID": "svc-token"})

    with _client(handler) as client:
        assert client.create_token("mgmt", "orders-api", "orders-api") == "svc-token"

    body = json.loads(seen[0].content)
    assert seen[0].url.path == "/v1/acl/token"
    assert body["Policies"] == [{"Name": "orders-api"}]


def test_put_key_value_uses_scope_key():
    _require_imports()
    seen = []

    def handler(request):
        seen.append(request)
        return httpx.Response(200, text="true")

    with _client(handler) as client:
        client.put_key_value("orders-api", '{"a": 1}', "mgmt")

    assert seen[0].url.path == "/v1/kv/orders-api/app-config"
    assert seen[0].content == b'{"a": 1}'
    assert seen[0].headers[TOKEN_HEADER] == "mgmt"


def test_non_success_status_raises():
    _require_imports()

    def handler(request):
        return httpx.Response(403, text="Permission denied")

    with _client(handler) as client:
        with pytest.raises(RegistryRequestError) as excinfo:
            client.create_policy("bad", "rules", "orders-api")

    assert excinfo.value.details["status_code"] == 403
    assert isinstance(excinfo.value, ExternalServiceFailure)


def test_transport_error_raises():
    _require_imports()

    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    with _client(handler) as client:
        with pytest.raises(RegistryRequestError) as excinfo:
            client.bootstrap_acl()

    assert excinfo.value.details["exc_type"] == "ConnectError"
    assert excinfo.value.hint


def test_missing_field_in_response_raises():
    _require_imports()

    def handler(request):
        return httpx.Response(200, json={"Unexpected": True})

    with _client(handler) as client:
        with pytest.raises(RegistryRequestError, match="SecretID"):
            client.bootstrap_acl()


def test_from_config_reads_registry_section():
    _require_imports()
    client = ConsulClient.from_config({"registry": {"url": "http://consul:8500/", "timeout_seconds": 3}})
    try:
        assert client.base_url == "http://consul:8500"
    finally:
        client.close()
