# tests/rewriting/test_json_files.py
"""
Testes da reescrita tipada de arquivos JSON de configuração.

Os testes asseguram que:
- apenas os campos declarados em FIELD_PATHS são alterados
- demais conteúdos do arquivo são preservados
- o texto devolvido é exatamente o que foi gravado (upload KV)
- arquivo ausente é OptionalResourceAbsent (não fatal)
- pai ausente, JSON inválido ou raiz não-objeto é ConfigSchemaMismatch
- BOM UTF-8 (comum em arquivos gerados no Windows) é aceito
"""

import json

import pytest

try:
    from nexus_bootstrap.core.exceptions import ConfigSchemaMismatch, OptionalResourceAbsent
    from nexus_bootstrap.rewriting.json_files import (
        AppConfigUpdate,
        AppSettingsUpdate,
        OcelotGlobalUpdate,
        rewrite_json_file,
    )
except Exception as e:  # noqa: BLE001
    ConfigSchemaMismatch = None
    OptionalResourceAbsent = None
    AppConfigUpdate = None
    AppSettingsUpdate = None
    OcelotGlobalUpdate = None
    rewrite_json_file = None
    _IMPORT_ERR = e
else:
    _IMPORT_ERR = None


def _require_imports():
    if _IMPORT_ERR is not None:
        pytest.fail(f"Missing json rewriting. Import error: {_IMPORT_ERR}")


def _write(path, data):
    path.write_text(json.dumps(data), encoding="utf-8")
    return path


def test_app_config_update_preserves_other_fields(tmp_path):
    """
    Verifica a reescrita de `app-config.json`.

    Invariantes:
        - Consul.Token e TelemetrySettings.Endpoint recebem os novos valores
        - chaves irmãs e chaves de topo não declaradas permanecem intactas
        - o retorno é o JSON gravado em disco
    """
    _require_imports()
    file = _write(
        tmp_path / "app-config.json",
        {"Consul": {"Token": "", "Address": "x"}, "TelemetrySettings": {"Endpoint": ""}, "Keep": [1, 2]},
    )

    text = rewrite_json_file(file, AppConfigUpdate(consul_token="tok", telemetry_endpoint="http://otel:4317"))
    data = json.loads(file.read_text(encoding="utf-8"))

    assert data["Consul"] == {"Token": "tok", "Address": "x"}
    assert data["TelemetrySettings"]["Endpoint"] == "http://otel:4317"
    assert data["Keep"] == [1, 2]
    assert json.loads(text) == data


def test_ocelot_update_targets_service_discovery_provider(tmp_path):
    _require_imports()
    file = _write(
        tmp_path / "ocelot.global.json",
        {"GlobalConfiguration": {"ServiceDiscoveryProvider": {"Host": "", "Port": 8500}}},
    )
    rewrite_json_file(file, OcelotGlobalUpdate(discovery_host="consul", token="tok"))
    provider = json.loads(file.read_text(encoding="utf-8"))["GlobalConfiguration"]["ServiceDiscoveryProvider"]

    assert provider == {"Host": "consul", "Port": 8500, "Token": "tok"}


def test_missing_file_is_optional_absence(tmp_path):
    _require_imports()
    with pytest.raises(OptionalResourceAbsent):
        rewrite_json_file(tmp_path / "absent.json", AppSettingsUpdate(kv_url="u", kv_token="t"))


def test_missing_parent_field_is_schema_mismatch(tmp_path):
    """
    Verifica que um arquivo sem a seção esperada não é "consertado".

    Um appsettings sem `ConsulKV` indica arquivo errado ou template
    divergente; o Step deve falhar em vez de criar a seção.
    """
    _require_imports()
    file = _write(tmp_path / "appsettings.Development.json", {"Logging": {}})
    original = file.read_text(encoding="utf-8")

    with pytest.raises(ConfigSchemaMismatch) as excinfo:
        rewrite_json_file(file, AppSettingsUpdate(kv_url="u", kv_token="t"))

    assert excinfo.value.details["field"] == "ConsulKV.Url"
    assert file.read_text(encoding="utf-8") == original


def test_invalid_json_is_schema_mismatch(tmp_path):
    _require_imports()
    file = tmp_path / "app-config.json"
    file.write_text("{not json", encoding="utf-8")
    with pytest.raises(ConfigSchemaMismatch):
        rewrite_json_file(file, AppConfigUpdate(consul_token="t", telemetry_endpoint="e"))


def test_non_object_root_is_schema_mismatch(tmp_path):
    _require_imports()
    file = _write(tmp_path / "app-config.json", [1, 2, 3])
    with pytest.raises(ConfigSchemaMismatch):
        rewrite_json_file(file, AppConfigUpdate(consul_token="t", telemetry_endpoint="e"))


def test_utf8_bom_is_accepted(tmp_path):
    _require_imports()
    file = tmp_path / "appsettings.Development.json"
    file.write_bytes(b"\xef\xbb\xbf" + json.dumps({"ConsulKV": {}}).encode("utf-8"))

    rewrite_json_file(file, AppSettingsUpdate(kv_url="http://localhost:8500", kv_token="t"))
    assert json.loads(file.read_text(encoding="utf-8"))["ConsulKV"] == {
        "Url": "http://localhost:8500",
        "Token": "t",
    }
