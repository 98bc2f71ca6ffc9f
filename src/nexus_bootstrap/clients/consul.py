# src/nexus_bootstrap/clients/consul.py
"""
Cliente HTTP do service registry (Consul) usado pelos Steps.

Operações:
    - bootstrap_acl()                                  → token de gerenciamento
    - create_policy(credential, rules, scope)          → PolicyRecord
    - create_token(credential, scope, policy_name)     → SecretID
    - put_key_value(scope, payload, credential)        → None

Qualquer resposta não-2xx, corpo inesperado ou erro de transporte vira
`RegistryRequestError`; o Step chamador converte em FAILED. Não há
retry: timeouts pertencem à chamada (`timeout_seconds`).
"""

from __future__ import annotations

from typing import Any, Dict, Optional

import httpx

from nexus_bootstrap.core.exceptions import RegistryRequestError
from nexus_bootstrap.core.pipeline.types import PolicyRecord

TOKEN_HEADER = "X-Consul-Token"


class ConsulClient:
    """Cliente síncrono das APIs de ACL e KV do Consul."""

    def __init__(
        self,
        base_url: str,
        *,
        timeout_seconds: float = 10.0,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self._client = httpx.Client(
            base_url=self.base_url,
            timeout=timeout_seconds,
            transport=transport,
        )

    @classmethod
    def from_config(cls, config: Dict[str, Any], **kwargs: Any) -> "ConsulClient":
        registry = (config or {}).get("registry") or {}
        return cls(
            registry.get("url", "http://localhost:8500"),
            timeout_seconds=float(registry.get("timeout_seconds", 10)),
            **kwargs,
        )

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> "ConsulClient":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    # -----------------------------
    # Transporte
    # -----------------------------
    def _put(
        self,
        path: str,
        *,
        credential: Optional[str],
        json: Any = None,
        content: Optional[str] = None,
    ) -> httpx.Response:
        headers = {TOKEN_HEADER: credential} if credential else {}
        try:
            response = self._client.put(path, headers=headers, json=json, content=content)
        except httpx.HTTPError as e:
            raise RegistryRequestError(
                message="Service registry inacessível",
                details={"path": path, "url": self.base_url, "exc_type": e.__class__.__name__, "exc_message": str(e)},
                hint="Verifique se o discovery server está em execução e acessível em registry.url",
            ) from e

        if not response.is_success:
            raise RegistryRequestError(
                message=f"Service registry rejeitou a requisição ({response.status_code})",
                details={"path": path, "status_code": response.status_code, "body": response.text[:500]},
                hint="Verifique o token global e as regras de ACL enviadas",
            )
        return response

    def _field(self, response: httpx.Response, name: str, path: str) -> str:
        try:
            value = response.json()[name]
        except (ValueError, KeyError, TypeError) as e:
            raise RegistryRequestError(
                message=f"Resposta do service registry sem o campo '{name}'",
                details={"path": path, "body": response.text[:500]},
            ) from e
        return str(value)

    # -----------------------------
    # ACL
    # -----------------------------
    def bootstrap_acl(self) -> str:
        path = "/v1/acl/bootstrap"
        response = self._put(path, credential=None)
        return self._field(response, "SecretID", path)

    def create_policy(self, credential: str, rules: str, scope: str) -> PolicyRecord:
        path = "/v1/acl/policy"
        body = {
            "Name": scope,
            "Description": f"Policy for {scope}",
            "Rules": rules,
        }
        response = self._put(path, credential=credential, json=body)
        return PolicyRecord(
            id=self._field(response, "ID", path),
            name=self._field(response, "Name", path),
        )

    def create_token(self, credential: str, scope: str, policy_name: str) -> str:
        path = "/v1/acl/token"
        body = {
            "Description": f"Token for {scope}",
            "Policies": [{"Name": policy_name}],
        }
        response = self._put(path, credential=credential, json=body)
        return self._field(response, "SecretID", path)

    # -----------------------------
    # KV
    # -----------------------------
    def put_key_value(self, scope: str, payload: str, credential: str) -> None:
        self._put(f"/v1/kv/{scope}/app-config", credential=credential, content=payload)
