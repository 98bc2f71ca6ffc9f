# src/nexus_bootstrap/tooling/templates.py
"""
Download e extração dos arquivos de template (solução, serviço, bibliotecas).

Cada arquivo `.zip` é baixado para um diretório temporário, extraído, e a
subpasta relevante é copiada para o destino. O diretório temporário é
sempre removido. Falhas de download, resposta não-2xx ou zip inválido
viram `TemplateDownloadError`.

Não faz parte do pipeline de provisionamento: é usado pelos comandos
`nexus-bootstrap new` (solução + bibliotecas) e `nexus-bootstrap add-service`.
"""

from __future__ import annotations

import shutil
import tempfile
import zipfile
from pathlib import Path
from typing import Any, Dict, Optional, Union

import httpx

from nexus_bootstrap.core.exceptions import TemplateDownloadError

SOLUTION_TEMPLATE_ROOT = "nexus-master"
SERVICE_TEMPLATE_ROOT = "nexus-template-master/ServiceTemplate"
LIBRARIES_ROOT = "nexus-libraries-master"


class TemplateProvisioner:
    def __init__(
        self,
        urls: Dict[str, str],
        *,
        timeout_seconds: float = 60.0,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        self.urls = dict(urls)
        self._timeout = timeout_seconds
        self._transport = transport

    @classmethod
    def from_config(cls, config: Dict[str, Any], **kwargs: Any) -> "TemplateProvisioner":
        return cls((config or {}).get("templates") or {}, **kwargs)

    def _url(self, kind: str) -> str:
        url = self.urls.get(kind)
        if not url:
            raise TemplateDownloadError(
                message=f"URL de template '{kind}' não configurada",
                details={"kind": kind},
                hint=f"Declare templates.{kind} na configuração",
            )
        return url

    def _download(self, url: str, target: Path) -> None:
        try:
            with httpx.Client(timeout=self._timeout, transport=self._transport, follow_redirects=True) as client:
                with client.stream("GET", url) as response:
                    status_code = response.status_code
                    if response.is_success:
                        with target.open("wb") as f:
                            for chunk in response.iter_bytes():
                                f.write(chunk)
        except httpx.HTTPError as e:
            raise TemplateDownloadError(
                message="Download do template falhou",
                details={"url": url, "exc_type": e.__class__.__name__, "exc_message": str(e)},
            ) from e

        # o erro é levantado fora do stream: exceções congeladas não aceitam __traceback__
        if not 200 <= status_code < 300:
            raise TemplateDownloadError(
                message=f"Download do template falhou ({status_code})",
                details={"url": url, "status_code": status_code},
            )

    def _fetch(self, kind: str, source_root: str, destination: Union[str, Path]) -> Path:
        dest = Path(destination)
        with tempfile.TemporaryDirectory(prefix="nexus-") as tmp:
            tmp_path = Path(tmp)
            archive = tmp_path / f"{kind}.zip"
            extract_dir = tmp_path / kind
            self._download(self._url(kind), archive)

            try:
                with zipfile.ZipFile(archive) as zf:
                    zf.extractall(extract_dir)
            except zipfile.BadZipFile as e:
                raise TemplateDownloadError(
                    message="Arquivo de template inválido",
                    details={"kind": kind},
                ) from e

            source = extract_dir / source_root
            if not source.is_dir():
                raise TemplateDownloadError(
                    message=f"Pasta '{source_root}' ausente no template",
                    details={"kind": kind, "expected": source_root},
                )
            shutil.copytree(source, dest, dirs_exist_ok=True)
        return dest

    def download_solution_template(self, solution_name: str, destination: Union[str, Path]) -> Path:
        dest = self._fetch("solution", SOLUTION_TEMPLATE_ROOT, destination)
        template_sln = dest / "nexus.sln"
        if template_sln.exists():
            template_sln.rename(dest / f"{solution_name}.sln")
        return dest

    def download_service_template(self, destination: Union[str, Path]) -> Path:
        return self._fetch("service", SERVICE_TEMPLATE_ROOT, destination)

    def download_libraries(self, destination: Union[str, Path]) -> Path:
        return self._fetch("libraries", LIBRARIES_ROOT, destination)
