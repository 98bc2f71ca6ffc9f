# tests/core/pipeline/test_step_protocol.py
"""
Testes de conformidade com o protocolo Step.

O protocolo é estrutural (`@runtime_checkable`): qualquer objeto com
`id`, `kind`, `applicable` e `run` é aceito, sem herança obrigatória.
Os Steps concretos do pacote também precisam satisfazê-lo.
"""

import pytest

try:
    from nexus_bootstrap.core.pipeline.step import Step
    from nexus_bootstrap.core.pipeline.types import RunMode
    from nexus_bootstrap.steps import DevCertsStep, NetworkInitStep
except Exception as e:
    Step = None
    RunMode = None
    DevCertsStep = None
    NetworkInitStep = None
    _IMPORT_ERR = e
else:
    _IMPORT_ERR = None


def _require_imports():
    if _IMPORT_ERR is not None:
        pytest.fail(f"Missing Step protocol or steps. Import error: {_IMPORT_ERR}")


def test_duck_typed_step_conforms(DummyStep):
    _require_imports()
    assert isinstance(DummyStep("x"), Step)


def test_object_without_run_does_not_conform():
    _require_imports()

    class NotAStep:
        id = "nope"
        kind = None

        def applicable(self, run_mode):
            return True

    assert not isinstance(NotAStep(), Step)


def test_concrete_steps_conform(fake_docker, fake_certificates, tmp_path):
    """
    Verifica que Steps concretos satisfazem o protocolo e o predicado de modo.

    Invariantes:
        - NetworkInitStep se aplica aos dois modos
        - DevCertsStep se aplica apenas ao modo LOCAL
    """
    _require_imports()
    network = NetworkInitStep(fake_docker, "consul_external")
    certs = DevCertsStep(fake_certificates, tmp_path / "cert.pfx", "pw")

    assert isinstance(network, Step)
    assert isinstance(certs, Step)
    assert network.applicable(RunMode.LOCAL) and network.applicable(RunMode.CONTAINERIZED)
    assert certs.applicable(RunMode.LOCAL)
    assert not certs.applicable(RunMode.CONTAINERIZED)
