from __future__ import annotations

from typing import Any

import pytest

from lazywire import Container, Override, define, override

pytest_plugins = ["lazywire.integrations.pytest_plugin"]


class _Mailer:
    def send(self, to: str) -> str:
        return f"smtp:{to}"


class _FakeMailer(_Mailer):
    def send(self, to: str) -> str:
        return f"fake:{to}"


Mailer = define(lambda _resolve: _Mailer(), name="Mailer", provides=_Mailer)
FakeMailer = define(lambda _resolve: _FakeMailer(), name="FakeMailer", provides=_FakeMailer)
Signup = define(lambda mailer: mailer.send("ada@example.com"), dependencies=(Mailer,), name="Signup")


@pytest.fixture()
def lazywire_overrides() -> list[Override[Any]]:
    return [override(Mailer, FakeMailer)]


def test_overrides_fixture_is_applied(lazywire_container: Container) -> None:
    assert lazywire_container.resolve(Signup) == "fake:ada@example.com"
    assert isinstance(lazywire_container.resolve(Mailer), _FakeMailer)


@pytest.mark.parametrize("recipient", ["a@example.com", "b@example.com"])
def test_overrides_apply_to_every_test(lazywire_container: Container, recipient: str) -> None:
    assert lazywire_container.resolve(Mailer).send(recipient) == f"fake:{recipient}"
