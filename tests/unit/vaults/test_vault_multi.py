# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Unit tests for VaultMulti."""

from __future__ import annotations

import pytest

from fleetvault.errors import SecretNotFoundError, VaultConfigurationError, VaultError
from fleetvault.models import ModelSecretId
from fleetvault.vaults import VaultCached, VaultMemory, VaultMulti
from tests.conftest import assert_vault_interface
from tests.helpers import RecordingVault, binary_secret


@pytest.fixture
def first() -> RecordingVault:
    return RecordingVault(name="v1", secrets={"a": binary_secret("a", b"from-v1")})


@pytest.fixture
def second() -> RecordingVault:
    return RecordingVault(name="v2", secrets={"b": binary_secret("b", b"from-v2")})


class TestVaultMultiGet:
    """Ordered lookup with fallthrough on not-found only."""

    def test_satisfies_vault_contract(self, first: RecordingVault) -> None:
        assert_vault_interface(VaultMulti([first]))

    @pytest.mark.asyncio
    async def test_each_key_served_by_the_vault_that_has_it(
        self,
        first: RecordingVault,
        second: RecordingVault,
    ) -> None:
        vault = VaultMulti([first, second])

        assert (await vault.get(ModelSecretId(key="a"))).data == b"from-v1"
        assert (await vault.get(ModelSecretId(key="b"))).data == b"from-v2"
        assert second.get_calls == ["b"]

        with pytest.raises(SecretNotFoundError) as exc_info:
            await vault.get(ModelSecretId(key="c"))
        assert exc_info.value.context["vault_count"] == 2

    @pytest.mark.asyncio
    async def test_primary_wins_when_both_hold_the_key(
        self,
        first: RecordingVault,
        second: RecordingVault,
    ) -> None:
        second.secrets["a"] = binary_secret("a", b"shadowed")

        secret = await VaultMulti([first, second]).get(ModelSecretId(key="a"))

        assert secret.data == b"from-v1"
        assert second.get_calls == []

    @pytest.mark.asyncio
    async def test_hard_error_stops_the_walk(
        self,
        first: RecordingVault,
        second: RecordingVault,
    ) -> None:
        first.error = VaultError("permission denied")

        with pytest.raises(VaultError, match="permission denied"):
            await VaultMulti([first, second]).get(ModelSecretId(key="b"))

        assert second.get_calls == []

    def test_empty_list_rejected(self) -> None:
        with pytest.raises(VaultConfigurationError):
            VaultMulti([])


class TestVaultMultiWriteAndAbout:
    """Primary-only writes and composite description."""

    @pytest.mark.asyncio
    async def test_set_writes_primary_only(
        self,
        first: RecordingVault,
        second: RecordingVault,
    ) -> None:
        await VaultMulti([first, second]).set(binary_secret("new"))

        assert first.set_calls == ["new"]
        assert second.set_calls == []

    @pytest.mark.asyncio
    async def test_about_lists_members(
        self,
        first: RecordingVault,
        second: RecordingVault,
    ) -> None:
        info = await VaultMulti([first, second]).about()
        assert info.name == "multi(v1, v2)"

    @pytest.mark.asyncio
    async def test_decorators_compose(self, first: RecordingVault) -> None:
        vault = VaultCached(VaultMulti([first, VaultMemory(name="mem")]))

        await vault.get(ModelSecretId(key="a"))
        await vault.get(ModelSecretId(key="a"))

        assert first.get_calls == ["a"]
        assert (await vault.about()).name == "multi(v1, mem)"
