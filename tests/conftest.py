from __future__ import annotations

from typing import List

import pytest

from pdp_client.config import ENV_VARS


@pytest.fixture(autouse=True)
def clean_pdp_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for var in ENV_VARS.values():
        monkeypatch.delenv(var, raising=False)


@pytest.fixture()
def sleeps() -> List[float]:
    return []
