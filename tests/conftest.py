"""Shared pytest fixtures for the FHEVM example hub test suite.

Provides reusable fixtures for:
- A temporary example hub checkout (base template, contracts, tests, helpers)
- Configuration pointing at that hub
- The bundled catalog, a materializer and a doc emitter
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import pytest

from fhevm_hub.catalog import Catalog
from fhevm_hub.config import HubConfig
from fhevm_hub.reporter.docs import DocEmitter
from fhevm_hub.scaffolder.materializer import TemplateMaterializer


# ---------------------------------------------------------------------------
# Sample sources
# ---------------------------------------------------------------------------

COUNTER_SOL = """// SPDX-License-Identifier: BSD-3-Clause-Clear
pragma solidity ^0.8.24;

import {FHE, euint32, externalEuint32} from "@fhevm/solidity/lib/FHE.sol";

contract FHECounter {
    euint32 private _count;

    function increment(externalEuint32 inputEuint32, bytes calldata inputProof) external {
        euint32 value = FHE.fromExternal(inputEuint32, inputProof);
        _count = FHE.add(_count, value);
        FHE.allowThis(_count);
        FHE.allow(_count, msg.sender);
    }
}
"""

COUNTER_TS = """import { expect } from "chai";
import { ethers } from "hardhat";

describe("FHECounter", function () {
  it("starts uninitialized", async function () {
    const counter = await ethers.deployContract("FHECounter");
    expect(await counter.getCount()).to.eq(ethers.ZeroHash);
  });
});
"""

AUCTION_SOL = """// SPDX-License-Identifier: BSD-3-Clause-Clear
pragma solidity ^0.8.24;

contract BlindAuction {
    address public owner;
}
"""

AUCTION_TS = """import { expect } from "chai";

describe("BlindAuction", function () {
  it("deploys", async function () {
    expect(true).to.be.true;
  });
});
"""

FHEVM_HELPER_TS = """import { createInstance } from "fhevmjs";

export async function createFhevmInstance() {
  return await createInstance({ chainId: 31337 });
}
"""

TEMPLATE_MANIFEST: dict[str, Any] = {
    "name": "fhevm-hardhat-template",
    "description": "Hardhat-based template for developing FHEVM Solidity smart contracts",
    "version": "0.0.1",
    "license": "BSD-3-Clause-Clear",
    "keywords": ["template"],
    "scripts": {
        "compile": "hardhat compile",
        "test": "hardhat test",
        "deploy:local": "hardhat deploy --network localhost",
    },
    "devDependencies": {"hardhat": "^2.26.0"},
}

TEMPLATE_COUNTER_SOL = "// template copy of the counter\n"


def _write(path: Path, content: str) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
    return path


# ---------------------------------------------------------------------------
# Environment isolation
# ---------------------------------------------------------------------------

@pytest.fixture(autouse=True)
def _clean_hub_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep developer FHEVM_HUB_* settings out of the tests."""
    for name in (
        "FHEVM_HUB_ROOT",
        "FHEVM_HUB_TEMPLATE_DIR",
        "FHEVM_HUB_CATALOG",
        "FHEVM_HUB_DOCS_DIR",
        "FHEVM_HUB_NAMESPACE",
    ):
        monkeypatch.delenv(name, raising=False)


# ---------------------------------------------------------------------------
# Hub checkout
# ---------------------------------------------------------------------------

@pytest.fixture
def hub_root(tmp_path: Path) -> Path:
    """Temporary hub checkout mirroring the real repository layout.

    The base template ships its own ``contracts/FHECounter.sol`` (so overlay
    overwrites can be observed) and a test file that no catalog entry uses.
    """
    root = tmp_path / "hub"
    template = root / "fhevm-hardhat-template"
    _write(template / "package.json", json.dumps(TEMPLATE_MANIFEST, indent=2))
    _write(template / "hardhat.config.ts", "export default {};\n")
    _write(template / "contracts" / "FHECounter.sol", TEMPLATE_COUNTER_SOL)
    _write(template / "test" / "TemplateSmoke.ts", "// smoke\n")
    _write(template / "deploy" / "deploy.ts", "export default async function () {}\n")

    _write(root / "contracts" / "basic" / "FHECounter.sol", COUNTER_SOL)
    _write(root / "contracts" / "auctions" / "BlindAuction.sol", AUCTION_SOL)
    _write(root / "test" / "basic" / "FHECounter.ts", COUNTER_TS)
    _write(root / "test" / "auctions" / "BlindAuction.ts", AUCTION_TS)
    _write(root / "test" / "utils" / "fhevm.ts", FHEVM_HELPER_TS)
    yield root


@pytest.fixture
def hub_config(hub_root: Path, tmp_path: Path) -> HubConfig:
    """Configuration pointing at the temporary hub."""
    return HubConfig(hub_root=hub_root, docs_dir=tmp_path / "docs")


@pytest.fixture
def catalog() -> Catalog:
    """The catalog bundled with the package."""
    return Catalog.default()


@pytest.fixture
def materializer(hub_config: HubConfig, catalog: Catalog) -> TemplateMaterializer:
    return TemplateMaterializer(hub_config, catalog)


@pytest.fixture
def emitter(hub_config: HubConfig, catalog: Catalog) -> DocEmitter:
    return DocEmitter(hub_config, catalog)


@pytest.fixture
def out_dir(tmp_path: Path) -> Path:
    """Destination for generated projects; not created up front."""
    return tmp_path / "out" / "x"


@pytest.fixture
def template_manifest() -> dict[str, Any]:
    """A fresh copy of the base template's ``package.json`` contents."""
    return json.loads(json.dumps(TEMPLATE_MANIFEST))
