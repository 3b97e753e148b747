"""Fixed prose shared by generated READMEs and documentation pages."""

from __future__ import annotations

from pydantic import BaseModel


class ResourceLink(BaseModel):
    title: str
    url: str


RESOURCE_LINKS: list[ResourceLink] = [
    ResourceLink(title="FHEVM Documentation", url="https://docs.zama.ai/fhevm"),
    ResourceLink(title="Zama Protocol Examples", url="https://docs.zama.org/protocol/examples"),
    ResourceLink(title="GitHub Repository", url="https://github.com/zama-ai/fhevm"),
]

# (prose, inline code, prose) triples; empty parts are omitted.
CORRECT_USAGE: list[tuple[str, str, str]] = [
    ("Always call ", "FHE.allowThis()", " for contract permissions"),
    ("Use ", "FHE.allow()", " for user permissions"),
    ("Match encryption signer with transaction sender", "", ""),
]

COMMON_MISTAKES: list[tuple[str, str, str]] = [
    ("Forgetting ", "allowThis()", " permissions"),
    ("Mismatching encryption context", "", ""),
    ("Using deprecated API functions", "", ""),
]

DEPLOY_COMMAND = "npm run deploy:local"
TEST_COMMAND = "npm run test"
