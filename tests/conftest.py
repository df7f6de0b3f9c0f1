# CFSync Test Fixtures
# Pytest fixtures for CFSync tests

import json
import tempfile
from collections.abc import Generator
from pathlib import Path
from typing import Any

import pytest
import yaml

from cfsync.client.memory import InMemoryContentClient
from cfsync.graph.types import Asset, Entry


def entry_link(entry_id: str) -> dict[str, Any]:
    return {"sys": {"type": "Link", "linkType": "Entry", "id": entry_id}}


def asset_link(asset_id: str) -> dict[str, Any]:
    return {"sys": {"type": "Link", "linkType": "Asset", "id": asset_id}}


def build_entry(entry_id: str, content_type: str = "page", **fields: Any) -> Entry:
    """Build an entry with plain (non-localized) fields."""
    fields.setdefault("title", entry_id.replace("-", " ").title())
    return Entry(id=entry_id, content_type=content_type, fields=fields, sys={"version": 3})


def build_asset(asset_id: str, **fields: Any) -> Asset:
    fields.setdefault("title", {"en-US": asset_id})
    return Asset(id=asset_id, fields=fields, sys={"version": 1})


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def temp_home(temp_dir: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Create a temporary home directory."""
    home = temp_dir / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.delenv("CFSYNC_CONFIG", raising=False)
    return home


@pytest.fixture
def client() -> InMemoryContentClient:
    """Empty in-memory client."""
    return InMemoryContentClient()


@pytest.fixture
def site_client() -> InMemoryContentClient:
    """
    A small site.

    homepage-1 (page) -> hero (asset), offer-1 (offer), about-1 (page)
    offer-1 (offer)   -> logo (asset)
    about-1 (page)    -> logo (asset)
    """
    return InMemoryContentClient(
        entries=[
            build_entry(
                "homepage-1",
                hero=asset_link("hero"),
                sections=[entry_link("offer-1"), entry_link("about-1")],
            ),
            build_entry("offer-1", "offer", logo=asset_link("logo")),
            build_entry("about-1", "aboutPage", body={"image": asset_link("logo")}),
        ],
        assets=[build_asset("hero"), build_asset("logo")],
    )


def _export_document(entries: list[Entry], assets: list[Asset]) -> dict[str, Any]:
    return {
        "entries": [entry.to_dict() for entry in entries],
        "assets": [asset.to_dict() for asset in assets],
    }


@pytest.fixture
def export_dir(temp_dir: Path, site_client: InMemoryContentClient) -> Path:
    """Directory with a populated master export and no staging export."""
    directory = temp_dir / "environments"
    directory.mkdir()
    document = _export_document(list(site_client.entries.values()), list(site_client.assets.values()))
    (directory / "master.json").write_text(json.dumps(document, indent=2), encoding="utf-8")
    return directory


@pytest.fixture
def config_file(temp_dir: Path, export_dir: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Configuration file pointing at the export directory, selected via CFSYNC_CONFIG."""
    config_path = temp_dir / "config.yaml"
    config = {
        "space": {"id": "test-space"},
        "environments": {
            "master": {"export_path": str(export_dir / "master.json")},
            "staging": {"export_path": str(export_dir / "staging.json")},
        },
        "sync": {"source": "master", "target": "staging"},
        "output": {"colored": False, "history_file": str(temp_dir / "history.yaml")},
    }
    config_path.write_text(yaml.dump(config), encoding="utf-8")
    monkeypatch.setenv("CFSYNC_CONFIG", str(config_path))
    return config_path
