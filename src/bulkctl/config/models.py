"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, bulkctl.toml only contains
overrides.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel


class StoreConfig(BaseModel):
    """[store] section."""

    model_config = {"frozen": True}

    path: Path = Path(".bulkctl") / "records.db"
    echo: bool = False


class WriteConfig(BaseModel):
    """[write] section."""

    model_config = {"frozen": True}

    external_id_field: str = "external_id"
