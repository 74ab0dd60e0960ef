"""Configuration model describing a single document build.

BuildConfig

`template` (`Path | None`)
: Local template file. Mutually exclusive with `source_id`.

`source_id` (`str | None`)
: Identifier of a document or folder in the document storage. Requires a
  storage root, either `storage_root` or the `TEXCONTEXT_STORAGE` variable.

`storage_root` (`Path | None`)
: Root directory served by the local storage connector.

`output_dir` (`Path | None`)
: Destination folder. Defaults to a slug of the document title.

`overwrite` (`bool`)
: Replace files already present in the output folder.
"""

from __future__ import annotations

import os
from pathlib import Path

from pydantic import BaseModel, ConfigDict, field_validator, model_validator

from .artifacts import default_output_dir
from .connector import STORAGE_ENV_VAR


class BuildConfig(BaseModel):
    """Inputs selecting the context and destination of a build."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    template: Path | None = None
    source_id: str | None = None
    storage_root: Path | None = None
    output_dir: Path | None = None
    overwrite: bool = False

    @field_validator("source_id")
    @classmethod
    def strip_source_id(cls, value: str | None) -> str | None:
        """Treat blank identifiers as missing."""
        if value is None:
            return None
        return value.strip() or None

    @model_validator(mode="after")
    def check_sources(self) -> BuildConfig:
        """Reject ambiguous or incomplete source selections."""
        if self.template is not None and self.source_id is not None:
            raise ValueError("Use either a local template or a storage identifier, not both.")
        if (
            self.source_id is not None
            and self.storage_root is None
            and not os.environ.get(STORAGE_ENV_VAR)
        ):
            raise ValueError(
                f"A storage root is required with a storage identifier (or set {STORAGE_ENV_VAR})."
            )
        return self

    def resolve_output_dir(self, title: str | None) -> Path:
        """Return the configured output folder or one derived from ``title``."""
        if self.output_dir is not None:
            return self.output_dir
        return default_output_dir(title)


__all__ = ["BuildConfig"]
