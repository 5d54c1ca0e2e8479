"""
Mixin config decoding.

A mixin config lists class names under ``mixins`` (both sides), ``client``
and ``server``. Class names are kept as opaque strings exactly as written.
"""

import json
import logging
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from ..core.errors import MixinConfigError
from ..core.types import Environment, MixinEntry
from .archive import decode_text

logger = logging.getLogger(__name__)


class MixinConfig(BaseModel):
    """The parts of a ``*.mixins.json`` file modlens reads."""
    package: Optional[str] = None
    plugin: Optional[str] = None
    mixins: List[str] = Field(default_factory=list)
    client: List[str] = Field(default_factory=list)
    server: List[str] = Field(default_factory=list)

    model_config = ConfigDict(extra="ignore")

    @field_validator("mixins", "client", "server", mode="before")
    @classmethod
    def _null_as_empty(cls, value: Any) -> Any:
        return [] if value is None else value

    def entries(self, owning_mod: str, forced: Optional[Environment] = None) -> List[MixinEntry]:
        """
        Flatten the config into MixinEntry values.

        Args:
            owning_mod: Mod id that declared this config.
            forced: Environment set on the manifest's mixin declaration;
                when present it overrides every section's own side.
        """
        sections = (
            (Environment.COMMON, self.mixins),
            (Environment.CLIENT, self.client),
            (Environment.SERVER, self.server),
        )
        return [
            MixinEntry(owning_mod=owning_mod, environment_side=forced or side, class_name=name)
            for side, names in sections
            for name in names
        ]


def parse_mixin_config(payload: bytes, path: str) -> MixinConfig:
    """Decode a mixin config payload, raising MixinConfigError when malformed."""
    try:
        document = json.loads(decode_text(payload), strict=False)
        return MixinConfig.model_validate(document)
    except (UnicodeDecodeError, json.JSONDecodeError, ValidationError) as e:
        raise MixinConfigError(f"invalid mixin config: {e}", path=path) from e
