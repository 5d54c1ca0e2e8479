"""
fabric.mod.json decoding.

Turns a manifest payload into ManifestRecord values. The schema is decoded
structurally through pydantic models: unknown keys are ignored, optional
keys fall back to an absent value, and anything that does not fit the
schema is reported as a ManifestParseError for the caller to skip.
"""

import json
import logging
from typing import Any, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator
from pydantic.alias_generators import to_camel

from ..core.errors import ManifestParseError
from ..core.types import Environment, ManifestRecord, MixinConfigRef
from .archive import decode_text

logger = logging.getLogger(__name__)

# fabric.mod.json spells "both sides" as "*"
_ENVIRONMENT_ALIASES = {
    "*": Environment.COMMON,
    "": Environment.COMMON,
    "client": Environment.CLIENT,
    "server": Environment.SERVER,
}


def _parse_environment(value: Any) -> Optional[Environment]:
    if value is None:
        return None
    if isinstance(value, Environment):
        return value
    if isinstance(value, str) and value.lower() in _ENVIRONMENT_ALIASES:
        return _ENVIRONMENT_ALIASES[value.lower()]
    raise ValueError(f"unknown environment {value!r}")


class _SchemaModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
        coerce_numbers_to_str=True,
    )


class JarReference(_SchemaModel):
    """Entry of the ``jars`` array."""
    file: str


class MixinDeclaration(_SchemaModel):
    """Object form of a ``mixins`` entry."""
    config: str
    environment: Optional[Environment] = None

    @field_validator("environment", mode="before")
    @classmethod
    def _environment(cls, value: Any) -> Optional[Environment]:
        return _parse_environment(value)


class FabricModJson(_SchemaModel):
    """The subset of the fabric.mod.json schema modlens reads."""
    id: str
    version: Optional[str] = None
    name: Optional[str] = None
    environment: Environment = Environment.COMMON
    jars: List[JarReference] = Field(default_factory=list)
    mixins: List[Union[str, MixinDeclaration]] = Field(default_factory=list)
    access_widener: Optional[str] = None

    @field_validator("environment", mode="before")
    @classmethod
    def _environment(cls, value: Any) -> Environment:
        return _parse_environment(value) or Environment.COMMON

    def to_record(self, source_archive: str) -> ManifestRecord:
        mixin_configs = []
        for entry in self.mixins:
            if isinstance(entry, str):
                mixin_configs.append(MixinConfigRef(path=entry))
            else:
                # "*" means no forced side: each config section keeps its own
                forced = None if entry.environment == Environment.COMMON else entry.environment
                mixin_configs.append(MixinConfigRef(path=entry.config, environment=forced))

        return ManifestRecord(
            id=self.id,
            version=self.version,
            display_name=self.name,
            environment=self.environment,
            source_archive=source_archive,
            embedded_refs=tuple(jar.file for jar in self.jars),
            mixin_configs=tuple(mixin_configs),
            access_widener_path=self.access_widener,
        )


def parse_manifest(payload: bytes, source_archive: str) -> List[ManifestRecord]:
    """
    Decode a fabric.mod.json payload.

    A JSON object yields one record; a JSON array is a bundle of
    sub-manifests and yields one record per element, in order.

    Args:
        payload: Raw bytes of the manifest entry.
        source_archive: Path of the archive the payload was read from.

    Returns:
        The declared mods, in declaration order.

    Raises:
        ManifestParseError: The payload is not valid JSON or does not fit
            the schema.
    """
    try:
        # Fabric's own reader tolerates raw control characters in strings
        document = json.loads(decode_text(payload), strict=False)
    except (UnicodeDecodeError, json.JSONDecodeError) as e:
        raise ManifestParseError(f"invalid JSON: {e}", path=source_archive) from e

    documents = document if isinstance(document, list) else [document]
    records = []
    for index, item in enumerate(documents):
        if not isinstance(item, dict):
            raise ManifestParseError(
                f"manifest entry {index} is not an object", path=source_archive
            )
        try:
            records.append(FabricModJson.model_validate(item).to_record(source_archive))
        except ValidationError as e:
            raise ManifestParseError(_summarize(e), path=source_archive) from e

    logger.debug(f"Parsed {len(records)} manifest(s) from {source_archive}")
    return records


def _summarize(error: ValidationError) -> str:
    first = error.errors()[0]
    location = ".".join(str(part) for part in first["loc"]) or "<root>"
    return f"schema error at {location}: {first['msg']}"
