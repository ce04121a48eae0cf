# Copyright 2019-present Kensho Technologies, LLC.
from dataclasses import dataclass
from enum import Enum, auto, unique


@unique
class OrphanExtensionPolicy(Enum):
    """Specifies what merging does with an object type extension that has no base type."""

    # Leave the extension pending and untouched. It is still emitted with the document.
    Ignore = auto()

    # Discard the extension.
    Drop = auto()

    # Abort the build with an ExtensionTargetError.
    Raise = auto()


@dataclass(frozen=True)
class SchemaBuilderConfig:
    """Settings that control a single schema build."""

    orphan_extension_policy: OrphanExtensionPolicy = OrphanExtensionPolicy.Ignore

    # Whether manipulators receive a deep copy of the input document as the original document,
    # rather than the input document itself. Without the copy, in-place changes made by
    # manipulators are visible through the original document as well.
    copy_original_document: bool = True


DEFAULT_CONFIG = SchemaBuilderConfig()
