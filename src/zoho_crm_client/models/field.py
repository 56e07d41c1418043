# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""Schema field metadata returned by ``getFields``."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List


@dataclass(frozen=True)
class FieldDescriptor:
    """
    One field of a module layout.

    :param section: Name of the layout section holding the field.
    :type section: str
    :param name: Field name used in requests (the ``dv`` attribute, falling back to the label).
    :type name: str
    :param label: Display label.
    :type label: str
    :param type: Zoho field type, e.g. ``"Text"``, ``"Pick List"``, ``"Lookup"``.
    :type type: str
    :param required: Whether the field is mandatory.
    :type required: bool
    :param read_only: Whether the field cannot be written.
    :type read_only: bool
    :param max_length: Maximum value length, ``0`` when not reported.
    :type max_length: int
    :param options: Permitted values for choice fields, empty otherwise.
    :type options: list[str]
    :param custom_field: Whether the field was added by the organisation.
    :type custom_field: bool
    :param last_modified: The ``lm`` marker, ``False`` when absent.
    :type last_modified: bool
    """

    section: str
    name: str
    label: str
    type: str
    required: bool = False
    read_only: bool = False
    max_length: int = 0
    options: List[str] = field(default_factory=list)
    custom_field: bool = False
    last_modified: bool = False

    @property
    def is_choice(self) -> bool:
        return bool(self.options)


__all__ = ["FieldDescriptor"]
