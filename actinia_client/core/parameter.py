# -*- coding: utf-8 -*-
"""
Parameter Descriptor - Immutable description of one module input/output.

A Parameter is decoded once from a single record of the service's
module detail response (an entry of ``parameters`` or ``returns``) and
is never changed afterwards.

Author
------
geoint.org

License
-------
MIT License
Copyright (c) 2024 geoint.org
See LICENSE file for full text.

Created
-------
2026-10-19

Modified
--------
2026-10-19
"""

# Standard library
import json
from dataclasses import dataclass
from typing import Any, Mapping, Optional

# actinia_client internal
from actinia_client.core.errors import MalformedDescriptor


_REQUIRED_FIELDS = ('name', 'description', 'optional', 'schema')


def _as_text(value: Any) -> str:
    """Render a JSON scalar the way the service shows it as text."""
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return 'true' if value else 'false'
    if value is None:
        return 'null'
    if isinstance(value, (int, float)):
        return str(value)
    return json.dumps(value, separators=(',', ':'))


def _as_flag(value: Any) -> bool:
    """True for JSON true, the text "true" or a non-zero integer."""
    if isinstance(value, bool):
        return value
    if isinstance(value, int):
        return value != 0
    return isinstance(value, str) and value.strip().lower() == 'true'


@dataclass(frozen=True)
class Parameter:
    """Description of a single module input or output.

    Attributes
    ----------
    name : str
        Parameter name, unique within its module's input (or output) set.
    description : str
        Free text.
    type : str
        Type from the service's schema vocabulary (e.g. ``"string"``).
        Not validated locally.
    optional : bool
        Whether the module accepts a call without this parameter.
    schema : str
        Full JSON schema of the parameter, serialized. Deserialize it
        with ``json.loads`` if you need the details.
    default_value : Optional[str]
        Default value as text, or None if the parameter has no default.
        An empty string is a real default.
    """

    name: str
    description: str
    type: str
    optional: bool
    schema: str
    default_value: Optional[str] = None

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> 'Parameter':
        """Decode a parameter record from the module detail response.

        Parameters
        ----------
        record : Mapping[str, Any]
            One element of the ``parameters`` or ``returns`` array.

        Returns
        -------
        Parameter

        Raises
        ------
        MalformedDescriptor
            If the record is not a mapping, or lacks ``name``,
            ``description``, ``optional`` or a ``schema`` with a
            ``type`` field.
        """
        if not isinstance(record, Mapping):
            raise MalformedDescriptor(
                f"Parameter record must be an object, got "
                f"{type(record).__name__}",
                record,
            )
        missing = [f for f in _REQUIRED_FIELDS if f not in record]
        if missing:
            raise MalformedDescriptor(
                f"Parameter record is missing {', '.join(missing)}",
                record,
            )
        schema = record['schema']
        if not isinstance(schema, Mapping) or 'type' not in schema:
            raise MalformedDescriptor(
                f"Parameter {record.get('name')!r} has no schema type",
                record,
            )
        name = _as_text(record['name'])
        if not name:
            raise MalformedDescriptor("Parameter name is empty", record)

        default_value = None
        if 'default' in record:
            default_value = _as_text(record['default'])

        return cls(
            name=name,
            description=_as_text(record['description']),
            type=_as_text(schema['type']),
            optional=_as_flag(record['optional']),
            schema=json.dumps(schema, separators=(',', ':')),
            default_value=default_value,
        )

    @property
    def has_default(self) -> bool:
        return self.default_value is not None

    def schema_dict(self) -> dict:
        """Return the stored schema deserialized."""
        return json.loads(self.schema)
