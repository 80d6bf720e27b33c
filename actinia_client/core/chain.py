# -*- coding: utf-8 -*-
"""
Process Chain - Assemble modules and parameter values into a chain.

A process chain is an ordered sequence of module invocations submitted
to actinia as a single job. ``build_process_chain`` pairs each module
with the parameter map at the same position and emits one binding per
declared parameter whose name is a key of that map.

The pairing is positional: the Nth module is bound to the Nth map
whatever the maps contain. Reordering one list without the other
silently binds values to the wrong module. Callers own that ordering.

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
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Sequence, Tuple

# actinia_client internal
from actinia_client.core.errors import ArityMismatch, MalformedDescriptor
from actinia_client.core.module import Module
from actinia_client.core.parameter import Parameter


CHAIN_FORMAT_VERSION = "1"


@dataclass(frozen=True)
class ParameterBinding:
    """A (parameter name, value) pair of one chain step."""

    param: str
    value: str

    def to_dict(self) -> Dict[str, str]:
        return {'param': self.param, 'value': self.value}


@dataclass(frozen=True)
class ChainStep:
    """One module invocation within a process chain.

    Attributes
    ----------
    module_id : str
        Module name. Sent as both the module and the step identifier.
    inputs : Tuple[ParameterBinding, ...]
        Bindings in input then output declaration order.
    """

    module_id: str
    inputs: Tuple[ParameterBinding, ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        return {
            'module': self.module_id,
            'id': self.module_id,
            'inputs': [b.to_dict() for b in self.inputs],
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> 'ChainStep':
        try:
            module_id = data['module']
            inputs = tuple(
                ParameterBinding(param=b['param'], value=b['value'])
                for b in data.get('inputs', [])
            )
        except (KeyError, TypeError) as e:
            raise MalformedDescriptor(
                f"Malformed chain step: {e}", data
            ) from e
        return cls(module_id=module_id, inputs=inputs)


@dataclass(frozen=True)
class ProcessChain:
    """A process chain document ready to be submitted.

    Equality is structural, so two chains built from equal inputs
    compare equal.
    """

    steps: Tuple[ChainStep, ...] = ()
    version: str = field(default=CHAIN_FORMAT_VERSION)

    def __len__(self) -> int:
        return len(self.steps)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to the document shape the processing endpoint expects.

        Returns
        -------
        dict
            ``{"version": "1", "list": [...]}``
        """
        return {
            'version': self.version,
            'list': [s.to_dict() for s in self.steps],
        }

    def to_json(self, **kwargs: Any) -> str:
        return json.dumps(self.to_dict(), **kwargs)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> 'ProcessChain':
        """Deserialize a previously built document.

        Raises
        ------
        MalformedDescriptor
            If the ``list`` field is missing or a step is malformed.
        """
        if not isinstance(data, Mapping) or not isinstance(data.get('list'), list):
            raise MalformedDescriptor(
                "Process chain document has no 'list' of steps", data
            )
        return cls(
            steps=tuple(ChainStep.from_dict(s) for s in data['list']),
            version=str(data.get('version', CHAIN_FORMAT_VERSION)),
        )


def _bind(
    params: Sequence[Parameter],
    values: Mapping[str, str],
    bindings: List[ParameterBinding],
) -> None:
    for param in params:
        if param.name in values:
            bindings.append(ParameterBinding(param.name, values[param.name]))


def build_step(module: Module, values: Mapping[str, str]) -> ChainStep:
    """Bind one module to its parameter values.

    Keys of ``values`` that name no declared parameter are dropped; the
    service decides what is valid. A name declared as both input and
    output is bound twice.

    Parameters
    ----------
    module : Module
    values : Mapping[str, str]

    Returns
    -------
    ChainStep
    """
    bindings: List[ParameterBinding] = []
    _bind(module.input_parameters(), values, bindings)
    _bind(module.output_parameters(), values, bindings)
    return ChainStep(module_id=module.name, inputs=tuple(bindings))


def build_process_chain(
    modules: Sequence[Module],
    parameters: Sequence[Mapping[str, str]],
) -> ProcessChain:
    """Create a process chain from modules and their parameter values.

    Parameters
    ----------
    modules : Sequence[Module]
        Modules in execution order.
    parameters : Sequence[Mapping[str, str]]
        One value map per module, paired with ``modules`` by position.

    Returns
    -------
    ProcessChain
        A chain with one step per module, in the given order.

    Raises
    ------
    ArityMismatch
        If ``modules`` and ``parameters`` differ in length.
    """
    if len(modules) != len(parameters):
        raise ArityMismatch(len(modules), len(parameters))
    return ProcessChain(steps=tuple(
        build_step(module, values)
        for module, values in zip(modules, parameters)
    ))
