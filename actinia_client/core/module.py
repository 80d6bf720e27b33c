# -*- coding: utf-8 -*-
"""
Module Descriptor - A remote processing module and its parameters.

Input and output parameter lists are fetched lazily from the service on
first access and cached for the lifetime of the descriptor. Population
state is tracked explicitly so a module that genuinely declares no
inputs (or no outputs) is not fetched again on every access.

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
import logging
from enum import Enum
from typing import Any, Callable, Dict, List, Mapping, Optional

# actinia_client internal
from actinia_client.core.errors import MalformedDescriptor
from actinia_client.core.parameter import Parameter

logger = logging.getLogger(__name__)


# fetch_module_detail(module_name) -> {'inputs': [...], 'outputs': [...]}
DetailFetcher = Callable[[str], Mapping[str, Any]]


class PopulationState(Enum):
    """Population state of one parameter list of a module."""

    UNPOPULATED = "unpopulated"
    POPULATED_EMPTY = "populated_empty"
    POPULATED = "populated"


class Module:
    """A named remote operation with declared inputs and outputs.

    Parameters
    ----------
    name : str
        Module identifier (e.g. ``"r.slope.aspect"``). Also used as the
        path segment of the module detail endpoint.
    description : str
        Human-readable description.
    fetch_detail : Optional[DetailFetcher]
        Collaborator returning the module detail record. Without one the
        parameter lists can only be filled through ``add_*_parameter``.
    """

    def __init__(
        self,
        name: str,
        description: str = "",
        fetch_detail: Optional[DetailFetcher] = None,
    ) -> None:
        self.name = name
        self.description = description
        self._fetch_detail = fetch_detail
        self._inputs: List[Parameter] = []
        self._outputs: List[Parameter] = []
        self._input_state = PopulationState.UNPOPULATED
        self._output_state = PopulationState.UNPOPULATED

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------

    def input_parameters(self) -> List[Parameter]:
        """Return the declared inputs, fetching them on first access.

        Returns
        -------
        List[Parameter]
            Inputs in declaration order. A copy; mutating it does not
            affect the descriptor.

        Raises
        ------
        RemoteUnavailable
            If the detail fetch fails. The module stays unpopulated.
        MalformedDescriptor
            If the detail record cannot be decoded.
        """
        if self._input_state is PopulationState.UNPOPULATED:
            self.populate()
        return list(self._inputs)

    def output_parameters(self) -> List[Parameter]:
        """Return the declared outputs, fetching them on first access.

        See ``input_parameters``.
        """
        if self._output_state is PopulationState.UNPOPULATED:
            self.populate()
        return list(self._outputs)

    @property
    def input_state(self) -> PopulationState:
        return self._input_state

    @property
    def output_state(self) -> PopulationState:
        return self._output_state

    @property
    def populated(self) -> bool:
        """True once both parameter lists have been populated."""
        return (
            self._input_state is not PopulationState.UNPOPULATED
            and self._output_state is not PopulationState.UNPOPULATED
        )

    def get_parameter(self, name: str) -> Optional[Parameter]:
        """Look up an input, then an output, by name."""
        for param in self.input_parameters() + self.output_parameters():
            if param.name == name:
                return param
        return None

    # ------------------------------------------------------------------
    # Population
    # ------------------------------------------------------------------

    def populate(self) -> None:
        """Fetch the module detail and fill the unpopulated lists.

        Both lists come from one detail fetch. Records are decoded in
        full before anything is stored, so a failure leaves the module
        exactly as it was and a later call retries. Lists that are
        already populated are left untouched.

        Raises
        ------
        MalformedDescriptor
            If no detail fetcher is configured or the detail record is
            malformed.
        RemoteUnavailable
            Propagated from the fetcher.
        """
        if self.populated:
            return
        if self._fetch_detail is None:
            raise MalformedDescriptor(
                f"Module {self.name!r} has no detail source to populate from"
            )

        logger.debug("Fetching parameter details for module %s", self.name)
        detail = self._fetch_detail(self.name)
        inputs = self._decode_list(detail, 'inputs')
        outputs = self._decode_list(detail, 'outputs')

        if self._input_state is PopulationState.UNPOPULATED:
            self._inputs.extend(inputs)
            self._input_state = self._state_for(self._inputs)
        if self._output_state is PopulationState.UNPOPULATED:
            self._outputs.extend(outputs)
            self._output_state = self._state_for(self._outputs)

    def add_input_parameter(self, parameter: Parameter) -> None:
        """Append an input and mark the input list populated."""
        self._inputs.append(parameter)
        self._input_state = PopulationState.POPULATED

    def add_output_parameter(self, parameter: Parameter) -> None:
        """Append an output and mark the output list populated."""
        self._outputs.append(parameter)
        self._output_state = PopulationState.POPULATED

    def _decode_list(self, detail: Mapping[str, Any], key: str) -> List[Parameter]:
        if not isinstance(detail, Mapping):
            raise MalformedDescriptor(
                f"Detail record for module {self.name!r} is not an object",
                detail,
            )
        records = detail.get(key)
        if records is None:
            records = []
        if not isinstance(records, list):
            raise MalformedDescriptor(
                f"Detail record for module {self.name!r} has a non-list "
                f"{key!r} field",
                detail,
            )
        return [Parameter.from_record(r) for r in records]

    @staticmethod
    def _state_for(params: List[Parameter]) -> PopulationState:
        if params:
            return PopulationState.POPULATED
        return PopulationState.POPULATED_EMPTY

    # ------------------------------------------------------------------

    def to_dict(self) -> Dict[str, Any]:
        """Summary of the module, without triggering population."""
        return {
            'id': self.name,
            'description': self.description,
        }

    def __repr__(self) -> str:
        return f"Module(name={self.name!r})"

    def __str__(self) -> str:
        return self.name
