# -*- coding: utf-8 -*-
"""
Chain Files - Declare process chains in YAML, JSON or Python.

A ChainPlan names the modules of a chain and the parameter values for
each, without any knowledge of the module descriptors. It yields the
two positional sequences ``build_process_chain`` expects once the
modules have been resolved.

YAML layout::

    name: ndvi
    steps:
      - module: g.region
        params:
          raster: lsat7_2000_50@landsat
      - module: i.vi
        params:
          red: lsat7_2000_30@landsat
          nir: lsat7_2000_40@landsat
          viname: ndvi
          output: ndvi

Python DSL::

    @process_chain(name="ndvi")
    def ndvi():
        step("g.region", raster="lsat7_2000_50@landsat")
        step("i.vi", red="...", nir="...", viname="ndvi", output="ndvi")

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
from pathlib import Path
from typing import Any, Callable, Dict, List, Mapping, Optional

# Third-party
import yaml

# actinia_client internal
from actinia_client.core.chain import ProcessChain
from actinia_client.core.errors import MalformedDescriptor


def _param_text(value: Any) -> str:
    if isinstance(value, bool):
        return 'true' if value else 'false'
    if isinstance(value, (list, tuple)):
        return ','.join(_param_text(v) for v in value)
    return str(value)


class PlannedStep:
    """A module name and the parameter values to call it with.

    Parameters
    ----------
    module : str
        Module name.
    params : Optional[Dict[str, Any]]
        Parameter values. Converted to text; lists are comma-joined the
        way GRASS modules take multiple values.
    """

    def __init__(self, module: str, params: Optional[Dict[str, Any]] = None) -> None:
        self.module = module
        self.params: Dict[str, str] = {
            k: _param_text(v) for k, v in (params or {}).items()
        }

    def to_dict(self) -> dict:
        d: dict = {'module': self.module}
        if self.params:
            d['params'] = dict(self.params)
        return d

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> 'PlannedStep':
        if not isinstance(data, Mapping) or 'module' not in data:
            raise MalformedDescriptor("Chain step has no 'module'", data)
        params = data.get('params') or {}
        if not isinstance(params, Mapping):
            raise MalformedDescriptor(
                f"Params of step {data['module']!r} must be a mapping", data
            )
        return cls(module=str(data['module']), params=dict(params))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PlannedStep):
            return NotImplemented
        return self.module == other.module and self.params == other.params

    def __repr__(self) -> str:
        return f"PlannedStep({self.module!r}, {self.params!r})"


class ChainPlan:
    """An ordered list of planned module calls.

    Parameters
    ----------
    name : str
        Name of the chain, for display only.
    steps : Optional[List[PlannedStep]]
        Steps in execution order.
    """

    def __init__(self, name: str = "", steps: Optional[List[PlannedStep]] = None) -> None:
        self.name = name
        self.steps = steps or []

    def add_step(self, module: str, **params: Any) -> None:
        self.steps.append(PlannedStep(module, params))

    def module_names(self) -> List[str]:
        return [s.module for s in self.steps]

    def parameter_maps(self) -> List[Dict[str, str]]:
        """Parameter maps in step order, paired with ``module_names()``."""
        return [dict(s.params) for s in self.steps]

    def to_dict(self) -> dict:
        return {
            'name': self.name,
            'steps': [s.to_dict() for s in self.steps],
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> 'ChainPlan':
        """Deserialize from dictionary.

        Raises
        ------
        MalformedDescriptor
            If ``steps`` is missing or not a list, or a step is malformed.
        """
        if not isinstance(data, Mapping) or not isinstance(data.get('steps'), list):
            raise MalformedDescriptor("Chain plan has no list of 'steps'", data)
        return cls(
            name=str(data.get('name', '')),
            steps=[PlannedStep.from_dict(s) for s in data['steps']],
        )

    def __len__(self) -> int:
        return len(self.steps)


# ---------------------------------------------------------------------------
# Python DSL
# ---------------------------------------------------------------------------

# Module-level accumulator for steps during DSL function execution
_current_steps: List[PlannedStep] = []


def step(module: str, params: Optional[Dict[str, Any]] = None, **kwargs: Any) -> None:
    """Declare a module call inside a ``@process_chain`` function.

    Parameters
    ----------
    module : str
        Module name.
    params : Optional[Dict[str, Any]]
        Values for parameter names that are not Python identifiers.
    **kwargs
        Parameter values.
    """
    merged = dict(params or {})
    merged.update(kwargs)
    _current_steps.append(PlannedStep(module, merged))


def process_chain(name: str = "") -> Callable:
    """Decorator for Python DSL chain definitions.

    The decorated function is executed at decoration time; its
    ``step()`` calls become the plan attached as ``_chain_plan``.

    Parameters
    ----------
    name : str
        Chain name. Defaults to the function name.

    Returns
    -------
    Callable
    """

    def decorator(func: Callable) -> Callable:
        global _current_steps
        _current_steps = []
        try:
            func()
            func._chain_plan = ChainPlan(
                name=name or func.__name__,
                steps=list(_current_steps),
            )
        finally:
            _current_steps = []
        return func

    return decorator


# ---------------------------------------------------------------------------
# ChainFileLoader
# ---------------------------------------------------------------------------

class ChainFileLoader:
    """Read chain plans from YAML/JSON and write plans and documents back."""

    def load(self, path: Path) -> ChainPlan:
        """Load a chain plan file.

        JSON is a subset of YAML, so both go through the YAML parser.

        Parameters
        ----------
        path : Path

        Returns
        -------
        ChainPlan
        """
        with open(path, 'r', encoding='utf-8') as f:
            return self.load_string(f.read())

    def load_string(self, text: str) -> ChainPlan:
        try:
            data = yaml.safe_load(text)
        except yaml.YAMLError as e:
            raise MalformedDescriptor(f"Cannot parse chain file: {e}") from e
        return ChainPlan.from_dict(data)

    def to_yaml(self, plan: ChainPlan) -> str:
        return yaml.safe_dump(
            plan.to_dict(),
            default_flow_style=False,
            sort_keys=False,
        )

    def document_to_yaml(self, chain: ProcessChain) -> str:
        """Dump a built chain document (the wire format) as YAML."""
        return yaml.safe_dump(
            chain.to_dict(),
            default_flow_style=False,
            sort_keys=False,
        )
