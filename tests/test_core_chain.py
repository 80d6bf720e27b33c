# -*- coding: utf-8 -*-
"""
Tests for actinia_client.core.chain — process chain assembly.

Author
------
geoint.org

Created
-------
2026-10-19
"""

from unittest.mock import MagicMock

import pytest

from actinia_client.core.chain import (
    ChainStep,
    ParameterBinding,
    ProcessChain,
    build_process_chain,
)
from actinia_client.core.errors import ArityMismatch, MalformedDescriptor
from actinia_client.core.module import Module

from conftest import make_detail


def _module(name, inputs=(), outputs=()):
    return Module(name, fetch_detail=MagicMock(return_value=make_detail(inputs, outputs)))


# ---------------------------------------------------------------------------
# build_process_chain
# ---------------------------------------------------------------------------

class TestBuildProcessChain:

    def test_two_module_scenario(self):
        a = _module("A", inputs=['raster'])
        b = _module("B", inputs=['red', 'nir'], outputs=['output'])
        chain = build_process_chain(
            [a, b],
            [{'raster': 'x@y'}, {'red': 'r', 'nir': 'n', 'output': 'out'}],
        )
        assert len(chain.steps) == 2
        assert chain.steps[0] == ChainStep("A", (ParameterBinding('raster', 'x@y'),))
        assert chain.steps[1].module_id == "B"
        assert chain.steps[1].inputs == (
            ParameterBinding('red', 'r'),
            ParameterBinding('nir', 'n'),
            ParameterBinding('output', 'out'),
        )

    def test_steps_follow_input_order(self):
        names = ["m0", "m1", "m2", "m3"]
        modules = [_module(n, inputs=['p']) for n in names]
        chain = build_process_chain(modules, [{'p': str(i)} for i in range(4)])
        assert [s.module_id for s in chain.steps] == names
        assert [s.inputs[0].value for s in chain.steps] == ['0', '1', '2', '3']

    def test_same_module_twice(self):
        m = _module("r.mapcalc", inputs=['expression'])
        chain = build_process_chain(
            [m, m], [{'expression': 'a=1'}, {'expression': 'b=2'}],
        )
        assert [s.inputs[0].value for s in chain.steps] == ['a=1', 'b=2']

    def test_bindings_follow_declaration_not_map_order(self):
        m = _module("i.vi", inputs=['red', 'nir'], outputs=['output'])
        chain = build_process_chain(
            [m], [{'output': 'out', 'nir': 'n', 'red': 'r'}],
        )
        assert [b.param for b in chain.steps[0].inputs] == ['red', 'nir', 'output']

    def test_unknown_keys_dropped(self):
        m = _module("g.region", inputs=['raster'])
        chain = build_process_chain([m], [{'raster': 'x', 'bogus': 'y'}])
        assert chain.steps[0].inputs == (ParameterBinding('raster', 'x'),)

    def test_missing_keys_produce_no_binding(self):
        m = _module("i.vi", inputs=['red', 'nir', 'green'])
        chain = build_process_chain([m], [{'nir': 'n'}])
        assert chain.steps[0].inputs == (ParameterBinding('nir', 'n'),)

    def test_empty_map_gives_step_without_bindings(self):
        m = _module("g.list", inputs=['type'])
        chain = build_process_chain([m], [{}])
        assert chain.steps[0].inputs == ()

    def test_name_in_inputs_and_outputs_bound_twice(self):
        m = _module("r.weird", inputs=['map'], outputs=['map'])
        chain = build_process_chain([m], [{'map': 'm'}])
        assert chain.steps[0].inputs == (
            ParameterBinding('map', 'm'),
            ParameterBinding('map', 'm'),
        )

    def test_empty_chain(self):
        chain = build_process_chain([], [])
        assert chain.steps == ()
        assert chain.to_dict() == {'version': '1', 'list': []}

    def test_pure_and_deterministic(self):
        a = _module("A", inputs=['raster'])
        b = _module("B", inputs=['red', 'nir'], outputs=['output'])
        params = [{'raster': 'x@y'}, {'red': 'r', 'nir': 'n', 'output': 'out'}]
        first = build_process_chain([a, b], params)
        second = build_process_chain([a, b], [dict(p) for p in params])
        assert first == second
        assert first is not second
        assert params == [{'raster': 'x@y'}, {'red': 'r', 'nir': 'n', 'output': 'out'}]

    def test_equal_inputs_from_distinct_descriptors(self):
        first = build_process_chain([_module("A", inputs=['raster'])], [{'raster': 'x'}])
        second = build_process_chain([_module("A", inputs=['raster'])], [{'raster': 'x'}])
        assert first == second


class TestArityMismatch:

    def test_more_modules_than_maps(self):
        modules = [_module(n) for n in "abc"]
        with pytest.raises(ArityMismatch) as exc_info:
            build_process_chain(modules, [{}, {}])
        assert exc_info.value.module_count == 3
        assert exc_info.value.parameter_count == 2

    def test_more_maps_than_modules(self):
        modules = [_module(n) for n in "ab"]
        with pytest.raises(ArityMismatch):
            build_process_chain(modules, [{}, {}, {}])

    def test_checked_before_population(self):
        fetch = MagicMock(return_value=make_detail(inputs=['p']))
        with pytest.raises(ArityMismatch):
            build_process_chain([Module("a", fetch_detail=fetch)], [])
        fetch.assert_not_called()

    def test_is_a_value_error(self):
        with pytest.raises(ValueError):
            build_process_chain([], [{}])


# ---------------------------------------------------------------------------
# Wire format
# ---------------------------------------------------------------------------

class TestWireFormat:

    def test_to_dict(self):
        a = _module("A", inputs=['raster'])
        b = _module("B", inputs=['red', 'nir'], outputs=['output'])
        chain = build_process_chain(
            [a, b],
            [{'raster': 'x@y'}, {'red': 'r', 'nir': 'n', 'output': 'out'}],
        )
        assert chain.to_dict() == {
            'version': '1',
            'list': [
                {
                    'module': 'A',
                    'id': 'A',
                    'inputs': [{'param': 'raster', 'value': 'x@y'}],
                },
                {
                    'module': 'B',
                    'id': 'B',
                    'inputs': [
                        {'param': 'red', 'value': 'r'},
                        {'param': 'nir', 'value': 'n'},
                        {'param': 'output', 'value': 'out'},
                    ],
                },
            ],
        }

    def test_to_json(self):
        chain = ProcessChain((ChainStep("g.region"),))
        assert chain.to_json() == (
            '{"version": "1", "list": [{"module": "g.region", '
            '"id": "g.region", "inputs": []}]}'
        )

    def test_from_dict(self):
        data = {
            'version': '1',
            'list': [{'module': 'A', 'id': 'A',
                      'inputs': [{'param': 'raster', 'value': 'x'}]}],
        }
        chain = ProcessChain.from_dict(data)
        assert chain == ProcessChain((ChainStep("A", (ParameterBinding('raster', 'x'),)),))
        assert chain.to_dict() == data

    def test_from_dict_without_list(self):
        with pytest.raises(MalformedDescriptor):
            ProcessChain.from_dict({'version': '1'})

    def test_from_dict_bad_step(self):
        with pytest.raises(MalformedDescriptor):
            ProcessChain.from_dict({'list': [{'id': 'A'}]})
