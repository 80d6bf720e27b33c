# -*- coding: utf-8 -*-
"""
Tests for actinia_client.core.module — lazy parameter population.

Author
------
geoint.org

Created
-------
2026-10-19
"""

from unittest.mock import MagicMock

import pytest

from actinia_client.core.errors import MalformedDescriptor, RemoteUnavailable
from actinia_client.core.module import Module, PopulationState
from actinia_client.core.parameter import Parameter

from conftest import make_detail, make_record


def _fetcher(detail):
    return MagicMock(return_value=detail)


class TestPopulation:

    def test_starts_unpopulated(self):
        fetch = _fetcher(make_detail(inputs=['raster']))
        m = Module("g.region", "Set region", fetch)
        assert m.input_state is PopulationState.UNPOPULATED
        assert m.output_state is PopulationState.UNPOPULATED
        assert m.populated is False
        fetch.assert_not_called()

    def test_inputs_in_declaration_order(self):
        fetch = _fetcher(make_detail(inputs=['red', 'nir', 'green']))
        m = Module("i.vi", fetch_detail=fetch)
        assert [p.name for p in m.input_parameters()] == ['red', 'nir', 'green']
        fetch.assert_called_once_with("i.vi")

    def test_outputs_in_declaration_order(self):
        fetch = _fetcher(make_detail(inputs=['input'], outputs=['slope', 'aspect']))
        m = Module("r.slope.aspect", fetch_detail=fetch)
        assert [p.name for p in m.output_parameters()] == ['slope', 'aspect']

    def test_single_fetch_fills_both_lists(self):
        fetch = _fetcher(make_detail(inputs=['red'], outputs=['output']))
        m = Module("i.vi", fetch_detail=fetch)
        m.input_parameters()
        m.output_parameters()
        assert fetch.call_count == 1
        assert m.populated is True

    def test_repeated_calls_fetch_once(self):
        fetch = _fetcher(make_detail(inputs=['raster']))
        m = Module("g.region", fetch_detail=fetch)
        for _ in range(5):
            m.input_parameters()
            m.output_parameters()
        assert fetch.call_count == 1

    def test_zero_outputs_not_refetched(self):
        fetch = _fetcher(make_detail(inputs=['raster'], outputs=[]))
        m = Module("g.region", fetch_detail=fetch)
        assert m.output_parameters() == []
        assert m.output_parameters() == []
        assert m.output_state is PopulationState.POPULATED_EMPTY
        assert m.input_state is PopulationState.POPULATED
        assert fetch.call_count == 1

    def test_zero_inputs_and_outputs_not_refetched(self):
        fetch = _fetcher(make_detail())
        m = Module("g.version", fetch_detail=fetch)
        assert m.input_parameters() == []
        assert m.input_parameters() == []
        assert fetch.call_count == 1

    def test_missing_arrays_count_as_empty(self):
        fetch = _fetcher({})
        m = Module("g.version", fetch_detail=fetch)
        assert m.input_parameters() == []
        assert m.input_state is PopulationState.POPULATED_EMPTY

    def test_returned_list_is_a_copy(self):
        fetch = _fetcher(make_detail(inputs=['raster']))
        m = Module("g.region", fetch_detail=fetch)
        m.input_parameters().clear()
        assert len(m.input_parameters()) == 1


class TestPopulationFailure:

    def test_remote_failure_propagates_and_allows_retry(self):
        fetch = MagicMock(side_effect=[
            RemoteUnavailable("down", operation="update module details"),
            make_detail(inputs=['raster']),
        ])
        m = Module("g.region", fetch_detail=fetch)
        with pytest.raises(RemoteUnavailable):
            m.input_parameters()
        assert m.input_state is PopulationState.UNPOPULATED
        assert [p.name for p in m.input_parameters()] == ['raster']
        assert fetch.call_count == 2

    def test_malformed_record_leaves_module_unpopulated(self):
        bad = {'inputs': [make_record('ok'), {'name': 'broken'}], 'outputs': []}
        m = Module("g.region", fetch_detail=_fetcher(bad))
        with pytest.raises(MalformedDescriptor):
            m.input_parameters()
        assert m.input_state is PopulationState.UNPOPULATED
        assert m.output_state is PopulationState.UNPOPULATED

    def test_non_list_inputs(self):
        m = Module("g.region", fetch_detail=_fetcher({'inputs': 'raster'}))
        with pytest.raises(MalformedDescriptor, match="non-list"):
            m.input_parameters()

    def test_no_fetcher(self):
        m = Module("g.region")
        with pytest.raises(MalformedDescriptor, match="no detail source"):
            m.input_parameters()


class TestManualParameters:

    def test_add_input_marks_populated(self):
        fetch = _fetcher(make_detail(inputs=['remote'], outputs=['out']))
        m = Module("custom", fetch_detail=fetch)
        m.add_input_parameter(Parameter.from_record(make_record('local')))
        assert [p.name for p in m.input_parameters()] == ['local']
        fetch.assert_not_called()

    def test_output_still_fetched_after_manual_input(self):
        fetch = _fetcher(make_detail(inputs=['remote'], outputs=['out']))
        m = Module("custom", fetch_detail=fetch)
        m.add_input_parameter(Parameter.from_record(make_record('local')))
        assert [p.name for p in m.output_parameters()] == ['out']
        # Inputs are not overwritten by the fetch.
        assert [p.name for p in m.input_parameters()] == ['local']
        assert fetch.call_count == 1

    def test_get_parameter(self):
        fetch = _fetcher(make_detail(inputs=['red'], outputs=['output']))
        m = Module("i.vi", fetch_detail=fetch)
        assert m.get_parameter('output').name == 'output'
        assert m.get_parameter('missing') is None


class TestModuleRepr:

    def test_str_and_dict(self):
        m = Module("r.mapcalc", "Raster map calculator")
        assert str(m) == "r.mapcalc"
        assert m.to_dict() == {'id': 'r.mapcalc', 'description': 'Raster map calculator'}
