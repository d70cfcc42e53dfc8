#!/usr/bin/env python3
"""Test suite for the error taxonomy"""

import pytest

from satvis.core.errors import (
    DataError, NotFoundError, NumericalError, RangeError, SatVisError, ValidationError,
)


@pytest.mark.parametrize("error, builtin", [
    (ValidationError("bad"), ValueError),
    (NotFoundError("G01"), LookupError),
    (DataError("bad"), ValueError),
    (RangeError("late"), ValueError),
    (NumericalError("slow"), ArithmeticError),
])
def test_errors_derive_from_builtins(error, builtin):
    assert isinstance(error, SatVisError)
    assert isinstance(error, builtin)


def test_to_dict_carries_attributes():
    data = DataError("missing", satellite_id='C05', missing=['e', 'm0']).to_dict()
    assert data == {'error': 'data', 'message': 'missing', 'satellite_id': 'C05',
                    'missing': ['e', 'm0']}


def test_not_found_message():
    err = NotFoundError('B07', what='satellite catalog')
    assert 'B07' in str(err)
    assert err.to_dict()['error'] == 'not_found'
    assert err.to_dict()['what'] == 'satellite catalog'


def test_numerical_error_fields():
    err = NumericalError("no convergence", iterations=100, residual=1e-3)
    data = err.to_dict()
    assert data['error'] == 'non_convergence'
    assert data['iterations'] == 100
