import numpy as np
import pytest

from streamstack.layout.diff import differentiate, differentiate_all

def test_short_series_are_all_zero():
    assert differentiate([]).tolist() == []
    assert differentiate([5.0]).tolist() == [0.0]

def test_two_samples_use_one_sided_difference_at_both_ends():
    assert differentiate([1, 4]).tolist() == [3.0, 3.0]

def test_interior_is_centered_difference():
    assert differentiate([1, 2, 4, 8]).tolist() == [1.0, 1.5, 3.0, 4.0]

def test_same_length_as_input():
    s = np.sin(np.linspace(0, 3, 17))
    assert differentiate(s).shape == (17,)

def test_differentiate_all_is_row_wise():
    out = differentiate_all(np.array([[1, 2, 3], [3, 2, 1]], dtype=float))
    assert out.tolist() == [[1.0, 1.0, 1.0], [-1.0, -1.0, -1.0]]

def test_differentiate_all_rejects_1d():
    with pytest.raises(ValueError):
        differentiate_all(np.array([1.0, 2.0]))
