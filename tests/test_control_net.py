import pytest

from bezier3d.control_net import ControlNet, default_control_net
from bezier3d.errors import InvalidArgument


def test_default_net_layout():
    net = default_control_net()
    assert net.size == 4
    assert net.degree == 3
    assert net[0][0] == (-1.5, -1.5, -0.5)
    assert net[1][2] == (-0.5, 0.5, 3.5)
    assert net[3][3] == (1.5, 1.5, -0.5)


def test_corners():
    net = default_control_net()
    assert net.corners() == (net[0][0], net[0][3], net[3][0], net[3][3])


def test_points_are_coerced_to_float_tuples():
    net = ControlNet([[(0, 0, 0), [1, 0, 0]], [(0, 1, 0), (1, 1, 1)]])
    assert net[1][1] == (1.0, 1.0, 1.0)
    assert isinstance(net[0][1], tuple)


def test_ragged_net_rejected():
    with pytest.raises(InvalidArgument):
        ControlNet([[(0, 0, 0), (1, 0, 0)], [(0, 1, 0)]])


def test_non_square_net_rejected():
    with pytest.raises(InvalidArgument):
        ControlNet([[(0, 0, 0), (1, 0, 0), (2, 0, 0)], [(0, 1, 0), (1, 1, 0), (2, 1, 0)]])


def test_two_dimensional_points_rejected():
    with pytest.raises(InvalidArgument):
        ControlNet([[(0, 0), (1, 0)], [(0, 1), (1, 1)]])


def test_single_row_rejected():
    with pytest.raises(InvalidArgument):
        ControlNet([[(0, 0, 0)]])
    with pytest.raises(InvalidArgument):
        default_control_net(1)


def test_invalid_argument_is_value_error():
    assert issubclass(InvalidArgument, ValueError)
