import itertools

import pytest

from bezier3d.bezier import basis_sum, bernstein, binomial, evaluate
from bezier3d.control_net import default_control_net


def test_binomial_running_product():
    assert [binomial(3, k) for k in range(4)] == [1, 3, 3, 1]
    assert binomial(10, 5) == 252
    assert binomial(40, 20) == pytest.approx(137846528820)


def test_bernstein_boundary_values():
    n = 3
    assert [bernstein(i, n, 0.0) for i in range(n + 1)] == [1.0, 0.0, 0.0, 0.0]
    assert [bernstein(i, n, 1.0) for i in range(n + 1)] == [0.0, 0.0, 0.0, 1.0]


def test_corners_interpolate_control_points_exactly():
    net = default_control_net()
    assert evaluate(0.0, 0.0, net) == net[0][0]
    assert evaluate(0.0, 1.0, net) == net[0][3]
    assert evaluate(1.0, 0.0, net) == net[3][0]
    assert evaluate(1.0, 1.0, net) == net[3][3]


def test_higher_degree_net_corners():
    net = default_control_net(6)
    n = net.degree
    assert n == 5
    assert evaluate(0.0, 0.0, net) == net[0][0]
    assert evaluate(1.0, 1.0, net) == net[n][n]


@pytest.mark.parametrize("n", [1, 3, 5])
def test_partition_of_unity(n):
    steps = [k / 7 for k in range(8)]
    for u, v in itertools.product(steps, steps):
        assert basis_sum(u, v, n) == pytest.approx(1.0, abs=1e-12)


def test_center_of_symmetric_saddle():
    net = default_control_net()
    x, y, z = evaluate(0.5, 0.5, net)
    assert x == pytest.approx(0.0)
    assert y == pytest.approx(0.0)
    assert z == pytest.approx(2.5)


def test_evaluate_is_symmetric_under_swap():
    net = default_control_net()
    a = evaluate(0.2, 0.7, net)
    b = evaluate(0.7, 0.2, net)
    assert a[0] == pytest.approx(b[1])
    assert a[1] == pytest.approx(b[0])
    assert a[2] == pytest.approx(b[2])
