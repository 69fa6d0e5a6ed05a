""" sums of Mps's: direct sums of links and balanced tree of additions """
import numpy as np
import pytest
import orthomps
import orthomps.tn.mps as mps
from orthomps.sym import spin
try:
    from .configs import config_dense as cfg
except ImportError:
    from configs import config_dense as cfg

tol = 1e-10  #pylint: disable=invalid-name


def test_add_linearity():
    N = 6
    sites = mps.spin_half_sites(N)
    psi = mps.random_mps(sites, D_total=3, config=cfg)
    phi = mps.random_mps(sites, D_total=4, config=cfg, dtype='complex128')
    test = mps.random_mps(sites, D_total=2, config=cfg)
    res = mps.add(psi, phi)
    lhs = mps.overlap_c(test, res)
    rhs = mps.overlap_c(test, psi) + mps.overlap_c(test, phi)
    assert abs(lhs - rhs) < tol * (abs(lhs) + 1)
    assert res.is_complex()
    assert (res.left_lim, res.right_lim) == (-1, N)
    Dp, Df, Dr = psi.get_bond_dimensions(), phi.get_bond_dimensions(), res.get_bond_dimensions()
    assert Dr[1:-1] == tuple(a + b for a, b in zip(Dp[1:-1], Df[1:-1]))

    diff = psi - psi
    diff.orthogonalize_()
    assert diff.norm() < tol * abs(mps.overlap_c(psi, psi)) ** 0.5
    two = psi + psi
    assert abs(mps.overlap_c(two, psi) - 2 * mps.overlap_c(psi, psi)) < tol * abs(mps.overlap_c(psi, psi))


def test_add_inputs_untouched():
    sites = mps.spin_half_sites(4)
    psi = mps.product_mps(sites, [0, 1, 0, 1], config=cfg)
    phi = mps.product_mps(sites, [1, 0, 1, 0], config=cfg)
    res = mps.add(psi, phi)
    assert (psi.left_lim, psi.right_lim) == (-1, 1)
    assert all(orthomps.are_independent(res[n], psi[n]) for n in range(4))
    res.orthogonalize_()
    assert abs(res.norm() - np.sqrt(2)) < tol
    assert abs(psi.norm() - 1) < tol
    assert res.get_bond_dimensions() == (1, 2, 2, 2, 1)


def test_add_single_site():
    sites = mps.spin_half_sites(1)
    psi = mps.product_mps(sites, [[1., 0.]], config=cfg)
    phi = mps.product_mps(sites, [[0., 2.]], config=cfg)
    res = mps.add(psi, phi)
    assert res.ortho_center() == 0
    assert np.allclose(res[0].to_numpy(), [1., 2.])


def test_add_qns():
    sites = mps.spin_half_sites(3, conserve_sz=True)
    psi = mps.product_mps(sites, [0, 1, 1], config=cfg)
    phi = mps.product_mps(sites, [1, 0, 1], config=cfg)
    res = mps.add(psi, phi)
    assert res.link_ind(0).qns == ((spin(1), 1), (spin(-1), 1))
    assert res.link_ind(1).qns == ((spin(0), 1), (spin(0), 1))


def test_add_exceptions():
    sites = mps.spin_half_sites(3)
    psi = mps.product_mps(sites, 0, config=cfg)
    with pytest.raises(orthomps.OrthompsError):
        mps.add(psi, mps.product_mps(mps.spin_half_sites(4), 0, config=cfg))
    with pytest.raises(orthomps.OrthompsError):
        mps.add(psi, mps.product_mps(mps.spin_half_sites(3), 0, config=cfg))  # different site indices
    with pytest.raises(orthomps.OrthompsError):
        mps.add(psi, mps.Mps(N=3))


@pytest.mark.parametrize("nterms", [1, 2, 3, 4, 5])
def test_sum_states(nterms):
    """ tree summation is equivalent to sequential summation """
    N = 5
    sites = mps.spin_half_sites(N)
    terms = [mps.random_mps(sites, D_total=2, config=cfg) for _ in range(nterms)]
    tree = mps.sum_states(terms)
    seq = terms[0]
    for term in terms[1:]:
        seq = mps.add(seq, term)
    test = mps.random_mps(sites, D_total=3, config=cfg)
    a, b = mps.overlap_c(test, tree), mps.overlap_c(test, seq)
    assert abs(a - b) < tol * (abs(b) + 1)
    assert tree.get_bond_dimensions() == seq.get_bond_dimensions()
    if nterms == 1:
        assert tree is terms[0]


def test_sum_states_empty():
    psi = mps.sum_states([])
    assert psi.N == 0


if __name__ == '__main__':
    test_add_linearity()
    test_add_inputs_untouched()
    test_add_single_site()
    test_add_qns()
    test_add_exceptions()
    for n in range(1, 6):
        test_sum_states(n)
    test_sum_states_empty()
