""" copying Mps and multiplication by numbers """
import numpy as np
import pytest
import orthomps
import orthomps.tn.mps as mps
try:
    from .configs import config_dense as cfg
except ImportError:
    from configs import config_dense as cfg

tol = 1e-10  #pylint: disable=invalid-name


def test_copy_conj():
    N = 5
    sites = mps.spin_half_sites(N)
    psi = mps.random_mps(sites, D_total=3, config=cfg, dtype='complex128')
    psi.position_(2)
    phi = psi.copy()
    assert (phi.left_lim, phi.right_lim) == (psi.left_lim, psi.right_lim)
    assert all(orthomps.are_independent(psi[n], phi[n]) for n in range(N))
    assert phi.sites is psi.sites
    chi = psi.shallow_copy()
    assert all(chi[n] is psi[n] for n in range(N))
    chi.position_(0)
    assert psi.ortho_center() == 2

    psc = psi.conj()
    assert psc.ortho_center() == 2 and mps.check_canonical(psc)
    assert abs(mps.overlap_c(psc, psc) - mps.overlap_c(psi, psi)) < tol * abs(mps.overlap_c(psi, psi))


def test_multiply():
    N = 4
    sites = mps.spin_half_sites(N)
    psi = mps.random_mps(sites, D_total=3, config=cfg)
    psi.position_(1)
    psi.normalize_()
    for phi, x in [(psi * 2, 2), (3 * psi, 3), (psi / 4, 0.25), (-psi, -1), (np.float64(2.) * psi, 2)]:
        assert abs(mps.overlap(psi, phi) - x) < tol
        assert phi.ortho_center() == 1
        assert abs(phi.norm() - abs(x)) < tol
    assert abs(psi.norm() - 1) < tol

    phi = mps.random_mps(sites, D_total=3, config=cfg)
    chi = phi * 2
    assert (chi.left_lim, chi.right_lim) == (-1, N)
    assert abs(mps.overlap(phi, chi) - 2 * mps.overlap(phi, phi)) < tol * mps.overlap(phi, phi)
    with pytest.raises(orthomps.OrthompsError):
        _ = mps.Mps() * 2


if __name__ == '__main__':
    test_copy_conj()
    test_multiply()
